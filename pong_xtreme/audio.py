"""Sound effects for tick events.

Sounds are synthesised with the mixer, or loaded from ``assets/sfx`` when a
file of the same name exists. With no audio device everything stays silent.
"""
import array
import logging
import math
import os
from typing import Dict, Iterable, Optional

import pygame

from pong_xtreme.events import Event, EventKind
from pong_xtreme.outcome import MatchFlavor, PointFlavor

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
SFX_DIR = os.path.join("assets", "sfx")

# name -> (start Hz, end Hz, seconds, volume, shape)
TONES = {
    "paddle": (400, 200, 0.10, 0.10, "square"),
    "wall": (300, 300, 0.05, 0.10, "sine"),
    "block": (600, 800, 0.10, 0.10, "triangle"),
    "score": (200, 600, 0.30, 0.20, "sine"),
    "no_scope": (900, 300, 0.35, 0.20, "square"),
    "pong_point": (500, 1000, 0.30, 0.20, "triangle"),
    "speed_up": (700, 900, 0.06, 0.08, "square"),
    "high_speed": (800, 1600, 0.25, 0.15, "square"),
    "eleganto": (660, 990, 0.30, 0.15, "triangle"),
    "yameroo": (990, 440, 0.40, 0.15, "square"),
    "win": (300, 900, 0.60, 0.20, "sine"),
    "streak": (440, 1760, 0.80, 0.20, "square"),
    "shutout": (1200, 200, 0.80, 0.20, "square"),
    "sonic_boom": (150, 1500, 0.60, 0.20, "triangle"),
    "explosion": (120, 60, 0.70, 0.25, "square"),
    "comeback": (330, 660, 0.60, 0.20, "triangle"),
    "near_miss": (500, 450, 0.50, 0.20, "sine"),
    "overtime": (440, 880, 0.60, 0.20, "sine"),
}

EVENT_SOUNDS = {
    EventKind.PADDLE_HIT: "paddle",
    EventKind.WALL_BOUNCE: "wall",
    EventKind.BLOCK_HIT: "block",
    EventKind.SPEED_UP: "speed_up",
    EventKind.HIGH_SPEED: "high_speed",
    EventKind.ELEGANTO: "eleganto",
    EventKind.YAMEROO: "yameroo",
}


def sound_name(event: Event) -> Optional[str]:
    """Which effect an event should trigger, if any."""
    if event.kind is EventKind.SCORE:
        if event.flavor in (PointFlavor.NO_SCOPE, PointFlavor.PONG_POINT):
            return event.flavor.value
        return "score"
    if event.kind is EventKind.MATCH_OVER:
        headline = event.flavor.headline
        return "win" if headline is MatchFlavor.PLAIN_WIN else headline.value
    return EVENT_SOUNDS.get(event.kind)


def tone_samples(start, end, dur, vol, shape="sine"):
    n = int(SAMPLE_RATE * dur)
    buf = array.array('h')
    phase = 0.0
    for i in range(n):
        f = start + (end - start) * (i / max(1, n - 1))
        phase += 2 * math.pi * f / SAMPLE_RATE
        s = math.sin(phase)
        if shape == "square":
            s = 1.0 if s >= 0 else -1.0
        elif shape == "triangle":
            s = 2.0 / math.pi * math.asin(s)
        fade = 1.0 - i / max(1, n)
        buf.append(int(s * vol * fade * 32767))
    return buf


class Soundboard:
    def __init__(self, enabled: bool = True):
        self.sounds: Dict[str, "pygame.mixer.Sound"] = {}
        if enabled:
            self._load()

    def _load(self):
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
        except pygame.error as exc:
            # keep silent if the audio device is unavailable
            logger.info("audio disabled: %s", exc)
            return
        for name, tone in TONES.items():
            path = os.path.join(SFX_DIR, name + ".ogg")
            try:
                if os.path.exists(path):
                    self.sounds[name] = pygame.mixer.Sound(path)
                else:
                    self.sounds[name] = self._synth(*tone)
            except pygame.error as exc:
                logger.debug("no sound for %s: %s", name, exc)

    @staticmethod
    def _synth(start, end, dur, vol, shape):
        mono = tone_samples(start, end, dur, vol, shape)
        stereo = array.array('h')
        for s in mono:
            stereo.extend((s, s))
        return pygame.mixer.Sound(buffer=stereo.tobytes())

    def play(self, name: Optional[str]):
        sound = self.sounds.get(name) if name else None
        if sound is not None:
            sound.play()

    def play_events(self, events: Iterable[Event]):
        for event in events:
            self.play(sound_name(event))
