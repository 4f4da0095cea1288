from os import environ
environ.setdefault('PYGAME_HIDE_SUPPORT_PROMPT', '1')

from pong_xtreme.config import GameMode
from pong_xtreme.entities import InputSample, PlayerId
from pong_xtreme.events import Event, EventKind
from pong_xtreme.outcome import MatchFlavor, MatchHistory, MatchOutcome, PointFlavor
from pong_xtreme.session import (
    Countdown, GameOver, GameSession, Idle, Paused, Rally,
    rematch, start_match, tick, toggle_pause,
)

__version__ = "1.0.0"

__all__ = [
    "GameMode", "InputSample", "PlayerId", "Event", "EventKind",
    "MatchFlavor", "MatchHistory", "MatchOutcome", "PointFlavor",
    "Countdown", "GameOver", "GameSession", "Idle", "Paused", "Rally",
    "rematch", "start_match", "tick", "toggle_pause",
]
