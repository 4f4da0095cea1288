import os
import random

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from pong_xtreme.config import GameMode
from pong_xtreme.entities import Score
from pong_xtreme.geometry import vec
from pong_xtreme.session import Rally, start_match


class ScriptedRng:
    """Plays back fixed numbers for random()/uniform()/choice()."""

    def __init__(self, randoms=(), uniforms=(), choices=()):
        self.randoms = list(randoms)
        self.uniforms = list(uniforms)
        self.choices = list(choices)

    def random(self):
        return self.randoms.pop(0)

    def uniform(self, low, high):
        if self.uniforms:
            return self.uniforms.pop(0)
        return low

    def choice(self, seq):
        if self.choices:
            return self.choices.pop(0)
        return seq[0]


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def new_session(rng):
    def factory(mode=GameMode.CLASSIC, p1="Ada", p2="Bob", **kwargs):
        kwargs.setdefault("countdown_frames", 1)
        return start_match(mode, p1, p2, rng=kwargs.pop("rng", rng), **kwargs)
    return factory


@pytest.fixture
def rally():
    """Put a session straight into a rally with the ball where a test wants it."""
    def make(session, position, velocity, score=None, **progress):
        s = session.copy()
        s.phase = Rally()
        s.ball.position = vec(*position)
        s.ball.velocity = vec(*velocity)
        if score is not None:
            s.score = Score(*score)
        for name, value in progress.items():
            setattr(s.progress, name, value)
        return s
    return make
