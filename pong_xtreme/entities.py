from dataclasses import dataclass, field, replace
from enum import Enum

from pygame.math import Vector2

from pong_xtreme.config import (
    BALL_SIZE, BLOCK_HEIGHT, BLOCK_WIDTH, GAME_HEIGHT, GAME_WIDTH,
    PADDLE_HEIGHT, PADDLE_MARGIN, PADDLE_SPEED, PADDLE_WIDTH, paddle_center_y,
)
from pong_xtreme.geometry import Box, clamp, vec


class PlayerId(Enum):
    PLAYER1 = "player1"
    PLAYER2 = "player2"

    @property
    def opponent(self) -> "PlayerId":
        return PlayerId.PLAYER2 if self is PlayerId.PLAYER1 else PlayerId.PLAYER1

    @property
    def direction(self) -> int:
        """Horizontal sign pointing at this player's goal."""
        return -1 if self is PlayerId.PLAYER1 else 1


@dataclass(frozen=True)
class InputSample:
    p1_up: bool = False
    p1_down: bool = False
    p2_up: bool = False
    p2_down: bool = False

    def axis(self, player: PlayerId) -> int:
        if player is PlayerId.PLAYER1:
            return int(self.p1_down) - int(self.p1_up)
        return int(self.p2_down) - int(self.p2_up)


@dataclass
class Paddle:
    side: PlayerId
    y: float = field(default_factory=paddle_center_y)
    speed: int = PADDLE_SPEED

    def move(self, dy: int):
        self.y = clamp(self.y + dy * self.speed, 0, GAME_HEIGHT - PADDLE_HEIGHT)

    def recenter(self):
        self.y = paddle_center_y()

    @property
    def x(self) -> float:
        if self.side is PlayerId.PLAYER1:
            return PADDLE_MARGIN
        return GAME_WIDTH - PADDLE_MARGIN - PADDLE_WIDTH

    @property
    def face_x(self) -> float:
        """x of the face the ball bounces off."""
        if self.side is PlayerId.PLAYER1:
            return self.x + PADDLE_WIDTH
        return self.x

    @property
    def center_y(self) -> float:
        return self.y + PADDLE_HEIGHT / 2

    def copy(self) -> "Paddle":
        return replace(self)


def _center() -> Vector2:
    return vec(GAME_WIDTH / 2, GAME_HEIGHT / 2)


def _still() -> Vector2:
    return vec(0, 0)


@dataclass
class Ball:
    position: Vector2 = field(default_factory=_center)
    velocity: Vector2 = field(default_factory=_still)

    @property
    def radius(self) -> float:
        return BALL_SIZE / 2

    @property
    def box(self) -> Box:
        return Box(self.position, self.radius, self.radius)

    def advance(self):
        self.position = self.position + self.velocity

    def reset(self):
        self.position = _center()
        self.velocity = _still()

    def copy(self) -> "Ball":
        return replace(self)


@dataclass(frozen=True)
class Block:
    position: Vector2  # top-left corner

    @property
    def box(self) -> Box:
        return Box.from_top_left(self.position, BLOCK_WIDTH, BLOCK_HEIGHT)


@dataclass
class Score:
    player1: int = 0
    player2: int = 0

    def __getitem__(self, player: PlayerId) -> int:
        return getattr(self, player.value)

    def award(self, player: PlayerId):
        setattr(self, player.value, self[player] + 1)

    @property
    def total(self) -> int:
        return self.player1 + self.player2

    def copy(self) -> "Score":
        return replace(self)
