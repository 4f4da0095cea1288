from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from pong_xtreme.entities import PlayerId


class EventKind(Enum):
    COUNTDOWN = "countdown"
    LAUNCH = "launch"
    WALL_BOUNCE = "wall_bounce"
    PADDLE_HIT = "paddle_hit"
    BLOCK_HIT = "block_hit"
    SPEED_UP = "speed_up"
    HIGH_SPEED = "high_speed"
    ELEGANTO = "eleganto"
    YAMEROO = "yameroo"
    ROTATION = "rotation"
    BLOCKS_SPAWNED = "blocks_spawned"
    SCORE = "score"
    MATCH_OVER = "match_over"
    PAUSED = "paused"
    RESUMED = "resumed"


@dataclass(frozen=True)
class Event:
    """One semantic thing that happened during a tick.

    ``value`` carries the number that goes with the kind (remaining countdown,
    bounce angle, new speed, rotation delta, spawned count or leaderboard
    points). ``flavor`` is a ``PointFlavor`` for SCORE and a ``MatchOutcome``
    for MATCH_OVER.
    """
    kind: EventKind
    player: Optional[PlayerId] = None
    value: Optional[float] = None
    flavor: Any = None
    name: Optional[str] = None
