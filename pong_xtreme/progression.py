"""Rally progression: hit counters, speed steps and one-shot milestones."""
from dataclasses import dataclass, replace
from typing import List, Optional

from pong_xtreme.config import (
    BALL_SPEED_INCREMENT, GameMode, HIGH_SPEED_THRESHOLD, MAX_BALL_SPEED,
    MAX_PROGRESSION_SCORE, RALLY_ELEGANTO_THRESHOLD, RALLY_HITS_INTERVAL,
    RALLY_HITS_THRESHOLD, RALLY_YAMEROO_THRESHOLD,
)
from pong_xtreme.entities import PlayerId
from pong_xtreme.events import Event, EventKind
from pong_xtreme.geometry import clamp


@dataclass
class RallyProgress:
    ball_speed: float
    paddle_hits: int = 0
    consecutive_straight_hits: int = 0
    last_hitter: Optional[PlayerId] = None
    wall_hits_since_paddle: int = 0
    hit_block_this_rally: bool = False
    high_speed_flagged: bool = False
    eleganto_flagged: bool = False
    yameroo_flagged: bool = False

    @classmethod
    def fresh(cls, mode: GameMode, total_score: int) -> "RallyProgress":
        return cls(ball_speed=base_speed_for(mode, total_score))

    def copy(self) -> "RallyProgress":
        return replace(self)


def base_speed_for(mode: GameMode, total_score: int) -> float:
    """Serve speed after ``total_score`` points; earlier rally bonuses are dropped."""
    speed = mode.base_speed + min(total_score, MAX_PROGRESSION_SCORE) * BALL_SPEED_INCREMENT
    return clamp(speed, mode.base_speed, MAX_BALL_SPEED)


def is_speed_step(paddle_hits: int) -> bool:
    if paddle_hits == RALLY_HITS_THRESHOLD:
        return True
    return (paddle_hits > RALLY_HITS_THRESHOLD
            and (paddle_hits - RALLY_HITS_THRESHOLD) % RALLY_HITS_INTERVAL == 0)


def on_paddle_hit(progress: RallyProgress, total_score: int) -> List[Event]:
    """Count a paddle hit, maybe step the speed up, and fire milestones once.

    ``progress`` is updated in place; the returned events describe what changed.
    """
    events = []
    progress.paddle_hits += 1

    if total_score < MAX_PROGRESSION_SCORE and is_speed_step(progress.paddle_hits):
        faster = min(progress.ball_speed + BALL_SPEED_INCREMENT, MAX_BALL_SPEED)
        if faster > progress.ball_speed:
            progress.ball_speed = faster
            events.append(Event(EventKind.SPEED_UP, value=faster))

    if progress.paddle_hits == RALLY_ELEGANTO_THRESHOLD and not progress.eleganto_flagged:
        progress.eleganto_flagged = True
        events.append(Event(EventKind.ELEGANTO, value=progress.paddle_hits))
    if progress.paddle_hits == RALLY_YAMEROO_THRESHOLD and not progress.yameroo_flagged:
        progress.yameroo_flagged = True
        events.append(Event(EventKind.YAMEROO, value=progress.paddle_hits))

    if progress.ball_speed >= HIGH_SPEED_THRESHOLD and not progress.high_speed_flagged:
        progress.high_speed_flagged = True
        events.append(Event(EventKind.HIGH_SPEED, value=progress.ball_speed))

    assert progress.ball_speed <= MAX_BALL_SPEED
    return events
