"""Match lifecycle: countdown, rally, scoring, pause and game over.

``tick`` takes a session snapshot and returns a new one together with the
events of that tick. The snapshot passed in is never modified; each tick
works on a copy.
"""
import logging
import random
from copy import deepcopy
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple, Union

from pong_xtreme.config import (
    COUNTDOWN_FRAMES, COUNTDOWN_START, GAME_HEIGHT, GAME_WIDTH, GameMode,
    MAX_BALL_SPEED, MAX_BLOCKS_ON_SCREEN, MAX_ROTATION_DELTA, PADDLE_HEIGHT,
    POINTS_TO_START_BLOCKS,
)
from pong_xtreme.entities import Ball, Block, InputSample, Paddle, PlayerId, Score
from pong_xtreme.events import Event, EventKind
from pong_xtreme.geometry import vec
from pong_xtreme.leaderboard import match_points
from pong_xtreme.outcome import (
    MatchHistory, MatchOutcome, PointFlavor, classify_match, classify_point,
    has_winner, is_deuce,
)
from pong_xtreme.physics import step
from pong_xtreme.progression import RallyProgress
from pong_xtreme.spawner import spawn_blocks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Idle:
    """Phase of a freshly constructed GameSession. start_match moves it to Countdown."""


@dataclass(frozen=True)
class Countdown:
    remaining: int
    direction: int
    frames: int = 0  # ticks spent on the current countdown step


@dataclass(frozen=True)
class Rally:
    pass


@dataclass(frozen=True)
class Paused:
    resume_to: Union[Countdown, Rally]


@dataclass(frozen=True)
class GameOver:
    outcome: MatchOutcome


Phase = Union[Idle, Countdown, Rally, Paused, GameOver]
LIVE_PHASES = (Countdown, Rally)
HIT_EVENTS = (EventKind.PADDLE_HIT, EventKind.BLOCK_HIT)


@dataclass
class GameSession:
    mode: GameMode
    p1_name: str
    p2_name: str
    progress: RallyProgress
    left: Paddle = field(default_factory=lambda: Paddle(PlayerId.PLAYER1))
    right: Paddle = field(default_factory=lambda: Paddle(PlayerId.PLAYER2))
    ball: Ball = field(default_factory=Ball)
    blocks: List[Block] = field(default_factory=list)
    score: Score = field(default_factory=Score)
    phase: Phase = field(default_factory=Idle)
    history: MatchHistory = field(default_factory=MatchHistory)
    last_point: Optional[PointFlavor] = None
    last_scorer: Optional[PlayerId] = None
    board_rotation: float = 0.0
    countdown_frames: int = COUNTDOWN_FRAMES
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    @property
    def paddles(self) -> Tuple[Paddle, Paddle]:
        return self.left, self.right

    @property
    def ball_speed(self) -> float:
        return self.progress.ball_speed

    @property
    def is_paused(self) -> bool:
        return isinstance(self.phase, Paused)

    @property
    def is_over(self) -> bool:
        return isinstance(self.phase, GameOver)

    @property
    def outcome(self) -> Optional[MatchOutcome]:
        if isinstance(self.phase, GameOver):
            return self.phase.outcome
        return None

    @property
    def is_deuce(self) -> bool:
        return is_deuce(self.score.player1, self.score.player2)

    @property
    def rotation_enabled(self) -> bool:
        return self.mode is GameMode.HARDCORE or self.is_deuce

    def name_of(self, player: PlayerId) -> str:
        return self.p1_name if player is PlayerId.PLAYER1 else self.p2_name

    def copy(self) -> "GameSession":
        """Working copy for one tick. Ledger and blocks are shared until replaced.

        The copy draws from its own generator so the original snapshot can be
        ticked again with the same result.
        """
        return replace(
            self,
            rng=deepcopy(self.rng),
            progress=self.progress.copy(),
            left=self.left.copy(),
            right=self.right.copy(),
            ball=self.ball.copy(),
            score=self.score.copy(),
        )


def _mode(mode) -> GameMode:
    if isinstance(mode, GameMode):
        return mode
    try:
        return GameMode(str(mode).lower())
    except ValueError:
        raise ValueError(f"unknown game mode: {mode!r}") from None


def start_match(mode, p1_name: str, p2_name: str, rng=None,
                history: Optional[MatchHistory] = None,
                countdown_frames: int = COUNTDOWN_FRAMES) -> GameSession:
    mode = _mode(mode)
    names = [(name or "").strip() for name in (p1_name, p2_name)]
    if not all(names):
        raise ValueError("both players need a name")
    if countdown_frames < 1:
        raise ValueError("countdown_frames must be at least 1")

    rng = rng if rng is not None else random.Random()
    session = GameSession(
        mode=mode,
        p1_name=names[0],
        p2_name=names[1],
        progress=RallyProgress.fresh(mode, 0),
        history=history if history is not None else MatchHistory(),
        countdown_frames=countdown_frames,
        rng=rng,
    )
    direction = rng.choice((-1, 1))
    logger.info("match start: %s vs %s (%s)", session.p1_name, session.p2_name, mode.value)
    return replace(session, phase=Countdown(COUNTDOWN_START, direction))


def rematch(session: GameSession, mode=None) -> GameSession:
    """New match between the same players, keeping the session ledger."""
    return start_match(mode or session.mode, session.p1_name, session.p2_name,
                       rng=session.rng, history=session.history,
                       countdown_frames=session.countdown_frames)


def toggle_pause(session: GameSession) -> GameSession:
    phase = session.phase
    if isinstance(phase, LIVE_PHASES):
        return replace(session, phase=Paused(phase))
    if isinstance(phase, Paused):
        return replace(session, phase=phase.resume_to)
    return session


def tick(session: GameSession, inputs: InputSample,
         dt_ticks: int = 1) -> Tuple[GameSession, List[Event]]:
    if not isinstance(session.phase, LIVE_PHASES) or dt_ticks < 1:
        return session, []

    current = session.copy()
    events = []
    for _ in range(dt_ticks):
        if not isinstance(current.phase, LIVE_PHASES):
            break
        _advance(current, inputs, events)
    _check_invariants(current)
    return current, events


def _advance(s: GameSession, inputs: InputSample, events: List[Event]):
    for paddle in s.paddles:
        paddle.move(inputs.axis(paddle.side))
    if isinstance(s.phase, Countdown):
        _count_down(s, events)
    else:
        _play(s, events)


def _count_down(s: GameSession, events: List[Event]):
    phase = s.phase
    frames = phase.frames + 1
    if frames < s.countdown_frames:
        s.phase = replace(phase, frames=frames)
        return
    remaining = phase.remaining - 1
    if remaining > 0:
        s.phase = Countdown(remaining, phase.direction)
        events.append(Event(EventKind.COUNTDOWN, value=remaining))
        return

    s.ball.velocity = vec(phase.direction * s.progress.ball_speed, 0)
    s.last_point = None
    s.last_scorer = None
    s.phase = Rally()
    events.append(Event(EventKind.LAUNCH, value=phase.direction))
    logger.debug("launch towards %+d at speed %.1f", phase.direction, s.progress.ball_speed)


def _play(s: GameSession, events: List[Event]):
    hits = step(s.ball, s.paddles, s.blocks, s.progress, s.score.total, s.rng)
    events.extend(hits)

    if s.rotation_enabled:
        for event in hits:
            if event.kind in HIT_EVENTS:
                delta = s.rng.uniform(-MAX_ROTATION_DELTA, MAX_ROTATION_DELTA)
                s.board_rotation += delta
                events.append(Event(EventKind.ROTATION, value=delta))

    x = s.ball.position.x
    if x < 0:
        _score_point(s, PlayerId.PLAYER2, events)
    elif x > GAME_WIDTH:
        _score_point(s, PlayerId.PLAYER1, events)


def _score_point(s: GameSession, scorer: PlayerId, events: List[Event]):
    flavor = classify_point(s.progress)
    s.score.award(scorer)
    s.last_point = flavor
    s.last_scorer = scorer
    events.append(Event(EventKind.SCORE, player=scorer, flavor=flavor, name=s.name_of(scorer)))
    logger.info("%s scores (%s), %d-%d", s.name_of(scorer), flavor.value,
                s.score.player1, s.score.player2)

    total = s.score.total
    s.progress = RallyProgress.fresh(s.mode, total)
    for paddle in s.paddles:
        paddle.recenter()
    s.ball.reset()

    if has_winner(s.score.player1, s.score.player2):
        _finish(s, scorer, events)
        return

    if total >= POINTS_TO_START_BLOCKS:
        s.blocks, placed = spawn_blocks(s.blocks, s.rng)
        if placed:
            events.append(Event(EventKind.BLOCKS_SPAWNED, value=placed))
    s.phase = Countdown(COUNTDOWN_START, scorer.opponent.direction)


def _finish(s: GameSession, winner: PlayerId, events: List[Event]):
    loser = winner.opponent
    # the snapshot we were copied from keeps its own ledger
    s.history = MatchHistory(s.history.entries)
    outcome = classify_match(s.name_of(winner), s.name_of(loser),
                             s.score[winner], s.score[loser], s.history)
    points = match_points(outcome, s.mode)
    s.phase = GameOver(outcome)
    events.append(Event(EventKind.MATCH_OVER, player=winner, value=points,
                        flavor=outcome, name=outcome.winner_name))
    logger.info("%s wins %d-%d (%s)", outcome.winner_name, outcome.winner_score,
                outcome.loser_score, outcome.headline.value)


def _check_invariants(s: GameSession):
    for paddle in s.paddles:
        assert 0 <= paddle.y <= GAME_HEIGHT - PADDLE_HEIGHT, paddle
    assert len(s.blocks) <= MAX_BLOCKS_ON_SCREEN
    assert s.mode.base_speed <= s.progress.ball_speed <= MAX_BALL_SPEED
