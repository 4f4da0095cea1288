"""Point and match flavors, and the per-session match ledger."""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

from pong_xtreme.config import BASE_WINNING_SCORE, NO_SCOPE_WALL_HITS, STREAK_LENGTH, WIN_BY_MARGIN
from pong_xtreme.progression import RallyProgress


class PointFlavor(Enum):
    PLAIN = "plain"
    NO_SCOPE = "no_scope"
    PONG_POINT = "pong_point"


class MatchFlavor(Enum):
    """Headline categories, highest audio priority first."""
    STREAK = "streak"
    SHUTOUT = "shutout"
    SONIC_BOOM = "sonic_boom"
    EXPLOSION = "explosion"
    COMEBACK = "comeback"
    NEAR_MISS = "near_miss"
    OVERTIME = "overtime"
    PLAIN_WIN = "plain_win"


def classify_point(progress: RallyProgress) -> PointFlavor:
    if progress.wall_hits_since_paddle > NO_SCOPE_WALL_HITS:
        return PointFlavor.NO_SCOPE
    if progress.hit_block_this_rally:
        return PointFlavor.PONG_POINT
    return PointFlavor.PLAIN


def is_deuce(p1: int, p2: int) -> bool:
    return min(p1, p2) >= BASE_WINNING_SCORE - 1


def has_winner(p1: int, p2: int) -> bool:
    return max(p1, p2) >= BASE_WINNING_SCORE and abs(p1 - p2) >= WIN_BY_MARGIN


@dataclass(frozen=True)
class MatchHistoryEntry:
    winner_name: str
    loser_name: str


@dataclass(frozen=True)
class MatchOutcome:
    winner_name: str
    loser_name: str
    winner_score: int
    loser_score: int
    shutout: bool = False
    sonic_boom: bool = False
    explosion: bool = False
    near_miss: bool = False
    comeback: bool = False
    overtime: bool = False
    streak: bool = False

    @property
    def headline(self) -> MatchFlavor:
        """The single flavor worth announcing."""
        for flavor in MatchFlavor:
            if flavor is not MatchFlavor.PLAIN_WIN and getattr(self, flavor.value):
                return flavor
        return MatchFlavor.PLAIN_WIN

    @property
    def margin(self) -> int:
        return self.winner_score - self.loser_score


class MatchHistory:
    """Append-only list of finished matches for one play session."""

    def __init__(self, entries=()):
        self._entries: List[MatchHistoryEntry] = list(entries)

    def __len__(self):
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    @property
    def entries(self) -> Tuple[MatchHistoryEntry, ...]:
        return tuple(self._entries)

    def last(self) -> Optional[MatchHistoryEntry]:
        return self._entries[-1] if self._entries else None

    def extends_streak(self, entry: MatchHistoryEntry) -> bool:
        """True if the previous matches all had this same winner and loser."""
        needed = STREAK_LENGTH - 1
        recent = self._entries[-needed:]
        return len(recent) == needed and all(e == entry for e in recent)

    def append(self, entry: MatchHistoryEntry):
        self._entries.append(entry)


def classify_match(winner_name: str, loser_name: str, winner_score: int,
                   loser_score: int, history: MatchHistory) -> MatchOutcome:
    """Work out every flavor of a finished match and record it in ``history``."""
    entry = MatchHistoryEntry(winner_name, loser_name)
    shutout = loser_score == 0
    decisive = winner_score >= BASE_WINNING_SCORE
    outcome = MatchOutcome(
        winner_name=winner_name,
        loser_name=loser_name,
        winner_score=winner_score,
        loser_score=loser_score,
        shutout=shutout,
        sonic_boom=decisive and loser_score == 2,
        explosion=decisive and loser_score == 3,
        near_miss=decisive and loser_score == 1,
        comeback=loser_score >= 4 and not shutout,
        overtime=winner_score > BASE_WINNING_SCORE,
        streak=history.extends_streak(entry),
    )
    history.append(entry)
    return outcome
