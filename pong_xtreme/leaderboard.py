"""Leaderboard points and a local JSON hall of fame."""
import datetime
import json
import logging
import os
from dataclasses import asdict, dataclass
from typing import List

from pong_xtreme.config import (
    GameMode, HARDCORE_MULTIPLIER, LEADERBOARD_NAME_LENGTH, LEADERBOARD_SIZE,
    POINTS_PER_MARGIN, SHUTOUT_BONUS,
)

logger = logging.getLogger(__name__)

DEFAULT_PATH = os.path.join(os.path.expanduser("~"), ".pong_xtreme_leaderboard.json")


def match_points(outcome, mode: GameMode) -> int:
    points = outcome.margin * POINTS_PER_MARGIN
    if mode is GameMode.HARDCORE:
        points *= HARDCORE_MULTIPLIER
    if outcome.shutout:
        points += SHUTOUT_BONUS
    return points


@dataclass(frozen=True)
class LeaderboardEntry:
    name: str
    score: int
    mode: str
    shutout: bool = False
    date: str = ""

    @classmethod
    def for_match(cls, name: str, outcome, mode: GameMode, today=None) -> "LeaderboardEntry":
        today = today or datetime.date.today()
        return cls(
            name=name.strip().upper()[:LEADERBOARD_NAME_LENGTH],
            score=match_points(outcome, mode),
            mode=mode.value,
            shutout=outcome.shutout,
            date=today.isoformat(),
        )

    @classmethod
    def from_dict(cls, raw) -> "LeaderboardEntry":
        """Build an entry from stored JSON, or raise ValueError if it isn't one."""
        if not isinstance(raw, dict):
            raise ValueError("entry is not an object")
        name, score = raw.get("name"), raw.get("score")
        if not isinstance(name, str) or isinstance(score, bool) or not isinstance(score, (int, float)):
            raise ValueError(f"malformed entry: {raw!r}")
        return cls(name=name, score=int(score), mode=str(raw.get("mode", GameMode.CLASSIC.value)),
                   shutout=bool(raw.get("shutout", False)), date=str(raw.get("date", "")))


class LocalLeaderboard:
    def __init__(self, path: str = DEFAULT_PATH):
        self.path = path

    def load(self) -> List[LeaderboardEntry]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("could not read leaderboard %s: %s", self.path, exc)
            return []
        # older files wrap the list as {"users": [...]}
        if isinstance(data, dict):
            data = data.get("users", [])
        if not isinstance(data, list):
            return []

        entries = []
        for raw in data:
            try:
                entries.append(LeaderboardEntry.from_dict(raw))
            except ValueError:
                logger.debug("skipping leaderboard entry %r", raw)
        return entries

    def submit(self, entry: LeaderboardEntry) -> List[LeaderboardEntry]:
        """Add an entry, keep the best ten, and return the new table."""
        table = sorted(self.load() + [entry], key=lambda e: e.score, reverse=True)
        table = table[:LEADERBOARD_SIZE]
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump([asdict(e) for e in table], f, indent=2)
        except OSError as exc:
            logger.warning("could not save leaderboard %s: %s", self.path, exc)
        return table
