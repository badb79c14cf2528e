"""
Session and stats store: who is playing and how their matches went.

The record lives in memory and is written back to a Store as a whole after
every change (login, game end, logout).
"""

import logging

from pydantic import ValidationError

from . import config
from .models import GameResult, GameStatus, PlayerStats, ProfileView, SessionRecord
from .store import Store

logger = logging.getLogger(__name__)


class InvalidNameError(ValueError):
    """Raised when a session is started with a blank name."""


# PUBLIC_INTERFACE
def tally(stats: PlayerStats, result: GameResult) -> PlayerStats:
    """
    Count a finished game. An X win is the tracked player's win and an O win
    is their loss, since both local players share one session.
    """
    if result.status is GameStatus.DRAW:
        counter = "matches_draw"
    elif result.status is GameStatus.WON:
        counter = "matches_won" if result.winner == "X" else "matches_lost"
    else:
        raise ValueError("Cannot record a game that is still in progress.")
    return stats.model_copy(update={
        "matches_played": stats.matches_played + 1,
        counter: getattr(stats, counter) + 1,
    })


class SessionStore:
    """Holds the current SessionRecord and persists it under one fixed key."""

    def __init__(self, store: Store, key: str = config.STORAGE_KEY):
        self.store = store
        self.key = key
        self.record = SessionRecord()

    @property
    def name(self) -> str:
        return self.record.name

    @property
    def stats(self) -> PlayerStats:
        return self.record.stats

    @property
    def logged_in(self) -> bool:
        return bool(self.record.name)

    # PUBLIC_INTERFACE
    def load(self) -> SessionRecord:
        """Read the persisted record; start blank when the slot is empty or unreadable."""
        raw = self.store.load(self.key)
        if raw is None:
            self.record = SessionRecord()
            return self.record
        try:
            self.record = SessionRecord.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning("Discarding malformed session record under %r: %s", self.key, exc)
            self.record = SessionRecord()
        return self.record

    # PUBLIC_INTERFACE
    def save(self) -> None:
        """Overwrite the slot with the whole in-memory record."""
        self.store.save(self.key, self.record.to_json())

    # PUBLIC_INTERFACE
    def start_session(self, name: str, guest: bool = False) -> SessionRecord:
        """Log in with a fresh stat history. Raises InvalidNameError for blank names."""
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidNameError("Please enter a valid name to continue.")
        if guest:
            cleaned += config.GUEST_SUFFIX
        self.record = SessionRecord(name=cleaned)
        logger.info("Session started for %s", cleaned)
        return self.record

    # PUBLIC_INTERFACE
    def end_session(self) -> SessionRecord:
        logger.info("Session ended for %s", self.record.name or "<nobody>")
        self.record = SessionRecord()
        return self.record

    # PUBLIC_INTERFACE
    def record_result(self, result: GameResult) -> PlayerStats:
        stats = tally(self.record.stats, result)
        self.record = self.record.model_copy(update={"stats": stats})
        logger.info("Recorded %s (winner=%s); played=%d", result.status.value, result.winner, stats.matches_played)
        return stats

    # PUBLIC_INTERFACE
    def profile(self) -> ProfileView:
        stats = self.record.stats
        return ProfileView(
            logged_in=self.logged_in,
            name=self.record.name,
            avatar=self.record.name[:1].upper(),
            matches_played=stats.matches_played,
            matches_won=stats.matches_won,
            matches_lost=stats.matches_lost,
            matches_draw=stats.matches_draw,
            win_percentage=stats.win_percentage,
        )
