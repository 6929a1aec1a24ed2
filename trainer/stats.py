"""Decision accuracy and streak tracking."""

import logging
from dataclasses import dataclass

from trainer.storage import (
    BestStreakStore,
    CachedBestStreakStore,
    InMemoryBestStreakStore,
)

logger = logging.getLogger(__name__)


@dataclass
class DecisionStats:
    """Counters for one trainer session."""

    correct_decisions: int = 0
    total_decisions: int = 0
    current_streak: int = 0
    longest_streak: int = 0

    @property
    def decision_accuracy(self) -> float:
        """Percentage of correct decisions, 0.0 before any decision."""
        if self.total_decisions == 0:
            return 0.0
        return self.correct_decisions / self.total_decisions * 100

    def record_decision(self, is_correct: bool) -> None:
        """Record one judged decision."""
        self.total_decisions += 1
        if is_correct:
            self.correct_decisions += 1
            self.current_streak += 1
            self.longest_streak = max(self.longest_streak, self.current_streak)
        else:
            self.current_streak = 0


class StatsTracker:
    """
    Session statistics with the longest streak mirrored to a store.

    The persisted best streak seeds ``longest_streak`` so a record survives
    restarts, and is only ever overwritten with a larger value. The store is
    read once; pass a shared ``CachedBestStreakStore`` to let several trackers
    see each other's records.
    """

    def __init__(self, store: BestStreakStore | None = None) -> None:
        store = store or InMemoryBestStreakStore()
        if not isinstance(store, CachedBestStreakStore):
            store = CachedBestStreakStore(store)
        self.store = store
        self.stats = DecisionStats(longest_streak=self.store.load())

    def record_decision(self, is_correct: bool) -> bool:
        """
        Record a decision and persist a new best streak if one was set.

        Returns:
            True if the longest streak beat the persisted value and was saved
        """
        self.stats.record_decision(is_correct)

        if self.stats.longest_streak > self.store.load():
            self.store.save(self.stats.longest_streak)
            logger.info("New best streak: %d", self.stats.longest_streak)
            return True
        return False

    def reset_session(self) -> None:
        """Clear session counters, keeping the longest streak."""
        self.stats = DecisionStats(longest_streak=self.stats.longest_streak)

    @property
    def best_streak(self) -> int:
        """Return the persisted best streak without touching the backend."""
        return self.store.load()
