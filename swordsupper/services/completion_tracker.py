import logging
from typing import AbstractSet, FrozenSet, Optional, Set

from swordsupper.core.constants import STORE_KEY_COMPLETED
from swordsupper.core.models import CompletionStats
from swordsupper.core.persistence import LocalStore
from swordsupper.core.utils import format_percentage

logger = logging.getLogger(__name__)


class CompletionTracker:
    """Set of completed boss ids. Persisted independently of the boss collection."""

    def __init__(self, store: LocalStore, store_key: str = STORE_KEY_COMPLETED):
        self.store = store
        self.store_key = store_key
        self._completed: Set[int] = set()

    def __len__(self) -> int:
        return len(self._completed)

    def __contains__(self, boss_id: int) -> bool:
        return boss_id in self._completed

    @property
    def completed_ids(self) -> FrozenSet[int]:
        return frozenset(self._completed)

    def is_completed(self, boss_id: int) -> bool:
        return boss_id in self._completed

    def load(self):
        saved = self.store.get(self.store_key, [])
        try:
            self._completed = {int(i) for i in saved}
        except (TypeError, ValueError) as e:
            logger.error(f"Error loading completed bosses: {e}")
            self._completed = set()

    def save(self) -> bool:
        return self.store.set(self.store_key, sorted(self._completed))

    def toggle(self, boss_id: int) -> bool:
        """Flips the completion mark for `boss_id`. Returns the new state."""
        if boss_id in self._completed:
            self._completed.discard(boss_id)
            done = False
        else:
            self._completed.add(boss_id)
            done = True
        self.save()
        return done

    def clear(self):
        self._completed.clear()
        self.save()
        logger.info("Cleared all completion marks")

    def stats(self, total: int, among: Optional[AbstractSet[int]] = None) -> CompletionStats:
        """
        Completion summary for a collection of `total` records. Marks may outlive
        their records; pass the live ids as `among` to count only those.
        """
        if among is None:
            completed = len(self._completed)
        else:
            completed = len(self._completed & set(among))
        return CompletionStats(
            total=total,
            completed=completed,
            remaining=total - completed,
            percentage=format_percentage(completed, total)
        )
