import logging
from typing import Any, Callable, Dict, List, Optional, Union

from swordsupper.core.config import config_manager
from swordsupper.core.constants import ABILITIES, BOSS_RUSH
from swordsupper.core.errors import DatasetLoadError, RecordValidationError
from swordsupper.core.filtering import filter_bosses, filter_items, filter_abilities
from swordsupper.core.models import (
    AbilityRecord, BossRecord, ItemRecord, LevelGoldRecord,
    BossFilterCriteria, ItemFilterCriteria, CatalogStats, CompletionStats
)
from swordsupper.core.persistence import LocalStore
from swordsupper.core.sorting import sort_bosses, sort_level_gold, SORT_KEY_FUNCS, DEFAULT_SORT_KEY
from swordsupper.core.utils import IdGenerator
from swordsupper.services.completion_tracker import CompletionTracker
from swordsupper.services.dataset_service import DatasetService
from swordsupper.services.notifier import Notifier
from swordsupper.services.repository import (
    BossRepository, ItemRepository, LevelGoldRepository, RecordRepository
)

logger = logging.getLogger(__name__)

Listener = Callable[[str, Any], None]


class CatalogState:
    """
    Application state for one catalog session: the repositories, the completion
    tracker and the active filter/sort settings.

    Views are recomputed from scratch on every call. Every mutation notifies the
    subscribed listeners with an event name and payload so a presentation layer
    can re-render; user-facing outcomes go through `notifier`.
    """

    def __init__(self,
                 store: Optional[LocalStore] = None,
                 dataset: Optional[DatasetService] = None,
                 notifier: Optional[Notifier] = None,
                 ids: Optional[IdGenerator] = None,
                 on_persistence_error: Optional[Callable[[str, Exception], None]] = None):
        self.notifier = notifier or Notifier()
        self.on_persistence_error = on_persistence_error
        self.store = store or LocalStore(config_manager.get_store_dir())
        if self.store.on_error is None:
            self.store.on_error = self._handle_persistence_error

        self.bosses = BossRepository(self.store, dataset, ids)
        self.items = ItemRepository(self.store, ids)
        self.level_gold = LevelGoldRepository(self.store, ids)
        self.completion = CompletionTracker(self.store)
        self.abilities = [AbilityRecord(**a) for a in ABILITIES]

        self.boss_criteria = BossFilterCriteria()
        self.item_criteria = ItemFilterCriteria()
        self.ability_category = "all"
        self.sort_key = config_manager.get_default_sort()
        self.sort_descending = config_manager.is_default_sort_descending()

        self.load_error: Optional[DatasetLoadError] = None
        self.listeners: List[Listener] = []

    # --- Subscriptions ---

    def subscribe(self, listener: Listener):
        self.listeners.append(listener)

    def unsubscribe(self, listener: Listener):
        if listener in self.listeners:
            self.listeners.remove(listener)

    def _emit(self, event: str, payload: Any = None):
        for listener in list(self.listeners):
            try:
                listener(event, payload)
            except Exception as e:
                logger.error(f"State listener failed on {event}: {e}")

    def _handle_persistence_error(self, key: str, error: Exception):
        logger.warning(f"Changes to {key} are kept in memory only: {error}")
        if self.on_persistence_error:
            self.on_persistence_error(key, error)
        self._emit("persistence_error", key)

    # --- Startup ---

    async def initialize(self):
        """Loads the base dataset, then everything persisted locally. Never raises."""
        self.load_error = None
        try:
            await self.bosses.load()
        except DatasetLoadError as e:
            self.load_error = e
            self.notifier.show_message('Error loading boss data. Please refresh the page.', 'error')

        self.bosses.hydrate_from_store()
        self.completion.load()
        self.items.hydrate_from_store()
        self.level_gold.hydrate_from_store()
        logger.info(f"Catalog ready: {len(self.bosses)} bosses, {len(self.items)} items, "
                    f"{len(self.level_gold)} level/gold costs, {len(self.completion)} completed")
        self._emit("loaded")

    # --- Views ---

    def boss_view(self) -> List[BossRecord]:
        completed = self.completion.completed_ids
        res = filter_bosses(self.bosses.list(), self.boss_criteria, completed)
        return sort_bosses(res, self.sort_key, self.sort_descending, completed)

    def item_view(self) -> List[ItemRecord]:
        return filter_items(self.items.list(), self.item_criteria)

    def ability_view(self) -> List[AbilityRecord]:
        return filter_abilities(self.abilities, self.ability_category)

    def level_gold_view(self) -> List[LevelGoldRecord]:
        return sort_level_gold(self.level_gold.list())

    def is_completed(self, boss_id: int) -> bool:
        return self.completion.is_completed(boss_id)

    # --- Filter & Sort Settings ---

    def set_boss_filters(self, **changes):
        self.boss_criteria = self.boss_criteria.model_copy(update=changes)
        self._emit("bosses_filtered", self.boss_criteria)

    def reset_boss_filters(self):
        self.boss_criteria = BossFilterCriteria()
        self._emit("bosses_filtered", self.boss_criteria)

    def set_sort(self, key: Optional[str] = None, descending: Optional[bool] = None):
        if key is not None:
            self.sort_key = key if key in SORT_KEY_FUNCS else DEFAULT_SORT_KEY
        if descending is not None:
            self.sort_descending = descending
        self._emit("bosses_sorted", (self.sort_key, self.sort_descending))

    def toggle_sort_order(self):
        self.set_sort(descending=not self.sort_descending)

    def set_item_filters(self, **changes):
        self.item_criteria = self.item_criteria.model_copy(update=changes)
        self._emit("items_filtered", self.item_criteria)

    def set_ability_category(self, category: str):
        self.ability_category = category or "all"
        self._emit("abilities_filtered", self.ability_category)

    # --- Mutations ---

    def _add(self, repo: RecordRepository, data: Union[Dict[str, Any], Any]):
        try:
            record = repo.build(data) if isinstance(data, dict) else data
            return repo.add(record)
        except RecordValidationError as e:
            self.notifier.show_message(str(e), 'error')
            return None

    def add_boss(self, data: Union[Dict[str, Any], BossRecord]) -> Optional[BossRecord]:
        boss = self._add(self.bosses, data)
        if boss:
            self.notifier.show_message('Instance added locally! Submitting to database...', 'success')
            self._emit("boss_added", boss)
        return boss

    def delete_boss(self, boss_id: int) -> bool:
        boss = self.bosses.find(boss_id)
        if not boss or not self.bosses.delete(boss_id):
            self.notifier.show_message('Instance not found.', 'error')
            return False
        self.notifier.show_message(f'Deleted "{boss.name}".', 'success')
        self._emit("boss_deleted", boss)
        return True

    def add_item(self, data: Union[Dict[str, Any], ItemRecord]) -> Optional[ItemRecord]:
        item = self._add(self.items, data)
        if item:
            self.notifier.show_message('Item added locally! Submitting to database...', 'success')
            self._emit("item_added", item)
        return item

    def add_level_gold(self, data: Union[Dict[str, Any], LevelGoldRecord]) -> Optional[LevelGoldRecord]:
        cost = self._add(self.level_gold, data)
        if cost:
            self.notifier.show_message('Level/Gold cost added successfully!', 'success')
            self._emit("level_gold_added", cost)
        return cost

    def toggle_completion(self, boss_id: int) -> bool:
        done = self.completion.toggle(boss_id)
        boss = self.bosses.find(boss_id)
        name = boss.name if boss else str(boss_id)
        if done:
            self.notifier.show_message(f'Marked "{name}" as completed!', 'success')
        else:
            self.notifier.show_message(f'Unmarked "{name}" as completed.', 'success')
        self._emit("completion_toggled", (boss_id, done))
        return done

    def clear_completions(self):
        """Clears every completion mark. Confirmation is up to the caller."""
        self.completion.clear()
        self.notifier.show_message('All completion marks cleared!', 'success')
        self._emit("completions_cleared")

    # --- Stats ---

    def completion_stats(self) -> CompletionStats:
        bosses = self.bosses.list()
        return self.completion.stats(len(bosses), among={b.id for b in bosses})

    def stats(self) -> CatalogStats:
        bosses = self.bosses.list()
        difficulties = [b.numeric_difficulty for b in bosses if b.numeric_difficulty is not None]
        average = round(sum(difficulties) / len(difficulties), 1) if difficulties else 0.0
        return CatalogStats(
            total_bosses=len(bosses),
            boss_rushes=sum(1 for b in bosses if b.difficulty == BOSS_RUSH),
            average_difficulty=average,
            completion=self.completion_stats()
        )
