import logging
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from swordsupper.core.constants import (
    STORE_KEY_BOSSES, STORE_KEY_ITEMS, STORE_KEY_LEVEL_GOLD, DEFAULT_ITEMS, DEFAULT_LEVEL_GOLD
)
from swordsupper.core.errors import DatasetLoadError, RecordValidationError
from swordsupper.core.models import BossRecord, ItemRecord, LevelGoldRecord
from swordsupper.core.persistence import LocalStore
from swordsupper.core.utils import IdGenerator, id_generator
from swordsupper.services.dataset_service import DatasetService

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class RecordRepository(Generic[T]):
    """
    Owns one canonical collection of records and mirrors it to a single store key.
    Records keep insertion order.
    """
    record_kind = "record"

    def __init__(self, model: Type[T], store: LocalStore, store_key: str,
                 ids: Optional[IdGenerator] = None):
        self.model = model
        self.store = store
        self.store_key = store_key
        self.ids = ids or id_generator
        self.records: List[T] = []

    def __len__(self) -> int:
        return len(self.records)

    def list(self) -> List[T]:
        return list(self.records)

    def find(self, record_id: int) -> Optional[T]:
        for record in self.records:
            if record.id == record_id:
                return record
        return None

    def build(self, data: Dict[str, Any]) -> T:
        """Builds a record from raw (form or JSON) values, as a validation error on bad input."""
        try:
            return self.model.model_validate(data)
        except ValidationError as e:
            fields = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
            raise RecordValidationError(self.record_kind, detail=f"Invalid value for: {', '.join(fields)}") from e

    def add(self, record: T) -> T:
        missing = record.missing_fields()
        if missing:
            logger.warning(f"Rejected {self.record_kind}: missing {missing}")
            raise RecordValidationError(self.record_kind, missing)

        if record.id is None:
            record.id = self.ids.next_id(floor=self._max_id())
        elif self.find(record.id) is not None:
            raise RecordValidationError(self.record_kind, detail=f"Duplicate id {record.id}")

        self.records.append(record)
        logger.info(f"Added {self.record_kind} {record.id}")
        self.save()
        return record

    def delete(self, record_id: int) -> bool:
        before = len(self.records)
        self.records = [r for r in self.records if r.id != record_id]
        if len(self.records) == before:
            return False
        logger.info(f"Deleted {self.record_kind} {record_id}")
        self.save()
        return True

    def save(self) -> bool:
        data = [r.model_dump(mode='json', by_alias=True) for r in self.records]
        return self.store.set(self.store_key, data)

    def hydrate_from_store(self) -> int:
        """
        Merges persisted records into memory. Records whose id is already
        present are skipped, so the in-memory collection wins ties.
        Returns the number of records merged.
        """
        persisted = self._read_store()
        existing_ids = {r.id for r in self.records}
        new_records = [r for r in persisted if r.id not in existing_ids]
        self.records.extend(new_records)
        if new_records:
            logger.info(f"Hydrated {len(new_records)} {self.record_kind} records from store")
        return len(new_records)

    def _read_store(self) -> List[T]:
        raw = self.store.get(self.store_key)
        if raw is None:
            return []
        if not isinstance(raw, list):
            logger.error(f"Store key {self.store_key} does not hold a list, ignoring it")
            return []

        records = []
        for entry in raw:
            try:
                records.append(self.model.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping invalid stored {self.record_kind}: {e}")
        return records

    def _max_id(self) -> int:
        return max((r.id for r in self.records if r.id is not None), default=0)


class BossRepository(RecordRepository[BossRecord]):
    record_kind = "instance"

    def __init__(self, store: LocalStore, dataset: Optional[DatasetService] = None,
                 ids: Optional[IdGenerator] = None):
        super().__init__(BossRecord, store, STORE_KEY_BOSSES, ids)
        self.dataset = dataset or DatasetService()

    async def load(self) -> List[BossRecord]:
        """Replaces the collection with the static base dataset. Empty on failure."""
        try:
            self.records = await self.dataset.load_bosses()
        except DatasetLoadError:
            self.records = []
            raise
        return self.list()


class SeededRepository(RecordRepository[T]):
    """
    Collection that starts from built-in seed data. A persisted collection,
    when present, replaces the seeds wholesale.
    """

    def __init__(self, model: Type[T], store: LocalStore, store_key: str,
                 seeds: List[Dict[str, Any]], ids: Optional[IdGenerator] = None):
        super().__init__(model, store, store_key, ids)
        self.seeds = seeds
        self.records = [model.model_validate(s) for s in seeds]

    def hydrate_from_store(self) -> int:
        if self.store.get(self.store_key) is None:
            return 0
        self.records = self._read_store()
        logger.info(f"Loaded {len(self.records)} {self.record_kind} records from store")
        return len(self.records)


class ItemRepository(SeededRepository[ItemRecord]):
    record_kind = "item"

    def __init__(self, store: LocalStore, ids: Optional[IdGenerator] = None):
        super().__init__(ItemRecord, store, STORE_KEY_ITEMS, DEFAULT_ITEMS, ids)


class LevelGoldRepository(SeededRepository[LevelGoldRecord]):
    record_kind = "level/gold cost"

    def __init__(self, store: LocalStore, ids: Optional[IdGenerator] = None):
        super().__init__(LevelGoldRecord, store, STORE_KEY_LEVEL_GOLD, DEFAULT_LEVEL_GOLD, ids)
