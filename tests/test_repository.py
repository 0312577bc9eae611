import unittest
import os
import shutil
import tempfile

from swordsupper.core.errors import RecordValidationError
from swordsupper.core.models import BossRecord, ItemRecord
from swordsupper.core.persistence import LocalStore
from swordsupper.core.utils import IdGenerator
from swordsupper.services.dataset_service import DatasetService
from swordsupper.services.repository import BossRepository, ItemRepository, LevelGoldRepository


def valid_boss(**overrides):
    data = {"name": "Goblin Keep", "level": "1-5", "difficulty": 2, "instance_type": "normal"}
    data.update(overrides)
    return BossRecord(**data)


class TestBossRepository(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.store = LocalStore(store_dir=os.path.join(self.test_dir, "store"))
        self.ids = IdGenerator(clock=lambda: 1.0)
        self.repo = BossRepository(self.store, DatasetService(source="unused.json", timeout=1), ids=self.ids)

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_add_assigns_id_and_persists(self):
        boss = self.repo.add(valid_boss())

        self.assertEqual(len(self.repo), 1)
        self.assertEqual(boss.id, 1000)
        self.assertIs(self.repo.find(1000), boss)

        saved = self.store.get("bosses")
        self.assertEqual(len(saved), 1)
        self.assertEqual(saved[0]["name"], "Goblin Keep")
        self.assertEqual(saved[0]["instanceType"], "normal")

    def test_add_missing_name_rejected(self):
        with self.assertRaises(RecordValidationError) as ctx:
            self.repo.add(valid_boss(name=""))
        self.assertEqual(ctx.exception.missing_fields, ["name"])
        self.assertIn("required fields", str(ctx.exception))
        self.assertEqual(len(self.repo), 0)
        self.assertIsNone(self.store.get("bosses"))

    def test_ids_unique_and_above_existing(self):
        self.repo.records = [valid_boss(id=5000)]
        first = self.repo.add(valid_boss())
        second = self.repo.add(valid_boss(name="Second"))
        self.assertEqual(first.id, 5001)
        self.assertEqual(second.id, 5002)

    def test_duplicate_id_rejected(self):
        self.repo.add(valid_boss(id=7))
        with self.assertRaises(RecordValidationError):
            self.repo.add(valid_boss(id=7, name="Other"))
        self.assertEqual(len(self.repo), 1)

    def test_build_invalid_value(self):
        with self.assertRaises(RecordValidationError) as ctx:
            self.repo.build({"name": "x", "has_ruined_path": "not a bool"})
        self.assertIn("Invalid value", str(ctx.exception))

    def test_delete(self):
        boss = self.repo.add(valid_boss())
        self.assertTrue(self.repo.delete(boss.id))
        self.assertFalse(self.repo.delete(boss.id))
        self.assertEqual(self.store.get("bosses"), [])

    def test_hydrate_skips_existing_ids(self):
        self.store.set("bosses", [
            valid_boss(id=1, name="Persisted Copy").model_dump(by_alias=True),
            valid_boss(id=2, name="Local Only").model_dump(by_alias=True),
            {"id": 3, "hasRuinedPath": "garbage"},
        ])
        self.repo.records = [valid_boss(id=1, name="Base")]

        merged = self.repo.hydrate_from_store()

        self.assertEqual(merged, 1)
        self.assertEqual([b.name for b in self.repo.list()], ["Base", "Local Only"])

    def test_hydrate_ignores_non_list(self):
        self.store.set("bosses", {"oops": True})
        self.assertEqual(self.repo.hydrate_from_store(), 0)


class TestSeededRepositories(unittest.TestCase):
    def setUp(self):
        self.test_dir = tempfile.mkdtemp()
        self.store = LocalStore(store_dir=os.path.join(self.test_dir, "store"))
        self.ids = IdGenerator(clock=lambda: 1.0)

    def tearDown(self):
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_items_start_from_seeds(self):
        repo = ItemRepository(self.store, ids=self.ids)
        self.assertEqual(len(repo), 4)
        self.assertEqual(repo.hydrate_from_store(), 0)
        self.assertEqual(len(repo), 4)

    def test_persisted_items_replace_seeds(self):
        self.store.set("items", [
            ItemRecord(id=99, name="Only", type="weapon", rarity="common", description="x").model_dump(by_alias=True)
        ])
        repo = ItemRepository(self.store, ids=self.ids)
        repo.hydrate_from_store()
        self.assertEqual([i.name for i in repo.list()], ["Only"])

    def test_added_item_persists_with_seeds(self):
        repo = ItemRepository(self.store, ids=self.ids)
        repo.add(repo.build({"name": "New", "type": "weapon", "rarity": "rare", "description": "Sharp"}))

        reloaded = ItemRepository(self.store, ids=self.ids)
        reloaded.hydrate_from_store()
        self.assertEqual(len(reloaded), 5)
        self.assertEqual(reloaded.list()[-1].name, "New")

    def test_level_gold_validation(self):
        repo = LevelGoldRepository(self.store, ids=self.ids)
        with self.assertRaises(RecordValidationError):
            repo.add(repo.build({"level": 30}))
        self.assertEqual(len(repo), 1)

        cost = repo.add(repo.build({"level": "30", "cost": "900"}))
        self.assertEqual((cost.level, cost.cost), (30, 900))
        self.assertEqual(len(repo), 2)


if __name__ == '__main__':
    unittest.main()
