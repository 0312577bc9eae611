import unittest

from swordsupper.core.models import BossRecord, LevelGoldRecord
from swordsupper.core.sorting import (
    sort_bosses, sort_level_gold, get_level_value, get_difficulty_value
)


def boss(id, name, level="1-5", difficulty=1, instance_type="normal"):
    return BossRecord(id=id, name=name, level=level, difficulty=difficulty, instance_type=instance_type)


class TestSortBosses(unittest.TestCase):
    def setUp(self):
        self.bosses = [
            boss(1, "Citadel", level="41-60", difficulty=3),
            boss(2, "abyss", level="1-5", difficulty="boss-rush", instance_type="boss"),
            boss(3, "Barrow", level="21-40", difficulty=5, instance_type="boss"),
            boss(4, "Dunes", level="1-5", difficulty=1),
        ]

    def ids(self, records):
        return [b.id for b in records]

    def test_level_values(self):
        self.assertEqual(get_level_value("1-5"), 1)
        self.assertEqual(get_level_value("221-240"), 10)
        self.assertEqual(get_level_value("999-1000"), 0)

    def test_difficulty_values(self):
        self.assertEqual(get_difficulty_value(3), 3)
        self.assertEqual(get_difficulty_value("4"), 4)
        self.assertEqual(get_difficulty_value(None), 0)
        self.assertGreater(get_difficulty_value("boss-rush"), get_difficulty_value(5))

    def test_sort_by_level_is_stable(self):
        # 2 and 4 share a bucket and keep their input order
        res = sort_bosses(self.bosses, "level")
        self.assertEqual(self.ids(res), [2, 4, 3, 1])

    def test_sort_by_level_descending(self):
        res = sort_bosses(self.bosses, "level", descending=True)
        self.assertEqual(self.ids(res), [1, 3, 2, 4])

    def test_unknown_level_sorts_first(self):
        odd = boss(5, "Odd", level="unknown")
        res = sort_bosses(self.bosses + [odd], "level")
        self.assertEqual(res[0].id, 5)

    def test_sort_by_difficulty_puts_boss_rush_last(self):
        res = sort_bosses(self.bosses, "difficulty")
        self.assertEqual(self.ids(res), [4, 1, 3, 2])

    def test_sort_by_name_is_case_insensitive(self):
        res = sort_bosses(self.bosses, "name")
        self.assertEqual([b.name for b in res], ["abyss", "Barrow", "Citadel", "Dunes"])

    def test_sort_by_type(self):
        res = sort_bosses(self.bosses, "type")
        self.assertEqual([b.type for b in res],
                         ["Boss Rush", "Normal Instance", "Normal Instance", "Regular Boss"])

    def test_invalid_key_falls_back_to_level(self):
        self.assertEqual(self.ids(sort_bosses(self.bosses, "bogus")),
                         self.ids(sort_bosses(self.bosses, "level")))

    def test_completed_always_last(self):
        completed = {2, 3}
        asc = sort_bosses(self.bosses, "level", completed=completed)
        self.assertEqual(self.ids(asc), [4, 1, 2, 3])

        desc = sort_bosses(self.bosses, "level", descending=True, completed=completed)
        self.assertEqual(self.ids(desc), [1, 4, 3, 2])

    def test_input_not_modified(self):
        before = self.ids(self.bosses)
        sort_bosses(self.bosses, "name", descending=True, completed={1})
        self.assertEqual(self.ids(self.bosses), before)


def test_level_buckets_rank_in_order():
    bosses = [boss(1, "A", level="221-240"), boss(2, "B", level="21-40"), boss(3, "C", level="1-5")]
    assert [b.level for b in sort_bosses(bosses, "level")] == ["1-5", "21-40", "221-240"]


def test_completing_a_boss_moves_it_last():
    bosses = [boss(1, "Mid", level="6-20"), boss(2, "Low", level="1-5"), boss(3, "High", level="101-120")]
    assert [b.level for b in sort_bosses(bosses, "level")] == ["1-5", "6-20", "101-120"]

    completed = {2}
    assert [b.level for b in sort_bosses(bosses, "level", completed=completed)] == ["6-20", "101-120", "1-5"]


def test_sort_level_gold():
    costs = [
        LevelGoldRecord(id=1, level=30, cost=900),
        LevelGoldRecord(id=2, level=22, cost=750),
        LevelGoldRecord(id=3, level=25, cost=800),
    ]
    assert [c.level for c in sort_level_gold(costs)] == [22, 25, 30]


if __name__ == '__main__':
    unittest.main()
