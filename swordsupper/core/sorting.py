from typing import AbstractSet, Iterable, List

from swordsupper.core.constants import LEVEL_BUCKET_RANKS, BOSS_RUSH
from swordsupper.core.models import BossRecord, LevelGoldRecord

DEFAULT_SORT_KEY = "level"


def get_level_value(level: str) -> int:
    """Ordinal rank of a level bucket label. Unknown labels rank 0."""
    return LEVEL_BUCKET_RANKS.get(level, 0)


def get_difficulty_value(difficulty) -> float:
    # Boss rushes rank above every numeric difficulty
    if difficulty == BOSS_RUSH:
        return float('inf')
    if isinstance(difficulty, (int, float)):
        return difficulty
    try:
        return int(difficulty)
    except (TypeError, ValueError):
        return 0


SORT_KEY_FUNCS = {
    'level': lambda b: get_level_value(b.level),
    'difficulty': lambda b: get_difficulty_value(b.difficulty),
    'name': lambda b: (b.name or "").lower(),
    'type': lambda b: (b.type or "").lower(),
}


def sort_bosses(bosses: Iterable[BossRecord],
                key: str = DEFAULT_SORT_KEY,
                descending: bool = False,
                completed: AbstractSet[int] = frozenset()) -> List[BossRecord]:
    """
    Orders bosses with incomplete ones first, then by the selected key.

    `descending` only flips the key comparison; completed bosses stay at the
    bottom either way. Both passes use Python's stable sort (which stays stable
    with reverse=True), so ties keep their input order.
    """
    key_func = SORT_KEY_FUNCS.get(key, SORT_KEY_FUNCS[DEFAULT_SORT_KEY])
    res = sorted(bosses, key=key_func, reverse=descending)
    res.sort(key=lambda b: b.id in completed)
    return res


def sort_level_gold(costs: Iterable[LevelGoldRecord]) -> List[LevelGoldRecord]:
    return sorted(costs, key=lambda c: c.level or 0)
