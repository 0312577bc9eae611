"""
Pure filtering functions for the catalog views.

Every function returns a new list holding the matching records in their
original relative order; reordering is left to `swordsupper.core.sorting`.
An empty criterion matches everything for its dimension.
"""
from typing import AbstractSet, Iterable, List, Optional

from swordsupper.core.constants import (
    MODIFIER_FIELDS, COMPLETION_COMPLETED, COMPLETION_INCOMPLETE, ITEM_PROPERTIES
)
from swordsupper.core.models import (
    BossRecord, ItemRecord, AbilityRecord, BossFilterCriteria, ItemFilterCriteria
)


def _contains(haystack: Optional[str], needle: str) -> bool:
    return needle in (haystack or "").lower()


def matches_search(boss: BossRecord, text: str) -> bool:
    """Case-insensitive substring match on name, location or description."""
    txt = text.lower()
    return (_contains(boss.name, txt) or
            _contains(boss.location, txt) or
            _contains(boss.description, txt))


def matches_boss(boss: BossRecord, criteria: BossFilterCriteria, completed: AbstractSet[int]) -> bool:
    if criteria.search and not matches_search(boss, criteria.search):
        return False

    if criteria.level and boss.level != criteria.level:
        return False

    # Stringified so the boss-rush sentinel compares against numeric difficulties
    if criteria.difficulty != "" and str(boss.difficulty) != str(criteria.difficulty):
        return False

    if criteria.type and boss.type != criteria.type:
        return False

    if criteria.modifier:
        attr = MODIFIER_FIELDS.get(criteria.modifier)
        if attr and not getattr(boss, attr, False):
            return False

    is_done = boss.id in completed
    if criteria.completion == COMPLETION_COMPLETED and not is_done:
        return False
    if criteria.completion == COMPLETION_INCOMPLETE and is_done:
        return False

    if criteria.hide_completed and is_done:
        return False

    return True


def filter_bosses(bosses: Iterable[BossRecord],
                  criteria: Optional[BossFilterCriteria] = None,
                  completed: AbstractSet[int] = frozenset()) -> List[BossRecord]:
    criteria = criteria or BossFilterCriteria()
    return [b for b in bosses if matches_boss(b, criteria, completed)]


def matches_item(item: ItemRecord, criteria: ItemFilterCriteria) -> bool:
    if criteria.type and item.type != criteria.type:
        return False

    if criteria.rarity and item.rarity != criteria.rarity:
        return False

    if criteria.search:
        txt = criteria.search.lower()
        if not (_contains(item.name, txt) or _contains(item.description, txt)):
            return False

    if criteria.stat:
        attr = ITEM_PROPERTIES.get(criteria.stat)
        if attr and not item.property_value(attr) > 0:
            return False

    return True


def filter_items(items: Iterable[ItemRecord], criteria: Optional[ItemFilterCriteria] = None) -> List[ItemRecord]:
    criteria = criteria or ItemFilterCriteria()
    return [i for i in items if matches_item(i, criteria)]


def filter_abilities(abilities: Iterable[AbilityRecord], category: Optional[str] = None) -> List[AbilityRecord]:
    if not category or category == "all":
        return list(abilities)
    return [a for a in abilities if a.category == category]
