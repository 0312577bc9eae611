from datetime import date
from typing import ClassVar, List, Optional, Literal, Tuple, Union
from pydantic import BaseModel, Field, field_validator, model_validator

from swordsupper.core.constants import (
    BOSS_RUSH, INSTANCE_TYPES, TYPE_BOSS_RUSH, TYPE_REGULAR_BOSS, TYPE_NORMAL_INSTANCE,
    WEBSITE_SUBMITTER
)


def today_iso() -> str:
    return date.today().isoformat()


def generate_type(instance_type: Optional[str], difficulty: Union[int, str, None]) -> str:
    """Derives the display label shown in the Type column."""
    if difficulty == BOSS_RUSH:
        return TYPE_BOSS_RUSH
    elif instance_type == "boss":
        return TYPE_REGULAR_BOSS
    else:
        return TYPE_NORMAL_INSTANCE


def _is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


# --- Catalog Records ---

class BossRecord(BaseModel):
    id: Optional[int] = None
    name: str = ""
    level: str = Field("", description="Bucket label, e.g. 21-40")
    difficulty: Union[int, str, None] = None
    instance_type: str = Field("", alias="instanceType")
    type: str = ""
    location: Optional[str] = None
    description: Optional[str] = None
    external_link: Optional[str] = Field(None, alias="redditLink")
    submitted_by: Optional[str] = Field(None, alias="submittedBy")
    has_ruined_path: bool = Field(False, alias="hasRuinedPath")
    has_increased: bool = Field(False, alias="hasIncreased")
    date_added: str = Field(default_factory=today_iso, alias="dateAdded")

    model_config = {
        "populate_by_name": True
    }

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("name", "level", "difficulty", "instance_type")

    @field_validator('difficulty', mode='before')
    @classmethod
    def coerce_difficulty(cls, value):
        # Form values arrive as strings; keep the boss-rush sentinel as-is
        if isinstance(value, str):
            value = value.strip()
            if not value:
                return None
            if value.isdigit():
                return int(value)
        return value

    @field_validator('difficulty')
    @classmethod
    def check_difficulty(cls, value):
        if value is None or value == BOSS_RUSH:
            return value
        if isinstance(value, int) and not isinstance(value, bool) and value >= 1:
            return value
        raise ValueError(f"difficulty must be a positive integer or '{BOSS_RUSH}'")

    @field_validator('instance_type')
    @classmethod
    def check_instance_type(cls, value):
        # Blank is reported by missing_fields() instead
        if value and value not in INSTANCE_TYPES:
            raise ValueError(f"instance type must be one of {', '.join(INSTANCE_TYPES)}")
        return value

    @field_validator('has_ruined_path', 'has_increased', mode='before')
    @classmethod
    def none_is_false(cls, value):
        return False if value is None else value

    @model_validator(mode='after')
    def derive_type(self):
        if not self.type:
            self.type = generate_type(self.instance_type, self.difficulty)
        return self

    @property
    def is_boss_rush(self) -> bool:
        return self.difficulty == BOSS_RUSH

    @property
    def numeric_difficulty(self) -> Optional[int]:
        return self.difficulty if isinstance(self.difficulty, int) else None

    def missing_fields(self) -> List[str]:
        return [f for f in self.REQUIRED_FIELDS if _is_blank(getattr(self, f))]


class ItemRecord(BaseModel):
    id: Optional[int] = None
    name: str = ""
    type: str = ""
    rarity: str = ""
    description: str = ""
    image_url: Optional[str] = Field(None, alias="imageUrl")
    gold_value: Optional[int] = Field(None, alias="goldValue")
    crit: Optional[float] = Field(None, ge=0)
    dodge: Optional[float] = Field(None, ge=0)
    fire_resist: Optional[float] = Field(None, ge=0, alias="fireResist")
    elec_resist: Optional[float] = Field(None, ge=0, alias="elecResist")
    source: Optional[str] = None
    date_added: str = Field(default_factory=today_iso, alias="dateAdded")
    submitted_by: Optional[str] = Field(WEBSITE_SUBMITTER, alias="submittedBy")

    model_config = {
        "populate_by_name": True
    }

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("name", "type", "description", "rarity")

    @field_validator('gold_value', 'crit', 'dodge', 'fire_resist', 'elec_resist', mode='before')
    @classmethod
    def empty_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def property_value(self, attr: str) -> float:
        return getattr(self, attr) or 0.0

    def missing_fields(self) -> List[str]:
        return [f for f in self.REQUIRED_FIELDS if _is_blank(getattr(self, f))]


class LevelGoldRecord(BaseModel):
    id: Optional[int] = None
    level: Optional[int] = None
    cost: Optional[int] = None
    submitted_by: Optional[str] = Field(None, alias="submittedBy")
    date_added: str = Field(default_factory=today_iso, alias="dateAdded")

    model_config = {
        "populate_by_name": True
    }

    REQUIRED_FIELDS: ClassVar[Tuple[str, ...]] = ("level", "cost")

    @field_validator('level', 'cost', mode='before')
    @classmethod
    def empty_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def missing_fields(self) -> List[str]:
        # Zero is rejected along with absent values
        return [f for f in self.REQUIRED_FIELDS if not getattr(self, f)]


class AbilityRecord(BaseModel):
    name: str
    description: str
    category: Literal["equipment", "temple"]


# --- Filter Criteria ---

class BossFilterCriteria(BaseModel):
    search: str = ""
    level: str = ""
    difficulty: Union[int, str] = ""
    type: str = ""
    modifier: str = Field("", description="ruined-path or increased")
    completion: str = Field("", description="completed or incomplete")
    hide_completed: bool = False


class ItemFilterCriteria(BaseModel):
    search: str = ""
    type: str = ""
    rarity: str = ""
    stat: str = Field("", description="crit, dodge, fireResist or elecResist")


# --- Stats ---

class CompletionStats(BaseModel):
    total: int
    completed: int
    remaining: int
    percentage: str


class CatalogStats(BaseModel):
    total_bosses: int = 0
    boss_rushes: int = 0
    average_difficulty: float = 0.0
    completion: CompletionStats
