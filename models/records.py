"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import Optional


class SkinType(IntEnum):
    """Fitzpatrick skin phototypes, least to most tolerant of UV."""

    TYPE_I = 1
    TYPE_II = 2
    TYPE_III = 3
    TYPE_IV = 4
    TYPE_V = 5
    TYPE_VI = 6

    @property
    def display_name(self) -> str:
        return f"Type {self.name.split('_', 1)[1]}"

    @property
    def description(self) -> str:
        return _SKIN_TYPE_DESCRIPTIONS[self]


_SKIN_TYPE_DESCRIPTIONS = {
    SkinType.TYPE_I: "Very fair skin, always burns, never tans",
    SkinType.TYPE_II: "Fair skin, burns easily, tans minimally",
    SkinType.TYPE_III: "Medium skin, burns moderately, tans gradually",
    SkinType.TYPE_IV: "Olive skin, burns minimally, tans well",
    SkinType.TYPE_V: "Brown skin, rarely burns, tans profusely",
    SkinType.TYPE_VI: "Dark brown/black skin, never burns",
}


class EyeColor(str, Enum):
    light_blue = "light_blue"
    light_gray = "light_gray"
    light_green = "light_green"
    blue = "blue"
    gray = "gray"
    green = "green"
    hazel = "hazel"
    light_brown = "light_brown"
    dark_brown = "dark_brown"
    black = "black"


class HairColor(str, Enum):
    red = "red"
    light_blonde = "light_blonde"
    blonde = "blonde"
    dark_blonde = "dark_blonde"
    light_brown = "light_brown"
    brown = "brown"
    dark_brown = "dark_brown"
    black = "black"
    gray = "gray"
    white = "white"


class TanningResponse(str, Enum):
    always_burns = "always_burns"
    usually_burns = "usually_burns"
    sometimes_burns = "sometimes_burns"
    rarely_burns = "rarely_burns"
    never_burns = "never_burns"


class ApplicationQuantity(str, Enum):
    """How much sunscreen was applied; each level maps to a fixed dose."""

    low = "low"
    medium = "medium"
    lots = "lots"

    @property
    def dose_mg_per_cm2(self) -> float:
        return _QUANTITY_DOSES[self]


_QUANTITY_DOSES = {
    ApplicationQuantity.low: 0.5,
    ApplicationQuantity.medium: 1.0,
    ApplicationQuantity.lots: 2.0,
}


class ActivityLevel(str, Enum):
    indoors = "indoors"
    normal = "normal"
    active = "active"
    water = "water"


class UVLevel(str, Enum):
    """WHO exposure band of a UV index."""

    low = "low"
    moderate = "moderate"
    high = "high"
    very_high = "very_high"
    extreme = "extreme"

    @classmethod
    def from_index(cls, uv_index: float) -> "UVLevel":
        if uv_index < 3:
            return cls.low
        if uv_index < 6:
            return cls.moderate
        if uv_index < 8:
            return cls.high
        if uv_index < 11:
            return cls.very_high
        return cls.extreme

    @property
    def description(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def recommendation(self) -> str:
        return _UV_RECOMMENDATIONS[self]


_UV_RECOMMENDATIONS = {
    UVLevel.low: "Minimal sun protection required",
    UVLevel.moderate: "Take care during midday hours",
    UVLevel.high: "Protection required - seek shade during midday",
    UVLevel.very_high: "Extra protection required - avoid being outside during midday",
    UVLevel.extreme: "Stay inside during midday hours - all precautions needed",
}


@dataclass(frozen=True, slots=True)
class SensitivityProfile:
    """A user's skin classification plus optional refining attributes."""

    skin_type: int
    eye_color: Optional[EyeColor] = None
    hair_color: Optional[HairColor] = None
    tanning_response: Optional[TanningResponse] = None
    has_freckles: bool = False


@dataclass(frozen=True, slots=True)
class ProtectantApplication:
    """A logged sunscreen application."""

    spf: int
    quantity: ApplicationQuantity
    applied_at: datetime
    activity: ActivityLevel = ActivityLevel.normal
    last_water_exposure: Optional[datetime] = None


@dataclass(frozen=True, slots=True)
class ForecastSample:
    """A single hourly UV observation or forecast entry."""

    timestamp: datetime
    uv_index: float
    temperature: Optional[float] = None
    cloud_cover: Optional[float] = None

    @property
    def uv_level(self) -> UVLevel:
        return UVLevel.from_index(self.uv_index)
