"""User profile data model."""

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from nutrition_planner.errors import ProfileIncompleteError


class Goal(str, Enum):
    """Weight goal."""

    LOSE = "Lose weight"
    MAINTAIN = "Maintain weight"
    GAIN = "Gain weight"


class Gender(str, Enum):
    MALE = "Male"
    FEMALE = "Female"
    OTHER = "Other"


class ActivityLevel(str, Enum):
    """Weekly exercise buckets offered at signup."""

    SEDENTARY = "Sedentary - 0 hours/week"
    LIGHT = "Light - 0-1 hour/week"
    MODERATE = "Moderate - 1-2 hours/week"
    ACTIVE = "Active - 2-4 hours/week"
    VERY_ACTIVE = "Very Active - 4+ hours/week"


class Profile(BaseModel):
    """Biometric profile. Immutable snapshot once handed to the pipeline.

    Labels are kept as plain strings so unknown values degrade to calorie
    defaults instead of being rejected.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    goal: str | None = Field(default=None, description="One of Goal values")
    age_range: str | None = Field(default=None, description="Age bucket, e.g. 25-34 or 65+")
    gender: str | None = Field(default=None, description="One of Gender values")
    height_cm: float | None = Field(default=None, description="Height in cm")
    weight_kg: float | None = Field(default=None, description="Weight in kg")
    activity_level: str | None = Field(default=None, description="One of ActivityLevel values")

    @field_validator("goal", "age_range", "gender", "activity_level", mode="before")
    @classmethod
    def _as_label(cls, v: Any) -> str | None:
        if v is None:
            return None
        text = str(v).strip()
        return text or None

    @field_validator("height_cm", "weight_kg", mode="before")
    @classmethod
    def _as_positive_number(cls, v: Any) -> float | None:
        """Missing, non-numeric, non-finite or non-positive values become None."""
        if v is None or isinstance(v, bool):
            return None
        try:
            number = float(v)
        except (TypeError, ValueError, OverflowError):
            return None
        if not math.isfinite(number) or number <= 0:
            return None
        return number

    @classmethod
    def required_fields(cls) -> list[str]:
        """Wire names of fields a generation request must carry."""
        return [field.alias or name for name, field in cls.model_fields.items()]

    @classmethod
    def from_request(cls, data: Any) -> "Profile":
        """Build from a request body, raising ProfileIncompleteError on gaps."""
        if not isinstance(data, dict):
            raise ProfileIncompleteError(cls.required_fields())
        profile = cls.model_validate(data)
        missing = [
            field.alias or name
            for name, field in cls.model_fields.items()
            if getattr(profile, name) is None
        ]
        if missing:
            raise ProfileIncompleteError(missing)
        return profile

    def to_ai_context(self) -> dict[str, Any]:
        """Context for AI prompts - no PII leakage."""
        return {
            "goal": self.goal or "Maintain weight",
            "age_range": self.age_range or "not provided",
            "gender": self.gender or "not provided",
            "height_cm": _fmt_number(self.height_cm),
            "weight_kg": _fmt_number(self.weight_kg),
            "activity_level": self.activity_level or "not provided",
        }


def _fmt_number(value: float | None) -> str:
    if value is None:
        return "not provided"
    return str(int(value)) if value.is_integer() else str(value)
