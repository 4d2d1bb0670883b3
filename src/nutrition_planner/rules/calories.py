"""Daily calorie target - Mifflin-St Jeor BMR scaled by activity and goal."""

import logging
import math
from typing import Any

from nutrition_planner.config import get_calorie_rules
from nutrition_planner.models import ActivityLevel, Gender, Goal, Profile

logger = logging.getLogger(__name__)

DEFAULT_AGE = 30
DEFAULT_WEIGHT_KG = 70.0
DEFAULT_HEIGHT_CM = 170.0
OPEN_BUCKET_OFFSET = 5
MAX_AGE = 130

DEFAULT_ACTIVITY_FACTORS = {
    ActivityLevel.SEDENTARY.value: 1.2,
    ActivityLevel.LIGHT.value: 1.375,
    ActivityLevel.MODERATE.value: 1.55,
    ActivityLevel.ACTIVE.value: 1.725,
    ActivityLevel.VERY_ACTIVE.value: 1.9,
}
DEFAULT_UNKNOWN_ACTIVITY_FACTOR = 1.4
DEFAULT_GOAL_FACTORS = {
    Goal.LOSE.value: 0.8,
    Goal.MAINTAIN.value: 1.0,
    Goal.GAIN.value: 1.15,
}


def _finite(text: str) -> float | None:
    try:
        number = float(text)
    except (ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _plausible_age(value: float | None) -> int:
    if value is None or not 0 <= value <= MAX_AGE:
        return DEFAULT_AGE
    return int(value)


def approximate_age(age_range: str | None) -> int:
    """Representative age for a bucket: midpoint of lo-hi, lo+5 for open buckets, else 30."""
    if not age_range:
        return DEFAULT_AGE
    text = age_range.strip()
    if text.endswith("+"):
        lower = _finite(text[:-1].rstrip("-").strip())
        return _plausible_age(lower + OPEN_BUCKET_OFFSET if lower is not None else None)
    if "-" in text:
        lower, _, upper = text.partition("-")
        lo, hi = _finite(lower), _finite(upper)
        if lo is None or hi is None:
            return DEFAULT_AGE
        midpoint = (lo + hi) / 2
        if not math.isfinite(midpoint):
            return DEFAULT_AGE
        # halves round up
        return _plausible_age(midpoint + 0.5)
    return DEFAULT_AGE


def basal_metabolic_rate(gender: str | None, weight_kg: float, height_cm: float, age: int) -> float:
    """Mifflin-St Jeor. Unknown gender gets the mean of the male and female formulas."""
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    male = base + 5
    female = base - 161
    if gender == Gender.MALE.value:
        return male
    if gender == Gender.FEMALE.value:
        return female
    return (male + female) / 2


class CalorieModel:
    """Profile -> daily kcal target. Never raises; bad inputs use defaults."""

    def __init__(self, rules: dict[str, Any] | None = None) -> None:
        self._rules = rules if rules is not None else get_calorie_rules()

    def activity_factor(self, level: str | None) -> float:
        factors = {**DEFAULT_ACTIVITY_FACTORS, **(self._rules.get("activity_factors") or {})}
        default = self._rules.get("default_activity_factor", DEFAULT_UNKNOWN_ACTIVITY_FACTOR)
        if level not in factors:
            logger.debug("Unknown activity level %r, using %s", level, default)
            return float(default)
        return float(factors[level])

    def goal_factor(self, goal: str | None) -> float:
        factors = {**DEFAULT_GOAL_FACTORS, **(self._rules.get("goal_factors") or {})}
        return float(factors.get(goal, 1.0))

    def _target(self, profile: Profile, weight: float, height: float, age: int) -> float:
        bmr = basal_metabolic_rate(profile.gender, weight, height, age)
        return bmr * self.activity_factor(profile.activity_level) * self.goal_factor(profile.goal)

    def daily_calories(self, profile: Profile) -> int:
        age = approximate_age(profile.age_range)
        weight = profile.weight_kg or DEFAULT_WEIGHT_KG
        height = profile.height_cm or DEFAULT_HEIGHT_CM
        calories = self._target(profile, weight, height, age)
        if not math.isfinite(calories):
            logger.warning("Calorie target overflowed for weight=%s height=%s, using defaults", weight, height)
            calories = self._target(profile, DEFAULT_WEIGHT_KG, DEFAULT_HEIGHT_CM, age)
        if not math.isfinite(calories):
            return 1
        return max(1, int(calories + 0.5))
