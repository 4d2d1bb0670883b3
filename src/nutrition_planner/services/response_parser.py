"""Provider output handling.

Two independent stages: `extract_json_payload` finds a JSON object in free
text, `validate_menu_payload` shapes that object into menu days. Only a
missing or non-list `days` is rejected; every other shape problem is
tolerated and defaulted.
"""

import json
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any

from nutrition_planner.errors import ExtractionError, ValidationError
from nutrition_planner.models import Day, Meal, MealType, ShoppingItem

logger = logging.getLogger(__name__)

EXPECTED_DAYS = 7
# Larger integers are rejected so stored menus stay readable by json.loads.
MAX_INT_FIELD = 2**31 - 1
MEAL_ORDER = [t.value for t in MealType]

_FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)


@dataclass
class ValidatedMenu:
    """Days shaped from a provider payload."""

    days: list[Day] = field(default_factory=list)
    provider_version: int | None = None


def extract_json_payload(raw: Any) -> dict[str, Any]:
    """Parse the text between the first `{` and the last `}` after removing code fences."""
    if not isinstance(raw, str) or not raw.strip():
        raise ExtractionError("AI response is empty or not a string")
    cleaned = _FENCE_RE.sub("", raw).strip()
    first = cleaned.find("{")
    last = cleaned.rfind("}")
    if first == -1 or last == -1 or last <= first:
        raise ExtractionError("Could not locate JSON object in AI response")
    try:
        data = json.loads(cleaned[first : last + 1])
    except (ValueError, RecursionError) as e:
        raise ExtractionError(f"AI response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise ExtractionError("AI response JSON is not an object")
    return data


def validate_menu_payload(payload: Any) -> ValidatedMenu:
    """Shape the extracted payload into days. Raises ValidationError without a `days` list."""
    if not isinstance(payload, dict) or not isinstance(payload.get("days"), list):
        raise ValidationError('Parsed JSON has no "days" array.')

    days: list[Day] = []
    for raw_day in payload["days"]:
        if not isinstance(raw_day, dict):
            logger.warning("Dropping non-object day entry: %r", raw_day)
            continue
        days.append(_shape_day(raw_day, position=len(days) + 1))

    if len(days) != EXPECTED_DAYS:
        logger.warning("Provider returned %d days, expected %d", len(days), EXPECTED_DAYS)

    return ValidatedMenu(days=days, provider_version=_provider_version(payload.get("version")))


def _shape_day(raw: dict[str, Any], position: int) -> Day:
    day_index = _as_int(raw.get("dayIndex"))
    if day_index is None or not 1 <= day_index <= MAX_INT_FIELD:
        day_index = position
    label = raw.get("label")
    label = str(label).strip() if label is not None else ""

    raw_meals = raw.get("meals")
    raw_meals = [m for m in (raw_meals if isinstance(raw_meals, list) else []) if isinstance(m, dict)]
    # Untyped meals take the slots no other meal of the day claimed.
    claimed = {_canonical_meal_type(m.get("type")) for m in raw_meals}
    free_slots = [t for t in MEAL_ORDER if t not in claimed]
    meals: list[Meal] = []
    for m in raw_meals:
        meal_type = _canonical_meal_type(m.get("type"))
        if meal_type is None:
            meal_type = free_slots.pop(0) if free_slots else "Meal"
        meals.append(_shape_meal(m, meal_type))
    meals.sort(key=_meal_rank)
    if len(meals) != len(MEAL_ORDER):
        logger.warning("Day %d has %d meals, expected %d", day_index, len(meals), len(MEAL_ORDER))

    raw_items = raw.get("shoppingItems")
    items = [
        _shape_item(i)
        for i in (raw_items if isinstance(raw_items, list) else [])
        if isinstance(i, dict) and i.get("product")
    ]
    return Day(
        day_index=day_index,
        label=label or f"Day {day_index}",
        meals=meals,
        shopping_items=items,
    )


def _shape_meal(raw: dict[str, Any], meal_type: str) -> Meal:
    description = raw.get("description")
    if description is not None:
        description = str(description).strip() or None
    return Meal(
        type=meal_type,
        name=str(raw.get("name") or "").strip(),
        description=description,
        calories=_positive_number(raw.get("calories")),
    )


def _shape_item(raw: dict[str, Any]) -> ShoppingItem:
    quantity = raw.get("quantity")
    return ShoppingItem(
        product=str(raw["product"]).strip(),
        quantity=str(quantity).strip() if quantity is not None else "",
    )


def _canonical_meal_type(value: Any) -> str | None:
    if not isinstance(value, str) or not value.strip():
        return None
    for name in MEAL_ORDER:
        if value.strip().lower() == name.lower():
            return name
    return value.strip()


def _meal_rank(meal: Meal) -> int:
    return MEAL_ORDER.index(meal.type) if meal.type in MEAL_ORDER else len(MEAL_ORDER)


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def _positive_number(value: Any) -> int | float | None:
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return int(number) if number.is_integer() else number


def _provider_version(value: Any) -> int | None:
    version = _as_int(value) if not isinstance(value, str) else None
    return version if version is not None and 0 < version <= MAX_INT_FIELD else None
