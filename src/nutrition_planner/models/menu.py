"""Weekly menu data model."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

APP_TITLE = "Nutrition Planning App"


class MealType(str, Enum):
    """Meal slot. Declaration order is the order within a day."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"


class EmailStatus(str, Enum):
    QUEUED = "queued"
    SENT = "sent"
    FAILED = "failed"
    NOT_CONFIGURED = "not_configured"


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ShoppingItem(_WireModel):
    """Ingredient needed for one day."""

    product: str = Field(..., description="Product name")
    quantity: str = Field(default="", description="Free-form amount, e.g. 500 g")


class Meal(_WireModel):
    type: str = Field(..., description="Breakfast, Lunch or Dinner")
    name: str = Field(default="")
    description: str | None = Field(default=None)
    calories: int | float | None = Field(default=None, description="kcal, positive when present")


class Day(_WireModel):
    """One day of the plan with its own shopping list."""

    day_index: int = Field(..., description="1-based position in the week")
    label: str = Field(..., description="Display label, e.g. Day 1")
    meals: list[Meal] = Field(default_factory=list)
    shopping_items: list[ShoppingItem] = Field(default_factory=list)


class Menu(_WireModel):
    """Persisted weekly menu. Built once per generation, never mutated."""

    email: str = Field(..., description="Owning user key, server-only")
    version: int = Field(..., ge=1)
    daily_calories: int = Field(..., description="Daily calorie target")
    days: list[Day] = Field(default_factory=list)
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    warning: str | None = Field(default=None, description="Set only when the fallback menu was used")

    def client_view(self, email_status: EmailStatus | None = None) -> dict[str, Any]:
        """Record as returned to the client: no owning email, empty optionals omitted."""
        data = self.model_dump(mode="json", by_alias=True, exclude={"email"}, exclude_none=True)
        if email_status is not None:
            data["emailStatus"] = email_status.value
        return data

    def email_subject(self) -> str:
        return f"Your weekly menu (v{self.version}) - {APP_TITLE}"

    def to_plain_text(self) -> str:
        """Format for email - plain text, one line per meal and shopping item."""
        lines = [
            APP_TITLE,
            f"Weekly Menu (version {self.version})",
            f"Target daily calories: {self.daily_calories} kcal",
            f"Generated at: {self.generated_at.strftime('%Y-%m-%d %H:%M %Z').strip()}",
            "",
        ]
        for day in self.days:
            lines.append(day.label or f"Day {day.day_index}")
            for meal in day.meals:
                kcal = f" ({meal.calories:g} kcal)" if meal.calories is not None else ""
                lines.append(f"- {meal.type}: {meal.name}{kcal}")
                if meal.description:
                    lines.append(f"  {meal.description}")
            if day.shopping_items:
                lines.append("Shopping list:")
                for item in day.shopping_items:
                    lines.append(f"• {item.product} — {item.quantity}")
            lines.append("")
        return "\n".join(lines)
