"""Fixed substitute menu used whenever generation cannot be used."""

from nutrition_planner.models import Day, Meal, MealType, Profile, ShoppingItem

WARNING_NOT_CONFIGURED = (
    "Using fallback menu because the AI provider is not configured. Set LLM_API_KEY to enable generated menus."
)
WARNING_PROVIDER_FAILED = (
    "Using fallback menu because the AI provider request failed. Check your LLM_API_KEY, model name and quota."
)
WARNING_PROVIDER_TIMEOUT = "Using fallback menu because the AI provider did not respond in time."
WARNING_UNUSABLE_RESPONSE = "Using fallback menu because the AI response could not be read as a weekly menu."


def _meal(meal_type: MealType, name: str, description: str, calories: int) -> Meal:
    return Meal(type=meal_type.value, name=name, description=description, calories=calories)


def _items(*pairs: tuple[str, str]) -> list[ShoppingItem]:
    return [ShoppingItem(product=p, quantity=q) for p, q in pairs]


def fallback_days(profile: Profile | None = None) -> list[Day]:
    """Deterministic two-day sample menu. The profile does not change the content."""
    return [
        Day(
            day_index=1,
            label="Day 1",
            meals=[
                _meal(MealType.BREAKFAST, "Oatmeal with berries", "Wholegrain oats with milk and frozen berries.", 400),
                _meal(MealType.LUNCH, "Grilled chicken salad", "Chicken breast with mixed salad and olive oil.", 550),
                _meal(MealType.DINNER, "Salmon with vegetables", "Baked salmon with broccoli and potatoes.", 650),
            ],
            shopping_items=_items(
                ("Oats", "500 g"),
                ("Milk", "1 L"),
                ("Chicken breast", "300 g"),
                ("Mixed salad", "1 pack"),
                ("Salmon fillet", "300 g"),
                ("Broccoli", "400 g"),
            ),
        ),
        Day(
            day_index=2,
            label="Day 2",
            meals=[
                _meal(MealType.BREAKFAST, "Greek yogurt with granola", "Low-fat yogurt with granola and banana.", 400),
                _meal(MealType.LUNCH, "Turkey wrap with veggies", "Tortilla wrap with turkey and vegetables.", 550),
                _meal(MealType.DINNER, "Stir-fried tofu with rice", "Tofu with vegetables and brown rice.", 650),
            ],
            shopping_items=_items(
                ("Greek yogurt", "500 g"),
                ("Granola", "200 g"),
                ("Banana", "3 pcs"),
                ("Turkey slices", "200 g"),
                ("Tortillas", "4 pcs"),
                ("Tofu", "200 g"),
                ("Brown rice", "500 g"),
            ),
        ),
    ]
