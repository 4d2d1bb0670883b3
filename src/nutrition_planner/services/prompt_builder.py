"""Weekly menu prompt. Pure templating, no I/O."""

import secrets

from nutrition_planner.models import Profile

ENTROPY_TOKEN_BYTES = 8

MENU_PROMPT_TEMPLATE = """You are a nutrition planner.

Create a weekly meal plan and shopping list for ONE person based on this profile:

- Goal: {goal}
- Age range: {age_range}
- Gender: {gender}
- Height: {height_cm} cm
- Weight: {weight_kg} kg
- Activity level: {activity_level}
- Target daily calories: {daily_calories} kcal

This is MENU VERSION {version} for this user.
Use the random token "{entropy_token}" to introduce variety so each version is clearly different.

REQUIREMENTS:

1. Produce a plan for EXACTLY 7 days.
2. Each day has:
   - "dayIndex": number 1-7
   - "label": e.g. "Day 1" or weekday name
   - "meals": array of exactly 3 meals in this order: Breakfast, Lunch, Dinner.
     Each meal has:
       {{ "type": "Breakfast|Lunch|Dinner", "name": "string", "description": "string", "calories": number }}
   - "shoppingItems": list of ingredients needed for that day only.
     Each item is:
       {{ "product": "string", "quantity": "string" }}

3. Make meals simple to cook and affordable, but healthy and aligned with the goal.
   Daily meal calories should add up to roughly {daily_calories} kcal.

4. IMPORTANT: Return ONLY valid JSON, with this structure:

{{
  "version": {version},
  "days": [
    {{
      "dayIndex": 1,
      "label": "Day 1",
      "meals": [
        {{"type": "Breakfast", "name": "Oatmeal with berries", "description": "Short description", "calories": 400}},
        {{"type": "Lunch", "name": "Example", "description": "Short description", "calories": 550}},
        {{"type": "Dinner", "name": "Example", "description": "Short description", "calories": 650}}
      ],
      "shoppingItems": [
        {{"product": "Oats", "quantity": "500 g"}},
        {{"product": "Milk", "quantity": "1 L"}}
      ]
    }}
  ]
}}

Do not wrap JSON in markdown fences. Do not add any text before or after the JSON. Do not add extra fields."""


def new_entropy_token() -> str:
    """Fresh random token for every prompt."""
    return secrets.token_hex(ENTROPY_TOKEN_BYTES)


def build_menu_prompt(
    profile: Profile,
    daily_calories: int,
    version: int,
    entropy_token: str,
) -> str:
    ctx = profile.to_ai_context()
    return MENU_PROMPT_TEMPLATE.format(
        goal=ctx["goal"],
        age_range=ctx["age_range"],
        gender=ctx["gender"],
        height_cm=ctx["height_cm"],
        weight_kg=ctx["weight_kg"],
        activity_level=ctx["activity_level"],
        daily_calories=daily_calories,
        version=version,
        entropy_token=entropy_token,
    )
