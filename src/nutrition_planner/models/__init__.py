"""Data models."""

from nutrition_planner.models.menu import Day, EmailStatus, Meal, MealType, Menu, ShoppingItem
from nutrition_planner.models.profile import ActivityLevel, Gender, Goal, Profile
from nutrition_planner.models.user import UserRecord

__all__ = [
    "ActivityLevel",
    "Day",
    "EmailStatus",
    "Gender",
    "Goal",
    "Meal",
    "MealType",
    "Menu",
    "Profile",
    "ShoppingItem",
    "UserRecord",
]
