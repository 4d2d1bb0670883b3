"""Nutrition rules."""

from nutrition_planner.rules.calories import CalorieModel

__all__ = ["CalorieModel"]
