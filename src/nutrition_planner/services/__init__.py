"""Business logic services."""

from nutrition_planner.services.menu_pipeline import MenuGenerationPipeline
from nutrition_planner.services.profile_service import ProfileService

__all__ = ["MenuGenerationPipeline", "ProfileService"]
