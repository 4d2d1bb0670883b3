"""Store factory - creates file or Redis store based on config."""

from pathlib import Path

from nutrition_planner.config import get_settings
from nutrition_planner.persistence.base import MenuStore
from nutrition_planner.persistence.json_store import JsonMenuStore
from nutrition_planner.persistence.redis_store import RedisMenuStore


def create_store() -> MenuStore:
    """
    Uses Redis when REDIS_URL is set; otherwise a JSON file under DATA_DIR.
    """
    settings = get_settings()
    if settings.redis_url:
        return RedisMenuStore(settings.redis_url)
    return JsonMenuStore(Path(settings.data_dir))
