"""Persistence layer."""

from nutrition_planner.persistence.base import MenuStore
from nutrition_planner.persistence.factory import create_store
from nutrition_planner.persistence.json_store import JsonMenuStore
from nutrition_planner.persistence.redis_store import RedisMenuStore

__all__ = [
    "JsonMenuStore",
    "MenuStore",
    "RedisMenuStore",
    "create_store",
]
