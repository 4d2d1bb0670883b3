"""Redis-backed store for cloud deployment. Use when REDIS_URL is set."""

import json
import logging

import redis

from nutrition_planner.models import Menu, UserRecord
from nutrition_planner.persistence.base import MenuStore, user_key

logger = logging.getLogger(__name__)

KEY_PREFIX = "nutrition_planner"


class RedisMenuStore(MenuStore):
    """One string key per user, one list of JSON menus per user."""

    def __init__(self, redis_url: str, *, client: redis.Redis | None = None) -> None:
        self._redis_url = redis_url
        self._client = client

    def _get_client(self) -> redis.Redis:
        """Lazy-init Redis client."""
        if self._client is None:
            self._client = redis.from_url(
                self._redis_url,
                decode_responses=True,
            )
        return self._client

    def _user_key(self, email: str) -> str:
        return f"{KEY_PREFIX}:user:{user_key(email)}"

    def _menus_key(self, email: str) -> str:
        return f"{KEY_PREFIX}:menus:{user_key(email)}"

    def find_user(self, email: str) -> UserRecord | None:
        data = self._get_client().get(self._user_key(email))
        if not data:
            return None
        return UserRecord.model_validate(json.loads(data))

    def save_user(self, user: UserRecord) -> None:
        try:
            self._get_client().set(
                self._user_key(user.email),
                json.dumps(user.model_dump(mode="json", by_alias=True)),
            )
        except redis.RedisError as e:
            logger.error("Redis user save failed: %s", e)
            raise

    def save_menu(self, menu: Menu) -> None:
        try:
            self._get_client().rpush(
                self._menus_key(menu.email),
                json.dumps(menu.model_dump(mode="json", by_alias=True, exclude_none=True)),
            )
        except redis.RedisError as e:
            logger.error("Redis menu save failed: %s", e)
            raise

    def list_menus(self, email: str) -> list[Menu]:
        raw = self._get_client().lrange(self._menus_key(email), 0, -1)
        return [Menu.model_validate(json.loads(m)) for m in raw]
