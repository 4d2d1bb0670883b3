"""Profile service - registration, profile updates and menu history."""

import logging
from typing import Any

from nutrition_planner.errors import UserExistsError, UserNotFoundError
from nutrition_planner.models import Profile, UserRecord
from nutrition_planner.persistence import MenuStore

logger = logging.getLogger(__name__)


class ProfileService:
    """Handles user CRUD around the menu pipeline."""

    def __init__(self, store: MenuStore) -> None:
        self._store = store

    def register(self, email: str) -> UserRecord:
        if self._store.find_user(email):
            raise UserExistsError(email)
        user = UserRecord(email=email)
        self._store.save_user(user)
        logger.info("Registered %s", email)
        return user

    def get_user(self, email: str) -> UserRecord:
        user = self._store.find_user(email)
        if user is None:
            raise UserNotFoundError(email)
        return user

    def update_profile(self, email: str, data: Any) -> UserRecord:
        """Replace the stored profile. All fields are required."""
        user = self.get_user(email)
        updated = user.model_copy(update={"profile": Profile.from_request(data)})
        self._store.save_user(updated)
        return updated

    def menu_history(self, email: str) -> list[dict[str, Any]]:
        """Client views of all menus, newest version first."""
        self.get_user(email)
        menus = sorted(self._store.list_menus(email), key=lambda m: m.version, reverse=True)
        return [m.client_view() for m in menus]
