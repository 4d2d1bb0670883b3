"""User and menu store interface."""

from abc import ABC, abstractmethod

from nutrition_planner.models import Menu, UserRecord


def user_key(email: str) -> str:
    """Emails identify users case-insensitively in every store."""
    return email.strip().lower()


class MenuStore(ABC):
    """Users keyed by email plus an append-only menu history per user."""

    @abstractmethod
    def find_user(self, email: str) -> UserRecord | None:
        ...

    @abstractmethod
    def save_user(self, user: UserRecord) -> None:
        """Insert or replace the user with the same email."""
        ...

    @abstractmethod
    def save_menu(self, menu: Menu) -> None:
        """Append a menu to its owner's history."""
        ...

    @abstractmethod
    def list_menus(self, email: str) -> list[Menu]:
        """All menus for a user in insertion order. Empty for unknown users."""
        ...

    def list_menu_versions(self, email: str) -> list[int]:
        return [m.version for m in self.list_menus(email)]
