"""Next menu version per user."""

from nutrition_planner.persistence import MenuStore


class VersionSequencer:
    """Reads stored versions; never writes. Callers serialize read-to-save per user."""

    def __init__(self, store: MenuStore) -> None:
        self._store = store

    def next_version(self, email: str) -> int:
        return max(self._store.list_menu_versions(email), default=0) + 1
