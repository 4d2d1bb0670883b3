"""JSON file store - one document holding users and menus."""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from nutrition_planner.models import Menu, UserRecord
from nutrition_planner.persistence.base import MenuStore, user_key

logger = logging.getLogger(__name__)

DB_FILENAME = "db.json"


class JsonMenuStore(MenuStore):
    """File-based store. The whole document is rewritten on every save."""

    def __init__(self, data_dir: Path) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._path = self._data_dir / DB_FILENAME

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, list[dict[str, Any]]]:
        if not self._path.exists():
            initial: dict[str, list[dict[str, Any]]] = {"users": [], "menus": []}
            self._write(initial)
            return initial
        with self._path.open(encoding="utf-8") as f:
            data = json.load(f)
        data.setdefault("users", [])
        data.setdefault("menus", [])
        return data

    def _write(self, data: dict[str, Any]) -> None:
        """Write via temp file + rename so readers never see a partial document."""
        fd, tmp = tempfile.mkstemp(dir=self._data_dir, prefix=".db-", suffix=".json")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self._path)
        except OSError as e:
            logger.error("Could not save %s: %s", self._path, e)
            Path(tmp).unlink(missing_ok=True)
            raise

    def find_user(self, email: str) -> UserRecord | None:
        for raw in self._read()["users"]:
            if _owned_by(raw, email):
                return UserRecord.model_validate(raw)
        return None

    def save_user(self, user: UserRecord) -> None:
        data = self._read()
        record = user.model_dump(mode="json", by_alias=True)
        users = data["users"]
        for i, raw in enumerate(users):
            if _owned_by(raw, user.email):
                users[i] = record
                break
        else:
            users.append(record)
        self._write(data)

    def save_menu(self, menu: Menu) -> None:
        data = self._read()
        data["menus"].append(menu.model_dump(mode="json", by_alias=True, exclude_none=True))
        self._write(data)

    def list_menus(self, email: str) -> list[Menu]:
        menus: list[Menu] = []
        for raw in self._read()["menus"]:
            if not _owned_by(raw, email):
                continue
            try:
                menus.append(Menu.model_validate(raw))
            except PydanticValidationError as e:
                logger.warning("Skipping unreadable menu for %s: %s", email, e)
        return menus

    def list_menu_versions(self, email: str) -> list[int]:
        # Only the version field is needed; tolerate records that no longer validate.
        return [
            raw["version"]
            for raw in self._read()["menus"]
            if _owned_by(raw, email) and _is_version(raw.get("version"))
        ]


def _owned_by(raw: dict[str, Any], email: str) -> bool:
    owner = raw.get("email")
    return isinstance(owner, str) and user_key(owner) == user_key(email)


def _is_version(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
