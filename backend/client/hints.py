"""
Hint stores.

A hint store persists the last authenticated user and the bearer
token between runs, like browser local storage does for a web client.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class HintStore(Protocol):
    def get_token(self) -> Optional[str]:
        ...

    def set_token(self, token: Optional[str]) -> None:
        ...

    def get_user(self) -> Optional[dict[str, Any]]:
        ...

    def set_user(self, user: Optional[dict[str, Any]]) -> None:
        ...

    def clear(self) -> None:
        ...


class MemoryHintStore(HintStore):
    """Hints kept for the lifetime of the process."""

    def __init__(self, token: Optional[str] = None):
        self._token = token
        self._user: Optional[dict[str, Any]] = None

    def get_token(self) -> Optional[str]:
        return self._token

    def set_token(self, token: Optional[str]) -> None:
        self._token = token

    def get_user(self) -> Optional[dict[str, Any]]:
        return self._user

    def set_user(self, user: Optional[dict[str, Any]]) -> None:
        self._user = user

    def clear(self) -> None:
        self._token = None
        self._user = None


class FileHintStore(HintStore):
    """
    Hints kept in a small JSON file.

    An unreadable or corrupt file is treated as empty.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable hint file {self._path}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def _save(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def _set(self, key: str, value: Any) -> None:
        data = self._load()
        if value is None:
            data.pop(key, None)
        else:
            data[key] = value
        self._save(data)

    def get_token(self) -> Optional[str]:
        return self._load().get("token")

    def set_token(self, token: Optional[str]) -> None:
        self._set("token", token)

    def get_user(self) -> Optional[dict[str, Any]]:
        return self._load().get("user")

    def set_user(self, user: Optional[dict[str, Any]]) -> None:
        self._set("user", user)

    def clear(self) -> None:
        if self._path.exists():
            self._path.unlink()
