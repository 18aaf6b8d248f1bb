"""Durable credential storage.

The token store is the client's only persistent state: a small JSON file
holding the bearer token under ``authToken`` and the signed-in user under
``currentUser``. Every read goes back to the file so separate processes
(CLI invocations, the proxy) see the same session.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import structlog
from pydantic import ValidationError

from academy.models.user import User

logger = structlog.get_logger(__name__)

TOKEN_KEY = "authToken"
USER_KEY = "currentUser"


class TokenStore:
    """Key-value credential store backed by a JSON file."""

    def __init__(self, path: Path | str):
        self.path = Path(path)

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("token_store_corrupt", path=str(self.path), error=str(e))
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def get(self, key: str) -> Any:
        return self._read().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        """Delete one key; missing keys are ignored."""
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    # =========================================================================
    # TOKEN
    # =========================================================================

    def get_token(self) -> str | None:
        token = self.get(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def set_token(self, token: str) -> None:
        self.set(TOKEN_KEY, token)

    def remove_token(self) -> None:
        self.remove(TOKEN_KEY)

    # =========================================================================
    # CURRENT USER
    # =========================================================================

    def get_user(self) -> User | None:
        """Stored user, or None. An unreadable entry is dropped."""
        raw = self.get(USER_KEY)
        if raw is None:
            return None
        try:
            return User.model_validate(raw)
        except ValidationError as e:
            logger.warning("stored_user_invalid", error=str(e))
            self.remove(USER_KEY)
            return None

    def set_user(self, user: User) -> None:
        self.set(USER_KEY, user.model_dump(by_alias=True, mode="json"))

    def remove_user(self) -> None:
        self.remove(USER_KEY)

    def clear(self) -> None:
        """Forget the session (token and user)."""
        data = self._read()
        data.pop(TOKEN_KEY, None)
        data.pop(USER_KEY, None)
        self._write(data)

    def is_authenticated(self) -> bool:
        return self.get_token() is not None
