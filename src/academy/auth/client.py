"""Authentication client.

Endpoints (/api/auth):
- POST /login            {token, user}
- POST /register         {token, user}
- POST /logout
- POST /refresh          {token, user}
- GET  /profile          {user} or the bare user
- PUT  /profile          {user} or the bare user
- POST /change-password
"""

from __future__ import annotations

from typing import Any

import structlog

from academy.api.errors import ResponseFormatError
from academy.api.http import ApiClient
from academy.api.resources.base import ResourceClient, require_dict
from academy.auth.token_store import TokenStore
from academy.models.auth import (
    AuthResponse,
    ChangePasswordRequest,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
)
from academy.models.user import User

logger = structlog.get_logger(__name__)


def normalize_user(body: Any) -> User:
    """Accept either ``{user: {...}}`` or the bare user object."""
    data = require_dict(body, "user")
    raw = data.get("user") or data
    if not isinstance(raw, dict) or "id" not in raw:
        raise ResponseFormatError("Invalid user data structure")
    return User.model_validate(raw)


class AuthClient(ResourceClient):
    """Sign-in, sign-out and profile calls; keeps the TokenStore in sync."""

    resource = "auth"
    base_path = "/api/auth"

    def __init__(self, api: ApiClient, store: TokenStore):
        super().__init__(api)
        self.store = store

    def _remember(self, body: Any) -> AuthResponse:
        auth = AuthResponse.model_validate(require_dict(body, "auth response"))
        self.store.set_token(auth.token)
        self.store.set_user(auth.user)
        logger.info("auth_session_stored", user_id=auth.user.id, role=auth.user.role)
        return auth

    async def login(self, email: str, password: str) -> AuthResponse:
        request = LoginRequest(email=email, password=password)
        body = await self.api.post(
            self._path("login"), resource=self.resource, json=request.to_payload()
        )
        return self._remember(body)

    async def register(self, request: RegisterRequest) -> AuthResponse:
        body = await self.api.post(
            self._path("register"), resource=self.resource, json=request.to_payload()
        )
        return self._remember(body)

    async def logout(self) -> None:
        """Tell the backend, then forget the local session either way.

        Raises:
            ApiError: If the backend call failed (local state is already cleared)
        """
        try:
            await self.api.post(self._path("logout"), resource=self.resource, json={})
        finally:
            self.store.clear()
            logger.info("auth_session_cleared")

    async def refresh_token(self) -> AuthResponse:
        body = await self.api.post(self._path("refresh"), resource=self.resource, json={})
        return self._remember(body)

    async def profile(self) -> User:
        body = await self.api.get(self._path("profile"), resource=self.resource)
        user = normalize_user(body)
        self.store.set_user(user)
        return user

    async def update_profile(self, update: ProfileUpdate) -> User:
        body = await self.api.put(
            self._path("profile"), resource=self.resource, json=update.to_payload()
        )
        user = normalize_user(body)
        self.store.set_user(user)
        return user

    async def change_password(self, current_password: str, new_password: str) -> None:
        request = ChangePasswordRequest(
            current_password=current_password, new_password=new_password
        )
        await self.api.post(
            self._path("change-password"),
            resource=self.resource,
            json=request.to_payload(),
        )

    def current_user(self) -> User | None:
        return self.store.get_user()

    def is_authenticated(self) -> bool:
        return self.store.is_authenticated()
