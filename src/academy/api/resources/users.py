"""User resource client.

Endpoints (/api/users):
- GET    ?page=&role=...      {users, pagination{current, total, totalItems}}
- GET    /{id}                bare user
- POST                        bare user
- PUT    /{id}                bare user
- PATCH  /{id}/toggle-status  bare user
- DELETE /{id}
- GET    /stats/overview
"""

from __future__ import annotations

from typing import Any

from academy.api.resources.base import ResourceClient, require_dict
from academy.models.common import Page, Pagination
from academy.models.user import (
    User,
    UserCreate,
    UserFilters,
    UsersStatsOverview,
    UserUpdate,
)


def _users_pagination(raw: Any, limit: int | None) -> Pagination | None:
    # This endpoint names the current page "current" and the page count "total"
    if not isinstance(raw, dict):
        return None
    return Pagination(
        page=raw.get("current") or 1,
        total_pages=raw.get("total") or 1,
        total_items=raw.get("totalItems") or 0,
        limit=limit,
    )


def _unwrap_user_list(body: Any, limit: int | None) -> Page[User]:
    data = require_dict(body, "users list")
    return Page[User](
        items=[User.model_validate(raw) for raw in data.get("users") or []],
        pagination=_users_pagination(data.get("pagination"), limit),
    )


class UserClient(ResourceClient):
    """Admin management of platform users."""

    resource = "users"
    base_path = "/api/users"

    async def list(self, filters: UserFilters | None = None) -> Page[User]:
        filters = filters or UserFilters()
        body = await self.api.get(
            self._path(), resource=self.resource, params=filters.to_params()
        )
        return _unwrap_user_list(body, filters.limit)

    async def _list_role(
        self,
        role: str,
        search: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[User]:
        return await self.list(UserFilters(role=role, search=search, page=page, limit=limit))

    async def list_teachers(self, **kwargs: Any) -> Page[User]:
        return await self._list_role("teacher", **kwargs)

    async def list_students(self, **kwargs: Any) -> Page[User]:
        return await self._list_role("student", **kwargs)

    async def list_support(self, **kwargs: Any) -> Page[User]:
        return await self._list_role("support", **kwargs)

    async def get(self, user_id: str) -> User:
        body = await self.api.get(self._path(user_id), resource=self.resource)
        return User.model_validate(require_dict(body, "user"))

    async def create(self, payload: UserCreate) -> User:
        body = await self.api.post(
            self._path(), resource=self.resource, json=payload.to_payload()
        )
        return User.model_validate(require_dict(body, "user"))

    async def update(self, user_id: str, payload: UserUpdate) -> User:
        body = await self.api.put(
            self._path(user_id), resource=self.resource, json=payload.to_payload()
        )
        return User.model_validate(require_dict(body, "user"))

    async def toggle_status(self, user_id: str) -> User:
        body = await self.api.patch(
            self._path(user_id, "toggle-status"), resource=self.resource, json={}
        )
        return User.model_validate(require_dict(body, "user"))

    async def delete(self, user_id: str) -> None:
        await self.api.delete(self._path(user_id), resource=self.resource)

    async def stats_overview(self) -> UsersStatsOverview:
        body = await self.api.get(
            self._path("stats", "overview"), resource=self.resource
        )
        return UsersStatsOverview.model_validate(require_dict(body, "users stats"))
