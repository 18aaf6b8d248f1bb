"""Unit resource client.

Endpoints (/api/content/units):
- GET    ?subjectId=   {units, pagination} or a bare array
- GET    /{id}         {unit} or the bare unit
- POST                 {unit} or the bare unit
- PUT    /{id}         {unit} or the bare unit
- DELETE /{id}
"""

from __future__ import annotations

from typing import Any

from academy.api.errors import ResponseFormatError
from academy.api.resources.base import ResourceClient, pagination_from_pages
from academy.models.common import Page, Pagination
from academy.models.content import Unit, UnitCreate, UnitUpdate


def normalize_unit(raw: Any) -> Unit:
    if not isinstance(raw, dict) or not raw:
        raise ResponseFormatError("Invalid unit data received from backend")
    data = {key: value for key, value in raw.items() if value is not None}
    return Unit.model_validate(data)


def _unwrap_unit_list(body: Any) -> tuple[list[Any], Pagination | None]:
    if isinstance(body, list):
        return body, None
    if isinstance(body, dict):
        return body.get("units") or [], pagination_from_pages(body.get("pagination"))
    return [], None


def _unwrap_unit(body: Any) -> Unit:
    if isinstance(body, dict) and isinstance(body.get("unit"), dict):
        return normalize_unit(body["unit"])
    return normalize_unit(body)


class UnitClient(ResourceClient):
    """CRUD for units."""

    resource = "units"
    base_path = "/api/content/units"

    async def list(self, subject_id: str | None = None) -> Page[Unit]:
        """List units, optionally restricted to one subject."""
        params = {"subjectId": subject_id} if subject_id else None
        body = await self.api.get(self._path(), resource=self.resource, params=params)
        raw_units, pagination = _unwrap_unit_list(body)
        return Page[Unit](
            items=[normalize_unit(raw) for raw in raw_units],
            pagination=pagination,
        )

    async def get(self, unit_id: str) -> Unit:
        body = await self.api.get(self._path(unit_id), resource=self.resource)
        return _unwrap_unit(body)

    async def create(self, payload: UnitCreate) -> Unit:
        # order is always sent; the backend needs it for new units
        body_json = payload.to_payload()
        body_json.setdefault("order", payload.order)
        body = await self.api.post(self._path(), resource=self.resource, json=body_json)
        return _unwrap_unit(body)

    async def update(self, unit_id: str, payload: UnitUpdate) -> Unit:
        body = await self.api.put(
            self._path(unit_id), resource=self.resource, json=payload.to_payload()
        )
        return _unwrap_unit(body)

    async def delete(self, unit_id: str) -> None:
        await self.api.delete(self._path(unit_id), resource=self.resource)
