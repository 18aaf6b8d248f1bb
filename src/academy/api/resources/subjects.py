"""Subject resource client.

Endpoints (/api/content/subjects):
- GET    ?status=&search=...   {subjects, pagination}
- GET    /{id}                 bare subject
- POST                         {message, subject}
- PUT    /{id}                 {message, subject} or the bare subject
- PATCH  /{id}/status          {subject} or the bare subject
- DELETE /{id}
"""

from __future__ import annotations

from typing import Any

from academy.api.errors import ResponseFormatError
from academy.api.resources.base import ResourceClient, require_dict
from academy.models.common import Page
from academy.models.content import (
    ContentStatus,
    Subject,
    SubjectCreate,
    SubjectFilters,
    SubjectUpdate,
)


def subject_payload(model: SubjectCreate | SubjectUpdate) -> dict[str, Any]:
    """Serialize a subject body, trimming strings and dropping blank values."""
    payload: dict[str, Any] = {}
    for key, value in model.to_payload().items():
        if isinstance(value, str):
            value = value.strip()
        if value is None or value == "":
            continue
        payload[key] = value
    return payload


def normalize_subject(raw: Any) -> Subject:
    if not isinstance(raw, dict) or not raw:
        raise ResponseFormatError("Invalid subject data received from backend")
    data = {key: value for key, value in raw.items() if value is not None}
    # Subjects without a status are drafts
    data.setdefault("status", "draft")
    return Subject.model_validate(data)


def _unwrap_subject_list(body: Any) -> list[Any]:
    data = require_dict(body, "subjects list")
    return data.get("subjects") or []


def _unwrap_subject_write(body: Any) -> Subject:
    data = require_dict(body, "subject")
    return normalize_subject(data.get("subject") or data)


class SubjectClient(ResourceClient):
    resource = "subjects"
    base_path = "/api/content/subjects"

    async def list(self, filters: SubjectFilters | None = None) -> Page[Subject]:
        params = (filters or SubjectFilters()).to_params()
        body = await self.api.get(self._path(), resource=self.resource, params=params)
        return Page[Subject](
            items=[normalize_subject(raw) for raw in _unwrap_subject_list(body)]
        )

    async def get(self, subject_id: str) -> Subject:
        body = await self.api.get(self._path(subject_id), resource=self.resource)
        return normalize_subject(body)

    async def create(self, payload: SubjectCreate) -> Subject:
        body = await self.api.post(
            self._path(), resource=self.resource, json=subject_payload(payload)
        )
        return _unwrap_subject_write(body)

    async def update(self, subject_id: str, payload: SubjectUpdate) -> Subject:
        body = await self.api.put(
            self._path(subject_id), resource=self.resource, json=subject_payload(payload)
        )
        return _unwrap_subject_write(body)

    async def update_status(self, subject_id: str, status: ContentStatus) -> Subject:
        body = await self.api.patch(
            self._path(subject_id, "status"),
            resource=self.resource,
            json={"status": status},
        )
        return _unwrap_subject_write(body)

    async def delete(self, subject_id: str) -> None:
        await self.api.delete(self._path(subject_id), resource=self.resource)
