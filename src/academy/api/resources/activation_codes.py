"""Activation code client and code-format helpers.

Codes look like ``LMS-XXXXXXXX-XXXXXXXX``.

Endpoints (/api/codes):
- POST   /generate            {message, activationCode, contentItem}
- POST   /generate-multiple   {activationCodes: [...]}
- POST   /activate            {message, access, accessGranted}
- GET    ?page=...            {codes, pagination{page, limit, total, totalItems}}
- GET    /stats/overview      bare stats
- GET    /{id}                {code, usageHistory}
- PATCH  /{id}                bare code
- DELETE /{id}
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Any

from academy.api.resources.base import ResourceClient, require_dict
from academy.models.activation_code import (
    ActivationCode,
    CodeActivation,
    CodeDetails,
    CodeFilters,
    CodeGenerateRequest,
    CodeStats,
    CodeStatus,
    CodeUpdate,
    CodeValidationResult,
)
from academy.models.common import Page, Pagination

CODE_PREFIX = "LMS"
CODE_PART_MIN = 6
CODE_PART_MAX = 10
CODE_PART_FORMAT = 8


def validate_code_format(code: str | None) -> CodeValidationResult:
    """Check the structure of a code before sending it to the backend."""
    if not code or not code.strip():
        return CodeValidationResult(is_valid=False, errors=["Enter an activation code"])

    normalized = code.strip().upper()
    errors: list[str] = []
    suggestions: list[str] = []

    if not normalized.startswith(f"{CODE_PREFIX}-"):
        errors.append(f"Code must start with {CODE_PREFIX}-")

    parts = normalized.split("-")
    if len(parts) != 3:
        errors.append("Code must have three dash-separated parts")
        suggestions.append(f"Expected format: {CODE_PREFIX}-XXXXXXXX-XXXXXXXX")
    else:
        if parts[0] != CODE_PREFIX:
            errors.append(f"First part must be {CODE_PREFIX}")
        for label, part in (("Second", parts[1]), ("Third", parts[2])):
            if not CODE_PART_MIN <= len(part) <= CODE_PART_MAX:
                errors.append(
                    f"{label} part must be {CODE_PART_MIN}-{CODE_PART_MAX} characters"
                )

    return CodeValidationResult(
        is_valid=not errors, errors=errors, suggestions=suggestions
    )


def format_code_input(value: str | None) -> str:
    """Reformat free text as ``LMS-XXXXXXXX-XXXXXXXX`` while typing."""
    if not value:
        return ""

    cleaned = re.sub(r"[^A-Za-z0-9]", "", value).upper()
    if cleaned and not cleaned.startswith(CODE_PREFIX):
        cleaned = CODE_PREFIX + cleaned

    head = len(CODE_PREFIX)
    mid = head + CODE_PART_FORMAT
    end = mid + CODE_PART_FORMAT
    if len(cleaned) <= head:
        return cleaned
    if len(cleaned) <= mid:
        return f"{cleaned[:head]}-{cleaned[head:]}"
    return f"{cleaned[:head]}-{cleaned[head:mid]}-{cleaned[mid:end]}"


def code_status(code: ActivationCode, now: datetime | None = None) -> CodeStatus:
    """Lifecycle label for a code: disabled, scheduled, expired, exhausted or active."""
    now = now or datetime.now(timezone.utc)

    def aware(value: datetime) -> datetime:
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

    if not code.is_active:
        return CodeStatus(label="Disabled", color="secondary")
    if now < aware(code.valid_from):
        return CodeStatus(label="Scheduled", color="warning")
    if now > aware(code.expires_at):
        return CodeStatus(label="Expired", color="danger")
    if code.current_uses >= code.max_uses:
        return CodeStatus(label="Exhausted", color="danger")
    return CodeStatus(label="Active", color="success")


def _codes_pagination(raw: Any) -> Pagination | None:
    # Here "total" is the page count and "totalItems" the row count
    if not isinstance(raw, dict):
        return None
    return Pagination(
        page=raw.get("page") or 1,
        total_pages=raw.get("total") or 1,
        total_items=raw.get("totalItems") or 0,
        limit=raw.get("limit"),
    )


def _unwrap_code_list(body: Any) -> Page[ActivationCode]:
    data = require_dict(body, "codes list")
    return Page[ActivationCode](
        items=[ActivationCode.model_validate(raw) for raw in data.get("codes") or []],
        pagination=_codes_pagination(data.get("pagination")),
    )


def _unwrap_generated(body: Any) -> ActivationCode:
    data = require_dict(body, "generated code")
    return ActivationCode.model_validate(data.get("activationCode") or data)


def _unwrap_generated_many(body: Any) -> list[ActivationCode]:
    data = require_dict(body, "generated codes")
    return [ActivationCode.model_validate(raw) for raw in data.get("activationCodes") or []]


class ActivationCodeClient(ResourceClient):
    resource = "codes"
    base_path = "/api/codes"

    async def generate(self, request: CodeGenerateRequest) -> ActivationCode:
        body = await self.api.post(
            self._path("generate"), resource=self.resource, json=request.to_payload()
        )
        return _unwrap_generated(body)

    async def generate_multiple(self, lesson_id: str, count: int) -> list[ActivationCode]:
        body = await self.api.post(
            self._path("generate-multiple"),
            resource=self.resource,
            json={"lessonId": lesson_id, "count": count},
        )
        return _unwrap_generated_many(body)

    async def activate(self, code: str) -> CodeActivation:
        body = await self.api.post(
            self._path("activate"),
            resource=self.resource,
            json={"code": code.strip().upper()},
        )
        return CodeActivation.model_validate(require_dict(body, "activation"))

    async def list(self, filters: CodeFilters | None = None) -> Page[ActivationCode]:
        params = (filters or CodeFilters()).to_params()
        body = await self.api.get(self._path(), resource=self.resource, params=params)
        return _unwrap_code_list(body)

    async def stats(self) -> CodeStats:
        body = await self.api.get(self._path("stats", "overview"), resource=self.resource)
        return CodeStats.model_validate(require_dict(body, "code stats"))

    async def details(self, code_id: str) -> CodeDetails:
        body = await self.api.get(self._path(code_id), resource=self.resource)
        return CodeDetails.model_validate(require_dict(body, "code details"))

    async def update(self, code_id: str, payload: CodeUpdate) -> ActivationCode:
        body = await self.api.patch(
            self._path(code_id), resource=self.resource, json=payload.to_payload()
        )
        return ActivationCode.model_validate(require_dict(body, "code"))

    async def delete(self, code_id: str) -> None:
        await self.api.delete(self._path(code_id), resource=self.resource)
