"""Common plumbing for resource clients.

Envelope unwrapping is not shared here: each client owns
explicit unwrap functions for the exact shapes its endpoints return.
This module only holds path building and the pagination shape
translators that several endpoints happen to share.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import quote

from academy.api.errors import ResponseFormatError
from academy.api.http import ApiClient
from academy.models.common import Pagination


class ResourceClient:
    """Base class holding the transport and the resource's path prefix."""

    resource: str = ""
    base_path: str = ""

    def __init__(self, api: ApiClient):
        self.api = api

    def _path(self, *parts: Any) -> str:
        """Join path segments under ``base_path``, escaping each one."""
        segments = [quote(str(part), safe="") for part in parts]
        return "/".join([self.base_path, *segments]) if segments else self.base_path


def require_dict(body: Any, what: str) -> dict[str, Any]:
    """Ensure a response body is a JSON object."""
    if not isinstance(body, dict):
        raise ResponseFormatError(f"Expected {what} object, got {type(body).__name__}")
    return body


def pagination_from_pages(raw: Any) -> Pagination | None:
    """Translate ``{total, pages, currentPage, limit}`` metadata.

    Used by the content and payments endpoints.
    """
    if not isinstance(raw, dict):
        return None
    return Pagination(
        page=raw.get("currentPage") or 1,
        total_pages=raw.get("pages") or 1,
        total_items=raw.get("total") or 0,
        limit=raw.get("limit"),
    )
