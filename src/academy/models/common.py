"""Shared pydantic building blocks for resource models.

Wire payloads use camelCase keys; Python attributes are snake_case.
Every model accepts both spellings on input.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ApiModel(BaseModel):
    """Base for every model exchanged with the backend."""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "extra": "ignore",
    }

    def to_payload(self) -> dict[str, Any]:
        """Serialize for an outgoing request body.

        Only fields that were explicitly set are included, so a partial
        update never overwrites server values it did not mention.
        """
        return self.model_dump(by_alias=True, exclude_unset=True, mode="json")


class Pagination(BaseModel):
    """Normalized pagination metadata.

    Each endpoint reports pagination with its own key names; the
    resource clients translate them into this shape.
    """

    page: int = 1
    total_pages: int = 1
    total_items: int = 0
    limit: int | None = None


class Page(BaseModel, Generic[T]):
    """A list result plus its pagination metadata."""

    items: list[T]
    pagination: Pagination | None = None

    def __len__(self) -> int:
        return len(self.items)


class Filters(ApiModel):
    """Base for list filters.

    Subclasses declare optional fields only. ``to_params`` drops anything
    that was not provided, so no empty or null placeholders reach the
    query string.
    """

    def to_params(self) -> dict[str, str]:
        """Build query parameters from the provided filter values."""
        params: dict[str, str] = {}
        for key, value in self.model_dump(by_alias=True, exclude_none=True).items():
            if isinstance(value, str) and value.strip() == "":
                continue
            if isinstance(value, bool):
                params[key] = "true" if value else "false"
            else:
                params[key] = str(value)
        return params
