"""Activation code models."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from academy.models.common import ApiModel, Filters
from academy.utils.formatting import usage_percentage

ContentType = Literal["lesson", "subject", "unit"]


class ActivationCode(ApiModel):
    id: str
    code: str
    name: str | None = None
    description: str | None = None
    content_type: ContentType = "lesson"
    subject_id: str | None = None
    unit_id: str | None = None
    lesson_id: str | None = None
    max_uses: int = 1
    current_uses: int = 0
    valid_from: datetime
    expires_at: datetime
    created_by: str | None = None
    is_active: bool = True
    allow_multiple_uses: bool = False
    restrict_to_academic_year: bool = False
    academic_year_id: str | None = None
    student_year_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def usage_percentage(self) -> float:
        """Share of uses consumed, 0-100. Zero when ``max_uses`` is 0."""
        return usage_percentage(self.current_uses, self.max_uses)


class CodeGenerateRequest(ApiModel):
    lesson_id: str
    subject_id: str | None = None
    unit_id: str | None = None
    name: str | None = None
    description: str | None = None
    max_uses: int | None = None
    valid_from: str | None = None
    expires_at: str | None = None
    allow_multiple_uses: bool | None = None
    restrict_to_academic_year: bool | None = None
    academic_year_id: str | None = None
    student_year_id: str | None = None


class CodeUpdate(ApiModel):
    name: str | None = None
    description: str | None = None
    max_uses: int | None = None
    expires_at: str | None = None
    is_active: bool | None = None


class CodeActivation(ApiModel):
    """Response of POST /api/codes/activate."""

    message: str = ""
    access: dict = Field(default_factory=dict)
    access_granted: dict = Field(default_factory=dict)


class CodeUsage(ApiModel):
    id: str
    student_id: str
    used_at: str
    student_email: str = ""
    student_name: str = ""
    ip_address: str | None = None


class CodeDetails(ApiModel):
    code: ActivationCode
    usage_history: list[CodeUsage] = Field(default_factory=list)


class CodeStats(ApiModel):
    total_codes: int = 0
    active_codes: int = 0
    used_codes: int = 0
    unused_codes: int = 0
    codes_by_type: list[dict] = Field(default_factory=list)


class CodeFilters(Filters):
    page: int | None = None
    limit: int | None = None
    is_active: bool | None = None
    content_type: ContentType | None = None
    search: str | None = None
    created_by: str | None = None


class CodeValidationResult(BaseModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)


class CodeStatus(BaseModel):
    label: str
    color: str
