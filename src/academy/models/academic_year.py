"""Academic year models.

An AcademicYear groups several StudentYears (grade levels). The backend
guarantees that at most one year carries ``is_current``.
"""

from __future__ import annotations

from pydantic import Field

from academy.models.common import ApiModel


class StudentYear(ApiModel):
    id: str
    name: str
    display_name: str = ""
    academic_year_id: str
    grade_level: int = 0
    is_active: bool = True
    order: int = 0


class AcademicYear(ApiModel):
    id: str
    name: str
    display_name: str = ""
    start_date: str | None = None
    end_date: str | None = None
    is_active: bool = True
    is_current: bool = False
    order: int = 0
    student_years: list[StudentYear] = Field(default_factory=list)
