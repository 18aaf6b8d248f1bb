"""Academic year resource client (read only).

Endpoints (/api/academic/academic-years):
- GET                       bare array, or {academicYears, pagination}
- GET /active               bare array, or {academicYears}
- GET /current              {academicYear} or the bare year
- GET /{id}/student-years   bare array, or {studentYears}
"""

from __future__ import annotations

from typing import Any

from academy.api.errors import ResponseFormatError
from academy.api.resources.base import ResourceClient
from academy.models.academic_year import AcademicYear, StudentYear


def _unwrap_years(body: Any) -> list[Any]:
    # Pagination, when present, is discarded
    if isinstance(body, list):
        return body
    if isinstance(body, dict) and isinstance(body.get("academicYears"), list):
        return body["academicYears"]
    raise ResponseFormatError("Unexpected academic years response")


def _unwrap_current_year(body: Any) -> dict[str, Any]:
    if isinstance(body, dict) and isinstance(body.get("academicYear"), dict):
        return body["academicYear"]
    if isinstance(body, dict):
        return body
    raise ResponseFormatError("Unexpected current academic year response")


def _unwrap_student_years(body: Any) -> list[Any]:
    if isinstance(body, list):
        return body
    if isinstance(body, dict) and isinstance(body.get("studentYears"), list):
        return body["studentYears"]
    raise ResponseFormatError("Unexpected student years response")


class AcademicYearClient(ResourceClient):
    resource = "academic-years"
    base_path = "/api/academic/academic-years"

    async def get_all(self) -> list[AcademicYear]:
        body = await self.api.get(self._path(), resource=self.resource)
        return [AcademicYear.model_validate(raw) for raw in _unwrap_years(body)]

    async def get_active(self) -> list[AcademicYear]:
        body = await self.api.get(self._path("active"), resource=self.resource)
        return [AcademicYear.model_validate(raw) for raw in _unwrap_years(body)]

    async def get_current(self) -> AcademicYear:
        body = await self.api.get(self._path("current"), resource=self.resource)
        return AcademicYear.model_validate(_unwrap_current_year(body))

    async def student_years(self, academic_year_id: str) -> list[StudentYear]:
        body = await self.api.get(
            self._path(academic_year_id, "student-years"), resource=self.resource
        )
        return [StudentYear.model_validate(raw) for raw in _unwrap_student_years(body)]
