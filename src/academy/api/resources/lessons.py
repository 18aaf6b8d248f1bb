"""Lesson resource client.

Endpoints (/api/content/lessons):
- GET    ?lectureId=&page=...   {lessons, pagination} or a bare array
- GET    /{id}                   {lesson, videos, quizzes, assignments}
- POST                           {message, lesson}
- PUT    /{id}                   {message, lesson} or the bare lesson
- DELETE /{id}
"""

from __future__ import annotations

from typing import Any

import structlog

from academy.api.errors import ResponseFormatError
from academy.api.resources.base import (
    ResourceClient,
    pagination_from_pages,
    require_dict,
)
from academy.models.common import Page, Pagination
from academy.models.content import (
    LIVE_LESSON_TYPE,
    Lesson,
    LessonCreate,
    LessonDetail,
    LessonFilters,
    LessonUpdate,
)

logger = structlog.get_logger(__name__)

# Wire names of the live-session fields
LIVE_WIRE_FIELDS = ("zoomUrl", "zoomMeetingId", "zoomPasscode", "scheduledAt")

# Placeholder values the backend stores instead of null
ZOOM_PLACEHOLDERS = {"null", "http://null.com"}
SCHEDULE_PLACEHOLDERS = {"2000-01-01T00:00:00.000Z", "00"}


def clean_zoom_field(value: Any) -> str | None:
    """Map empty and placeholder zoom values to None."""
    if not value or value in ZOOM_PLACEHOLDERS:
        return None
    return str(value)


def clean_scheduled_at(value: Any) -> str | None:
    """Map empty and placeholder schedule timestamps to None."""
    if not value or value in SCHEDULE_PLACEHOLDERS:
        return None
    return str(value)


def normalize_lesson(raw: Any) -> Lesson:
    """Build a Lesson from a raw backend record.

    Null values fall back to model defaults; placeholder live-session
    values become None.

    Raises:
        ResponseFormatError: If ``raw`` is not a lesson object
    """
    if not isinstance(raw, dict) or not raw:
        raise ResponseFormatError("Invalid lesson data received from backend")

    data = {key: value for key, value in raw.items() if value is not None}
    for key in ("zoomUrl", "zoomMeetingId", "zoomPasscode"):
        data[key] = clean_zoom_field(raw.get(key))
    data["scheduledAt"] = clean_scheduled_at(raw.get("scheduledAt"))
    return Lesson.model_validate(data)


def lesson_payload(model: LessonCreate | LessonUpdate) -> dict[str, Any]:
    """Serialize a create/update body.

    Only explicitly set fields are sent. Live-session fields are dropped
    when the payload sets a lesson type that is not a live one.
    """
    payload = model.to_payload()
    lesson_type = payload.get("lessonType")
    if lesson_type is not None and lesson_type != LIVE_LESSON_TYPE:
        for key in LIVE_WIRE_FIELDS:
            payload.pop(key, None)
    return payload


def _unwrap_lesson_list(body: Any) -> tuple[list[Any], Pagination | None]:
    if isinstance(body, list):
        return body, None
    if isinstance(body, dict) and isinstance(body.get("lessons"), list):
        return body["lessons"], pagination_from_pages(body.get("pagination"))
    return [], None


def _unwrap_lesson_detail(body: Any) -> LessonDetail:
    data = require_dict(body, "lesson detail")
    return LessonDetail(
        lesson=normalize_lesson(data.get("lesson")),
        videos=data.get("videos") or [],
        quizzes=data.get("quizzes") or [],
        assignments=data.get("assignments") or [],
    )


def _unwrap_lesson_write(body: Any) -> Lesson:
    data = require_dict(body, "lesson")
    return normalize_lesson(data.get("lesson") or data)


class LessonClient(ResourceClient):
    """CRUD for lessons."""

    resource = "lessons"
    base_path = "/api/content/lessons"

    async def list(self, filters: LessonFilters | None = None) -> Page[Lesson]:
        """List lessons matching ``filters``."""
        params = (filters or LessonFilters()).to_params()
        body = await self.api.get(self._path(), resource=self.resource, params=params)
        raw_lessons, pagination = _unwrap_lesson_list(body)
        return Page[Lesson](
            items=[normalize_lesson(raw) for raw in raw_lessons],
            pagination=pagination,
        )

    async def list_by_lecture(self, lecture_id: str) -> list[Lesson]:
        """Lessons of one lecture, in their display order."""
        page = await self.list(LessonFilters(lecture_id=lecture_id))
        logger.debug("lessons_listed", lecture_id=lecture_id, count=len(page))
        return sorted(page.items, key=lambda lesson: lesson.order)

    async def get(self, lesson_id: str) -> LessonDetail:
        """Get one lesson with its attached media.

        Raises:
            NotFoundError: If the lesson does not exist
        """
        body = await self.api.get(self._path(lesson_id), resource=self.resource)
        return _unwrap_lesson_detail(body)

    async def create(self, payload: LessonCreate) -> Lesson:
        body = await self.api.post(
            self._path(), resource=self.resource, json=lesson_payload(payload)
        )
        return _unwrap_lesson_write(body)

    async def update(self, lesson_id: str, payload: LessonUpdate) -> Lesson:
        body = await self.api.put(
            self._path(lesson_id), resource=self.resource, json=lesson_payload(payload)
        )
        return _unwrap_lesson_write(body)

    async def delete(self, lesson_id: str) -> None:
        await self.api.delete(self._path(lesson_id), resource=self.resource)
