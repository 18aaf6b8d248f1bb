"""Course content models: Subject -> Unit -> Lecture -> Lesson.

Each child holds its parent's id. Siblings are ordered by the explicit
integer ``order`` field; the client sorts by it but does not enforce
uniqueness.
"""

from __future__ import annotations

from typing import Literal, TypeVar

from pydantic import Field

from academy.models.common import ApiModel, Filters

Difficulty = Literal["beginner", "intermediate", "advanced"]
ContentStatus = Literal["draft", "published"]
LessonType = Literal["center_recorded", "studio_produced", "zoom", "document"]

# Lesson type whose live-session fields are meaningful
LIVE_LESSON_TYPE = "zoom"

LIVE_FIELDS = ("zoom_url", "zoom_meeting_id", "zoom_passcode", "scheduled_at")


class _Ordered(ApiModel):
    order: int = 1


OrderedT = TypeVar("OrderedT", bound=_Ordered)


def sort_by_order(items: list[OrderedT]) -> list[OrderedT]:
    """Return siblings sorted by their ``order`` field (stable)."""
    return sorted(items, key=lambda item: item.order)


# =============================================================================
# SUBJECT
# =============================================================================


class Subject(_Ordered):
    id: str
    name: str
    description: str = ""
    difficulty: Difficulty | None = None
    duration: str | None = None
    image_url: str | None = None
    thumbnail: str | None = None
    status: ContentStatus = "draft"
    is_active: bool = True
    academic_year_id: str | None = None
    student_year_id: str | None = None
    price: float | None = None
    created_at: str | None = None
    updated_at: str | None = None


class SubjectCreate(ApiModel):
    name: str
    description: str
    difficulty: Difficulty
    duration: str
    image_url: str | None = None
    order: int = 1
    academic_year_id: str | None = None
    student_year_id: str | None = None


class SubjectUpdate(ApiModel):
    name: str | None = None
    description: str | None = None
    difficulty: Difficulty | None = None
    duration: str | None = None
    image_url: str | None = None
    order: int | None = None
    academic_year_id: str | None = None
    student_year_id: str | None = None


class SubjectFilters(Filters):
    status: ContentStatus | Literal["all"] | None = None
    academic_year_id: str | None = None
    student_year_id: str | None = None
    search: str | None = None
    sort_by: Literal["name", "createdAt", "updatedAt"] | None = None
    sort_order: Literal["asc", "desc"] | None = None
    page: int | None = None
    limit: int | None = None

    def to_params(self) -> dict[str, str]:
        params = super().to_params()
        # "all" is a UI value meaning "no status filter"
        if params.get("status") == "all":
            del params["status"]
        return params


# =============================================================================
# UNIT
# =============================================================================


class Unit(_Ordered):
    id: str
    name: str
    description: str = ""
    subject_id: str
    thumbnail: str | None = None
    is_active: bool = True
    created_at: str | None = None
    updated_at: str | None = None


class UnitCreate(ApiModel):
    name: str
    description: str
    subject_id: str
    order: int = 1


class UnitUpdate(ApiModel):
    name: str | None = None
    description: str | None = None
    thumbnail: str | None = None
    order: int | None = None
    is_active: bool | None = None


# =============================================================================
# LECTURE
# =============================================================================


class Lecture(_Ordered):
    id: str
    title: str
    unit_id: str
    description: str = ""


# =============================================================================
# LESSON
# =============================================================================


class Lesson(_Ordered):
    id: str
    title: str = ""
    name: str | None = None
    description: str = ""
    content: str | None = None
    lecture_id: str | None = None
    unit_id: str | None = None
    duration: int = 0
    difficulty: Difficulty = "beginner"
    lesson_type: LessonType = "center_recorded"
    academic_year_id: str | None = None
    student_year_id: str | None = None
    thumbnail: str | None = None
    video_url: str | None = None
    document: str | None = None
    pdf_url: str | None = None
    pdf_file_name: str | None = None
    pdf_file_size: int | None = None
    price: float = 0
    currency: str = "EGP"
    is_free: bool = False
    zoom_url: str | None = None
    zoom_meeting_id: str | None = None
    zoom_passcode: str | None = None
    scheduled_at: str | None = None
    status: str = "published"
    is_active: bool = True
    has_access: bool | None = None
    access_reason: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def is_live(self) -> bool:
        return self.lesson_type == LIVE_LESSON_TYPE


class LessonCreate(ApiModel):
    title: str
    description: str
    lecture_id: str
    order: int
    lesson_type: LessonType
    difficulty: Difficulty
    content: str | None = None
    duration: int | None = None
    is_free: bool | None = None
    is_active: bool | None = None
    status: str | None = None
    price: float | None = None
    currency: str | None = None
    academic_year_id: str | None = None
    student_year_id: str | None = None
    thumbnail: str | None = None
    video_url: str | None = None
    document: str | None = None
    pdf_url: str | None = None
    pdf_file_name: str | None = None
    pdf_file_size: int | None = None
    zoom_url: str | None = None
    zoom_meeting_id: str | None = None
    zoom_passcode: str | None = None
    scheduled_at: str | None = None


class LessonUpdate(ApiModel):
    title: str | None = None
    description: str | None = None
    lecture_id: str | None = None
    order: int | None = None
    lesson_type: LessonType | None = None
    difficulty: Difficulty | None = None
    content: str | None = None
    duration: int | None = None
    is_free: bool | None = None
    is_active: bool | None = None
    status: str | None = None
    price: float | None = None
    currency: str | None = None
    thumbnail: str | None = None
    video_url: str | None = None
    document: str | None = None
    pdf_url: str | None = None
    zoom_url: str | None = None
    zoom_meeting_id: str | None = None
    zoom_passcode: str | None = None
    scheduled_at: str | None = None


class LessonFilters(Filters):
    lecture_id: str | None = None
    subject_id: str | None = None
    lesson_type: LessonType | None = None
    difficulty: Difficulty | None = None
    status: str | None = None
    page: int | None = None
    limit: int | None = None


class LessonDetail(ApiModel):
    """Envelope of GET /api/content/lessons/{id} after normalization."""

    lesson: Lesson
    videos: list[dict] = Field(default_factory=list)
    quizzes: list[dict] = Field(default_factory=list)
    assignments: list[dict] = Field(default_factory=list)
