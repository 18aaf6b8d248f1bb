"""User models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field

from academy.models.common import ApiModel, Filters

UserRole = Literal["student", "admin", "teacher", "support"]


class User(ApiModel):
    """A platform account as returned by the backend."""

    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    role: UserRole
    phone: str | None = None
    avatar: str | None = None
    profile_picture: str | None = None
    auth_provider: str | None = None
    is_active: bool = True
    email_verified: bool = False
    last_login: str | None = None
    bio: str | None = None
    bio_long: str | None = None
    address: str | None = None
    date_of_birth: str | None = None
    skills: list[str] = Field(default_factory=list)
    academic_year_id: str | None = None
    student_year_id: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    @property
    def display_name(self) -> str:
        """Full name, or the email when no name is set."""
        return f"{self.first_name} {self.last_name}".strip() or self.email

    @property
    def initials(self) -> str:
        """Upper-case initials of first and last name."""
        return f"{self.first_name[:1]}{self.last_name[:1]}".upper()

    @property
    def profile_image_url(self) -> str:
        """Profile picture, falling back to the avatar."""
        return self.profile_picture or self.avatar or ""


class UserCreate(ApiModel):
    """Body for creating a user (admin only)."""

    email: str
    password: str
    first_name: str
    last_name: str
    role: Literal["student", "teacher", "support"]
    phone: str | None = None
    bio: str | None = None
    address: str | None = None
    date_of_birth: str | None = None


class UserUpdate(ApiModel):
    """Partial update of a user; unset fields are never sent."""

    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    bio: str | None = None
    bio_long: str | None = None
    address: str | None = None
    date_of_birth: str | None = None
    skills: list[str] | None = None
    preferences: dict[str, Any] | None = None
    is_active: bool | None = None


class UserFilters(Filters):
    """Query filters for GET /api/users."""

    page: int | None = None
    limit: int | None = None
    search: str | None = None
    role: UserRole | None = None
    is_active: bool | None = None
    email_verified: bool | None = None
    sort_by: Literal["createdAt", "lastLogin", "firstName", "email"] | None = None
    sort_order: Literal["asc", "desc"] | None = None


class UsersStatsOverview(ApiModel):
    """Response of GET /api/users/stats/overview."""

    total_users: int = 0
    active_users: int = 0
    instructors: int = 0
    students: int = 0
    recent_registrations: int = 0
