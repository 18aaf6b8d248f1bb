"""Authentication request and response models."""

from __future__ import annotations

from typing import Literal

from academy.models.common import ApiModel
from academy.models.user import User


class LoginRequest(ApiModel):
    email: str
    password: str


class RegisterRequest(ApiModel):
    email: str
    password: str
    first_name: str
    last_name: str
    phone: str
    role: Literal["student", "admin", "support"] = "student"
    academic_year_id: str | None = None
    student_year_id: str | None = None


class AuthResponse(ApiModel):
    """Body of login, register and refresh."""

    token: str
    user: User


class ChangePasswordRequest(ApiModel):
    current_password: str
    new_password: str


class ProfileUpdate(ApiModel):
    """Partial update of the signed-in user's own profile."""

    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    bio: str | None = None
    address: str | None = None
