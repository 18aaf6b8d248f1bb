"""Analytics response models."""

from __future__ import annotations

from pydantic import Field

from academy.models.common import ApiModel


class CountAmount(ApiModel):
    count: int = 0
    amount: float = 0


class DashboardPayments(ApiModel):
    total: CountAmount = Field(default_factory=CountAmount)
    recent: CountAmount = Field(default_factory=CountAmount)


class DashboardOverview(ApiModel):
    """Response of GET /api/analytics/dashboard."""

    period: int = 30
    users: dict[str, int] = Field(default_factory=dict)
    content: dict[str, int] = Field(default_factory=dict)
    payments: DashboardPayments = Field(default_factory=DashboardPayments)
    enrollments: dict[str, int] = Field(default_factory=dict)


class RoleCount(ApiModel):
    role: str
    count: int


class DateCount(ApiModel):
    date: str
    count: int


class UsersAnalytics(ApiModel):
    """Response of GET /api/analytics/users."""

    users_by_role: list[RoleCount] = Field(default_factory=list)
    registration_trend: list[DateCount] = Field(default_factory=list)
