"""Payment models.

A payment belongs to one student and targets at most one of a subject or
a lesson. Status moves pending -> approved/rejected on the server only.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from academy.models.common import ApiModel, Filters

PaymentStatus = Literal["pending", "approved", "rejected"]

PAYMENT_STATUSES: tuple[str, ...] = ("pending", "approved", "rejected")


class PaymentStudent(ApiModel):
    id: str
    first_name: str = ""
    last_name: str = ""
    email: str = ""


class PaymentSubject(ApiModel):
    id: str
    name: str
    price: Decimal | None = None
    currency: str | None = None


class PaymentLesson(ApiModel):
    id: str
    title: str
    subject_id: str | None = None
    price: Decimal | None = None


class Payment(ApiModel):
    id: str
    student_id: str
    subject_id: str | None = None
    lesson_id: str | None = None
    amount: Decimal = Decimal("0")
    currency: str = "EGP"
    status: PaymentStatus = "pending"
    payment_method: str
    transaction_id: str | None = None
    reference_number: str | None = None
    receipt_url: str | None = None
    notes: str | None = None
    admin_notes: str | None = None
    approved_by: str | None = None
    approved_at: str | None = None
    rejection_reason: str | None = None
    grant_type: str | None = None
    created_at: str | None = None
    updated_at: str | None = None

    student: PaymentStudent | None = None
    subject: PaymentSubject | None = None
    lesson: PaymentLesson | None = None

    @model_validator(mode="after")
    def _single_target(self) -> "Payment":
        if self.subject_id and self.lesson_id:
            raise ValueError("payment cannot target both a subject and a lesson")
        return self

    @property
    def plan_type(self) -> Literal["subject", "lesson"]:
        return "subject" if self.subject_id else "lesson"


class PaymentCreate(ApiModel):
    """Body for POST /api/payments/{subjects|lessons}/{id}."""

    payment_method: str
    receipt_url: str | None = None
    notes: str | None = None
    transaction_id: str | None = None
    reference_number: str | None = None


class PaymentFilters(Filters):
    page: int | None = None
    limit: int | None = None
    status: PaymentStatus | None = None
    search: str | None = None
    student_id: str | None = None
    subject_id: str | None = None
    lesson_id: str | None = None
    sort_by: Literal["createdAt", "amount", "updatedAt"] | None = None
    sort_order: Literal["ASC", "DESC"] | None = None


class PaymentStatsItem(ApiModel):
    status: PaymentStatus
    count: int = 0
    total: Decimal = Decimal("0")


class PaymentStats(ApiModel):
    """Response of GET /api/payments/stats/overview."""

    stats: list[PaymentStatsItem] = Field(default_factory=list)
    total_revenue: Decimal = Decimal("0")

    def count_for(self, status: str | None = None) -> int:
        """Count of payments in ``status``, or of all payments."""
        if status is None:
            return sum(item.count for item in self.stats)
        return next((item.count for item in self.stats if item.status == status), 0)


class PaymentStatsOverview(BaseModel):
    """Flattened statistics used by the dashboard cards."""

    total: int
    approved: int
    pending: int
    rejected: int
    revenue: Decimal


class PaymentDisplayItem(BaseModel):
    """A payment reshaped for a table row."""

    id: str
    student_name: str
    student_email: str
    amount: Decimal
    currency: str
    status: PaymentStatus
    status_label: str
    payment_method: str
    plan_type: Literal["subject", "lesson"]
    target_name: str
    receipt_url: str | None = None
    notes: str | None = None
    created_at: str | None = None
