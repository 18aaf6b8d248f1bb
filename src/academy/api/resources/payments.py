"""Payment resource client.

Endpoints (/api/payments):
- GET    ?status=&page=...    {payments, pagination{total, pages, currentPage, limit}}
- GET    /{id}                bare payment
- POST   /subjects/{id}       {message, payment}
- POST   /lessons/{id}        {message, payment}
- PUT    /{id}/approve        {message, payment}
- PUT    /{id}/reject         {message, payment}
- GET    /stats/overview      {stats: [{status, count, total}], totalRevenue}

Approval and rejection are server-side transitions; the client only
requests them and displays the result.
"""

from __future__ import annotations

from typing import Any

from academy.api.resources.base import (
    ResourceClient,
    pagination_from_pages,
    require_dict,
)
from academy.models.common import Page
from academy.models.payment import (
    Payment,
    PaymentCreate,
    PaymentDisplayItem,
    PaymentFilters,
    PaymentStats,
    PaymentStatsOverview,
)
from academy.utils.formatting import payment_status_label

UNKNOWN = "Unknown"


def _unwrap_payment_list(body: Any) -> Page[Payment]:
    data = require_dict(body, "payments list")
    return Page[Payment](
        items=[Payment.model_validate(raw) for raw in data.get("payments") or []],
        pagination=pagination_from_pages(data.get("pagination")),
    )


def _unwrap_payment_action(body: Any) -> Payment:
    data = require_dict(body, "payment")
    return Payment.model_validate(data.get("payment") or data)


def to_display_item(payment: Payment) -> PaymentDisplayItem:
    """Reshape a payment into a table row."""
    student = payment.student
    student_name = (
        f"{student.first_name} {student.last_name}".strip() if student else ""
    )
    if payment.subject is not None:
        target_name = payment.subject.name
    elif payment.lesson is not None:
        target_name = payment.lesson.title
    else:
        target_name = UNKNOWN

    return PaymentDisplayItem(
        id=payment.id,
        student_name=student_name or UNKNOWN,
        student_email=(student.email if student and student.email else UNKNOWN),
        amount=payment.amount,
        currency=payment.currency,
        status=payment.status,
        status_label=payment_status_label(payment.status),
        payment_method=payment.payment_method,
        plan_type=payment.plan_type,
        target_name=target_name,
        receipt_url=payment.receipt_url,
        notes=payment.notes,
        created_at=payment.created_at,
    )


class PaymentClient(ResourceClient):
    resource = "payments"
    base_path = "/api/payments"

    async def list(self, filters: PaymentFilters | None = None) -> Page[Payment]:
        params = (filters or PaymentFilters()).to_params()
        body = await self.api.get(self._path(), resource=self.resource, params=params)
        return _unwrap_payment_list(body)

    async def get(self, payment_id: str) -> Payment:
        body = await self.api.get(self._path(payment_id), resource=self.resource)
        return Payment.model_validate(require_dict(body, "payment"))

    async def create_for_subject(self, subject_id: str, payload: PaymentCreate) -> Payment:
        body = await self.api.post(
            self._path("subjects", subject_id),
            resource=self.resource,
            json=payload.to_payload(),
        )
        return _unwrap_payment_action(body)

    async def create_for_lesson(self, lesson_id: str, payload: PaymentCreate) -> Payment:
        body = await self.api.post(
            self._path("lessons", lesson_id),
            resource=self.resource,
            json=payload.to_payload(),
        )
        return _unwrap_payment_action(body)

    async def approve(self, payment_id: str) -> Payment:
        body = await self.api.put(
            self._path(payment_id, "approve"), resource=self.resource, json={}
        )
        return _unwrap_payment_action(body)

    async def reject(self, payment_id: str, reason: str | None = None) -> Payment:
        json_body = {"rejectionReason": reason} if reason else {}
        body = await self.api.put(
            self._path(payment_id, "reject"), resource=self.resource, json=json_body
        )
        return _unwrap_payment_action(body)

    async def stats(self) -> PaymentStats:
        body = await self.api.get(
            self._path("stats", "overview"), resource=self.resource
        )
        return PaymentStats.model_validate(require_dict(body, "payment stats"))

    async def stats_overview(self) -> PaymentStatsOverview:
        """Flatten per-status statistics for the dashboard."""
        stats = await self.stats()
        return PaymentStatsOverview(
            total=stats.count_for(),
            approved=stats.count_for("approved"),
            pending=stats.count_for("pending"),
            rejected=stats.count_for("rejected"),
            revenue=stats.total_revenue,
        )
