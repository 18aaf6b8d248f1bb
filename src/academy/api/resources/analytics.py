"""Analytics client (read only, bare JSON objects)."""

from __future__ import annotations

from academy.api.resources.base import ResourceClient, require_dict
from academy.models.analytics import DashboardOverview, UsersAnalytics


class AnalyticsClient(ResourceClient):
    resource = "analytics"
    base_path = "/api/analytics"

    async def dashboard_overview(self) -> DashboardOverview:
        body = await self.api.get(self._path("dashboard"), resource=self.resource)
        return DashboardOverview.model_validate(require_dict(body, "dashboard"))

    async def users_analytics(self) -> UsersAnalytics:
        body = await self.api.get(self._path("users"), resource=self.resource)
        return UsersAnalytics.model_validate(require_dict(body, "users analytics"))
