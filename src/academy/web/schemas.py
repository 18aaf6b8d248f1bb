"""Pydantic schemas for the proxy web app."""

from __future__ import annotations

from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response of GET /health."""

    status: str
    version: str
    timestamp: str
    backend_url: str


class ProxyErrorResponse(BaseModel):
    """Body returned when the backend cannot be reached."""

    error: str = "Proxy error"
    details: str
