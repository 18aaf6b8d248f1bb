"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from academy.web.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(request: Request) -> HealthResponse:
    """Check proxy health and report the backend it forwards to."""
    return HealthResponse(
        status="ok",
        version="0.1.0",
        timestamp=datetime.now(timezone.utc).isoformat(),
        backend_url=request.app.state.backend_url,
    )
