"""Route handlers for the proxy web app."""

from academy.web.routes.health import router as health_router
from academy.web.routes.proxy import router as proxy_router

__all__ = [
    "health_router",
    "proxy_router",
]
