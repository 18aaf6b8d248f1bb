"""FastAPI application factory.

Serves the same-origin proxy in front of the academy backend.
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import httpx
import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from academy.config.app_config import AppConfig, load_app_config
from academy.web.routes import health_router, proxy_router

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Lifespan context manager for startup/shutdown events."""
    logger.info("proxy_startup", backend_url=app.state.backend_url)
    yield
    await app.state.backend_client.aclose()


def create_app(
    config: AppConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Application config (loaded from YAML when omitted)
        transport: Custom httpx transport for the backend client

    Returns:
        Configured FastAPI app instance
    """
    config = config or load_app_config()

    app = FastAPI(
        title="Academy API Proxy",
        description="Same-origin proxy for the academy backend",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.backend_url = config.proxy.backend_url
    app.state.backend_client = httpx.AsyncClient(
        base_url=config.proxy.backend_url,
        timeout=config.api.timeout,
        transport=transport,
    )

    # CORS middleware for browser clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health_router)
    app.include_router(proxy_router)

    return app
