"""Same-origin proxy to the backend.

Every method under /api/ is forwarded with its path, query string, body
and headers (except ``host``, ``content-length`` and hop-by-hop
headers such as ``transfer-encoding``). The backend's
status and body come back verbatim.
"""

import httpx
import structlog
from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse

from academy.web.schemas import ProxyErrorResponse

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["proxy"])

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD"]

# Recomputed by the outgoing client, or hop-by-hop
DROPPED_HEADERS = {
    "host",
    "content-length",
    "transfer-encoding",
    "connection",
    "keep-alive",
    "proxy-connection",
    "te",
    "trailer",
    "upgrade",
}

BODYLESS_METHODS = {"GET", "HEAD"}


def forward_headers(request: Request) -> dict[str, str]:
    return {
        key: value
        for key, value in request.headers.items()
        if key.lower() not in DROPPED_HEADERS
    }


@router.api_route("/api/{path:path}", methods=PROXY_METHODS)
async def proxy(path: str, request: Request) -> Response:
    """Forward one request to the backend."""
    client: httpx.AsyncClient = request.app.state.backend_client

    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"
    body = None if request.method in BODYLESS_METHODS else await request.body()

    try:
        upstream = await client.request(
            request.method,
            target,
            headers=forward_headers(request),
            content=body,
        )
    except httpx.HTTPError as e:
        logger.error("proxy_failed", method=request.method, path=target, error=str(e))
        error = ProxyErrorResponse(details=str(e))
        return JSONResponse(status_code=500, content=error.model_dump())

    logger.debug(
        "proxy_forwarded",
        method=request.method,
        path=target,
        status=upstream.status_code,
    )
    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        media_type=upstream.headers.get("content-type"),
    )
