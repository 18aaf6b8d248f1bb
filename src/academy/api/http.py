"""Async HTTP transport shared by all resource clients.

Wraps a single ``httpx.AsyncClient``: attaches the bearer token, decodes
bodies, and turns httpx failures into the errors in ``academy.api.errors``.
Every failure is logged with the resource that issued the call before it
is raised. There is no retry; each call is a single attempt.
"""

from __future__ import annotations

from typing import Any, Callable

import httpx
import structlog

from academy.api.errors import HTTPError, NotFoundError, TransportError
from academy.config.app_config import ApiConfig

logger = structlog.get_logger(__name__)

TokenProvider = Callable[[], "str | None"]


def decode_body(response: httpx.Response) -> Any:
    """Return the JSON body, the raw text, or None for an empty body."""
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ApiClient:
    """Thin async wrapper around the backend REST API.

    Usage:
        async with ApiClient(config.api, token_provider=store.get_token) as api:
            data = await api.get("/api/users", resource="users")
    """

    def __init__(
        self,
        config: ApiConfig | None = None,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the transport.

        Args:
            config: Base URL and timeout (defaults to ApiConfig()).
            token_provider: Callable returning the stored auth token, if any.
            transport: Custom httpx transport (tests use httpx.MockTransport).
        """
        self.config = config or ApiConfig()
        self._token_provider = token_provider
        self._client = httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _auth_headers(self) -> dict[str, str]:
        token = self._token_provider() if self._token_provider else None
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    def build_request(
        self,
        method: str,
        path: str,
        *,
        data: dict[str, str] | None = None,
        files: dict[str, Any] | None = None,
    ) -> httpx.Request:
        """Build (without sending) an authenticated multipart request."""
        return self._client.build_request(
            method, path, data=data, files=files, headers=self._auth_headers()
        )

    async def send(self, request: httpx.Request, *, resource: str) -> Any:
        """Send a prepared request and return its decoded body.

        Raises:
            TransportError: If the backend cannot be reached or the response
                cannot be read (bad encoding, redirect loops)
            NotFoundError: On HTTP 404
            HTTPError: On any other non-2xx status
        """
        method = request.method
        path = request.url.path

        try:
            response = await self._client.send(request)
        except httpx.RequestError as e:
            logger.error(
                "api_transport_failed",
                resource=resource,
                method=method,
                path=path,
                error=str(e),
            )
            raise TransportError(method, path, str(e)) from e

        body = decode_body(response)

        if response.is_error:
            logger.error(
                "api_request_failed",
                resource=resource,
                method=method,
                path=path,
                status=response.status_code,
            )
            if response.status_code == 404:
                raise NotFoundError(method, path, body)
            raise HTTPError(method, path, response.status_code, body)

        logger.debug(
            "api_request_ok",
            resource=resource,
            method=method,
            path=path,
            status=response.status_code,
        )
        return body

    async def request(
        self,
        method: str,
        path: str,
        *,
        resource: str,
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> Any:
        """Send a JSON request and return the decoded response body."""
        request = self._client.build_request(
            method,
            path,
            params=params or None,
            json=json,
            headers=self._auth_headers(),
        )
        return await self.send(request, resource=resource)

    async def get(
        self, path: str, *, resource: str, params: dict[str, str] | None = None
    ) -> Any:
        return await self.request("GET", path, resource=resource, params=params)

    async def post(self, path: str, *, resource: str, json: Any = None) -> Any:
        return await self.request("POST", path, resource=resource, json=json)

    async def put(self, path: str, *, resource: str, json: Any = None) -> Any:
        return await self.request("PUT", path, resource=resource, json=json)

    async def patch(self, path: str, *, resource: str, json: Any = None) -> Any:
        return await self.request("PATCH", path, resource=resource, json=json)

    async def delete(self, path: str, *, resource: str, json: Any = None) -> Any:
        return await self.request("DELETE", path, resource=resource, json=json)
