"""Error taxonomy for backend calls.

ApiError
├── TransportError   network unreachable, DNS, timeouts
├── HTTPError        non-2xx response (status + body)
│   └── NotFoundError
└── ResponseFormatError
"""

from __future__ import annotations

from typing import Any


class ApiError(Exception):
    """Error during a backend call."""

    pass


class TransportError(ApiError):
    """The backend could not be reached."""

    def __init__(self, method: str, path: str, reason: str):
        self.method = method
        self.path = path
        self.reason = reason
        super().__init__(f"{method} {path} failed: {reason}")


class HTTPError(ApiError):
    """The backend answered with a non-2xx status."""

    def __init__(self, method: str, path: str, status: int, body: Any = None):
        self.method = method
        self.path = path
        self.status = status
        self.body = body
        super().__init__(f"{method} {path} returned HTTP {status}")

    @property
    def message(self) -> str:
        """Best human-readable message found in the response body."""
        if isinstance(self.body, dict):
            details = self.body.get("details")
            if isinstance(details, list) and details:
                return " | ".join(
                    f"{d.get('field')}: {d.get('message')}"
                    for d in details
                    if isinstance(d, dict)
                )
            for key in ("message", "error", "detail"):
                if isinstance(self.body.get(key), str):
                    return self.body[key]
        if isinstance(self.body, str) and self.body:
            return self.body
        return str(self)


class NotFoundError(HTTPError):
    """HTTP 404 from the backend."""

    def __init__(self, method: str, path: str, body: Any = None):
        super().__init__(method, path, 404, body)


class ResponseFormatError(ApiError):
    """The backend answered 2xx with a body of an unexpected shape."""

    pass
