"""File uploads with live progress.

``FileUploadClient.upload`` sends one multipart request and yields
``UploadProgress`` events while the body is streamed, then a single
``UploadCompleted``. The progress counter wraps the request's byte
stream, so ticks reflect bytes actually handed to the transport.

Kind -> endpoint and multipart field name:

    image     POST /api/uploads/image     field "image"
    video     POST /api/uploads/video     field "video"
    document  POST /api/uploads/document  field "document"
    receipt   POST /api/uploads/receipt   field "file"
"""

from __future__ import annotations

import asyncio
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Any, AsyncIterable, AsyncIterator, Callable, Iterable

import httpx
import structlog

from academy.api.errors import ApiError, HTTPError, TransportError
from academy.api.resources.base import ResourceClient, require_dict
from academy.models.upload import (
    UploadCompleted,
    UploadEvent,
    UploadKind,
    UploadProgress,
)
from academy.utils.formatting import format_file_size

logger = structlog.get_logger(__name__)

MB = 1024 * 1024

IMAGE_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")
VIDEO_TYPES = (
    "video/mp4",
    "video/webm",
    "video/avi",
    "video/x-msvideo",
    "video/mov",
    "video/quicktime",
    "video/mkv",
    "video/x-matroska",
)
DOCUMENT_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
)
RECEIPT_TYPES = ("image/jpeg", "image/png", "image/gif", "application/pdf")


@dataclass(frozen=True)
class UploadSpec:
    """Backend contract for one upload kind."""

    field_name: str
    max_size: int
    allowed_types: tuple[str, ...]


UPLOAD_SPECS: dict[str, UploadSpec] = {
    "image": UploadSpec("image", 10 * MB, IMAGE_TYPES),
    "video": UploadSpec("video", 2000 * MB, VIDEO_TYPES),
    "document": UploadSpec("document", 50 * MB, DOCUMENT_TYPES),
    "receipt": UploadSpec("file", 10 * MB, RECEIPT_TYPES),
}

# Field used by any kind without a dedicated entry
FALLBACK_FIELD_NAME = "file"


class UploadError(ApiError):
    """Upload failed; ``status`` is the HTTP status when there was one."""

    def __init__(self, message: str, status: int | None = None):
        self.status = status
        super().__init__(message)


class UploadValidationError(UploadError):
    """File rejected locally before any request was made."""

    pass


def field_name_for(kind: str) -> str:
    """Multipart field name the backend expects for ``kind``."""
    spec = UPLOAD_SPECS.get(kind)
    return spec.field_name if spec else FALLBACK_FIELD_NAME


def guess_content_type(path: Path) -> str:
    content_type, _ = mimetypes.guess_type(path.name)
    return content_type or "application/octet-stream"


def validate_file(path: Path, kind: UploadKind, content_type: str | None = None) -> str:
    """Check size and type limits for ``kind``.

    Returns:
        The content type to send

    Raises:
        UploadValidationError: If the kind is unknown or limits are exceeded
    """
    spec = UPLOAD_SPECS.get(kind)
    if spec is None:
        raise UploadValidationError(f"Unsupported upload kind: {kind}")
    if not path.is_file():
        raise UploadValidationError(f"File not found: {path}")

    size = path.stat().st_size
    if size > spec.max_size:
        raise UploadValidationError(
            f"File is too large. Maximum is {format_file_size(spec.max_size)}"
        )

    content_type = content_type or guess_content_type(path)
    if content_type not in spec.allowed_types:
        raise UploadValidationError(
            f"File type {content_type} is not allowed for {kind} uploads"
        )
    return content_type


def upload_error_message(error: ApiError) -> str:
    """Readable message for a failed upload."""
    if isinstance(error, TransportError):
        return "Could not connect to the server"
    if isinstance(error, HTTPError):
        if error.status == 413:
            return "File is too large"
        if error.status == 415:
            return "File type is not supported"
        if error.status == 400:
            return error.message if error.body else "Invalid file data"
        if error.status >= 500:
            return "Server error, please try again later"
    return "Upload failed"


class ProgressStream(httpx.AsyncByteStream):
    """Async byte stream that reports cumulative bytes as they are read."""

    def __init__(
        self,
        inner: Iterable[bytes] | AsyncIterable[bytes],
        total: int | None,
        on_progress: Callable[[int, int | None], None],
    ):
        self._inner = inner
        self._total = total
        self._on_progress = on_progress

    async def _chunks(self) -> AsyncIterator[bytes]:
        if hasattr(self._inner, "__aiter__"):
            async for chunk in self._inner:  # type: ignore[union-attr]
                yield chunk
        else:
            for chunk in self._inner:  # type: ignore[union-attr]
                yield chunk

    async def __aiter__(self) -> AsyncIterator[bytes]:
        loaded = 0
        async for chunk in self._chunks():
            loaded += len(chunk)
            self._on_progress(loaded, self._total)
            yield chunk


def completed_from_body(
    body: Any, file_name: str, file_size: int, file_type: str
) -> UploadCompleted:
    """Normalize the upload response into an UploadCompleted event.

    Accepts ``{url, ...}``, ``{fileUrl}``, ``{path}`` or a bare URL string.
    """
    if isinstance(body, dict):
        if body.get("url"):
            return UploadCompleted(
                url=body["url"],
                file_name=body.get("fileName") or body.get("originalName") or file_name,
                file_size=body.get("fileSize") or file_size,
                file_type=body.get("fileType") or file_type,
                duration=body.get("duration"),
            )
        url = body.get("fileUrl") or body.get("path")
        if url:
            return UploadCompleted(
                url=url, file_name=file_name, file_size=file_size, file_type=file_type
            )
    if isinstance(body, str) and body:
        return UploadCompleted(
            url=body, file_name=file_name, file_size=file_size, file_type=file_type
        )
    raise UploadError("Invalid upload response format")


class FileUploadClient(ResourceClient):
    """Uploads, deletion and storage statistics."""

    resource = "uploads"
    base_path = "/api/uploads"

    async def upload(
        self,
        path: Path,
        kind: UploadKind,
        content_type: str | None = None,
    ) -> AsyncIterator[UploadEvent]:
        """Upload one file, yielding progress then a completion event.

        The returned async generator is single-use; iterate a new call to
        retry. It raises instead of completing when the upload fails.

        Args:
            path: File to upload
            kind: Upload kind (selects endpoint and field name)
            content_type: Override the MIME type guessed from the extension

        Yields:
            UploadProgress events, then one UploadCompleted

        Raises:
            UploadValidationError: If the file breaks the kind's limits
            UploadError: If the request fails
        """
        path = Path(path)
        content_type = validate_file(path, kind, content_type)
        file_size = path.stat().st_size

        logger.info(
            "upload_started",
            kind=kind,
            field_name=field_name_for(kind),
            file_name=path.name,
            file_size=format_file_size(file_size),
            content_type=content_type,
        )

        queue: asyncio.Queue[UploadProgress | None] = asyncio.Queue()

        def on_progress(loaded: int, total: int | None) -> None:
            queue.put_nowait(UploadProgress.from_counts(loaded, total))

        with path.open("rb") as handle:
            request = self.api.build_request(
                "POST",
                self._path(kind),
                data={
                    "originalName": path.name,
                    "fileSize": str(file_size),
                    "fileType": content_type,
                },
                files={field_name_for(kind): (path.name, handle, content_type)},
            )
            total = int(request.headers.get("Content-Length") or 0) or None
            request.stream = ProgressStream(request.stream, total, on_progress)

            send_task = asyncio.create_task(self.api.send(request, resource=self.resource))
            # Sentinel after the last progress tick, whatever the outcome
            send_task.add_done_callback(lambda _: queue.put_nowait(None))

            try:
                while (event := await queue.get()) is not None:
                    yield event
                body = await send_task
            except ApiError as e:
                logger.warning("upload_failed", kind=kind, file_name=path.name, error=str(e))
                raise UploadError(
                    upload_error_message(e), getattr(e, "status", None)
                ) from e
            finally:
                if not send_task.done():
                    send_task.cancel()
                elif not send_task.cancelled() and send_task.exception() is not None:
                    # Abandoned before the failure was awaited
                    logger.debug(
                        "upload_send_failed",
                        kind=kind,
                        error=str(send_task.exception()),
                    )

        completed = completed_from_body(body, path.name, file_size, content_type)
        logger.info("upload_completed", kind=kind, url=completed.url)
        yield completed

    def upload_image(self, path: Path) -> AsyncIterator[UploadEvent]:
        return self.upload(path, "image")

    def upload_video(self, path: Path) -> AsyncIterator[UploadEvent]:
        return self.upload(path, "video")

    def upload_document(self, path: Path) -> AsyncIterator[UploadEvent]:
        return self.upload(path, "document")

    def upload_receipt(self, path: Path) -> AsyncIterator[UploadEvent]:
        return self.upload(path, "receipt")

    async def delete_file(self, file_url: str) -> None:
        await self.api.delete(self._path(), resource=self.resource, json={"fileUrl": file_url})

    async def stats(self) -> dict[str, Any]:
        body = await self.api.get(self._path("stats"), resource=self.resource)
        return require_dict(body, "upload stats")
