"""Upload event value objects.

These exist only while an upload is in flight and are never persisted.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal, Union

UploadKind = Literal["image", "video", "document", "receipt"]


@dataclass(frozen=True)
class UploadProgress:
    """Bytes sent so far for one upload."""

    percent: int
    bytes_loaded: int
    bytes_total: int

    @classmethod
    def from_counts(cls, loaded: int, total: int | None) -> UploadProgress:
        """Build a progress tick; percent is 0 while the total is unknown."""
        if not total:
            return cls(percent=0, bytes_loaded=loaded, bytes_total=0)
        return cls(
            percent=math.floor(100 * loaded / total + 0.5),
            bytes_loaded=loaded,
            bytes_total=total,
        )


@dataclass(frozen=True)
class UploadCompleted:
    """Terminal event carrying the stored file's location."""

    url: str
    file_name: str
    file_size: int
    file_type: str | None = None
    duration: float | None = None


UploadEvent = Union[UploadProgress, UploadCompleted]
