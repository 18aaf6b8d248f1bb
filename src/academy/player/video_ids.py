"""YouTube URL helpers: video id extraction, embed and thumbnail URLs."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal
from urllib.parse import urlencode, urlparse

import structlog

logger = structlog.get_logger(__name__)

VIDEO_ID_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")

YOUTUBE_PATTERNS = [
    re.compile(r"(?:youtube\.com/watch\?v=|youtu\.be/)([A-Za-z0-9_-]{11})"),
    re.compile(r"youtube\.com/embed/([A-Za-z0-9_-]{11})"),
    re.compile(r"youtube\.com/v/([A-Za-z0-9_-]{11})"),
    re.compile(r"m\.youtube\.com/watch\?v=([A-Za-z0-9_-]{11})"),
]

YOUTUBE_HOSTS = {"youtube.com", "www.youtube.com", "m.youtube.com", "youtu.be"}

URL_RE = re.compile(r"https?://\S+")

THUMBNAIL_FILES = {
    "default": "default.jpg",
    "medium": "mqdefault.jpg",
    "high": "hqdefault.jpg",
    "standard": "sddefault.jpg",
    "maxres": "maxresdefault.jpg",
}

ThumbnailQuality = Literal["default", "medium", "high", "standard", "maxres"]


@dataclass(frozen=True)
class VideoIdResult:
    video_id: str | None
    platform: Literal["youtube", "unknown"]
    is_valid: bool
    original_url: str


def is_valid_video_id(video_id: str | None) -> bool:
    return bool(video_id) and VIDEO_ID_RE.match(video_id) is not None


def extract_video_id(url: str | None) -> VideoIdResult:
    """Find the YouTube video id in any common URL form.

    >>> extract_video_id("https://youtu.be/dQw4w9WgXcQ").video_id
    'dQw4w9WgXcQ'
    """
    if not url:
        return VideoIdResult(None, "unknown", False, url or "")

    text = url.strip()
    for pattern in YOUTUBE_PATTERNS:
        match = pattern.search(text)
        if match:
            video_id = match.group(1)
            return VideoIdResult(video_id, "youtube", is_valid_video_id(video_id), url)

    logger.debug("video_id_not_found", url=url)
    return VideoIdResult(None, "unknown", False, url)


def is_youtube_url(url: str | None) -> bool:
    if not url:
        return False
    host = (urlparse(url.strip()).hostname or "").lower()
    return host in YOUTUBE_HOSTS


def build_embed_url(
    video_id: str,
    origin: str,
    autoplay: bool = False,
    controls: bool = True,
    modest_branding: bool = True,
    keyboard_disabled: bool = True,
) -> str:
    """Embed URL with related videos, annotations and captions turned off.

    Raises:
        ValueError: If ``video_id`` is not a valid YouTube id
    """
    if not is_valid_video_id(video_id):
        raise ValueError(f"Invalid YouTube video ID: {video_id!r}")

    params = {
        "rel": "0",
        "showinfo": "0",
        "modestbranding": "1" if modest_branding else "0",
        "controls": "1" if controls else "0",
        "disablekb": "1" if keyboard_disabled else "0",
        "autoplay": "1" if autoplay else "0",
        "fs": "1",
        "cc_load_policy": "0",
        "iv_load_policy": "3",
        "loop": "0",
        "enablejsapi": "1",
        "origin": origin,
        "playsinline": "1",
        "widget_referrer": origin,
    }
    return f"https://www.youtube.com/embed/{video_id}?{urlencode(params)}"


def thumbnail_url(video_id: str, quality: ThumbnailQuality = "high") -> str:
    if not is_valid_video_id(video_id):
        raise ValueError(f"Invalid YouTube video ID: {video_id!r}")
    return f"https://img.youtube.com/vi/{video_id}/{THUMBNAIL_FILES[quality]}"


def extract_video_ids(text: str | None) -> list[VideoIdResult]:
    """Valid video ids for every URL found in free text."""
    if not text:
        return []
    results = (extract_video_id(url) for url in URL_RE.findall(text))
    return [result for result in results if result.is_valid]
