"""Embeddable video player bridge and YouTube URL helpers."""

from academy.player.bridge import (
    GateState,
    PlaybackState,
    PlayerBridge,
    PlayerError,
    PlayerEvent,
    PlayerEventType,
    PlayerHandle,
    PlayerHost,
    PlayerOptions,
    ReadinessGate,
    player_vars,
)
from academy.player.video_ids import (
    VideoIdResult,
    build_embed_url,
    extract_video_id,
    extract_video_ids,
    is_youtube_url,
    thumbnail_url,
)

__all__ = [
    "GateState",
    "PlaybackState",
    "PlayerBridge",
    "PlayerError",
    "PlayerEvent",
    "PlayerEventType",
    "PlayerHandle",
    "PlayerHost",
    "PlayerOptions",
    "ReadinessGate",
    "player_vars",
    "VideoIdResult",
    "build_embed_url",
    "extract_video_id",
    "extract_video_ids",
    "is_youtube_url",
    "thumbnail_url",
]
