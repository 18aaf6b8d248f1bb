"""Bridge to an embeddable third-party video player.

The player API is delivered by a script that must be injected once per
process. ``ReadinessGate`` tracks that load and lets any number of callers
wait for it; ``PlayerBridge`` creates players once the API is ready and
keeps them in a registry keyed by element id.

The page or webview that actually runs the script is abstracted as a
``PlayerHost``:

    host.has_api()              player API already available
    host.has_script()           script tag already present
    host.on_api_ready(cb)       register the API-ready callback
    host.inject_script(url)     add the script tag
    host.new_player(element_id, options, callbacks) -> player
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum, IntEnum, auto
from typing import Any, Callable, Protocol

import structlog

from academy.config.app_config import PlayerConfig

logger = structlog.get_logger(__name__)


# =============================================================================
# HOST INTERFACE
# =============================================================================


class PlayerHost(Protocol):
    def has_api(self) -> bool: ...

    def has_script(self) -> bool: ...

    def on_api_ready(self, callback: Callable[[], None]) -> None: ...

    def inject_script(self, url: str) -> None: ...

    def new_player(
        self,
        element_id: str,
        options: dict[str, Any],
        callbacks: dict[str, Callable[[Any], None]],
    ) -> Any: ...


class PlayerError(Exception):
    """The player reported an error or could not be constructed."""

    def __init__(self, message: str, data: Any = None):
        self.data = data
        super().__init__(message)


# =============================================================================
# READINESS GATE
# =============================================================================


class GateState(Enum):
    UNLOADED = auto()
    LOADING = auto()
    READY = auto()


class ReadinessGate:
    """One-shot "player API loaded" signal with idempotent script injection."""

    def __init__(self, host: PlayerHost, script_url: str):
        self.host = host
        self.script_url = script_url
        self.state = GateState.UNLOADED
        self._ready = asyncio.Event()

    @property
    def is_ready(self) -> bool:
        return self.state is GateState.READY

    def ensure_loaded(self) -> None:
        """Start loading the API unless that already happened.

        Synchronous, so concurrent first callers on one event loop cannot
        interleave between the state check and the injection.
        """
        if self.state is not GateState.UNLOADED:
            return
        self.state = GateState.LOADING

        if self.host.has_api():
            self.mark_ready()
            return

        self.host.on_api_ready(self.mark_ready)
        if not self.host.has_script():
            logger.info("player_script_injected", url=self.script_url)
            self.host.inject_script(self.script_url)

    def mark_ready(self) -> None:
        self.state = GateState.READY
        self._ready.set()

    async def wait_until_ready(self) -> None:
        """Return once the API is ready; no suspension if it already is."""
        self.ensure_loaded()
        if self.state is GateState.READY:
            return
        await self._ready.wait()


# =============================================================================
# PLAYER OPTIONS AND EVENTS
# =============================================================================


class PlayerEventType(Enum):
    READY = auto()
    STATE_CHANGE = auto()
    QUALITY_CHANGE = auto()
    RATE_CHANGE = auto()
    ERROR = auto()


# Host callback name for each event type
CALLBACK_NAMES = {
    PlayerEventType.READY: "onReady",
    PlayerEventType.STATE_CHANGE: "onStateChange",
    PlayerEventType.QUALITY_CHANGE: "onPlaybackQualityChange",
    PlayerEventType.RATE_CHANGE: "onPlaybackRateChange",
    PlayerEventType.ERROR: "onError",
}


class PlaybackState(IntEnum):
    UNSTARTED = -1
    ENDED = 0
    PLAYING = 1
    PAUSED = 2
    BUFFERING = 3
    CUED = 5


@dataclass(frozen=True)
class PlayerEvent:
    type: PlayerEventType
    data: Any = None


@dataclass
class PlayerOptions:
    """Recognized player options.

    ``None`` means "not specified" and selects the default flag.
    """

    video_id: str
    width: str | int = "100%"
    height: str | int = "100%"
    autoplay: bool = False
    loop: bool = False
    mute: bool = False
    modest_branding: bool | None = None
    controls: bool = False
    rel: int | None = None
    plays_inline: bool | None = None


def player_vars(options: PlayerOptions, origin: str) -> dict[str, Any]:
    """Translate options into the player's URL flags."""
    return {
        "controls": 1 if options.controls else 0,
        "rel": options.rel if options.rel is not None else 0,
        "modestbranding": 0 if options.modest_branding is False else 1,
        "autoplay": 1 if options.autoplay else 0,
        "loop": 1 if options.loop else 0,
        "mute": 1 if options.mute else 0,
        "playsinline": 0 if options.plays_inline is False else 1,
        "disablekb": 1,
        "iv_load_policy": 3,
        "cc_load_policy": 0,
        "enablejsapi": 1,
        "origin": origin,
    }


PlayerHandler = Callable[[PlayerEvent], None]


@dataclass
class PlayerHandle:
    """A created player plus the queue receiving all of its events."""

    element_id: str
    player: Any
    events: asyncio.Queue[PlayerEvent] = field(default_factory=asyncio.Queue)


# =============================================================================
# BRIDGE
# =============================================================================


class PlayerBridge:
    """Creates, tracks and destroys players on a host."""

    def __init__(
        self,
        host: PlayerHost,
        config: PlayerConfig | None = None,
        gate: ReadinessGate | None = None,
    ):
        self.host = host
        self.config = config or PlayerConfig()
        self.gate = gate or ReadinessGate(host, self.config.script_url)
        self._players: dict[str, Any] = {}

    async def wait_until_ready(self) -> None:
        await self.gate.wait_until_ready()

    async def create_player(
        self,
        element_id: str,
        options: PlayerOptions,
        handlers: dict[PlayerEventType, PlayerHandler] | None = None,
    ) -> PlayerHandle:
        """Create a player and wait for its first READY or ERROR.

        The caller's handler for that event runs before this returns or
        raises; if it raises itself, the awaitable fails with PlayerError.
        Later events keep flowing into ``handle.events``.

        Raises:
            PlayerError: On the player's first error, or if construction fails
        """
        await self.gate.wait_until_ready()

        handlers = handlers or {}
        settled: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        events: asyncio.Queue[PlayerEvent] = asyncio.Queue()

        def make_callback(event_type: PlayerEventType) -> Callable[[Any], None]:
            def callback(data: Any = None) -> None:
                event = PlayerEvent(event_type, data)
                events.put_nowait(event)
                handler = handlers.get(event_type)
                handler_error: Exception | None = None
                try:
                    if handler is not None:
                        handler(event)
                except Exception as e:
                    logger.error(
                        "player_handler_failed",
                        element_id=element_id,
                        event=event_type.name,
                        error=str(e),
                    )
                    handler_error = e
                finally:
                    settle(event_type, data, handler_error)

            return callback

        def settle(event_type: PlayerEventType, data: Any, handler_error: Exception | None) -> None:
            if settled.done():
                return
            if event_type is PlayerEventType.ERROR:
                error = PlayerError(f"Player error: {data}", data)
                if handler_error is not None:
                    error.__cause__ = handler_error
                settled.set_exception(error)
            elif event_type is PlayerEventType.READY:
                if handler_error is None:
                    settled.set_result(None)
                else:
                    error = PlayerError(f"Ready handler failed: {handler_error}")
                    error.__cause__ = handler_error
                    settled.set_exception(error)

        callbacks = {
            name: make_callback(event_type) for event_type, name in CALLBACK_NAMES.items()
        }
        host_options = {
            "width": options.width,
            "height": options.height,
            "videoId": options.video_id,
            "playerVars": player_vars(options, self.config.origin),
        }

        try:
            player = self.host.new_player(element_id, host_options, callbacks)
        except Exception as e:
            logger.error("player_create_failed", element_id=element_id, error=str(e))
            raise PlayerError(f"Could not create player: {e}") from e

        self._players[element_id] = player
        logger.debug("player_registered", element_id=element_id, video_id=options.video_id)

        await settled
        return PlayerHandle(element_id=element_id, player=player, events=events)

    def get_player(self, element_id: str) -> Any:
        return self._players.get(element_id)

    def destroy(self, element_id: str) -> None:
        """Tear the player down if it supports it; the entry is always removed."""
        player = self._players.pop(element_id, None)
        teardown = getattr(player, "destroy", None)
        if callable(teardown):
            teardown()
        logger.debug("player_destroyed", element_id=element_id)
