"""Tests for the readiness gate and player bridge."""

import asyncio

import pytest

from academy.config.app_config import PlayerConfig
from academy.player.bridge import (
    GateState,
    PlayerBridge,
    PlayerError,
    PlayerEventType,
    PlayerOptions,
    ReadinessGate,
    player_vars,
)


class FakePlayer:
    def __init__(self, element_id, options, callbacks):
        self.element_id = element_id
        self.options = options
        self.callbacks = callbacks
        self.destroyed = False

    def fire(self, name, data=None):
        self.callbacks[name](data)

    def destroy(self):
        self.destroyed = True


class FakeHost:
    """In-memory player host.

    ``on_create`` decides what the new player does right after construction.
    """

    def __init__(self, api_loaded=False, script_present=False, on_create=None):
        self.api_loaded = api_loaded
        self.script_present = script_present
        self.injections = []
        self.ready_callback = None
        self.players = {}
        self.on_create = on_create or (lambda player: player.fire("onReady"))

    def has_api(self):
        return self.api_loaded

    def has_script(self):
        return self.script_present

    def on_api_ready(self, callback):
        self.ready_callback = callback

    def inject_script(self, url):
        self.injections.append(url)
        self.script_present = True

    def new_player(self, element_id, options, callbacks):
        player = FakePlayer(element_id, options, callbacks)
        self.players[element_id] = player
        self.on_create(player)
        return player

    def load_api(self):
        self.api_loaded = True
        self.ready_callback()


class TestReadinessGate:
    """Tests for ReadinessGate."""

    def test_ready_gate_does_not_suspend(self):
        """wait_until_ready completes without suspending when ready."""
        host = FakeHost(api_loaded=True)
        gate = ReadinessGate(host, "https://player/api.js")

        coro = gate.wait_until_ready()
        with pytest.raises(StopIteration):
            coro.send(None)

        assert gate.state is GateState.READY
        assert host.injections == []

    def test_existing_script_not_injected_again(self):
        host = FakeHost(script_present=True)
        gate = ReadinessGate(host, "https://player/api.js")

        gate.ensure_loaded()

        assert gate.state is GateState.LOADING
        assert host.injections == []
        assert host.ready_callback is not None

    def test_ensure_loaded_is_idempotent(self):
        host = FakeHost()
        gate = ReadinessGate(host, "https://player/api.js")

        gate.ensure_loaded()
        gate.ensure_loaded()

        assert host.injections == ["https://player/api.js"]

    @pytest.mark.asyncio
    async def test_waiters_released_on_ready(self):
        host = FakeHost()
        gate = ReadinessGate(host, "https://player/api.js")

        waiters = [asyncio.create_task(gate.wait_until_ready()) for _ in range(3)]
        await asyncio.sleep(0)
        assert not any(w.done() for w in waiters)

        host.load_api()
        await asyncio.gather(*waiters)

        assert gate.is_ready


class TestPlayerBridge:
    """Tests for player creation and the registry."""

    @pytest.mark.asyncio
    async def test_concurrent_create_injects_script_once(self):
        """Two concurrent first callers trigger one injection."""
        host = FakeHost()
        bridge = PlayerBridge(host)

        first = asyncio.create_task(bridge.create_player("a", PlayerOptions(video_id="vid-a")))
        second = asyncio.create_task(bridge.create_player("b", PlayerOptions(video_id="vid-b")))
        await asyncio.sleep(0)

        assert len(host.injections) == 1

        host.load_api()
        handles = await asyncio.gather(first, second)

        assert [h.element_id for h in handles] == ["a", "b"]
        assert len(host.injections) == 1

    @pytest.mark.asyncio
    async def test_ready_runs_handler_then_resolves(self):
        host = FakeHost(api_loaded=True)
        bridge = PlayerBridge(host)
        seen = []

        handle = await bridge.create_player(
            "el",
            PlayerOptions(video_id="abc"),
            {PlayerEventType.READY: lambda event: seen.append(event.type)},
        )

        assert seen == [PlayerEventType.READY]
        assert bridge.get_player("el") is handle.player
        assert handle.events.get_nowait().type is PlayerEventType.READY

    @pytest.mark.asyncio
    async def test_error_runs_handler_then_fails(self):
        host = FakeHost(api_loaded=True, on_create=lambda p: p.fire("onError", 150))
        bridge = PlayerBridge(host)
        seen = []

        with pytest.raises(PlayerError) as exc_info:
            await bridge.create_player(
                "el",
                PlayerOptions(video_id="abc"),
                {PlayerEventType.ERROR: lambda event: seen.append(event.data)},
            )

        assert seen == [150]
        assert exc_info.value.data == 150

    @pytest.mark.asyncio
    async def test_first_settlement_wins(self):
        def ready_then_error(player):
            player.fire("onReady")
            player.fire("onError", 2)

        host = FakeHost(api_loaded=True, on_create=ready_then_error)
        bridge = PlayerBridge(host)
        errors = []

        handle = await bridge.create_player(
            "el",
            PlayerOptions(video_id="abc"),
            {PlayerEventType.ERROR: lambda event: errors.append(event.data)},
        )

        assert errors == [2]
        kinds = [handle.events.get_nowait().type for _ in range(2)]
        assert kinds == [PlayerEventType.READY, PlayerEventType.ERROR]

    @pytest.mark.asyncio
    async def test_later_events_reach_queue(self):
        host = FakeHost(api_loaded=True)
        bridge = PlayerBridge(host)

        handle = await bridge.create_player("el", PlayerOptions(video_id="abc"))
        handle.player.fire("onStateChange", 1)
        handle.player.fire("onPlaybackRateChange", 1.5)

        handle.events.get_nowait()
        assert handle.events.get_nowait().type is PlayerEventType.STATE_CHANGE
        assert handle.events.get_nowait().data == 1.5

    @pytest.mark.asyncio
    async def test_failing_ready_handler_fails_create(self):
        """A raising READY handler settles the awaitable instead of hanging."""
        host = FakeHost(api_loaded=True, on_create=lambda p: None)
        bridge = PlayerBridge(host)

        def broken(event):
            raise ValueError("handler bug")

        task = asyncio.create_task(
            bridge.create_player("el", PlayerOptions(video_id="abc"), {PlayerEventType.READY: broken})
        )
        await asyncio.sleep(0)
        host.players["el"].fire("onReady")
        done, _ = await asyncio.wait({task}, timeout=0.5)

        assert task in done
        with pytest.raises(PlayerError) as exc_info:
            task.result()
        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.asyncio
    async def test_failing_error_handler_still_fails_with_player_error(self):
        host = FakeHost(api_loaded=True, on_create=lambda p: p.fire("onError", 5))
        bridge = PlayerBridge(host)

        def broken(event):
            raise ValueError("handler bug")

        with pytest.raises(PlayerError) as exc_info:
            await bridge.create_player(
                "el", PlayerOptions(video_id="abc"), {PlayerEventType.ERROR: broken}
            )

        assert exc_info.value.data == 5

    @pytest.mark.asyncio
    async def test_construction_failure(self):
        def explode(player):
            raise RuntimeError("no element")

        bridge = PlayerBridge(FakeHost(api_loaded=True, on_create=explode))

        with pytest.raises(PlayerError):
            await bridge.create_player("el", PlayerOptions(video_id="abc"))

    @pytest.mark.asyncio
    async def test_destroy_tears_down_and_removes(self):
        host = FakeHost(api_loaded=True)
        bridge = PlayerBridge(host)
        handle = await bridge.create_player("el", PlayerOptions(video_id="abc"))

        bridge.destroy("el")

        assert handle.player.destroyed
        assert bridge.get_player("el") is None

    def test_destroy_without_teardown_still_removes(self):
        bridge = PlayerBridge(FakeHost())
        bridge._players["el"] = object()

        bridge.destroy("el")

        assert bridge.get_player("el") is None

    def test_destroy_unknown_key(self):
        PlayerBridge(FakeHost()).destroy("missing")


class TestPlayerVars:
    """Tests for option-to-flag mapping."""

    def test_defaults(self):
        flags = player_vars(PlayerOptions(video_id="abc"), "http://localhost:4200")

        assert flags == {
            "controls": 0,
            "rel": 0,
            "modestbranding": 1,
            "autoplay": 0,
            "loop": 0,
            "mute": 0,
            "playsinline": 1,
            "disablekb": 1,
            "iv_load_policy": 3,
            "cc_load_policy": 0,
            "enablejsapi": 1,
            "origin": "http://localhost:4200",
        }

    def test_explicit_false_disables_branding_and_inline(self):
        flags = player_vars(
            PlayerOptions(video_id="abc", modest_branding=False, plays_inline=False, controls=True, rel=1),
            "o",
        )

        assert flags["modestbranding"] == 0
        assert flags["playsinline"] == 0
        assert flags["controls"] == 1
        assert flags["rel"] == 1

    @pytest.mark.asyncio
    async def test_host_receives_options(self):
        host = FakeHost(api_loaded=True)
        bridge = PlayerBridge(host, PlayerConfig(origin="https://lms.example.com"))

        await bridge.create_player("el", PlayerOptions(video_id="abc", width=640))

        options = host.players["el"].options
        assert options["videoId"] == "abc"
        assert options["width"] == 640
        assert options["height"] == "100%"
        assert options["playerVars"]["origin"] == "https://lms.example.com"
