"""Logout flow.

Calls the backend once, always ends with the local token removed, and
navigates to the login route after a fixed delay. A backend failure is
masked: the user sees a normal sign-out message.
"""

from __future__ import annotations

import asyncio
from enum import Enum, auto
from typing import Awaitable, Callable

import structlog

from academy.api.errors import ApiError
from academy.auth.token_store import TokenStore
from academy.config.app_config import AuthConfig

logger = structlog.get_logger(__name__)

Navigator = Callable[[str], object]
Sleeper = Callable[[float], Awaitable[object]]

MESSAGE_LOGGING_OUT = "Logging out..."
MESSAGE_SUCCESS = "You have been logged out successfully"
MESSAGE_FORCED = "You have been logged out"


class LogoutState(Enum):
    """Progress of one logout invocation."""

    IDLE = auto()
    LOGGING_OUT = auto()
    SUCCESS = auto()
    FORCED_SUCCESS = auto()


class LogoutController:
    """Orchestrates a single logout.

    Args:
        logout_call: Awaitable backend logout (usually ``AuthClient.logout``)
        store: Token store whose ``authToken`` is removed on failure
        navigate: Called with the login route once the delay has passed
        config: Login route and redirect delay
        sleep: Delay function (``asyncio.sleep`` unless a test replaces it)
    """

    def __init__(
        self,
        logout_call: Callable[[], Awaitable[object]],
        store: TokenStore,
        navigate: Navigator,
        config: AuthConfig | None = None,
        sleep: Sleeper = asyncio.sleep,
    ):
        self._logout_call = logout_call
        self._store = store
        self._navigate = navigate
        self.config = config or AuthConfig()
        self._sleep = sleep
        self.state = LogoutState.IDLE
        self.message = ""

    @property
    def is_loading(self) -> bool:
        return self.state is LogoutState.LOGGING_OUT

    async def logout(self) -> LogoutState:
        """Run the flow to completion and return the final state.

        Never raises for backend failures.
        """
        self.state = LogoutState.LOGGING_OUT
        self.message = MESSAGE_LOGGING_OUT

        try:
            await self._logout_call()
        except ApiError as e:
            logger.warning("logout_backend_failed", error=str(e))
            self._store.remove_token()
            self.state = LogoutState.FORCED_SUCCESS
            self.message = MESSAGE_FORCED
        else:
            self.state = LogoutState.SUCCESS
            self.message = MESSAGE_SUCCESS

        logger.info("logout_finished", state=self.state.name)
        await self._sleep(self.config.logout_redirect_delay)
        self.redirect_to_login()
        return self.state

    def redirect_to_login(self) -> None:
        self._navigate(self.config.login_route)
