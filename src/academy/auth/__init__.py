"""Session handling: credential storage, auth calls and logout."""

from academy.auth.client import AuthClient
from academy.auth.logout import LogoutController, LogoutState
from academy.auth.token_store import TOKEN_KEY, USER_KEY, TokenStore

__all__ = [
    "AuthClient",
    "LogoutController",
    "LogoutState",
    "TOKEN_KEY",
    "USER_KEY",
    "TokenStore",
]
