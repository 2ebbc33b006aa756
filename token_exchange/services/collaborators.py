from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol

from token_exchange.models.access_token import AccessToken, IdToken
from token_exchange.models.authorization_code import AuthorizationCodeDetails
from token_exchange.models.errors import AccessTokenError

# Capabilities the token exchange is built from.  Production wiring lives
# in api/oauth.py; tests pass fakes.


class ClientValidator(Protocol):
    def validate_credentials(self, client_id: str, client_secret: str) -> bool: ...


class AuthorizationCodes(Protocol):
    def details_for(self, code: str) -> AuthorizationCodeDetails | None: ...


class AccessTokens(Protocol):
    def create(self, code: str) -> AccessToken | AccessTokenError:
        """Issue a token for the code, consuming it.

        Must check-and-consume atomically; a second call for the same code
        returns AuthorizationCodeAlreadyUsed.
        """
        ...


class IdTokens(Protocol):
    def create_for_access_token(self, code: str) -> IdToken: ...


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(UTC)


class FixedClock:
    """Clock pinned to one instant. Used by tests and scripts."""

    def __init__(self, instant: datetime) -> None:
        self._instant = instant

    def now(self) -> datetime:
        return self._instant

    def set(self, instant: datetime) -> None:
        self._instant = instant
