"""Token endpoint error taxonomy (RFC 6749 §5.2).

Failures are immutable values returned from the exchange, never raised.
Each variant carries the RFC error code that goes on the wire and a
human-readable description for ``error_description``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Protocol, TypeAlias

from token_exchange.models.access_token import AccessTokenDetails


class RfcError(str, Enum):
    INVALID_CLIENT = "invalid_client"
    INVALID_GRANT = "invalid_grant"
    UNSUPPORTED_GRANT_TYPE = "unsupported_grant_type"


class OAuthError(Protocol):
    @property
    def rfc_error(self) -> RfcError: ...

    @property
    def description(self) -> str: ...


@dataclass(frozen=True, slots=True)
class AccessTokenError:
    """Base of every token endpoint failure."""

    rfc_error: ClassVar[RfcError]
    _description: ClassVar[str] = ""

    @property
    def description(self) -> str:
        return self._description


@dataclass(frozen=True, slots=True)
class UnsupportedGrantType(AccessTokenError):
    requested_grant_type: str

    rfc_error: ClassVar[RfcError] = RfcError.UNSUPPORTED_GRANT_TYPE

    @property
    def description(self) -> str:
        return f"{self.requested_grant_type} is not supported"


@dataclass(frozen=True, slots=True)
class InvalidClientCredentials(AccessTokenError):
    """The only client-authentication failure; rendered as 401."""

    rfc_error: ClassVar[RfcError] = RfcError.INVALID_CLIENT
    _description: ClassVar[str] = "Client authentication failed"


@dataclass(frozen=True, slots=True)
class AuthorizationCodeNotFound(AccessTokenError):
    rfc_error: ClassVar[RfcError] = RfcError.INVALID_GRANT
    _description: ClassVar[str] = "The authorization code is invalid"


@dataclass(frozen=True, slots=True)
class AuthorizationCodeExpired(AccessTokenError):
    rfc_error: ClassVar[RfcError] = RfcError.INVALID_GRANT
    _description: ClassVar[str] = "The authorization code has expired"


@dataclass(frozen=True, slots=True)
class InvalidClientId(AccessTokenError):
    rfc_error: ClassVar[RfcError] = RfcError.INVALID_GRANT
    _description: ClassVar[str] = (
        "The 'client_id' parameter does not match the authorization request"
    )


@dataclass(frozen=True, slots=True)
class InvalidRedirectUri(AccessTokenError):
    rfc_error: ClassVar[RfcError] = RfcError.INVALID_GRANT
    _description: ClassVar[str] = (
        "The 'redirect_uri' parameter does not match the authorization request"
    )


@dataclass(frozen=True, slots=True)
class AuthorizationCodeAlreadyUsed(AccessTokenError):
    """Returned by the access token issuer when the code was consumed before."""

    rfc_error: ClassVar[RfcError] = RfcError.INVALID_GRANT
    _description: ClassVar[str] = "The authorization code has already been used"


AccessTokenResult: TypeAlias = AccessTokenDetails | AccessTokenError
