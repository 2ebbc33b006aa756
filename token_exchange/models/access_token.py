from __future__ import annotations

from dataclasses import dataclass

AUTHORIZATION_CODE_GRANT = "authorization_code"


@dataclass(frozen=True, slots=True)
class AccessTokenRequest:
    """Normalized POST /oauth/token parameters (RFC 6749 §4.1.3)."""

    grant_type: str
    client_id: str
    client_secret: str
    authorization_code: str
    redirect_uri: str

    def __repr__(self) -> str:
        # Keep the secret and the code out of reprs (and therefore logs)
        return (
            f"AccessTokenRequest(grant_type={self.grant_type!r}, "
            f"client_id={self.client_id!r}, redirect_uri={self.redirect_uri!r})"
        )


@dataclass(frozen=True, slots=True)
class AccessToken:
    value: str

    def __repr__(self) -> str:
        return "AccessToken(<redacted>)"


@dataclass(frozen=True, slots=True)
class IdToken:
    value: str

    def __repr__(self) -> str:
        return "IdToken(<redacted>)"


@dataclass(frozen=True, slots=True)
class AccessTokenDetails:
    """Successful exchange result.

    id_token is set only when the code was issued for response_type
    "code id_token".  AccessTokenExchange is the only place that builds
    these, so the pairing follows the stored code's response type.
    """

    access_token: AccessToken
    id_token: IdToken | None = None
