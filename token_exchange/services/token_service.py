"""JWT access and identity token creation and validation (ES256).

Both token kinds share one signing key and issuer; the audience claim
keeps them apart.  Access tokens are audienced to this service, identity
tokens to the client that requested them (OIDC Core §2).
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime, timedelta

import jwt
from cryptography.hazmat.primitives.asymmetric import ec

from token_exchange.core.config import SETTINGS
from token_exchange.models.access_token import AccessToken, IdToken
from token_exchange.models.errors import AccessTokenError, AuthorizationCodeAlreadyUsed
from token_exchange.repos.auth_code_repo import AuthCodeRepo

# ---------------------------------------------------------------------------
# Key management
# ---------------------------------------------------------------------------
# Dev/test: ephemeral EC key pair generated on import.
# Production: load from env var, file, or KMS (not implemented yet).
_private_key = ec.generate_private_key(ec.SECP256R1())
_public_key = _private_key.public_key()

ALGORITHM = "ES256"
ISSUER = SETTINGS.token_issuer
AUDIENCE = SETTINGS.token_issuer
ACCESS_TOKEN_TTL_MIN = SETTINGS.access_token_ttl_min
ID_TOKEN_TTL_MIN = SETTINGS.id_token_ttl_min


def create_access_token(*, sub: str, client_id: str) -> str:
    """Build and sign a JWT access token (claims per RFC 9068)."""
    now = datetime.now(UTC)
    payload = {
        "sub": sub,
        "iss": ISSUER,
        "aud": AUDIENCE,
        "client_id": client_id,
        "exp": now + timedelta(minutes=ACCESS_TOKEN_TTL_MIN),
        "iat": now,
        "jti": str(uuid.uuid4()),
    }
    return jwt.encode(payload, _private_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    """Verify signature and claims, return the payload.

    Pins the algorithm to ES256 so alg:none / alg-switching tokens fail.
    Raises jwt.ExpiredSignatureError, jwt.InvalidTokenError on failure.
    """
    return jwt.decode(
        token,
        _public_key,
        algorithms=[ALGORITHM],
        issuer=ISSUER,
        audience=AUDIENCE,
        options={"require": ["sub", "exp", "iat", "jti", "client_id"]},
    )


def create_id_token(*, sub: str, client_id: str, nonce: str | None = None) -> str:
    now = datetime.now(UTC)
    payload: dict[str, object] = {
        "sub": sub,
        "iss": ISSUER,
        "aud": client_id,
        "exp": now + timedelta(minutes=ID_TOKEN_TTL_MIN),
        "iat": now,
    }
    if nonce is not None:
        payload["nonce"] = nonce
    return jwt.encode(payload, _private_key, algorithm=ALGORITHM)


def decode_id_token(token: str, *, client_id: str) -> dict:
    """Verify an identity token as the client named by client_id would.

    Raises jwt.ExpiredSignatureError, jwt.InvalidTokenError on failure.
    """
    return jwt.decode(
        token,
        _public_key,
        algorithms=[ALGORITHM],
        issuer=ISSUER,
        audience=client_id,
        options={"require": ["sub", "exp", "iat"]},
    )


# ---------------------------------------------------------------------------
# Issuers plugged into AccessTokenExchange
# ---------------------------------------------------------------------------


class JwtAccessTokens:
    """Consumes the authorization code, then signs an access token for it."""

    def __init__(self, codes: AuthCodeRepo) -> None:
        self._codes = codes

    def create(self, code: str) -> AccessToken | AccessTokenError:
        details = self._codes.details_for(code)
        if details is None or not self._codes.mark_used(code):
            return AuthorizationCodeAlreadyUsed()
        return AccessToken(
            create_access_token(sub=details.user_id, client_id=details.client_id)
        )


class JwtIdTokens:
    def __init__(self, codes: AuthCodeRepo) -> None:
        self._codes = codes

    def create_for_access_token(self, code: str) -> IdToken:
        details = self._codes.details_for(code)
        if details is None:
            # Only reachable if the code vanished between issuing the access
            # token and this call; that is a store fault, not a client error.
            raise LookupError("authorization code disappeared during exchange")
        return IdToken(
            create_id_token(
                sub=details.user_id, client_id=details.client_id, nonce=details.nonce
            )
        )
