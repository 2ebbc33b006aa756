from __future__ import annotations

from fastapi import APIRouter, Form, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel

from token_exchange.core.metrics import ID_TOKENS_ISSUED, TOKEN_EXCHANGES
from token_exchange.models.access_token import AccessTokenRequest
from token_exchange.models.errors import (
    AccessTokenError,
    InvalidClientCredentials,
    OAuthError,
)
from token_exchange.repos.auth_code_repo import InMemoryAuthCodeRepo
from token_exchange.repos.oauth_client_repo import InMemoryOAuthClientRepo
from token_exchange.services.access_token_exchange import AccessTokenExchange
from token_exchange.services.client_validator import RepoClientValidator
from token_exchange.services.collaborators import Clock, SystemClock
from token_exchange.services.token_service import JwtAccessTokens, JwtIdTokens

# ---------------------------------------------------------------------------
# Token endpoint: authorization_code grant
#
#   POST /oauth/token  : exchange code + client credentials for tokens
#
# All decisions are made by AccessTokenExchange; this module only parses the
# form, picks the status code and renders the body.
# ---------------------------------------------------------------------------

router = APIRouter(tags=["oauth"])

# Module-level singletons (swap for DI / app state when storage is persistent)
auth_code_repo = InMemoryAuthCodeRepo()
client_repo = InMemoryOAuthClientRepo()
clock: Clock = SystemClock()

exchange = AccessTokenExchange(
    client_validator=RepoClientValidator(client_repo),
    authorization_codes=auth_code_repo,
    access_tokens=JwtAccessTokens(auth_code_repo),
    id_tokens=JwtIdTokens(auth_code_repo),
)

# RFC 6749 §5.1: token responses must not be cached
_NO_STORE = {"Cache-Control": "no-store", "Pragma": "no-cache"}


class AccessTokenResponse(BaseModel):
    access_token: str
    id_token: str


class ErrorResponse(BaseModel):
    error: str
    error_description: str


def render_error(status_code: int, error: OAuthError) -> JSONResponse:
    """RFC 6749 §5.2 error body."""
    body = ErrorResponse(
        error=error.rfc_error.value, error_description=error.description
    )
    headers = dict(_NO_STORE)
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers["WWW-Authenticate"] = "Basic"
    return JSONResponse(
        status_code=status_code, content=body.model_dump(), headers=headers
    )


@router.post("/oauth/token", response_model=None)
def token(
    grant_type: str = Form(...),
    code: str = Form(...),
    redirect_uri: str = Form(...),
    client_id: str = Form(...),
    client_secret: str = Form(...),
) -> Response:
    # NOTE: never log client_secret or code.
    request = AccessTokenRequest(
        grant_type=grant_type,
        client_id=client_id,
        client_secret=client_secret,
        authorization_code=code,
        redirect_uri=redirect_uri,
    )
    result = exchange.evaluate(request, clock.now())

    if isinstance(result, AccessTokenError):
        TOKEN_EXCHANGES.labels(outcome=result.rfc_error.value).inc()
        # invalid_client is a client authentication failure → 401; everything
        # else is a bad request.
        if isinstance(result, InvalidClientCredentials):
            return render_error(status.HTTP_401_UNAUTHORIZED, result)
        return render_error(status.HTTP_400_BAD_REQUEST, result)

    TOKEN_EXCHANGES.labels(outcome="issued").inc()
    if result.id_token is None:
        return PlainTextResponse(result.access_token.value, headers=_NO_STORE)

    ID_TOKENS_ISSUED.inc()
    body = AccessTokenResponse(
        access_token=result.access_token.value, id_token=result.id_token.value
    )
    return JSONResponse(content=body.model_dump(), headers=_NO_STORE)
