from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from fastapi.testclient import TestClient

from token_exchange.api import oauth
from token_exchange.main import app
from token_exchange.models.authorization_code import (
    AuthorizationCodeDetails,
    ResponseType,
)
from token_exchange.models.oauth_client import OAuthClient
from token_exchange.services.client_validator import hash_client_secret
from token_exchange.services.collaborators import FixedClock

CLIENT_ID = "test-client"
CLIENT_SECRET = "test-client-secret"
REDIRECT_URI = "http://localhost/callback"
USER_ID = "test-user"

NOW = datetime(2026, 1, 1, 12, 0, tzinfo=UTC)

# Argon2 is deliberately slow; hash once per session.
_CLIENT_SECRET_HASH = hash_client_secret(CLIENT_SECRET)


@pytest.fixture(autouse=True)
def reset_oauth_state() -> None:
    """Clear the token endpoint's in-memory stores between tests."""
    oauth.auth_code_repo._by_code_hash.clear()
    oauth.auth_code_repo._used.clear()
    oauth.client_repo._by_client_id.clear()


@pytest.fixture
def clock(monkeypatch: pytest.MonkeyPatch) -> FixedClock:
    """Pin the token endpoint's clock to NOW."""
    fixed = FixedClock(NOW)
    monkeypatch.setattr(oauth, "clock", fixed)
    return fixed


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def registered_client() -> OAuthClient:
    return register_test_client()


def register_test_client(client_id: str = CLIENT_ID) -> OAuthClient:
    """Seed the endpoint's client repo with a confidential client."""
    registered = OAuthClient.new(
        client_id=client_id,
        client_secret_hash=_CLIENT_SECRET_HASH,
        redirect_uris=(REDIRECT_URI,),
    )
    oauth.client_repo.register(registered)
    return registered


def code_details(
    *,
    client_id: str = CLIENT_ID,
    redirect_uri: str = REDIRECT_URI,
    expires_at: datetime | None = None,
    response_type: ResponseType = ResponseType.CODE,
    nonce: str | None = None,
) -> AuthorizationCodeDetails:
    return AuthorizationCodeDetails(
        client_id=client_id,
        redirect_uri=redirect_uri,
        expires_at=expires_at or NOW + timedelta(minutes=5),
        response_type=response_type,
        user_id=USER_ID,
        nonce=nonce,
    )


def issue_test_code(**kwargs) -> str:
    """Store a code in the endpoint's repo and return the raw value."""
    return oauth.auth_code_repo.issue(code_details(**kwargs))


def token_form(code: str, **overrides: str) -> dict[str, str]:
    form = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": REDIRECT_URI,
        "client_id": CLIENT_ID,
        "client_secret": CLIENT_SECRET,
    }
    form.update(overrides)
    return form
