"""Demo: walk the authorization_code exchange using FastAPI TestClient.

Run with:
    python scripts/demo_token_exchange.py
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from fastapi.testclient import TestClient

from token_exchange.api import oauth
from token_exchange.main import app
from token_exchange.models.authorization_code import (
    AuthorizationCodeDetails,
    ResponseType,
)
from token_exchange.models.oauth_client import OAuthClient
from token_exchange.services.client_validator import hash_client_secret

CLIENT_ID = "demo-client"
CLIENT_SECRET = "demo-secret"
REDIRECT_URI = "http://localhost/callback"


def _issue_code(response_type: ResponseType, *, ttl: timedelta) -> str:
    return oauth.auth_code_repo.issue(
        AuthorizationCodeDetails(
            client_id=CLIENT_ID,
            redirect_uri=REDIRECT_URI,
            expires_at=datetime.now(UTC) + ttl,
            response_type=response_type,
            user_id="demo-user",
            nonce="demo-nonce",
        )
    )


def _form(code: str, **overrides: str) -> dict[str, str]:
    form = {
        "grant_type": "authorization_code",
        "code": code,
        "redirect_uri": REDIRECT_URI,
        "client_id": CLIENT_ID,
        "client_secret": CLIENT_SECRET,
    }
    form.update(overrides)
    return form


def main() -> None:
    client = TestClient(app)

    # ── Seed data ───────────────────────────────────────────────────
    oauth.client_repo.register(
        OAuthClient.new(
            client_id=CLIENT_ID,
            client_secret_hash=hash_client_secret(CLIENT_SECRET),
            redirect_uris=(REDIRECT_URI,),
        )
    )

    # ── Step 1: response_type=code ──────────────────────────────────
    code = _issue_code(ResponseType.CODE, ttl=timedelta(minutes=5))
    r = client.post("/oauth/token", data=_form(code))
    print(f"1. code             → {r.status_code}  token={r.text[:20]}…")

    # ── Step 2: replay the same code ────────────────────────────────
    r = client.post("/oauth/token", data=_form(code))
    print(f"2. replay           → {r.status_code}  {r.json()}")

    # ── Step 3: response_type=code id_token ─────────────────────────
    code = _issue_code(ResponseType.CODE_ID_TOKEN, ttl=timedelta(minutes=5))
    r = client.post("/oauth/token", data=_form(code))
    body = r.json()
    print(
        f"3. code id_token    → {r.status_code}  "
        f"access_token={body['access_token'][:20]}…  "
        f"id_token={body['id_token'][:20]}…"
    )

    # ── Step 4: wrong secret ────────────────────────────────────────
    code = _issue_code(ResponseType.CODE, ttl=timedelta(minutes=5))
    r = client.post("/oauth/token", data=_form(code, client_secret="wrong"))
    print(f"4. bad secret       → {r.status_code}  {r.json()}")

    # ── Step 5: expired code ────────────────────────────────────────
    code = _issue_code(ResponseType.CODE, ttl=timedelta(seconds=-1))
    r = client.post("/oauth/token", data=_form(code))
    print(f"5. expired code     → {r.status_code}  {r.json()}")

    # ── Step 6: unsupported grant ───────────────────────────────────
    r = client.post("/oauth/token", data=_form(code, grant_type="password"))
    print(f"6. password grant   → {r.status_code}  {r.json()}")

    print("\nAll steps completed.")


if __name__ == "__main__":
    main()
