from __future__ import annotations

from dataclasses import replace
from typing import Protocol

from token_exchange.models.oauth_client import OAuthClient


class OAuthClientRepo(Protocol):
    def get(self, client_id: str) -> OAuthClient | None: ...
    def register(self, client: OAuthClient) -> None: ...
    def update_secret_hash(self, client_id: str, secret_hash: str) -> None: ...


class InMemoryOAuthClientRepo:
    def __init__(self) -> None:
        self._by_client_id: dict[str, OAuthClient] = {}

    def get(self, client_id: str) -> OAuthClient | None:
        return self._by_client_id.get(client_id)

    def register(self, client: OAuthClient) -> None:
        self._by_client_id[client.client_id] = client

    def update_secret_hash(self, client_id: str, secret_hash: str) -> None:
        client = self._by_client_id.get(client_id)
        if client is None:
            return
        self._by_client_id[client_id] = replace(client, client_secret_hash=secret_hash)

    def __len__(self) -> int:
        return len(self._by_client_id)
