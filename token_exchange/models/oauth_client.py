from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(frozen=True, slots=True)
class OAuthClient:
    """A registered confidential client.

    Only the Argon2 hash of the client secret is kept; see
    services.client_validator.hash_client_secret.
    """

    id: UUID
    client_id: str
    client_secret_hash: str
    redirect_uris: tuple[str, ...]

    @staticmethod
    def new(
        *,
        client_id: str,
        client_secret_hash: str,
        redirect_uris: tuple[str, ...],
    ) -> OAuthClient:
        return OAuthClient(
            id=uuid4(),
            client_id=client_id,
            client_secret_hash=client_secret_hash,
            redirect_uris=tuple(redirect_uris),
        )
