from __future__ import annotations

import logging

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError

from token_exchange.repos.oauth_client_repo import OAuthClientRepo

logger = logging.getLogger(__name__)

_ph = PasswordHasher()


def hash_client_secret(plain_secret: str) -> str:
    if not plain_secret:
        raise ValueError("client secret must be non-empty")
    # Argon2 encodes salt + parameters into the returned string
    return _ph.hash(plain_secret)


def verify_client_secret(plain_secret: str, secret_hash: str) -> bool:
    if not plain_secret or not secret_hash:
        return False
    try:
        return _ph.verify(secret_hash, plain_secret)
    except (VerifyMismatchError, VerificationError, InvalidHash):
        return False


class RepoClientValidator:
    """ClientValidator backed by the registered-client repo."""

    def __init__(self, repo: OAuthClientRepo) -> None:
        self._repo = repo

    def validate_credentials(self, client_id: str, client_secret: str) -> bool:
        client = self._repo.get(client_id)
        if client is None:
            logger.debug("Unknown client_id=%s", client_id)
            return False
        if not verify_client_secret(client_secret, client.client_secret_hash):
            return False

        # Upgrade the stored hash when the hasher parameters have moved on.
        try:
            if _ph.check_needs_rehash(client.client_secret_hash):
                self._repo.update_secret_hash(client_id, _ph.hash(client_secret))
                logger.info("Rehashed client secret for client_id=%s", client_id)
        except InvalidHash:
            return False

        return True
