from __future__ import annotations

import hashlib
import secrets
import threading
from typing import Protocol

from token_exchange.models.authorization_code import AuthorizationCodeDetails


def hash_code(code: str) -> str:
    """Codes are stored by SHA-256 so a dump of the store can't be replayed."""
    return hashlib.sha256(code.encode()).hexdigest()


class AuthCodeRepo(Protocol):
    def issue(self, details: AuthorizationCodeDetails) -> str: ...
    def details_for(self, code: str) -> AuthorizationCodeDetails | None: ...
    def mark_used(self, code: str) -> bool: ...


class InMemoryAuthCodeRepo:
    def __init__(self) -> None:
        self._by_code_hash: dict[str, AuthorizationCodeDetails] = {}
        self._used: set[str] = set()
        self._lock = threading.Lock()

    def issue(self, details: AuthorizationCodeDetails) -> str:
        """Store details under a fresh high-entropy code and return the raw code.

        The raw code is handed to the client once and never kept.
        """
        raw_code = secrets.token_urlsafe(32)
        with self._lock:
            self._by_code_hash[hash_code(raw_code)] = details
        return raw_code

    def details_for(self, code: str) -> AuthorizationCodeDetails | None:
        return self._by_code_hash.get(hash_code(code))

    def mark_used(self, code: str) -> bool:
        """Atomically consume a code. Returns False if the code doesn't
        exist or was already consumed."""
        code_hash = hash_code(code)
        with self._lock:
            if code_hash not in self._by_code_hash:
                return False
            if code_hash in self._used:
                return False
            self._used.add(code_hash)
            return True

    def is_used(self, code: str) -> bool:
        return hash_code(code) in self._used
