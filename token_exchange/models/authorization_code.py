from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class ResponseType(str, Enum):
    """response_type the code was issued for at /authorize time.

    CODE_ID_TOKEN is the OpenID Connect hybrid flow: the token endpoint
    must return an identity token next to the access token.
    """

    CODE = "code"
    CODE_ID_TOKEN = "code id_token"


@dataclass(frozen=True, slots=True)
class AuthorizationCodeDetails:
    """What the authorization server recorded when it issued a code.

    Owned by the code store; the token exchange only reads it.
    expires_at must be timezone-aware.
    """

    client_id: str
    redirect_uri: str
    expires_at: datetime
    response_type: ResponseType
    user_id: str
    nonce: str | None = None

    @property
    def wants_id_token(self) -> bool:
        return self.response_type is ResponseType.CODE_ID_TOKEN
