from __future__ import annotations

import logging
from datetime import datetime

from token_exchange.models.access_token import (
    AUTHORIZATION_CODE_GRANT,
    AccessTokenDetails,
    AccessTokenRequest,
)
from token_exchange.models.authorization_code import ResponseType
from token_exchange.models.errors import (
    AccessTokenError,
    AccessTokenResult,
    AuthorizationCodeExpired,
    AuthorizationCodeNotFound,
    InvalidClientCredentials,
    InvalidClientId,
    InvalidRedirectUri,
    UnsupportedGrantType,
)
from token_exchange.services.collaborators import (
    AccessTokens,
    AuthorizationCodes,
    ClientValidator,
    IdTokens,
)

# ---------------------------------------------------------------------------
# Authorization code grant: token request validation (RFC 6749 §4.1.3)
#
# Checks run in a fixed order and the first failure wins; which error the
# client sees depends on that order.  Nothing is consumed until every check
# has passed, and the code is consumed exactly once (by AccessTokens.create).
# ---------------------------------------------------------------------------

logger = logging.getLogger(__name__)


class AccessTokenExchange:
    def __init__(
        self,
        *,
        client_validator: ClientValidator,
        authorization_codes: AuthorizationCodes,
        access_tokens: AccessTokens,
        id_tokens: IdTokens,
    ) -> None:
        self._client_validator = client_validator
        self._authorization_codes = authorization_codes
        self._access_tokens = access_tokens
        self._id_tokens = id_tokens

    def evaluate(self, request: AccessTokenRequest, now: datetime) -> AccessTokenResult:
        """Exchange an authorization code for tokens.

        Returns AccessTokenDetails on success or the AccessTokenError for the
        first failed check.  Never raises for a rejected request; exceptions
        from collaborators propagate untouched.
        """
        if request.grant_type != AUTHORIZATION_CODE_GRANT:
            return self._reject(request, UnsupportedGrantType(request.grant_type))

        if not self._client_validator.validate_credentials(
            request.client_id, request.client_secret
        ):
            return self._reject(request, InvalidClientCredentials())

        code = request.authorization_code
        details = self._authorization_codes.details_for(code)
        if details is None:
            return self._reject(request, AuthorizationCodeNotFound())

        if details.expires_at <= now:
            return self._reject(request, AuthorizationCodeExpired())
        if details.client_id != request.client_id:
            return self._reject(request, InvalidClientId())
        if details.redirect_uri != request.redirect_uri:
            return self._reject(request, InvalidRedirectUri())

        token = self._access_tokens.create(code)
        if isinstance(token, AccessTokenError):
            # Issuer errors (e.g. code already used) are passed through as-is.
            return self._reject(request, token)

        if details.response_type is ResponseType.CODE:
            result = AccessTokenDetails(token)
        else:
            result = AccessTokenDetails(
                token, self._id_tokens.create_for_access_token(code)
            )

        logger.info(
            "Token exchange succeeded  client_id=%s response_type=%s",
            request.client_id,
            details.response_type.value,
            extra={"client_id": request.client_id, "grant_type": request.grant_type},
        )
        return result

    @staticmethod
    def _reject(
        request: AccessTokenRequest, error: AccessTokenError
    ) -> AccessTokenError:
        logger.warning(
            "Token exchange rejected  client_id=%s error=%s reason=%s",
            request.client_id,
            error.rfc_error.value,
            type(error).__name__,
            extra={
                "client_id": request.client_id,
                "grant_type": request.grant_type,
                "rfc_error": error.rfc_error.value,
            },
        )
        return error
