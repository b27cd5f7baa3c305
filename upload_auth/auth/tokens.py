"""Functions for issuing and verifying upload auth tokens."""

import time
from collections.abc import Mapping
from typing import Any

import jwt

from upload_auth.exceptions import (
    InvalidTokenError,
    MissingSecretError,
    TokenExpiredError,
)
from upload_auth.logging.config import get_logger
from upload_auth.schemas.token import validate_claims, validate_header
from upload_auth.utils.duration import parse_expires_in

logger = get_logger(__name__)

ALGORITHM = "HS256"
TOKEN_TYPE = "JWT"


def issue_auth_token(
    claims: Mapping[str, Any],
    *,
    key_id: str,
    secret_key: str | None = None,
    expires_in: int | str,
) -> str:
    """
    Sign claims into an auth token.

    ``key_id`` and ``secret_key`` are kept apart from ``claims`` so that
    neither can end up in the signed payload by accident.

    Args:
        claims: Private claims, validated against AuthClaims
        key_id: API key id, placed in the header as kid
        secret_key: API secret key used as the HMAC secret
        expires_in: Lifetime in seconds or a duration like "1h"

    Returns:
        Compact JWT: base64url(header).base64url(payload).base64url(signature)

    Raises:
        ClaimValidationError: If claims do not match the payload schema
        InvalidHeaderError: If key_id is not a non-empty string
        MissingSecretError: If secret_key is missing or empty
        InvalidExpiresInError: If expires_in is not a positive lifetime
    """
    validated_claims = validate_claims(claims)
    header = validate_header(key_id)
    if not secret_key:
        raise MissingSecretError()
    lifetime = parse_expires_in(expires_in)

    issued_at = int(time.time())
    payload = {
        **validated_claims,
        "iat": issued_at,
        "exp": issued_at + lifetime,
    }
    token = jwt.encode(
        payload,
        secret_key,
        algorithm=ALGORITHM,
        headers={**header, "typ": TOKEN_TYPE},
    )

    logger.info(
        "Auth token issued",
        extra={
            "context": {
                "key_id": key_id,
                "path": validated_claims["path"],
                "exp": payload["exp"],
            }
        },
    )
    return token


def verify_auth_token(
    token: str, secret_key: str, *, verify_exp: bool = True
) -> dict[str, Any]:
    """
    Verify an auth token and return its header and payload.

    Args:
        token: Compact JWT issued by issue_auth_token
        secret_key: API secret key the token was signed with
        verify_exp: Reject tokens past their exp claim

    Returns:
        Dict with "header" and "payload"

    Raises:
        MissingSecretError: If secret_key is missing or empty
        TokenExpiredError: If the token has expired
        InvalidTokenError: If the token is malformed or the signature is bad
    """
    if not secret_key:
        raise MissingSecretError()

    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=[ALGORITHM],
            options={"require": ["iat", "exp"], "verify_exp": verify_exp},
        )
        header = jwt.get_unverified_header(token)
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError() from e
    except jwt.InvalidTokenError as e:
        raise InvalidTokenError(f"Invalid auth token: {e}") from e

    return {"header": header, "payload": payload}
