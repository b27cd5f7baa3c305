"""Pydantic schemas for auth token claims and headers."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError

from upload_auth.exceptions import ClaimValidationError, InvalidHeaderError

# Set by the issuer; callers may not supply them as claims
RESERVED_CLAIMS = ("iat", "exp", "nbf", "kid", "alg", "typ")


class AuthClaims(BaseModel):
    """
    Private claims carried in an auth token payload.

    Attributes:
        path: Glob of upload paths the token permits, e.g. "**/*"
    """

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={"example": {"path": "articles/**/*"}},
    )

    path: StrictStr = Field(..., description="Allowed upload path pattern")


class AuthHeader(BaseModel):
    """
    Caller-controlled part of an auth token header.

    Attributes:
        kid: API key id identifying which secret signed the token
    """

    model_config = ConfigDict(extra="forbid")

    kid: StrictStr = Field(..., min_length=1, description="API key id")


def _error_path(error: Mapping[str, Any]) -> str:
    return ".".join(str(part) for part in error["loc"]) or "(root)"


def _error_summary(exc: ValidationError) -> list[dict[str, str]]:
    return [
        {"path": _error_path(error), "type": error["type"], "msg": error["msg"]}
        for error in exc.errors()
    ]


def validate_claims(claims: Mapping[str, Any]) -> dict[str, Any]:
    """
    Validate claims against the auth payload schema.

    Args:
        claims: Caller supplied claims

    Returns:
        Validated claims as a plain dict

    Raises:
        ClaimValidationError: If a claim is reserved, unknown or mistyped
    """
    if not isinstance(claims, Mapping):
        raise ClaimValidationError(
            path="(root)",
            reason=f"claims must be a mapping but is {type(claims).__name__}",
        )

    for name in RESERVED_CLAIMS:
        if name in claims:
            raise ClaimValidationError(
                path=name,
                reason="reserved claim is set by the token issuer",
            )

    try:
        validated = AuthClaims.model_validate(dict(claims))
    except ValidationError as e:
        errors = _error_summary(e)
        first = errors[0]
        raise ClaimValidationError(
            path=first["path"],
            reason=first["msg"],
            details={"errors": errors},
        ) from e

    return validated.model_dump()


def validate_header(key_id: Any) -> dict[str, str]:
    """
    Validate the key id that goes into the auth token header.

    Args:
        key_id: API key id

    Returns:
        Header fields to merge into the token header

    Raises:
        InvalidHeaderError: If key_id is not a non-empty string
    """
    try:
        validated = AuthHeader.model_validate({"kid": key_id})
    except ValidationError as e:
        errors = _error_summary(e)
        if errors[0]["type"] == "string_too_short":
            reason = '"kid" must not be empty'
        else:
            reason = '"kid" must be a string'
        raise InvalidHeaderError(reason, details={"errors": errors}) from e

    return validated.model_dump()
