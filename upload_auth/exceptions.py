"""Custom exception classes for upload authorization."""

from typing import Any


class UploadAuthError(Exception):
    """Base exception for upload authorization."""

    def __init__(
        self,
        message: str,
        error_code: str = "UPLOAD_AUTH_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ApiKeyError(UploadAuthError):
    """Raised when a composite API key cannot be parsed."""


class MalformedKeyError(ApiKeyError):
    """Raised when an API key does not split into exactly three parts."""

    def __init__(
        self,
        segments: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize MalformedKeyError.

        Args:
            segments: Number of segments the key actually split into
            details: Additional error details
        """
        error_details = details or {}
        error_details["segments"] = segments
        super().__init__(
            message=(
                "Expected apiKey to split on _ into exactly 3 parts "
                f"but is {segments}"
            ),
            error_code="MALFORMED_API_KEY",
            details=error_details,
        )
        self.segments = segments


class InvalidKeyTagError(ApiKeyError):
    """Raised when the first part of an API key is not the expected tag."""

    def __init__(
        self,
        key_type: str,
        expected: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize InvalidKeyTagError.

        Args:
            key_type: Tag observed in the API key
            expected: Tag the API key must start with
            details: Additional error details
        """
        error_details = details or {}
        error_details["key_type"] = key_type
        super().__init__(
            message=(
                f"Expected first part of API key to be {expected} "
                f'but is "{key_type}"'
            ),
            error_code="INVALID_API_KEY_TAG",
            details=error_details,
        )
        self.key_type = key_type


class TokenIssueError(UploadAuthError):
    """Raised when an auth token cannot be issued."""


class ClaimValidationError(TokenIssueError):
    """Raised when claims fail validation against the payload schema."""

    def __init__(
        self,
        path: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize ClaimValidationError.

        Args:
            path: Dotted path of the offending claim
            reason: Why the claim was rejected
            details: Additional error details
        """
        error_details = details or {}
        error_details["path"] = path
        super().__init__(
            message=f"Error validating JWT Payload. At path: {path} -- {reason}",
            error_code="INVALID_CLAIMS",
            details=error_details,
        )
        self.path = path


class InvalidHeaderError(TokenIssueError):
    """Raised when the token header (key id) is invalid."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=f"Error validating JWT Header: {message}",
            error_code="INVALID_HEADER",
            details=details,
        )


class MissingSecretError(TokenIssueError):
    """Raised when no secret key is available for signing."""

    def __init__(
        self,
        message: str = "secretOrPrivateKey must have a value",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            error_code="MISSING_SECRET",
            details=details,
        )


class InvalidExpiresInError(TokenIssueError):
    """Raised when expires_in is neither a positive int nor a duration."""

    def __init__(
        self,
        value: Any,
        details: dict[str, Any] | None = None,
    ) -> None:
        error_details = details or {}
        error_details["expires_in"] = repr(value)
        super().__init__(
            message=(
                "Expected expiresIn to be a positive number of seconds or a "
                f'duration like "60s", "15m", "1h", "1d" but is {value!r}'
            ),
            error_code="INVALID_EXPIRES_IN",
            details=error_details,
        )


class InvalidTokenError(UploadAuthError):
    """Raised when an auth token fails verification."""

    def __init__(
        self,
        message: str = "Invalid auth token",
        error_code: str = "INVALID_TOKEN",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message, error_code=error_code, details=details
        )


class TokenExpiredError(InvalidTokenError):
    """Raised when an auth token is past its exp claim."""

    def __init__(
        self,
        message: str = "Auth token has expired",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message, error_code="TOKEN_EXPIRED", details=details
        )


class UploadPolicyError(UploadAuthError):
    """Raised when an upload policy cannot be obtained."""


class TransportError(UploadPolicyError):
    """Raised when the request to the upload policy service cannot complete."""

    def __init__(
        self,
        url: str,
        reason: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize TransportError.

        Args:
            url: Upload policy endpoint that was called
            reason: Description of the underlying network failure
            details: Additional error details
        """
        error_details = details or {}
        error_details["url"] = url
        super().__init__(
            message=f"Request to {url} failed: {reason}",
            error_code="TRANSPORT_ERROR",
            details=error_details,
        )
        self.url = url


class InvalidResponseError(UploadPolicyError):
    """Raised when the upload policy service responds with a non-JSON body."""

    def __init__(
        self,
        url: str,
        status_code: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        error_details = details or {}
        error_details["url"] = url
        error_details["status_code"] = status_code
        super().__init__(
            message=(
                f"Expected a JSON response from {url} "
                f"but got an unparseable body (status {status_code})"
            ),
            error_code="INVALID_RESPONSE",
            details=error_details,
        )
        self.status_code = status_code


class UploadPropsError(UploadPolicyError):
    """Raised when upload props collide with the auth token field."""

    def __init__(
        self,
        field: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        error_details = details or {}
        error_details["field"] = field
        super().__init__(
            message=(
                f'Upload props must not contain "{field}"; '
                "it is reserved for the auth token"
            ),
            error_code="INVALID_UPLOAD_PROPS",
            details=error_details,
        )
