"""
Async client for the upload policy service.

Exchanges an auth token and upload props for an upload policy. The response
is returned as parsed JSON without interpreting the HTTP status: a 4xx/5xx
response with a JSON body comes back as a normal result, and callers inspect
the body themselves.
"""

import time
from collections.abc import Mapping
from typing import Any

import httpx

from upload_auth.config import settings
from upload_auth.exceptions import (
    InvalidResponseError,
    TransportError,
    UploadPropsError,
)
from upload_auth.logging.config import get_logger
from upload_auth.schemas.upload import UploadProps

logger = get_logger(__name__)

REQUEST_HEADERS = {
    "Content-Type": "application/json",
    "Cache-Control": "no-cache",
}


def build_request_body(
    token_field: str,
    auth_token: str,
    upload_props: UploadProps | Mapping[str, Any],
) -> dict[str, Any]:
    """
    Build the JSON body for an upload policy request.

    Args:
        token_field: Body field that carries the auth token
        auth_token: Signed auth token
        upload_props: Upload metadata, passed through unchanged

    Returns:
        Request body with the token first, then the upload props

    Raises:
        UploadPropsError: If upload_props already contains token_field
    """
    if isinstance(upload_props, UploadProps):
        props = upload_props.to_request_body()
    else:
        props = dict(upload_props)

    if token_field in props:
        raise UploadPropsError(field=token_field)

    return {token_field: auth_token, **props}


class UploadPolicyClient:
    """
    Async client for the upload policy endpoint.

    Sends exactly one POST per call: no retries, and no timeout beyond the
    httpx defaults of the underlying client.
    """

    def __init__(
        self,
        url: str | None = None,
        token_field: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            url: Upload policy endpoint (defaults to UPLOAD_POLICY_URL)
            token_field: Body field for the auth token (defaults to
                AUTH_TOKEN_FIELD, e.g. "authToken", "permit" or "auth")
            client: httpx.AsyncClient to send with (creates one if None)
        """
        self.url = url or settings.upload_policy_url
        self.token_field = token_field or settings.auth_token_field
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient()

    async def close(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> "UploadPolicyClient":
        """Context manager entry."""
        return self

    async def __aexit__(self, *args: Any) -> None:
        """Context manager exit."""
        await self.close()

    async def fetch_upload_policy(
        self,
        auth_token: str,
        upload_props: UploadProps | Mapping[str, Any],
    ) -> Any:
        """
        Exchange an auth token and upload props for an upload policy.

        Args:
            auth_token: Signed auth token
            upload_props: Location key and file description

        Returns:
            Parsed JSON response body, unmodified

        Raises:
            UploadPropsError: If upload_props contains the token field
            TransportError: If the request cannot complete
            InvalidResponseError: If the response body is not JSON
        """
        body = build_request_body(self.token_field, auth_token, upload_props)

        start_time = time.time()
        try:
            response = await self.client.post(
                self.url, json=body, headers=REQUEST_HEADERS
            )
        except httpx.TransportError as e:
            elapsed_ms = (time.time() - start_time) * 1000
            logger.error(
                "Upload policy request failed",
                exc_info=e,
                extra={
                    "context": {
                        "url": self.url,
                        "response_time_ms": round(elapsed_ms, 2),
                    }
                },
            )
            raise TransportError(
                url=self.url, reason=str(e) or type(e).__name__
            ) from e

        elapsed_ms = (time.time() - start_time) * 1000
        log_context = {
            "url": self.url,
            "status_code": response.status_code,
            "response_time_ms": round(elapsed_ms, 2),
        }
        if response.is_success:
            logger.info(
                "Upload policy received", extra={"context": log_context}
            )
        else:
            logger.warning(
                "Upload policy service returned an error status",
                extra={"context": log_context},
            )

        try:
            return response.json()
        except ValueError as e:
            raise InvalidResponseError(
                url=self.url, status_code=response.status_code
            ) from e


async def fetch_upload_policy(
    url: str,
    auth_token: str,
    upload_props: UploadProps | Mapping[str, Any],
    *,
    token_field: str | None = None,
    client: httpx.AsyncClient | None = None,
) -> Any:
    """
    Exchange an auth token and upload props for an upload policy.

    Args:
        url: Upload policy endpoint
        auth_token: Signed auth token
        upload_props: Location key and file description
        token_field: Body field for the auth token
        client: Optional shared httpx.AsyncClient

    Returns:
        Parsed JSON response body, unmodified
    """
    async with UploadPolicyClient(
        url=url, token_field=token_field, client=client
    ) as policy_client:
        return await policy_client.fetch_upload_policy(auth_token, upload_props)
