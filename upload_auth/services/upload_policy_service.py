"""Service layer that turns an API key into an upload policy."""

from collections.abc import Mapping
from typing import Any

import httpx

from upload_auth.auth.api_key import parse_api_key
from upload_auth.auth.tokens import issue_auth_token
from upload_auth.clients.upload_policy import UploadPolicyClient
from upload_auth.logging.config import get_logger
from upload_auth.schemas.upload import UploadProps

logger = get_logger(__name__)


def generate_auth_token(
    api_key: str, *, expires_in: int | str, **claims: Any
) -> str:
    """
    Issue an auth token directly from a composite API key.

    The token can be handed to a browser, which then fetches its own upload
    policy; the API key itself stays on the server.

    Args:
        api_key: Composite API key (PRTV_<key_id>_<secret_key>)
        expires_in: Lifetime in seconds or a duration like "1h"
        **claims: Private claims, e.g. path="**/*"

    Returns:
        Signed auth token
    """
    parts = parse_api_key(api_key)
    return issue_auth_token(
        claims,
        key_id=parts.key_id,
        secret_key=parts.secret_key,
        expires_in=expires_in,
    )


class UploadPolicyService:
    """
    Orchestrates key parsing, token issuance and the policy request.

    The three steps run strictly in order. Errors from each step propagate
    unchanged, and nothing is sent over the network unless a token was
    issued.
    """

    def __init__(self, policy_client: UploadPolicyClient | None = None) -> None:
        """
        Initialize UploadPolicyService.

        Args:
            policy_client: UploadPolicyClient instance (creates new if None)
        """
        self.policy_client = policy_client or UploadPolicyClient()

    async def close(self) -> None:
        """Close the underlying policy client."""
        await self.policy_client.close()

    async def __aenter__(self) -> "UploadPolicyService":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def fetch_upload_policy(
        self,
        api_key: str,
        upload_props: UploadProps | Mapping[str, Any],
        *,
        expires_in: int | str,
        **claims: Any,
    ) -> Any:
        """
        Fetch an upload policy on the server using an API key.

        Args:
            api_key: Composite API key
            upload_props: Location key and file description
            expires_in: Auth token lifetime
            **claims: Private claims for the auth token

        Returns:
            Parsed upload policy response
        """
        auth_token = generate_auth_token(
            api_key, expires_in=expires_in, **claims
        )
        logger.debug(
            "Requesting upload policy",
            extra={"context": {"url": self.policy_client.url}},
        )
        return await self.policy_client.fetch_upload_policy(
            auth_token, upload_props
        )


async def fetch_upload_policy_with_api_key(
    api_key: str,
    upload_props: UploadProps | Mapping[str, Any],
    *,
    expires_in: int | str,
    url: str | None = None,
    token_field: str | None = None,
    client: httpx.AsyncClient | None = None,
    **claims: Any,
) -> Any:
    """
    Parse an API key, issue an auth token and fetch an upload policy.

    Args:
        api_key: Composite API key
        upload_props: Location key and file description
        expires_in: Auth token lifetime
        url: Upload policy endpoint (defaults to UPLOAD_POLICY_URL)
        token_field: Body field for the auth token
        client: Optional shared httpx.AsyncClient
        **claims: Private claims for the auth token

    Returns:
        Parsed upload policy response
    """
    policy_client = UploadPolicyClient(
        url=url, token_field=token_field, client=client
    )
    async with UploadPolicyService(policy_client=policy_client) as service:
        return await service.fetch_upload_policy(
            api_key, upload_props, expires_in=expires_in, **claims
        )
