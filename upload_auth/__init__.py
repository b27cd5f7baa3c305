"""Scoped upload auth tokens and upload policy requests."""

from upload_auth.auth.api_key import (
    generate_api_key,
    parse_api_key,
    stringify_api_key,
)
from upload_auth.auth.tokens import issue_auth_token, verify_auth_token
from upload_auth.clients.upload_policy import (
    UploadPolicyClient,
    fetch_upload_policy,
)
from upload_auth.config import API_UPLOAD_URL
from upload_auth.services.upload_policy_service import (
    UploadPolicyService,
    fetch_upload_policy_with_api_key,
    generate_auth_token,
)

__all__ = [
    "API_UPLOAD_URL",
    "UploadPolicyClient",
    "UploadPolicyService",
    "fetch_upload_policy",
    "fetch_upload_policy_with_api_key",
    "generate_api_key",
    "generate_auth_token",
    "issue_auth_token",
    "parse_api_key",
    "stringify_api_key",
    "verify_auth_token",
]
