"""Data models for upload authorization."""

from upload_auth.models.api_key import ApiKeyParts

__all__ = ["ApiKeyParts"]
