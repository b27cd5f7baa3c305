"""
Composite API key parsing and generation.

An API key packs three parts separated by underscores:

    PRTV_<key_id>_<secret_key>

e.g. ``PRTV_CfTDX9cq282nQV3K_nJF2aDL4Nf41L3D5Nh8QJtosN0cJvlL0``

- Double-clicking the key selects all of it, so it is easy to cut and paste.
- The ``PRTV`` tag catches a key from some other provider being used here.
- The key id and secret key travel together in a single environment variable.

The key id and secret key must not contain ``_``; if they do, parsing the
joined key back is ambiguous and fails as malformed.
"""

import secrets
import string

from upload_auth.exceptions import InvalidKeyTagError, MalformedKeyError
from upload_auth.logging.config import get_logger
from upload_auth.models.api_key import ApiKeyParts

logger = get_logger(__name__)

API_KEY_TAG = "PRTV"
API_KEY_SEPARATOR = "_"

KEY_ID_LENGTH = 16
SECRET_KEY_LENGTH = 32

_KEY_ALPHABET = string.ascii_letters + string.digits


def parse_api_key(api_key: str) -> ApiKeyParts:
    """
    Split a composite API key into its tag, key id and secret key.

    Args:
        api_key: Composite API key

    Returns:
        ApiKeyParts with key_type, key_id and secret_key

    Raises:
        MalformedKeyError: If the key does not split into exactly 3 parts
        InvalidKeyTagError: If the first part is not the PRTV tag
    """
    parts = api_key.split(API_KEY_SEPARATOR)
    if len(parts) != 3:
        raise MalformedKeyError(segments=len(parts))

    key_type, key_id, secret_key = parts
    if key_type != API_KEY_TAG:
        raise InvalidKeyTagError(key_type=key_type, expected=API_KEY_TAG)

    logger.debug(
        "API key parsed",
        extra={"context": {"key_id": key_id}},
    )
    return ApiKeyParts(key_type=key_type, key_id=key_id, secret_key=secret_key)


def stringify_api_key(*, key_id: str, secret_key: str) -> str:
    """
    Merge a key id and secret key into a single composite API key.

    No validation is done on either part.

    Args:
        key_id: API key identifier
        secret_key: API secret key

    Returns:
        Composite API key including the PRTV tag
    """
    return API_KEY_SEPARATOR.join([API_KEY_TAG, key_id, secret_key])


def _random_token(length: int) -> str:
    return "".join(secrets.choice(_KEY_ALPHABET) for _ in range(length))


def generate_api_key() -> str:
    """
    Generate a new composite API key with random alphanumeric parts.

    Returns:
        Composite API key that round-trips through parse_api_key
    """
    return stringify_api_key(
        key_id=_random_token(KEY_ID_LENGTH),
        secret_key=_random_token(SECRET_KEY_LENGTH),
    )
