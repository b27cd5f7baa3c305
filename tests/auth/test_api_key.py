"""Unit tests for composite API key parsing and generation."""

import pytest

from upload_auth.auth.api_key import (
    API_KEY_TAG,
    KEY_ID_LENGTH,
    SECRET_KEY_LENGTH,
    generate_api_key,
    parse_api_key,
    stringify_api_key,
)
from upload_auth.exceptions import (
    ApiKeyError,
    InvalidKeyTagError,
    MalformedKeyError,
)


class TestParseApiKey:
    """Tests for parse_api_key."""

    def test_returns_parts(self) -> None:
        """Test that a valid key is split into its three parts."""
        result = parse_api_key("PRTV_alpha_bravo")

        assert result.key_type == "PRTV"
        assert result.key_id == "alpha"
        assert result.secret_key == "bravo"

    def test_single_segment_reports_count(self) -> None:
        """Test that a key without separators reports 1 part."""
        with pytest.raises(MalformedKeyError) as exc_info:
            parse_api_key("rueiruewirueiw")

        assert "exactly 3 parts but is 1" in str(exc_info.value)
        assert exc_info.value.segments == 1
        assert exc_info.value.details == {"segments": 1}

    def test_two_segments(self) -> None:
        """Test that a key with one separator reports 2 parts."""
        with pytest.raises(MalformedKeyError, match="but is 2"):
            parse_api_key("a_b")

    def test_too_many_segments(self) -> None:
        """Test that an underscore inside a part makes the key malformed."""
        with pytest.raises(MalformedKeyError, match="but is 4"):
            parse_api_key("PRTV_key_id_secret")

    def test_empty_string(self) -> None:
        """Test that an empty key is malformed."""
        with pytest.raises(MalformedKeyError, match="but is 1"):
            parse_api_key("")

    def test_wrong_tag(self) -> None:
        """Test that a key from another provider names the bad tag."""
        with pytest.raises(InvalidKeyTagError) as exc_info:
            parse_api_key("AKIA_123_456")

        assert str(exc_info.value) == (
            'Expected first part of API key to be PRTV but is "AKIA"'
        )
        assert exc_info.value.key_type == "AKIA"
        assert exc_info.value.error_code == "INVALID_API_KEY_TAG"

    def test_tag_is_case_sensitive(self) -> None:
        """Test that a lowercase tag is rejected."""
        with pytest.raises(InvalidKeyTagError, match='"prtv"'):
            parse_api_key("prtv_alpha_bravo")

    def test_errors_share_base_class(self) -> None:
        """Test that both key errors can be caught as ApiKeyError."""
        for bad_key in ("nope", "AKIA_1_2"):
            with pytest.raises(ApiKeyError):
                parse_api_key(bad_key)

    def test_secret_not_in_repr(self) -> None:
        """Test that the secret key is hidden from the model repr."""
        result = parse_api_key("PRTV_alpha_bravo")

        assert "bravo" not in repr(result)
        assert "alpha" in repr(result)


class TestStringifyApiKey:
    """Tests for stringify_api_key."""

    def test_joins_parts(self) -> None:
        """Test that an API key is created from its parts."""
        api_key = stringify_api_key(key_id="keyid", secret_key="secretkey")

        assert api_key == "PRTV_keyid_secretkey"

    @pytest.mark.parametrize(
        "key_id,secret_key",
        [
            ("CfTDX9cq282nQV3K", "nJF2aDL4Nf41L3D5Nh8QJtosN0cJvlL0"),
            ("k", "s"),
            ("key-id.1", "secret-key.2"),
        ],
    )
    def test_round_trip(self, key_id: str, secret_key: str) -> None:
        """Test that parsing a stringified key gives back its parts."""
        parts = parse_api_key(
            stringify_api_key(key_id=key_id, secret_key=secret_key)
        )

        assert parts.key_type == API_KEY_TAG
        assert parts.key_id == key_id
        assert parts.secret_key == secret_key


class TestGenerateApiKey:
    """Tests for generate_api_key."""

    def test_generates_parseable_key(self) -> None:
        """Test that a generated key parses with the expected lengths."""
        parts = parse_api_key(generate_api_key())

        assert parts.key_type == "PRTV"
        assert len(parts.key_id) == KEY_ID_LENGTH
        assert len(parts.secret_key) == SECRET_KEY_LENGTH

    def test_generates_alphanumeric(self) -> None:
        """Test that generated parts never contain the separator."""
        parts = parse_api_key(generate_api_key())

        assert parts.key_id.isalnum()
        assert parts.secret_key.isalnum()

    def test_generates_unique_keys(self) -> None:
        """Test that consecutive calls generate different keys."""
        assert generate_api_key() != generate_api_key()
