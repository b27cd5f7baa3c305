"""Tests for API key management CLI."""

from unittest.mock import AsyncMock, MagicMock, patch

import jwt
import pytest

from scripts.manage_api_keys import (
    cmd_fetch_policy,
    cmd_generate,
    cmd_inspect,
    cmd_issue_token,
    load_api_key,
    main,
)
from upload_auth.auth.api_key import parse_api_key, stringify_api_key
from upload_auth.schemas.upload import UploadProps

KEY_ID = "CfTDX9cq282nQV3K"
SECRET_KEY = "nJF2aDL4Nf41L3D5Nh8QJtosN0cJvlL0"
API_KEY = stringify_api_key(key_id=KEY_ID, secret_key=SECRET_KEY)


def _printed(mock_print: MagicMock) -> list[str]:
    return [str(call[0][0]) for call in mock_print.call_args_list if call[0]]


class TestLoadApiKey:
    """Tests for load_api_key."""

    def test_reads_environment(self, monkeypatch) -> None:
        """Test that the key is read from UPLOAD_API_KEY."""
        monkeypatch.setenv("UPLOAD_API_KEY", API_KEY)

        with patch("scripts.manage_api_keys.load_dotenv"):
            assert load_api_key() == API_KEY

    def test_missing_exits(self, monkeypatch) -> None:
        """Test that a missing key exits with status 1."""
        monkeypatch.delenv("UPLOAD_API_KEY", raising=False)

        with (
            patch("scripts.manage_api_keys.load_dotenv"),
            patch("builtins.print"),
            pytest.raises(SystemExit) as exc_info,
        ):
            load_api_key()

        assert exc_info.value.code == 1


class TestCmdGenerate:
    """Tests for cmd_generate command."""

    def test_prints_key_once(self) -> None:
        """Test that a parseable API key is printed exactly once."""
        with patch("builtins.print") as mock_print:
            cmd_generate()

        api_key_lines = [
            line for line in _printed(mock_print) if line.startswith("API Key:")
        ]
        assert len(api_key_lines) == 1
        api_key = api_key_lines[0].split("API Key: ")[1]
        assert parse_api_key(api_key).key_type == "PRTV"


class TestCmdInspect:
    """Tests for cmd_inspect command."""

    def test_hides_secret(self) -> None:
        """Test that inspect prints the key id but not the secret."""
        with patch("builtins.print") as mock_print:
            cmd_inspect(API_KEY)

        printed_text = " ".join(_printed(mock_print))
        assert KEY_ID in printed_text
        assert SECRET_KEY not in printed_text


class TestCmdIssueToken:
    """Tests for cmd_issue_token command."""

    def test_prints_signed_token(self) -> None:
        """Test that the printed token verifies with the key's secret."""
        with (
            patch(
                "scripts.manage_api_keys.load_api_key", return_value=API_KEY
            ),
            patch("builtins.print") as mock_print,
        ):
            cmd_issue_token(path="articles/*", expires_in="15m")

        token = _printed(mock_print)[0]
        payload = jwt.decode(token, SECRET_KEY, algorithms=["HS256"])
        assert payload["path"] == "articles/*"
        assert payload["exp"] - payload["iat"] == 900


class TestCmdFetchPolicy:
    """Tests for cmd_fetch_policy command."""

    @pytest.mark.asyncio
    async def test_fetches_and_prints_policy(self) -> None:
        """Test that the service is called with typed upload props."""
        mock_service = MagicMock()
        mock_service.fetch_upload_policy = AsyncMock(
            return_value={"status": "success"}
        )
        mock_service.__aenter__ = AsyncMock(return_value=mock_service)
        mock_service.__aexit__ = AsyncMock(return_value=None)

        with (
            patch(
                "scripts.manage_api_keys.load_api_key", return_value=API_KEY
            ),
            patch(
                "scripts.manage_api_keys.UploadPolicyService",
                return_value=mock_service,
            ),
            patch("builtins.print") as mock_print,
        ):
            await cmd_fetch_policy(
                path="**/*",
                record_path="articles/123",
                file_type="generic",
                file_bytes=1024,
                filename="1kbfile.txt",
                content_type=None,
                expires_in="1h",
            )

        call = mock_service.fetch_upload_policy.call_args
        assert call.args[0] == API_KEY
        upload_props = call.args[1]
        assert isinstance(upload_props, UploadProps)
        assert upload_props.to_request_body() == {
            "path": "articles/123",
            "file": {"type": "generic", "filename": "1kbfile.txt", "bytes": 1024},
        }
        assert call.kwargs == {"expires_in": "1h", "path": "**/*"}
        assert '"status": "success"' in _printed(mock_print)[0]


class TestMain:
    """Tests for the CLI entry point."""

    def test_no_command_exits(self) -> None:
        """Test that running without a command prints help and exits."""
        with (
            patch("sys.stdout"),
            pytest.raises(SystemExit) as exc_info,
        ):
            main([])

        assert exc_info.value.code == 1

    def test_inspect_bad_key_exits(self) -> None:
        """Test that key errors are reported with exit status 1."""
        with (
            patch("scripts.manage_api_keys.configure_logging"),
            patch("builtins.print") as mock_print,
            pytest.raises(SystemExit) as exc_info,
        ):
            main(["inspect", "AKIA_123_456"])

        assert exc_info.value.code == 1
        assert '"AKIA"' in _printed(mock_print)[0]

    def test_dispatches_issue_token(self) -> None:
        """Test that issue-token is routed to cmd_issue_token."""
        with (
            patch("scripts.manage_api_keys.configure_logging"),
            patch("scripts.manage_api_keys.cmd_issue_token") as mock_cmd,
        ):
            main(["issue-token", "--path", "a/*", "--expires-in", "2h"])

        mock_cmd.assert_called_once_with("a/*", "2h")
