#!/usr/bin/env python3
"""
CLI for API key and auth token management.

Provides commands to generate and inspect composite API keys, issue auth
tokens and fetch upload policies. Commands that sign tokens read the API key
from the UPLOAD_API_KEY environment variable (or a .env file).
"""

import argparse
import asyncio
import json
import os
import sys
from typing import List, Optional

from dotenv import load_dotenv

from upload_auth.auth.api_key import generate_api_key, parse_api_key
from upload_auth.config import settings
from upload_auth.exceptions import UploadAuthError
from upload_auth.logging.config import configure_logging
from upload_auth.schemas.upload import UploadFile, UploadProps
from upload_auth.services.upload_policy_service import (
    UploadPolicyService,
    generate_auth_token,
)

API_KEY_ENV_VAR = "UPLOAD_API_KEY"


def load_api_key() -> str:
    """
    Load the composite API key from the environment.

    Returns:
        The API key

    Raises:
        SystemExit: If UPLOAD_API_KEY is not set
    """
    load_dotenv()
    api_key = os.getenv(API_KEY_ENV_VAR)
    if not api_key:
        print(
            f"✗ Error: {API_KEY_ENV_VAR} not set in environment",
            file=sys.stderr,
        )
        sys.exit(1)
    return api_key


def cmd_generate() -> None:
    """Generate a new composite API key and print it."""
    api_key = generate_api_key()
    parts = parse_api_key(api_key)

    print("✓ API Key created successfully")
    print(f"\nKey ID: {parts.key_id}")
    print(f"API Key: {api_key}")
    print("\n⚠️  IMPORTANT: Save this API key now!")
    print("   The secret key is not stored anywhere else.")


def cmd_inspect(api_key: str) -> None:
    """
    Print the public parts of an API key.

    Args:
        api_key: Composite API key to inspect
    """
    parts = parse_api_key(api_key)
    print(f"Key Type: {parts.key_type}")
    print(f"Key ID: {parts.key_id}")


def cmd_issue_token(path: str, expires_in: str) -> None:
    """
    Issue an auth token from the configured API key.

    Args:
        path: Upload path pattern the token allows
        expires_in: Token lifetime, e.g. "1h"
    """
    api_key = load_api_key()
    token = generate_auth_token(api_key, expires_in=expires_in, path=path)
    print(token)


async def cmd_fetch_policy(
    path: str,
    record_path: str,
    file_type: str,
    file_bytes: int,
    filename: Optional[str],
    content_type: Optional[str],
    expires_in: str,
) -> None:
    """
    Fetch an upload policy using the configured API key and print it.

    Args:
        path: Upload path pattern the auth token allows
        record_path: Location key the file will be uploaded to
        file_type: File kind, e.g. "generic" or "image"
        file_bytes: File size in bytes
        filename: Optional original file name
        content_type: Optional MIME type
        expires_in: Token lifetime, e.g. "1h"
    """
    api_key = load_api_key()
    upload_props = UploadProps(
        path=record_path,
        file=UploadFile(
            type=file_type,
            filename=filename,
            content_type=content_type,
            bytes=file_bytes,
        ),
    )

    async with UploadPolicyService() as service:
        policy = await service.fetch_upload_policy(
            api_key, upload_props, expires_in=expires_in, path=path
        )

    print(json.dumps(policy, indent=2))


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Manage API keys and auth tokens for uploads",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=settings.log_level,
        help=f"Log level (default: {settings.log_level})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command")

    # Generate command
    subparsers.add_parser("generate", help="Generate a new API key")

    # Inspect command
    inspect_parser = subparsers.add_parser(
        "inspect", help="Show the key type and key id of an API key"
    )
    inspect_parser.add_argument("api_key", type=str, help="API key")

    # Issue token command
    issue_parser = subparsers.add_parser(
        "issue-token", help="Issue an auth token"
    )
    issue_parser.add_argument(
        "--path", type=str, required=True, help="Allowed upload path pattern"
    )
    issue_parser.add_argument(
        "--expires-in",
        type=str,
        default=settings.default_expires_in,
        help=f"Token lifetime (default: {settings.default_expires_in})",
    )

    # Fetch policy command
    fetch_parser = subparsers.add_parser(
        "fetch-policy", help="Fetch an upload policy"
    )
    fetch_parser.add_argument(
        "--path", type=str, default="**/*", help="Allowed upload path pattern"
    )
    fetch_parser.add_argument(
        "--record-path",
        type=str,
        required=True,
        help="Location key to upload the file to",
    )
    fetch_parser.add_argument(
        "--file-type", type=str, default="generic", help="File kind"
    )
    fetch_parser.add_argument(
        "--bytes", type=int, required=True, help="File size in bytes"
    )
    fetch_parser.add_argument("--filename", type=str, help="File name")
    fetch_parser.add_argument("--content-type", type=str, help="MIME type")
    fetch_parser.add_argument(
        "--expires-in",
        type=str,
        default=settings.default_expires_in,
        help=f"Token lifetime (default: {settings.default_expires_in})",
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    configure_logging(args.log_level)

    # Execute command
    try:
        if args.command == "generate":
            cmd_generate()
        elif args.command == "inspect":
            cmd_inspect(args.api_key)
        elif args.command == "issue-token":
            cmd_issue_token(args.path, args.expires_in)
        elif args.command == "fetch-policy":
            asyncio.run(
                cmd_fetch_policy(
                    path=args.path,
                    record_path=args.record_path,
                    file_type=args.file_type,
                    file_bytes=args.bytes,
                    filename=args.filename,
                    content_type=args.content_type,
                    expires_in=args.expires_in,
                )
            )
    except UploadAuthError as e:
        print(f"✗ Error: {e.message}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
