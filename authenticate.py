#!/usr/bin/env python3
# Area: Shared
"""
ScrimFlow - Google OAuth Authentication Script
==============================================

Run this once to grant the bot's Gmail account access. A browser will
open for the OAuth consent screen.

Usage:
    python authenticate.py [--config config.json]

Credential paths come from the same places the bot reads them:
config.json, then .env, then environment variables, then the
defaults (client_secret.json / token.json).

After running:
    - token.json will be created
    - The bot can start without browser prompts
"""

import argparse
import sys
from pathlib import Path

from scrimflow._shared.email_client import EmailClient
from scrimflow.cli import load_config
from scrimflow.errors import ConfigurationError


def print_credentials_help(creds_path: Path) -> None:
    """Explain how to obtain client_secret.json."""
    print(f"Error: client_secret.json not found at {creds_path.absolute()}")
    print()
    print("To get client_secret.json:")
    print("  1. Go to https://console.cloud.google.com/")
    print("  2. Create a project (or select existing)")
    print("  3. Enable the Gmail API under 'APIs & Services' → 'Library'")
    print("  4. Create an 'OAuth client ID' of type 'Desktop app'")
    print("  5. Download it and save as 'client_secret.json'")
    print()
    print("NOTE: Use the FULL path including the filename!")


def authenticate(credentials_path: str, token_path: str) -> bool:
    """
    Run the consent flow (or refresh the token) and verify the account.

    Returns:
        True if the bot can reach Gmail
    """
    creds_path = Path(credentials_path)
    if not creds_path.exists():
        print_credentials_help(creds_path)
        return False

    client = EmailClient(credentials_path=credentials_path, token_path=token_path)
    try:
        client.connect()
    except Exception as e:
        print(f"Authentication failed: {e}")
        return False

    print()
    print("=" * 50)
    print("  Authentication Successful!")
    print("=" * 50)
    print(f"  Bot mailbox: {client.address}")
    print(f"  Token saved: {token_path}")
    print()
    print("  You can now run:")
    print("    python -m scrimflow --config config.json")
    print()
    client.disconnect()
    return True


def main() -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Authorize the ScrimFlow Gmail account")
    parser.add_argument("--config", type=str, default=None, help="Path to config.json")
    args = parser.parse_args()

    config_path = args.config
    if config_path is None and Path("config.json").exists():
        config_path = "config.json"

    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        print(e.format_error_log(), file=sys.stderr)
        return 1

    creds_path = config.get("credentials_path") or "client_secret.json"
    token_path = config.get("token_path") or "token.json"

    print()
    print("=" * 50)
    print("  ScrimFlow - OAuth Authentication")
    print("=" * 50)
    print(f"Credentials: {creds_path}")
    print(f"Token:       {token_path}")
    print()

    return 0 if authenticate(creds_path, token_path) else 1


if __name__ == "__main__":
    sys.exit(main())
