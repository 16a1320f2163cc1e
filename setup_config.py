#!/usr/bin/env python3
# Area: Shared
"""
ScrimFlow - Configuration Setup Script
======================================

Interactive script to generate config.json and .env files.

Usage:
    python setup_config.py
"""

import json
from pathlib import Path


def prompt(question: str, default: str = "", required: bool = True) -> str:
    """Prompt user for input with optional default value."""
    if default:
        display = f"{question} [{default}]: "
    else:
        display = f"{question}: "

    while True:
        value = input(display).strip()
        if not value and default:
            return default
        if value:
            return value
        if not required:
            return ""
        print("  This field is required. Please enter a value.")


def print_section(title: str):
    """Print section header."""
    print()
    print(f"--- {title} ---")
    print()


def get_config_values() -> dict:
    """Interactively collect configuration values."""
    config = {}

    print_section("Gmail OAuth Credentials")
    print("The bot reads commands from, and replies with, one Gmail account.")
    print("Create Desktop-app OAuth credentials for it in Google Cloud Console")
    print("and enter the FULL path to the downloaded client_secret.json.")
    print()
    config["credentials_path"] = prompt(
        "Full path to client_secret.json", default="client_secret.json"
    )
    config["token_path"] = prompt(
        "Full path to store token.json", default="token.json"
    )

    print_section("Admins")
    print("Only these addresses may open, lock, distribute and end lobbies.")
    admins = prompt("Admin emails (comma separated)")
    config["admin_emails"] = [a.strip() for a in admins.split(",") if a.strip()]

    print_section("Live Lobby Board")
    print("Optional mailing-list address that receives lobby announcements")
    print("and status updates. Leave empty to disable.")
    config["lobby_channel_email"] = prompt(
        "Lobby channel email", required=False
    )

    print_section("Optional Settings")
    poll_interval = prompt("Poll interval in seconds", default="5", required=False)
    if poll_interval:
        config["poll_interval_seconds"] = float(poll_interval)
    pacing = prompt("Delay between match-code DMs (seconds)", default="0.1", required=False)
    if pacing:
        config["dm_pacing_seconds"] = float(pacing)
    config["database_path"] = prompt(
        "Player database file", default="scrimflow.db", required=False
    )

    return config


def write_config_json(config: dict, path: Path) -> None:
    """Write config.json file."""
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=4)
    print(f"  Created: {path}")


def write_env_file(config: dict, path: Path) -> None:
    """Write .env file."""
    env_mapping = {
        "credentials_path": "GMAIL_CREDENTIALS_PATH",
        "token_path": "GMAIL_TOKEN_PATH",
        "admin_emails": "ADMIN_EMAILS",
        "lobby_channel_email": "LOBBY_CHANNEL_EMAIL",
        "poll_interval_seconds": "POLL_INTERVAL_SECONDS",
        "dm_pacing_seconds": "DM_PACING_SECONDS",
        "database_path": "DATABASE_PATH",
    }

    lines = []
    for config_key, env_key in env_mapping.items():
        value = config.get(config_key)
        if not value:
            continue
        if isinstance(value, list):
            value = ",".join(value)
        lines.append(f"{env_key}={value}")

    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    print(f"  Created: {path}")


def main():
    """Main entry point."""
    print()
    print("=" * 60)
    print("  ScrimFlow - Configuration Setup")
    print("=" * 60)
    print()
    print("Press Enter to accept default values shown in [brackets].")

    try:
        config = get_config_values()
    except KeyboardInterrupt:
        print("\n\nSetup cancelled.")
        return 1

    print_section("Generating Files")

    base_path = Path.cwd()
    write_config_json(config, base_path / "config.json")
    write_env_file(config, base_path / ".env")

    print()
    print("=" * 60)
    print("  Setup Complete!")
    print("=" * 60)
    print()
    print("Next steps:")
    print("  1. Authenticate with Google:  python authenticate.py")
    print("  2. Start the bot:             python -m scrimflow --config config.json")
    print()
    return 0


if __name__ == "__main__":
    exit(main())
