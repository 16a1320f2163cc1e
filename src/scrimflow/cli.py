# Area: Shared
"""
scrimflow.cli — Command-line interface
======================================

Provides CLI entry point for running the lobby bot.

Usage:
    python -m scrimflow                         # Config from .env / environment
    python -m scrimflow --config config.json    # Run with config file

Settings are layered: the JSON file first, then variables from ``.env``
and the process environment override it.
"""

import argparse
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

from ._shared.logging_config import log_and_terminate
from .errors import ConfigurationError
from .runner import ScrimRunner

# Environment variable -> (config key, converter)
ENV_MAPPINGS = {
    "ADMIN_EMAILS": ("admin_emails", "list"),
    "BOT_EMAIL": ("bot_email", "str"),
    "LOBBY_CHANNEL_EMAIL": ("lobby_channel_email", "str"),
    "GMAIL_CREDENTIALS_PATH": ("credentials_path", "str"),
    "GMAIL_TOKEN_PATH": ("token_path", "str"),
    "POLL_INTERVAL_SECONDS": ("poll_interval_seconds", "float"),
    "DM_PACING_SECONDS": ("dm_pacing_seconds", "float"),
    "DATABASE_PATH": ("database_path", "str"),
    "LOG_FILE": ("log_file", "str"),
}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="ScrimFlow - Competitive scrim lobby bot",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m scrimflow --config config.json
  ADMIN_EMAILS=host@example.com python -m scrimflow
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to JSON config file",
    )

    parser.add_argument(
        "--env-file",
        type=str,
        default=".env",
        help="Path to .env file (default: .env)",
    )

    return parser.parse_args(argv)


def load_config(config_path: Optional[str], env_file: Optional[str] = ".env") -> Dict[str, Any]:
    """
    Load config from file, then .env and environment.

    Raises:
        ConfigurationError: If the file is unreadable or a value is malformed
    """
    config: Dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError([f"config file not found: {config_path}"])
        try:
            with open(path, encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError([f"{config_path}: invalid JSON ({e})"]) from e

    if env_file:
        load_dotenv(env_file)

    problems = []
    for env_key, (config_key, kind) in ENV_MAPPINGS.items():
        if env_key not in os.environ:
            continue
        value = os.environ[env_key]
        if kind == "list":
            config[config_key] = [v.strip() for v in value.split(",") if v.strip()]
        elif kind == "float":
            try:
                config[config_key] = float(value)
            except ValueError:
                problems.append(f"{env_key}: expected a number, got '{value}'")
        else:
            config[config_key] = value

    if problems:
        raise ConfigurationError(problems)
    return config


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = parse_args(argv)
    try:
        config = load_config(args.config, args.env_file)

        runner = ScrimRunner(config=config)
    except ConfigurationError as e:
        log_and_terminate(e)
        return 1

    runner.run()
    return 0
