"""
main.py — Run your ScrimFlow lobby bot
======================================

This is the entry point. Configure your Gmail credentials and admin
addresses, then run.

    python main.py            # match codes go out as individual emails
    python main.py --dry-run  # match codes are only printed

The runner will:
  1. Connect to the bot's Gmail inbox
  2. Poll for incoming command messages
  3. Route each command and mail the reply back
  4. Send the match code to every checked-in player on SCRIM_DISTRIBUTE

Press Ctrl+C to stop.
"""

import sys

from scrimflow import DirectMessenger, ScrimRunner

# ── Configuration ──
config = {
    # OAuth files (run authenticate.py once first)
    "credentials_path": "client_secret.json",
    "token_path": "token.json",

    # Who may open, lock, distribute and end lobbies
    "admin_emails": ["host@example.com"],

    # Optional mailing list that gets the live lobby board
    "lobby_channel_email": "",

    # How often to check email (seconds)
    "poll_interval_seconds": 5,

    # Delay between two match-code DMs (seconds)
    "dm_pacing_seconds": 0.1,
}


class PrintMessenger(DirectMessenger):
    """Prints match codes instead of mailing them."""

    def send_direct(self, player_id, message):
        payload = message.get("payload", {})
        print(f"[DM] {player_id}: {payload.get('code')} ({payload.get('region')})")
        return True


messenger = PrintMessenger() if "--dry-run" in sys.argv else None
runner = ScrimRunner(config=config, messenger=messenger)
runner.run()
