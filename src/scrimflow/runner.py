# Area: Runner
"""
scrimflow.runner — Mailbox-driven lobby bot
===========================================

Polls the bot's Gmail inbox, routes each JSON command to its handler
and mails the reply back to the sender. SCRIM_DISTRIBUTE runs on a
worker thread so the bot keeps answering while match codes go out.
"""

from __future__ import annotations
import time
import logging
import signal
import threading
from typing import Any, Callable, Dict, List, Optional

from ._commands import CommandContext, CommandReply, LobbyBoard, ResponseBuilder, build_router
from ._lobby import LobbyEngine, SessionStore
from ._registry import PlayerRepository, init_database
from ._runner_config import INCOMING_MESSAGE_TYPES, validate_config, with_defaults
from ._shared import EmailClient, build_subject, parse_sender, setup_logging
from .messenger import DirectMessenger, EmailDirectMessenger

logger = logging.getLogger("scrimflow")


class ScrimRunner:
    """
    Runs the lobby bot.

    Usage:
        runner = ScrimRunner(config)
        runner.run()

    A custom ``messenger`` replaces the default email DMs for match codes.
    """

    def __init__(self, config: Dict[str, Any], messenger: Optional[DirectMessenger] = None):
        # Setup logging
        setup_logging(log_file_path=config.get("log_file", "scrimflow.log"))

        # Validate config
        validate_config(config)
        self.config = with_defaults(config)
        self._running = False
        self._workers: List[threading.Thread] = []
        self._pending_jobs: List[Callable[[], None]] = []

        # Build email client (OAuth-based)
        self.email_client = EmailClient(
            credentials_path=self.config["credentials_path"],
            token_path=self.config["token_path"],
            address=self.config.get("bot_email", ""),
        )

        # Registry
        init_database(self.config["database_path"])
        self.players = PlayerRepository(self.config["database_path"])

        # Lobby core
        self.store = SessionStore()
        self.engine = LobbyEngine(
            self.store,
            messenger or EmailDirectMessenger(self.email_client),
            pacing_seconds=self.config["dm_pacing_seconds"],
            sender_email=self.email_client.address,
        )

        # Live lobby board
        self.board = LobbyBoard(
            self.engine,
            channel=self.config["lobby_channel_email"],
            send=self._send_envelope,
            sender_email=self.email_client.address,
        )
        if self.board.enabled:
            self.engine.add_listener(self.board.on_snapshot)

        self.router = build_router(
            self.engine,
            self.players,
            admins=self.config["admin_emails"],
            board=self.board,
            dispatcher=self._dispatch_background,
        )
        self.responses = ResponseBuilder(sender_email=self.email_client.address)

        self.poll_interval = self.config["poll_interval_seconds"]

    def run(self) -> None:
        """Start the event loop. Blocks until interrupted."""
        self._running = True
        signal.signal(signal.SIGINT, lambda s, f: setattr(self, "_running", False))

        self._log_startup()
        self.email_client.connect()
        self._set_bot_address(self.email_client.address)

        while self._running:
            try:
                self._poll_and_process()
                time.sleep(self.poll_interval)
            except KeyboardInterrupt:
                break
            except Exception as e:
                logger.error(f"Loop error: {e}", exc_info=True)
                time.sleep(self.poll_interval)

        self._join_workers()
        self.email_client.disconnect()
        logger.info("ScrimFlow runner stopped.")

    def _log_startup(self) -> None:
        """Log startup information."""
        logger.info("=" * 60)
        logger.info("  ScrimFlow Lobby Bot — Starting")
        logger.info(f"  Email:  {self.email_client.address or 'connecting...'}")
        logger.info(f"  Admins: {', '.join(self.config['admin_emails'])}")
        logger.info(f"  Lobby:  {self.config['lobby_channel_email'] or 'no live board'}")
        logger.info(f"  Poll:   every {self.poll_interval}s")
        logger.info("=" * 60)

    def _set_bot_address(self, address: str) -> None:
        if not address:
            return
        self.engine.sender_email = address
        self.board.sender_email = address
        self.responses.sender_email = address

    def _poll_and_process(self) -> None:
        """Single poll iteration: get emails → route → reply."""
        for msg in self.email_client.poll():
            subject = msg.get("subject", "")
            sender = parse_sender(msg.get("from", ""))
            body = msg.get("body_json")

            if not isinstance(body, dict):
                logger.debug(f"Skipped (no JSON): {subject} from {sender}")
                continue

            message_type = body.get("message_type") or ""
            if message_type not in INCOMING_MESSAGE_TYPES:
                logger.debug(f"Skipped (unknown type '{message_type}'): {subject}")
                continue

            if not sender:
                logger.warning(f"Skipped {message_type}: no sender address")
                continue

            payload = body.get("payload")
            ctx = CommandContext(
                command=message_type,
                sender=sender,
                payload=payload if isinstance(payload, dict) else {},
                message_id=body.get("message_id") or msg.get("uid"),
            )
            ctx.followup = self._followup_for(ctx)

            logger.debug(f"── Received: {message_type} from {sender}")
            try:
                reply = self.router.route(ctx)
                self._send_reply(ctx, reply)
            except Exception as e:
                logger.error(f"Router error: {e}", exc_info=True)
            finally:
                self._start_pending_jobs()

    def _followup_for(self, ctx: CommandContext) -> Callable[[CommandReply], None]:
        return lambda reply: self._send_reply(ctx, reply)

    def _send_reply(self, ctx: CommandContext, reply: CommandReply) -> bool:
        envelope = self.responses.build_reply(ctx, reply)
        return self._send_envelope(ctx.sender, envelope)

    def _send_envelope(self, recipient: str, envelope: Dict[str, Any]) -> bool:
        """Send one envelope; the subject reuses its message_id as tx id."""
        subject = build_subject(
            role="SCRIMBOT",
            email=self.email_client.address or "",
            message_type=envelope.get("message_type", "RESPONSE"),
            tx_id=envelope.get("message_id"),
        )
        return self.email_client.send(recipient, subject, envelope)

    def _dispatch_background(self, job: Callable[[], None]) -> None:
        """Queue a long command (distribution) for a worker thread.

        The job starts once the acknowledgement reply has been sent.
        """
        self._pending_jobs.append(job)

    def _start_pending_jobs(self) -> None:
        self._workers = [w for w in self._workers if w.is_alive()]
        while self._pending_jobs:
            job = self._pending_jobs.pop(0)
            worker = threading.Thread(
                target=self._run_job, args=(job,), name="scrim-distribute", daemon=True
            )
            self._workers.append(worker)
            worker.start()

    def _run_job(self, job: Callable[[], None]) -> None:
        try:
            job()
        except Exception as e:
            logger.error(f"Background job failed: {e}", exc_info=True)

    def _join_workers(self, timeout: float = 30.0) -> None:
        for worker in self._workers:
            worker.join(timeout)
        self._workers = []
