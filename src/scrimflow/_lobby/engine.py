# Area: Lobby
"""
scrimflow._lobby.engine — Lobby Engine
======================================

Open, check-in, lock, distribute and end for the single active lobby.

Every operation runs its read-validate-mutate sequence inside the
session store's exclusive section. Distribute is split in three:

1. under the lock: assign the code, move to DISTRIBUTING, copy the roster
2. without the lock: fan the code out to the copied roster
3. under the lock: move to ENDED and clear the store

No check-in can succeed once the lobby has left OPEN, so the copied
roster is exactly the roster that gets notified. An End() that lands
during step 2 clears the store immediately; the fan-out still finishes
on its copy, and step 3 leaves the store alone if it no longer holds
the same lobby.
"""

from __future__ import annotations
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .enums import CheckInResult, LobbyEvent, LobbyState, MatchFormat
from .fanout import DEFAULT_PACING_SECONDS, build_code_message, fan_out_code
from .session import CheckInRecord, LobbySession, MAX_PLAYERS, PresentationHandle
from .snapshot import LobbySnapshot, take_snapshot
from .state_machine import can_transition, transition
from .store import SessionStore
from .._shared.protocol import generate_tx_id
from ..errors import AlreadyActive, CapacityReached, InvalidState, NoSession, Rejected
from ..messenger import DirectMessenger

logger = logging.getLogger("scrimflow.lobby.engine")

SnapshotListener = Callable[[Optional[LobbySnapshot]], None]


@dataclass
class DistributionReport:
    """Result of a Distribute call."""
    session_id: str
    code: str
    roster_size: int
    sent_count: int
    failed: List[str] = field(default_factory=list)
    # False when a concurrent End() cleared the lobby mid fan-out
    completed: bool = True


class LobbyEngine:
    """
    State machine operations over an injected SessionStore.

    Usage:
        engine = LobbyEngine(SessionStore(), messenger)
        engine.open("admin@example.com", MatchFormat.SQUAD, "Europe")
        engine.check_in("p1@example.com", "PlayerOne")
        engine.lock()
        report = engine.distribute("X9Y-22B")
    """

    def __init__(
        self,
        store: SessionStore,
        messenger: DirectMessenger,
        capacity: int = MAX_PLAYERS,
        pacing_seconds: float = DEFAULT_PACING_SECONDS,
        sender_email: str = "",
        clock: Callable[[], float] = time.time,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.store = store
        self.messenger = messenger
        self.capacity = capacity
        self.pacing_seconds = pacing_seconds
        self.sender_email = sender_email
        self._clock = clock
        self._sleep = sleep
        self._listeners: List[SnapshotListener] = []

    # ── Listeners ────────────────────────────────────────────

    def add_listener(self, listener: SnapshotListener) -> None:
        """Register a callback that receives a snapshot after every mutation."""
        self._listeners.append(listener)

    def _notify(self, snapshot: Optional[LobbySnapshot]) -> None:
        for listener in self._listeners:
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Snapshot listener failed: {e}", exc_info=True)

    # ── Queries ──────────────────────────────────────────────

    def snapshot(self) -> Optional[LobbySnapshot]:
        """Return a snapshot of the active lobby, or None when ABSENT."""
        with self.store.locked() as session:
            if session is None:
                return None
            return take_snapshot(session, self.capacity)

    def is_open(self) -> bool:
        """Check if a lobby is currently open for check-ins."""
        with self.store.locked() as session:
            return session is not None and session.state == LobbyState.OPEN

    # ── Operations ───────────────────────────────────────────

    def open(self, host_id: str, match_format: MatchFormat, region: str) -> LobbySnapshot:
        """
        Start a new lobby in OPEN.

        Raises:
            AlreadyActive: If a lobby already exists
        """
        with self.store.locked() as existing:
            if existing is not None:
                raise AlreadyActive(existing.session_id)
            session = LobbySession(
                session_id=generate_tx_id("scrim"),
                host_id=host_id,
                format=match_format,
                region=region,
                start_time=self._clock(),
            )
            self.store.replace(session)
            snapshot = take_snapshot(session, self.capacity)

        logger.info(
            f"[{session.session_id}] Lobby opened by {host_id}: "
            f"{region} {match_format.value}"
        )
        self._notify(snapshot)
        return snapshot

    def set_presentation_handle(self, handle: PresentationHandle) -> None:
        """
        Link the live lobby board to the lobby. Can only be set once.

        Raises:
            NoSession: If there is no lobby
            InvalidState: If a handle is already set
        """
        with self.store.locked() as session:
            if session is None:
                raise NoSession("set_presentation_handle")
            if session.presentation_handle is not None:
                raise InvalidState(
                    "set presentation handle", "already linked", session.session_id
                )
            session.presentation_handle = handle

    def check_in(self, player_id: str, epic_name: str) -> CheckInResult:
        """
        Add a player to the roster.

        A repeat check-in succeeds without touching the existing record.

        Raises:
            NoSession: If there is no lobby
            Rejected: If the lobby is not OPEN
            CapacityReached: If the roster is full
        """
        with self.store.locked() as session:
            if session is None:
                raise NoSession("check_in")
            if session.state != LobbyState.OPEN:
                raise Rejected(session.state.value, session.session_id)
            if session.has_player(player_id):
                return CheckInResult.ALREADY_CHECKED_IN
            if session.is_full(self.capacity):
                raise CapacityReached(self.capacity, session.session_id)

            session.players[player_id] = CheckInRecord(
                player_id=player_id,
                epic_name=epic_name,
                checked_in_at=self._clock(),
            )
            snapshot = take_snapshot(session, self.capacity)

        logger.info(
            f"[{snapshot.session_id}] {epic_name} checked in "
            f"({snapshot.player_count}/{self.capacity})"
        )
        self._notify(snapshot)
        return CheckInResult.CHECKED_IN

    def lock(self) -> LobbySnapshot:
        """
        Close check-ins (OPEN -> LOCKED).

        Raises:
            NoSession: If there is no lobby
            InvalidState: If the lobby is not OPEN
        """
        with self.store.locked() as session:
            if session is None:
                raise NoSession("lock")
            if not can_transition(session.state, LobbyEvent.LOCK):
                raise InvalidState("lock", session.state.value, session.session_id)
            session.state = transition(session.state, LobbyEvent.LOCK)
            snapshot = take_snapshot(session, self.capacity)

        logger.info(f"[{snapshot.session_id}] Lobby locked with {snapshot.player_count} players")
        self._notify(snapshot)
        return snapshot

    def distribute(self, code: str) -> DistributionReport:
        """
        Assign the match code, notify the roster, and end the lobby.

        Delivery failures only lower ``sent_count``; they never keep the
        lobby from reaching ENDED.

        Raises:
            NoSession: If there is no lobby
            InvalidState: If the lobby is already distributing or ended
        """
        with self.store.locked() as session:
            if session is None:
                raise NoSession("distribute")
            if not can_transition(session.state, LobbyEvent.DISTRIBUTE):
                raise InvalidState("distribute", session.state.value, session.session_id)
            session.match_code = code
            session.state = transition(session.state, LobbyEvent.DISTRIBUTE)
            roster = session.frozen_roster()
            session_id = session.session_id
            message = build_code_message(
                code, session.format, session.region, session_id, self.sender_email
            )
            snapshot = take_snapshot(session, self.capacity)

        logger.info(f"[{session_id}] Distributing code to {len(roster)} players")
        self._notify(snapshot)

        delivery = fan_out_code(
            roster,
            message,
            self.messenger,
            pacing_seconds=self.pacing_seconds,
            sleep=self._sleep,
        )

        completed = False
        final_snapshot = None
        with self.store.locked() as current:
            if current is not None and current.session_id == session_id:
                current.state = transition(current.state, LobbyEvent.FINISH)
                final_snapshot = take_snapshot(current, self.capacity)
                self.store.clear()
                completed = True

        if completed:
            logger.info(f"[{session_id}] Lobby ended after distribution")
            self._notify(final_snapshot)
            self._notify(None)
        else:
            logger.warning(f"[{session_id}] Lobby was ended during distribution")

        return DistributionReport(
            session_id=session_id,
            code=code,
            roster_size=len(roster),
            sent_count=delivery.sent_count,
            failed=list(delivery.failed),
            completed=completed,
        )

    def end(self) -> LobbySnapshot:
        """
        Force-end the lobby from any state.

        Returns:
            The last snapshot before the lobby was cleared

        Raises:
            NoSession: If there is no lobby
        """
        with self.store.locked() as session:
            if session is None:
                raise NoSession("end")
            if can_transition(session.state, LobbyEvent.FORCE_END):
                session.state = transition(session.state, LobbyEvent.FORCE_END)
            snapshot = take_snapshot(session, self.capacity)
            self.store.clear()

        logger.info(f"[{snapshot.session_id}] Lobby force-ended")
        self._notify(snapshot)
        self._notify(None)
        return snapshot
