# Area: Lobby
"""
scrimflow._lobby.store — Session store
======================================

Holds the single optional lobby reference behind a re-entrant lock.
The engine wraps each read-validate-mutate sequence in ``locked()``
so concurrent commands serialize through one critical section.

Construct one store at process start and inject it into the engine.
There is nothing to tear down: the lobby is ephemeral.
"""

from __future__ import annotations
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from .session import LobbySession


class SessionStore:
    """Exclusive owner of the active lobby reference."""

    def __init__(self):
        self._lock = threading.RLock()
        self._session: Optional[LobbySession] = None

    def current(self) -> Optional[LobbySession]:
        """Return the active lobby, or None."""
        with self._lock:
            return self._session

    def replace(self, session: LobbySession) -> None:
        """Install a new lobby."""
        with self._lock:
            self._session = session

    def clear(self) -> None:
        """Drop the active lobby reference."""
        with self._lock:
            self._session = None

    @contextmanager
    def locked(self) -> Iterator[Optional[LobbySession]]:
        """Hold the exclusive section and yield the active lobby (or None)."""
        with self._lock:
            yield self._session
