# Area: Commands
"""
scrimflow._commands.cooldowns — Per-sender command cooldowns
============================================================
"""

import threading
import time
from typing import Callable, Dict, Optional, Tuple

from .._runner_config import COMMAND_COOLDOWNS


class CooldownTracker:
    """Remembers when each sender last used each command."""

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        retention_seconds: float = max(COMMAND_COOLDOWNS.values()),
    ):
        self._clock = clock
        self._retention = retention_seconds
        self._last_used: Dict[Tuple[str, str], float] = {}
        self._lock = threading.Lock()

    def check(self, sender: str, command: str, seconds: float) -> Optional[float]:
        """
        Record a use of ``command`` unless the sender is still cooling down.

        Returns:
            None if the command may run, else the seconds left to wait
        """
        if seconds <= 0:
            return None
        key = (sender, command)
        now = self._clock()
        with self._lock:
            # Never drop an entry that some command could still be waiting on
            self._retention = max(self._retention, seconds)
            last = self._last_used.get(key)
            if last is not None and now < last + seconds:
                return round(last + seconds - now, 1)
            self._last_used[key] = now
            self._prune(now)
        return None

    def _prune(self, now: float) -> None:
        stale = [k for k, t in self._last_used.items() if now - t > self._retention]
        for key in stale:
            del self._last_used[key]
