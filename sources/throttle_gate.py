# throttle_gate.py
"""
Rolling‑window filter for charge sessions.

Connector flapping produces a burst of sessions; only the first one in
every 15 second window is reported.  A window is anchored at the boot time
of the last accepted session and rejections never move it.
"""

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional

from app_logger import logger
from errors import TimeSourceError

DURATION_FILTER_SECS = 15


def boot_time_secs() -> int:
    """Seconds since boot, suspend included."""
    if hasattr(time, "CLOCK_BOOTTIME"):
        return int(time.clock_gettime(time.CLOCK_BOOTTIME))
    return int(time.monotonic())


@dataclass
class ThrottleState:
    last_accept_secs: Optional[int] = None      # None → idle
    window_secs: int = DURATION_FILTER_SECS


class ThrottleGate:
    """
    Parameters
    ----------
    clock : callable, optional
        Returns the current boot time in whole seconds; ``0`` means the
        clock could not be read.
    window_secs : int, optional
        Length of the rolling window.
    """

    def __init__(self, clock: Callable[[], int] = boot_time_secs,
                 window_secs: int = DURATION_FILTER_SECS):
        self.clock = clock
        self.state = ThrottleState(window_secs=window_secs)
        self._lock = threading.Lock()

    def try_accept(self) -> bool:
        """
        Accept the session and re‑anchor the window, or reject it.

        Raises
        ------
        TimeSourceError
            The clock returned zero; the state is left untouched.
        """
        with self._lock:
            now = self.clock()
            if now == 0:
                raise TimeSourceError("Current boot time is zero!")

            last = self.state.last_accept_secs
            if last is None or now >= last + self.state.window_secs:
                self.state.last_accept_secs = now
                return True

            logger.debug("throttled at %d, window anchored at %d", now, last)
            return False
