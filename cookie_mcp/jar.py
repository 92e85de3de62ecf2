"""
The cookie jar: two non-negative counters and the transitions between them.

  collected — cookies awarded since the last reset
  available — cookies left in the jar to be awarded

Every transition holds the jar lock for one read-modify-write, so the jar
stays consistent even if the transport hands calls to worker threads.
"""

import logging
import threading
from dataclasses import dataclass

from cookie_mcp.errors import EmptyJar, InvalidAmount

logger = logging.getLogger("cookie_mcp.jar")

LOW_THRESHOLD = 2


@dataclass(frozen=True)
class JarStatus:
    collected: int
    available: int

    @property
    def is_empty(self) -> bool:
        return self.available == 0

    @property
    def is_low(self) -> bool:
        return 0 < self.available <= LOW_THRESHOLD

    @property
    def tier(self) -> str:
        if self.is_empty:
            return "EMPTY"
        if self.is_low:
            return "LOW"
        return "STOCKED"

    def as_dict(self) -> dict:
        return {
            "collected": self.collected,
            "available": self.available,
            "is_empty": self.is_empty,
            "is_low": self.is_low,
        }


@dataclass(frozen=True)
class AwardResult:
    granted: bool
    collected: int
    available: int
    reason: str | None = None


def _require_positive_int(n) -> int:
    # bool is an int subclass; True must not restock one cookie
    if isinstance(n, bool) or not isinstance(n, int):
        raise InvalidAmount(f"Cookie count must be a whole number, got {n!r}.")
    if n <= 0:
        raise InvalidAmount(f"Cookie count must be positive, got {n}.")
    return n


class JarState:
    def __init__(self, available: int = 0):
        self._lock = threading.Lock()
        self._collected = 0
        self._available = max(0, int(available))

    def award(self) -> AwardResult:
        """Move one cookie from the jar to the collected total, if there is one."""
        with self._lock:
            if self._available == 0:
                reason = str(EmptyJar())
                logger.debug("award refused, jar empty (collected=%d)", self._collected)
                return AwardResult(False, self._collected, 0, reason)
            self._available -= 1
            self._collected += 1
            logger.debug("award granted (collected=%d available=%d)", self._collected, self._available)
            return AwardResult(True, self._collected, self._available)

    def restock(self, n: int) -> None:
        """
        Add n cookies to the jar.

        Raises:
            InvalidAmount: n is not a positive integer. The jar is left untouched.
        """
        n = _require_positive_int(n)
        with self._lock:
            self._available += n
            logger.debug("restocked %d (available=%d)", n, self._available)

    def set_available(self, n: int) -> None:
        """Override the jar contents. Negative values clamp to zero."""
        with self._lock:
            self._available = max(0, int(n))
            logger.debug("available set to %d", self._available)

    def reset_collected(self) -> None:
        with self._lock:
            self._collected = 0
            logger.debug("collected reset (available=%d)", self._available)

    def reset_all(self) -> None:
        with self._lock:
            self._collected = 0
            self._available = 0
            logger.debug("jar fully reset")

    def status(self) -> JarStatus:
        with self._lock:
            return JarStatus(self._collected, self._available)
