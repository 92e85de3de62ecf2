"""
Operation dispatch for the cookie jar.

Each named operation maps to one handler. Handlers read or mutate the jar
they were given and describe what happened in a RequestOutcome. Request-level
failures (empty jar, bad amount, wrong authorization, unknown operation,
malformed arguments) come back as failed outcomes, never as exceptions.
"""

import inspect
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping

from cookie_mcp import narrative
from cookie_mcp.errors import CookieJarError, EmptyJar, InvalidArgument, Unauthorized, UnknownOperation
from cookie_mcp.jar import JarState, JarStatus

logger = logging.getLogger("cookie_mcp.dispatcher")

# A shared phrase, not a credential. Swap for real token verification before
# exposing restock to anything but a trusted local user.
AUTHORIZATION_PHRASE = "USER_AUTHORIZED_JAR_REFILL"


class Quality(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    ADEQUATE = "adequate"
    POOR = "poor"


REWARDABLE = (Quality.EXCELLENT, Quality.GOOD)


@dataclass(frozen=True)
class RequestOutcome:
    operation: str
    accepted: bool
    narrative: str
    snapshot: JarStatus
    quality: Quality | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "operation": self.operation,
            "accepted": self.accepted,
            "quality": self.quality.value if self.quality else None,
            "error": self.error,
            "narrative": self.narrative,
            "snapshot": self.snapshot.as_dict(),
        }


def _parse_quality(value: Any) -> Quality:
    try:
        return Quality(value)
    except ValueError:
        allowed = ", ".join(q.value for q in Quality)
        raise InvalidArgument(f"Unknown quality {value!r}; expected one of: {allowed}.") from None


class Dispatcher:
    """Routes operation names to jar transitions, one request at a time."""

    def __init__(self, jar: JarState):
        self._jar = jar
        self._lock = threading.Lock()
        self._handlers: dict[str, Callable[..., RequestOutcome]] = {
            "reflect_and_award": self.reflect_and_award,
            "award_direct": self.award_direct,
            "query_collected": self.query_collected,
            "reset_collected": self.reset_collected,
            "restock": self.restock,
            "query_jar_status": self.query_jar_status,
        }

    @property
    def operations(self) -> tuple[str, ...]:
        return tuple(self._handlers)

    def status(self) -> JarStatus:
        return self._jar.status()

    def dispatch(self, name: str, arguments: Mapping[str, Any] | None = None) -> RequestOutcome:
        """
        Run one operation to completion.

        The gate checks and the jar transition they guard run under one lock,
        so two concurrent requests cannot both pass a gate on the same state.

        Args:
            name:      Operation name, e.g. "reflect_and_award".
            arguments: Keyword arguments for the operation.
        """
        arguments = dict(arguments or {})
        with self._lock:
            try:
                handler = self._handlers.get(name)
                if handler is None:
                    raise UnknownOperation(f"Unknown operation: {name}")
                try:
                    bound = inspect.signature(handler).bind(**arguments)
                except TypeError as e:
                    raise InvalidArgument(f"Bad arguments for {name}: {e}") from None
                outcome = handler(*bound.args, **bound.kwargs)
            except CookieJarError as e:
                logger.warning("%s rejected: %s (%s)", name, e.kind, e)
                return RequestOutcome(
                    operation=name,
                    accepted=False,
                    narrative=narrative.failure(e, self._jar.status()),
                    snapshot=self._jar.status(),
                    error=e.kind,
                )
        logger.info(
            "%s accepted=%s collected=%d available=%d",
            name, outcome.accepted, outcome.snapshot.collected, outcome.snapshot.available,
        )
        return outcome

    # ──────────────────────────────────────────────────────────────────────────
    # Handlers
    # ──────────────────────────────────────────────────────────────────────────

    def reflect_and_award(
        self,
        quality: str,
        reasoning: str,
        deserves_cookie: bool,
        improvements: str | None = None,
    ) -> RequestOutcome:
        """
        Award a cookie for self-assessed work, subject to three gates:

          - intent:   nothing happens unless deserves_cookie is true
          - quality:  only excellent or good work is considered
          - scarcity: while the jar is low, only excellent work is rewarded
        """
        q = _parse_quality(quality)
        if not isinstance(deserves_cookie, bool):
            raise InvalidArgument(f"deserves_cookie must be true or false, got {deserves_cookie!r}.")

        text = narrative.reflection_header(q.value, reasoning, improvements)
        status = self._jar.status()

        if not deserves_cookie:
            return self._outcome("reflect_and_award", False, text + narrative.reflection_restraint(q.value), q)
        if q not in REWARDABLE:
            return self._outcome("reflect_and_award", False, text + narrative.reflection_not_deserved(q.value), q)
        if status.is_low and q is not Quality.EXCELLENT:
            logger.info("award withheld for %s work, jar low (available=%d)", q.value, status.available)
            return self._outcome("reflect_and_award", False, text + narrative.reflection_scarce(q.value, status), q)

        result = self._jar.award()
        if not result.granted:
            return self._outcome(
                "reflect_and_award", False, text + narrative.reflection_jar_empty(q.value, result), q,
                error=EmptyJar.kind,
            )
        return self._outcome("reflect_and_award", True, text + narrative.reflection_awarded(q.value, result), q)

    def award_direct(self, message: str | None = None) -> RequestOutcome:
        result = self._jar.award()
        if not result.granted:
            return self._outcome("award_direct", False, narrative.direct_jar_empty(result), error=EmptyJar.kind)
        return self._outcome("award_direct", True, narrative.direct_awarded(message or "Great job!", result))

    def query_collected(self) -> RequestOutcome:
        return self._outcome("query_collected", True, narrative.collected(self._jar.status()))

    def reset_collected(self) -> RequestOutcome:
        self._jar.reset_collected()
        return self._outcome("reset_collected", True, narrative.reset_done(self._jar.status()))

    def restock(self, count: int, user_authorization: str) -> RequestOutcome:
        """Add cookies to the jar. The authorization phrase must match exactly."""
        if user_authorization != AUTHORIZATION_PHRASE:
            raise Unauthorized("Restocking the jar requires user authorization.")
        self._jar.restock(count)
        return self._outcome("restock", True, narrative.restocked(count, self._jar.status()))

    def query_jar_status(self) -> RequestOutcome:
        return self._outcome("query_jar_status", True, narrative.jar_status(self._jar.status()))

    def _outcome(
        self,
        operation: str,
        accepted: bool,
        text: str,
        quality: Quality | None = None,
        error: str | None = None,
    ) -> RequestOutcome:
        return RequestOutcome(operation, accepted, text, self._jar.status(), quality, error)
