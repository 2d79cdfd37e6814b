"""Invocation deadline tracking based on the Lambda context."""

from __future__ import annotations
from typing import Any

from ..exceptions import InvocationCancelledError
from ..models.config import MIN_REMAINING_TIME_MS


class Deadline:
    """Stops an invocation before an AWS call that cannot finish in time.

    Without a Lambda context (local runs, tests) there is no deadline and
    check() never raises.
    """

    def __init__(self, context: Any = None, min_remaining_ms: int = MIN_REMAINING_TIME_MS):
        self._context = context
        self.min_remaining_ms = min_remaining_ms

    def remaining_ms(self) -> int | None:
        get_remaining = getattr(self._context, "get_remaining_time_in_millis", None)
        if get_remaining is None:
            return None
        return int(get_remaining())

    def check(self, stage: str) -> None:
        """Raise InvocationCancelledError if less than the margin is left."""
        remaining = self.remaining_ms()
        if remaining is not None and remaining < self.min_remaining_ms:
            raise InvocationCancelledError(stage, remaining)
