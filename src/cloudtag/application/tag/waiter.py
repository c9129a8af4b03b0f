"""Bounded polling of asynchronous provider operations."""

import time
from enum import Enum
from typing import Callable, Optional

from cloudtag.config.schemas.waiter_schema import WaiterConfig
from cloudtag.domain.tag.exceptions import OperationFailedError, OperationTimeoutError
from cloudtag.domain.tag.value_objects import OperationHandle, OperationStatus
from cloudtag.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)

Clock = Callable[[], float]
Sleep = Callable[[float], None]
Poll = Callable[[OperationHandle], OperationHandle]


class Deadline:
    """Overall time limit for a call, measured on an injectable clock."""

    def __init__(self, timeout: float, clock: Clock = time.monotonic):
        if timeout < 0:
            raise ValueError("Deadline timeout must be non-negative")
        self._clock = clock
        self._expires_at = clock() + timeout

    @classmethod
    def after(cls, timeout: Optional[float], clock: Clock = time.monotonic) -> Optional["Deadline"]:
        """Build a deadline, or None when no timeout is set."""
        if timeout is None:
            return None
        return cls(timeout, clock)

    def remaining(self) -> float:
        return max(0.0, self._expires_at - self._clock())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0.0


class WaitPhase(str, Enum):
    """States of the operation wait loop."""

    POLLING = "polling"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"


class OperationWaiter:
    """
    Polls an operation handle until it is terminal or the budget is spent.

    Polling continues while attempts remain and the status is pending. A
    timeout does not cancel the provider operation; its outcome is unknown.
    """

    def __init__(
        self,
        poll_interval: float = 2.0,
        max_attempts: int = 10,
        clock: Clock = time.monotonic,
        sleep: Sleep = time.sleep,
    ):
        if poll_interval <= 0:
            raise ValueError("Poll interval must be positive")
        if max_attempts < 1:
            raise ValueError("Max attempts must be at least 1")
        self.poll_interval = poll_interval
        self.max_attempts = max_attempts
        self.clock = clock
        self._sleep = sleep

    @classmethod
    def from_config(cls, config: WaiterConfig, **kwargs) -> "OperationWaiter":
        return cls(poll_interval=config.poll_interval, max_attempts=config.max_attempts, **kwargs)

    def _next_phase(
        self, handle: OperationHandle, attempts: int, deadline: Optional[Deadline]
    ) -> WaitPhase:
        if handle.status is OperationStatus.DONE:
            return WaitPhase.SUCCEEDED
        if handle.status is OperationStatus.FAILED:
            return WaitPhase.FAILED
        if attempts >= self.max_attempts:
            return WaitPhase.TIMED_OUT
        if deadline is not None and deadline.expired:
            return WaitPhase.TIMED_OUT
        return WaitPhase.POLLING

    def wait(
        self, handle: OperationHandle, poll: Poll, deadline: Optional[Deadline] = None
    ) -> OperationHandle:
        """
        Block until ``handle`` is terminal.

        Args:
            handle: Handle returned by the mutating call
            poll: Function returning the operation's current handle
            deadline: Optional overall deadline of the calling operation

        Returns:
            The terminal, successful handle

        Raises:
            OperationFailedError: The provider reported a terminal failure
            OperationTimeoutError: Still pending after the budget or deadline
        """
        attempts = 0
        current = handle

        while True:
            phase = self._next_phase(current, attempts, deadline)

            if phase is WaitPhase.SUCCEEDED:
                logger.debug("Operation completed", operation=current.name, attempts=attempts)
                return current

            if phase is WaitPhase.FAILED:
                logger.warning("Operation failed", operation=current.name, error=current.error)
                raise OperationFailedError(current.name, current.error)

            if phase is WaitPhase.TIMED_OUT:
                reason = (
                    "attempt budget exhausted" if attempts >= self.max_attempts else "deadline expired"
                )
                logger.warning(
                    "Operation still pending, giving up",
                    operation=current.name,
                    attempts=attempts,
                    reason=reason,
                )
                raise OperationTimeoutError(current.name, attempts, reason)

            delay = self.poll_interval
            if deadline is not None:
                delay = min(delay, deadline.remaining())
            self._sleep(delay)
            current = poll(current)
            attempts += 1
            logger.debug(
                "Polled operation", operation=current.name, status=current.status.value, attempt=attempts
            )
