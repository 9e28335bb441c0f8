"""
Retry engine for shares API calls.

Attempts are strictly sequential with a fixed delay between them (no backoff,
no jitter). Errors whose reason code is terminal stop the loop immediately.
The reason code comes from the upstream envelope when there is one and from
the error itself otherwise. Everything else, including transport failures, is
retried until the attempt budget is spent.
"""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

import structlog

from vpc_file.core.reason_code import is_terminal, reason_code_for
from vpc_file.exceptions import APIError, VPCFileError

logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True, kw_only=True)
class RetryPolicy:
    """
    Attributes:
        max_attempts: Total number of attempts, including the first one.
        delay: Seconds to wait between two attempts.
    """

    max_attempts: int = 10
    delay: float = 60.0

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            msg = "max_attempts must be at least 1"
            raise ValueError(msg)
        if self.delay < 0:
            msg = "delay must be non-negative"
            raise ValueError(msg)


# Process-wide default. Sessions capture their own policy when opened; only
# calls made without an explicit policy read this value.
_default_policy = RetryPolicy()


def set_retry_parameters(max_attempts: int, delay: float) -> None:
    """
    Overwrite the process-wide default retry policy.

    This is global state: every later ``retry`` call made without an explicit
    policy, from any thread, observes the new values on its next attempt.

    Raises:
        ValueError: If ``max_attempts < 1`` or ``delay < 0``.
    """
    global _default_policy
    _default_policy = RetryPolicy(max_attempts=max_attempts, delay=delay)
    logger.debug("Retry parameters updated", max_attempts=max_attempts, delay=delay)


def get_retry_policy() -> RetryPolicy:
    """Return the current process-wide default retry policy."""
    return _default_policy


def skip_retry(error: BaseException) -> bool:
    """
    Check whether an error will never succeed on a later attempt.

    An error carrying an upstream envelope is classified by the code of its
    first item only. Other library errors are classified by their own reason
    code. Unknown codes and foreign exceptions are retryable.
    """
    if isinstance(error, APIError) and error.envelope is not None:
        return is_terminal(reason_code_for(error.envelope.code))
    if isinstance(error, VPCFileError):
        return is_terminal(error.reason_code)
    return False


def retry(operation: Callable[[], T], *, policy: RetryPolicy | None = None) -> T:
    """
    Run ``operation`` until it succeeds, fails terminally, or attempts run out.

    Args:
        operation: Zero-argument callable performing one network round trip.
        policy: Retry policy. The process-wide default is read before every
            attempt when omitted.

    Returns:
        The operation's return value.

    Raises:
        Exception: The terminal error, or the last error once attempts are exhausted.
    """
    attempt = 0
    while True:
        current = policy or _default_policy
        attempt += 1
        try:
            return operation()
        except Exception as e:
            if skip_retry(e):
                logger.debug("Non-retryable error", attempt=attempt, error=str(e))
                raise
            if attempt >= current.max_attempts:
                logger.warning("Retry attempts exhausted", attempts=attempt, error=str(e))
                raise
            logger.info(
                "Retrying after error",
                attempt=attempt,
                max_attempts=current.max_attempts,
                delay=current.delay,
                error=str(e),
            )
            time.sleep(current.delay)
