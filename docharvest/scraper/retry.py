"""Exponential-backoff retry for callers that need more than one attempt."""

from __future__ import annotations

import time
from typing import Callable, Optional, Tuple, Type, TypeVar

from docharvest.config import settings

T = TypeVar("T")


def with_retry(
    fn: Callable[[], T],
    attempts: Optional[int] = None,
    base_delay: Optional[float] = None,
    give_up_on: Tuple[Type[BaseException], ...] = (),
    label: str = "retry",
) -> T:
    """Call *fn* until it succeeds or the attempt ceiling is reached.

    The delay doubles after each failure: ``base_delay``, ``2 * base_delay``,
    ``4 * base_delay`` …

    Args:
        fn: Zero-argument callable to invoke.
        attempts: Total number of calls allowed.  Defaults to
            ``settings.retry_max``.
        base_delay: Delay in seconds after the first failure.  Defaults to
            ``settings.retry_base_delay``.
        give_up_on: Exception types that are re-raised immediately.
        label: Prefix used in progress output.

    Raises:
        The exception from the final attempt, or any ``give_up_on`` exception.
    """
    attempts = settings.retry_max if attempts is None else attempts
    base_delay = settings.retry_base_delay if base_delay is None else base_delay
    if attempts < 1:
        raise ValueError("attempts must be at least 1")

    for attempt in range(attempts):
        try:
            return fn()
        except give_up_on:
            raise
        except Exception as exc:
            if attempt == attempts - 1:
                print(f"[{label}] exhausted {attempts} attempt(s): {exc}")
                raise
            delay = base_delay * (2 ** attempt)
            print(
                f"[{label}] attempt {attempt + 1}/{attempts} failed ({exc}); "
                f"retrying in {delay:.1f}s …"
            )
            time.sleep(delay)
