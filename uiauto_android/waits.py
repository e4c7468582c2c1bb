# uiauto_android/waits.py
"""
@file waits.py
@brief Bounded polling utilities.
"""

from __future__ import annotations

import time
from datetime import timedelta
from typing import Callable, Optional, Tuple, TypeVar, Union

from .exceptions import TimeoutError
from .timinglogger import TIMING_LOGGER

T = TypeVar("T")

Duration = Union[float, int, timedelta, None]


def _now() -> float:
    """Monotonic time source for deterministic timeout calculations."""
    return time.monotonic()


def to_seconds(value: Duration) -> float:
    """Normalize a duration given as seconds or timedelta; None means zero."""
    if value is None:
        return 0.0
    if isinstance(value, timedelta):
        return value.total_seconds()
    return float(value)


def poll_until(
    attempt: Callable[[], Optional[T]],
    timeout: Duration = 0.0,
    interval: float = 0.2,
    description: str = "condition",
    accept: Callable[[Optional[T]], bool] = bool,
) -> Optional[T]:
    """
    Call attempt() until accept(result) holds or the timeout elapses.

    A zero timeout performs exactly one attempt. Exceptions raised by attempt()
    propagate; callers decide which failures count as a non-match.

    @param attempt Callable producing a candidate result
    @param timeout Total budget (seconds or timedelta)
    @param interval Pause between attempts; 0 re-polls immediately
    @param description Label used in timing events
    @param accept Success test for a result (default: truthiness)
    @return The first accepted result, or None on timeout
    """
    timeout_s = to_seconds(timeout)
    start_time = _now()
    attempt_count = 0

    if TIMING_LOGGER.is_enabled():
        TIMING_LOGGER.log(
            event="poll_start",
            description=description,
            metadata={"timeout_s": timeout_s, "interval_s": interval},
        )

    while True:
        attempt_count += 1
        result = attempt()
        if accept(result):
            if TIMING_LOGGER.is_enabled():
                TIMING_LOGGER.log(
                    event="poll_success",
                    description=description,
                    status="success",
                    metadata={
                        "attempts": attempt_count,
                        "elapsed_s": round(_now() - start_time, 3),
                    },
                )
            return result

        if timeout_s <= 0:
            break
        time_left = timeout_s - (_now() - start_time)
        if time_left <= 0:
            break
        sleep_time = min(interval, time_left)
        if sleep_time > 0:
            time.sleep(sleep_time)

    if TIMING_LOGGER.is_enabled():
        TIMING_LOGGER.log(
            event="poll_timeout",
            description=description,
            status="error" if timeout_s > 0 else "debug",
            metadata={
                "timeout_s": timeout_s,
                "attempts": attempt_count,
                "elapsed_s": round(_now() - start_time, 3),
            },
        )
    return None


def wait_until(
    predicate: Callable[[], T],
    timeout: Duration,
    interval: float = 0.2,
    description: str = "condition",
    exceptions: Tuple[type, ...] = (Exception,),
) -> T:
    """
    Repeatedly runs predicate until it returns a truthy value, or until timeout.

    Exceptions listed in `exceptions` are treated as a falsy result and the
    last one is attached to the TimeoutError; anything else propagates.
    """
    timeout_s = to_seconds(timeout)
    start_time = _now()
    state = {"attempts": 0, "last_exception": None}

    def attempt():
        state["attempts"] += 1
        try:
            return predicate()
        except exceptions as e:
            state["last_exception"] = e
            return None

    result = poll_until(attempt, timeout=timeout_s, interval=interval, description=description)
    if result:
        return result

    last_exception = state["last_exception"]
    if last_exception is not None:
        error = TimeoutError(
            f"Timed out waiting for {description} after {timeout_s}s: "
            f"{type(last_exception).__name__}: {last_exception}"
        )
    else:
        error = TimeoutError(
            f"Timed out waiting for {description} after {timeout_s}s "
            f"(condition kept returning falsy)"
        )
    error.original_exception = last_exception
    error.description = description
    error.timeout = timeout_s
    error.attempt_count = state["attempts"]
    error.elapsed_time = _now() - start_time
    raise error
