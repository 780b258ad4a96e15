"""Bounded retry for calls that may fail transiently."""

from __future__ import annotations

import functools
import logging
import time
from typing import Callable, Tuple, Type, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DelayFunction = Callable[[int], float]


def linear_backoff(base: float) -> DelayFunction:
    """Delay of ``base * n`` seconds before the n-th retry (n starts at 1)."""

    def delay(retry_number: int) -> float:
        return base * retry_number

    return delay


def retry(
    max_retries: int = 3,
    delay: DelayFunction = linear_backoff(1.0),
    exceptions: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Retry the wrapped callable up to ``max_retries`` times after the first attempt.

    The last exception is re-raised unchanged once the retries are used up.
    """
    if max_retries < 0:
        raise ValueError("max_retries must be non-negative")

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> T:
            retry_number = 0
            while True:
                try:
                    return func(*args, **kwargs)
                except exceptions as exc:
                    if retry_number >= max_retries:
                        raise
                    retry_number += 1
                    wait = delay(retry_number)
                    logger.warning(
                        "%s failed (%s); retry %d/%d in %.1fs",
                        func.__name__,
                        exc,
                        retry_number,
                        max_retries,
                        wait,
                    )
                    sleep(wait)

        return wrapper

    return decorator
