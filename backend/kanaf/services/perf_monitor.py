"""Performance logging for the estimator pipeline."""
import functools
import logging
import time
from typing import Callable

logger = logging.getLogger("kanaf-estimator.perf")


def timed(func: Callable) -> Callable:
    """
    Decorator that measures and logs execution time for synchronous functions.

    Usage::

        @timed
        def aggregate(estimations):
            ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            duration_ms = round((time.perf_counter() - start) * 1000, 2)
            logger.debug(
                "%s finished in %.2f ms",
                func.__qualname__,
                duration_ms,
                extra={"duration_ms": duration_ms},
            )
    return wrapper
