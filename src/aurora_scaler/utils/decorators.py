"""Decorator utilities for cross-cutting concerns."""
import time
import logging
import functools
from typing import Any, Callable, TypeVar, cast

logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def log_execution_time(func: F) -> F:
    """Decorator to log how long a scaling pass took.

    Failures are logged with their duration and re-raised unchanged.

    Args:
        func: The function to decorate

    Returns:
        Decorated function that logs execution time
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.monotonic()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            duration = time.monotonic() - start_time
            logger.error(f"{func.__qualname__} failed after {duration:.2f}s: {str(e)}")
            raise
        duration = time.monotonic() - start_time
        logger.info(f"{func.__qualname__} completed in {duration:.2f}s")
        return result
    return cast(F, wrapper)
