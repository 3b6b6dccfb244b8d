"""
Retry utilities with exponential backoff.

Used by the remote brand classifier to retry transient transport
failures before the caller falls back to local detection.
"""

import logging
import time
from functools import wraps
from typing import Any, Callable, Optional, Tuple, Type, TypeVar, Union

from .exceptions import NetworkError

T = TypeVar("T")

logger = logging.getLogger(__name__)


def retry_with_backoff(
    max_retries: Union[int, Callable[[Any], int]] = 3,
    base_delay: float = 0.5,
    backoff_factor: float = 2.0,
    max_delay: float = 10.0,
    exceptions: Tuple[Type[Exception], ...] = (NetworkError,),
    on_retry: Optional[Callable[[Exception, int], None]] = None,
) -> Callable:
    """Decorator for retrying failed operations with exponential backoff.

    Args:
        max_retries: Maximum number of attempts (default: 3). An int, or a
            callable taking the decorated call's ``self`` and returning one,
            so instances can carry their own retry budget.
        base_delay: Initial delay in seconds before first retry
        backoff_factor: Multiplier for delay after each retry
        max_delay: Maximum delay in seconds
        exceptions: Exception types to catch and retry
        on_retry: Optional callback called before each retry
            with (exception, attempt_number)

    Returns:
        Decorated function that retries on specified exceptions

    Example:
        >>> @retry_with_backoff(max_retries=3, base_delay=0.5)
        ... def detect(name):
        ...     return requests.post(url, json={"productName": name})
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            attempts = max_retries(args[0]) if callable(max_retries) else max_retries
            attempts = max(1, int(attempts))
            delay = base_delay
            last_exception: Optional[Exception] = None
            func_name = getattr(func, "__name__", repr(func))

            for attempt in range(attempts):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e

                    if attempt < attempts - 1:
                        current_delay = min(delay, max_delay)
                        logger.warning(
                            f"Attempt {attempt + 1}/{attempts} failed for {func_name}: {e}. "
                            f"Retrying in {current_delay:.2f}s..."
                        )
                        if on_retry:
                            on_retry(e, attempt + 1)
                        time.sleep(current_delay)
                        delay *= backoff_factor
                    else:
                        logger.debug(f"All {attempts} attempts failed for {func_name}: {e}")

            if last_exception:
                raise last_exception

            raise RuntimeError("Retry logic failed unexpectedly")

        return wrapper

    return decorator
