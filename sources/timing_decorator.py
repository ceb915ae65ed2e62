# timing_decorator.py
import functools
import time
from typing import Any, Callable, Optional, TypeVar, cast

from app_logger import logger

F = TypeVar("F", bound=Callable[..., Any])


def timed(label: Optional[str] = None) -> Callable[[F], F]:
    """
    Log how long the wrapped call took, in milliseconds, at DEBUG level
    (file handler only).
    """
    def decorator(func: F) -> F:
        tag = label or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            start = time.perf_counter()
            try:
                return func(*args, **kwargs)
            finally:
                logger.debug("[%s] took %.2f ms", tag,
                             (time.perf_counter() - start) * 1000.0)
        return cast(F, wrapper)
    return decorator
