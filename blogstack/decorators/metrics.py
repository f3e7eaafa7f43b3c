from collections.abc import Awaitable, Callable
from functools import wraps
from time import perf_counter
from typing import ParamSpec, TypeVar

from blogstack.monitoring.prometheus import record_resource_duration

# Type variables for generic decorator
P = ParamSpec("P")
R = TypeVar("R")


def timed(
    endpoint: str | None = None,
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Time async functions with automatic metrics recording.

    Args:
        endpoint: API endpoint path (defaults to function name).

    Returns:
        Decorated function with timing instrumentation.

    Example:
        @timed("/api/blogs")
        async def get_all_blogs() -> list[BlogResponse]:
            ...
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        ep = endpoint or func.__name__

        @wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            start = perf_counter()
            success = False
            try:
                result = await func(*args, **kwargs)
                success = True
                return result
            finally:
                record_resource_duration(ep, perf_counter() - start, success=success)

        return wrapper

    return decorator
