"""Helpers that make several values current at once."""
import functools
import inspect
from collections.abc import Iterator
from contextlib import ExitStack, contextmanager
from typing import Any, Callable, Optional, TypeVar, cast

from scoped_current.cell import SharedCell
from scoped_current.guard import CurrentGuard
from scoped_current.registry import ScopeRegistry

F = TypeVar('F', bound=Callable[..., Any])


@contextmanager
def scope(
    *values: Any,  # noqa: ANN401
    registry: Optional[ScopeRegistry] = None,
) -> Iterator[tuple[CurrentGuard[Any], ...]]:
    """Make the values current for the duration of the block.

    Values are registered from left to right and restored in the reverse
    order, whatever way the block is left.

    Usage example:

    >>> with scope(Config(), Session()) as (config_guard, session_guard):
    >>>     run()
    """
    with ExitStack() as stack:
        guards = tuple(
            stack.enter_context(CurrentGuard(value, registry=registry))
            for value in values
        )
        yield guards


def with_current(
    *values: Any,  # noqa: ANN401
    registry: Optional[ScopeRegistry] = None,
) -> Callable[[F], F]:
    """Decorator that calls the function with the values made current.

    Every value is wrapped into one cell at decoration time, so all calls,
    including concurrent ones, share the borrow tracking of that cell.
    Coroutine functions keep the values current until the coroutine finishes.
    """
    cells = tuple(
        value if isinstance(value, SharedCell) else SharedCell(value)
        for value in values
    )

    def decorator(func: F) -> F:
        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
                with scope(*cells, registry=registry):
                    return await func(*args, **kwargs)

            return cast(F, async_wrapper)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:  # noqa: ANN401
            with scope(*cells, registry=registry):
                return func(*args, **kwargs)

        return cast(F, wrapper)

    return decorator
