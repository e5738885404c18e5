"""Module of the guard that makes a value current."""
from types import TracebackType
from typing import Any, Generic, Optional, TypeVar, Union, cast

import structlog

from scoped_current.cell import SharedCell
from scoped_current.exceptions import GuardOrderError
from scoped_current.registry import ScopeRegistry, get_registry
from scoped_current.utils import type_name

T = TypeVar('T')

logger = structlog.get_logger('scoped_current')


class CurrentGuard(Generic[T]):
    """Makes a value current for its type until the guard is released.

    Guards for the same type must be released in the reverse order of
    their acquisition. The previous current value (or its absence) is
    restored on release.

    Usage example:

    >>> with CurrentGuard(Foo(text='hello')):
    >>>     assert Current(Foo).text == 'hello'

    Args:
        value (Union[T, SharedCell[T]]): The value to make current. A cell is
            registered as is, any other value is wrapped into a new cell.
        as_type (Optional[type]): Type to register the value for.
            Defaults to the type of the value.
        registry (Optional[ScopeRegistry]): Registry to use.
            Defaults to the default registry.

    Raises:
        TypeError: The value is not an instance of ``as_type``.
    """
    def __init__(
        self,
        value: Union[T, SharedCell[T]],
        *,
        as_type: Optional[type] = None,
        registry: Optional[ScopeRegistry] = None,
    ) -> None:
        cell: SharedCell[T] = (
            value if isinstance(value, SharedCell) else SharedCell(cast(T, value))
        )
        if as_type is None:
            as_type = cell.value_type
        elif not isinstance(cell.get_unchecked(), as_type):
            msg = (
                f'`{type_name(cell.value_type)}` can not be current '
                f'for `{type_name(as_type)}`'
            )
            raise TypeError(msg)

        self._cell = cell
        self._type = as_type
        self._registry = registry if registry is not None else get_registry()
        self._previous: Optional[SharedCell[Any]] = None
        self._active = False
        self._released = False

    def __repr__(self) -> str:
        state = 'active' if self._active else 'released' if self._released else 'new'
        return f'<{type(self).__name__} {type_name(self._type)} {state}>'

    @property
    def type_(self) -> type:
        """Type the value is current for."""
        return self._type

    @property
    def cell(self) -> SharedCell[T]:
        """Cell registered by the guard."""
        return self._cell

    @property
    def active(self) -> bool:
        """The guard is acquired and not yet released."""
        return self._active

    @property
    def value(self) -> T:
        """The guarded value, including replacements made through accessors."""
        return self._cell.get_unchecked()

    def acquire(self) -> 'CurrentGuard[T]':
        """Register the value as current.

        Does nothing if the guard is already active. A released guard
        can not be acquired again.
        """
        if self._active:
            return self
        if self._released:
            msg = f'The guard for `{type_name(self._type)}` is already released'
            raise RuntimeError(msg)
        self._previous = self._registry.register(self._type, self._cell)
        self._active = True
        return self

    def release(self) -> None:
        """Restore the previous current value.

        Runs at most once, further calls do nothing.

        Raises:
            GuardOrderError: Order checking is enabled and the guard is not the
                active registration for its type in the calling context. The
                guard stays active and can be released again later.
        """
        if not self._active:
            return
        if self._registry.lookup(self._type) is not self._cell:
            logger.warning(
                'guard released out of order',
                type=type_name(self._type),
                registry=self._registry.name,
            )
            if self._registry.settings.strict_order:
                msg = (
                    f'The guard for `{type_name(self._type)}` is released while '
                    'it is not the current registration'
                )
                raise GuardOrderError(msg)
        self._registry.restore(self._type, self._previous)
        self._previous = None
        self._active = False
        self._released = True

    def into_inner(self) -> T:
        """Get the value back after the guard is released."""
        if self._active:
            msg = f'The guard for `{type_name(self._type)}` is still active'
            raise RuntimeError(msg)
        return self._cell.into_inner()

    def __enter__(self) -> 'CurrentGuard[T]':
        return self.acquire()

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        self.release()


def acquire(
    value: Union[T, SharedCell[T]],
    *,
    as_type: Optional[type] = None,
    registry: Optional[ScopeRegistry] = None,
) -> CurrentGuard[T]:
    """Make the value current and return the active guard.

    The caller must release the guard, see :meth:`CurrentGuard.release`.
    """
    return CurrentGuard(value, as_type=as_type, registry=registry).acquire()
