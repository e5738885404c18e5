"""Module of the current value accessor."""
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Generic, Optional, TypeVar, cast

from scoped_current.cell import SharedCell
from scoped_current.exceptions import NoCurrentError
from scoped_current.registry import ScopeRegistry, get_registry
from scoped_current.utils import type_name

T = TypeVar('T')


class Current(Generic[T]):
    """The current value of a type.

    The accessor holds no value, every access looks the registry up again.
    Attributes that the accessor does not define are read from and written
    to the current value.

    Usage example:

    >>> current_foo = Current(Foo)
    >>> with CurrentGuard(Foo(text='hello')):
    >>>     assert current_foo.text == 'hello'
    >>>     current_foo.text = 'world!'
    >>>     assert current_foo.get().text == 'world!'
    >>> current_foo.try_get() is None

    Args:
        type_ (type[T]): Type of the current value.
        registry (Optional[ScopeRegistry]): Registry to use.
            Defaults to the default registry.
    """
    __slots__ = ('_type', '_registry')

    _type: type[T]
    _registry: Optional[ScopeRegistry]

    def __init__(self, type_: type[T], registry: Optional[ScopeRegistry] = None) -> None:
        object.__setattr__(self, '_type', type_)
        object.__setattr__(self, '_registry', registry)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({type_name(self._type)})'

    @property
    def type_(self) -> type[T]:
        """Type of the current value."""
        return self._type

    @property
    def registry(self) -> ScopeRegistry:
        """Registry the accessor looks into."""
        return self._registry if self._registry is not None else get_registry()

    def _lookup(self) -> Optional[SharedCell[T]]:
        return cast(Optional[SharedCell[T]], self.registry.lookup(self._type))

    def cell(self) -> SharedCell[T]:
        """Get the cell of the current value.

        Raises:
            NoCurrentError: No current value is set for the type.
        """
        cell = self._lookup()
        if cell is None:
            msg = f'No current `{type_name(self._type)}` is set'
            raise NoCurrentError(msg, self._type)
        return cell

    def is_set(self) -> bool:
        """A current value is set for the type."""
        return self._lookup() is not None

    def __bool__(self) -> bool:
        return self.is_set()

    def try_get(self) -> Optional[T]:
        """Get the current value or ``None`` if it is not set.

        Only the absence of a current value is turned into ``None``, borrow
        conflicts are still reported.

        Raises:
            BorrowError: Borrow tracking is enabled and the current value is
                mutably borrowed.
        """
        cell = self._lookup()
        if cell is None:
            return None
        if self.registry.settings.checked:
            return cell.get()
        return cell.get_unchecked()

    def get(self) -> T:
        """Get the current value.

        Raises:
            NoCurrentError: No current value is set for the type.
            BorrowError: The current value is mutably borrowed.
        """
        cell = self.cell()
        if self.registry.settings.checked:
            return cell.get()
        return cell.get_unchecked()

    def get_unchecked(self) -> T:
        """Get the current value without borrow tracking.

        Nothing prevents the caller from mutating the value while it is
        borrowed elsewhere, or from keeping it after its guard is released.

        Raises:
            NoCurrentError: No current value is set for the type.
        """
        return self.cell().get_unchecked()

    @contextmanager
    def borrow(self) -> Iterator[T]:
        """Borrow the current value for reading.

        Raises:
            NoCurrentError: No current value is set for the type.
            BorrowError: The current value is mutably borrowed.
        """
        with self.cell().borrow() as value:
            yield value

    @contextmanager
    def borrow_mut(self) -> Iterator[T]:
        """Borrow the current value exclusively.

        Raises:
            NoCurrentError: No current value is set for the type.
            BorrowError: The current value is already borrowed.
        """
        with self.cell().borrow_mut() as value:
            yield value

    def replace(self, value: T) -> T:
        """Replace the current value in place and return the old one.

        The guard that registered the value restores the previous current
        value as usual. Useful for immutable values.
        """
        return self.cell().replace(value)

    def __getattr__(self, name: str) -> Any:  # noqa: ANN401
        # Unset slots end up here while copy and pickle rebuild the accessor.
        if name in self.__slots__ or (name.startswith('__') and name.endswith('__')):
            raise AttributeError(name)
        return getattr(self.get(), name)

    def __setattr__(self, name: str, value: Any) -> None:  # noqa: ANN401
        if name in self.__slots__:
            object.__setattr__(self, name, value)
            return
        if name.startswith('__') and name.endswith('__'):
            raise AttributeError(name)
        with self.borrow_mut() as current:
            setattr(current, name, value)

    def __delattr__(self, name: str) -> None:
        if name in self.__slots__ or (name.startswith('__') and name.endswith('__')):
            raise AttributeError(name)
        with self.borrow_mut() as current:
            delattr(current, name)
