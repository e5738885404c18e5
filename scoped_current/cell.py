"""Shared cell module.

:class:`SharedCell` keeps a value together with a runtime record of the
borrows taken on it: any number of shared borrows, or a single exclusive one.
It is the slot stored in the registry for every current value.
"""
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Generic, TypeVar

from scoped_current.exceptions import BorrowError
from scoped_current.utils import type_name

T = TypeVar('T')

_EXCLUSIVE = -1


class SharedCell(Generic[T]):
    """Mutable cell with runtime-checked borrows.

    Usage example:

    >>> cell = SharedCell([1, 2])
    >>> with cell.borrow_mut() as value:
    >>>     value.append(3)
    >>> with cell.borrow() as value:
    >>>     assert value == [1, 2, 3]
    """
    __slots__ = ('_value', '_borrows')

    def __init__(self, value: T) -> None:
        self._value = value
        self._borrows = 0

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._value!r})'

    @property
    def value_type(self) -> type:
        """Type of the stored value."""
        return type(self._value)

    @property
    def is_borrowed(self) -> bool:
        """At least one borrow of any kind is alive."""
        return self._borrows != 0

    @property
    def is_borrowed_mut(self) -> bool:
        """The exclusive borrow is alive."""
        return self._borrows == _EXCLUSIVE

    def _acquire_shared(self) -> None:
        if self._borrows == _EXCLUSIVE:
            msg = f'`{type_name(self.value_type)}` is already mutably borrowed'
            raise BorrowError(msg)
        self._borrows += 1

    def _acquire_exclusive(self) -> None:
        if self._borrows == _EXCLUSIVE:
            msg = f'`{type_name(self.value_type)}` is already mutably borrowed'
            raise BorrowError(msg)
        if self._borrows:
            msg = f'`{type_name(self.value_type)}` is already borrowed'
            raise BorrowError(msg)
        self._borrows = _EXCLUSIVE

    @contextmanager
    def borrow(self) -> Iterator[T]:
        """Borrow the value for reading.

        Raises:
            BorrowError: The value is mutably borrowed.
        """
        self._acquire_shared()
        try:
            yield self._value
        finally:
            self._borrows -= 1

    @contextmanager
    def borrow_mut(self) -> Iterator[T]:
        """Borrow the value exclusively.

        Raises:
            BorrowError: The value is already borrowed.
        """
        self._acquire_exclusive()
        try:
            yield self._value
        finally:
            self._borrows = 0

    def get(self) -> T:
        """Get the value after checking that it is not mutably borrowed."""
        with self.borrow() as value:
            return value

    def get_unchecked(self) -> T:
        """Get the value without looking at the borrows."""
        return self._value

    def replace(self, value: T) -> T:
        """Replace the value and return the old one.

        Raises:
            BorrowError: The value is borrowed.
        """
        with self.borrow_mut() as old:
            self._value = value
        return old

    def into_inner(self) -> T:
        """Get the value, it must not be borrowed anymore."""
        if self._borrows:
            msg = f'`{type_name(self.value_type)}` is still borrowed'
            raise BorrowError(msg)
        return self._value
