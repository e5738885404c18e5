"""Overlay module.

Lets a "derive a value" or "apply a change" operation be written once and
used the same way with a plain object, a :class:`SharedCell` or a
:class:`Current` accessor.

Usage example:

>>> class Text(Derived, Modifier):
>>>     def __init__(self, text: str) -> None:
>>>         self.text = text
>>>     @classmethod
>>>     def derive_from(cls, obj: Foo) -> 'Text':
>>>         return cls(obj.text)
>>>     def modify(self, obj: Foo) -> None:
>>>         obj.text = self.text

>>> derive(Current(Foo), Text).text
>>> modify(Current(Foo), Text('world!'))
"""
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from scoped_current.cell import SharedCell
from scoped_current.current import Current

DerivedT = TypeVar('DerivedT', bound='Derived')
TargetT = TypeVar('TargetT')


class Derived(ABC):
    """A value computed from an object."""

    @classmethod
    @abstractmethod
    def derive_from(cls: type[DerivedT], obj: Any) -> DerivedT:  # noqa: ANN401
        """Compute the value from the object."""


class Modifier(ABC):
    """A change applied to an object."""

    @abstractmethod
    def modify(self, obj: Any) -> None:  # noqa: ANN401
        """Apply the change to the object."""


@contextmanager
def _borrow(target: Any, *, mutable: bool) -> Iterator[Any]:  # noqa: ANN401
    if isinstance(target, (Current, SharedCell)):
        borrow = target.borrow_mut() if mutable else target.borrow()
        with borrow as value:
            yield value
    else:
        yield target


def derive(target: Any, kind: type[DerivedT]) -> DerivedT:  # noqa: ANN401
    """Compute a derived value from the target.

    Args:
        target (Any): A plain object, a cell or a current value accessor.
        kind (type[DerivedT]): The derived value class.

    Raises:
        NoCurrentError: The target is an accessor and no current value is set.
        BorrowError: The target is mutably borrowed.
    """
    with _borrow(target, mutable=False) as obj:
        return kind.derive_from(obj)


def modify(target: TargetT, *modifiers: Modifier) -> TargetT:
    """Apply the modifiers to the target in order.

    Args:
        target (TargetT): A plain object, a cell or a current value accessor.
        *modifiers (Modifier): Changes to apply.

    Returns:
        TargetT: The target itself.

    Raises:
        NoCurrentError: The target is an accessor and no current value is set.
        BorrowError: The target is already borrowed.
    """
    with _borrow(target, mutable=True) as obj:
        for modifier in modifiers:
            modifier.modify(obj)
    return target
