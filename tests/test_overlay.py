from typing import Any

import pytest

from scoped_current import (
    BorrowError,
    Current,
    CurrentGuard,
    Derived,
    Modifier,
    NoCurrentError,
    SharedCell,
    derive,
    modify,
)
from tests.models import Foo


class Text(Derived, Modifier):
    def __init__(self, text: str) -> None:
        self.text = text

    @classmethod
    def derive_from(cls, obj: Any) -> 'Text':
        return cls(obj.text)

    def modify(self, obj: Any) -> None:
        obj.text = self.text


class Suffix(Modifier):
    def __init__(self, suffix: str) -> None:
        self.suffix = suffix

    def modify(self, obj: Any) -> None:
        obj.text += self.suffix


class Nested(Modifier):
    """Derives a value from the current `Foo` while it is being modified."""

    def modify(self, obj: Any) -> None:
        derive(Current(Foo), Text)


class TestOverlay:
    def test_plain_value(self) -> None:
        foo = Foo('hello')

        assert derive(foo, Text).text == 'hello'
        assert modify(foo, Text('world'), Suffix('!')) is foo
        assert foo.text == 'world!'

    def test_cell(self) -> None:
        cell = SharedCell(Foo('hello'))

        modify(cell, Text('world!'))

        assert derive(cell, Text).text == 'world!'

    def test_current(self) -> None:
        current_foo = Current(Foo)

        with CurrentGuard(Foo('hello')) as guard:
            assert derive(current_foo, Text).text == 'hello'
            modify(current_foo, Text('world!'))
            assert derive(current_foo, Text).text == 'world!'

        assert guard.into_inner().text == 'world!'
        with pytest.raises(NoCurrentError):
            derive(current_foo, Text)

    def test_reentrant_derive_conflicts(self) -> None:
        with CurrentGuard(Foo('hello')):
            with pytest.raises(BorrowError):
                modify(Current(Foo), Nested())

            assert Current(Foo).text == 'hello'

    def test_abstract_overlays(self) -> None:
        with pytest.raises(TypeError):
            Modifier()  # type: ignore[abstract]
