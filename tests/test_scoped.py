import asyncio

import pytest

from scoped_current import (
    BorrowError,
    Current,
    CurrentGuard,
    ScopeRegistry,
    SharedCell,
    scope,
    with_current,
)
from tests.models import Bar, Foo


class TestScope:
    def test_several_types(self) -> None:
        foo = Foo('foo')
        bar = Bar(1)

        with scope(foo, bar) as guards:
            assert [guard.type_ for guard in guards] == [Foo, Bar]
            assert Current(Foo).get() is foo
            assert Current(Bar).get() is bar

        assert Current(Foo).try_get() is None
        assert Current(Bar).try_get() is None

    def test_same_type_nests(self) -> None:
        with scope(Foo('first'), Foo('second')) as (first, second):
            assert Current(Foo).text == 'second'
            assert not second.cell.is_borrowed
        assert not first.active
        assert not second.active

    def test_restores_outer_values(self) -> None:
        outer = Foo('outer')

        with CurrentGuard(outer):
            with pytest.raises(KeyError):
                with scope(Foo('inner'), Bar(2)):
                    raise KeyError
            assert Current(Foo).get() is outer
            assert Current(Bar).try_get() is None

    def test_explicit_registry(self, registry: ScopeRegistry) -> None:
        with scope(Foo('foo'), registry=registry):
            assert Current(Foo, registry).text == 'foo'
            assert Current(Foo).try_get() is None


class TestWithCurrent:
    def test_function(self) -> None:
        foo = Foo('hello')

        @with_current(foo, Bar(3))
        def read(suffix: str) -> str:
            return f'{Current(Foo).text}{suffix} {Current(Bar).number}'

        assert read('!') == 'hello! 3'
        assert read.__name__ == 'read'
        assert Current(Foo).try_get() is None

    def test_coroutine_function(self) -> None:
        @with_current(Foo('hello'))
        async def read() -> str:
            await asyncio.sleep(0)
            return Current(Foo).text

        assert asyncio.run(read()) == 'hello'
        assert Current(Foo).try_get() is None

    def test_changes_are_kept_between_calls(self) -> None:
        @with_current(Foo('a'))
        def append() -> str:
            Current(Foo).text += 'a'
            return Current(Foo).text

        assert append() == 'aa'
        assert append() == 'aaa'

    def test_concurrent_calls_share_one_cell(self) -> None:
        foo = Foo('hello')

        @with_current(foo)
        async def hold(holding: asyncio.Event, release: asyncio.Event) -> None:
            with Current(Foo).borrow_mut():
                holding.set()
                await release.wait()

        @with_current(foo)
        async def write(holding: asyncio.Event, release: asyncio.Event) -> None:
            await holding.wait()
            try:
                with pytest.raises(BorrowError):
                    Current(Foo).text = 'world!'
            finally:
                release.set()

        async def main() -> None:
            holding = asyncio.Event()
            release = asyncio.Event()
            await asyncio.gather(hold(holding, release), write(holding, release))

        asyncio.run(main())
        assert foo.text == 'hello'

    def test_calls_share_one_cell(self) -> None:
        @with_current(Foo('a'))
        def cell() -> SharedCell[Foo]:
            return Current(Foo).cell()

        assert cell() is cell()
