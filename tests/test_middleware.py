import asyncio
from dataclasses import dataclass
from typing import Any

from starlette.types import Message, Receive, Scope, Send

from scoped_current import Current, CurrentGuard, ScopeRegistry
from scoped_current.middleware import CurrentScopeSetMiddleware
from tests.models import Foo


@dataclass
class RequestInfo:
    path: str

    @classmethod
    def from_scope(cls, scope: Scope) -> 'RequestInfo':
        return cls(scope.get('path', '-'))


async def _receive() -> Message:
    return {'type': 'http.request', 'body': b''}


async def _send(message: Message) -> None:
    pass


class RecordingApp:
    def __init__(self) -> None:
        self.seen: list[dict[str, Any]] = []

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        info = Current(RequestInfo).try_get()
        self.seen.append({
            'path': info.path if info else None,
            'foo': Current(Foo).try_get(),
        })
        await asyncio.sleep(0)


class TestCurrentScopeSetMiddleware:
    def test_request_values(self) -> None:
        app = RecordingApp()
        middleware = CurrentScopeSetMiddleware(app, factories=[RequestInfo.from_scope])

        async def main() -> None:
            await asyncio.gather(
                middleware({'type': 'http', 'path': '/one'}, _receive, _send),
                middleware({'type': 'http', 'path': '/two'}, _receive, _send),
            )

        asyncio.run(main())

        assert sorted(item['path'] for item in app.seen) == ['/one', '/two']
        assert Current(RequestInfo).try_get() is None

    def test_outer_values_are_hidden(self) -> None:
        app = RecordingApp()
        middleware = CurrentScopeSetMiddleware(app)

        with CurrentGuard(Foo('outer')):
            asyncio.run(middleware({'type': 'http', 'path': '/'}, _receive, _send))
            assert Current(Foo).text == 'outer'

        assert app.seen == [{'path': None, 'foo': None}]

    def test_lifespan_skips_factories(self) -> None:
        app = RecordingApp()
        calls = []

        def factory(scope: Scope) -> RequestInfo:
            calls.append(scope['type'])
            return RequestInfo.from_scope(scope)

        middleware = CurrentScopeSetMiddleware(app, factories=[factory])
        asyncio.run(middleware({'type': 'lifespan'}, _receive, _send))

        assert calls == []
        assert app.seen == [{'path': None, 'foo': None}]

    def test_explicit_registry(self, registry: ScopeRegistry) -> None:
        seen = []

        async def app(scope: Scope, receive: Receive, send: Send) -> None:
            seen.append(Current(RequestInfo, registry).path)

        middleware = CurrentScopeSetMiddleware(
            app, factories=[RequestInfo.from_scope], registry=registry,
        )
        asyncio.run(middleware({'type': 'websocket', 'path': '/ws'}, _receive, _send))

        assert seen == ['/ws']
