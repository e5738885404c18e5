"""Middleware module for isolating current values per request."""
from collections.abc import Collection, Sequence
from typing import Any, Callable, Optional

from starlette.types import ASGIApp, Receive, Scope, Send

from scoped_current.registry import ScopeRegistry, get_registry
from scoped_current.scoped import scope as current_scope

ValueFactory = Callable[[Scope], Any]


class CurrentScopeSetMiddleware:
    """Middleware that runs each request with its own current values.

    Values made current outside of the request are hidden from it, and the
    values created by ``factories`` are current for the whole request.

    Args:
        app (ASGIApp): ASGI application
        factories (Optional[Sequence[ValueFactory]], optional): Callables
            that take the ASGI scope and return a value to make current.
            Values are registered in the order of the factories.
        registry (Optional[ScopeRegistry], optional): Registry to use.
            Defaults to the default registry.
        scope_types (Collection[str], optional): ASGI scope types the
            factories are called for. Defaults to http and websocket.
    """
    def __init__(
        self,
        app: ASGIApp,
        factories: Optional[Sequence[ValueFactory]] = None,
        registry: Optional[ScopeRegistry] = None,
        scope_types: Collection[str] = ('http', 'websocket'),
    ) -> None:
        self.app = app
        self.factories = list(factories or [])
        self.registry = registry
        self.scope_types = scope_types

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:  # noqa: D102
        registry = self.registry if self.registry is not None else get_registry()
        with registry.isolated():
            if scope['type'] not in self.scope_types:
                await self.app(scope, receive, send)
                return

            values = [factory(scope) for factory in self.factories]
            with current_scope(*values, registry=registry):
                await self.app(scope, receive, send)
