"""Module of the current value registry.

The registry maps a type to the cell holding the active instance of that
type. The mapping itself lives in a :class:`contextvars.ContextVar`, so every
thread starts with an empty mapping and every asyncio task works on a
snapshot of the mapping of its parent. The mapping is never mutated in place:
``register`` and ``restore`` install a new mapping, which keeps contexts
isolated from each other without locking.
"""
import contextvars
import itertools
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from types import MappingProxyType
from typing import Any, Callable, Optional, TypeVar

import structlog

from scoped_current.cell import SharedCell
from scoped_current.settings import ScopeSettings
from scoped_current.utils import type_name

R = TypeVar('R')

Slots = Mapping[type, SharedCell[Any]]

_EMPTY: Slots = MappingProxyType({})
_counter = itertools.count()

logger = structlog.get_logger('scoped_current')


class ScopeRegistry:
    """Context-local registry of the current values.

    Any number of registries can exist. The one returned by
    :func:`get_registry` is used when no registry is passed explicitly.

    Args:
        name (Optional[str]): Name of the registry, used in the name of
            its context variable. Defaults to a generated name.
        settings (Optional[ScopeSettings]): Registry configuration.
            Read from the environment on first use if not given.
    """
    def __init__(
        self,
        name: Optional[str] = None,
        settings: Optional[ScopeSettings] = None,
    ) -> None:
        self.name = name or f'registry-{next(_counter)}'
        self._settings = settings
        self._slots: contextvars.ContextVar[Slots] = contextvars.ContextVar(
            f'scoped_current.{self.name}', default=_EMPTY,
        )

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.name!r})'

    @property
    def settings(self) -> ScopeSettings:
        """Registry configuration."""
        if self._settings is None:
            self._settings = ScopeSettings()
        return self._settings

    @settings.setter
    def settings(self, settings: ScopeSettings) -> None:
        self._settings = settings

    def register(
        self,
        type_: type,
        cell: SharedCell[Any],
    ) -> Optional[SharedCell[Any]]:
        """Install the cell as current for the type.

        Args:
            type_ (type): Type identity.
            cell (SharedCell[Any]): Cell with the new current value.

        Returns:
            Optional[SharedCell[Any]]: The previously installed cell, if any.
        """
        slots = self._slots.get()
        previous = slots.get(type_)
        self._slots.set(MappingProxyType({**slots, type_: cell}))
        if self.settings.log_events:
            logger.debug(
                'current registered',
                type=type_name(type_),
                registry=self.name,
                shadows=previous is not None,
            )
        return previous

    def restore(self, type_: type, previous: Optional[SharedCell[Any]]) -> None:
        """Undo the matching :meth:`register` call.

        Args:
            type_ (type): Type identity.
            previous (Optional[SharedCell[Any]]): Value returned by
                :meth:`register`. If ``None``, the entry is removed.
        """
        slots = dict(self._slots.get())
        if previous is None:
            slots.pop(type_, None)
        else:
            slots[type_] = previous
        self._slots.set(MappingProxyType(slots) if slots else _EMPTY)
        if self.settings.log_events:
            logger.debug(
                'current restored',
                type=type_name(type_),
                registry=self.name,
                empty=previous is None,
            )

    def lookup(self, type_: type) -> Optional[SharedCell[Any]]:
        """Get the cell that is current for the type, if any."""
        return self._slots.get().get(type_)

    def active_types(self) -> tuple[type, ...]:
        """Types that have a current value in this context."""
        return tuple(self._slots.get())

    def __contains__(self, type_: object) -> bool:
        return type_ in self._slots.get()

    def __len__(self) -> int:
        return len(self._slots.get())

    @contextmanager
    def isolated(self) -> Iterator['ScopeRegistry']:
        """Run the body with no current values.

        The values current before entering are visible again on exit.
        """
        token = self._slots.set(_EMPTY)
        try:
            yield self
        finally:
            self._slots.reset(token)

    def run_isolated(self, func: Callable[..., R], *args: Any, **kwargs: Any) -> R:  # noqa: ANN401
        """Call the function in a copy of the context with no current values."""
        def _run() -> R:
            self._slots.set(_EMPTY)
            return func(*args, **kwargs)

        return contextvars.copy_context().run(_run)


_default_registry = ScopeRegistry('default')


def get_registry() -> ScopeRegistry:
    """Get the default registry."""
    return _default_registry


def configure(settings: Optional[ScopeSettings] = None) -> ScopeRegistry:
    """Apply the configuration to the default registry.

    Args:
        settings (Optional[ScopeSettings], optional): Registry configuration.
            Defaults to `None`, that is, the configuration is read from the
            environment again.

    Returns:
        ScopeRegistry: The default registry.
    """
    _default_registry.settings = settings or ScopeSettings()
    return _default_registry
