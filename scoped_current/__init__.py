"""Current values library.

Makes a value "current" for its type for the duration of a block, so that
code anywhere down the call stack can reach it without passing it as an
argument. Registrations are local to the thread or asyncio task, nest in
strict LIFO order and are checked at runtime for conflicting borrows.

>>> with CurrentGuard(Foo(text='hello')):
>>>     print(Current(Foo).text)
"""

from scoped_current.cell import SharedCell
from scoped_current.current import Current
from scoped_current.exceptions import BorrowError, GuardOrderError, NoCurrentError, ScopeError
from scoped_current.guard import CurrentGuard, acquire
from scoped_current.log import setup_logger
from scoped_current.overlay import Derived, Modifier, derive, modify
from scoped_current.registry import ScopeRegistry, configure, get_registry
from scoped_current.scoped import scope, with_current
from scoped_current.settings import BaseSettingsModel, LogSettings, ScopeSettings

__all__ = (
    'BaseSettingsModel',
    'BorrowError',
    'Current',
    'CurrentGuard',
    'Derived',
    'GuardOrderError',
    'LogSettings',
    'Modifier',
    'NoCurrentError',
    'ScopeError',
    'ScopeRegistry',
    'ScopeSettings',
    'SharedCell',
    'acquire',
    'configure',
    'derive',
    'get_registry',
    'modify',
    'scope',
    'setup_logger',
    'with_current',
)
