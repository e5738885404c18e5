"""Exception module."""
from typing import Optional


class ScopeError(Exception):
    """Basic exception."""


class NoCurrentError(ScopeError, LookupError):
    """No current value is set for the requested type."""
    def __init__(self, msg: str, type_: Optional[type] = None) -> None:
        super().__init__(msg)
        self.type_ = type_


class BorrowError(ScopeError):
    """The value is already borrowed in a conflicting way."""


class GuardOrderError(ScopeError):
    """The guard is released while it is not the active registration."""
