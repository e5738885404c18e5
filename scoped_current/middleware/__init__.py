"""Middleware for the current values package."""
from .current_scope import CurrentScopeSetMiddleware

__all__ = (
    'CurrentScopeSetMiddleware',
)
