from collections.abc import Iterator

import pytest

from scoped_current import ScopeRegistry, ScopeSettings, get_registry


@pytest.fixture(autouse=True)
def _isolated_default_registry() -> Iterator[None]:
    registry = get_registry()
    settings = registry.settings
    with registry.isolated():
        yield
    registry.settings = settings


@pytest.fixture
def settings() -> ScopeSettings:
    return ScopeSettings()


@pytest.fixture
def registry(settings: ScopeSettings) -> ScopeRegistry:
    return ScopeRegistry('test', settings=settings)
