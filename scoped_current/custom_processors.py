"""Log processors module."""

from typing import Optional

from structlog.typing import EventDict, Processor, ProcessorReturnValue, WrappedLogger

from scoped_current.registry import ScopeRegistry, get_registry
from scoped_current.utils import type_name


def add_current_types(
    registry: Optional[ScopeRegistry] = None,
    *,
    key: str = 'current',
) -> Processor:
    """Add the names of the types that have a current value to the `key` key.

    Nothing is added when no value is current in the calling context.

    Args:
        registry (Optional[ScopeRegistry], optional): Registry to inspect.
            Defaults to the default registry.
        key (str, optional): Key of the event dictionary. Defaults to "current".
    """
    def processor(
        _: WrappedLogger,
        __: str,
        event_dict: EventDict,
    ) -> ProcessorReturnValue:
        types = (registry if registry is not None else get_registry()).active_types()
        if types:
            event_dict[key] = [type_name(type_) for type_ in types]
        return event_dict

    return processor

