"""Logger configuration module via structlog."""
import logging
import sys
from typing import Optional, TextIO

import structlog
from structlog.types import Processor

from scoped_current.custom_processors import add_current_types
from scoped_current.factory import LoggerFactory
from scoped_current.registry import ScopeRegistry
from scoped_current.settings import LogSettings


def configure_processor(
    *,
    json_logs: bool = False,
    event_key: str = 'event',
    traceback_as_str: bool = True,
    registry: Optional[ScopeRegistry] = None,
) -> list[Processor]:
    """Configure the processor chain.

    Args:
        json_logs (bool, optional): Logging in json format. Defaults to False.
        event_key (str, optional): The key of the main message. Defaults to "event".
        traceback_as_str (bool, optional): Log exceptions in string format. Defaults to True.
        registry (Optional[ScopeRegistry], optional): Registry whose current
            types are added to every entry. Defaults to the default registry.

    Returns:
        list[Processor]: Processor chain.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        add_current_types(registry),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.ExtraAdder(),
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.EventRenamer(to=event_key),
    ]

    if json_logs and not traceback_as_str:
        shared_processors.append(structlog.processors.dict_tracebacks)
    if json_logs and traceback_as_str:
        shared_processors.append(structlog.processors.format_exc_info)

    return shared_processors


def configure_renderer(
    *,
    json_logs: bool = False,
    event_key: str = 'event',
) -> list[Processor]:
    """Configure the render processor.

    Args:
        json_logs (bool, optional): Logging in json format. Defaults to False.
        event_key (str, optional): The key of the main message. Defaults to "event".

    Returns:
        list[Processor]: Render processor chain.
    """
    if json_logs:
        return [structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(event_key=event_key)]


def configure_formatter(
    processors: list[Processor],
    renderer: list[Processor],
) -> structlog.stdlib.ProcessorFormatter:
    """Configure a handler for formatting log entries.

    Args:
        processors (list[Processor]): Processor chain.
        renderer (list[Processor]): Render processor chain.

    Returns:
        structlog.stdlib.ProcessorFormatter: A handler for formatting log entries.
    """
    return structlog.stdlib.ProcessorFormatter(
        # Runs only on `logging` entries that do not originate within structlog.
        foreign_pre_chain=processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *renderer,
        ],
    )


def configure_structlog(logger: str, processors: list[Processor]) -> None:
    """Configure Structlog.

    Args:
        logger (str): The name of the logger.
        processors (list[Processor]): Processor chain.
    """
    structlog.configure(
        processors=[
            *processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=LoggerFactory(logger=logging.getLogger(logger)),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def base_formatter(
    settings: LogSettings,
    registry: Optional[ScopeRegistry] = None,
) -> structlog.stdlib.ProcessorFormatter:
    """Create a basic formatter based on the configuration."""
    shared_processors = configure_processor(
        json_logs=settings.json_logs,
        event_key=settings.event_key,
        traceback_as_str=settings.traceback_as_str,
        registry=registry,
    )
    log_renderer = configure_renderer(
        json_logs=settings.json_logs,
        event_key=settings.event_key,
    )
    return configure_formatter(shared_processors, log_renderer)


def setup_logger(
    settings_: LogSettings,
    registry: Optional[ScopeRegistry] = None,
    stream: Optional[TextIO] = None,
) -> list[logging.Handler]:
    """Initialize the logger with the configuration.

    Args:
        settings_ (LogSettings): Logger settings.
        registry (Optional[ScopeRegistry], optional): Registry whose current
            types are added to log entries. Defaults to the default registry.
        stream (Optional[TextIO], optional): Stream of the console handler.
            Defaults to ``sys.stderr``.

    Returns:
        list[logging.Handler]: Handlers installed on the root logger.
    """
    configure_structlog(
        settings_.logger,
        configure_processor(
            json_logs=settings_.json_logs,
            event_key=settings_.event_key,
            traceback_as_str=settings_.traceback_as_str,
            registry=registry,
        ),
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(base_formatter(settings_, registry))

    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    root_logger.setLevel(settings_.log_level if not settings_.debug else logging.DEBUG)

    if not settings_.enable:
        logging.disable()

    return [handler]
