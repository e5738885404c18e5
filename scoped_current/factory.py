"""Logger factory module."""
from logging import Logger, getLogger
from typing import Any, Optional, Union

import structlog


class LoggerFactory(structlog.stdlib.LoggerFactory):
    """Logger factory bound to one stdlib logger.

    Loggers requested by name (``structlog.get_logger('scoped_current')``)
    become children of the bound logger.
    """
    def __init__(self,
                 logger: Union[Logger, str],
                 ignore_frame_names: Optional[list[str]] = None) -> None:
        self._logger = logger if isinstance(logger, Logger) else getLogger(logger)
        super().__init__(ignore_frame_names=ignore_frame_names)

    @property
    def logger(self) -> Logger:
        """Get logger."""
        return self._logger

    def __call__(self, *args: Any) -> Logger:  # noqa: D102, ANN401
        if args and args[0] != self._logger.name:
            return self._logger.getChild(args[0])
        return self._logger
