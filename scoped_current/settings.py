"""Configuration Module."""

from typing import Any

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from scoped_current.utils import check_sub_settings_unset


class BaseSettingsModel(BaseSettings):
    """Basic model of the settings."""
    model_config = SettingsConfigDict(
        arbitrary_types_allowed=True,
        env_ignore_empty=True,
        env_nested_delimiter='__',
        extra='ignore',
    )

    @model_validator(mode='before')
    @classmethod
    def _check_sub_settings_unset(cls, values: Any) -> Any:  # noqa: ANN401
        if isinstance(values, dict):
            return check_sub_settings_unset(cls.model_fields, values)
        return values


class LogSettings(BaseSettingsModel):
    """Logging configuration.

    Attributes:
        logger (str): Name of the logger
        log_level (str): Logging level (see https://docs.python.org/3/library/logging.html#logging-levels)
        json_logs (bool): The flag that activates logging in json format,
            by default ``False``. If the value is set to ``False``,
            the logs will be adapted to `stdout`.
        traceback_as_str (bool): Logging of the traceback in string form,
            by default ``True``. If the value is set to ``False``, the traceback
            will be converted to json format. It only works when the
            ``json_logs`` parameter is active.
        debug (bool): DEBUG mode, default is ``False``. If the value is
            set to ``True``, the DEBUG logging level will be set forcibly.
        event_key (str): New name for the key ``event``.
            See :class:`structlog.processors.EventRenamer`.
    """

    logger: str = 'scoped_current'
    log_level: str = 'INFO'
    json_logs: bool = False
    traceback_as_str: bool = True
    debug: bool = False
    event_key: str = 'message'

    enable: bool = Field(
        default=True,
        description='Enable logging',
    )


class ScopeSettings(BaseSettingsModel):
    """Configuration of the current value registry.

    Read from the environment with the ``SCOPED_CURRENT__`` prefix,
    e.g. ``SCOPED_CURRENT__STRICT_ORDER=false`` or
    ``SCOPED_CURRENT__LOG__LOG_LEVEL=DEBUG``.

    Attributes:
        checked (bool): Track borrows of current values. When ``False``,
            :meth:`Current.get` behaves like :meth:`Current.get_unchecked`.
        strict_order (bool): Raise :class:`GuardOrderError` when a guard is
            released while it is not the active registration for its type.
        log_events (bool): Emit debug events on every register and restore.
        log (LogSettings): Logging configuration.
    """
    model_config = SettingsConfigDict(
        arbitrary_types_allowed=True,
        env_ignore_empty=True,
        env_nested_delimiter='__',
        env_prefix='SCOPED_CURRENT__',
        extra='ignore',
    )

    checked: bool = True
    strict_order: bool = True
    log_events: bool = Field(
        default=False,
        description='Log every registration and restoration',
    )

    log: LogSettings
