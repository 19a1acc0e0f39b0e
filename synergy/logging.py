"""Logging helpers for femtologging integration.

Synergy formats every message before it reaches femtologging, so callers
use percent-style templates exactly as they would with the standard
library while the backend only ever sees finished strings.

Example:
>>> from synergy.logging import get_logger, log_info
>>> logger = get_logger(__name__)
>>> log_info(logger, "Fetched %d projects", 3)

"""

from __future__ import annotations

import enum
import typing as typ

from femtologging import basicConfig, get_logger


class LogLevel(enum.StrEnum):
    """Log levels accepted by ``SYNERGY_LOG_LEVEL``."""

    TRACE = "TRACE"
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


_FALLBACK_LEVEL = LogLevel.INFO.value


def normalize_log_level(level: str | None) -> tuple[str, bool]:
    """Normalize a log level string and report invalid inputs.

    Parameters
    ----------
    level : str | None
        Raw log level string, typically read from the environment.

    Returns
    -------
    tuple[str, bool]
        The normalized level and ``True`` when the input was unusable and
        the ``INFO`` fallback was applied.

    """
    candidate = (level or "").strip().upper()
    if candidate in LogLevel.__members__:
        return (candidate, False)
    return (_FALLBACK_LEVEL, True)


def configure_logging(level: str, *, force: bool = False) -> tuple[str, bool]:
    """Configure femtologging at ``level`` and return the normalized level."""
    normalized, invalid = normalize_log_level(level)
    basicConfig(level=normalized, force=force)
    return (normalized, invalid)


def format_log_message(template: str, *args: object) -> str:
    """Interpolate ``args`` into ``template`` using percent formatting."""
    if not args:
        return template
    return template % args


class _SupportsLog(typ.Protocol):
    """Protocol for femtologging-compatible loggers."""

    def log(
        self,
        level: str,
        message: str,
        /,
        *,
        exc_info: object | None = None,
        stack_info: bool = False,
    ) -> str | None: ...


def _emit(
    logger: _SupportsLog,
    level: LogLevel,
    template: str,
    args: tuple[object, ...],
    exc_info: object | None,
) -> None:
    logger.log(
        level.value,
        format_log_message(template, *args),
        exc_info=exc_info,
        stack_info=False,
    )


def log_debug(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log a DEBUG message with percent-style formatting."""
    _emit(logger, LogLevel.DEBUG, template, args, exc_info)


def log_info(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log an INFO message with percent-style formatting.

    Parameters
    ----------
    logger : _SupportsLog
        Logger that receives the formatted message.
    template : str
        Message template using percent-style placeholders.
    *args : object
        Values to interpolate into the template.
    exc_info : object | None, optional
        Exception information to attach to the log record.

    """
    _emit(logger, LogLevel.INFO, template, args, exc_info)


def log_warning(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log a WARNING message with percent-style formatting."""
    _emit(logger, LogLevel.WARNING, template, args, exc_info)


def log_error(
    logger: _SupportsLog,
    template: str,
    *args: object,
    exc_info: object | None = None,
) -> None:
    """Log an ERROR message with percent-style formatting."""
    _emit(logger, LogLevel.ERROR, template, args, exc_info)


def log_exception(logger: _SupportsLog, message: str, exc: BaseException) -> None:
    """Log ``message`` at ERROR with ``exc`` attached as exc_info."""
    logger.log(LogLevel.ERROR.value, message, exc_info=exc, stack_info=False)


__all__ = [
    "LogLevel",
    "configure_logging",
    "format_log_message",
    "get_logger",
    "log_debug",
    "log_error",
    "log_exception",
    "log_info",
    "log_warning",
    "normalize_log_level",
]
