"""Structured logging utilities for XML tag validation.

Every record emitted while validating a document carries the name of the
component that produced it and the correlation ID of the run, so the log of
a batch of documents can be split back into individual runs.
"""

import logging
from typing import Any, Dict, Optional

LOG_FORMAT = "%(levelname)s %(name)s [%(component)s %(correlation_id)s] %(message)s"


class _CorrelationDefaults(logging.Filter):
    """Fill in correlation fields for records from non-correlated loggers."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "component"):
            record.component = record.name.split(".")[-1]
        if not hasattr(record, "correlation_id"):
            record.correlation_id = None
        return True


class CorrelationLogger:
    """Logger that automatically includes correlation ID and component information.

    Fields bound with ``bind`` are attached to every record in addition to
    the per-call ``extra`` mapping; per-call values win on conflict.
    """

    def __init__(
        self,
        name: str,
        correlation_id: Optional[str] = None,
        component: Optional[str] = None,
        bound: Optional[Dict[str, Any]] = None
    ) -> None:
        """Initialize correlation logger.

        Args:
            name: Logger name (typically __name__)
            correlation_id: Optional correlation ID for run tracking
            component: Component name; defaults to the last segment of ``name``
            bound: Fields attached to every record
        """
        self.logger = logging.getLogger(name)
        self.correlation_id = correlation_id
        self.component = component or name.split(".")[-1]
        self.bound = dict(bound or {})

    def bind(self, **fields: Any) -> "CorrelationLogger":
        """Return a logger for the same component with extra fixed fields."""
        merged = dict(self.bound)
        merged.update(fields)
        return CorrelationLogger(
            self.logger.name, self.correlation_id, self.component, merged
        )

    def is_debug_enabled(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG)

    def _log(
        self,
        level: int,
        message: str,
        extra: Optional[Dict[str, Any]],
        exc_info: bool
    ) -> None:
        if not self.logger.isEnabledFor(level):
            return
        fields = {"component": self.component, "correlation_id": self.correlation_id}
        fields.update(self.bound)
        if extra:
            fields.update(extra)
        self.logger.log(level, message, extra=fields, exc_info=exc_info or None)

    def debug(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.DEBUG, message, extra, False)

    def info(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self._log(logging.INFO, message, extra, False)

    def error(
        self,
        message: str,
        extra: Optional[Dict[str, Any]] = None,
        exc_info: bool = True
    ) -> None:
        """Log an error; the active exception is attached unless ``exc_info`` is False."""
        self._log(logging.ERROR, message, extra, exc_info)


def get_logger(
    name: str,
    correlation_id: Optional[str] = None,
    component: Optional[str] = None
) -> CorrelationLogger:
    """Get a correlation-aware logger instance.

    Args:
        name: Logger name (typically __name__)
        correlation_id: Optional correlation ID for run tracking
        component: Component name for structured logging

    Returns:
        CorrelationLogger instance
    """
    return CorrelationLogger(name, correlation_id, component)


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Install a stderr handler for command-line use.

    Without either flag only warnings and errors are shown.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler.addFilter(_CorrelationDefaults())
    logging.basicConfig(level=level, handlers=[handler])
