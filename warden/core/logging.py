"""Logging for Warden.

Every logger handed out by this module is a :class:`ContextualLogger`: a
``logging.LoggerAdapter`` carrying a dict of dimensions (``component``,
``user_id``, ...) that are attached to each record. Dimensions render as
JSON fields when ``LOG_FORMAT=json`` and as a trailing ``key=value`` list
otherwise.

Usage:
    from warden.core.logging import logger

    log = logger.with_context(component="tokens")
    log.info("Issued refresh token", extra={"token": fingerprint(value)})
"""

import hashlib
import logging
import sys
from typing import Any, Dict, MutableMapping, Optional, Tuple

from pythonjsonlogger.json import JsonFormatter

from warden.core.config import LogFormat, settings

_ROOT_LOGGER_NAME = "warden"


class ContextualLogger(logging.LoggerAdapter):
    """Logger adapter with immutable dimensions and an optional message prefix."""

    def __init__(
        self,
        logger: logging.Logger,
        dimensions: Optional[Dict[str, Any]] = None,
        prefix: str = "",
    ) -> None:
        """Wrap ``logger`` with the given dimensions and prefix."""
        super().__init__(logger, dict(dimensions or {}))
        self.prefix = prefix

    @property
    def dimensions(self) -> Dict[str, Any]:
        """Copy of the dimensions attached to every record."""
        return dict(self.extra)

    def with_context(self, **dimensions: Any) -> "ContextualLogger":
        """Return a new logger with additional dimensions."""
        merged = {**self.extra, **dimensions}
        return ContextualLogger(self.logger, merged, self.prefix)

    def with_prefix(self, prefix: str) -> "ContextualLogger":
        """Return a new logger that prepends ``prefix`` to every message."""
        return ContextualLogger(self.logger, self.extra, self.prefix + prefix)

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping]:
        """Merge dimensions into the record extras and apply the prefix."""
        extra = dict(self.extra)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = {"dimensions": extra}
        if self.prefix:
            msg = f"{self.prefix}{msg}"
        return msg, kwargs


class _TextFormatter(logging.Formatter):
    """Plain formatter that appends dimensions as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        dims = getattr(record, "dimensions", None)
        if not dims:
            return base
        rendered = " ".join(f"{k}={v}" for k, v in dims.items())
        return f"{base} [{rendered}]"


class _JsonFormatter(JsonFormatter):
    """JSON formatter that flattens dimensions into top-level fields."""

    def add_fields(self, log_record, record, message_dict) -> None:
        super().add_fields(log_record, record, message_dict)
        dims = log_record.pop("dimensions", None) or {}
        for key, value in dims.items():
            log_record.setdefault(key, value)
        log_record["level"] = record.levelname


class LoggerConfigurator:
    """Configures the warden root logger and builds contextual child loggers."""

    _configured = False

    @classmethod
    def _build_handler(cls) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        if settings.LOG_FORMAT == LogFormat.JSON:
            handler.setFormatter(_JsonFormatter("%(asctime)s %(name)s %(message)s"))
        else:
            handler.setFormatter(
                _TextFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
            )
        return handler

    @classmethod
    def configure_root(cls) -> logging.Logger:
        """Attach a single handler to the warden root logger. Idempotent."""
        root = logging.getLogger(_ROOT_LOGGER_NAME)
        if not cls._configured:
            root.handlers.clear()
            root.addHandler(cls._build_handler())
            root.setLevel(settings.LOG_LEVEL)
            root.propagate = False
            cls._configured = True
        return root

    @classmethod
    def configure_logger(
        cls, name: str, dimensions: Optional[Dict[str, Any]] = None
    ) -> ContextualLogger:
        """Return a contextual logger for ``name`` with the given dimensions.

        Args:
            name: Dotted logger name, normally under ``warden.``.
            dimensions: Key/value pairs attached to every record.

        Returns:
            A ContextualLogger writing through the configured root handler.
        """
        cls.configure_root()
        return ContextualLogger(logging.getLogger(name), dimensions)


def fingerprint(value: str) -> str:
    """Short, non-reversible reference to a secret value for log lines."""
    return hashlib.sha256(value.encode()).hexdigest()[:12]


logger = LoggerConfigurator.configure_logger(_ROOT_LOGGER_NAME)
