"""
Structured Logging Setup

Every confstore component (store, refresh loop, settings) logs through a
named child of the "confstore" logger. Records carry the component name
and any `extra=` fields such as the namespace key, so refresh outcomes can
be filtered per namespace once shipped as JSON.
"""

import json
import logging
import os
import sys
from datetime import datetime, timezone

_RESERVED_ATTRS = frozenset((
    "name", "msg", "args", "levelname", "levelno", "pathname",
    "filename", "module", "exc_info", "exc_text", "stack_info",
    "lineno", "funcName", "created", "msecs", "relativeCreated",
    "thread", "threadName", "processName", "process", "service",
    "message", "taskName",
))

_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per record: core fields, then every `extra=` field."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service": getattr(record, "service", "unknown"),
            "message": record.getMessage(),
            "logger": record.name,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        log_data.update(
            (key, value) for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS
        )
        # Stats dicts and datetimes are rendered with str()
        return json.dumps(log_data, default=str)


class ServiceLoggerAdapter(logging.LoggerAdapter):
    """Stamps the component name onto each record as `service`."""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        extra = kwargs.setdefault("extra", {})
        extra["service"] = self.extra.get("service", "unknown")
        return msg, kwargs


def _make_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return JsonFormatter()
    return logging.Formatter(_TEXT_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")


def setup_logging(
    service_name: str,
    log_level: str = "INFO",
    json_format: bool = True,
) -> logging.Logger:
    """
    Configure the `confstore.<service_name>` logger.

    Re-running replaces the previous handler, so components can be
    reconfigured (e.g. after settings load) without duplicate output.
    Records do not propagate to the root logger.

    Args:
        service_name: Component name, e.g. "store.redis" or "scheduler"
        log_level: Level name; unknown names fall back to INFO
        json_format: JSON lines when True, human-readable text otherwise
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(numeric_level)
    handler.setFormatter(_make_formatter(json_format))

    logger = logging.getLogger(f"confstore.{service_name}")
    logger.setLevel(numeric_level)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def get_service_logger(service_name: str) -> ServiceLoggerAdapter:
    """
    Logger adapter for a confstore component.

    Level and format come from CONFSTORE_LOG_LEVEL and CONFSTORE_LOG_FORMAT
    ("json" or "text"), the same variables StoreSettings reads as
    log_level and log_format.
    """
    log_level = os.environ.get("CONFSTORE_LOG_LEVEL", "INFO")
    json_format = os.environ.get("CONFSTORE_LOG_FORMAT", "json").lower() == "json"

    logger = setup_logging(service_name, log_level, json_format)
    return ServiceLoggerAdapter(logger, {"service": service_name})


def log_refresh(
    logger: logging.LoggerAdapter,
    namespace: str,
    key_count: int,
    duration_ms: float,
    success: bool = True,
    error: BaseException | None = None,
) -> None:
    """Log the outcome of one refresh cycle"""
    if success:
        logger.debug(
            f"Refreshed {namespace}: {key_count} keys in {duration_ms:.0f}ms",
            extra={"namespace": namespace, "key_count": key_count, "duration_ms": duration_ms},
        )
    else:
        logger.warning(
            f"Refresh of {namespace} failed, keeping previous snapshot: {error}",
            extra={"namespace": namespace, "duration_ms": duration_ms},
        )
