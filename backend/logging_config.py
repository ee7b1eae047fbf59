import json
import logging
from datetime import datetime, timezone
from typing import Any

from config import config

_configured = False
_STANDARD_FIELDS: set[str] = set(
    logging.LogRecord("", 0, "", 0, "", None, None).__dict__
) | {"message", "asctime", "taskName"}


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_FIELDS
    }


class JsonFormatter(logging.Formatter):
    """Format log records as structured JSON."""

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
        }
        for key, value in _extra_fields(record).items():
            payload.setdefault(key, value)

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=True, default=str)


class PrettyFormatter(logging.Formatter):
    """Human-readable, single-line log formatter."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        parts = [
            ts,
            f"{record.levelname:<7}",
            f"[{record.name}]",
            record.getMessage(),
        ]

        extras = _extra_fields(record)
        if record.exc_info:
            extras["exception"] = self.formatException(record.exc_info)
        parts.append(" ".join(f"{k}={v}" for k, v in extras.items()))

        return " ".join(filter(None, parts))


def configure_logging(
    service_name: str,
    level: str | None = None,
    log_format: str | None = None,
) -> None:
    """
    Add a console handler to the root logger.

    Respects LOG_LEVEL and LOG_FORMAT ("pretty" or "json") unless overridden.
    Calling it again is a no-op.
    """
    global _configured
    if _configured:
        return

    log_level = getattr(logging, (level or config.LOG_LEVEL).upper(), logging.INFO)
    fmt = (log_format or config.LOG_FORMAT).lower()

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        JsonFormatter(service_name) if fmt == "json" else PrettyFormatter()
    )

    root = logging.getLogger()
    root.setLevel(log_level)
    root.addHandler(console_handler)

    _configured = True
