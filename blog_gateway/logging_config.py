import json
import logging
import re
import sys
from datetime import datetime, timezone

from blog_gateway.core.config import settings

# Simple regex to find potential email addresses
EMAIL_REGEX = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
MASK_STRING = "[REDACTED]"

# Field names in `extra["props"]` to always mask the value of.
# Mirrors the sensitive columns of the users table.
SENSITIVE_FIELD_NAMES = {
    "password",
    "remember_token",
    "token",
    "secret",
    "access_token",
    "refresh_token",
    "credentials",
}


def _mask_text(value: str) -> str:
    return EMAIL_REGEX.sub(MASK_STRING, value)


class PIIMaskingFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        # Keep record.msg/args untouched, the formatter reads masked_message
        record.masked_message = _mask_text(record.getMessage())

        if hasattr(record, "props") and isinstance(record.props, dict):
            masked_props = {}
            for key, value in record.props.items():
                if key.lower() in SENSITIVE_FIELD_NAMES:
                    masked_props[key] = MASK_STRING
                elif isinstance(value, str):
                    masked_props[key] = _mask_text(value)
                else:
                    masked_props[key] = value
            record.props = masked_props
        return True  # Always process the record


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc)
            .isoformat()
            .replace("+00:00", "Z"),
            "level": record.levelname,
            # Use the masked message if available, otherwise the original
            "message": getattr(record, "masked_message", record.getMessage()),
            "logger_name": record.name,
            "func_name": record.funcName,
            "line_no": record.lineno,
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        if hasattr(record, "props") and isinstance(record.props, dict):
            log_entry.update(record.props)
        return json.dumps(log_entry, default=str)


def setup_logging(log_level: str | None = None):
    log_level = (log_level or settings.LOG_LEVEL).upper()
    numeric_level = getattr(logging, log_level, None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove default handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(JsonFormatter())
    console_handler.addFilter(PIIMaskingFilter())
    root_logger.addHandler(console_handler)

    # Suppress verbose logging from libraries
    logging.getLogger("uvicorn.error").propagate = False
    logging.getLogger("uvicorn.access").propagate = False
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("strawberry.execution").setLevel(logging.WARNING)
