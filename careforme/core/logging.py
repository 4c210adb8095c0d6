"""Logging configuration for the CareForMe admin backend."""
import logging
import sys
import json
from typing import Any, Dict
from datetime import datetime, timezone
import traceback
from functools import lru_cache

# Attributes every LogRecord carries; anything else was passed through ``extra``.
_RESERVED_ATTRS = frozenset([
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName", "message",
])


class JSONFormatter(logging.Formatter):
    """Render log records as single-line JSON documents."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info)
            }

        # doctor_id, uid, path, method and friends arrive through ``extra``
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and key not in log_data:
                log_data[key] = value

        return json.dumps(log_data, default=str)


class LoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that merges bound context into every call's ``extra``."""

    def __init__(self, logger: logging.Logger, extra: Dict[str, Any] = None):
        super().__init__(logger, extra or {})

    def process(self, msg: str, kwargs: Dict[str, Any]) -> tuple:
        """Process log message and add context."""
        extra = dict(self.extra)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return msg, kwargs


def setup_logging(config: Any) -> None:
    """Set up logging configuration."""
    log_level = logging.DEBUG if config.debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(console_handler)

    # Third-party chatter
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)

    if config.sentry_dsn:
        try:
            import sentry_sdk
            from sentry_sdk.integrations.flask import FlaskIntegration
            from sentry_sdk.integrations.logging import LoggingIntegration

            sentry_logging = LoggingIntegration(
                level=logging.INFO,
                event_level=logging.ERROR
            )

            sentry_sdk.init(
                dsn=config.sentry_dsn,
                integrations=[
                    FlaskIntegration(transaction_style="endpoint"),
                    sentry_logging
                ],
                environment=config.sentry_environment,
                traces_sample_rate=config.sentry_traces_sample_rate,
                send_default_pii=False
            )

            logging.info("Sentry APM initialized successfully")
        except Exception as e:
            logging.error(f"Failed to initialize Sentry: {e}")


@lru_cache(maxsize=128)
def get_logger(name: str) -> LoggerAdapter:
    """Get a logger instance with the given name."""
    return LoggerAdapter(logging.getLogger(name), {})


def log_request(request: Any) -> Dict[str, Any]:
    """Extract relevant information from a request for logging."""
    return {
        "method": request.method,
        "path": request.path,
        "remote_addr": request.remote_addr,
        "request_id": request.headers.get("X-Request-ID")
    }
