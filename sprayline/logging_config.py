"""
Structured logging for the planning service.

Every log line goes through structlog. Records from the standard library
(Flask, werkzeug) share the same processors through ProcessorFormatter, so
the console and the optional rotating file receive one consistent format.
Planning runs bind their operation id into structlog's context variables,
which tags every calculator log line emitted inside the run.
"""
import logging
import logging.config
import structlog
from datetime import datetime, timezone
import uuid
from typing import Optional

SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.stdlib.PositionalArgumentsFormatter(),
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
]

CONSOLE_KEY_ORDER = ["timestamp", "level", "logger", "operation_id", "event"]


def _formatter(renderer):
    return {
        "()": structlog.stdlib.ProcessorFormatter,
        "processor": renderer,
        "foreign_pre_chain": SHARED_PROCESSORS,
    }


def configure_logging(log_level: str = "INFO", log_file: Optional[str] = None,
                      json_console: bool = False):
    """
    Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path, written as JSON lines
        json_console: Render console output as JSON instead of key=value pairs
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *SHARED_PROCESSORS,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": log_level,
            "formatter": "json" if json_console else "plain",
            "stream": "ext://sys.stdout",
        }
    }
    if log_file:
        handlers["file"] = {
            "class": "logging.handlers.RotatingFileHandler",
            "level": log_level,
            "formatter": "json",
            "filename": log_file,
            "maxBytes": 10485760,  # 10MB
            "backupCount": 5,
        }

    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "plain": _formatter(structlog.processors.KeyValueRenderer(
                key_order=CONSOLE_KEY_ORDER, drop_missing=True
            )),
            "json": _formatter(structlog.processors.JSONRenderer()),
        },
        "handlers": handlers,
        "root": {"level": log_level, "handlers": list(handlers)},
    })

    logger = structlog.get_logger("sprayline")
    logger.info("Logging configured", level=log_level, file=log_file)

    return logger


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


class PlanningContext:
    """
    Context manager for one planning run.

    Binds operation_type, operation_id and any extra fields into structlog's
    context variables for the duration of the block, so log lines from the
    estimate and delivery calculators carry the run's id. Nested runs restore
    the outer run's bindings on exit.
    """

    def __init__(self, operation_type: str, operation_id: Optional[str] = None, **fields):
        self.operation_type = operation_type
        self.operation_id = operation_id or str(uuid.uuid4())[:8]
        self.fields = fields
        self.logger = get_logger("sprayline.planning")
        self.start_time = None
        self._tokens = None

    def __enter__(self):
        self._tokens = structlog.contextvars.bind_contextvars(
            operation_type=self.operation_type,
            operation_id=self.operation_id,
            **self.fields,
        )
        self.start_time = datetime.now(timezone.utc)
        self.logger.debug("Planning operation started")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        duration = (datetime.now(timezone.utc) - self.start_time).total_seconds()

        try:
            if exc_type is None:
                self.logger.info(
                    "Planning operation completed",
                    duration_seconds=duration,
                    status="success",
                )
            else:
                self.logger.error(
                    "Planning operation failed",
                    duration_seconds=duration,
                    status="error",
                    error_type=exc_type.__name__,
                    error_message=str(exc_val),
                )
        finally:
            structlog.contextvars.reset_contextvars(**self._tokens)

        return False  # Don't suppress exceptions
