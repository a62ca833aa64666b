"""
Logging Configuration and Utilities

Structured logging for the billing engine: JSON or text console output,
optional rotating file output, and structlog configuration. Request and
student context travel in context variables and are stamped on every record.
"""

import sys
import logging
import logging.handlers
from contextlib import contextmanager
from contextvars import ContextVar
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Iterator, Optional

import structlog
from pythonjsonlogger import jsonlogger

from hostel_billing.config.settings import settings

SERVICE_NAME = "hostel-billing"

# Context variables for request tracking
request_id: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
student_id: ContextVar[Optional[str]] = ContextVar('student_id', default=None)


def _current_context() -> Dict[str, str]:
    context = {}
    req_id = request_id.get()
    if req_id:
        context['request_id'] = req_id
    sid = student_id.get()
    if sid:
        context['student_id'] = sid
    return context


def _stringify_money(fields: Dict[str, Any]) -> None:
    for key, value in list(fields.items()):
        if isinstance(value, Decimal):
            fields[key] = str(value)


@contextmanager
def log_context(student: Optional[str] = None) -> Iterator[None]:
    """Tag every record emitted inside the block with the student being billed."""
    token = student_id.set(student)
    try:
        yield
    finally:
        student_id.reset(token)


def add_billing_context(logger, method_name, event_dict):
    """structlog processor: request/student context plus service metadata."""
    for key, value in _current_context().items():
        event_dict.setdefault(key, value)
    event_dict['service'] = SERVICE_NAME
    event_dict['environment'] = settings.ENVIRONMENT
    _stringify_money(event_dict)
    return event_dict


class BillingJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that renders amounts as strings and adds context"""

    def add_fields(self, log_record, record, message_dict):
        super().add_fields(log_record, record, message_dict)

        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['function'] = record.funcName
        log_record['service'] = SERVICE_NAME

        for key, value in _current_context().items():
            log_record.setdefault(key, value)
        _stringify_money(log_record)


class LoggingConfig:
    """Centralized logging configuration"""

    @staticmethod
    def configure_structured_logging():
        processors = [
            structlog.stdlib.filter_by_level,
            add_billing_context,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
        ]

        if settings.LOG_FORMAT == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.processors.KeyValueRenderer(key_order=['event', 'student_id']))

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.stdlib.BoundLogger,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )

    @staticmethod
    def _formatter() -> logging.Formatter:
        if settings.LOG_FORMAT == "json":
            return BillingJsonFormatter('%(asctime)s %(name)s %(levelname)s %(message)s')
        return logging.Formatter('%(asctime)s [%(levelname)s] %(name)s: %(message)s')

    @staticmethod
    def configure_standard_logging():
        level = getattr(logging, settings.LOG_LEVEL)
        formatter = LoggingConfig._formatter()

        package_logger = logging.getLogger('hostel_billing')
        root_logger = logging.getLogger()
        root_logger.setLevel(level)
        root_logger.handlers.clear()

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root_logger.addHandler(console_handler)

        if settings.LOG_FILE:
            log_path = Path(settings.LOG_FILE)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=10 * 1024 * 1024,
                backupCount=5,
            )
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)

        package_logger.setLevel(level)
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        logging.getLogger("sqlalchemy.engine").setLevel(
            logging.INFO if settings.LOG_SQL_QUERIES else logging.WARNING
        )


class LoggerAdapter:
    """Logger adapter that merges bound fields into every record's extra"""

    def __init__(self, logger: logging.Logger, **bound: Any):
        self.logger = logger
        self._bound: Dict[str, Any] = dict(bound)

    def bind(self, **fields: Any) -> "LoggerAdapter":
        return LoggerAdapter(self.logger, **{**self._bound, **fields})

    def _log(self, level: int, message: str, *args, **kwargs):
        if not self.logger.isEnabledFor(level):
            return
        extra = dict(self._bound)
        extra.update(kwargs.pop('extra', None) or {})
        self.logger.log(level, message, *args, extra=extra, **kwargs)

    def debug(self, message: str, *args, **kwargs):
        self._log(logging.DEBUG, message, *args, **kwargs)

    def info(self, message: str, *args, **kwargs):
        self._log(logging.INFO, message, *args, **kwargs)

    def warning(self, message: str, *args, **kwargs):
        self._log(logging.WARNING, message, *args, **kwargs)

    def error(self, message: str, *args, **kwargs):
        self._log(logging.ERROR, message, *args, **kwargs)

    def exception(self, message: str, *args, **kwargs):
        kwargs.setdefault('exc_info', True)
        self._log(logging.ERROR, message, *args, **kwargs)


def get_logger(name: Optional[str] = None, **bound: Any) -> LoggerAdapter:
    """
    Get a logger for a billing module.

    Args:
        name: Logger name (defaults to the package logger)
        **bound: Fields attached to every record from this logger

    Returns:
        Logger adapter
    """
    return LoggerAdapter(logging.getLogger(name or 'hostel_billing'), **bound)


def setup_logging():
    """Initialize logging configuration"""
    if settings.ENABLE_STRUCTURED_LOGGING:
        LoggingConfig.configure_structured_logging()
    LoggingConfig.configure_standard_logging()

    get_logger(__name__).debug("Logging system initialized", extra={
        'log_level': settings.LOG_LEVEL,
        'log_format': settings.LOG_FORMAT,
        'structured_logging': settings.ENABLE_STRUCTURED_LOGGING,
    })


# Initialize logging when module is imported
setup_logging()

__all__ = [
    'get_logger',
    'log_context',
    'setup_logging',
    'LoggerAdapter',
    'LoggingConfig',
    'request_id',
    'student_id',
]
