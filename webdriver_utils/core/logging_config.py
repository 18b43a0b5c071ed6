# webdriver_utils/core/logging_config.py

import logging
import sys
import json
from datetime import datetime
from typing import Optional, TextIO

from webdriver_utils.config.config import LOG_LEVEL

logger = logging.getLogger(__name__)

# Logger name prefix -> service label written into each record
SERVICE_NAMES = {
    "webdriver_utils.page_objects": "page-object",
    "webdriver_utils.utils": "wait-helpers",
    "webdriver_utils.fixtures": "driver-fixture",
}


class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for logging."""

    def format(self, record):
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created).astimezone().isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.name,
            "funcName": record.funcName,
            "lineno": record.lineno,
            "process": record.process,
            "thread": record.thread,
            "threadName": record.threadName,
            "service": service_for(record.name),
        }

        # logger.info("message", extra={'extra_context': {'key1': 'value1'}})
        extra_context = getattr(record, "extra_context", None)
        if isinstance(extra_context, dict):
            log_record.update(extra_context)

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_record["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(log_record, default=str)


def service_for(logger_name: str) -> str:
    """Maps a logger name onto the service label used in JSON records."""
    for prefix, service in SERVICE_NAMES.items():
        if logger_name == prefix or logger_name.startswith(prefix + "."):
            return service
    return "unknown"


def setup_logging(level: Optional[str] = None, stream: Optional[TextIO] = None):
    """Configures the root logger with a JSON formatter."""
    root_logger = logging.getLogger()

    log_level = (level or LOG_LEVEL).upper()
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicate logs
    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    console_handler = logging.StreamHandler(stream or sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(JsonFormatter())
    root_logger.addHandler(console_handler)

    # Selenium's remote connection logs every HTTP command at DEBUG
    logging.getLogger("selenium").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    logger.info("Logging configured with JSON format.")
