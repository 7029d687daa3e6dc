"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from university_erp.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_request_error(
    request_id: str,
    method: str,
    path: str,
    status_code: int,
    code: str,
    message: str,
    exc_info: Optional[BaseException] = None,
) -> None:
    """Log a failed request with enough context to correlate it"""
    extra = {
        "request_id": request_id,
        "method": method,
        "path": path,
        "status_code": status_code,
        "error_code": code,
    }
    if status_code >= 500:
        logging.getLogger("university_erp.api").error(message, extra=extra, exc_info=exc_info)
    else:
        logging.getLogger("university_erp.api").warning(message, extra=extra)
