"""Structured logging configuration for the Kanaf estimator."""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

from kanaf.config import get_settings


class JSONFormatter(logging.Formatter):
    """JSON structured log formatter for production."""
    def format(self, record):
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)
        if hasattr(record, "estimation_id"):
            log_entry["estimation_id"] = record.estimation_id
        if hasattr(record, "duration_ms"):
            log_entry["duration_ms"] = record.duration_ms
        # Persian material names stay readable in the log stream
        return json.dumps(log_entry, ensure_ascii=False)


def setup_logging(level: Optional[str] = None, json_output: Optional[bool] = None):
    """Configure application logging. Unset arguments fall back to LOG_LEVEL / LOG_FORMAT."""
    settings = get_settings()
    level = level or settings.log_level
    if json_output is None:
        json_output = settings.json_logs

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
        ))

    root.handlers = [handler]
