"""
Logging Configuration
Plain text logs in development, JSON lines in production
"""

import json
import logging
import sys
from datetime import datetime, timezone

from clubhub.config import settings


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging in production"""

    def format(self, record: logging.LogRecord) -> str:
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
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging() -> None:
    """
    Configure the root 'clubhub' logger once

    Safe to call more than once; handlers are only attached the first time.
    """
    root = logging.getLogger("clubhub")
    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    if settings.APP_ENV == "production":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        ))

    root.addHandler(handler)
    root.setLevel(settings.LOG_LEVEL.upper())
    root.propagate = False
