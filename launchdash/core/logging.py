from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Mapping

from ..middlewares.request_id import request_id_ctx_var
from .config import AppSettings


class JsonLogFormatter(logging.Formatter):
    """Render log records as JSON, stamped with the service and its environment."""

    def __init__(self, service: str = "launchdash", environment: str = "production") -> None:
        super().__init__()
        self.service = service
        self.environment = environment

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.now(tz=timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "service": self.service,
            "env": self.environment,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = request_id_ctx_var.get()
        if request_id:
            payload["request_id"] = request_id
        extra = getattr(record, "extra_data", None)
        if isinstance(extra, Mapping):
            payload.update(extra)
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"), default=str)


def configure_logging(settings: AppSettings) -> None:
    handler = logging.StreamHandler()
    handler.setFormatter(JsonLogFormatter(service=settings.APP_NAME, environment=settings.APP_ENV))
    logging.root.handlers = [handler]
    logging.root.setLevel(settings.LOG_LEVEL.upper())
