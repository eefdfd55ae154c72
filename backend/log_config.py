# Logging setup: plain text for local runs, JSON lines when SAFETYNET_LOG_JSON=true
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from config import Settings

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JsonLogFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        for attr in ("path", "method", "collection"):
            if hasattr(record, attr):
                payload[attr] = getattr(record, attr)
        return json.dumps(payload, ensure_ascii=False)


def configure_logging(settings: Settings) -> None:
    """Install a single stdout handler on the root logger. No-op if already configured."""
    root_logger = logging.getLogger()
    if any(getattr(h, "_safetynet", False) for h in root_logger.handlers):
        return

    handler = logging.StreamHandler(sys.stdout)
    handler._safetynet = True  # type: ignore[attr-defined]
    if settings.log_json:
        handler.setFormatter(JsonLogFormatter())
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root_logger.setLevel(getattr(logging, settings.log_level, logging.INFO))
    root_logger.addHandler(handler)

    # uvicorn installs its own access handler
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
