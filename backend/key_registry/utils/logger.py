# key_registry/utils/logger.py

import json
import logging
import os
from datetime import datetime, timezone

_EXTRA_FIELDS = ("error_code", "path")


class JSONFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message and known extras."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


def setup_logger(level: str | None = None, fmt: str | None = None) -> None:
    """Configure the root logger once. Defaults come from LOG_LEVEL and LOG_FORMAT."""
    level = level or os.getenv("LOG_LEVEL", "INFO")
    fmt = fmt or os.getenv("LOG_FORMAT", "text")

    handler = logging.StreamHandler()
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    root = logging.getLogger()
    # Replace our own handler on repeated calls (app reloads, tests)
    for existing in list(root.handlers):
        if getattr(existing, "_key_registry", False):
            root.removeHandler(existing)
    handler._key_registry = True
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
