"""Logging helpers."""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import Any

_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
    "taskName",
}
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Render log records as compact JSON, merging ``extra`` fields."""

    default_time_format = "%Y-%m-%dT%H:%M:%S"
    default_msec_format = "%s.%03dZ"

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.default_time_format),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        data.update(
            {key: value for key, value in record.__dict__.items() if key not in _RESERVED_ATTRS}
        )
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, ensure_ascii=False, default=str)


def _formatter(structured: bool) -> logging.Formatter:
    return JsonFormatter() if structured else logging.Formatter(_PLAIN_FORMAT)


def configure_logging(
    *,
    level: int = logging.INFO,
    structured: bool | None = None,
    log_file: Path | None = None,
) -> None:
    """Configure root logging; JSON by default, plain text when ``structured`` is False."""

    root = logging.getLogger()
    root.setLevel(level)
    use_json = True if structured is None else structured

    if root.handlers:
        if structured is not None:
            for handler in root.handlers:
                handler.setFormatter(_formatter(use_json))
    else:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(_formatter(use_json))
        root.addHandler(handler)

    if log_file is not None:
        target = os.path.abspath(log_file)
        if any(getattr(handler, "baseFilename", None) == target for handler in root.handlers):
            return
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(JsonFormatter())
        root.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "JsonFormatter"]
