"""Logger setup per deployment environment."""

import json
import logging
import sys
from datetime import datetime

ENV_LOCAL = "local"
ENV_DEV = "dev"
ENV_PROD = "prod"

_RESERVED = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", "taskName"}


def _fields(record):
    level = {"WARNING": "WARN", "CRITICAL": "ERROR"}.get(record.levelname, record.levelname)
    created = datetime.fromtimestamp(record.created).astimezone()
    fields = {
        "time": created.isoformat(timespec="milliseconds"),
        "level": level,
        "msg": record.getMessage(),
    }
    fields.update((k, v) for k, v in vars(record).items() if k not in _RESERVED and not k.startswith("_"))
    return fields


def _quote(value):
    text = str(value)
    if text and text.isprintable() and not any(ch in text for ch in ' ="\\'):
        return text
    return json.dumps(text, ensure_ascii=False)


class _TextFormatter(logging.Formatter):
    def format(self, record):
        return " ".join(f"{key}={_quote(value)}" for key, value in _fields(record).items())


class _JSONFormatter(logging.Formatter):
    def format(self, record):
        return json.dumps(_fields(record), default=str, ensure_ascii=False)


_SETTINGS = {
    ENV_LOCAL: (_TextFormatter, logging.INFO),
    ENV_DEV: (_JSONFormatter, logging.DEBUG),
    ENV_PROD: (_TextFormatter, logging.INFO),
}


def setup_logger(env, stream=None):
    """Return a logger for *env*: text for local and prod, JSON with debug for dev."""
    if env not in _SETTINGS:
        raise ValueError(f"unknown environment: {env!r}")
    formatter_class, level = _SETTINGS[env]
    logger = logging.getLogger(f"authdemo.{env}")
    logger.handlers.clear()
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    handler.setFormatter(formatter_class())
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False
    return logger