"""Unified logging utilities for a1s.

The live table owns the terminal, so log records go to a file by default.
Console output is opt-in (A1S_LOG_CONSOLE=1) and lands on stderr.
"""
from __future__ import annotations

import logging
import os
import sys
import time

import orjson

from .env_flags import is_truthy_env

DEFAULT_FORMAT = '%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s'
DEFAULT_LOG_FILE = os.path.join(os.path.expanduser('~'), '.local', 'state', 'a1s', 'a1s.log')

SUPPRESSED_LOGGERS = [
    'botocore', 'boto3', 'urllib3', 's3transfer',
]


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            'ts': getattr(record, 'created', time.time()),
            'level': record.levelname,
            'logger': record.name,
            'thread': record.threadName,
            'msg': record.getMessage(),
        }
        if record.exc_info:
            payload['exc_info'] = self.formatException(record.exc_info)
        return orjson.dumps(payload, default=str).decode("utf-8")


def setup_logging(level: str = 'INFO', log_file: str | None = DEFAULT_LOG_FILE, fmt: str = DEFAULT_FORMAT,
                  console: bool | None = None, json_console: bool | None = None) -> logging.Logger:
    """Configure root logging.

    File handler (if log_file is set) always uses the full DEFAULT_FORMAT.
    Console handler is attached only when `console` is true (default:
    A1S_LOG_CONSOLE); with `json_console` (default: A1S_JSON_LOGS) it emits
    one JSON object per line.
    """
    if console is None:
        console = is_truthy_env('A1S_LOG_CONSOLE')
    if json_console is None:
        json_console = is_truthy_env('A1S_JSON_LOGS')
    log_level = getattr(logging, level.upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(log_level)
    # Remove existing handlers to avoid duplication on re-init
    for h in root.handlers[:]:
        root.removeHandler(h)
        try:
            h.flush()
            h.close()
        except (OSError, ValueError):
            pass

    if console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(log_level)
        if json_console:
            ch.setFormatter(_JsonFormatter())
        else:
            ch.setFormatter(logging.Formatter(fmt))
        root.addHandler(ch)

    if log_file:
        try:
            directory = os.path.dirname(log_file)
            if directory:
                os.makedirs(directory, exist_ok=True)
            fh = logging.FileHandler(log_file, encoding='utf-8')
            fh.setLevel(log_level)
            fh.setFormatter(logging.Formatter(DEFAULT_FORMAT))
            root.addHandler(fh)
        except OSError as e:
            root.error("Failed to create log file handler %s: %s", log_file, e)

    if not root.handlers:
        root.addHandler(logging.NullHandler())

    for name in SUPPRESSED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return root

__all__ = ["setup_logging", "DEFAULT_FORMAT", "DEFAULT_LOG_FILE"]
