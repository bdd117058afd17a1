"""Unified JSON logging utilities.

Provides the CustomJsonFormatter and configure_logging used by the averager
service. Records are emitted as one JSON object per line with sensitive keys
(and bearer credentials embedded in string values) redacted.
"""

from __future__ import annotations

import json
import logging
import os
import re
import socket
import traceback
from datetime import datetime, timezone
from typing import Any, Iterable

from shared.constants import Environment

REDACTED = "[REDACTED]"

_BEARER_RE = re.compile(r"(?i)bearer\s+[^\s\"',]+")

# LogRecord attributes that carry nothing useful once the message is rendered
_DROPPED_ATTRS = ("args", "msg", "exc_info", "exc_text", "stack_info")


class SensitiveDataFilter:
    def __init__(self, patterns: Iterable[str]):
        self.patterns = [p.lower() for p in patterns]

    def is_sensitive(self, key: str) -> bool:
        lk = key.lower()
        return any(p in lk for p in self.patterns)

    def filter(self, data: dict) -> dict:
        out = {}
        for k, v in data.items():
            if self.is_sensitive(str(k)):
                out[k] = REDACTED
            else:
                out[k] = self._scrub(v)
        return out

    def _scrub(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self.filter(value)
        if isinstance(value, (list, tuple)):
            return [self._scrub(v) for v in value]
        if isinstance(value, str):
            return _BEARER_RE.sub(f"Bearer {REDACTED}", value)
        return value


class CustomJsonFormatter(logging.Formatter):  # type: ignore[misc]
    def __init__(
        self,
        service: str,
        environment: str,
        redaction_patterns: Iterable[str],
    ):
        super().__init__()
        self.hostname = socket.gethostname()
        self.pid = os.getpid()
        self.service_name = service
        self.environment = environment
        self.sensitive_filter = SensitiveDataFilter(redaction_patterns)

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        data = record.__dict__.copy()
        data["message"] = record.getMessage()
        for attr in _DROPPED_ATTRS:
            data.pop(attr, None)
        data["timestamp"] = datetime.now(timezone.utc).isoformat()
        data["service"] = self.service_name
        data["hostname"] = self.hostname
        data["pid"] = self.pid
        data["environment"] = self.environment
        if record.exc_info:
            data["exception"] = self.format_exception(record.exc_info)
        data = self.sensitive_filter.filter(data)
        return json.dumps(data, default=str)

    @staticmethod
    def format_exception(exc_info):  # type: ignore[override]
        et, ev, tb = exc_info
        return {
            "type": et.__name__,
            "message": str(ev),
            "stack": traceback.format_tb(tb),
        }


def configure_logging(
    service: str,
    environment: str,
    level: str,
    redaction_patterns: Iterable[str],
) -> logging.Logger:
    handler = logging.StreamHandler()
    if Environment.parse(environment).plain_logs:
        handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    else:
        handler.setFormatter(
            CustomJsonFormatter(service, environment, redaction_patterns)
        )
    root = logging.getLogger()
    root.handlers = [handler]  # deterministic single handler
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    return root


__all__ = [
    "CustomJsonFormatter",
    "configure_logging",
    "SensitiveDataFilter",
]
