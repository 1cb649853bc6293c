"""
Logging redaction helpers.
Redacts session tokens and shared secrets from log messages.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable


_PATTERNS: Iterable[tuple[re.Pattern, str]] = (
    # Authorization: Bearer <token>
    (re.compile(r"(Bearer\s+)([A-Za-z0-9\-\._~+/]+=*)"), r"\1[REDACTED]"),
    # Generic session token key/value
    (re.compile(r"(?i)(access_token|session_token|token)\s*[:=]\s*([A-Za-z0-9\-\._~]+)"), r"\1=[REDACTED]"),
    # Identity provider shared secret
    (re.compile(r"(?i)(x-identity-secret|identity[_-]?provider[_-]?secret|secret)\s*[:=]\s*(\S+)"), r"\1=[REDACTED]"),
)


def redact_message(message: str) -> str:
    redacted = message
    for pattern, replacement in _PATTERNS:
        redacted = pattern.sub(replacement, redacted)
    return redacted


class RedactingFilter(logging.Filter):
    """Filter that redacts sensitive data from log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        try:
            message = record.getMessage()
            redacted = redact_message(message)
            record.msg = redacted
            record.args = ()
        except Exception:
            # If redaction fails, allow log through unmodified
            pass
        return True


def _has_filter(filterer: logging.Filterer) -> bool:
    return any(isinstance(existing, RedactingFilter) for existing in filterer.filters)


def install_redaction_filter() -> None:
    root = logging.getLogger()
    # Records from child loggers only pass through handler filters
    targets = [root, *root.handlers]
    for target in targets:
        if not _has_filter(target):
            target.addFilter(RedactingFilter())
