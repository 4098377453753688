"""JSON log output for the extraction service.

One JSON object per line. Every entry carries ``timestamp`` (the moment
the record was created, UTC), ``level``, ``logger``, ``message`` and
``request_id``. Extraction code adds context through ``extra``:

- failures: ``target_url``, ``extractor_id``, ``error_reason``
- completions: ``platform``, ``duration_ms``, ``fields_extracted``

Only those context keys are emitted. Text values pass through a redaction
filter so ``token=...``-style secrets from callback URLs or upstream error
messages never reach the log stream.
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime, timezone

from job_extractor.middleware.request_id import RequestIdFilter

_REDACT_RE = re.compile(
    r"(?P<key>api.key|secret|password|token|credential|authorization)\s*[=:]\s*\S+",
    re.IGNORECASE,
)

_CONTEXT_FIELDS = (
    "target_url",
    "extractor_id",
    "error_reason",
    "platform",
    "duration_ms",
    "fields_extracted",
)

# Third-party loggers that are noisy at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "asyncio")


def redact(text: str) -> str:
    """Replace secret-looking ``key=value`` pairs in *text*."""
    return _REDACT_RE.sub("[REDACTED]", text)


class JsonFormatter(logging.Formatter):
    """Render a ``LogRecord`` as a single JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": redact(record.getMessage()),
            "request_id": getattr(record, "request_id", None),
        }

        for name in _CONTEXT_FIELDS:
            if not hasattr(record, name):
                continue
            value = getattr(record, name)
            entry[name] = redact(value) if isinstance(value, str) else value

        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = redact(self.formatException(record.exc_info))

        return json.dumps(entry, default=str, ensure_ascii=False)


def configure_logging(level: str = "INFO") -> None:
    """Send all logging to stderr as JSON lines at *level*.

    Replaces any handlers already on the root logger, so calling it twice
    does not duplicate output.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(root.level, logging.WARNING))
