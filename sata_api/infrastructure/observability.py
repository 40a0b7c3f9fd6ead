"""Structured Logging: JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (user_id, resource_id, error_code, ...) surfaced when present
    - E.164 phone numbers are masked in messages and extras before any handler
      formats the record, so exception text quoting a request body stays clean
    - JSON format in production, human-readable in development
"""

import json
import logging
import re
from datetime import datetime, timezone

from sata_api.core.domain_types import PHONE_REDACTION_MARKER

_EXTRA_FIELDS = (
    "error_code", "path", "user_id", "resource_id",
    "action", "mood_log_id", "interaction_id",
)

_E164_NUMBER = re.compile(r"\+\d{8,15}\b")


def mask_phone_numbers(text: str) -> str:
    return _E164_NUMBER.sub(PHONE_REDACTION_MARKER, text)


class PhoneNumberFilter(logging.Filter):
    """Rewrites the record in place; never drops it."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.msg = mask_phone_numbers(record.getMessage())
        record.args = None
        for key in _EXTRA_FIELDS:
            val = record.__dict__.get(key)
            if isinstance(val, str):
                setattr(record, key, mask_phone_numbers(val))
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per line, extras flattened into the top level."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update({
            key: record.__dict__[key] for key in _EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            log["exception"] = mask_phone_numbers(self.formatException(record.exc_info))
        return json.dumps(log, ensure_ascii=False)


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Install one root handler: JSON for production, plain text for local runs."""
    handler = logging.StreamHandler()
    handler.addFilter(PhoneNumberFilter())
    handler.setFormatter(
        JSONFormatter() if fmt == "json"
        else logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"),
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
