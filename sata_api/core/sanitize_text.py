"""Text Sanitization: strips markup from free text and redacts phone numbers.

Invariants:
    - sanitize_text removes <script> blocks first, then any remaining tags, then trims
    - redact_phone_number replaces every verbatim occurrence, recursing into
      lists and dicts (keys included), and leaves non-string scalars untouched
"""

import re
from typing import Any

from sata_api.core.domain_types import PHONE_REDACTION_MARKER

_SCRIPT_BLOCK = re.compile(
    r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE,
)
_HTML_TAG = re.compile(r"<[^>]*>")


def sanitize_text(text: str | None) -> str:
    if not text:
        return ""
    text = _SCRIPT_BLOCK.sub("", text)
    text = _HTML_TAG.sub("", text)
    return text.strip()


def redact_phone_number(value: Any, phone_number: str | None) -> Any:
    """Return a copy of value with phone_number replaced by the redaction marker."""
    if not phone_number:
        return value
    if isinstance(value, str):
        return value.replace(phone_number, PHONE_REDACTION_MARKER)
    if isinstance(value, dict):
        return {
            redact_phone_number(k, phone_number): redact_phone_number(v, phone_number)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [redact_phone_number(v, phone_number) for v in value]
    return value
