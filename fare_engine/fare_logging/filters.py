"""PII masking for log records.

Rider and driver contact details and vehicle registrations travel with
trip completions, so every handler masks them before output.
"""

import logging
import re

MASKS = (
    (re.compile(r"[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+"), "[EMAIL]"),
    (re.compile(r"(?<![\d.])(?:\+91[-\s]?)?[6-9]\d{4}[-\s]?\d{5}(?![\d.])"), "[PHONE]"),
    # Registration plates such as "KA 01 AB 1234" or "TN09BX4321"
    (re.compile(r"\b[A-Z]{2}[-\s]?\d{1,2}[-\s]?[A-Z]{1,3}[-\s]?\d{4}\b"), "[PLATE]"),
)


def mask_pii(text: str) -> str:
    for pattern, replacement in MASKS:
        text = pattern.sub(replacement, text)
    return text


class PIIFilter(logging.Filter):
    """Masks PII in the message template and in its string arguments."""

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = mask_pii(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(
                mask_pii(arg) if isinstance(arg, str) else arg for arg in record.args
            )
        return True
