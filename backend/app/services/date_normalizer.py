"""Canonicalise the loosely formatted dates printed in schedule footers."""

from __future__ import annotations

import logging
import re

from dateutil import parser as date_parser

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9, /\-]")
_YEAR_EVIDENCE = re.compile(r"\b\d{4}\b|\b\d{1,2}/\d{1,2}/\d{2}\b")


def normalize_date(value: str) -> str:
    """Return ``value`` as ``YYYY-MM-DD`` or unchanged when it is not a date.

    Accepts "Monday, October 21, 2025", "Oct 21, 2025", "10/21/2025" and
    "10/21/25" style strings with stray punctuation. Never raises.
    """
    if not isinstance(value, str) or not value.strip():
        return value
    cleaned = _UNSAFE_CHARS.sub(" ", value)
    cleaned = re.sub(r"\s+", " ", cleaned).strip()
    if not _YEAR_EVIDENCE.search(cleaned):
        logger.debug("Date %r has no year; leaving it unresolved", value)
        return value
    try:
        parsed = date_parser.parse(cleaned)
    except (date_parser.ParserError, ValueError, OverflowError):
        logger.warning("Could not convert date %r (cleaned %r)", value, cleaned)
        return value
    return parsed.strftime("%Y-%m-%d")
