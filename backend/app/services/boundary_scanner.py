"""Locate the "END OF DAY" footers that close each shoot day block."""

from __future__ import annotations

import logging
from typing import List, Sequence

from backend.app.services.schedule_models import DayRange
from backend.app.services.schedule_patterns import (
    has_date_content,
    has_strong_date,
    is_end_of_day,
    is_scene_header,
)
from backend.app.services.window_search import find_forward

logger = logging.getLogger(__name__)

FOOTER_LOOKAHEAD = 8


def _starts_next_day(text: str) -> bool:
    return is_scene_header(text) or text.startswith("Scenes:")


def find_day_boundaries(lines: Sequence[str]) -> List[int]:
    """Return the index of the last footer line of every day, in order."""
    boundaries: List[int] = []
    index = 0
    while index < len(lines):
        text = lines[index]
        if not is_end_of_day(text):
            index += 1
            continue
        if has_strong_date(text):
            boundaries.append(index)
            index += 1
            continue
        continuation = find_forward(
            lines,
            index,
            FOOTER_LOOKAHEAD,
            predicate=has_date_content,
            stop=_starts_next_day,
        )
        if continuation is None:
            logger.warning("Footer %r has no date within %d lines", text, FOOTER_LOOKAHEAD)
            boundaries.append(index)
            index += 1
            continue
        logger.debug("Merged split footer at lines %d-%d", index, continuation)
        boundaries.append(continuation)
        index = continuation + 1
    return boundaries


def scan_day_ranges(lines: Sequence[str]) -> List[DayRange]:
    """Split the line stream into one inclusive :class:`DayRange` per day.

    With no footer at all the whole input becomes a single day. Lines after
    the last footer are not part of any day.
    """
    if not lines:
        return []
    boundaries = find_day_boundaries(lines)
    if not boundaries:
        logger.warning("No END OF DAY markers found; treating the input as one day")
        boundaries = [len(lines) - 1]

    ranges: List[DayRange] = []
    start = 0
    for end in boundaries:
        ranges.append(DayRange(start=start, end=end))
        start = end + 1
    logger.debug("Found %d day ranges", len(ranges))
    return ranges
