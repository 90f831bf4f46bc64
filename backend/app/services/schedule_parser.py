"""Entry points that turn oneline schedule text into shoot days."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from backend.app.services.boundary_scanner import scan_day_ranges
from backend.app.services.day_parser import parse_day_block
from backend.app.services.line_normalizer import normalize_fragments, normalize_text
from backend.app.services.schedule_models import (
    DEFAULT_SOURCE,
    Line,
    SceneIdFactory,
    ShootDay,
    TextFragment,
)

logger = logging.getLogger(__name__)


def parse_schedule_text(text: str, source_file: str = DEFAULT_SOURCE) -> List[ShootDay]:
    """Parse extracted oneline text. Empty or non-string input yields ``[]``."""
    if not isinstance(text, str):
        logger.warning("Ignoring non-text schedule input of type %s", type(text).__name__)
        return []
    return parse_schedule_lines(normalize_text(text), source_file)


def parse_schedule_fragments(
    fragments: Iterable[TextFragment],
    source_file: str = DEFAULT_SOURCE,
) -> List[ShootDay]:
    """Parse positioned text fragments after rebuilding their reading order."""
    return parse_schedule_lines(normalize_fragments(fragments), source_file)


def parse_schedule_lines(lines: Sequence[Line], source_file: str = DEFAULT_SOURCE) -> List[ShootDay]:
    """Run boundary scanning and day parsing over normalized lines."""
    texts = [line.text for line in lines]
    ranges = scan_day_ranges(texts)
    ids = SceneIdFactory()
    days: List[ShootDay] = []
    seen_ids: set[str] = set()

    for day_range in ranges:
        block = texts[day_range.start:day_range.end + 1]
        day = parse_day_block(block, len(days) + 1, source_file, ids)
        if day is None:
            continue
        if day.id in seen_ids:
            day.id = _dedupe_day_id(day.id, seen_ids)
            logger.warning(
                "Day %d appears more than once in %s (lines %d-%d)",
                day.day_number,
                source_file,
                lines[day_range.start].number,
                lines[day_range.end].number,
            )
        seen_ids.add(day.id)
        days.append(day)

    logger.info("Parsed %d days and %d scenes from %s", len(days), ids.issued, source_file)
    return days


def _dedupe_day_id(day_id: str, seen: set[str]) -> str:
    suffix = 2
    while f"{day_id}-{suffix}" in seen:
        suffix += 1
    return f"{day_id}-{suffix}"
