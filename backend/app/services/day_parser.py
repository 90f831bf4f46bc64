"""Build a :class:`ShootDay` from the lines of one day block."""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Tuple

from backend.app.services.date_normalizer import normalize_date
from backend.app.services.scene_segmenter import segment_scenes
from backend.app.services.schedule_models import (
    COMPANY_OFF_NOTE,
    DEFAULT_SOURCE,
    TBD,
    UNKNOWN_DATE,
    SceneIdFactory,
    ShootDay,
)
from backend.app.services.schedule_patterns import (
    COMPANY_OFF_PATTERN,
    DAY_NUMBER_PATTERN,
    DAY_TYPE_PATTERN,
    FOOTER_DATE_PATTERN,
    has_date_content,
    is_end_of_day,
    is_page_count,
    is_scene_header,
    is_time_of_day,
    is_uppercase_banner,
    mentions_calendar_word,
)
from backend.app.services.window_search import find_backward

logger = logging.getLogger(__name__)

FOOTER_WINDOW = 6
BANNER_WINDOW = 25

_EXPLICIT_BANNER_PATTERN = re.compile(
    r"^(STAGE\s+\d+|ON\s+LOCATION|COMPANY\s+MOVE|MOVE\s+TO)", re.IGNORECASE
)
_BANNER_PREFIXES = (
    re.compile(r"^ON\s+LOCATION\s*[-–—:]?\s*", re.IGNORECASE),
    re.compile(r"^MOVE\s+TO\s+", re.IGNORECASE),
    re.compile(r"^COMPANY\s+MOVE\s*[-–—:]?\s*", re.IGNORECASE),
)
_OF_WORD_PATTERN = re.compile(r"\bOF\b", re.IGNORECASE)


def parse_day_block(
    lines: Sequence[str],
    fallback_day_number: int,
    source_file: str = DEFAULT_SOURCE,
    ids: Optional[SceneIdFactory] = None,
) -> Optional[ShootDay]:
    """Parse one day block, footer included, into a shoot day.

    Returns ``None`` only for a block without any text. Everything the
    heuristics cannot find falls back to a sentinel value.
    """
    texts = [line.strip() for line in lines]
    if not any(texts):
        return None

    footer_start = _find_footer_start(texts)
    footer = " ".join(text for text in texts[footer_start:] if text)
    body = texts[:footer_start]

    day_number, day_type, date = _parse_footer(footer, fallback_day_number)
    banner = _find_location_banner(body)
    scenes = segment_scenes(body, ids)

    location = banner or (scenes[0].location if scenes else TBD)
    original_text = "\n".join(lines)
    notes = COMPANY_OFF_NOTE if COMPANY_OFF_PATTERN.search(original_text) else None

    title_parts = [f"Day {day_number}"]
    if day_type:
        title_parts.append(day_type)
    title_parts.append(location)

    logger.debug(
        "Day %d (%s): %d scenes, location %r", day_number, date, len(scenes), location
    )
    return ShootDay(
        id=f"day-{day_number}",
        day_number=day_number,
        date=date,
        title=" - ".join(title_parts),
        location=location,
        scenes=scenes,
        notes=notes,
        source_file=source_file,
        original_text=original_text,
    )


def _find_footer_start(texts: Sequence[str]) -> int:
    """Index of the first footer line; ``len(texts)`` when there is no footer.

    A footer whose date was pushed onto a later line is re-joined by
    scanning back from the last line for the END ... DAY marker.
    """
    last = len(texts) - 1
    if is_end_of_day(texts[last]):
        return last
    marker = find_backward(texts, last, FOOTER_WINDOW - 1, predicate=is_end_of_day)
    if marker is not None:
        logger.debug("Merged split footer spanning %d lines", last - marker + 1)
        return marker
    if has_date_content(texts[last]):
        return last
    return len(texts)


def _parse_footer(footer: str, fallback_day_number: int) -> Tuple[int, str, str]:
    day_number = fallback_day_number
    number_match = DAY_NUMBER_PATTERN.search(footer)
    if number_match:
        day_number = int(number_match.group(1))

    day_type = ""
    type_match = DAY_TYPE_PATTERN.search(footer)
    if type_match:
        day_type = " ".join(_OF_WORD_PATTERN.sub(" ", type_match.group(1)).split())

    date = UNKNOWN_DATE
    date_match = FOOTER_DATE_PATTERN.search(footer)
    if date_match:
        date = normalize_date(date_match.group(1).strip())
    elif footer:
        logger.warning("No date found in footer %r", footer)
    return day_number, day_type, date


def _find_location_banner(body: Sequence[str]) -> Optional[str]:
    """Collect location banners from the top of the block.

    Explicit banners (STAGE n, ON LOCATION, COMPANY MOVE, MOVE TO) win over
    bare uppercase lines; distinct banners of the winning kind are joined
    with " / " in the order they appear.
    """
    explicit: List[str] = []
    heuristic: List[str] = []
    for text in body[:BANNER_WINDOW]:
        if not text:
            continue
        is_explicit = bool(_EXPLICIT_BANNER_PATTERN.match(text))
        if not is_explicit and not _looks_like_banner(text):
            continue
        cleaned = text
        for prefix in _BANNER_PREFIXES:
            cleaned = prefix.sub("", cleaned)
        cleaned = cleaned.strip()
        if len(cleaned) <= 2:
            continue
        (explicit if is_explicit else heuristic).append(cleaned)

    banners = explicit or heuristic
    if not banners:
        return None
    return " / ".join(dict.fromkeys(banners))


def _looks_like_banner(text: str) -> bool:
    return (
        is_uppercase_banner(text)
        and not mentions_calendar_word(text)
        and not is_end_of_day(text)
        and not is_scene_header(text)
        and not is_page_count(text)
        and not is_time_of_day(text)
    )
