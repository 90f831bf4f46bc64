"""Line-level patterns shared by the oneline schedule parsing stages."""

from __future__ import annotations

import re

SCENES_ANCHOR = "Scenes:"

_MONTHS = (
    "January|February|March|April|May|June|July|August|September|October|November|December"
)
_MONTH_ABBREVIATIONS = "Jan|Feb|Mar|Apr|Jun|Jul|Aug|Sept|Sep|Oct|Nov|Dec"
_WEEKDAYS = "Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday"

# Case-sensitive on purpose: PDF extraction glues the prefix onto the
# location ("INTJOHN'S LOFT"), so no word boundary is required, but a
# lowercase continuation ("Interview") is never a scene header.
SCENE_HEADER_PATTERN = re.compile(r"^(?:INT|EXT|I/E)(?![a-z])")
_SLUGLINE_PREFIX_PATTERN = re.compile(r"^(INT\.?/EXT|EXT\.?/INT|INT|EXT|I/E)(\.?)\s*")

END_OF_DAY_PATTERN = re.compile(r"\bEND\s+(?:OF\s+)?(?:[A-Z]+\s+)?DAY\b", re.IGNORECASE)
DAY_NUMBER_PATTERN = re.compile(r"\bDAY\s+(\d+)", re.IGNORECASE)
DAY_TYPE_PATTERN = re.compile(r"\bEND\s+([A-Z][A-Z\s]*?)\s+DAY\b", re.IGNORECASE)
FOOTER_DATE_PATTERN = re.compile(
    r"([A-Za-z]+,?\s*[A-Za-z]+\s+\d+,?\s*\d{4}|\d{1,2}/\d{1,2}/\d{2,4})"
)
COMPANY_OFF_PATTERN = re.compile(r"\bCOMPANY\s+OFF\b", re.IGNORECASE)

_YEAR_PATTERN = re.compile(r"\d{4}")
_MONTH_DAY_PATTERN = re.compile(
    rf"\b(?:{_MONTHS}|{_MONTH_ABBREVIATIONS})\.?\s+\d+", re.IGNORECASE
)
_SLASH_DATE_PATTERN = re.compile(r"\d{1,2}/\d{1,2}/\d{2,4}")
_CALENDAR_WORD_PATTERN = re.compile(rf"\b(?:{_WEEKDAYS}|{_MONTHS})\b", re.IGNORECASE)

_PAGE_COUNT_SUFFIX_PATTERN = re.compile(r"pgs\.?$", re.IGNORECASE)
_PAGE_COUNT_PREFIX_PATTERN = re.compile(r"^[\d\s/]+pgs", re.IGNORECASE)
_LONE_PGS_PATTERN = re.compile(r"^pgs\.?$", re.IGNORECASE)
_GLUED_PGS_CAST_PATTERN = re.compile(r"^pgs\.\s*((?:\d+[a-z]\.\d+|[\d.,\s])+)$", re.IGNORECASE)
_NUMERIC_ONLY_PATTERN = re.compile(r"^[\d\s/]+$")
_CAST_LIST_PATTERN = re.compile(r"^(?:\d+[a-z]\.\d+|[\d.,\s])+$")
_TIME_OF_DAY_PATTERN = re.compile(
    r"^(?:(?:LATE|EARLY)\s+)?(?:DAY|NIGHT|DUSK|DAWN|MORNING|EVENING|AFTERNOON|D\d+N)$", re.IGNORECASE
)
_TRAILING_TIME_OF_DAY_PATTERN = re.compile(r"(?:Day|Night|Dusk|Dawn|D4N)$", re.IGNORECASE)
_BANNER_CLEAN_PATTERN = re.compile(r"[^A-Z0-9\s&'-]")


def is_scene_header(text: str) -> bool:
    """Return True when a line opens with an INT/EXT/I/E slugline prefix."""
    return bool(SCENE_HEADER_PATTERN.match(text))


def is_scenes_anchor(text: str) -> bool:
    return text == SCENES_ANCHOR


def is_end_of_day(text: str) -> bool:
    """Detect "END DAY", "END OF DAY" and "END <TYPE> DAY" footer markers."""
    return bool(END_OF_DAY_PATTERN.search(text))


def has_strong_date(text: str) -> bool:
    """Cheap check for a footer that already carries its date."""
    return bool(_YEAR_PATTERN.search(text)) or "," in text


def has_date_content(text: str) -> bool:
    """Detect a footer continuation line carrying the day's date."""
    return bool(
        _MONTH_DAY_PATTERN.search(text)
        or _YEAR_PATTERN.search(text)
        or _SLASH_DATE_PATTERN.search(text)
    )


def mentions_calendar_word(text: str) -> bool:
    return bool(_CALENDAR_WORD_PATTERN.search(text))


def is_page_count(text: str) -> bool:
    """Match page-count lines such as "2 3/8 pgs." or "pgs."."""
    return bool(_PAGE_COUNT_SUFFIX_PATTERN.search(text) or _PAGE_COUNT_PREFIX_PATTERN.match(text))


def is_lone_pgs(text: str) -> bool:
    return bool(_LONE_PGS_PATTERN.match(text))


def glued_pgs_cast(text: str) -> str | None:
    """Return the cast list from a "pgs.1.4, 4.4" style line, if any."""
    match = _GLUED_PGS_CAST_PATTERN.match(text)
    if not match:
        return None
    return match.group(1).strip() or None


def is_numeric_only(text: str) -> bool:
    return bool(_NUMERIC_ONLY_PATTERN.match(text))


def is_cast_list(text: str) -> bool:
    """Cast references such as "1.9, 7a.9": numbered ids, periods and commas."""
    return bool(_CAST_LIST_PATTERN.match(text)) and any(char.isdigit() for char in text)


def is_time_of_day(text: str) -> bool:
    return bool(_TIME_OF_DAY_PATTERN.match(text))


def strip_time_of_day(text: str) -> str:
    return _TRAILING_TIME_OF_DAY_PATTERN.sub("", text).strip()


def is_uppercase_text(text: str) -> bool:
    """True for text with at least one letter and no lowercase letters."""
    return any(char.isalpha() for char in text) and text == text.upper()


def is_uppercase_banner(text: str) -> bool:
    """Standalone uppercase line made only of letters, digits and & ' -."""
    cleaned = _BANNER_CLEAN_PATTERN.sub("", text)
    return len(cleaned) > 3 and cleaned.strip() == text.strip() and is_uppercase_text(text)


def fix_slugline_spacing(text: str) -> str:
    """Separate a glued slugline prefix from its location: INTJOHN -> INT JOHN."""
    return _SLUGLINE_PREFIX_PATTERN.sub(r"\1\2 ", text, count=1).strip()
