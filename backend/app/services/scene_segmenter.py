"""Heuristic scene segmentation for the body of one shoot day.

Three layouts show up in oneline exports and each has its own strategy:

* ``Scenes:`` anchor - slugline, time of day, description and cast come
  first, then the scene number and a literal ``Scenes:`` line.
* inline - ``12A INT KITCHEN - NIGHT`` with number and slugline together.
* slugline - an INT/EXT line with the scene number a few lines above it.

Anchor scenes are resolved first and claim their lines; the inline and
slugline strategies then walk the remaining lines in order. A line that
belongs to one scene is never read again by another strategy.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from backend.app.services.schedule_models import (
    NO_DESCRIPTION,
    UNKNOWN,
    Scene,
    SceneIdFactory,
)
from backend.app.services.schedule_patterns import (
    fix_slugline_spacing,
    glued_pgs_cast,
    is_cast_list,
    is_end_of_day,
    is_lone_pgs,
    is_numeric_only,
    is_page_count,
    is_scene_header,
    is_scenes_anchor,
    is_time_of_day,
    is_uppercase_text,
    mentions_calendar_word,
    strip_time_of_day,
)
from backend.app.services.window_search import find_backward, find_forward

logger = logging.getLogger(__name__)

ANCHOR_LOOKBEHIND = 20
ANCHOR_LOOKAHEAD = 10
NUMBER_LOOKBEHIND = 5

_INLINE_SCENE_PATTERN = re.compile(r"^(\d+[A-Za-z0-9\-,]*)\s+((?:INT|EXT|I/E).*)$")
_RANGED_NUMBER_PATTERN = re.compile(r"^(\d+-[A-Za-z0-9\s,]+)")
_SIMPLE_NUMBER_PATTERN = re.compile(r"^(\d+[A-Z]?)$")
_PGS_SUFFIX_PATTERN = re.compile(r"\s*pgs\.?$", re.IGNORECASE)
_LEADING_DIGIT_PATTERN = re.compile(r"^\d")


@dataclass
class SceneMatch:
    """A scene recovered by one strategy, before it receives its id."""
    strategy: str
    scene_number: str
    description: str
    location: str
    slugline: Optional[str] = None
    time_of_day: Optional[str] = None
    cast: Optional[str] = None
    pages: Optional[str] = None
    consumed: List[int] = field(default_factory=list)

    @property
    def start(self) -> int:
        return min(self.consumed)

    def to_scene(self, scene_id: str) -> Scene:
        return Scene(
            id=scene_id,
            scene_number=self.scene_number,
            description=self.description,
            location=self.location,
            slugline=self.slugline,
            time_of_day=self.time_of_day,
            cast=self.cast,
            pages=self.pages,
        )


Strategy = Callable[[Sequence[str], int, Dict[int, int]], Optional[SceneMatch]]


def segment_scenes(
    lines: Sequence[str],
    ids: Optional[SceneIdFactory] = None,
) -> List[Scene]:
    """Recover the ordered scenes of one day block body."""
    texts = [line.strip() for line in lines]
    ids = ids or SceneIdFactory()
    claimed: Dict[int, int] = {}
    matches = _anchor_scenes(texts, claimed)

    for index, text in enumerate(texts):
        if not text or index in claimed:
            continue
        for strategy in _LINE_STRATEGIES:
            match = strategy(texts, index, claimed)
            if match is None:
                continue
            for consumed in match.consumed:
                claimed.setdefault(consumed, index)
            matches.append(match)
            break

    matches.sort(key=lambda item: item.start)
    scenes: List[Scene] = []
    for match in matches:
        scene = match.to_scene(ids.next_id())
        logger.debug(
            "Scene %s via %s strategy at line %d", scene.scene_number, match.strategy, match.start
        )
        scenes.append(scene)
    return scenes


def _anchor_scenes(lines: Sequence[str], claimed: Dict[int, int]) -> List[SceneMatch]:
    """Resolve every ``Scenes:`` anchor and claim the lines each one covers."""
    anchors = [index for index, text in enumerate(lines) if is_scenes_anchor(text)]
    matches: List[SceneMatch] = []
    previous = -1
    for anchor in anchors:
        match = _parse_anchor_block(lines, anchor, previous)
        for consumed in match.consumed:
            claimed.setdefault(consumed, anchor)
        matches.append(match)
        previous = anchor

    # Forward lookups run once every block is claimed so a scene never
    # borrows the slugline of the block that follows it.
    for anchor, match in zip(anchors, matches):
        _attach_forward_details(lines, anchor, match, claimed)
    return matches


def _parse_anchor_block(lines: Sequence[str], anchor: int, previous: int) -> SceneMatch:
    number_index = anchor - 1 if anchor - 1 > previous else None
    scene_number = lines[number_index] if number_index is not None else UNKNOWN
    lower = max(0, anchor - ANCHOR_LOOKBEHIND, previous + 1)

    def outside(index: int) -> bool:
        return index < lower

    match = SceneMatch(
        strategy="anchor",
        scene_number=scene_number or UNKNOWN,
        description=NO_DESCRIPTION,
        location=UNKNOWN,
        slugline=UNKNOWN,
        consumed=[anchor],
    )
    if number_index is None:
        return match
    match.consumed.append(number_index)

    slug_start = find_backward(
        lines, number_index, ANCHOR_LOOKBEHIND, predicate=is_scene_header, stop_at=outside
    )
    if slug_start is None:
        description_index = find_backward(
            lines,
            number_index,
            ANCHOR_LOOKBEHIND,
            predicate=lambda text: bool(text) and not is_cast_list(text),
            stop_at=outside,
        )
        cast_end = number_index
        if description_index is not None:
            match.description = lines[description_index]
            match.consumed.extend(range(description_index, number_index))
            cast_lines = [text for text in lines[description_index + 1:cast_end] if text]
            match.cast = " ".join(cast_lines) or None
        return match

    block = list(lines[slug_start:number_index])
    match.consumed.extend(range(slug_start, number_index))
    position = 0
    slug_parts: List[str] = []
    while position < len(block):
        text = block[position]
        if is_scene_header(text) or is_uppercase_text(strip_time_of_day(text)):
            slug_parts.append(text)
            position += 1
            continue
        if is_time_of_day(text):
            match.time_of_day = text
            position += 1
        break
    match.slugline = fix_slugline_spacing(" ".join(slug_parts))

    cast_start = len(block)
    for offset in range(len(block) - 1, position - 1, -1):
        if not is_cast_list(block[offset]):
            break
        cast_start = offset
    description = " ".join(text for text in block[position:cast_start] if text)
    if description:
        match.description = description
    cast = " ".join(block[cast_start:])
    match.cast = cast or None
    return match


def _attach_forward_details(
    lines: Sequence[str],
    anchor: int,
    match: SceneMatch,
    claimed: Dict[int, int],
) -> None:
    """Pick up the page count and location printed after a ``Scenes:`` line."""

    def owned_elsewhere(index: int) -> bool:
        return claimed.get(index, anchor) != anchor

    def outside_block(index: int) -> bool:
        return owned_elsewhere(index) or _opens_numbered_scene(lines, index)

    following = anchor + 1
    if following < len(lines) and not owned_elsewhere(following):
        text = lines[following]
        if is_page_count(text) and not is_lone_pgs(text):
            match.pages = _PGS_SUFFIX_PATTERN.sub("", text).strip() or None
            match.consumed.append(following)
        elif is_numeric_only(text) and following + 1 < len(lines) and is_lone_pgs(lines[following + 1]):
            match.pages = text
            match.consumed.extend([following, following + 1])

    location_index = find_forward(
        lines,
        anchor,
        ANCHOR_LOOKAHEAD,
        predicate=is_scene_header,
        skip=lambda text: not text or is_lone_pgs(text) or is_numeric_only(text) or len(text) < 3,
        stop=lambda text: bool(_INLINE_SCENE_PATTERN.match(text)),
        stop_at=outside_block,
    )
    if location_index is not None:
        match.location = fix_slugline_spacing(lines[location_index])
        match.consumed.append(location_index)
    else:
        match.location = match.slugline or UNKNOWN
    for consumed in match.consumed:
        claimed.setdefault(consumed, anchor)


def _inline_scene(lines: Sequence[str], index: int, claimed: Dict[int, int]) -> Optional[SceneMatch]:
    found = _INLINE_SCENE_PATTERN.match(lines[index])
    if not found:
        return None
    location = fix_slugline_spacing(found.group(2))
    match = SceneMatch(
        strategy="inline",
        scene_number=found.group(1).strip(),
        description=NO_DESCRIPTION,
        location=location,
        slugline=location,
        consumed=[index],
    )
    following = index + 1
    if following < len(lines) and following not in claimed and _is_description(lines[following]):
        match.description = lines[following]
        match.consumed.append(following)
    return match


def _slugline_scene(lines: Sequence[str], index: int, claimed: Dict[int, int]) -> Optional[SceneMatch]:
    if not is_scene_header(lines[index]):
        return None
    match = SceneMatch(
        strategy="slugline",
        scene_number=UNKNOWN,
        description=NO_DESCRIPTION,
        location=UNKNOWN,
        consumed=[index],
    )

    number_index = find_backward(
        lines,
        index,
        NUMBER_LOOKBEHIND,
        predicate=lambda text: _scene_number_of(text) is not None,
        stop_at=lambda position: position in claimed,
    )
    if number_index is not None:
        match.scene_number = _scene_number_of(lines[number_index]) or UNKNOWN
        match.consumed.append(number_index)

    slugline = lines[index]
    position = index + 1
    if position < len(lines) and position not in claimed and _is_slugline_continuation(lines[position]):
        slugline = f"{slugline} {lines[position]}"
        match.consumed.append(position)
        position += 1
    match.location = fix_slugline_spacing(slugline)
    match.slugline = match.location

    if position < len(lines) and position not in claimed and is_time_of_day(lines[position]):
        match.time_of_day = lines[position]
        match.consumed.append(position)
        position += 1

    if position < len(lines) and position not in claimed:
        text = lines[position]
        cast = glued_pgs_cast(text)
        if cast is not None or is_lone_pgs(text) or is_page_count(text):
            match.cast = cast
            if cast is None and not is_lone_pgs(text):
                match.pages = _PGS_SUFFIX_PATTERN.sub("", text).strip() or None
            match.consumed.append(position)
            position += 1

    if position < len(lines) and position not in claimed and _is_description(lines[position]):
        match.description = lines[position]
        match.consumed.append(position)
    return match


_LINE_STRATEGIES: Sequence[Strategy] = (_inline_scene, _slugline_scene)


def _scene_number_of(text: str) -> Optional[str]:
    """Extract a scene number such as "4-11pt A", "9-12, 13" or "27B"."""
    ranged = _RANGED_NUMBER_PATTERN.match(text)
    if ranged:
        return ranged.group(1).strip()
    simple = _SIMPLE_NUMBER_PATTERN.match(text)
    if simple:
        return simple.group(1).strip()
    return None


def _opens_numbered_scene(lines: Sequence[str], index: int) -> bool:
    """A scene number directly above an INT/EXT line starts another scene."""
    following = index + 1
    return (
        following < len(lines)
        and _scene_number_of(lines[index]) is not None
        and is_scene_header(lines[following])
    )


def _is_description(text: str) -> bool:
    return (
        bool(text)
        and not is_scene_header(text)
        and not is_scenes_anchor(text)
        and not is_end_of_day(text)
        and not _LEADING_DIGIT_PATTERN.match(text)
    )


def _is_slugline_continuation(text: str) -> bool:
    """A wrapped slugline tail: uppercase words only, no digits or time of day."""
    return (
        len(text) > 2
        and is_uppercase_text(text)
        and not any(char.isdigit() for char in text)
        and not is_time_of_day(text)
        and not mentions_calendar_word(text)
        and not is_scene_header(text)
        and not is_end_of_day(text)
    )
