"""Turn extracted schedule text into the clean line stream the parser walks."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Tuple

from backend.app.services.schedule_models import Line, TextFragment

LINE_TOLERANCE = 2.0


def normalize_text(text: str) -> List[Line]:
    """Split raw text into trimmed, non-empty lines.

    Each :class:`Line` keeps the zero-based number of the physical line it
    came from, so indices in the returned list map back to the source
    deterministically.
    """
    if not isinstance(text, str) or not text:
        return []
    lines: List[Line] = []
    for number, raw_line in enumerate(text.splitlines()):
        stripped = raw_line.strip()
        if not stripped:
            continue
        lines.append(Line(number=number, text=stripped))
    return lines


def lines_from_fragments(
    fragments: Iterable[TextFragment],
    tolerance: float = LINE_TOLERANCE,
) -> List[str]:
    """Rebuild reading-order lines from positioned text fragments.

    Fragments are clustered into a line when their vertical positions are
    within ``tolerance`` of the first fragment of that line. Lines are
    emitted top to bottom (descending ``y``), pages in ascending order, and
    fragments inside a line are joined left to right with one space.
    """
    by_page: Dict[int, List[TextFragment]] = defaultdict(list)
    for fragment in fragments:
        by_page[fragment.page].append(fragment)

    output: List[str] = []
    for page in sorted(by_page):
        grouped: List[Tuple[float, List[TextFragment]]] = []
        for fragment in by_page[page]:
            for line_y, members in grouped:
                if abs(line_y - fragment.y) < tolerance:
                    members.append(fragment)
                    break
            else:
                grouped.append((fragment.y, [fragment]))
        grouped.sort(key=lambda entry: entry[0], reverse=True)
        for _, members in grouped:
            members.sort(key=lambda item: item.x)
            text = " ".join(item.text for item in members).strip()
            if text:
                output.append(text)
    return output


def normalize_fragments(
    fragments: Iterable[TextFragment],
    tolerance: float = LINE_TOLERANCE,
) -> List[Line]:
    """Position-aware variant of :func:`normalize_text`."""
    return normalize_text("\n".join(lines_from_fragments(fragments, tolerance)))
