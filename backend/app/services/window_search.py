"""Bounded look-behind/look-ahead helpers used by every parsing stage.

All scans in the parser go through these two functions so that no search
can run past its window. Running out of window is a normal miss and is
reported as ``None``.
"""

from __future__ import annotations

from typing import Callable, Optional, Sequence

Predicate = Callable[[str], bool]
IndexPredicate = Callable[[int], bool]


def find_forward(
    lines: Sequence[str],
    from_index: int,
    max_steps: int,
    predicate: Predicate,
    stop: Optional[Predicate] = None,
    skip: Optional[Predicate] = None,
    stop_at: Optional[IndexPredicate] = None,
) -> Optional[int]:
    """Return the index of the first line after ``from_index`` matching ``predicate``.

    At most ``max_steps`` lines are examined (``from_index + 1`` through
    ``from_index + max_steps``). ``skip`` lines are passed over without
    being tested, while ``stop``/``stop_at`` end the search early with no
    match. ``stop`` is checked before ``predicate``.
    """
    for step in range(1, max_steps + 1):
        index = from_index + step
        if index >= len(lines):
            return None
        if stop_at is not None and stop_at(index):
            return None
        text = lines[index]
        if skip is not None and skip(text):
            continue
        if stop is not None and stop(text):
            return None
        if predicate(text):
            return index
    return None


def find_backward(
    lines: Sequence[str],
    from_index: int,
    max_steps: int,
    predicate: Predicate,
    stop: Optional[Predicate] = None,
    skip: Optional[Predicate] = None,
    stop_at: Optional[IndexPredicate] = None,
) -> Optional[int]:
    """Mirror of :func:`find_forward`, scanning ``from_index - 1`` downwards."""
    for step in range(1, max_steps + 1):
        index = from_index - step
        if index < 0:
            return None
        if stop_at is not None and stop_at(index):
            return None
        text = lines[index]
        if skip is not None and skip(text):
            continue
        if stop is not None and stop(text):
            return None
        if predicate(text):
            return index
    return None
