"""Plain data containers produced by the oneline schedule parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

UNKNOWN_DATE = "Unknown Date"
UNKNOWN = "Unknown"
TBD = "TBD"
NO_DESCRIPTION = "No description"
COMPANY_OFF_NOTE = "Company Off"
DEFAULT_SOURCE = "Unknown Source"


@dataclass(frozen=True)
class Line:
    """A trimmed, non-empty input line and its position in the raw text."""
    number: int
    text: str


@dataclass(frozen=True)
class TextFragment:
    """A positioned piece of text as reported by a PDF text extractor.

    ``y`` grows upwards (PDF origin is the bottom-left corner).
    """
    text: str
    x: float
    y: float
    page: int = 1


@dataclass(frozen=True)
class DayRange:
    """Inclusive index range of one day block inside the line sequence."""
    start: int
    end: int


@dataclass
class Scene:
    """One scheduled scene inside a shoot day."""
    id: str
    scene_number: str
    description: str
    location: str
    slugline: Optional[str] = None
    time_of_day: Optional[str] = None
    cast: Optional[str] = None
    pages: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "sceneNumber": self.scene_number,
            "description": self.description,
            "location": self.location,
            "slugline": self.slugline,
            "timeOfDay": self.time_of_day,
            "cast": self.cast,
            "pages": self.pages,
        }


@dataclass
class ShootDay:
    """A shoot day recovered from one day block of a oneline schedule."""
    id: str
    day_number: int
    date: str
    title: str
    location: str
    call_time: str = TBD
    status: str = "scheduled"
    scenes: List[Scene] = field(default_factory=list)
    notes: Optional[str] = None
    source_file: str = DEFAULT_SOURCE
    original_text: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "dayNumber": self.day_number,
            "date": self.date,
            "title": self.title,
            "location": self.location,
            "callTime": self.call_time,
            "status": self.status,
            "scenes": [scene.to_dict() for scene in self.scenes],
            "notes": self.notes,
            "sourceFile": self.source_file,
            "originalText": self.original_text,
        }


class SceneIdFactory:
    """Hands out scene ids that are unique and reproducible within one parse."""

    def __init__(self, prefix: str = "scene") -> None:
        self.prefix = prefix
        self._counter = 0

    def next_id(self) -> str:
        self._counter += 1
        return f"{self.prefix}-{self._counter}"

    @property
    def issued(self) -> int:
        return self._counter
