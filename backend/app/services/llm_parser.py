"""Alternate schedule parser that delegates extraction to a hosted chat model.

It returns the same :class:`ShootDay` records as the heuristic parser so
callers never need to know which strategy produced a schedule.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from langchain_core.prompts import ChatPromptTemplate
from langchain_openai import ChatOpenAI
from openai import OpenAIError
from pydantic import BaseModel, Field, ValidationError

from backend.app.config import Settings, get_settings
from backend.app.services.date_normalizer import normalize_date
from backend.app.services.schedule_models import (
    DEFAULT_SOURCE,
    NO_DESCRIPTION,
    TBD,
    UNKNOWN,
    UNKNOWN_DATE,
    Scene,
    SceneIdFactory,
    ShootDay,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are an expert Assistant Director. Your job is to parse oneline movie schedules "
    "from raw PDF text into structured data. The text contains one or more shoot days, each "
    "closed by an END OF DAY footer carrying the day number and calendar date. "
    "For every day extract the day number, the calendar date as YYYY-MM-DD, the location banner "
    "for the day and its scenes in order. For every scene extract the scene number, the slugline "
    "(INT/EXT LOCATION), a brief description, the cast ids and the page count. "
    "If the text is messy, do your best to infer logical boundaries. Never invent scenes."
)

prompt = ChatPromptTemplate.from_messages(
    [
        ("system", SYSTEM_PROMPT),
        (
            "human",
            "Here is the raw text from a oneline schedule PDF:\n\n{schedule}\n\n"
            "Please extract the schedule data.",
        ),
    ]
)


class LLMUnavailableError(RuntimeError):
    """Raised when the LLM strategy is requested without credentials."""


class LLMScene(BaseModel):
    scene_number: str = Field(description="Scene number exactly as printed, e.g. 9-12, 13")
    slugline: str = Field(default="", description="INT/EXT LOCATION heading")
    description: str = Field(default="")
    cast: str = Field(default="", description="Cast ids, e.g. 1, 2, 7")
    pages: str = Field(default="", description="Page count, e.g. 1 4/8")


class LLMDay(BaseModel):
    day_number: Optional[int] = None
    date: str = Field(default="", description="Calendar date as YYYY-MM-DD")
    location: str = Field(default="")
    scenes: List[LLMScene] = Field(default_factory=list)


class LLMSchedule(BaseModel):
    days: List[LLMDay] = Field(default_factory=list)


def build_chain(settings: Settings):
    llm = ChatOpenAI(
        api_key=settings.openai_api_key,
        model=settings.chat_model,
        temperature=0,
    )
    return prompt | llm.with_structured_output(LLMSchedule)


def parse_schedule_with_llm(
    text: str,
    source_file: str = DEFAULT_SOURCE,
    settings: Optional[Settings] = None,
) -> List[ShootDay]:
    """Ask the chat model for the schedule and map its answer to shoot days."""
    settings = settings or get_settings()
    if not settings.openai_api_key:
        raise LLMUnavailableError("OPENAI_API_KEY is not configured.")
    if not isinstance(text, str) or not text.strip():
        return []

    truncated = text[: settings.llm_max_chars]
    if len(truncated) < len(text):
        logger.warning("Schedule text truncated to %d characters for the LLM", len(truncated))

    chain = build_chain(settings)
    try:
        result = chain.invoke({"schedule": truncated})
    except (OpenAIError, ValidationError, ValueError) as exc:
        logger.error("LLM schedule parsing failed: %s", exc)
        return []
    if not isinstance(result, LLMSchedule):
        result = LLMSchedule.model_validate(result)
    return to_shoot_days(result, source_file)


def to_shoot_days(schedule: LLMSchedule, source_file: str = DEFAULT_SOURCE) -> List[ShootDay]:
    """Fill ids and defaults so LLM output matches the heuristic contract."""
    ids = SceneIdFactory()
    days: List[ShootDay] = []
    for position, day in enumerate(schedule.days, start=1):
        day_number = day.day_number or position
        scenes = [
            Scene(
                id=ids.next_id(),
                scene_number=scene.scene_number or UNKNOWN,
                description=scene.description or NO_DESCRIPTION,
                location=scene.slugline or UNKNOWN,
                slugline=scene.slugline or None,
                cast=scene.cast or None,
                pages=scene.pages or None,
            )
            for scene in day.scenes
        ]
        location = day.location or (scenes[0].location if scenes else TBD)
        days.append(
            ShootDay(
                id=f"day-{day_number}",
                day_number=day_number,
                date=normalize_date(day.date) if day.date else UNKNOWN_DATE,
                title=f"Day {day_number} - {location}",
                location=location,
                scenes=scenes,
                source_file=source_file,
            )
        )
    return days
