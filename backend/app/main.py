from __future__ import annotations

import logging
import time
from collections import defaultdict, deque
from typing import Callable, Deque, Dict, List

from dotenv import load_dotenv
from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from backend.app.config import get_settings
from backend.app.schemas import ParseRequest, ScheduleResponse, ShootDayOut
from backend.app.services.line_normalizer import lines_from_fragments
from backend.app.services.llm_parser import LLMUnavailableError, parse_schedule_with_llm
from backend.app.services.pdf_loader import load_pdf_fragments, load_pdf_text
from backend.app.services.schedule_models import ShootDay
from backend.app.services.schedule_parser import parse_schedule_fragments, parse_schedule_text

load_dotenv(override=True)
logging.basicConfig(level=get_settings().log_level.upper())
logger = logging.getLogger(__name__)

app = FastAPI(title="Oneline Schedule Parser API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

NO_DAYS_MESSAGE = "No shoot days could be found in this schedule."


class UnparseableScheduleError(ValueError):
    """Raised when a document yields zero shoot days."""


class RateLimiter:
    def __init__(self, limit: int, window_seconds: int) -> None:
        self.limit = limit
        self.window = window_seconds
        self._records: Dict[str, Deque[float]] = defaultdict(deque)

    def check(self, key: str) -> bool:
        now = time.monotonic()
        window_start = now - self.window
        queue = self._records[key]
        while queue and queue[0] < window_start:
            queue.popleft()
        if len(queue) >= self.limit:
            return False
        queue.append(now)
        return True


upload_rate_limiter = RateLimiter(limit=10, window_seconds=60)
parse_rate_limiter = RateLimiter(limit=30, window_seconds=60)


def run_parser(text: str, source_file: str, heuristic: Callable[[], List[ShootDay]]) -> ScheduleResponse:
    """Apply the configured strategy and wrap the days for the API."""
    settings = get_settings()
    strategy = settings.parser_strategy
    if strategy == "llm":
        days = parse_schedule_with_llm(text, source_file, settings)
        used = "llm"
    else:
        days = heuristic()
        used = "heuristic"
        if not days and strategy == "auto" and settings.openai_api_key:
            logger.info("Heuristic parser found nothing in %s; trying the LLM", source_file)
            days = parse_schedule_with_llm(text, source_file, settings)
            used = "llm"

    if not days:
        raise UnparseableScheduleError(NO_DAYS_MESSAGE)

    return ScheduleResponse(
        source_file=source_file,
        strategy=used,
        day_count=len(days),
        scene_count=sum(len(day.scenes) for day in days),
        days=[ShootDayOut.model_validate(day) for day in days],
    )


def ingest_pdf(file_bytes: bytes, filename: str) -> ScheduleResponse:
    fragments = load_pdf_fragments(file_bytes)
    if fragments:
        text = "\n".join(lines_from_fragments(fragments))
        return run_parser(text, filename, lambda: parse_schedule_fragments(fragments, filename))

    text = load_pdf_text(file_bytes)
    if not text.strip():
        raise ValueError("Could not extract text from the PDF.")
    return run_parser(text, filename, lambda: parse_schedule_text(text, filename))


def _require_rate_limit(limiter: RateLimiter, request: Request, error_message: str) -> None:
    identifier = request.client.host if request.client else "anonymous"
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        identifier = forwarded.split(",")[0].strip()
    if not limiter.check(identifier):
        raise HTTPException(status_code=429, detail=error_message)


def _ensure_pdf_upload(file: UploadFile, file_bytes: bytes) -> None:
    max_bytes = get_settings().max_upload_mb * 1024 * 1024
    if len(file_bytes) > max_bytes:
        raise HTTPException(
            status_code=400, detail=f"PDF exceeds {get_settings().max_upload_mb} MB limit."
        )

    filename = file.filename
    if not isinstance(filename, str) or not filename.strip():
        raise HTTPException(status_code=400, detail="Filename is required.")

    if not filename.lower().endswith(".pdf"):
        raise HTTPException(status_code=400, detail="Filename must end with .pdf")


def _to_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, UnparseableScheduleError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, LLMUnavailableError):
        return HTTPException(status_code=503, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


@app.post("/upload", response_model=ScheduleResponse)
async def upload_pdf(request: Request, file: UploadFile = File(...)) -> ScheduleResponse:
    _require_rate_limit(upload_rate_limiter, request, "Too many uploads from this IP. Try again later.")
    if file.content_type != "application/pdf":
        raise HTTPException(status_code=400, detail="Only PDF uploads are supported.")
    file_bytes = await file.read()
    _ensure_pdf_upload(file, file_bytes)
    try:
        return ingest_pdf(file_bytes, file.filename)
    except (ValueError, LLMUnavailableError) as exc:
        raise _to_http_error(exc) from exc


@app.post("/parse", response_model=ScheduleResponse)
async def parse_text(request: Request, payload: ParseRequest) -> ScheduleResponse:
    _require_rate_limit(parse_rate_limiter, request, "Too many requests from this IP. Please slow down.")
    try:
        return run_parser(
            payload.text,
            payload.source_file,
            lambda: parse_schedule_text(payload.text, payload.source_file),
        )
    except (ValueError, LLMUnavailableError) as exc:
        raise _to_http_error(exc) from exc


@app.get("/health")
def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
