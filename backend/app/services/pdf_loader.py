"""Utilities for pulling positioned text out of oneline schedule PDFs."""

from __future__ import annotations

import io
import logging
from typing import Iterable, List, Mapping

import pdfplumber
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from backend.app.services.schedule_models import TextFragment

logger = logging.getLogger(__name__)


def load_pdf_fragments(file_bytes: bytes) -> List[TextFragment]:
    """Extract every word of the PDF with its page and baseline position."""
    fragments: List[TextFragment] = []
    try:
        pdf = pdfplumber.open(io.BytesIO(file_bytes))
    except Exception as exc:
        raise ValueError("Could not read the PDF.") from exc

    try:
        for page_number, page in enumerate(pdf.pages, start=1):
            words = page.extract_words(keep_blank_chars=False, use_text_flow=True)
            fragments.extend(words_to_fragments(words, float(page.height), page_number))
    finally:
        pdf.close()
    logger.debug("Extracted %d text fragments", len(fragments))
    return fragments


def words_to_fragments(
    words: Iterable[Mapping[str, object]],
    page_height: float,
    page_number: int = 1,
) -> List[TextFragment]:
    """Convert pdfplumber words (top-left origin) to bottom-left fragments."""
    fragments: List[TextFragment] = []
    for word in words:
        text = str(word.get("text", "")).strip()
        if not text:
            continue
        fragments.append(
            TextFragment(
                text=text,
                x=float(word["x0"]),
                y=page_height - float(word["bottom"]),
                page=page_number,
            )
        )
    return fragments


def load_pdf_text(file_bytes: bytes) -> str:
    """Plain reading-order text via pypdf, one page after another."""
    try:
        reader = PdfReader(io.BytesIO(file_bytes))
        pages = [page.extract_text() or "" for page in reader.pages]
    except (PdfReadError, ValueError) as exc:
        raise ValueError("Could not read the PDF.") from exc
    return "\n".join(pages)
