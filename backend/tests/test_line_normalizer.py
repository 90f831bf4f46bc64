import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from backend.app.services.line_normalizer import (
    lines_from_fragments,
    normalize_fragments,
    normalize_text,
)
from backend.app.services.pdf_loader import words_to_fragments
from backend.app.services.schedule_models import Line, TextFragment


def test_normalize_text_trims_and_drops_blank_lines() -> None:
    lines = normalize_text("  INT LOFT  \n\n   \n\tDay\n")

    assert lines == [Line(number=0, text="INT LOFT"), Line(number=3, text="Day")]


def test_normalize_text_handles_empty_and_non_string_input() -> None:
    assert normalize_text("") == []
    assert normalize_text("\n \n") == []
    assert normalize_text(None) == []  # type: ignore[arg-type]


def test_fragments_grouped_by_baseline_and_sorted_left_to_right() -> None:
    fragments = [
        TextFragment(text="LOFT", x=120.0, y=700.4),
        TextFragment(text="Day", x=40.0, y=680.0),
        TextFragment(text="INT", x=40.0, y=700.0),
        TextFragment(text="JOHN'S", x=70.0, y=701.2),
    ]

    assert lines_from_fragments(fragments) == ["INT JOHN'S LOFT", "Day"]


def test_fragments_outside_tolerance_start_a_new_line() -> None:
    fragments = [
        TextFragment(text="upper", x=10.0, y=700.0),
        TextFragment(text="lower", x=10.0, y=697.0),
    ]

    assert lines_from_fragments(fragments) == ["upper", "lower"]


def test_fragments_emit_pages_in_order() -> None:
    fragments = [
        TextFragment(text="second page", x=10.0, y=780.0, page=2),
        TextFragment(text="first page", x=10.0, y=100.0, page=1),
    ]

    assert lines_from_fragments(fragments) == ["first page", "second page"]


def test_normalize_fragments_numbers_rebuilt_lines() -> None:
    fragments = [
        TextFragment(text="Scenes:", x=10.0, y=500.0),
        TextFragment(text="9-4", x=10.0, y=520.0),
    ]

    assert normalize_fragments(fragments) == [
        Line(number=0, text="9-4"),
        Line(number=1, text="Scenes:"),
    ]


def test_pdfplumber_words_keep_top_to_bottom_order() -> None:
    words = [
        {"text": "END", "x0": 10.0, "bottom": 300.0},
        {"text": "INTLOFT", "x0": 10.0, "bottom": 120.0},
        {"text": " ", "x0": 50.0, "bottom": 120.0},
    ]

    fragments = words_to_fragments(words, page_height=792.0, page_number=3)

    assert [fragment.text for fragment in fragments] == ["END", "INTLOFT"]
    assert fragments[1].y == 672.0
    assert all(fragment.page == 3 for fragment in fragments)
    assert lines_from_fragments(fragments) == ["INTLOFT", "END"]
