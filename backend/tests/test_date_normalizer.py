import sys
from datetime import date
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

import pytest

from backend.app.services.date_normalizer import normalize_date


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("Tuesday, October 21, 2025", "2025-10-21"),
        ("Monday, October 21, 2025", "2025-10-21"),
        ("10/21/2025", "2025-10-21"),
        ("08/11/25", "2025-08-11"),
        ("Aug 13, 2025", "2025-08-13"),
        ("Friday,  September   26, 2025", "2025-09-26"),
        ("Wednesday, August 13, 2025.", "2025-08-13"),
        ("“Wednesday, August 13, 2025”", "2025-08-13"),
    ],
)
def test_accepted_forms_become_iso_dates(raw: str, expected: str) -> None:
    result = normalize_date(raw)

    assert result == expected
    assert date.fromisoformat(result).isoformat() == expected


@pytest.mark.parametrize("raw", ["TBD", "Unknown Date", "13/45/2025", "", "October 21"])
def test_unparseable_input_is_returned_unchanged(raw: str) -> None:
    assert normalize_date(raw) == raw
    assert normalize_date(normalize_date(raw)) == raw
