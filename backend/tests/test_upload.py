import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

import pytest
from fastapi.testclient import TestClient

from backend.app.main import NO_DAYS_MESSAGE, UnparseableScheduleError, app, run_parser

SCHEDULE_TEXT = "\n".join(
    [
        "INT JOHN'S LOFT",
        "Day",
        "John talks to Carolyn",
        "1.9, 2.9",
        "9-12, 13",
        "Scenes:",
        "END DAY 1 — Tuesday, October 21, 2025 — 2 pgs.",
    ]
)


def test_upload_rejects_missing_filename() -> None:
    pdf_bytes = b"%PDF-1.4\n%%EOF"
    boundary = "testboundary"
    body = (
        f"--{boundary}\r\n"
        'Content-Disposition: form-data; name="file"; filename=""\r\n'
        "Content-Type: application/pdf\r\n"
        "\r\n"
    ).encode() + pdf_bytes + (
        f"\r\n--{boundary}--\r\n"
    ).encode()

    with TestClient(app) as client:
        response = client.post(
            "/upload",
            data=body,
            headers={"content-type": f"multipart/form-data; boundary={boundary}"},
        )

    assert response.status_code == 400
    assert response.json() == {"detail": "Filename is required."}


def test_upload_rejects_non_pdf_content_type() -> None:
    with TestClient(app) as client:
        response = client.post(
            "/upload",
            files={"file": ("schedule.txt", b"END OF DAY 1", "text/plain")},
        )

    assert response.status_code == 400
    assert response.json() == {"detail": "Only PDF uploads are supported."}


def test_parse_returns_camel_case_schedule() -> None:
    with TestClient(app) as client:
        response = client.post(
            "/parse",
            json={"text": SCHEDULE_TEXT, "sourceFile": "White Plains 109.pdf"},
        )

    assert response.status_code == 200
    body = response.json()
    assert body["sourceFile"] == "White Plains 109.pdf"
    assert body["strategy"] == "heuristic"
    assert body["dayCount"] == 1
    assert body["sceneCount"] == 1
    day = body["days"][0]
    assert day["dayNumber"] == 1
    assert day["date"] == "2025-10-21"
    assert day["callTime"] == "TBD"
    assert day["status"] == "scheduled"
    assert day["sourceFile"] == "White Plains 109.pdf"
    assert day["scenes"][0]["sceneNumber"] == "9-12, 13"


def test_parse_rejects_blank_text() -> None:
    with TestClient(app) as client:
        response = client.post("/parse", json={"text": "   \n  "})

    assert response.status_code == 422


def test_run_parser_flags_documents_without_days() -> None:
    with pytest.raises(UnparseableScheduleError, match=NO_DAYS_MESSAGE):
        run_parser("nothing useful", "empty.pdf", lambda: [])


def test_healthcheck() -> None:
    with TestClient(app) as client:
        response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
