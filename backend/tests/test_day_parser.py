import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[2]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

from backend.app.services.day_parser import parse_day_block


def test_dated_footer_with_day_type_and_stage_banner() -> None:
    block = [
        "STAGE 62",
        "CLOSED SET",
        "INT LOFT - BEDROOM",
        "Day",
        "Carolyn gets on top of John",
        "1.9, 2.9",
        "9-5",
        "Scenes:",
        "END BEACH DAY 5 -- Wednesday, October 22, 2025 -- 1/8 pgs.",
    ]

    day = parse_day_block(block, 1, "ep109.pdf")

    assert day is not None
    assert day.id == "day-5"
    assert day.day_number == 5
    assert day.date == "2025-10-22"
    assert day.location == "STAGE 62"
    assert day.title == "Day 5 - BEACH - STAGE 62"
    assert day.call_time == "TBD"
    assert day.status == "scheduled"
    assert day.source_file == "ep109.pdf"
    assert [scene.scene_number for scene in day.scenes] == ["9-5"]


def test_split_footer_is_rejoined_and_excluded_from_scenes() -> None:
    block = [
        "ON LOCATION - CENTRAL PARK",
        "12",
        "EXT PARK - DAY",
        "Ducks gather at the pond",
        "END OF DAY 3",
        "Total Pages: 2",
        "Friday, October 24, 2025",
    ]

    day = parse_day_block(block, 1)

    assert day is not None
    assert day.day_number == 3
    assert day.date == "2025-10-24"
    assert day.location == "CENTRAL PARK"
    assert day.title == "Day 3 - CENTRAL PARK"
    assert len(day.scenes) == 1
    assert day.scenes[0].scene_number == "12"
    assert day.scenes[0].description == "Ducks gather at the pond"


def test_slash_dated_footer_without_scenes_or_banner() -> None:
    day = parse_day_block(["Night shoot pending", "END OF DAY 9 -- 10/30/2025"], 1)

    assert day is not None
    assert day.date == "2025-10-30"
    assert day.scenes == []
    assert day.location == "TBD"
    assert day.title == "Day 9 - TBD"


def test_location_falls_back_to_first_scene() -> None:
    block = ["4-9", "INT GEORGE - BULLPEN", "John argues", "END OF DAY 2 -- Tuesday, August 12, 2025"]

    day = parse_day_block(block, 1)

    assert day is not None
    assert day.location == "INT GEORGE - BULLPEN"


def test_company_off_day_is_kept_with_notes() -> None:
    day = parse_day_block(["COMPANY OFF", "END OF DAY 4 -- Friday, October 24, 2025"], 4)

    assert day is not None
    assert day.scenes == []
    assert day.notes == "Company Off"


def test_missing_date_and_number_use_sentinels() -> None:
    day = parse_day_block(["INT LOFT", "Talking", "END OF DAY"], 7)

    assert day is not None
    assert day.day_number == 7
    assert day.id == "day-7"
    assert day.date == "Unknown Date"
    assert day.notes is None


def test_weekday_in_footer_is_not_mistaken_for_day_number() -> None:
    day = parse_day_block(["INT LOFT", "Talking", "END DAY -- Monday, October 20, 2025"], 3)

    assert day is not None
    assert day.day_number == 3
    assert day.date == "2025-10-20"


def test_uppercase_banners_are_joined_when_no_keyword_banner() -> None:
    block = [
        "WARNER STAGES",
        "CLOSED SET",
        "WARNER STAGES",
        "INT LOFT",
        "Talking",
        "2 3/8 pgs.",
        "END OF DAY 1 -- Monday, October 20, 2025",
    ]

    day = parse_day_block(block, 1)

    assert day is not None
    assert day.location == "WARNER STAGES / CLOSED SET"


def test_keyword_banners_are_deduplicated_and_prefixes_stripped() -> None:
    block = [
        "STAGE 62",
        "IF TIME PERMITS",
        "INT LOFT",
        "Talking",
        "STAGE 62",
        "MOVE TO STAGE 20",
        "INT GEORGE",
        "Working",
        "END OF DAY 1 -- Monday, October 20, 2025",
    ]

    day = parse_day_block(block, 1)

    assert day is not None
    assert day.location == "STAGE 62 / STAGE 20"


def test_original_text_is_kept_verbatim() -> None:
    block = ["INT LOFT", "Talking", "END OF DAY 1 -- Monday, October 20, 2025"]

    day = parse_day_block(block, 1)

    assert day is not None
    assert day.original_text == "\n".join(block)


def test_blank_block_is_rejected() -> None:
    assert parse_day_block(["", "   "], 1) is None
