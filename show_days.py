import sys
from pathlib import Path

from backend.app.services.pdf_loader import load_pdf_fragments
from backend.app.services.schedule_parser import parse_schedule_fragments, parse_schedule_text

path = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("schedule_sample.txt")
if path.suffix.lower() == ".pdf":
    days = parse_schedule_fragments(load_pdf_fragments(path.read_bytes()), path.name)
else:
    days = parse_schedule_text(path.read_text(encoding="utf-8"), path.name)

print(f"Parsed {len(days)} days.")
for day in days:
    print(f"Day {day.day_number}: {day.date} - {day.location} - {len(day.scenes)} scenes")
    for scene in day.scenes:
        print(f"  Scene {scene.scene_number}: {scene.description} ({scene.location})")
