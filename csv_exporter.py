"""
csv_exporter.py
───────────────
Per-room area table as CSV text, one row per room plus a TOTAL PROJECT row.

Usage:
    from csv_exporter import export_to_csv
    export_to_csv(rooms, "out/", project_details)
"""

from __future__ import annotations
import csv
import io
import logging
from pathlib import Path
from typing import Iterable

from measurements import Room, ProjectDetails
from area_calculator import build_project_report, format_area

logger = logging.getLogger(__name__)

CSV_HEADERS = [
    "Room Name",
    "Wall Area (sq ft)",
    "Openings Area (sq ft)",
    "Ceiling Area (sq ft)",
    "Running Feet Area (sq ft)",
    "Net Area (sq ft)",
]
TOTAL_LABEL = "TOTAL PROJECT"


def export_csv_text(rooms: Iterable[Room]) -> str:
    report = build_project_report(rooms)

    buf    = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADERS)
    for room, s in report.rooms:
        writer.writerow([
            room.name,
            format_area(s.total_wall_area),
            format_area(s.total_openings_area),
            format_area(s.ceiling_area),
            format_area(s.running_feet_area),
            format_area(s.net_area),
        ])
    writer.writerow([TOTAL_LABEL, "", "", "", "", format_area(report.project_total)])
    return buf.getvalue()


def export_to_csv(
    rooms:           Iterable[Room],
    output_path:     str | Path,
    project_details: ProjectDetails | None = None,
) -> str:
    """
    Write the CSV table to disk.

    Args:
        rooms:           Rooms to export, in display order.
        output_path:     Target file, or an existing directory in which case
                         the file is named from the project details.
        project_details: Used only for the default file name.

    Returns:
        Path of the written file.
    """
    details = project_details or ProjectDetails()
    out = Path(output_path)
    if out.is_dir():
        out = out / details.export_filename("csv")
    out.parent.mkdir(parents=True, exist_ok=True)

    with open(out, "w", encoding="utf-8", newline="") as f:
        f.write(export_csv_text(rooms))

    logger.info(f"CSV saved: {out}")
    return str(out)
