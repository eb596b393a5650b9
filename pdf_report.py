"""
pdf_report.py
─────────────
Printable area report:
  • Project details block (only the fields that are filled in)
  • Summary table — one row per room plus PROJECT TOTAL
  • Detailed breakdown — every ceiling / wall / opening / running-feet
    entry with its dimensions, quantity and area, then the room net total

Every area printed goes through area_calculator.format_area(), so the PDF
shows the same figures as the CSV and the on-screen summary.

Uses:
  reportlab  — platypus document / table layout

Usage:
    from pdf_report import export_to_pdf
    export_to_pdf(rooms, "report.pdf", project_details)
"""

from __future__ import annotations

import io
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.lib.enums import TA_CENTER
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle

from measurements import Room, ProjectDetails
from area_calculator import (
    ProjectReport, build_project_report, format_area, rectangle_area, running_feet_area,
)

logger = logging.getLogger(__name__)

REPORT_TITLE = "Wall Surface Area Calculation Report"


# ─── Colour scheme ────────────────────────────────────────────────────────────

_HEADER_BG  = colors.Color(70 / 255, 130 / 255, 180 / 255)    # steel blue
_TOTAL_BG   = colors.Color(200 / 255, 230 / 255, 1.0)         # light blue
_ROOM_BG    = colors.Color(240 / 255, 240 / 255, 240 / 255)   # grey
_NET_BG     = colors.Color(220 / 255, 1.0, 220 / 255)         # light green
_ALT_BG     = colors.Color(248 / 255, 249 / 255, 250 / 255)
_GRID       = colors.Color(200 / 255, 200 / 255, 200 / 255)


# ─── Helpers ──────────────────────────────────────────────────────────────────

def _feet(value: float) -> str:
    """Entered dimension as typed: 8 -> 8', 7.123456 -> 7.123456'."""
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return text + "'"


def _sq_ft(value: float) -> str:
    return f"{format_area(value)} sq ft"


def _styles() -> dict:
    base = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "AreaTitle", parent=base["Heading1"], fontSize=20,
            alignment=TA_CENTER, spaceAfter=12,
        ),
        "project": ParagraphStyle(
            "AreaProject", parent=base["Heading2"], fontSize=14, spaceAfter=4,
        ),
        "section": ParagraphStyle(
            "AreaSection", parent=base["Heading2"], fontSize=16,
            spaceBefore=12, spaceAfter=8,
        ),
        "body": ParagraphStyle(
            "AreaBody", parent=base["Normal"], fontSize=11, spaceAfter=3,
        ),
        "cell": ParagraphStyle(
            "AreaCell", parent=base["Normal"], fontSize=9, leading=11,
        ),
    }


def _details_block(details: ProjectDetails, st: dict) -> list:
    story = []
    if details.project_name:
        story.append(Paragraph(f"Project: {escape(details.project_name)}", st["project"]))
    for label, value in [
        ("Client",     details.client_name),
        ("Address",    details.client_address),
        ("Contractor", details.contractor_name),
        ("Phone",      details.contractor_phone),
    ]:
        if value:
            story.append(Paragraph(f"{label}: {escape(value)}", st["body"]))
    story.append(Spacer(1, 3 * mm))
    story.append(Paragraph(
        f"Generated on: {datetime.today().strftime('%d %b %Y')}", st["body"]))
    story.append(Spacer(1, 8 * mm))
    return story


def _summary_table(report: ProjectReport, st: dict) -> Table:
    data = [["Room Name", "Wall Area", "Openings Area", "Ceiling Area",
             "Running Feet", "Net Total"]]
    for room, s in report.rooms:
        data.append([
            Paragraph(escape(room.name), st["cell"]),
            _sq_ft(s.total_wall_area),
            _sq_ft(s.total_openings_area),
            _sq_ft(s.ceiling_area),
            _sq_ft(s.running_feet_area),
            _sq_ft(s.net_area),
        ])
    data.append(["PROJECT TOTAL", "", "", "", "", _sq_ft(report.project_total)])

    table = Table(data, colWidths=[45 * mm, 27 * mm, 29 * mm, 27 * mm, 27 * mm, 30 * mm],
                  repeatRows=1)
    style = [
        ("BACKGROUND",    (0, 0), (-1, 0), _HEADER_BG),
        ("TEXTCOLOR",     (0, 0), (-1, 0), colors.white),
        ("FONTNAME",      (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE",      (0, 0), (-1, -1), 9),
        ("ALIGN",         (1, 0), (-1, -1), "CENTER"),
        ("VALIGN",        (0, 0), (-1, -1), "MIDDLE"),
        ("GRID",          (0, 0), (-1, -1), 0.5, _GRID),
        ("FONTNAME",      (5, 1), (5, -1), "Helvetica-Bold"),
        ("BACKGROUND",    (0, -1), (-1, -1), _TOTAL_BG),
        ("FONTNAME",      (0, -1), (-1, -1), "Helvetica-Bold"),
        ("TOPPADDING",    (0, 0), (-1, -1), 4),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
    ]
    for i in range(2, len(data) - 1, 2):
        style.append(("BACKGROUND", (0, i), (-1, i), _ALT_BG))
    table.setStyle(TableStyle(style))
    return table


def _detail_rows(room: Room, net_area: float, st: dict) -> tuple[list, list]:
    """Rows for one room plus the style commands for its header and total."""
    rows: list = [[Paragraph(f"<b>{escape(room.name)}</b>", st["cell"]), "", "", "", "", ""]]
    marks = [("room", 0)]

    for i, c in enumerate(room.ceilings, 1):
        rows.append([f"  Ceiling {i}", _feet(c.height), _feet(c.width),
                     str(c.quantity), _sq_ft(rectangle_area(c)), "Ceiling"])
    for i, w in enumerate(room.walls, 1):
        rows.append([f"  Wall {i}", _feet(w.height), _feet(w.width),
                     str(w.quantity), _sq_ft(rectangle_area(w)), "Wall"])
    for i, o in enumerate(room.openings, 1):
        rows.append([f"  {o.type.label} {i}", _feet(o.height), _feet(o.width),
                     str(o.quantity), _sq_ft(rectangle_area(o)), "Opening (Deducted)"])
    for i, rf in enumerate(room.running_feet, 1):
        rows.append([f"  Running Feet {i}", _feet(rf.length), "-",
                     str(rf.quantity), _sq_ft(running_feet_area(rf)), "Running Feet"])

    marks.append(("net", len(rows)))
    rows.append([Paragraph(f"<b>{escape(room.name)} Total</b>", st["cell"]),
                 "", "", "", _sq_ft(net_area), "Net Area"])
    rows.append(["", "", "", "", "", ""])
    return rows, marks


def _detail_table(report: ProjectReport, st: dict) -> Table:
    data  = [["Item", "Height/Length", "Width", "Quantity", "Area", "Type"]]
    style = [
        ("BACKGROUND",    (0, 0), (-1, 0), _HEADER_BG),
        ("TEXTCOLOR",     (0, 0), (-1, 0), colors.white),
        ("FONTNAME",      (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE",      (0, 0), (-1, -1), 9),
        ("ALIGN",         (1, 0), (3, -1), "CENTER"),
        ("ALIGN",         (4, 1), (4, -1), "RIGHT"),
        ("ALIGN",         (5, 0), (5, -1), "CENTER"),
        ("VALIGN",        (0, 0), (-1, -1), "MIDDLE"),
        ("GRID",          (0, 0), (-1, -1), 0.5, _GRID),
        ("TOPPADDING",    (0, 0), (-1, -1), 3),
        ("BOTTOMPADDING", (0, 0), (-1, -1), 3),
    ]

    for room, s in report.rooms:
        offset = len(data)
        rows, marks = _detail_rows(room, s.net_area, st)
        data.extend(rows)
        for kind, idx in marks:
            r = offset + idx
            if kind == "room":
                style.append(("BACKGROUND", (0, r), (-1, r), _ROOM_BG))
                style.append(("SPAN", (0, r), (-1, r)))
            else:
                style.append(("BACKGROUND", (0, r), (-1, r), _NET_BG))
                style.append(("FONTNAME", (4, r), (4, r), "Helvetica-Bold"))

    table = Table(data, colWidths=[42 * mm, 27 * mm, 22 * mm, 20 * mm, 32 * mm, 37 * mm],
                  repeatRows=1)
    table.setStyle(TableStyle(style))
    return table


# ─── Public API ───────────────────────────────────────────────────────────────

def build_pdf_report(
    rooms:           Iterable[Room],
    project_details: ProjectDetails | None = None,
) -> bytes:
    """Render the report and return the raw PDF bytes."""
    details = project_details or ProjectDetails()
    report  = build_project_report(rooms)
    st      = _styles()

    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=letter,
        leftMargin=15 * mm,
        rightMargin=15 * mm,
        topMargin=15 * mm,
        bottomMargin=15 * mm,
        title=f"{REPORT_TITLE} — {details.project_name}" if details.project_name else REPORT_TITLE,
        author=details.contractor_name,
        subject="Net wall / ceiling surface area",
        creator="Wall Surface Area Calculator",
    )

    story: list = [Paragraph(REPORT_TITLE, st["title"])]
    story += _details_block(details, st)
    story.append(_summary_table(report, st))

    if report.rooms:
        story.append(Paragraph("Detailed Measurements Breakdown", st["section"]))
        story.append(_detail_table(report, st))

    doc.build(story)
    buf.seek(0)
    return buf.read()


def export_to_pdf(
    rooms:           Iterable[Room],
    output_path:     str | Path,
    project_details: ProjectDetails | None = None,
) -> str:
    """
    Write the PDF report to disk.

    Args:
        rooms:           Rooms to export, in display order.
        output_path:     Target file, or an existing directory in which case
                         the file is named from the project details.
        project_details: Printed in the header block.

    Returns:
        Path of the written file.
    """
    details = project_details or ProjectDetails()
    out = Path(output_path)
    if out.is_dir():
        out = out / details.export_filename("pdf")
    out.parent.mkdir(parents=True, exist_ok=True)

    with open(out, "wb") as f:
        f.write(build_pdf_report(rooms, details))

    logger.info(f"PDF saved: {out}")
    return str(out)
