"""
excel_exporter.py
─────────────────
Exports the project to a 2-sheet Excel workbook:
  Sheet 1 — Area Summary  (same columns and TOTAL PROJECT row as the CSV)
  Sheet 2 — Measurements  (every entry per room, with its area)

Cells hold the engine figures rounded the same way format_area() prints
them, formatted "0.00".

Usage:
    from excel_exporter import export_to_excel
    export_to_excel(rooms, "area_schedule.xlsx", project_details)
"""

from __future__ import annotations
import io
import logging
from datetime import datetime
from pathlib import Path
from typing import Iterable

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill, Alignment, Border, Side
from openpyxl.utils import get_column_letter

from measurements import Room, ProjectDetails
from area_calculator import (
    ProjectReport, build_project_report, format_area, rectangle_area, running_feet_area,
)
from csv_exporter import CSV_HEADERS, TOTAL_LABEL

logger = logging.getLogger(__name__)


# ─── Style helpers ────────────────────────────────────────────────────────────

NAVY   = "1F3864"
BLUE   = "4682B4"
LBLUE  = "C8E6FF"
GREEN  = "DCFFDC"
WHITE  = "FFFFFF"
LGREY  = "F0F0F0"

AREA_FORMAT = "0.00"

def _font(size=10, bold=False, color="000000", italic=False):
    return Font(name="Arial", size=size, bold=bold, color=color, italic=italic)

def _fill(hex_col):
    return PatternFill("solid", fgColor=hex_col, start_color=hex_col)

def _align(h="left", v="center", wrap=False):
    return Alignment(horizontal=h, vertical=v, wrap_text=wrap)

def _border(color="BFBFBF"):
    s = Side(style="thin", color=color)
    return Border(left=s, right=s, top=s, bottom=s)

def _set_widths(ws, widths):
    for i, w in enumerate(widths, 1):
        ws.column_dimensions[get_column_letter(i)].width = w

def _title_row(ws, row, ncols, text, bg=NAVY, font_size=12):
    ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=ncols)
    c = ws.cell(row=row, column=1, value=text)
    c.font    = _font(font_size, bold=True, color="FFFFFF")
    c.fill    = _fill(bg)
    c.alignment = _align("center", "center")
    ws.row_dimensions[row].height = 24

def _header_row(ws, row, headers, bg=BLUE):
    for col, h in enumerate(headers, 1):
        c = ws.cell(row=row, column=col, value=h)
        c.font      = _font(9, bold=True, color="FFFFFF")
        c.fill      = _fill(bg)
        c.alignment = _align("center", "center", wrap=True)
        c.border    = _border()
    ws.row_dimensions[row].height = 28

def _data_cell(ws, row, col, value, bg=WHITE, bold=False, align="left"):
    c = ws.cell(row=row, column=col, value=value)
    c.font      = _font(9, bold=bold)
    c.fill      = _fill(bg)
    c.alignment = _align(align, "center")
    c.border    = _border()
    return c

def _area_cell(ws, row, col, value, bg=WHITE, bold=False):
    # Store exactly what format_area() prints
    c = _data_cell(ws, row, col, float(format_area(value)), bg, bold=bold, align="right")
    c.number_format = AREA_FORMAT
    return c

def _subtitle(details: ProjectDetails, date_str: str) -> str:
    parts = [f"{label}: {value}" for label, value in [
        ("Client",     details.client_name),
        ("Address",    details.client_address),
        ("Contractor", details.contractor_name),
        ("Phone",      details.contractor_phone),
    ] if value]
    parts.append(f"Date: {date_str}")
    return "   |   ".join(parts)


# ─── Sheet 1: Area Summary ────────────────────────────────────────────────────

def _write_area_summary(ws, report: ProjectReport, details: ProjectDetails, date_str: str):
    _set_widths(ws, [30, 16, 18, 16, 20, 16])
    NC = len(CSV_HEADERS)

    _title_row(ws, 1, NC, f"Area Summary — {details.project_name or 'Wall Surface Area'}")
    _title_row(ws, 2, NC, _subtitle(details, date_str), bg=BLUE, font_size=9)
    _header_row(ws, 3, CSV_HEADERS)

    row = 4
    for i, (room, s) in enumerate(report.rooms):
        bg = WHITE if i % 2 == 0 else LGREY
        _data_cell(ws, row, 1, room.name, bg)
        for col, value in enumerate([s.total_wall_area, s.total_openings_area,
                                     s.ceiling_area, s.running_feet_area], 2):
            _area_cell(ws, row, col, value, bg)
        _area_cell(ws, row, 6, s.net_area, bg, bold=True)
        row += 1

    for col in range(1, NC + 1):
        _data_cell(ws, row, col, None, LBLUE)
    _data_cell(ws, row, 1, TOTAL_LABEL, LBLUE, bold=True)
    _area_cell(ws, row, NC, report.project_total, LBLUE, bold=True)


# ─── Sheet 2: Measurements ────────────────────────────────────────────────────

def _write_measurements(ws, report: ProjectReport, details: ProjectDetails, date_str: str):
    _set_widths(ws, [28, 16, 12, 10, 16, 22])
    NC = 6

    _title_row(ws, 1, NC, f"Detailed Measurements — {details.project_name or 'Wall Surface Area'}")
    _title_row(ws, 2, NC, _subtitle(details, date_str), bg=BLUE, font_size=9)
    _header_row(ws, 3, ["Item", "Height/Length (ft)", "Width (ft)", "Quantity",
                        "Area (sq ft)", "Type"])

    row = 4
    for room, s in report.rooms:
        ws.merge_cells(start_row=row, start_column=1, end_row=row, end_column=NC)
        c = _data_cell(ws, row, 1, room.name, LGREY, bold=True)
        c.font = _font(10, bold=True)
        row += 1

        items = (
            [(f"Ceiling {i}", e.height, e.width, e.quantity, rectangle_area(e), "Ceiling")
             for i, e in enumerate(room.ceilings, 1)]
            + [(f"Wall {i}", e.height, e.width, e.quantity, rectangle_area(e), "Wall")
               for i, e in enumerate(room.walls, 1)]
            + [(f"{e.type.label} {i}", e.height, e.width, e.quantity, rectangle_area(e),
                "Opening (Deducted)")
               for i, e in enumerate(room.openings, 1)]
            + [(f"Running Feet {i}", e.length, None, e.quantity, running_feet_area(e),
                "Running Feet")
               for i, e in enumerate(room.running_feet, 1)]
        )
        for label, first, second, qty, area, kind in items:
            _data_cell(ws, row, 1, label)
            _data_cell(ws, row, 2, first, align="center")
            _data_cell(ws, row, 3, second if second is not None else "-", align="center")
            _data_cell(ws, row, 4, qty, align="center")
            _area_cell(ws, row, 5, area)
            _data_cell(ws, row, 6, kind, align="center")
            row += 1

        _data_cell(ws, row, 1, f"{room.name} Total", GREEN, bold=True)
        for col in (2, 3, 4):
            _data_cell(ws, row, col, None, GREEN)
        _area_cell(ws, row, 5, s.net_area, GREEN, bold=True)
        _data_cell(ws, row, 6, "Net Area", GREEN, align="center")
        row += 2


# ─── Public API ───────────────────────────────────────────────────────────────

def build_workbook(
    rooms:           Iterable[Room],
    project_details: ProjectDetails | None = None,
) -> Workbook:
    details  = project_details or ProjectDetails()
    report   = build_project_report(rooms)
    date_str = datetime.today().strftime("%d %b %Y")

    wb  = Workbook()
    ws1 = wb.active
    ws1.title = "Area Summary"
    _write_area_summary(ws1, report, details, date_str)

    ws2 = wb.create_sheet("Measurements")
    _write_measurements(ws2, report, details, date_str)

    for ws in [ws1, ws2]:
        ws.freeze_panes = "A4"
        ws.sheet_view.showGridLines = False
    return wb


def export_excel_bytes(
    rooms:           Iterable[Room],
    project_details: ProjectDetails | None = None,
) -> bytes:
    buf = io.BytesIO()
    build_workbook(rooms, project_details).save(buf)
    return buf.getvalue()


def export_to_excel(
    rooms:           Iterable[Room],
    output_path:     str | Path,
    project_details: ProjectDetails | None = None,
) -> str:
    """
    Export the project to a 2-sheet Excel workbook.

    Args:
        rooms:           Rooms to export, in display order.
        output_path:     Output .xlsx file path, or an existing directory in
                         which case the file is named from the project details.
        project_details: Shown in the sheet headers.

    Returns:
        Path of the saved file.
    """
    details = project_details or ProjectDetails()
    out = Path(output_path)
    if out.is_dir():
        out = out / details.export_filename("xlsx")
    out.parent.mkdir(parents=True, exist_ok=True)

    build_workbook(rooms, details).save(str(out))
    logger.info(f"Excel saved: {out}")
    return str(out)
