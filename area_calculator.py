"""
area_calculator.py
──────────────────
Net installable surface area per room and across a project.

    net = max(0, walls − openings + ceilings + running feet)

Every call recomputes from the room's current entries; nothing is cached.
format_area() is the one formatting rule shared by the UI and all exports.

Usage:
    from area_calculator import calculate_room_area, calculate_project_total, format_area

    summary = calculate_room_area(room)
    print(format_area(summary.net_area))            # "185.00"
    print(format_area(calculate_project_total(rooms)))
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Iterable

from measurements import Room, Wall, Opening, RunningFeet


# ─── Output types ─────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CalculationSummary:
    total_wall_area:     float
    total_openings_area: float
    ceiling_area:        float
    running_feet_area:   float
    net_area:            float   # clamped at zero

    def to_dict(self) -> dict:
        d = asdict(self)
        d.update({f"{k}_formatted": format_area(v) for k, v in asdict(self).items()})
        return d


@dataclass
class ProjectReport:
    rooms:         list[tuple[Room, CalculationSummary]]
    project_total: float

    # ── Formatted summary ────────────────────────────────────────────────────
    def summary(self) -> str:
        lines = [
            "═" * 60,
            "  WALL SURFACE AREA — PROJECT SUMMARY",
            "═" * 60,
        ]
        for room, s in self.rooms:
            lines += [
                f"  {room.name}",
                f"    Walls          : {format_area(s.total_wall_area):>10} sq ft",
                f"    Openings       : {format_area(s.total_openings_area):>10} sq ft",
                f"    Ceilings       : {format_area(s.ceiling_area):>10} sq ft",
                f"    Running feet   : {format_area(s.running_feet_area):>10} sq ft",
                f"    Net            : {format_area(s.net_area):>10} sq ft",
                "─" * 60,
            ]
        n = len(self.rooms)
        lines += [
            f"  Total project area ({n} room{'s' if n != 1 else ''}) : "
            f"{format_area(self.project_total)} sq ft",
            "═" * 60,
        ]
        return "\n".join(lines)

    def to_dict(self) -> dict:
        """Serialise to a plain dict (e.g. for JSON API response)."""
        return {
            "project_total":           self.project_total,
            "project_total_formatted": format_area(self.project_total),
            "rooms": [
                {
                    "id":      room.id,
                    "name":    room.name,
                    "counts": {
                        "walls":        len(room.walls),
                        "openings":     len(room.openings),
                        "ceilings":     len(room.ceilings),
                        "running_feet": len(room.running_feet),
                    },
                    "summary": s.to_dict(),
                }
                for room, s in self.rooms
            ],
        }


# ─── Per-entry areas ──────────────────────────────────────────────────────────

def rectangle_area(entry: Wall | Opening) -> float:
    """Walls, ceilings and openings: height × width × quantity."""
    return entry.height * entry.width * entry.quantity


def running_feet_area(entry: RunningFeet) -> float:
    return entry.length * entry.quantity


# ─── Engine ───────────────────────────────────────────────────────────────────

def calculate_room_area(room: Room) -> CalculationSummary:
    total_wall_area     = sum((rectangle_area(w)    for w  in room.walls),        0.0)
    total_openings_area = sum((rectangle_area(o)    for o  in room.openings),     0.0)
    ceiling_area        = sum((rectangle_area(c)    for c  in room.ceilings),     0.0)
    rf_area             = sum((running_feet_area(r) for r  in room.running_feet), 0.0)

    net_area = max(0.0, total_wall_area - total_openings_area + ceiling_area + rf_area)

    return CalculationSummary(
        total_wall_area=total_wall_area,
        total_openings_area=total_openings_area,
        ceiling_area=ceiling_area,
        running_feet_area=rf_area,
        net_area=net_area,
    )


def calculate_project_total(rooms: Iterable[Room]) -> float:
    total = 0.0
    for room in rooms:
        total += calculate_room_area(room).net_area
    return total


def build_project_report(rooms: Iterable[Room]) -> ProjectReport:
    pairs = [(room, calculate_room_area(room)) for room in rooms]
    total = 0.0
    for _, s in pairs:
        total += s.net_area
    return ProjectReport(rooms=pairs, project_total=total)


def format_area(value: float) -> str:
    """Two fixed decimals, no separators: 3 -> "3.00"."""
    return f"{value:.2f}"
