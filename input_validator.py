"""
input_validator.py
──────────────────
Turns raw form / JSON entries into measurement records.

Rules:
  • height, width and length must parse to a number > 0, otherwise the
    entry is rejected with MeasurementError.
  • quantity is read as a leading integer ("2.7" → 2). Missing, blank,
    non-numeric or zero input falls back to 1; a negative quantity is
    rejected.
  • Strings are read from their leading number, so "8.5ft" is 8.5.
  • An entry whose area would overflow a float (e.g. a quantity of 10**400)
    is rejected, so the calculator only ever sees finite areas.

Usage:
    from input_validator import build_wall, MeasurementError

    try:
        wall = build_wall(height="8", width="12.5", quantity="")
    except MeasurementError as e:
        print(e)
"""

from __future__ import annotations
import logging
import math
import re

from measurements import Room, Wall, Ceiling, Opening, OpeningType, RunningFeet
from area_calculator import rectangle_area, running_feet_area

logger = logging.getLogger(__name__)

DEFAULT_QUANTITY = 1

_FLOAT_RE = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')
_INT_RE   = re.compile(r'^\s*([+-]?\d+)')


class MeasurementError(ValueError):
    """A raw entry that cannot become a measurement record."""


# ─── Field parsers ────────────────────────────────────────────────────────────

def _leading_float(raw) -> float | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        try:
            return float(raw)
        except OverflowError:
            return None
    if isinstance(raw, str):
        m = _FLOAT_RE.match(raw)
        return float(m.group(1)) if m else None
    return None


def parse_dimension(raw, name: str = "dimension") -> float:
    value = _leading_float(raw)
    if value is None or not math.isfinite(value):
        raise MeasurementError(f"{name} must be a number, got {raw!r}")
    if value <= 0:
        raise MeasurementError(f"{name} must be greater than 0, got {value:g}")
    return value


def parse_quantity(raw=None) -> int:
    if raw is None or isinstance(raw, bool):
        return DEFAULT_QUANTITY
    if isinstance(raw, int):
        q = raw
    elif isinstance(raw, float):
        if not math.isfinite(raw):
            return DEFAULT_QUANTITY
        q = int(raw)
    elif isinstance(raw, str):
        m = _INT_RE.match(raw)
        if not m:
            return DEFAULT_QUANTITY
        try:
            q = int(m.group(1))
        except ValueError:
            raise MeasurementError(f"quantity is too large ({len(raw)} characters)")
    else:
        return DEFAULT_QUANTITY

    if q == 0:
        return DEFAULT_QUANTITY
    if q < 0:
        raise MeasurementError(f"quantity must be at least 1, got {q}")
    try:
        float(q)
    except OverflowError:
        raise MeasurementError(f"quantity is too large ({q.bit_length()} bits)")
    return q


def parse_opening_type(raw=None) -> OpeningType:
    if raw is None or raw == "":
        return OpeningType.DOOR
    if isinstance(raw, OpeningType):
        return raw
    try:
        return OpeningType(str(raw).strip().lower())
    except ValueError:
        valid = [t.value for t in OpeningType]
        raise MeasurementError(f"Invalid opening type '{raw}'. Must be one of: {valid}")


def clean_room_name(raw) -> str | None:
    if raw is None:
        return None
    name = str(raw).strip()
    return name or None


# ─── Record builders ──────────────────────────────────────────────────────────

def check_area(entry):
    """Reject an entry whose area is not a finite number of square feet."""
    if isinstance(entry, RunningFeet):
        area = running_feet_area(entry)
    else:
        area = rectangle_area(entry)
    if not math.isfinite(area):
        raise MeasurementError(f"Entry is too large to calculate: {entry.to_dict()}")
    return entry


def build_wall(height=None, width=None, quantity=None) -> Wall:
    wall = Wall(
        height   = parse_dimension(height, "height"),
        width    = parse_dimension(width, "width"),
        quantity = parse_quantity(quantity),
    )
    return check_area(wall)


def build_ceiling(height=None, width=None, quantity=None) -> Ceiling:
    return build_wall(height=height, width=width, quantity=quantity)


def build_opening(height=None, width=None, type=None, quantity=None) -> Opening:
    opening = Opening(
        height   = parse_dimension(height, "height"),
        width    = parse_dimension(width, "width"),
        type     = parse_opening_type(type),
        quantity = parse_quantity(quantity),
    )
    return check_area(opening)


def build_running_feet(length=None, quantity=None) -> RunningFeet:
    rf = RunningFeet(
        length   = parse_dimension(length, "length"),
        quantity = parse_quantity(quantity),
    )
    return check_area(rf)


BUILDERS = {
    "walls":        build_wall,
    "openings":     build_opening,
    "ceilings":     build_ceiling,
    "running_feet": build_running_feet,
}


def build_entry(kind: str, values: dict):
    """Build one entry of the given collection kind from a raw field dict."""
    try:
        builder = BUILDERS[kind]
    except KeyError:
        raise MeasurementError(
            f"Unknown measurement kind '{kind}'. Must be one of: {list(BUILDERS)}"
        )
    if not isinstance(values, dict):
        raise MeasurementError(f"Each {kind} entry must be an object, got {values!r}")
    try:
        return builder(**values)
    except TypeError as e:
        raise MeasurementError(f"Invalid fields for {kind}: {e}")


def build_room(data: dict, default_name: str = "Room") -> Room:
    """
    Validate a whole room given as nested raw data, e.g. from a JSON request:

        {"name": "Kitchen",
         "walls": [{"height": 8, "width": 12}],
         "openings": [{"height": 7, "width": 3, "type": "door"}],
         "ceilings": [...], "running_feet": [...]}

    Raises MeasurementError on the first rejected entry.
    """
    if not isinstance(data, dict):
        raise MeasurementError(f"Room must be an object, got {data!r}")
    room = Room(name=clean_room_name(data.get("name")) or default_name)
    for kind in BUILDERS:
        raw_entries = data.get(kind) or []
        if not isinstance(raw_entries, list):
            raise MeasurementError(f"'{kind}' must be a list")
        getattr(room, kind).extend(build_entry(kind, e) for e in raw_entries)
    return room
