"""
project_state.py
────────────────
In-memory project: the list of rooms plus project details.

The state is owned by whoever creates it (the Flask app, a test, a script)
and is passed explicitly; nothing here is module-level. Areas are never
stored on the state, they are recomputed by area_calculator on each query.

Usage:
    from project_state import ProjectState

    state = ProjectState()
    room  = state.add_room()                       # "Room 1"
    state.add_entry(room.id, "walls", {"height": 8, "width": 12})
    state.add_entry(room.id, "openings", {"height": 7, "width": 3, "type": "door"})
    print(state.report().summary())
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field, fields, replace

from measurements import Room, Wall, Opening, RunningFeet, ProjectDetails
from area_calculator import (
    CalculationSummary, ProjectReport,
    calculate_room_area, calculate_project_total, build_project_report,
)
from input_validator import (
    MeasurementError, BUILDERS, build_entry, check_area,
    parse_dimension, parse_quantity, parse_opening_type, clean_room_name,
)

logger = logging.getLogger(__name__)

ENTRY_KINDS = tuple(BUILDERS)

# Editable fields per collection kind
_FIELDS = {
    "walls":        ("height", "width", "quantity"),
    "openings":     ("height", "width", "type", "quantity"),
    "ceilings":     ("height", "width", "quantity"),
    "running_feet": ("length", "quantity"),
}


class EntityNotFoundError(LookupError):
    """No room or entry with the given id."""


def _check_kind(kind: str) -> str:
    if kind not in ENTRY_KINDS:
        raise MeasurementError(
            f"Unknown measurement kind '{kind}'. Must be one of: {list(ENTRY_KINDS)}"
        )
    return kind


def _parse_field(name: str, value):
    if name == "quantity":
        return parse_quantity(value)
    if name == "type":
        return parse_opening_type(value)
    return parse_dimension(value, name)


@dataclass
class ProjectState:
    rooms:   list[Room]     = field(default_factory=list)
    details: ProjectDetails = field(default_factory=ProjectDetails)

    # ── Rooms ────────────────────────────────────────────────────────────────
    def add_room(self, name: str | None = None) -> Room:
        room = Room(name=clean_room_name(name) or f"Room {len(self.rooms) + 1}")
        self.rooms.append(room)
        logger.info(f"Added room '{room.name}' ({room.id})")
        return room

    def get_room(self, room_id: str) -> Room:
        for room in self.rooms:
            if room.id == room_id:
                return room
        raise EntityNotFoundError(f"Room '{room_id}' not found.")

    def rename_room(self, room_id: str, name) -> Room:
        """Blank names are ignored; the room keeps its current name."""
        room = self.get_room(room_id)
        cleaned = clean_room_name(name)
        if cleaned:
            room.name = cleaned
        return room

    def remove_room(self, room_id: str) -> Room:
        room = self.get_room(room_id)
        self.rooms.remove(room)
        logger.info(f"Removed room '{room.name}' ({room.id})")
        return room

    # ── Measurement entries ──────────────────────────────────────────────────
    @property
    def default_wall_height(self) -> float | None:
        """Height of the first wall entered in the project, if any."""
        for room in self.rooms:
            if room.walls:
                return room.walls[0].height
        return None

    def entries(self, room_id: str, kind: str) -> list:
        return getattr(self.get_room(room_id), _check_kind(kind))

    def add_entry(self, room_id: str, kind: str, values: dict) -> Wall | Opening | RunningFeet:
        entries = self.entries(room_id, kind)
        values  = dict(values)
        if kind == "walls" and values.get("height") in (None, ""):
            if self.default_wall_height is not None:
                values["height"] = self.default_wall_height
        try:
            entry = build_entry(kind, values)
        except MeasurementError as e:
            logger.warning(f"Rejected {kind} entry for room {room_id}: {e}")
            raise
        entries.append(entry)
        logger.debug(f"Added {kind} entry {entry.id} to room {room_id}")
        return entry

    def get_entry(self, room_id: str, kind: str, entry_id: str):
        for entry in self.entries(room_id, kind):
            if entry.id == entry_id:
                return entry
        raise EntityNotFoundError(f"Entry '{entry_id}' not found in {kind}.")

    def update_entry(self, room_id: str, kind: str, entry_id: str, values: dict):
        """Validate every given field first; the entry is left untouched on error."""
        entry = self.get_entry(room_id, kind, entry_id)

        unknown = set(values) - set(_FIELDS[kind])
        if unknown:
            raise MeasurementError(f"Unknown fields for {kind}: {sorted(unknown)}")

        parsed = {name: _parse_field(name, value) for name, value in values.items()}
        check_area(replace(entry, **parsed))
        for name, value in parsed.items():
            setattr(entry, name, value)
        logger.debug(f"Updated {kind} entry {entry_id}: {sorted(parsed)}")
        return entry

    def remove_entry(self, room_id: str, kind: str, entry_id: str):
        entry = self.get_entry(room_id, kind, entry_id)
        self.entries(room_id, kind).remove(entry)
        logger.debug(f"Removed {kind} entry {entry_id}")
        return entry

    # ── Project details ──────────────────────────────────────────────────────
    def update_details(self, values: dict) -> ProjectDetails:
        known = {f.name for f in fields(ProjectDetails)}
        unknown = set(values) - known
        if unknown:
            raise MeasurementError(f"Unknown project fields: {sorted(unknown)}")
        for name, value in values.items():
            setattr(self.details, name, "" if value is None else str(value))
        return self.details

    # ── Derived figures ──────────────────────────────────────────────────────
    def room_summary(self, room_id: str) -> CalculationSummary:
        return calculate_room_area(self.get_room(room_id))

    def project_total(self) -> float:
        return calculate_project_total(self.rooms)

    def report(self) -> ProjectReport:
        return build_project_report(self.rooms)
