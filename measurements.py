"""
measurements.py
───────────────
Record types for the wall surface area calculator: walls, ceilings,
door / window openings, running-feet runs, rooms and project details.

All dimensions are in feet. Records are plain dataclasses; validation of
raw user input happens in input_validator.py before a record is built.

Usage:
    from measurements import Room, Wall, Opening, OpeningType, RunningFeet

    room = Room(name="Kitchen")
    room.walls.append(Wall(height=8, width=12))
    room.openings.append(Opening(height=7, width=3, type=OpeningType.DOOR))
"""

from __future__ import annotations
import re
import uuid
from dataclasses import dataclass, field, asdict
from enum import Enum


def new_id() -> str:
    """Fresh identifier for a room or measurement entry."""
    return uuid.uuid4().hex


# ─── Enums ────────────────────────────────────────────────────────────────────

class OpeningType(str, Enum):
    DOOR   = "door"
    WINDOW = "window"

    @property
    def label(self) -> str:
        return self.value.title()


# ─── Measurement entries ──────────────────────────────────────────────────────

@dataclass
class Wall:
    """`quantity` identical rectangular segments. Also used for ceilings."""
    height:   float
    width:    float
    quantity: int = 1
    id:       str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return asdict(self)


# Ceilings share the wall shape; a room keeps them in a separate list.
Ceiling = Wall


@dataclass
class Opening:
    """A door or window deducted from the wall area."""
    height:   float
    width:    float
    type:     OpeningType = OpeningType.DOOR
    quantity: int = 1
    id:       str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        d = asdict(self)
        d["type"] = self.type.value
        return d


@dataclass
class RunningFeet:
    """A linear run billed by the foot; contributes length × quantity."""
    length:   float
    quantity: int = 1
    id:       str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return asdict(self)


# ─── Room / project ───────────────────────────────────────────────────────────

@dataclass
class Room:
    name:         str
    walls:        list[Wall]        = field(default_factory=list)
    openings:     list[Opening]     = field(default_factory=list)
    ceilings:     list[Ceiling]     = field(default_factory=list)
    running_feet: list[RunningFeet] = field(default_factory=list)
    id:           str               = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return {
            "id":           self.id,
            "name":         self.name,
            "walls":        [w.to_dict() for w in self.walls],
            "openings":     [o.to_dict() for o in self.openings],
            "ceilings":     [c.to_dict() for c in self.ceilings],
            "running_feet": [rf.to_dict() for rf in self.running_feet],
        }


@dataclass
class ProjectDetails:
    """Free-text metadata printed on exported reports."""
    project_name:     str = ""
    client_name:      str = ""
    client_address:   str = ""
    contractor_name:  str = ""
    contractor_phone: str = ""

    def to_dict(self) -> dict:
        return asdict(self)

    def export_filename(self, extension: str) -> str:
        """e.g. "Smith_Remodel_calculation.pdf"; generic name when unnamed."""
        ext = extension.lstrip(".")
        if self.project_name:
            return f"{re.sub(r'[^a-zA-Z0-9]', '_', self.project_name)}_calculation.{ext}"
        return f"wall-area-calculation.{ext}"
