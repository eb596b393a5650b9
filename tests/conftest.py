"""Shared fixtures: the worked-example room used throughout the tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Modules live at the repository root
sys.path.insert(0, str(Path(__file__).parent.parent))

from measurements import Room, Wall, Opening, OpeningType, RunningFeet, ProjectDetails
from project_state import ProjectState


def make_sample_room(name: str = "Living Room") -> Room:
    """8x12 wall, 7x3 door, 10x10 ceiling, 5 ft running feet x2 -> net 185."""
    return Room(
        name=name,
        walls=[Wall(height=8, width=12, quantity=1)],
        openings=[Opening(height=7, width=3, type=OpeningType.DOOR, quantity=1)],
        ceilings=[Wall(height=10, width=10, quantity=1)],
        running_feet=[RunningFeet(length=5, quantity=2)],
    )


@pytest.fixture
def sample_room() -> Room:
    return make_sample_room()


@pytest.fixture
def two_rooms() -> list[Room]:
    return [make_sample_room("Living Room"), make_sample_room("Bedroom, Master")]


@pytest.fixture
def project_details() -> ProjectDetails:
    return ProjectDetails(
        project_name="Smith Remodel",
        client_name="Jane Smith",
        client_address="12 Elm St",
        contractor_name="Acme Drywall",
        contractor_phone="555-0100",
    )


@pytest.fixture
def populated_state(two_rooms, project_details) -> ProjectState:
    return ProjectState(rooms=two_rooms, details=project_details)
