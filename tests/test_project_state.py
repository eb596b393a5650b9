"""Tests for the in-memory project container."""

from __future__ import annotations

import pytest

from measurements import OpeningType
from input_validator import MeasurementError
from project_state import ProjectState, EntityNotFoundError, ENTRY_KINDS


@pytest.fixture
def state() -> ProjectState:
    return ProjectState()


# --- Rooms ---


def test_new_room_is_empty_and_numbered(state):
    first  = state.add_room()
    second = state.add_room()

    assert first.name == "Room 1"
    assert second.name == "Room 2"
    assert first.walls == first.openings == first.ceilings == first.running_feet == []
    assert first.id != second.id


def test_add_room_with_name(state):
    assert state.add_room("  Kitchen ").name == "Kitchen"
    assert state.add_room("   ").name == "Room 2"


def test_states_are_independent():
    a, b = ProjectState(), ProjectState()
    a.add_room()
    assert b.rooms == []


def test_rename_room(state):
    room = state.add_room()
    state.rename_room(room.id, "Master Bedroom")
    assert room.name == "Master Bedroom"


def test_rename_to_blank_keeps_name(state):
    room = state.add_room("Den")
    state.rename_room(room.id, "   ")
    assert room.name == "Den"


def test_room_id_stable_across_edits(state):
    room = state.add_room()
    room_id = room.id
    state.rename_room(room_id, "Office")
    state.add_entry(room_id, "walls", {"height": 8, "width": 10})
    assert state.get_room(room_id).id == room_id


def test_remove_room_cascades(state):
    room = state.add_room()
    wall = state.add_entry(room.id, "walls", {"height": 8, "width": 10})
    state.remove_room(room.id)

    assert state.rooms == []
    with pytest.raises(EntityNotFoundError):
        state.get_entry(room.id, "walls", wall.id)


def test_unknown_room(state):
    with pytest.raises(EntityNotFoundError):
        state.get_room("nope")
    with pytest.raises(LookupError):
        state.remove_room("nope")


def test_room_ids_not_reused(state):
    seen = set()
    for _ in range(20):
        room = state.add_room()
        assert room.id not in seen
        seen.add(room.id)
        state.remove_room(room.id)


# --- Entries ---


def test_add_each_kind(state):
    room = state.add_room()
    state.add_entry(room.id, "walls", {"height": "8", "width": "12"})
    state.add_entry(room.id, "openings", {"height": 7, "width": 3, "type": "door"})
    state.add_entry(room.id, "ceilings", {"height": 10, "width": 10})
    state.add_entry(room.id, "running_feet", {"length": 5, "quantity": "2"})

    assert state.room_summary(room.id).net_area == pytest.approx(185.0)
    assert state.project_total() == pytest.approx(185.0)


def test_rejected_entry_is_not_added(state):
    room = state.add_room()
    with pytest.raises(MeasurementError):
        state.add_entry(room.id, "walls", {"height": 8, "width": 0})
    with pytest.raises(MeasurementError):
        state.add_entry(room.id, "running_feet", {"length": "-5"})
    assert room.walls == [] and room.running_feet == []


def test_bad_quantity_defaults_to_one(state):
    room = state.add_room()
    wall = state.add_entry(room.id, "walls", {"height": 8, "width": 12, "quantity": "lots"})
    assert wall.quantity == 1


def test_unknown_kind(state):
    room = state.add_room()
    with pytest.raises(MeasurementError):
        state.add_entry(room.id, "floors", {"height": 8, "width": 12})


def test_default_wall_height_from_first_wall(state):
    assert state.default_wall_height is None

    first  = state.add_room()
    second = state.add_room()
    state.add_entry(second.id, "walls", {"height": 9, "width": 12})
    assert state.default_wall_height == 9

    wall = state.add_entry(first.id, "walls", {"width": 10})
    assert wall.height == 9
    # first room now holds the project's first wall
    assert state.default_wall_height == 9


def test_wall_without_height_and_no_default_is_rejected(state):
    room = state.add_room()
    with pytest.raises(MeasurementError):
        state.add_entry(room.id, "walls", {"width": 10})


def test_update_entry(state):
    room    = state.add_room()
    opening = state.add_entry(room.id, "openings", {"height": 7, "width": 3})
    state.update_entry(room.id, "openings", opening.id,
                       {"type": "window", "quantity": "3", "width": "4"})

    assert opening.type is OpeningType.WINDOW
    assert opening.quantity == 3
    assert opening.width == 4.0
    assert opening.height == 7


def test_update_entry_invalid_leaves_entry_untouched(state):
    room = state.add_room()
    wall = state.add_entry(room.id, "walls", {"height": 8, "width": 12})
    with pytest.raises(MeasurementError):
        state.update_entry(room.id, "walls", wall.id, {"width": 20, "height": 0})
    assert (wall.height, wall.width) == (8, 12)


def test_update_entry_unknown_field(state):
    room = state.add_room()
    rf   = state.add_entry(room.id, "running_feet", {"length": 5})
    with pytest.raises(MeasurementError):
        state.update_entry(room.id, "running_feet", rf.id, {"width": 2})


def test_update_quantity_blank_defaults(state):
    room = state.add_room()
    wall = state.add_entry(room.id, "walls", {"height": 8, "width": 12, "quantity": 4})
    state.update_entry(room.id, "walls", wall.id, {"quantity": ""})
    assert wall.quantity == 1


def test_remove_entry(state):
    room = state.add_room()
    keep = state.add_entry(room.id, "ceilings", {"height": 10, "width": 10})
    drop = state.add_entry(room.id, "ceilings", {"height": 5, "width": 5})
    state.remove_entry(room.id, "ceilings", drop.id)

    assert room.ceilings == [keep]
    with pytest.raises(EntityNotFoundError):
        state.remove_entry(room.id, "ceilings", drop.id)


def test_summary_recomputed_after_edit(state):
    room = state.add_room()
    wall = state.add_entry(room.id, "walls", {"height": 8, "width": 10})
    assert state.room_summary(room.id).net_area == 80
    state.update_entry(room.id, "walls", wall.id, {"quantity": 2})
    assert state.room_summary(room.id).net_area == 160


def test_entry_kinds():
    assert set(ENTRY_KINDS) == {"walls", "openings", "ceilings", "running_feet"}


# --- Details / report ---


def test_update_details(state):
    details = state.update_details({"project_name": "Smith Remodel", "client_name": None})
    assert details.project_name == "Smith Remodel"
    assert details.client_name == ""


def test_update_details_unknown_field(state):
    with pytest.raises(MeasurementError):
        state.update_details({"budget": "1000"})


def test_report(populated_state):
    report = populated_state.report()
    assert len(report.rooms) == 2
    assert report.project_total == pytest.approx(370.0)


def test_update_entry_rejects_overflowing_area(state):
    room = state.add_room()
    wall = state.add_entry(room.id, "walls", {"height": 1e200, "width": 1})
    with pytest.raises(MeasurementError):
        state.update_entry(room.id, "walls", wall.id, {"width": 1e200})
    assert wall.width == 1
    assert state.project_total() == pytest.approx(1e200)
