"""Tests for raw-entry parsing and record builders."""

from __future__ import annotations

import pytest

from measurements import OpeningType, Room, Wall, Ceiling, Opening, RunningFeet
from area_calculator import calculate_room_area
from input_validator import (
    MeasurementError,
    build_entry,
    build_ceiling,
    build_opening,
    build_room,
    build_running_feet,
    build_wall,
    clean_room_name,
    parse_dimension,
    parse_opening_type,
    parse_quantity,
)


# --- parse_dimension ---


@pytest.mark.parametrize("raw,expected", [
    (8, 8.0),
    (7.25, 7.25),
    ("12", 12.0),
    ("  9.5 ", 9.5),
    ("8.5ft", 8.5),
    (".5", 0.5),
    ("1e1", 10.0),
])
def test_parse_dimension_accepts(raw, expected):
    assert parse_dimension(raw) == expected


@pytest.mark.parametrize("raw", [0, -1, "0", "-3.2", "", "abc", None, float("nan"),
                                 float("inf"), True, [8]])
def test_parse_dimension_rejects(raw):
    with pytest.raises(MeasurementError):
        parse_dimension(raw, "height")


def test_parse_dimension_error_names_field():
    with pytest.raises(MeasurementError, match="width"):
        parse_dimension("-2", "width")


def test_measurement_error_is_value_error():
    assert issubclass(MeasurementError, ValueError)


# --- parse_quantity ---


@pytest.mark.parametrize("raw,expected", [
    (None, 1),
    ("", 1),
    ("abc", 1),
    ("0", 1),
    (0, 1),
    ("3", 3),
    (" 4 ", 4),
    ("2.7", 2),
    (2.7, 2),
    (5, 5),
    (float("nan"), 1),
])
def test_parse_quantity(raw, expected):
    assert parse_quantity(raw) == expected


@pytest.mark.parametrize("raw", ["-2", -1])
def test_parse_quantity_rejects_negative(raw):
    with pytest.raises(MeasurementError):
        parse_quantity(raw)


# --- parse_opening_type ---


def test_opening_type_defaults_to_door():
    assert parse_opening_type(None) is OpeningType.DOOR
    assert parse_opening_type("") is OpeningType.DOOR


def test_opening_type_case_insensitive():
    assert parse_opening_type(" Window ") is OpeningType.WINDOW
    assert parse_opening_type(OpeningType.DOOR) is OpeningType.DOOR


def test_opening_type_rejects_unknown():
    with pytest.raises(MeasurementError, match="skylight"):
        parse_opening_type("skylight")


# --- Builders ---


def test_build_wall_from_strings():
    wall = build_wall(height="8", width="12.5", quantity="")
    assert isinstance(wall, Wall)
    assert (wall.height, wall.width, wall.quantity) == (8.0, 12.5, 1)
    assert wall.id


def test_build_wall_missing_width_rejected():
    with pytest.raises(MeasurementError):
        build_wall(height=8)


def test_build_opening():
    o = build_opening(height=7, width=3, type="window", quantity="2")
    assert isinstance(o, Opening)
    assert o.type is OpeningType.WINDOW
    assert o.quantity == 2


def test_build_ceiling_uses_wall_shape():
    ceiling = build_ceiling(height="10", width="10")
    assert isinstance(ceiling, Ceiling)
    assert Room(name="Den", ceilings=[ceiling]).ceilings[0].height == 10.0


def test_build_running_feet():
    rf = build_running_feet(length="5", quantity=2)
    assert isinstance(rf, RunningFeet)
    assert (rf.length, rf.quantity) == (5.0, 2)


def test_ids_are_unique():
    ids = {build_wall(height=8, width=10).id for _ in range(200)}
    assert len(ids) == 200


def test_build_entry_unknown_kind():
    with pytest.raises(MeasurementError, match="floors"):
        build_entry("floors", {"height": 1, "width": 1})


def test_build_entry_unknown_field():
    with pytest.raises(MeasurementError):
        build_entry("running_feet", {"length": 5, "width": 2})


def test_build_entry_requires_mapping():
    with pytest.raises(MeasurementError):
        build_entry("walls", [8, 12])


# --- Rooms ---


def test_build_room_nested():
    room = build_room({
        "name": "  Kitchen ",
        "walls": [{"height": "8", "width": "12"}],
        "openings": [{"height": 7, "width": 3, "type": "door"}],
        "ceilings": [{"height": 10, "width": 10}],
        "running_feet": [{"length": 5, "quantity": 2}],
    })
    assert room.name == "Kitchen"
    assert len(room.walls) == len(room.openings) == len(room.ceilings) == 1
    assert room.running_feet[0].quantity == 2


def test_build_room_default_name_and_empty_lists():
    room = build_room({}, default_name="Room 3")
    assert room.name == "Room 3"
    assert room.walls == [] and room.running_feet == []


def test_build_room_rejects_bad_entry():
    with pytest.raises(MeasurementError):
        build_room({"walls": [{"height": 0, "width": 12}]})


def test_build_room_rejects_non_list():
    with pytest.raises(MeasurementError):
        build_room({"walls": {"height": 8, "width": 12}})


@pytest.mark.parametrize("raw,expected", [
    ("  Den ", "Den"),
    ("", None),
    ("   ", None),
    (None, None),
])
def test_clean_room_name(raw, expected):
    assert clean_room_name(raw) == expected


# --- Oversized entries ---


@pytest.mark.parametrize("raw", [10**400, "1" + "0" * 400])
def test_parse_quantity_rejects_values_beyond_float_range(raw):
    with pytest.raises(MeasurementError, match="too large"):
        parse_quantity(raw)


def test_parse_dimension_rejects_huge_int():
    with pytest.raises(MeasurementError):
        parse_dimension(10**400, "height")


def test_build_wall_with_huge_quantity_rejected():
    with pytest.raises(MeasurementError):
        build_wall(height=8, width=12, quantity="1" + "0" * 400)


@pytest.mark.parametrize("builder,values", [
    (build_running_feet, {"length": "1e308", "quantity": 10}),
    (build_wall,         {"height": 1e200, "width": 1e200}),
    (build_opening,      {"height": 1e300, "width": 10, "quantity": 1e10}),
])
def test_entry_with_non_finite_area_rejected(builder, values):
    with pytest.raises(MeasurementError, match="too large"):
        builder(**values)


def test_large_but_finite_entry_accepted():
    rf = build_running_feet(length="1e300", quantity=10)
    assert calculate_room_area(Room(name="Big", running_feet=[rf])).net_area == pytest.approx(1e301)
