"""Unit tests for the map parser."""

import json

import pytest

from waypath import (
    SAMPLE_MAP,
    MapParseError,
    MapParser,
    WaypointKind,
    load_map,
    parse_map,
)


def corridor(object_id, x, y, w, h, rotation=None):
    return {
        "id": 1, "type": "rectangle", "mapType": "corridor",
        "x": x, "y": y, "w": w, "h": h, "objectId": object_id,
        "extra": {"rotation": rotation} if rotation is not None else None,
    }


class TestMapParser:
    """Tests for MapParser.parse."""

    def test_sample_map(self):
        snapshot = parse_map(SAMPLE_MAP)
        assert [c.id for c in snapshot.corridors] == ["main_corridor", "side_corridor"]
        assert [w.id for w in snapshot.walls] == ["wall1"]
        assert [w.id for w in snapshot.waypoints] == ["start", "end"]
        assert snapshot.version == 1

    def test_waypoint_at_bounds_center(self):
        snapshot = parse_map(SAMPLE_MAP)
        start = snapshot.get_waypoint("start")
        assert (start.x, start.y) == (258, 108)
        assert start.kind == WaypointKind.WAYPOINT
        assert not start.is_portal

    def test_json_string(self):
        snapshot = MapParser().parse(json.dumps(SAMPLE_MAP))
        assert len(snapshot.corridors) == 2

    def test_rotation(self):
        snapshot = parse_map({"objects": [corridor("c", 0, 0, 100, 20, rotation=45)]})
        assert snapshot.corridors[0].rotation == 45

    def test_wall_rotation_ignored(self):
        data = {
            "objects": [
                {
                    "mapType": "wall", "x": 0, "y": 0, "w": 10, "h": 10,
                    "objectId": "w", "extra": {"rotation": 30},
                }
            ]
        }
        assert parse_map(data).walls[0].rotation == 0

    def test_portal(self):
        data = {
            "objects": [
                {
                    "id": 7, "type": "circle", "mapType": "warppoint",
                    "x": 100, "y": 50, "w": 16, "h": 16,
                    "label": "Stairs", "objectId": "stairs",
                    "extra": {"portalId": "P1"},
                }
            ]
        }
        waypoint = parse_map(data).waypoints[0]
        assert waypoint.kind == WaypointKind.PORTAL
        assert waypoint.portal_group_id == "P1"
        assert waypoint.label == "Stairs"
        assert waypoint.is_portal

    def test_portal_without_group(self):
        data = {
            "objects": [
                {
                    "mapType": "warppoint", "x": 0, "y": 0, "w": 10, "h": 10,
                    "extra": None,
                }
            ]
        }
        waypoint = parse_map(data).waypoints[0]
        assert waypoint.portal_group_id is None
        assert not waypoint.is_portal

    def test_id_fallbacks(self):
        data = {
            "objects": [
                {"id": 42, "mapType": "corridor", "x": 0, "y": 0, "w": 10, "h": 10},
                {"mapType": "corridor", "x": 0, "y": 0, "w": 10, "h": 10},
            ]
        }
        assert [c.id for c in parse_map(data).corridors] == ["42", "1"]

    def test_other_types_ignored(self):
        data = {
            "objects": [
                {"mapType": "image", "x": 0, "y": 0, "w": 10, "h": 10},
                {"type": "text", "x": 0, "y": 0},
            ]
        }
        snapshot = parse_map(data)
        assert snapshot.corridors == []
        assert snapshot.waypoints == []

    def test_invalid_json(self):
        with pytest.raises(MapParseError, match="Invalid JSON"):
            parse_map("{not json")

    def test_not_an_object(self):
        with pytest.raises(MapParseError):
            parse_map("[]")

    def test_missing_objects(self):
        with pytest.raises(MapParseError, match="objects"):
            parse_map({"version": 1})

    def test_non_numeric_coordinate(self):
        data = {"objects": [corridor("c", "10", 0, 100, 20)]}
        with pytest.raises(MapParseError, match="'x' must be a number"):
            parse_map(data)

    def test_bad_rotation(self):
        data = {"objects": [corridor("c", 0, 0, 100, 20, rotation="steep")]}
        with pytest.raises(MapParseError, match="rotation"):
            parse_map(data)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_map({"objects": [42]})


class TestLoadMap:
    """Tests for load_map."""

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "map.json"
        path.write_text(json.dumps(SAMPLE_MAP), encoding="utf-8")
        snapshot = load_map(path)
        assert len(snapshot.waypoints) == 2

    def test_missing_file(self, tmp_path):
        with pytest.raises(MapParseError, match="Cannot read"):
            load_map(tmp_path / "missing.json")
