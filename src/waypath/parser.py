"""
Parser module for editor map files.

Handles parsing of the editor's JSON export into a MapSnapshot. A map file
looks like:

    {
        "version": 1,
        "objects": [
            {"id": 1, "type": "rectangle", "mapType": "corridor",
             "x": 200, "y": 100, "w": 400, "h": 20,
             "objectId": "main_corridor", "extra": {"rotation": 15}},
            {"id": 5, "type": "circle", "mapType": "warppoint",
             "x": 250, "y": 100, "w": 16, "h": 16,
             "objectId": "stairs_a", "extra": {"portalId": "P1"}}
        ]
    }

Coordinates are the top-left corner of each object's bounds. Waypoints are
placed at the center of their bounds. Objects of other map types (images,
text, plain drawings) are ignored.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

from .models import MapSnapshot, Rect, Waypoint, WaypointKind


class MapParseError(ValueError):
    """Raised when map parsing fails."""

    pass


# Sample map shipped with the viewer: an L-shaped pair of corridors, two
# waypoints and a wall partially covering the main corridor.
SAMPLE_MAP: Dict[str, Any] = {
    "version": 1,
    "objects": [
        {
            "id": 1, "type": "rectangle", "mapType": "corridor",
            "x": 200, "y": 100, "w": 400, "h": 20,
            "color": "#f39c12", "label": "", "objectId": "main_corridor",
            "extra": None,
        },
        {
            "id": 2, "type": "rectangle", "mapType": "corridor",
            "x": 200, "y": 100, "w": 20, "h": 200,
            "color": "#f39c12", "label": "", "objectId": "side_corridor",
            "extra": None,
        },
        {
            "id": 3, "type": "circle", "mapType": "waypoint",
            "x": 250, "y": 100, "w": 16, "h": 16,
            "color": "#e74c3c", "label": "", "objectId": "start",
            "extra": None,
        },
        {
            "id": 4, "type": "circle", "mapType": "waypoint",
            "x": 550, "y": 100, "w": 16, "h": 16,
            "color": "#e74c3c", "label": "", "objectId": "end",
            "extra": None,
        },
        {
            "id": 5, "type": "rectangle", "mapType": "wall",
            "x": 300, "y": 80, "w": 100, "h": 20,
            "color": "#2c3e50", "label": "", "objectId": "wall1",
            "extra": None,
        },
    ],
}


class MapParser:
    """Parses editor map data into corridors, walls and waypoints."""

    def parse(self, data: Union[str, Dict[str, Any]]) -> MapSnapshot:
        """
        Parse map data.

        Args:
            data: Map as a JSON string or an already decoded dict

        Returns:
            MapSnapshot with corridors, walls and waypoints in file order

        Raises:
            MapParseError: If the data is not a valid map
        """
        if isinstance(data, str):
            try:
                data = json.loads(data)
            except json.JSONDecodeError as e:
                raise MapParseError(f"Invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise MapParseError("Map data must be a JSON object")

        objects = data.get("objects")
        if not isinstance(objects, list):
            raise MapParseError("Map data must contain an 'objects' list")

        snapshot = MapSnapshot(version=data.get("version", 1))

        for position, obj in enumerate(objects):
            if not isinstance(obj, dict):
                raise MapParseError(f"Object {position}: expected an object")

            map_type = obj.get("mapType")
            if map_type == "corridor":
                snapshot.corridors.append(self._parse_rect(obj, position))
            elif map_type == "wall":
                rect = self._parse_rect(obj, position)
                # Walls are always axis-aligned
                snapshot.walls.append(
                    Rect(rect.id, rect.x, rect.y, rect.width, rect.height)
                )
            elif map_type in (WaypointKind.WAYPOINT.value, WaypointKind.PORTAL.value):
                snapshot.waypoints.append(self._parse_waypoint(obj, position))

        return snapshot

    def _object_id(self, obj: Dict[str, Any], position: int) -> str:
        object_id = obj.get("objectId")
        if object_id:
            return str(object_id)
        if obj.get("id") is not None:
            return str(obj["id"])
        return str(position)

    def _number(self, obj: Dict[str, Any], key: str, position: int) -> float:
        value = obj.get(key)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise MapParseError(
                f"Object {position}: '{key}' must be a number, got {value!r}"
            )
        return value

    def _extra(self, obj: Dict[str, Any]) -> Dict[str, Any]:
        extra = obj.get("extra")
        return extra if isinstance(extra, dict) else {}

    def _parse_rect(self, obj: Dict[str, Any], position: int) -> Rect:
        rotation = self._extra(obj).get("rotation") or 0
        if isinstance(rotation, bool) or not isinstance(rotation, (int, float)):
            raise MapParseError(
                f"Object {position}: rotation must be a number, got {rotation!r}"
            )
        return Rect(
            id=self._object_id(obj, position),
            x=self._number(obj, "x", position),
            y=self._number(obj, "y", position),
            width=self._number(obj, "w", position),
            height=self._number(obj, "h", position),
            rotation=rotation,
        )

    def _parse_waypoint(self, obj: Dict[str, Any], position: int) -> Waypoint:
        x = self._number(obj, "x", position)
        y = self._number(obj, "y", position)
        width = self._number(obj, "w", position)
        height = self._number(obj, "h", position)
        portal_id = self._extra(obj).get("portalId") or None

        return Waypoint(
            id=self._object_id(obj, position),
            x=x + width / 2,
            y=y + height / 2,
            label=obj.get("label") or "",
            kind=WaypointKind(obj["mapType"]),
            portal_group_id=str(portal_id) if portal_id is not None else None,
        )


def parse_map(data: Union[str, Dict[str, Any]]) -> MapSnapshot:
    """
    Convenience function to parse map data.

    Args:
        data: Map as a JSON string or decoded dict

    Returns:
        MapSnapshot
    """
    return MapParser().parse(data)


def load_map(filename: Union[str, Path]) -> MapSnapshot:
    """
    Load and parse a map file.

    Raises:
        MapParseError: If the file cannot be read or is not a valid map
    """
    try:
        text = Path(filename).read_text(encoding="utf-8")
    except OSError as e:
        raise MapParseError(f"Cannot read map file {filename}: {e}") from e
    return parse_map(text)
