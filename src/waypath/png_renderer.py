"""
PNG Renderer module for corridor maps.

Renders maps and planned routes as PNG images for previews and debugging:
corridors (rotated), walls, waypoints, portals, routes and the adjustment
connectors of moved endpoints. Portal jumps are left undrawn.
"""

from typing import List, Optional, Sequence, Tuple

from PIL import Image, ImageColor, ImageDraw, ImageFont

from .geometry import world_bounds
from .grid import WalkabilityGrid
from .models import Bounds, MapSnapshot, Path
from .planner import PlannedRoute


class RoutePNGRenderer:
    """Renders maps and routes as PNG images."""

    def __init__(
        self,
        scale: int = 2,  # Pixels per world unit
        margin: int = 20,  # World units around the map
        line_width: int = 3,
        marker_radius: int = 8,
        show_labels: bool = True,
    ):
        self.scale = scale
        self.margin = margin
        self.line_width = line_width
        self.marker_radius = marker_radius
        self.show_labels = show_labels

        # Colors
        self.bg_color = (255, 255, 255)
        self.corridor_fill = (243, 156, 18)
        self.wall_fill = (44, 62, 80)
        self.waypoint_fill = (231, 76, 60)
        self.portal_fill = (147, 51, 234)
        self.portal_outline = (126, 34, 206)
        self.walkable_color = (0, 0, 255)
        self.label_color = (0, 0, 0)

        self._bounds: Optional[Bounds] = None

    @staticmethod
    def route_color(index: int) -> Tuple[int, int, int]:
        """Distinct color for the index-th route (golden-angle hue steps)."""
        hue = int((index * 137.5) % 360)
        return ImageColor.getrgb(f"hsl({hue}, 70%, 50%)")

    def _to_image(self, x: float, y: float) -> Tuple[float, float]:
        return (
            (x - self._bounds.min_x) * self.scale,
            (y - self._bounds.min_y) * self.scale,
        )

    def _draw_dashed_line(
        self,
        draw: ImageDraw.ImageDraw,
        start: Tuple[float, float],
        end: Tuple[float, float],
        fill,
        dash: float = 6,
    ):
        """Draw a dashed line between two image points."""
        dx = end[0] - start[0]
        dy = end[1] - start[1]
        length = (dx * dx + dy * dy) ** 0.5
        if length == 0:
            return
        steps = int(length // dash)
        for i in range(0, steps + 1, 2):
            t0 = i * dash / length
            t1 = min(1.0, (i + 1) * dash / length)
            draw.line(
                [
                    (start[0] + dx * t0, start[1] + dy * t0),
                    (start[0] + dx * t1, start[1] + dy * t1),
                ],
                fill=fill,
                width=max(1, self.scale),
            )

    def _draw_map(self, draw: ImageDraw.ImageDraw, snapshot: MapSnapshot):
        for corridor in snapshot.corridors:
            polygon = [self._to_image(x, y) for x, y in corridor.corners()]
            draw.polygon(polygon, fill=self.corridor_fill)

        for wall in snapshot.walls:
            x1, y1 = self._to_image(wall.x, wall.y)
            x2, y2 = self._to_image(wall.x2, wall.y2)
            draw.rectangle([x1, y1, x2, y2], fill=self.wall_fill)

    def _draw_walkable_cells(self, draw: ImageDraw.ImageDraw, grid: WalkabilityGrid):
        r = max(1, self.scale // 2)
        for cell in grid.cells():
            if cell.walkable:
                x, y = self._to_image(cell.world_x, cell.world_y)
                draw.ellipse([x - r, y - r, x + r, y + r], fill=self.walkable_color)

    def _draw_waypoints(self, draw: ImageDraw.ImageDraw, snapshot: MapSnapshot):
        font = ImageFont.load_default()
        r = self.marker_radius

        for waypoint in snapshot.waypoints:
            x, y = self._to_image(waypoint.x, waypoint.y)
            if waypoint.is_portal:
                draw.ellipse(
                    [x - r, y - r, x + r, y + r],
                    fill=self.portal_fill,
                    outline=self.portal_outline,
                    width=2,
                )
                inner = r // 2
                draw.ellipse(
                    [x - inner, y - inner, x + inner, y + inner], fill=self.bg_color
                )
                text = waypoint.label or waypoint.portal_group_id
            else:
                draw.ellipse([x - r, y - r, x + r, y + r], fill=self.waypoint_fill)
                text = waypoint.label or waypoint.id

            if self.show_labels and text:
                draw.text((x + r + 2, y - r), text, fill=self.label_color, font=font)

    def _draw_path(self, draw: ImageDraw.ImageDraw, path: Path, color):
        """Draw a path, lifting the pen over portal jumps."""
        run: List[Tuple[float, float]] = []
        for i, point in enumerate(path.points):
            if i > 0 and path.is_teleport(i - 1):
                self._flush_run(draw, run, color)
                run = []
            run.append(self._to_image(point.x, point.y))
        self._flush_run(draw, run, color)

        half = self.line_width * self.scale
        for point in (path.points[0], path.points[-1]):
            x, y = self._to_image(point.x, point.y)
            draw.rectangle([x - half, y - half, x + half, y + half], fill=color)

    def _flush_run(self, draw: ImageDraw.ImageDraw, run, color):
        if len(run) >= 2:
            draw.line(
                run, fill=color, width=self.line_width * self.scale, joint="curve"
            )

    def _draw_connector(self, draw: ImageDraw.ImageDraw, connector, color):
        points = [self._to_image(p.x, p.y) for p in connector]
        for start, end in zip(points, points[1:]):
            self._draw_dashed_line(draw, start, end, color)

    def render(
        self,
        snapshot: MapSnapshot,
        routes: Sequence[PlannedRoute] = (),
        output_path: str = "map.png",
        grid: Optional[WalkabilityGrid] = None,
    ) -> str:
        """
        Render a map and its routes as a PNG image.

        Args:
            snapshot: Map geometry and waypoints
            routes: Planned routes to draw over the map
            output_path: Path to save the PNG file
            grid: Optional walkability grid to overlay (debug view)

        Returns:
            Path to the saved PNG file
        """
        if not snapshot.corridors and not snapshot.walls:
            # Create a small placeholder image
            img = Image.new("RGB", (200, 100), self.bg_color)
            img.save(output_path)
            return output_path

        self._bounds = world_bounds(snapshot.corridors, snapshot.walls, self.margin)
        width = max(1, int(self._bounds.width * self.scale))
        height = max(1, int(self._bounds.height * self.scale))

        img = Image.new("RGB", (width, height), self.bg_color)
        draw = ImageDraw.Draw(img)

        self._draw_map(draw, snapshot)
        if grid is not None:
            self._draw_walkable_cells(draw, grid)

        for index, route in enumerate(routes):
            color = self.route_color(index)
            if route.path.points:
                self._draw_path(draw, route.path, color)
            self._draw_connector(draw, route.from_connector, color)
            self._draw_connector(draw, route.to_connector, color)

        self._draw_waypoints(draw, snapshot)

        img.save(output_path, "PNG")
        return output_path


def render_to_png(
    snapshot: MapSnapshot,
    routes: Sequence[PlannedRoute] = (),
    output_path: str = "map.png",
    **kwargs,
) -> str:
    """
    Convenience function to render a map to PNG.

    Args:
        snapshot: Map geometry and waypoints
        routes: Planned routes to draw
        output_path: Path to save the PNG
        **kwargs: Additional arguments passed to RoutePNGRenderer

    Returns:
        Path to the saved PNG file
    """
    renderer = RoutePNGRenderer(**kwargs)
    return renderer.render(snapshot, routes, output_path)
