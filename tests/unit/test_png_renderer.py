"""Tests for the PNG renderer."""

from PIL import Image

from waypath import (
    SAMPLE_MAP,
    MapSnapshot,
    OrthogonalPathfinder,
    RoutePlanner,
    RoutePNGRenderer,
    parse_map,
    render_to_png,
)


class TestRoutePNGRenderer:
    """Tests for RoutePNGRenderer."""

    def test_render_map_only(self, tmp_path):
        out = tmp_path / "map.png"
        result = RoutePNGRenderer().render(parse_map(SAMPLE_MAP), output_path=str(out))
        assert result == str(out)
        with Image.open(out) as img:
            # 400 x 220 map plus a 20 unit margin, at 2 pixels per unit
            assert img.size == (880, 520)

    def test_render_with_route(self, tmp_path):
        snapshot = parse_map(SAMPLE_MAP)
        route = RoutePlanner().plan(snapshot, "start", "end")
        out = tmp_path / "route.png"
        render_to_png(snapshot, [route], str(out))
        assert out.exists()

    def test_render_portal_route(self, tmp_path, island_snapshot):
        route = RoutePlanner().plan(island_snapshot, "west_end", "east_end")
        out = tmp_path / "portal.png"
        RoutePNGRenderer(scale=1).render(island_snapshot, [route], str(out))
        with Image.open(out) as img:
            assert img.size == (640, 80)

    def test_render_grid_overlay(self, tmp_path, island_snapshot):
        pathfinder = OrthogonalPathfinder(island_snapshot.corridors, [], 5, 5)
        out = tmp_path / "grid.png"
        RoutePNGRenderer(show_labels=False).render(
            island_snapshot, output_path=str(out), grid=pathfinder.grid
        )
        assert out.exists()

    def test_empty_map_placeholder(self, tmp_path):
        out = tmp_path / "empty.png"
        RoutePNGRenderer().render(MapSnapshot(), output_path=str(out))
        with Image.open(out) as img:
            assert img.size == (200, 100)

    def test_route_colors_distinct(self):
        colors = {RoutePNGRenderer.route_color(i) for i in range(5)}
        assert len(colors) == 5
        assert RoutePNGRenderer.route_color(0) == RoutePNGRenderer.route_color(0)
