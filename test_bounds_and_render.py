"""
Unit tests for combined bounds and the shared render projection.
"""

import unittest

from gerber_preview.geometry import (
    Bounds,
    LayerInfo,
    LineSegment,
    ParsedGerberData,
    PointMarker,
    Projection,
    ViewTransform,
    aggregate_bounds,
    parse_gerber,
    project_layer,
    project_layers,
    render_svg,
)


def _layer(name, bounds=None, visible=True, content=None, role="Top Copper"):
    parsed = None
    if content is not None:
        parsed = parse_gerber(content)
    elif bounds is not None:
        parsed = ParsedGerberData(bounds=Bounds(*bounds))
    return LayerInfo(name=name, role=role, color="#ff6b6b", visible=visible, parsed=parsed)


class TestAggregateBounds(unittest.TestCase):

    def test_empty_falls_back_to_declared_size(self):
        self.assertEqual(aggregate_bounds([], {}, 80, 120), Bounds(0, 80, 0, 120))

    def test_geometry_wins_over_declared_size(self):
        layers = [_layer("a.gtl", bounds=(5, 25, 5, 25))]
        self.assertEqual(aggregate_bounds(layers, {}, 100, 100), Bounds(5, 25, 5, 25))

    def test_union_of_visible_layers(self):
        layers = [
            _layer("a.gtl", bounds=(5, 25, 5, 25)),
            _layer("b.gbl", bounds=(-10, 20, 8, 40)),
        ]
        self.assertEqual(aggregate_bounds(layers, None, 100, 100), Bounds(-10, 25, 5, 40))

    def test_invisible_layer_is_excluded(self):
        layers = [
            _layer("a.gtl", bounds=(5, 25, 5, 25)),
            _layer("b.gbl", bounds=(-500, 500, -500, 500)),
        ]
        self.assertEqual(aggregate_bounds(layers, {"b.gbl": False}, 100, 100), Bounds(5, 25, 5, 25))

    def test_layer_flag_used_when_map_is_silent(self):
        layers = [_layer("a.gtl", bounds=(5, 25, 5, 25), visible=False)]
        self.assertEqual(aggregate_bounds(layers, {}, 70, 30), Bounds(0, 70, 0, 30))

    def test_unparsed_layer_is_excluded(self):
        layers = [_layer("a.gtl"), _layer("b.drl", bounds=(1, 2, 3, 4), role="Drill")]
        self.assertEqual(aggregate_bounds(layers, {}, 100, 100), Bounds(1, 2, 3, 4))

    def test_does_not_mutate_layer_bounds(self):
        layer_a = _layer("a.gtl", bounds=(5, 25, 5, 25))
        layer_b = _layer("b.gbl", bounds=(0, 50, 0, 50))
        aggregate_bounds([layer_a, layer_b], {}, 100, 100)
        self.assertEqual(layer_a.parsed.bounds, Bounds(5, 25, 5, 25))


class TestProjection(unittest.TestCase):

    def test_uniform_scale_uses_larger_side(self):
        p = Projection(bounds=Bounds(0, 90, 0, 45), size=180)
        self.assertEqual(p.scale, 2.0)

    def test_y_axis_is_inverted(self):
        p = Projection(bounds=Bounds(0, 10, 0, 10), size=180)
        top_left = p.point(0, 10)
        self.assertEqual((top_left.x, top_left.y), (0.0, 0.0))
        self.assertEqual(p.point(0, 0).y, 180.0)
        self.assertEqual(p.point(10, 0).x, 180.0)

    def test_degenerate_bounds(self):
        p = Projection(bounds=Bounds(3, 3, 4, 4), size=180)
        self.assertEqual(p.scale, 1.0)
        pt = p.point(3, 4)
        self.assertEqual((pt.x, pt.y), (0.0, 0.0))


class TestProjectLayer(unittest.TestCase):

    CONTENT = "%ADD10C,1.0*%\nD10*\nX0Y0D02*\nX100000Y0D01*\nX100000Y50000D03*\n"

    def test_primitives(self):
        parsed = parse_gerber(self.CONTENT)
        prims = project_layer(parsed, Bounds(0, 10, 0, 10), size=180)
        self.assertEqual(len(prims), 2)
        seg, marker = prims
        self.assertIsInstance(seg, LineSegment)
        self.assertEqual((seg.x1, seg.y1, seg.x2, seg.y2), (0.0, 180.0, 180.0, 180.0))
        self.assertEqual(seg.width, 18.0)
        self.assertIsInstance(marker, PointMarker)
        self.assertEqual((marker.x, marker.y), (180.0, 90.0))
        self.assertEqual(marker.size, 18.0)

    def test_no_parse_data(self):
        self.assertEqual(project_layer(None, Bounds(0, 10, 0, 10)), [])

    def test_undefined_aperture_has_no_size(self):
        parsed = parse_gerber("D11*\nX0Y0D03*\n")
        marker = project_layer(parsed, Bounds(0, 10, 0, 10))[0]
        self.assertIsNone(marker.size)

    def test_layers_share_projection(self):
        small = _layer("small.gtl", content="X0Y0D03*\n")
        large = _layer("large.gbl", content="X0Y0D02*\nX200000Y0D01*\n", role="Bottom Copper")
        layers = [small, large]
        bounds = aggregate_bounds(layers, {}, 100, 100)
        projected = project_layers(layers, bounds, {})
        self.assertEqual(list(projected), ["small.gtl", "large.gbl"])
        # the small layer's flash lands where the large layer's trace starts
        marker = projected["small.gtl"][0]
        seg = projected["large.gbl"][0]
        self.assertEqual((marker.x, marker.y), (seg.x1, seg.y1))

    def test_hidden_layers_not_projected(self):
        layers = [_layer("a.gtl", content="X0Y0D03*\n"), _layer("b.gbl", content="X0Y0D03*\n")]
        projected = project_layers(layers, Bounds(0, 10, 0, 10), {"b.gbl": False})
        self.assertEqual(list(projected), ["a.gtl"])


class TestViewTransform(unittest.TestCase):

    def test_zoom_is_clamped(self):
        view = ViewTransform()
        for _ in range(20):
            view = view.zoom_in()
        self.assertEqual(view.zoom, 3.0)
        for _ in range(20):
            view = view.zoom_out()
        self.assertEqual(view.zoom, 0.5)
        self.assertEqual(view.zoom_percent, 50)

    def test_rotation_wraps(self):
        view = ViewTransform()
        for _ in range(5):
            view = view.rotate()
        self.assertEqual(view.rotation, 90)


class TestRenderSvg(unittest.TestCase):

    def test_svg_contains_visible_layers_only(self):
        layers = [
            _layer("top.gtl", content="%ADD10C,0.5*%\nD10*\nX0Y0D02*\nX100000Y0D01*\n"),
            _layer("hidden.gbl", content="X0Y0D03*\n", role="Bottom Copper"),
            _layer("broken.gbr"),
        ]
        svg = render_svg(layers, Bounds(0, 10, 0, 10), {"hidden.gbl": False}, background="#1a5f1a")
        self.assertTrue(svg.startswith("<svg"))
        self.assertIn('data-layer="top.gtl"', svg)
        self.assertNotIn("hidden.gbl", svg)
        self.assertNotIn("broken.gbr", svg)
        self.assertIn("<line", svg)
        self.assertIn('fill="#1a5f1a"', svg)

    def test_svg_escapes_names(self):
        layers = [_layer('a<b>&"c".gtl', content="X0Y0D03*\n")]
        svg = render_svg(layers, Bounds(0, 10, 0, 10))
        self.assertNotIn("<b>", svg)
        self.assertIn("&lt;b&gt;", svg)


if __name__ == "__main__":
    unittest.main()
