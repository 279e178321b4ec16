import pytest

from snippad.params import BorderRadiusParams, BoxShadowParams, RgbaColor
from snippad.ui.preview import (
    BOX_FILL,
    BOX_SIZE,
    centered_box,
    draw_preview,
    rounded_rect_points,
    scaled_radii,
    shadow_layers,
)

RED = RgbaColor(255, 0, 0, 1)


class FakeCanvas:
    def __init__(self, width=1, height=1, requested=(320, 320)):
        self.size = (width, height)
        self.requested = {"width": str(requested[0]), "height": str(requested[1])}
        self.deleted = []
        self.polygons = []

    def delete(self, tag):
        self.deleted.append(tag)

    def winfo_width(self):
        return self.size[0]

    def winfo_height(self):
        return self.size[1]

    def cget(self, option):
        return self.requested[option]

    def create_polygon(self, points, **options):
        self.polygons.append((points, options))


def test_scaled_radii_leaves_small_radii_alone():
    assert scaled_radii((0, 0, 100, 100), (10, 20, 30, 40)) == (10, 20, 30, 40)


def test_scaled_radii_shrinks_overlapping_corners():
    assert scaled_radii((0, 0, 100, 50), (100, 0, 0, 0)) == (50, 0, 0, 0)


def test_scaled_radii_ignores_negative_values():
    assert scaled_radii((0, 0, 100, 100), (-5, 0, 0, 0)) == (0, 0, 0, 0)


def test_rounded_rect_points_traces_all_corners():
    points = rounded_rect_points((0, 0, 100, 100), (10, 10, 10, 10), steps=2)

    assert len(points) == 4 * 3 * 2
    assert points[0:2] == pytest.approx([0, 10])
    assert points[4:6] == pytest.approx([10, 0])
    assert points[-2:] == pytest.approx([0, 90])


def test_rounded_rect_points_square_corners_collapse():
    points = rounded_rect_points((0, 0, 10, 10), (0, 0, 0, 0), steps=1)

    pairs = list(zip(points[::2], points[1::2]))
    assert set(pairs) == {(0, 0), (10, 0), (10, 10), (0, 10)}


def test_centered_box():
    assert centered_box(400, 300) == (
        (400 - BOX_SIZE) / 2,
        (300 - BOX_SIZE) / 2,
        (400 + BOX_SIZE) / 2,
        (300 + BOX_SIZE) / 2,
    )


def test_outer_shadow_without_blur_is_one_offset_layer():
    params = BoxShadowParams(horizontal=5, vertical=-5, blur=0, spread=2, color=RgbaColor(0, 0, 0, 1))

    layers = shadow_layers(params, (0, 0, 10, 10), "#ffffff")

    assert layers == [((3, -7, 17, 7), "#000000")]


def test_outer_blur_fades_outward():
    params = BoxShadowParams(horizontal=0, vertical=0, blur=8, spread=0, color=RED)

    layers = shadow_layers(params, (0, 0, 10, 10), "#ffffff")

    widths = [rect[2] - rect[0] for rect, _ in layers]
    assert widths == sorted(widths, reverse=True)
    assert layers[0][1] != "#ff0000"
    assert layers[-1][1] == "#ff0000"


def test_translucent_shadow_is_flattened_over_surface():
    params = BoxShadowParams(0, 0, 0, 0, RgbaColor(0, 0, 0, 0), False)

    [(_, fill)] = shadow_layers(params, (0, 0, 10, 10), "#f4f4f5")

    assert fill == "#f4f4f5"


def test_inset_shadow_cuts_hole_back_to_box_fill():
    params = BoxShadowParams(horizontal=0, vertical=0, blur=0, spread=3, color=RED, inset=True)

    layers = shadow_layers(params, (0, 0, 20, 20), "#ffffff")

    assert layers == [((0, 0, 20, 20), "#ff0000"), ((3, 3, 17, 17), BOX_FILL)]


def test_draw_preview_uses_requested_size_before_mapping():
    canvas = FakeCanvas()

    draw_preview(canvas, BorderRadiusParams(), "#f4f4f5")

    assert canvas.deleted == ["preview"]
    [(points, options)] = canvas.polygons
    assert options == {"fill": BOX_FILL, "outline": "", "tags": "preview"}
    xs = points[::2]
    assert min(xs) == pytest.approx((320 - BOX_SIZE) / 2)
    assert max(xs) == pytest.approx((320 + BOX_SIZE) / 2)


def test_draw_preview_stacks_outer_shadow_under_box():
    canvas = FakeCanvas(400, 400)

    draw_preview(canvas, BoxShadowParams(blur=0), "not-a-color")

    fills = [options["fill"] for _, options in canvas.polygons]
    assert len(fills) == 2
    assert fills[-1] == BOX_FILL


def test_draw_preview_inset_has_no_separate_box():
    canvas = FakeCanvas(400, 400)

    draw_preview(canvas, BoxShadowParams(blur=0, inset=True), "#ffffff")

    assert len(canvas.polygons) == 2
