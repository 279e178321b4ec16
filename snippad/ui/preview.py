"""Live preview drawing for the tool tabs.

Geometry is computed by plain functions so it can be tested without a
display; :func:`draw_preview` only turns the result into canvas items.
"""
from __future__ import annotations

import math
import tkinter as tk

from ..params import BorderRadiusParams, BoxShadowParams, ToolParams
from ..utils import blend_over, hex_to_rgb

BOX_SIZE = 160
BOX_FILL = "#000000"
SHADOW_BOX_RADIUS = 8
_ARC_STEPS = 8
_MAX_BLUR_LAYERS = 12

Rect = tuple[float, float, float, float]


def _as_length(value: object) -> float:
    try:
        return max(0.0, float(value))
    except (TypeError, ValueError):
        return 0.0


def _as_offset(value: object) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def scaled_radii(rect: Rect, radii: tuple[float, float, float, float]) -> tuple[float, ...]:
    """Shrink corner radii the way browsers do when adjacent corners overlap.

    ``radii`` is ``(top_left, top_right, bottom_left, bottom_right)``.
    """

    x0, y0, x1, y1 = rect
    width = max(0.0, x1 - x0)
    height = max(0.0, y1 - y0)
    tl, tr, bl, br = (max(0.0, r) for r in radii)
    factor = 1.0
    for edge, total in ((width, tl + tr), (width, bl + br), (height, tl + bl), (height, tr + br)):
        if total > 0:
            factor = min(factor, edge / total)
    return tuple(r * factor for r in (tl, tr, bl, br))


def rounded_rect_points(
    rect: Rect, radii: tuple[float, float, float, float], steps: int = _ARC_STEPS
) -> list[float]:
    """Return a flat polygon point list for a rectangle with rounded corners."""

    x0, y0, x1, y1 = rect
    tl, tr, bl, br = scaled_radii(rect, radii)
    corners = (
        (x0 + tl, y0 + tl, tl, 180),
        (x1 - tr, y0 + tr, tr, 270),
        (x1 - br, y1 - br, br, 0),
        (x0 + bl, y1 - bl, bl, 90),
    )
    points: list[float] = []
    for cx, cy, r, start in corners:
        for i in range(steps + 1):
            theta = math.radians(start + 90 * i / steps)
            points.extend((cx + r * math.cos(theta), cy + r * math.sin(theta)))
    return points


def centered_box(width: float, height: float, size: float = BOX_SIZE) -> Rect:
    left = (width - size) / 2
    top = (height - size) / 2
    return (left, top, left + size, top + size)


def _grow(rect: Rect, amount: float) -> Rect:
    x0, y0, x1, y1 = rect
    return (x0 - amount, y0 - amount, x1 + amount, y1 + amount)


def _shift(rect: Rect, dx: float, dy: float) -> Rect:
    x0, y0, x1, y1 = rect
    return (x0 + dx, y0 + dy, x1 + dx, y1 + dy)


def _clip(rect: Rect, bounds: Rect) -> Rect:
    x0, y0, x1, y1 = rect
    bx0, by0, bx1, by1 = bounds
    cx0, cy0 = min(max(x0, bx0), bx1), min(max(y0, by0), by1)
    cx1, cy1 = max(min(x1, bx1), cx0), max(min(y1, by1), cy0)
    return (cx0, cy0, cx1, cy1)


def shadow_layers(params: BoxShadowParams, box: Rect, surface: str) -> list[tuple[Rect, str]]:
    """Approximate a CSS box shadow as stacked flat rectangles.

    Outer shadows are composited over ``surface``; inset shadows over the
    box fill. Layers are ordered back to front.
    """

    color = params.color
    rgb = (_as_offset(color.r), _as_offset(color.g), _as_offset(color.b))
    alpha = _as_offset(color.a)
    dx, dy = _as_offset(params.horizontal), _as_offset(params.vertical)
    spread = _as_offset(params.spread)
    blur = _as_length(params.blur)
    steps = max(1, min(_MAX_BLUR_LAYERS, int(blur // 2))) if blur else 1

    if params.inset:
        # Shadow fills the box; shifted holes fade back to the box fill.
        layers = [(box, blend_over(rgb, alpha, BOX_FILL))]
        for i in range(steps):
            shrink = spread + (blur * (i + 1) / steps - blur / 2 if steps > 1 else 0.0)
            weight = 1 - (i + 1) / steps
            hole = _clip(_grow(_shift(box, dx, dy), -shrink), box)
            layers.append((hole, blend_over(rgb, alpha * weight, BOX_FILL)))
        return layers

    layers = []
    for i in range(steps):
        grow = blur / 2 - blur * i / steps if steps > 1 else 0.0
        fill = blend_over(rgb, alpha * (i + 1) / steps, surface)
        layers.append((_grow(_shift(box, dx, dy), spread + grow), fill))
    return layers


def _radii_for(params: ToolParams) -> tuple[float, float, float, float]:
    if isinstance(params, BorderRadiusParams):
        return (
            _as_length(params.top_left),
            _as_length(params.top_right),
            _as_length(params.bottom_left),
            _as_length(params.bottom_right),
        )
    return (SHADOW_BOX_RADIUS,) * 4


def draw_preview(canvas: tk.Canvas, params: ToolParams, surface: str) -> None:
    canvas.delete("preview")
    width, height = canvas.winfo_width(), canvas.winfo_height()
    if width <= 1 or height <= 1:
        # Not mapped yet; fall back to the requested size.
        width, height = int(canvas.cget("width")), int(canvas.cget("height"))
    box = centered_box(width, height)
    radii = _radii_for(params)

    try:
        hex_to_rgb(surface)
    except ValueError:
        surface = "#ffffff"

    items: list[tuple[Rect, str]] = []
    if isinstance(params, BoxShadowParams):
        items.extend(shadow_layers(params, box, surface))
        if not params.inset:
            items.append((box, BOX_FILL))
    else:
        items.append((box, BOX_FILL))

    for rect, fill in items:
        canvas.create_polygon(
            rounded_rect_points(rect, radii), fill=fill, outline="", tags="preview"
        )
