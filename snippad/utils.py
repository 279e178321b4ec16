from __future__ import annotations

from collections.abc import Iterable


def offset_to_tkindex(content: str, offset: int) -> str:
    """Convert a Python-string offset to a Tk index using UTF-16 code units."""

    if offset <= 0:
        return "1.0"

    prefix = content[:offset]
    line_no = prefix.count("\n") + 1
    last_newline = prefix.rfind("\n")
    col_text = prefix if last_newline == -1 else prefix[last_newline + 1 :]

    col_units = len(col_text.encode("utf-16-le")) // 2
    return f"{line_no}.{col_units}"


def span_tkindices(
    content: str, spans: Iterable[tuple[int, int, str]]
) -> list[tuple[str, str, str]]:
    """Map ``(start, end, tag)`` offsets in ``content`` to Tk text indices."""

    return [
        (offset_to_tkindex(content, start), offset_to_tkindex(content, end), tag)
        for start, end, tag in spans
    ]


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    raw = value.lstrip("#")
    if len(raw) == 3:
        raw = "".join(ch * 2 for ch in raw)
    if len(raw) != 6:
        raise ValueError(f"Not a hex color: {value!r}")
    return int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16)


def rgb_to_hex(r: float, g: float, b: float) -> str:
    def channel(v: float) -> int:
        return max(0, min(255, int(round(v))))

    return f"#{channel(r):02x}{channel(g):02x}{channel(b):02x}"


def blend_over(rgb: tuple[float, float, float], alpha: float, background: str) -> str:
    """Composite ``rgb`` at ``alpha`` over an opaque ``background`` hex color.

    Tk has no alpha channel, so translucent colors are flattened for display.
    """

    alpha = max(0.0, min(1.0, float(alpha)))
    br, bg, bb = hex_to_rgb(background)
    r, g, b = rgb
    return rgb_to_hex(
        r * alpha + br * (1 - alpha),
        g * alpha + bg * (1 - alpha),
        b * alpha + bb * (1 - alpha),
    )
