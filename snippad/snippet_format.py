"""Pure functions that turn parameter records into CSS snippets.

Every function here is deterministic so the output can be pinned in unit
tests without a Tk event loop.
"""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from .params import BorderRadiusParams, BoxShadowParams, RgbaColor, ToolKind, ToolParams, kind_of

_INDENT = "  "


def format_number(value: object) -> str:
    """Render a parameter value the way a browser would print the number.

    Integral floats drop the trailing ``.0``; everything else is passed
    through without rounding.
    """

    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    return str(value)


def _px(value: object) -> str:
    return f"{format_number(value)}px"


def rgba_css(color: RgbaColor) -> str:
    channels = (color.r, color.g, color.b, color.a)
    return "rgba(" + ", ".join(format_number(c) for c in channels) + ")"


def rgba_token(color: RgbaColor) -> str:
    channels = (color.r, color.g, color.b, color.a)
    return "rgba(" + ",".join(format_number(c) for c in channels) + ")"


def border_radius_value(params: BorderRadiusParams) -> str:
    corners = (params.top_left, params.top_right, params.bottom_left, params.bottom_right)
    return " ".join(_px(c) for c in corners)


def box_shadow_value(params: BoxShadowParams) -> str:
    lengths = (params.horizontal, params.vertical, params.blur, params.spread)
    prefix = "inset " if params.inset else ""
    return prefix + " ".join(_px(n) for n in lengths) + " " + rgba_css(params.color)


def rounded_token(params: BorderRadiusParams) -> str:
    corners = (params.top_left, params.top_right, params.bottom_left, params.bottom_right)
    return "rounded-[" + "_".join(_px(c) for c in corners) + "]"


def shadow_token(params: BoxShadowParams) -> str:
    lengths = (params.horizontal, params.vertical, params.blur, params.spread)
    parts = [_px(n) for n in lengths]
    parts.append(rgba_token(params.color))
    if params.inset:
        parts.insert(0, "inset")
    return "shadow-[" + "_".join(parts) + "]"


@dataclass(frozen=True)
class SnippetTemplate:
    selector: str
    properties: tuple[str, ...]
    value: Callable[[ToolParams], str]
    token: Callable[[ToolParams], str]


TEMPLATES: dict[ToolKind, SnippetTemplate] = {
    ToolKind.BORDER_RADIUS: SnippetTemplate(
        selector=".border-radius",
        properties=("border-radius",),
        value=border_radius_value,
        token=rounded_token,
    ),
    ToolKind.BOX_SHADOW: SnippetTemplate(
        selector=".shadow",
        properties=("-webkit-box-shadow", "-moz-box-shadow", "box-shadow"),
        value=box_shadow_value,
        token=shadow_token,
    ),
}


def _rule(selector: str, declarations: list[str]) -> str:
    body = "\n".join(f"{_INDENT}{line};" for line in declarations)
    return f"{selector} {{\n{body}\n}}"


def raw_value(params: ToolParams) -> str:
    return TEMPLATES[kind_of(params)].value(params)


def utility_token(params: ToolParams) -> str:
    return TEMPLATES[kind_of(params)].token(params)


def to_raw_snippet(params: ToolParams) -> str:
    template = TEMPLATES[kind_of(params)]
    value = template.value(params)
    return _rule(template.selector, [f"{prop}: {value}" for prop in template.properties])


def to_utility_snippet(params: ToolParams) -> str:
    template = TEMPLATES[kind_of(params)]
    return _rule(template.selector, [f"@apply {template.token(params)}"])


__all__ = [
    "TEMPLATES",
    "SnippetTemplate",
    "border_radius_value",
    "box_shadow_value",
    "format_number",
    "raw_value",
    "rgba_css",
    "rgba_token",
    "rounded_token",
    "shadow_token",
    "to_raw_snippet",
    "to_utility_snippet",
    "utility_token",
]
