"""Parameter records for the snippet tools.

Records are frozen dataclasses; :class:`ParameterModel` swaps the whole record
on every update so a derived snippet always comes from one snapshot.
"""
from __future__ import annotations

import dataclasses
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum


class ParameterError(KeyError):
    """Raised when an update names a field the record does not have."""


class ToolKind(str, Enum):
    BORDER_RADIUS = "border-radius"
    BOX_SHADOW = "box-shadow"


@dataclass(frozen=True)
class RgbaColor:
    r: int
    g: int
    b: int
    a: float = 1


@dataclass(frozen=True)
class BorderRadiusParams:
    top_left: int = 10
    top_right: int = 10
    bottom_left: int = 10
    bottom_right: int = 10


@dataclass(frozen=True)
class BoxShadowParams:
    horizontal: int = 10
    vertical: int = 10
    blur: int = 10
    spread: int = 0
    color: RgbaColor = RgbaColor(79, 70, 229, 1)
    inset: bool = False


ToolParams = BorderRadiusParams | BoxShadowParams


@dataclass(frozen=True)
class FieldSpec:
    name: str
    label: str
    kind: str  # "int", "color" or "bool"
    minimum: int | None = None
    maximum: int | None = None


TOOL_FIELDS: dict[ToolKind, tuple[FieldSpec, ...]] = {
    ToolKind.BORDER_RADIUS: (
        FieldSpec("top_left", "Top Left", "int", 0, 150),
        FieldSpec("top_right", "Top Right", "int", 0, 150),
        FieldSpec("bottom_left", "Bottom Left", "int", 0, 150),
        FieldSpec("bottom_right", "Bottom Right", "int", 0, 150),
    ),
    ToolKind.BOX_SHADOW: (
        FieldSpec("horizontal", "Horizontal Length", "int", -100, 100),
        FieldSpec("vertical", "Vertical Length", "int", -100, 100),
        FieldSpec("blur", "Blur Radius", "int", 0, 100),
        FieldSpec("spread", "Spread Radius", "int", -100, 100),
        FieldSpec("color", "Shadow Color", "color"),
        FieldSpec("inset", "Inset", "bool"),
    ),
}

_DEFAULT_FACTORIES: dict[ToolKind, Callable[[], ToolParams]] = {
    ToolKind.BORDER_RADIUS: BorderRadiusParams,
    ToolKind.BOX_SHADOW: BoxShadowParams,
}


def default_params(kind: ToolKind | str) -> ToolParams:
    return _DEFAULT_FACTORIES[ToolKind(kind)]()


def kind_of(params: ToolParams) -> ToolKind:
    if isinstance(params, BorderRadiusParams):
        return ToolKind.BORDER_RADIUS
    if isinstance(params, BoxShadowParams):
        return ToolKind.BOX_SHADOW
    raise TypeError(f"Unsupported parameter record: {type(params).__name__}")


def coerce_entry(spec: FieldSpec, text: str) -> int | None:
    """Parse a number typed into a control and clamp it to the field range.

    Returns ``None`` for anything that is not a number so the caller can
    restore the control to the current value. Fractional input is truncated
    toward zero, matching what the sliders can produce.
    """

    raw = text.strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        try:
            value = int(float(raw))
        except (ValueError, OverflowError):
            return None
    if spec.minimum is not None:
        value = max(spec.minimum, value)
    if spec.maximum is not None:
        value = min(spec.maximum, value)
    return value


class ParameterModel:
    """Holds the current parameter snapshot for one tool instance.

    Values are not range-checked here; the controls constrain what users can
    enter and anything else is passed through to the formatter untouched.
    """

    def __init__(self, initial: ToolParams) -> None:
        self._initial = initial
        self._current = initial
        self._field_names = frozenset(f.name for f in dataclasses.fields(initial))

    @property
    def kind(self) -> ToolKind:
        return kind_of(self._current)

    def get(self) -> ToolParams:
        return self._current

    def update(self, field: str, value: object) -> ToolParams:
        if field not in self._field_names:
            raise ParameterError(field)
        current = getattr(self._current, field)
        if type(current) is type(value) and current == value:
            return self._current
        self._current = dataclasses.replace(self._current, **{field: value})
        return self._current

    def reset(self) -> ToolParams:
        self._current = self._initial
        return self._current
