import tkinter as tk
from collections.abc import Callable
from tkinter import colorchooser, ttk

from ..params import RgbaColor
from ..utils import blend_over, rgb_to_hex


def swatch_hex(color: RgbaColor, background: str = "#ffffff") -> str:
    return blend_over((color.r, color.g, color.b), color.a, background)


def alpha_from_scale(value: float | str) -> float | int:
    alpha = round(float(value), 2)
    return int(alpha) if alpha.is_integer() else alpha


class ColorPicker(ttk.Frame):
    """Swatch button plus alpha slider; emits a full :class:`RgbaColor`."""

    def __init__(
        self,
        master: tk.Misc,
        color: RgbaColor,
        on_change: Callable[[RgbaColor], None],
        title: str = "Pick color",
    ) -> None:
        super().__init__(master)
        self._color = color
        self._on_change = on_change
        self._title = title
        self._syncing = False

        self.swatch = tk.Button(
            self,
            width=3,
            relief=tk.SOLID,
            borderwidth=1,
            command=self._choose_rgb,
        )
        self.swatch.grid(row=0, column=0, padx=(0, 8))

        ttk.Label(self, text="Alpha").grid(row=0, column=1, padx=(0, 4))
        self.alpha_var = tk.DoubleVar(value=float(color.a))
        self.alpha_scale = ttk.Scale(
            self,
            from_=0.0,
            to=1.0,
            orient="horizontal",
            variable=self.alpha_var,
            command=self._on_alpha,
        )
        self.alpha_scale.grid(row=0, column=2, sticky="ew")
        self.alpha_label = ttk.Label(self, width=4)
        self.alpha_label.grid(row=0, column=3, padx=(4, 0))
        self.columnconfigure(2, weight=1)
        self._refresh()

    @property
    def color(self) -> RgbaColor:
        return self._color

    def set_color(self, color: RgbaColor) -> None:
        self._color = color
        self._syncing = True
        try:
            self.alpha_var.set(float(color.a))
        finally:
            self._syncing = False
        self._refresh()

    def _refresh(self) -> None:
        hex_color = swatch_hex(self._color)
        self.swatch.configure(background=hex_color, activebackground=hex_color)
        self.alpha_label.configure(text=str(self._color.a))

    def _emit(self, color: RgbaColor) -> None:
        if color == self._color:
            return
        self._color = color
        self._refresh()
        self._on_change(color)

    def _choose_rgb(self) -> None:
        initial = rgb_to_hex(self._color.r, self._color.g, self._color.b)
        picked = colorchooser.askcolor(color=initial, parent=self, title=self._title)
        if not picked or picked[0] is None:
            return
        r, g, b = (int(round(c)) for c in picked[0])
        self._emit(RgbaColor(r, g, b, self._color.a))

    def _on_alpha(self, value: str) -> None:
        if self._syncing:
            return
        c = self._color
        self._emit(RgbaColor(c.r, c.g, c.b, alpha_from_scale(value)))
