import tkinter as tk

from ..highlight import THEMES, Markup, Theme
from ..utils import span_tkindices


def configure_theme_tags(text: tk.Text, theme: Theme) -> None:
    text.configure(
        background=theme.background,
        foreground=theme.foreground,
        insertbackground=theme.foreground,
        highlightthickness=0,
        bd=0,
    )
    for style, color in theme.styles.items():
        text.tag_configure(style, foreground=color)


def apply_markup(text: tk.Text, markup: Markup) -> None:
    """Replace the contents of a read-only code pane with highlighted ``markup``."""

    theme = THEMES.get(markup.theme)
    if theme is not None:
        configure_theme_tags(text, theme)
    text.configure(state="normal")
    try:
        text.delete("1.0", "end")
        text.insert("1.0", markup.code)
        for start, end, tag in span_tkindices(markup.code, markup.spans()):
            text.tag_add(tag, start, end)
    finally:
        text.configure(state="disabled")
