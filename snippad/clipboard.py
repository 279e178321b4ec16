"""Clipboard adapters used by the copy buttons."""
from __future__ import annotations

import logging
import tkinter as tk
from typing import Protocol

_logger = logging.getLogger(__name__)


class ClipboardAdapter(Protocol):
    def write(self, text: str) -> bool: ...


class TkClipboard:
    """Write to the system clipboard through a Tk widget."""

    def __init__(self, widget: tk.Misc) -> None:
        self._widget = widget

    def write(self, text: str) -> bool:
        try:
            self._widget.clipboard_clear()
            self._widget.clipboard_append(text)
            # Flush pending clipboard requests.
            self._widget.update_idletasks()
        except tk.TclError as exc:
            _logger.debug("Tk clipboard write failed: %s", exc)
            return False
        return True
