"""Per-snippet copy status: ``ready`` -> ``copied`` -> (timer) -> ``ready``."""
from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol

from .clipboard import ClipboardAdapter

_logger = logging.getLogger(__name__)

COPY_RESET_MS = 1000


class CopyStatus(str, Enum):
    READY = "ready"
    COPIED = "copied"


class Scheduler(Protocol):
    """The subset of the Tk timer API the machine needs; any ``tk.Misc`` fits."""

    def after(self, ms: int, func: Callable[[], Any]) -> Any: ...

    def after_cancel(self, id: Any) -> None: ...


class CopyStatusMachine:
    def __init__(
        self,
        clipboard: ClipboardAdapter,
        scheduler: Scheduler,
        *,
        reset_ms: int = COPY_RESET_MS,
        on_change: Callable[[CopyStatus], None] | None = None,
    ) -> None:
        self._clipboard = clipboard
        self._scheduler = scheduler
        self.reset_ms = reset_ms
        self._on_change = on_change
        self._state = CopyStatus.READY
        self._timer: Any = None
        self._closed = False

    @property
    def state(self) -> CopyStatus:
        return self._state

    @property
    def can_copy(self) -> bool:
        return self._state is CopyStatus.READY and not self._closed

    def copy(self, text: str) -> bool:
        """Write ``text`` if the channel is ready; return whether it was copied."""

        if not self.can_copy:
            return False
        try:
            ok = bool(self._clipboard.write(text))
        except Exception:  # noqa: BLE001 - adapter failures are reported, not raised
            _logger.exception("Failed to copy!")
            return False
        if not ok:
            _logger.warning("Failed to copy! Clipboard write was rejected.")
            return False
        self._set_state(CopyStatus.COPIED)
        self._timer = self._scheduler.after(self.reset_ms, self._on_timeout)
        return True

    def _on_timeout(self) -> None:
        self._timer = None
        if self._closed:
            return
        if self._state is CopyStatus.COPIED:
            self._set_state(CopyStatus.READY)

    def _set_state(self, state: CopyStatus) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)

    def close(self) -> None:
        self._closed = True
        if self._timer is not None:
            timer, self._timer = self._timer, None
            try:
                self._scheduler.after_cancel(timer)
            except Exception as exc:  # noqa: BLE001 - widget may already be destroyed
                _logger.debug("Could not cancel copy reset timer: %s", exc)
