#!/usr/bin/env python3
"""
SnipPad: Tkinter CSS snippet generator
with live preview, highlighted CSS/Tailwind output and one-click copy.
"""

import contextlib
import logging
import sys
import tkinter as tk
import tkinter.font as tkfont
from collections.abc import Callable, Iterable, Sequence
from tkinter import messagebox, ttk

from .client import RemoteHighlighter
from .clipboard import TkClipboard
from .config import CONFIG_PATH, DEFAULTS, ConfigSaveError, load_config, save_config
from .controller import Channel, GeneratorController
from .copy_status import CopyStatus
from .highlight import DEFAULT_THEME, THEMES, Renderer, render_css
from .params import FieldSpec, ToolKind, coerce_entry
from .ui.color_picker import ColorPicker
from .ui.helpers import apply_markup, configure_theme_tags
from .ui.menus import AppMenus
from .ui.preview import draw_preview

_logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

TOOL_TITLES: dict[ToolKind, str] = {
    ToolKind.BORDER_RADIUS: "Border Radius",
    ToolKind.BOX_SHADOW: "Box Shadow",
}
CHANNEL_TITLES: dict[Channel, str] = {
    Channel.RAW: "CSS Code:",
    Channel.UTILITY: "Tailwind CSS Code:",
}
COPY_LABELS: dict[CopyStatus, str] = {
    CopyStatus.READY: "Copy",
    CopyStatus.COPIED: "✓ Copied",
}


def make_renderer(cfg: dict) -> Renderer:
    if cfg.get("highlighter") == "remote":
        return RemoteHighlighter(cfg.get("highlight_endpoint") or DEFAULTS["highlight_endpoint"])
    return render_css


def resolve_tool(name: str) -> ToolKind | None:
    normalized = name.strip().lower().replace("_", "-").replace(" ", "-")
    try:
        return ToolKind(normalized)
    except ValueError:
        return None


def _set_log_level(level: object) -> None:
    name = str(level or DEFAULTS["log_level"]).upper()
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        _logger.warning("Unknown log level %r; using %s", level, DEFAULTS["log_level"])
        numeric = logging.getLevelName(DEFAULTS["log_level"])
    logging.getLogger("snippad").setLevel(numeric)


class SnipPad(tk.Tk):
    def __init__(self):
        super().__init__()
        self.title("SnipPad")
        self.geometry("1100x820")

        self.cfg = load_config()
        _set_log_level(self.cfg.get("log_level"))
        if self.cfg.get("theme") not in THEMES:
            self.cfg["theme"] = DEFAULT_THEME
        self.code_font = tkfont.Font(family=self._font_family(), size=self._font_size())

        try:
            self.style = ttk.Style(self)
            if "clam" in self.style.theme_names():
                self.style.theme_use("clam")
        except tk.TclError:
            pass

        self._renderer = make_renderer(self.cfg)
        self._clipboard = TkClipboard(self)
        self._register_shortcuts()
        self.menus = AppMenus(self)
        self._build_notebook()
        for kind in ToolKind:
            self._new_tool_tab(kind)

        initial = resolve_tool(str(self.cfg.get("open_tool", "")))
        if initial is not None:
            self.select_tool(initial)
        self.nb.bind("<<NotebookTabChanged>>", self._on_tab_changed)

        self._poll_job = self.after(self._poll_interval(), self._poll_highlights)
        self.protocol("WM_DELETE_WINDOW", self._on_close)

    def _persist_config(self) -> None:
        try:
            save_config(self.cfg)
        except ConfigSaveError as exc:
            self._show_error(
                "Config Save Failed",
                f"Could not save settings to {CONFIG_PATH}.",
                detail=str(exc),
            )

    def _show_error(self, title: str, message: str, detail: str | None = None) -> None:
        _logger.error("%s: %s %s", title, message, detail or "")
        with contextlib.suppress(tk.TclError):
            messagebox.showerror(title, message, detail=detail, parent=self)

    def _poll_interval(self) -> int:
        try:
            return max(10, int(self.cfg.get("poll_interval_ms", DEFAULTS["poll_interval_ms"])))
        except (TypeError, ValueError):
            return DEFAULTS["poll_interval_ms"]

    def _copy_reset_ms(self) -> int:
        try:
            return max(0, int(self.cfg.get("copy_reset_ms", DEFAULTS["copy_reset_ms"])))
        except (TypeError, ValueError):
            return DEFAULTS["copy_reset_ms"]

    def _font_size(self) -> int:
        try:
            size = int(self.cfg.get("font_size", DEFAULTS["font_size"]))
        except (TypeError, ValueError):
            return DEFAULTS["font_size"]
        return size if size > 0 else DEFAULTS["font_size"]

    def _font_family(self) -> str:
        family = self.cfg.get("font_family")
        return family if isinstance(family, str) and family.strip() else DEFAULTS["font_family"]

    # ---------- Shortcuts ----------

    def _make_shortcut_handler(
        self, callback: Callable[[], None]
    ) -> Callable[[tk.Event | None], str]:
        def handler(_event: tk.Event | None = None) -> str:
            callback()
            return "break"

        return handler

    def _register_shortcuts(self) -> None:
        def add(sequence: str, callback: Callable[[], None]) -> None:
            self.bind_all(sequence, self._make_shortcut_handler(callback))

        add("<Control-q>", self._on_close)
        add("<Control-r>", self.reset_current_tool)
        add("<Control-Shift-C>", lambda: self.copy_current(Channel.RAW))
        add("<Control-Shift-T>", lambda: self.copy_current(Channel.UTILITY))
        for index, kind in enumerate(ToolKind, start=1):
            add(f"<Control-Key-{index}>", lambda k=kind: self.select_tool(k))

    # ---------- Tabs ----------

    def _build_notebook(self):
        self.nb = ttk.Notebook(self)
        self.nb.pack(fill=tk.BOTH, expand=True)
        self.nb.enable_traversal()
        self.tabs = {}  # frame -> state dict

    @staticmethod
    def tool_title(kind: ToolKind) -> str:
        return TOOL_TITLES[kind]

    def _new_tool_tab(self, kind: ToolKind) -> dict:
        frame = ttk.Frame(self.nb, padding=12)
        frame.columnconfigure(0, weight=1)
        frame.columnconfigure(1, weight=1)
        frame.rowconfigure(1, weight=1)

        controller = GeneratorController(
            kind,
            clipboard=self._clipboard,
            scheduler=self,
            renderer=self._renderer,
            theme=self.cfg["theme"],
            reset_ms=self._copy_reset_ms(),
            on_status_change=lambda ch, state, fr=frame: self._on_copy_status(fr, ch, state),
        )
        st = {
            "kind": kind,
            "frame": frame,
            "controller": controller,
            "controls": {},
            "color_picker": None,
            "texts": {},
            "buttons": {},
        }
        self.tabs[frame] = st

        controls = ttk.Frame(frame)
        controls.grid(row=0, column=0, sticky="nsew", padx=(0, 12))
        controls.columnconfigure(1, weight=1)
        for row, spec in enumerate(controller.fields):
            self._build_control(st, controls, row, spec)

        canvas = tk.Canvas(
            frame,
            width=320,
            height=320,
            background=self.cfg.get("preview_bg", DEFAULTS["preview_bg"]),
            highlightthickness=0,
        )
        canvas.grid(row=0, column=1, sticky="nsew")
        canvas.bind("<Configure>", lambda _e, fr=frame: self._redraw_preview(fr), add="+")
        st["canvas"] = canvas

        panes = ttk.Frame(frame)
        panes.grid(row=1, column=0, columnspan=2, sticky="nsew", pady=(12, 0))
        panes.rowconfigure(1, weight=1)
        for col, channel in enumerate(Channel):
            panes.columnconfigure(col, weight=1)
            self._build_code_pane(st, panes, col, channel)

        self.nb.add(frame, text=self.tool_title(kind))
        self._redraw_preview(frame)
        return st

    def _build_control(self, st: dict, parent: ttk.Frame, row: int, spec: FieldSpec) -> None:
        frame = st["frame"]
        params = st["controller"].params
        value = getattr(params, spec.name)
        ttk.Label(parent, text=spec.label, anchor="w").grid(
            row=row, column=0, sticky="w", pady=6
        )

        if spec.kind == "color":
            picker = ColorPicker(
                parent,
                value,
                on_change=lambda color, fr=frame: self._on_field_change(fr, "color", color),
                title=f"Pick {spec.label.lower()}",
            )
            picker.grid(row=row, column=1, columnspan=2, sticky="ew", padx=(8, 0))
            st["color_picker"] = picker
            st["controls"][spec.name] = {"spec": spec, "picker": picker}
            return

        if spec.kind == "bool":
            var = tk.BooleanVar(master=self, value=bool(value))
            ttk.Checkbutton(
                parent,
                variable=var,
                command=lambda fr=frame, name=spec.name, v=var: self._on_field_change(
                    fr, name, bool(v.get())
                ),
            ).grid(row=row, column=1, sticky="w", padx=(8, 0))
            st["controls"][spec.name] = {"spec": spec, "var": var}
            return

        scale_var = tk.DoubleVar(master=self, value=float(value))
        entry_var = tk.StringVar(master=self, value=str(value))
        scale = ttk.Scale(
            parent,
            from_=spec.minimum,
            to=spec.maximum,
            orient="horizontal",
            variable=scale_var,
            command=lambda raw, fr=frame, name=spec.name: self._on_field_change(
                fr, name, int(round(float(raw)))
            ),
        )
        scale.grid(row=row, column=1, sticky="ew", padx=(8, 8))

        def commit_entry(_event: tk.Event | None = None, fr=frame, sp=spec, var=entry_var):
            self._on_entry_commit(fr, sp, var)

        spin = ttk.Spinbox(
            parent,
            from_=spec.minimum,
            to=spec.maximum,
            increment=1,
            width=5,
            textvariable=entry_var,
            justify="center",
            command=commit_entry,
        )
        spin.grid(row=row, column=2, sticky="e")
        spin.bind("<Return>", commit_entry, add="+")
        spin.bind("<FocusOut>", commit_entry, add="+")
        st["controls"][spec.name] = {"spec": spec, "scale_var": scale_var, "entry_var": entry_var}

    def _build_code_pane(self, st: dict, parent: ttk.Frame, col: int, channel: Channel) -> None:
        frame = st["frame"]
        pad = (0, 6) if col == 0 else (6, 0)
        header = ttk.Frame(parent)
        header.grid(row=0, column=col, sticky="ew", padx=pad, pady=(0, 4))
        header.columnconfigure(0, weight=1)
        ttk.Label(header, text=CHANNEL_TITLES[channel]).grid(row=0, column=0, sticky="w")
        button = ttk.Button(
            header,
            text=COPY_LABELS[CopyStatus.READY],
            command=lambda fr=frame, ch=channel: self._copy(fr, ch),
        )
        button.grid(row=0, column=1, sticky="e")

        text = tk.Text(
            parent,
            height=7,
            width=40,
            wrap="none",
            font=self.code_font,
            padx=10,
            pady=10,
        )
        configure_theme_tags(text, THEMES[self.cfg["theme"]])
        text.configure(state="disabled")
        text.grid(row=1, column=col, sticky="nsew", padx=pad)

        st["texts"][channel] = text
        st["buttons"][channel] = button

    def _current_tab_state(self) -> dict | None:
        try:
            frame = self.nametowidget(self.nb.select())
        except (KeyError, tk.TclError):
            return None
        return self.tabs.get(frame)

    def _on_tab_changed(self, _event=None) -> None:
        st = self._current_tab_state()
        if st is not None:
            self.cfg["open_tool"] = st["kind"].value

    def select_tool(self, kind: ToolKind) -> None:
        for frame, st in self.tabs.items():
            if st["kind"] is kind:
                self.nb.select(frame)
                return

    def open_tools(self, names: Iterable[str]) -> None:
        for name in names:
            kind = resolve_tool(name)
            if kind is None:
                _logger.warning("Unknown tool %r; expected one of %s", name, [k.value for k in ToolKind])
                continue
            self.select_tool(kind)

    # ---------- Parameter changes ----------

    def _on_field_change(self, frame, field: str, value: object) -> None:
        st = self.tabs.get(frame)
        if st is None:
            return
        controller: GeneratorController = st["controller"]
        before = controller.params
        controller.update(field, value)
        if controller.params is not before:
            self._sync_controls(st)
            self._redraw_preview(frame)

    def _on_entry_commit(self, frame, spec: FieldSpec, var: tk.StringVar) -> None:
        st = self.tabs.get(frame)
        if st is None:
            return
        value = coerce_entry(spec, var.get())
        if value is None:
            var.set(str(getattr(st["controller"].params, spec.name)))
            return
        self._on_field_change(frame, spec.name, value)
        var.set(str(getattr(st["controller"].params, spec.name)))

    def _sync_controls(self, st: dict) -> None:
        params = st["controller"].params
        for name, control in st["controls"].items():
            value = getattr(params, name)
            if "picker" in control:
                if control["picker"].color != value:
                    control["picker"].set_color(value)
            elif "var" in control:
                control["var"].set(bool(value))
            else:
                with contextlib.suppress(TypeError, ValueError):
                    control["scale_var"].set(float(value))
                control["entry_var"].set(str(value))

    def _redraw_preview(self, frame) -> None:
        st = self.tabs.get(frame)
        if st is None or "canvas" not in st:
            return
        try:
            draw_preview(
                st["canvas"],
                st["controller"].params,
                self.cfg.get("preview_bg", DEFAULTS["preview_bg"]),
            )
        except tk.TclError as exc:
            _logger.debug("Preview redraw skipped: %s", exc)

    def reset_current_tool(self) -> None:
        st = self._current_tab_state()
        if st is None:
            return
        st["controller"].reset()
        self._sync_controls(st)
        self._redraw_preview(st["frame"])

    def set_theme(self, theme: str) -> None:
        if theme not in THEMES:
            _logger.warning("Unknown theme %r", theme)
            return
        self.cfg["theme"] = theme
        for st in self.tabs.values():
            st["controller"].set_theme(theme)
        self._persist_config()

    # ---------- Copy ----------

    def _copy(self, frame, channel: Channel) -> None:
        st = self.tabs.get(frame)
        if st is None:
            return
        st["controller"].copy(channel)

    def copy_current(self, channel: Channel) -> None:
        st = self._current_tab_state()
        if st is not None:
            self._copy(st["frame"], channel)

    def _on_copy_status(self, frame, channel: Channel, state: CopyStatus) -> None:
        st = self.tabs.get(frame)
        if st is None:
            return
        button = st["buttons"].get(channel)
        if button is None:
            return
        with contextlib.suppress(tk.TclError):
            button.configure(
                text=COPY_LABELS[state],
                state="disabled" if state is CopyStatus.COPIED else "normal",
            )

    # ---------- Highlight polling ----------

    def _poll_highlights(self) -> None:
        try:
            for st in list(self.tabs.values()):
                controller: GeneratorController = st["controller"]
                for channel in controller.poll():
                    markup = controller.markup(channel)
                    if markup is None:
                        continue
                    try:
                        apply_markup(st["texts"][channel], markup)
                    except Exception:  # noqa: BLE001
                        _logger.exception("Highlight refresh failed for %s pane", channel.value)
        finally:
            self._poll_job = self.after(self._poll_interval(), self._poll_highlights)

    # ---------- Close / Quit ----------

    def _on_close(self):
        job = getattr(self, "_poll_job", None)
        if job is not None:
            with contextlib.suppress(tk.TclError):
                self.after_cancel(job)
            self._poll_job = None
        for st in self.tabs.values():
            st["controller"].close()
        self._persist_config()
        self.destroy()


def main(
    argv: Sequence[str] | None = None,
    app_factory: Callable[[], SnipPad] = SnipPad,
) -> None:
    args = list(sys.argv[1:] if argv is None else argv)
    logging.basicConfig(format=LOG_FORMAT)
    app = app_factory()
    if args:
        open_tools = getattr(app, "open_tools", None)
        if callable(open_tools):
            open_tools(args)
    app.mainloop()


if __name__ == "__main__":
    main()
