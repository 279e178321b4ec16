import tkinter as tk

from ..controller import Channel
from ..highlight import THEMES
from ..params import ToolKind


class AppMenus:
    def __init__(self, app):
        self.app = app
        self.menubar = tk.Menu(app)
        self.theme_var = tk.StringVar(master=app, value=app.cfg.get("theme", "dracula"))
        self._build_menus()

    def _build_menus(self) -> None:
        app = self.app
        menubar = self.menubar

        filemenu = tk.Menu(menubar, tearoff=0)
        filemenu.add_command(
            label="Reset Parameters", accelerator="Ctrl+R", command=app.reset_current_tool
        )
        filemenu.add_separator()
        filemenu.add_command(label="Quit", accelerator="Ctrl+Q", command=app._on_close)
        menubar.add_cascade(label="File", menu=filemenu)

        editmenu = tk.Menu(menubar, tearoff=0)
        editmenu.add_command(
            label="Copy CSS Code",
            accelerator="Ctrl+Shift+C",
            command=lambda: app.copy_current(Channel.RAW),
        )
        editmenu.add_command(
            label="Copy Tailwind CSS Code",
            accelerator="Ctrl+Shift+T",
            command=lambda: app.copy_current(Channel.UTILITY),
        )
        menubar.add_cascade(label="Edit", menu=editmenu)

        toolsmenu = tk.Menu(menubar, tearoff=0)
        for index, kind in enumerate(ToolKind, start=1):
            toolsmenu.add_command(
                label=app.tool_title(kind),
                accelerator=f"Ctrl+{index}",
                command=lambda k=kind: app.select_tool(k),
            )
        menubar.add_cascade(label="Tools", menu=toolsmenu)

        thememenu = tk.Menu(menubar, tearoff=0)
        for name in THEMES:
            thememenu.add_radiobutton(
                label=name,
                value=name,
                variable=self.theme_var,
                command=lambda n=name: app.set_theme(n),
            )
        menubar.add_cascade(label="Theme", menu=thememenu)

        app.config(menu=menubar)
