from __future__ import annotations

import contextlib
import json
import logging
import os
import shutil
import tempfile
from datetime import datetime

_logger = logging.getLogger(__name__)

APP_DIR = os.path.expanduser("~/.snippad")
CONFIG_PATH = os.path.join(APP_DIR, "config.json")

DEFAULTS = {
    "theme": "dracula",
    "highlighter": "builtin",
    "highlight_endpoint": "http://localhost:8080",
    "copy_reset_ms": 1000,
    "poll_interval_ms": 30,
    "font_family": "TkFixedFont",
    "font_size": 12,
    "preview_bg": "#f4f4f5",
    "open_tool": "border-radius",
    "log_level": "WARNING",
}


class ConfigSaveError(Exception):
    """Raised when the configuration cannot be written to disk."""


def _backup_corrupt_config() -> None:
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    backup = f"{CONFIG_PATH}.corrupt-{stamp}"
    try:
        shutil.copy2(CONFIG_PATH, backup)
    except OSError as exc:
        _logger.warning("Could not back up corrupt config %s: %s", CONFIG_PATH, exc)
    else:
        _logger.warning("Config %s was unreadable; saved a copy to %s", CONFIG_PATH, backup)


def load_config() -> dict:
    try:
        os.makedirs(APP_DIR, exist_ok=True)
        if not os.path.exists(CONFIG_PATH):
            save_config(DEFAULTS)
            return DEFAULTS.copy()
        try:
            with open(CONFIG_PATH, encoding="utf-8") as f:
                data = json.load(f)
        except (ValueError, UnicodeDecodeError):
            data = None
        if not isinstance(data, dict):
            _backup_corrupt_config()
            save_config(DEFAULTS)
            return DEFAULTS.copy()
        changed = False
        for k, v in DEFAULTS.items():
            if k not in data:
                data[k] = v
                changed = True
        if changed:
            save_config(data)
        return data
    except (OSError, ConfigSaveError) as exc:
        _logger.warning("Falling back to default settings: %s", exc)
        return DEFAULTS.copy()


def save_config(cfg: dict) -> None:
    os.makedirs(APP_DIR, exist_ok=True)
    fd, tmp_path = tempfile.mkstemp(prefix="config.", suffix=".tmp", dir=APP_DIR)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(cfg, f, indent=2)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, CONFIG_PATH)
    except Exception as exc:
        with contextlib.suppress(Exception):
            os.unlink(tmp_path)
        raise ConfigSaveError(f"Failed to save config to {CONFIG_PATH}: {exc}") from exc
