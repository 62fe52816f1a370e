# polyfield_track/paths.py
from __future__ import annotations

import os
from pathlib import Path

APP_DIR_NAME = "PolyFieldTrack"
CONFIG_FILE = "config.json"
LOG_FILE = "app.log"


def app_dir() -> Path:
    """Per-user folder holding config.json and app.log, created on first use."""
    local = os.environ.get("LOCALAPPDATA")
    # timing PCs are Windows; elsewhere a dot-folder under home
    p = Path(local) / APP_DIR_NAME if local else Path.home() / f".{APP_DIR_NAME.lower()}"
    p.mkdir(parents=True, exist_ok=True)
    return p

def config_path() -> Path:
    return app_dir() / CONFIG_FILE

def log_file_path() -> Path:
    return app_dir() / LOG_FILE
