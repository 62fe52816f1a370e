# polyfield_track/config.py
from __future__ import annotations

import json
from dataclasses import dataclass, asdict
from typing import Any, Dict

from polyfield_track.logging_util import AppLogger
from polyfield_track.paths import config_path


@dataclass
class AppConfig:
    monitored_dir: str = ""      # folder the timing system exports into

    # pause after a change event before reparsing (writer may still be flushing)
    settle_delay_s: float = 0.1
    # additionally wait until the file size stops changing (slow shares)
    stable_check: bool = False
    stable_checks: int = 5           # size samples before giving up
    stable_interval_s: float = 0.25  # between size samples

    # dump every raw row to the log while parsing
    log_rows: bool = False


def _from_dict(data: Dict[str, Any]) -> AppConfig:
    d = AppConfig()
    return AppConfig(
        monitored_dir=str(data.get("monitored_dir", d.monitored_dir)),
        settle_delay_s=float(data.get("settle_delay_s", d.settle_delay_s)),
        stable_check=bool(data.get("stable_check", d.stable_check)),
        stable_checks=int(data.get("stable_checks", d.stable_checks)),
        stable_interval_s=float(data.get("stable_interval_s", d.stable_interval_s)),
        log_rows=bool(data.get("log_rows", d.log_rows)),
    )


def load_config() -> AppConfig:
    """Read config.json; a missing or unreadable file is replaced with defaults."""
    path = config_path()
    if path.exists():
        try:
            return _from_dict(json.loads(path.read_text(encoding="utf-8")))
        except (ValueError, TypeError, AttributeError) as e:
            AppLogger().warn(f"Config unreadable, using defaults: {type(e).__name__}: {e}")
    cfg = AppConfig()
    save_config(cfg)
    return cfg


def save_config(cfg: AppConfig) -> None:
    config_path().write_text(json.dumps(asdict(cfg), indent=2), encoding="utf-8")
