# polyfield_track/logging_util.py
from __future__ import annotations

import datetime
import logging
from typing import Callable, Optional

from .paths import log_file_path

logger = logging.getLogger("polyfield_track")

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
}


class AppLogger:
    def __init__(self, ui_sink: Optional[Callable[[str], None]] = None):
        self.ui_sink = ui_sink

    def _stamp(self) -> str:
        return datetime.datetime.now().strftime("%H:%M:%S")

    def write(self, level: str, msg: str) -> None:
        logger.log(_LEVELS.get(level, logging.INFO), msg)

        line = f"[{self._stamp()}] {level}: {msg}"
        # UI
        if self.ui_sink:
            try:
                self.ui_sink(line)
            except Exception:
                logger.exception("UI log sink failed")
        # File
        try:
            lf = log_file_path()
            with lf.open("a", encoding="utf-8") as f:
                f.write(line + "\n")
        except OSError as e:
            logger.warning("Cannot write app.log: %s", e)

    def debug(self, msg: str) -> None:
        self.write("DEBUG", msg)

    def info(self, msg: str) -> None:
        self.write("INFO", msg)

    def warn(self, msg: str) -> None:
        self.write("WARN", msg)

    def error(self, msg: str) -> None:
        self.write("ERROR", msg)
