# polyfield_track/board.py
from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Union

from polyfield_track.config import AppConfig, load_config, save_config
from polyfield_track.encoding import Detector, detect_charset
from polyfield_track.logging_util import AppLogger
from polyfield_track.models import LifData
from polyfield_track.scanner import scan_directory
from polyfield_track.state import PublishedState
from polyfield_track.watcher import IDLE, FolderWatcher


class ResultsBoard:
    """
    What the serving layer talks to: a full rescan on demand, the latest
    live result, and the hook that fires when a new export folder is chosen.
    """

    def __init__(self, cfg: Optional[AppConfig] = None, *,
                 detect: Detector = detect_charset,
                 persist_config: Optional[bool] = None,
                 on_result: Optional[Callable[[LifData], None]] = None):
        # config loaded from disk is written back on folder changes
        self.persist_config = cfg is None if persist_config is None else persist_config
        self.cfg: AppConfig = cfg if cfg is not None else load_config()
        self.detect = detect
        self.on_result = on_result

        self.state = PublishedState()
        self.watcher: Optional[FolderWatcher] = None
        self.logger = AppLogger()

    @property
    def monitored_dir(self) -> str:
        return self.cfg.monitored_dir

    @property
    def watch_status(self) -> str:
        return self.watcher.status if self.watcher else IDLE

    def scan(self) -> List[LifData]:
        return scan_directory(self.cfg.monitored_dir, self.detect, log_rows=self.cfg.log_rows)

    def get_latest(self) -> Optional[LifData]:
        return self.state.latest()

    def on_directory_selected(self, path: Union[str, Path, None]) -> str:
        if not path:
            self.logger.info("No directory selected (user canceled)")
            return self.watch_status

        self.logger.info(f"Directory selected: {path}")
        self._stop_watcher()

        self.cfg.monitored_dir = str(path)
        if self.persist_config:
            save_config(self.cfg)

        self._start_watcher(Path(path))
        return self.watch_status

    def start(self) -> str:
        if self.cfg.monitored_dir:
            root = Path(self.cfg.monitored_dir)
            if root.is_dir():
                self._start_watcher(root)
            else:
                self.logger.warn(f"Monitored folder does not exist: {root}")
        return self.watch_status

    def stop(self) -> None:
        self._stop_watcher()

    def _start_watcher(self, root: Path) -> None:
        self.watcher = FolderWatcher(
            root,
            self.state,
            settle_delay=self.cfg.settle_delay_s,
            stable_check=self.cfg.stable_check,
            stable_checks=self.cfg.stable_checks,
            stable_interval=self.cfg.stable_interval_s,
            detect=self.detect,
            log_rows=self.cfg.log_rows,
            on_result=self.on_result,
        )
        self.watcher.start()

    def _stop_watcher(self) -> None:
        if self.watcher:
            self.watcher.stop()
            self.watcher = None
