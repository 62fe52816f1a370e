# polyfield_track/watcher.py
from __future__ import annotations

import os
import queue
import threading
import time
from pathlib import Path
from typing import Callable, Optional

from watchdog.observers import Observer
from watchdog.events import FileSystemEventHandler

from polyfield_track.encoding import Detector, detect_charset
from polyfield_track.errors import ResultParseError
from polyfield_track.formats import is_result_file, parse_result_file
from polyfield_track.logging_util import AppLogger
from polyfield_track.models import LifData
from polyfield_track.state import PublishedState

IDLE = "idle"
WATCHING = "watching"
STOPPED = "stopped"

DEFAULT_SETTLE_DELAY = 0.1  # seconds
DEFAULT_STABLE_CHECKS = 5
DEFAULT_STABLE_INTERVAL = 0.25  # seconds

_log = AppLogger()


def _stable_file(path: Path, checks: int = DEFAULT_STABLE_CHECKS,
                 interval: float = DEFAULT_STABLE_INTERVAL) -> bool:
    """True once two size readings in a row match; False if the export vanishes or keeps growing."""
    sizes = []
    for attempt in range(max(checks, 2)):
        if attempt:
            time.sleep(interval)
        try:
            sizes.append(path.stat().st_size)
        except FileNotFoundError:
            return False
        if len(sizes) >= 2 and sizes[-1] == sizes[-2]:
            return True
    return False


def _same_path(a: str, b: str) -> bool:
    return os.path.normcase(os.path.normpath(a)) == os.path.normcase(os.path.normpath(b))


class ResultFileHandler(FileSystemEventHandler):
    def __init__(self, root: Path, on_file: Callable[[Path], None],
                 on_lost: Optional[Callable[[str], None]] = None):
        super().__init__()
        self.root = Path(root)
        self.on_file = on_file
        self.on_lost = on_lost

    def _maybe_queue(self, raw_path) -> None:
        path = Path(os.fsdecode(raw_path))
        if is_result_file(path):
            self.on_file(path)

    def on_created(self, event):
        if event.is_directory:
            return
        self._maybe_queue(event.src_path)

    def on_modified(self, event):
        if event.is_directory:
            return
        self._maybe_queue(event.src_path)

    def on_moved(self, event):
        if event.is_directory:
            return
        # timing software that writes a temp file and renames it: the new
        # name appearing in the folder is the create
        dest = os.fsdecode(getattr(event, "dest_path", "") or "")
        if dest and _same_path(os.path.dirname(dest), str(self.root)):
            self._maybe_queue(dest)

    def on_deleted(self, event):
        if self.on_lost and _same_path(os.fsdecode(event.src_path), str(self.root)):
            self.on_lost("watched directory was removed")


class FolderWatcher:
    """
    Watches one export folder. Change events are queued; a worker thread
    blocks on the queue, waits the settle delay, reparses the file and swaps
    the result into PublishedState. Failed parses leave the last good result.
    """

    def __init__(self, root: Path, state: PublishedState, *,
                 settle_delay: float = DEFAULT_SETTLE_DELAY,
                 stable_check: bool = False,
                 stable_checks: int = DEFAULT_STABLE_CHECKS,
                 stable_interval: float = DEFAULT_STABLE_INTERVAL,
                 detect: Detector = detect_charset,
                 log_rows: bool = False,
                 on_result: Optional[Callable[[LifData], None]] = None):
        self.root = Path(root)
        self.state = state
        self.settle_delay = float(settle_delay)
        self.stable_check = bool(stable_check)
        self.stable_checks = int(stable_checks)
        self.stable_interval = float(stable_interval)
        self.detect = detect
        self.log_rows = bool(log_rows)
        self.on_result = on_result

        self.observer: Optional[Observer] = None
        self._queue: "queue.Queue[Optional[Path]]" = queue.Queue()
        self._worker: Optional[threading.Thread] = None
        self._observer_lock = threading.Lock()
        self._status = IDLE

    @property
    def status(self) -> str:
        return self._status

    @property
    def is_watching(self) -> bool:
        return self._status == WATCHING

    def start(self) -> bool:
        if self._status == WATCHING:
            return True

        self._queue = queue.Queue()
        handler = ResultFileHandler(self.root, self._queue.put, self._on_watch_lost)
        observer = Observer()
        try:
            observer.schedule(handler, str(self.root), recursive=False)
            observer.start()
        except Exception as e:
            _log.error(f"Error watching {self.root}: {type(e).__name__}: {e}")
            self._status = STOPPED
            return False

        self.observer = observer
        self._worker = threading.Thread(target=self._run, name="result-watcher", daemon=True)
        self._worker.start()
        self._status = WATCHING
        _log.info(f"Monitoring directory: {self.root}")
        return True

    def stop(self) -> None:
        self._release_observer()
        if self._worker:
            self._queue.put(None)
            self._worker.join(timeout=2 + self.settle_delay)
            self._worker = None
        self._status = STOPPED

    def _on_watch_lost(self, reason: str) -> None:
        _log.error(f"Watcher error on {self.root}: {reason}")
        self._status = STOPPED
        self._queue.put(None)

    def _release_observer(self) -> None:
        with self._observer_lock:
            observer, self.observer = self.observer, None
        if observer is None:
            return
        observer.stop()
        if observer is not threading.current_thread():
            observer.join(timeout=2)

    def _run(self) -> None:
        while True:
            path = self._queue.get()
            if path is None:
                break
            self.process_file(path)
        # a lost folder ends the worker first; the observer goes with it
        self._release_observer()

    def process_file(self, path: Path) -> Optional[LifData]:
        """Settle, reparse one changed file and publish it. None if it was not usable."""
        path = Path(path)
        _log.info(f"Detected change in: {path}")

        if self.settle_delay > 0:
            time.sleep(self.settle_delay)
        if self.stable_check and not _stable_file(path, self.stable_checks, self.stable_interval):
            _log.warn(f"{path.name} did not settle, waiting for the next change")
            return None

        try:
            data = parse_result_file(path, self.detect, log_rows=self.log_rows)
        except (ResultParseError, OSError) as e:
            _log.error(f"Error parsing {path.name}: {e}")
            return None

        self.state.publish(data)
        if self.on_result:
            try:
                self.on_result(data)
            except Exception as e:
                _log.error(f"Result callback failed: {type(e).__name__}: {e}")
        return data
