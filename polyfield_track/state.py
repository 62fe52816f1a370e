# polyfield_track/state.py
from __future__ import annotations

import threading
from typing import Optional

from polyfield_track.models import LifData


class PublishedState:
    """
    The single "latest result" slot. The watcher thread writes it, the
    serving layer reads it; the lock is only held for the swap/read.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._latest: Optional[LifData] = None

    def publish(self, data: LifData) -> None:
        with self._lock:
            self._latest = data

    def latest(self) -> Optional[LifData]:
        with self._lock:
            return self._latest
