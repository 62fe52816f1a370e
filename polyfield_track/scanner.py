# polyfield_track/scanner.py
from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from polyfield_track.encoding import Detector, detect_charset
from polyfield_track.errors import DirectoryUnreadable, DirectoryUnset, ResultParseError
from polyfield_track.formats import is_result_file, parse_result_file
from polyfield_track.logging_util import AppLogger
from polyfield_track.models import LifData

_log = AppLogger()


def dedupe_results(results: List[LifData]) -> List[LifData]:
    """
    Collapse exports that describe the same race (same names + times in the
    same order), keeping the newest file. Output is oldest -> newest.
    """
    if not results:
        return []

    df = pd.DataFrame({
        "key": [repr(r.composition_key()) for r in results],
        "modified_time": [r.modified_time for r in results],
        "pos": range(len(results)),
    })
    # pos breaks mtime ties in listing order, so "last" below is the newest file
    df = df.sort_values(["modified_time", "pos"])
    df = df.drop_duplicates(subset="key", keep="last")
    return [results[i] for i in df["pos"].tolist()]


def scan_directory(directory: Optional[Union[str, Path]], detect: Detector = detect_charset, *,
                   log_rows: bool = False) -> List[LifData]:
    """
    Parse every recognized export in `directory` fresh.
    Files that fail to parse are logged and left out; only a missing or
    unreadable directory is an error for the caller.
    """
    if not directory:
        raise DirectoryUnset()

    root = Path(directory)
    try:
        with os.scandir(root) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as e:
        raise DirectoryUnreadable(root, e)

    results: List[LifData] = []
    for entry in entries:
        if not is_result_file(entry.name):
            continue
        try:
            if entry.is_dir():
                continue
            results.append(parse_result_file(Path(entry.path), detect, log_rows=log_rows))
        except (ResultParseError, OSError) as e:
            _log.error(f"Error parsing {entry.name}: {e}")

    return dedupe_results(results)
