# polyfield_track/formats.py
from __future__ import annotations

from pathlib import Path
from typing import Callable, Dict

from polyfield_track.assembler import build_lif_data
from polyfield_track.encoding import Detector, detect_charset
from polyfield_track.errors import UnsupportedFormat
from polyfield_track.models import LifData
from polyfield_track.parsers.common import ParsedEvent
from polyfield_track.parsers.lif import parse_lif
from polyfield_track.parsers.res import parse_res, parse_txt

FormatParser = Callable[..., ParsedEvent]

# extension -> parser; the only place that decides which format a file is
FORMATS: Dict[str, FormatParser] = {
    ".lif": parse_lif,
    ".res": parse_res,
    ".txt": parse_txt,
}


def extension_of(path) -> str:
    return Path(path).suffix.lower()


def is_result_file(path) -> bool:
    return extension_of(path) in FORMATS


def parse_result_file(path: Path, detect: Detector = detect_charset, *, log_rows: bool = False) -> LifData:
    """
    Parse one export into display-ready LifData.
    Raises ResultParseError (or OSError if the file vanished / is locked).
    """
    path = Path(path)
    parser = FORMATS.get(extension_of(path))
    if parser is None:
        raise UnsupportedFormat(path, f"unsupported file type: {path.suffix}")

    parsed = parser(path, detect, log_rows=log_rows)
    return build_lif_data(path, parsed)
