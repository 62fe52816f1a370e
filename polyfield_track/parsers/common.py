# polyfield_track/parsers/common.py
from __future__ import annotations

import csv
import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from polyfield_track.encoding import Detector, detect_charset, read_text
from polyfield_track.errors import InsufficientFields, MalformedTime, NoValidRecords, ResultParseError
from polyfield_track.logging_util import AppLogger
from polyfield_track.models import Competitor, DNF, DNS, DQ
from polyfield_track.timefmt import round_and_format_time

_log = AppLogger()

RowInterpreter = Callable[[List[str]], Optional[Competitor]]


@dataclass
class ParsedEvent:
    """What a format parser hands to the assembler (competitors still in file order)."""
    event_name: str
    wind: str
    competitors: List[Competitor] = field(default_factory=list)


def read_rows(path: Path, delimiter: str, detect: Detector = detect_charset, *, log_rows: bool = False) -> List[List[str]]:
    """
    Decode the file and split it into rows. Blank lines are dropped before
    any row index is assigned; rows keep whatever field count they have.
    """
    text = read_text(path, detect)
    try:
        rows = [row for row in csv.reader(io.StringIO(text, newline=""), delimiter=delimiter) if row]
    except csv.Error as e:
        raise ResultParseError(path, f"Malformed table: {e}")

    if log_rows:
        for i, row in enumerate(rows):
            _log.debug(f"Row {i} (fields: {len(row)}): {row}")
    return rows


def require_fields(row: Sequence[str], n: int) -> None:
    if len(row) < n:
        raise InsufficientFields(len(row), n)


def is_non_starter(place: str) -> bool:
    return place == "" or place.upper() == DNS


def finish_marker(place: str, raw_time: str) -> Optional[str]:
    # DQ wins when both markers could apply
    marks = (place.strip().upper(), raw_time.upper())
    if DQ in marks:
        return DQ
    if DNF in marks:
        return DNF
    return None


def resolve_result(place: str, raw_time: str) -> Tuple[str, str]:
    """
    (place, time) as displayed. DQ/DNF entries lose their place and carry the
    marker as time; everyone else gets a canonical formatted time.
    Raises MalformedTime when the row has no usable time.
    """
    marker = finish_marker(place, raw_time)
    if marker is not None:
        return "", marker
    if raw_time == "":
        raise MalformedTime("no time value")
    return place, round_and_format_time(raw_time)


def clean_wind(raw: str, *, na_means_none: bool = False) -> str:
    """'(+1.2 Manual)' -> '+1.2 m/s'; empty/'0' (and 'N/A' when asked) -> ''."""
    value = raw.strip()
    if not value:
        return ""
    if na_means_none and value.upper() in ("N/A", "N/A M/S"):
        return ""

    for junk in ("Manual", "manual", "(", ")"):
        value = value.replace(junk, "")
    value = value.strip()

    if value == "" or value == "0":
        return ""
    if "m/s" in value:
        return value
    return value + " m/s"


def split_name(name: str) -> Tuple[str, str]:
    """'John Paul Smith' -> ('John', 'Paul Smith'); 'Smith' -> ('', 'Smith')."""
    parts = name.split()
    if len(parts) >= 2:
        return parts[0], " ".join(parts[1:])
    if len(parts) == 1:
        return "", parts[0]
    return "", ""


def strip_parenthesized(value: str) -> str:
    """Remove every '(...)' annotation; an unclosed '(' cuts off the rest."""
    while True:
        open_idx = value.find("(")
        if open_idx == -1:
            return value
        close_idx = value.find(")", open_idx)
        if close_idx == -1:
            return value[:open_idx].strip()
        value = (value[:open_idx] + value[close_idx + 1:]).strip()


def collect_competitors(path: Path, rows: Sequence[List[str]], first_row: int,
                        interpret: RowInterpreter) -> List[Competitor]:
    """
    Run every data row through `interpret`. A bad row is logged and skipped,
    never fatal; a file without a single usable row is.
    """
    competitors: List[Competitor] = []
    for i in range(first_row, len(rows)):
        try:
            competitor = interpret(rows[i])
        except (InsufficientFields, MalformedTime) as e:
            _log.info(f"{path.name}: row {i} skipped: {e}")
            continue
        if competitor is None:
            _log.debug(f"{path.name}: row {i} skipped: DNS entry or empty place")
            continue
        competitors.append(competitor)

    if not competitors:
        raise NoValidRecords(path, "no valid competitor data found")
    return competitors
