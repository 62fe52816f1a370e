# polyfield_track/parsers/res.py
from __future__ import annotations

import os
from functools import partial
from pathlib import Path
from typing import List, Optional

from polyfield_track.encoding import Detector, detect_charset
from polyfield_track.errors import NoValidRecords
from polyfield_track.models import Competitor
from polyfield_track.parsers.common import (
    ParsedEvent,
    clean_wind,
    collect_competitors,
    is_non_starter,
    read_rows,
    require_fields,
    resolve_result,
    split_name,
    strip_parenthesized,
)
from polyfield_track.timefmt import clean_time_string

# TAB-delimited .res / .txt export
# row 0:  image info (file name, wind, file size, lines per second, time, date)
# row 1:  header, skipped
# row 2+: place, lane, time, [id], [name], [affiliation | information]
EVENT_PREFIX = "# Event:"
MIN_FIELDS = 3
FIRST_DATA_ROW = 2


def _event_name(rows: List[List[str]]) -> str:
    image_info = rows[0]
    name = ""
    if image_info:
        name = os.path.splitext(image_info[0].strip())[0]

    for row in rows:
        first = row[0].strip()
        if first.startswith(EVENT_PREFIX):
            return first[len(EVENT_PREFIX):].strip()
    return name


def _competitor(row: List[str], *, restricted: bool) -> Optional[Competitor]:
    require_fields(row, MIN_FIELDS)

    place = row[0].strip()
    if is_non_starter(place) or place.startswith("#"):
        return None

    # field 1 is the lane, not displayed
    raw_time = clean_time_string(row[2].strip())

    id_ = row[3].strip() if len(row) > 3 else ""
    if restricted:
        id_ = strip_parenthesized(id_)

    first_name, last_name = split_name(row[4].strip()) if len(row) > 4 else ("", "")

    # the restricted variant writes numeric "Information" into field 5
    affiliation = row[5].strip() if len(row) > 5 and not restricted else ""

    place, time = resolve_result(place, raw_time)
    return Competitor(
        place=place,
        id=id_,
        first_name=first_name,
        last_name=last_name,
        affiliation=affiliation,
        time=time,
    )


def parse_res(path: Path, detect: Detector = detect_charset, *,
              restricted: bool = False, log_rows: bool = False) -> ParsedEvent:
    """
    Parse a tab-delimited result export. `restricted` selects the reduced
    device variant (.txt): bracket notes stripped from ids, field 5 dropped,
    'N/A' wind treated as no wind.
    """
    path = Path(path)
    rows = read_rows(path, "\t", detect, log_rows=log_rows)
    if len(rows) < 3:
        raise NoValidRecords(path, f"insufficient records (found {len(rows)} lines, expected at least 3)")

    image_info = rows[0]
    wind = clean_wind(image_info[1], na_means_none=restricted) if len(image_info) > 1 else ""

    competitors = collect_competitors(path, rows, FIRST_DATA_ROW,
                                      partial(_competitor, restricted=restricted))
    return ParsedEvent(event_name=_event_name(rows), wind=wind, competitors=competitors)


def parse_txt(path: Path, detect: Detector = detect_charset, *, log_rows: bool = False) -> ParsedEvent:
    return parse_res(path, detect, restricted=True, log_rows=log_rows)
