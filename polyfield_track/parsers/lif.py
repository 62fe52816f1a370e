# polyfield_track/parsers/lif.py
from __future__ import annotations

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
)
from polyfield_track.timefmt import clean_time_string

# comma-delimited .lif export
# row 0:  event metadata, event name in column 3, wind in column 4
# row 1+: place, id, (unused), last name, first name, affiliation, time
EVENT_NAME_COL = 3
WIND_COL = 4
MIN_FIELDS = 7


def _competitor(row: List[str]) -> Optional[Competitor]:
    require_fields(row, MIN_FIELDS)

    place = row[0].strip()
    if is_non_starter(place):
        return None

    place, time = resolve_result(place, clean_time_string(row[6].strip()))
    return Competitor(
        place=place,
        id=row[1].strip(),
        first_name=row[4].strip(),
        last_name=row[3].strip(),
        affiliation=row[5].strip(),
        time=time,
    )


def parse_lif(path: Path, detect: Detector = detect_charset, *, log_rows: bool = False) -> ParsedEvent:
    path = Path(path)
    rows = read_rows(path, ",", detect, log_rows=log_rows)
    if not rows:
        raise NoValidRecords(path, "no records found")

    event_row = rows[0]
    # event name keeps the spacing the timing software wrote
    event_name = event_row[EVENT_NAME_COL] if len(event_row) > EVENT_NAME_COL else ""
    wind = clean_wind(event_row[WIND_COL]) if len(event_row) > WIND_COL else ""

    competitors = collect_competitors(path, rows, 1, _competitor)
    return ParsedEvent(event_name=event_name, wind=wind, competitors=competitors)
