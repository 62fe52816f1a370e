# polyfield_track/assembler.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Tuple

from polyfield_track.models import Competitor, LifData
from polyfield_track.parsers.common import ParsedEvent
from polyfield_track.timefmt import parse_time_string


def assemble_competitors(competitors: Iterable[Competitor]) -> Tuple[Competitor, ...]:
    """Timed entries fastest first, then DQ/DNF in the order the file listed them."""
    timed: List[Competitor] = []
    untimed: List[Competitor] = []
    for c in competitors:
        (untimed if c.is_non_finishing else timed).append(c)

    # times were formatted by us already, re-parsing cannot fail
    timed.sort(key=lambda c: parse_time_string(c.time))
    return tuple(timed + untimed)


def build_lif_data(path: Path, parsed: ParsedEvent) -> LifData:
    path = Path(path)
    mtime = int(path.stat().st_mtime)
    return LifData(
        file_name=path.name,
        event_name=parsed.event_name,
        wind=parsed.wind,
        competitors=assemble_competitors(parsed.competitors),
        modified_time=mtime,
    )
