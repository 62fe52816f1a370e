# polyfield_track/models.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

DQ = "DQ"
DNF = "DNF"
DNS = "DNS"

NON_FINISHING = (DQ, DNF)


@dataclass(frozen=True)
class Competitor:
    place: str = ""  # empty for DQ/DNF
    id: str = ""
    first_name: str = ""
    last_name: str = ""
    affiliation: str = ""
    # s.xx, m:ss.xx, h:mm:ss.xx, or one of the DQ/DNF markers
    time: str = ""

    @property
    def is_non_finishing(self) -> bool:
        return self.time in NON_FINISHING

    def to_dict(self) -> Dict[str, Any]:
        return {
            "place": self.place,
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "affiliation": self.affiliation,
            "time": self.time,
        }


@dataclass(frozen=True)
class LifData:
    """One parsed result file, competitors already in display order."""

    file_name: str
    event_name: str
    wind: str  # "+1.2 m/s" or "" when no wind was recorded
    competitors: Tuple[Competitor, ...] = field(default_factory=tuple)
    modified_time: int = 0  # unix seconds of the source file's mtime

    def composition_key(self) -> Tuple[Tuple[str, str, str], ...]:
        # two exports of the same race (e.g. a re-save) share this key
        return tuple((c.first_name, c.last_name, c.time) for c in self.competitors)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fileName": self.file_name,
            "eventName": self.event_name,
            "wind": self.wind,
            "competitors": [c.to_dict() for c in self.competitors],
            "modifiedTime": self.modified_time,
        }
