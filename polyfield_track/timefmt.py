# polyfield_track/timefmt.py
from __future__ import annotations

import re
from decimal import Decimal, ROUND_CEILING
from typing import List

from polyfield_track.errors import MalformedTime

_HUNDREDTH = Decimal("0.01")
_NUMBER = re.compile(r"\+?(?:\d+\.?\d*|\.\d+)", re.ASCII)
_UNIT_NAMES = {
    3: ("hours", "minutes", "seconds"),
    2: ("minutes", "seconds"),
    1: ("seconds",),
}
_UNIT_SECONDS = {"hours": 3600, "minutes": 60, "seconds": 1}


def clean_time_string(s: str) -> str:
    """Drop control characters and stray BOMs that timing exports leave in time fields."""
    return "".join(ch for ch in s if ord(ch) >= 32 and ch != "\ufeff")


def _total_seconds(raw: str) -> Decimal:
    raw = raw.strip()
    parts: List[str] = raw.split(":")
    names = _UNIT_NAMES.get(len(parts))
    if names is None:
        raise MalformedTime(f"invalid time format: {raw}")

    total = Decimal(0)
    for name, part in zip(names, parts):
        if not _NUMBER.fullmatch(part):
            raise MalformedTime(f"invalid {name} in time format: {raw}")
        try:
            total += Decimal(part) * _UNIT_SECONDS[name]
        except ArithmeticError:
            raise MalformedTime(f"time out of range: {raw}") from None

    return total


def parse_time_string(raw: str) -> float:
    """
    Convert h:mm:ss.xxx, mm:ss.xxx or ss.xxx (any decimal precision)
    into total elapsed seconds.
    """
    return float(_total_seconds(raw))


def round_and_format_time(raw: str) -> str:
    """
    Round the time *up* to the next hundredth and lay it out by magnitude:
      h:mm:ss.xx  if there are hours
      m:ss.xx     if there are minutes
      s.xx        otherwise
    """
    try:
        rounded = _total_seconds(raw).quantize(_HUNDREDTH, rounding=ROUND_CEILING)
    except ArithmeticError:
        raise MalformedTime(f"time out of range: {raw}") from None

    # whole hundredths, so 119.999 -> 12000 carries cleanly into 2:00.00
    total_hundredths = int(rounded * 100)
    whole_seconds, hundredths = divmod(total_hundredths, 100)
    hours, rest = divmod(whole_seconds, 3600)
    minutes, seconds = divmod(rest, 60)

    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}.{hundredths:02d}"
    if minutes > 0:
        return f"{minutes}:{seconds:02d}.{hundredths:02d}"
    return f"{seconds}.{hundredths:02d}"
