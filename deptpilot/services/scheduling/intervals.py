"""
Interval model utilities.
Parsing, formatting, ordering and overlap checks for weekly time blocks.
"""

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any, Optional

from .types import (
    EDIT_DAYS,
    MINUTES_PER_DAY,
    DEFAULT_WINDOW,
    DayCode,
    ScheduleWindow,
    TimeBlock,
)


logger = logging.getLogger(__name__)

_DAY_ALIASES: dict[str, DayCode] = {
    "M": DayCode.MONDAY,
    "MON": DayCode.MONDAY,
    "MONDAY": DayCode.MONDAY,
    "T": DayCode.TUESDAY,
    "TU": DayCode.TUESDAY,
    "TUE": DayCode.TUESDAY,
    "TUES": DayCode.TUESDAY,
    "TUESDAY": DayCode.TUESDAY,
    "W": DayCode.WEDNESDAY,
    "WED": DayCode.WEDNESDAY,
    "WEDNESDAY": DayCode.WEDNESDAY,
    "R": DayCode.THURSDAY,
    "TH": DayCode.THURSDAY,
    "THU": DayCode.THURSDAY,
    "THUR": DayCode.THURSDAY,
    "THURS": DayCode.THURSDAY,
    "THURSDAY": DayCode.THURSDAY,
    "F": DayCode.FRIDAY,
    "FRI": DayCode.FRIDAY,
    "FRIDAY": DayCode.FRIDAY,
    "S": DayCode.SATURDAY,
    "SAT": DayCode.SATURDAY,
    "SATURDAY": DayCode.SATURDAY,
    "U": DayCode.SUNDAY,
    "SU": DayCode.SUNDAY,
    "SUN": DayCode.SUNDAY,
    "SUNDAY": DayCode.SUNDAY,
}

_TIME_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?\s*(am|pm)?$")


def normalize_day(value: Any) -> Optional[DayCode]:
    """Map a day code, abbreviation or full name to a DayCode."""
    if isinstance(value, DayCode):
        return value
    if value is None:
        return None
    raw = str(value).strip().upper()
    if not raw:
        return None
    key = raw if len(raw) == 1 else re.sub(r"[^A-Z]", "", raw)
    return _DAY_ALIASES.get(key)


def to_minutes(value: Any) -> Optional[int]:
    """
    Parse a time of day into minutes after midnight.

    Accepts "HH:MM" (24h), an optional am/pm suffix ("9:30 AM", "1pm")
    and plain integers that are already minute offsets. Returns None for
    anything malformed or outside 0-1440; half-typed form input is
    expected, so this never raises.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 0 <= value <= MINUTES_PER_DAY else None

    match = _TIME_RE.match(str(value).strip().lower())
    if not match:
        return None

    hour = int(match.group(1))
    minute = int(match.group(2)) if match.group(2) is not None else None
    meridiem = match.group(3)

    if minute is None and meridiem is None:
        # bare "9" is ambiguous
        return None
    minute = minute or 0
    if minute > 59:
        return None

    if meridiem:
        if hour < 1 or hour > 12:
            return None
        if meridiem == "pm" and hour != 12:
            hour += 12
        elif meridiem == "am" and hour == 12:
            hour = 0

    total = hour * 60 + minute
    if total > MINUTES_PER_DAY:
        return None
    return total


def format_minutes(minutes: int) -> str:
    """Minutes after midnight as zero-padded 24h "HH:MM"."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def format_minutes_12h(minutes: int) -> str:
    """Minutes after midnight as "9:30 AM"."""
    hour24 = (minutes // 60) % 24
    minute = minutes % 60
    suffix = "PM" if hour24 >= 12 else "AM"
    hour12 = (hour24 + 11) % 12 + 1
    return f"{hour12}:{minute:02d} {suffix}"


def format_block(block: TimeBlock) -> str:
    return (
        f"{block.day.value} {format_minutes_12h(block.start_minutes)}"
        f"-{format_minutes_12h(block.end_minutes)}"
    )


def format_schedule(blocks: Iterable[TimeBlock]) -> str:
    """One-line schedule summary, e.g. for CSV export."""
    return "; ".join(format_block(b) for b in sort_blocks(blocks))


def block_to_record(block: TimeBlock) -> dict[str, str]:
    return {
        "day": block.day.value,
        "start": format_minutes(block.start_minutes),
        "end": format_minutes(block.end_minutes),
    }


def make_block(day: Any, start: Any, end: Any) -> Optional[TimeBlock]:
    """Build a TimeBlock from loose input, or None if it would be invalid."""
    day_code = normalize_day(day)
    start_minutes = to_minutes(start)
    end_minutes = to_minutes(end)
    if day_code is None or start_minutes is None or end_minutes is None:
        return None
    if start_minutes >= end_minutes:
        return None
    return TimeBlock(day_code, start_minutes, end_minutes)


def overlaps(a: TimeBlock, b: TimeBlock) -> bool:
    """Check if two blocks overlap. Touching endpoints do not count."""
    return a.day == b.day and a.start_minutes < b.end_minutes and b.start_minutes < a.end_minutes


def touches_or_overlaps(a: TimeBlock, b: TimeBlock) -> bool:
    """Check if two blocks overlap or share a boundary (merge candidates)."""
    return a.day == b.day and a.end_minutes >= b.start_minutes and a.start_minutes <= b.end_minutes


def sort_key(block: TimeBlock) -> tuple[int, int, int]:
    return (block.day.order, block.start_minutes, block.end_minutes)


def compare(a: TimeBlock, b: TimeBlock) -> int:
    """Three-way comparison by (day, start, end)."""
    ka, kb = sort_key(a), sort_key(b)
    return (ka > kb) - (ka < kb)


def sort_blocks(blocks: Iterable[TimeBlock]) -> list[TimeBlock]:
    return sorted(blocks, key=sort_key)


def within_window(
    block: TimeBlock,
    window: ScheduleWindow = DEFAULT_WINDOW,
    days: tuple[DayCode, ...] = EDIT_DAYS,
) -> bool:
    """Check if a block lies on an editable day inside the editing window."""
    return (
        block.day in days
        and block.start_minutes >= window.start_minutes
        and block.end_minutes <= window.end_minutes
    )


def _entry_field(entry: Any, name: str) -> Any:
    if isinstance(entry, Mapping):
        return entry.get(name)
    return getattr(entry, name, None)


def normalize_weekly_schedule(entries: Any) -> list[TimeBlock]:
    """
    Convert raw {day, start, end} entries into sorted, de-duplicated blocks.

    Malformed or zero-length entries are dropped. Blocks outside the
    editing window are kept; stored data may come from other sources.
    """
    if not isinstance(entries, (list, tuple)):
        return []

    seen: set[TimeBlock] = set()
    blocks = []
    for entry in entries:
        if isinstance(entry, TimeBlock):
            block = entry
        else:
            block = make_block(
                _entry_field(entry, "day"),
                _entry_field(entry, "start"),
                _entry_field(entry, "end"),
            )
        if block is None:
            logger.debug("Dropping malformed schedule entry: %r", entry)
            continue
        if block in seen:
            continue
        seen.add(block)
        blocks.append(block)

    return sort_blocks(blocks)
