"""
Schedule editing operations for a single assignment.

Every operation takes the current block list and returns a new, sorted
list; the input is never mutated. Per day, the result holds no two blocks
that overlap or share a boundary.
"""

import logging
from collections.abc import Iterable
from typing import Any, Optional

from .intervals import (
    format_minutes_12h,
    normalize_day,
    sort_blocks,
    to_minutes,
    touches_or_overlaps,
)
from .types import (
    DEFAULT_WINDOW,
    EDIT_DAYS,
    DayCode,
    EditResult,
    ScheduleWindow,
    TimeBlock,
)


logger = logging.getLogger(__name__)


def merge_day(blocks: Iterable[TimeBlock]) -> list[TimeBlock]:
    """Sweep-merge overlapping or adjacent blocks of a single day."""
    merged: list[TimeBlock] = []
    for block in sorted(blocks, key=lambda b: (b.start_minutes, b.end_minutes)):
        if merged and touches_or_overlaps(merged[-1], block):
            last = merged[-1]
            merged[-1] = TimeBlock(
                last.day,
                last.start_minutes,
                max(last.end_minutes, block.end_minutes),
            )
        else:
            merged.append(block)
    return merged


def merge_blocks(blocks: Iterable[TimeBlock]) -> list[TimeBlock]:
    """Merge every day independently. Used to repair loaded data."""
    by_day: dict[DayCode, list[TimeBlock]] = {}
    for block in blocks:
        by_day.setdefault(block.day, []).append(block)

    result = []
    for day_blocks in by_day.values():
        result.extend(merge_day(day_blocks))
    return sort_blocks(result)


def insert_block(blocks: Iterable[TimeBlock], block: TimeBlock) -> list[TimeBlock]:
    """
    Add a block, merging it with every same-day block it overlaps or touches.

    Inserting a block that is already covered returns the same set.
    """
    blocks = list(blocks)
    same_day = [b for b in blocks if b.day == block.day]
    other_days = [b for b in blocks if b.day != block.day]
    return sort_blocks(other_days + merge_day(same_day + [block]))


def remove_range(
    blocks: Iterable[TimeBlock],
    day: DayCode,
    start_minutes: int,
    end_minutes: int,
) -> list[TimeBlock]:
    """
    Subtract [start, end) from every block on the given day.

    Covered blocks are deleted, partially covered blocks are trimmed and a
    block strictly containing the range is split in two. Zero-length
    remainders are dropped.
    """
    blocks = list(blocks)
    if start_minutes >= end_minutes:
        return sort_blocks(blocks)

    updated = []
    for block in blocks:
        if block.day != day:
            updated.append(block)
            continue
        # No intersection
        if block.end_minutes <= start_minutes or block.start_minutes >= end_minutes:
            updated.append(block)
            continue
        if block.start_minutes < start_minutes:
            updated.append(TimeBlock(day, block.start_minutes, start_minutes))
        if block.end_minutes > end_minutes:
            updated.append(TimeBlock(day, end_minutes, block.end_minutes))

    return sort_blocks(updated)


def remove_block(blocks: Iterable[TimeBlock], block: TimeBlock) -> list[TimeBlock]:
    """Delete one exact block if present."""
    return sort_blocks(b for b in blocks if b != block)


def clear() -> list[TimeBlock]:
    return []


def _window_message(window: ScheduleWindow) -> str:
    return (
        f"Times must be between {format_minutes_12h(window.start_minutes)} "
        f"and {format_minutes_12h(window.end_minutes)}."
    )


def validate_precise_block(
    blocks: list[TimeBlock],
    day: Any,
    start: Any,
    end: Any,
    window: ScheduleWindow = DEFAULT_WINDOW,
) -> tuple[Optional[TimeBlock], Optional[str]]:
    """
    Validate a manually entered block.

    Returns:
        (block, None) when the entry can be inserted, otherwise
        (None, message) with a user-facing reason.
    """
    day_code = normalize_day(day)
    if day_code is None:
        return None, "Choose a day for this time block."
    if day_code not in EDIT_DAYS:
        return None, "Only Monday through Friday can be scheduled."

    start_minutes = to_minutes(start)
    end_minutes = to_minutes(end)
    if start_minutes is None or end_minutes is None:
        return None, "Enter a valid start and end time."
    if start_minutes >= end_minutes:
        return None, "End time must be after the start time."
    if start_minutes < window.start_minutes or end_minutes > window.end_minutes:
        return None, _window_message(window)

    block = TimeBlock(day_code, start_minutes, end_minutes)
    if block in blocks:
        return None, "That time entry already exists."
    return block, None


def add_precise_block(
    blocks: Iterable[TimeBlock],
    day: Any,
    start: Any,
    end: Any,
    window: ScheduleWindow = DEFAULT_WINDOW,
) -> EditResult:
    """Insert a manually entered block after validating it."""
    blocks = sort_blocks(blocks)
    block, error = validate_precise_block(blocks, day, start, end, window)
    if block is None:
        logger.debug("Rejected manual entry %r %r-%r: %s", day, start, end, error)
        return EditResult(success=False, blocks=blocks, error=error)
    return EditResult(success=True, blocks=insert_block(blocks, block))


def _cell_range(hour: int) -> tuple[int, int]:
    return hour * 60, (hour + 1) * 60


def is_cell_covered(blocks: Iterable[TimeBlock], day: DayCode, hour: int) -> bool:
    """Check if any block on the day intersects the one-hour cell."""
    cell_start, cell_end = _cell_range(hour)
    return any(
        b.day == day and b.start_minutes < cell_end and b.end_minutes > cell_start
        for b in blocks
    )


def validate_cell_day(day: Any) -> Optional[str]:
    """User-facing reason a grid toggle cannot target this day, or None."""
    day_code = normalize_day(day)
    if day_code is None:
        return "Choose a day for this time block."
    if day_code not in EDIT_DAYS:
        return "Only Monday through Friday can be scheduled."
    return None


def toggle_cell(
    blocks: Iterable[TimeBlock],
    day: Any,
    hour: int,
    window: ScheduleWindow = DEFAULT_WINDOW,
) -> list[TimeBlock]:
    """
    Flip one hour cell of the editing grid.

    A covered cell is removed outright, splitting a larger block if
    needed; an empty cell becomes a one-hour block merged with its
    neighbours. Cells outside the editable days or window are ignored.
    """
    blocks = sort_blocks(blocks)
    day_code = normalize_day(day)
    if day_code not in EDIT_DAYS or hour not in window.hours:
        return blocks

    cell_start, cell_end = _cell_range(hour)
    if is_cell_covered(blocks, day_code, hour):
        return remove_range(blocks, day_code, cell_start, cell_end)
    return insert_block(blocks, TimeBlock(day_code, cell_start, cell_end))


def grid_cells(
    blocks: Iterable[TimeBlock],
    window: ScheduleWindow = DEFAULT_WINDOW,
) -> dict[tuple[DayCode, int], bool]:
    """Coverage of every editable (day, hour) cell, derived from the blocks."""
    blocks = list(blocks)
    return {
        (day, hour): is_cell_covered(blocks, day, hour)
        for day in EDIT_DAYS
        for hour in window.hours
    }


PRESETS: dict[str, Optional[tuple[tuple[DayCode, ...], str, str]]] = {
    "M-F 9-5": (EDIT_DAYS, "09:00", "17:00"),
    "M-F 8-12": (EDIT_DAYS, "08:00", "12:00"),
    "M-F 1-5": (EDIT_DAYS, "13:00", "17:00"),
    "MWF 9-12": ((DayCode.MONDAY, DayCode.WEDNESDAY, DayCode.FRIDAY), "09:00", "12:00"),
    "T/R 1-4": ((DayCode.TUESDAY, DayCode.THURSDAY), "13:00", "16:00"),
    "Clear All": None,
}


def apply_preset(name: str) -> EditResult:
    """Replace a schedule with one of the named presets."""
    if name not in PRESETS:
        return EditResult(success=False, blocks=[], error=f"Unknown preset: {name}")

    pattern = PRESETS[name]
    if pattern is None:
        return EditResult(success=True, blocks=clear())

    days, start, end = pattern
    start_minutes, end_minutes = to_minutes(start), to_minutes(end)
    blocks = [TimeBlock(day, start_minutes, end_minutes) for day in days]
    return EditResult(success=True, blocks=sort_blocks(blocks))
