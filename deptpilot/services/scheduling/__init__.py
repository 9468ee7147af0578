"""
Weekly schedule engine for student worker assignments.

Usage:
    from deptpilot.services.scheduling import load_worker, worker_status, layout_week

    worker = load_worker(record)
    status = worker_status(worker, window=SemesterWindow(start, end))
    week = layout_week(build_schedule_events(worker))

    # Interactive edits return a new block list
    from deptpilot.services.scheduling import toggle_cell, add_precise_block

    blocks = toggle_cell(assignment.blocks, DayCode.MONDAY, 9)
    result = add_precise_block(blocks, "W", "13:00", "15:30")
"""

from .types import (
    DAY_ORDER,
    EDIT_DAYS,
    DEFAULT_WINDOW,
    DayCode,
    LifecycleStatus,
    TimeBlock,
    ScheduleWindow,
    DateRange,
    SemesterWindow,
    Assignment,
    Worker,
    LegacySingleJob,
    MultiJob,
    EditResult,
    BlockPlacement,
    ScheduleEvent,
    EventPlacement,
    AssignmentSummary,
)
from .intervals import (
    to_minutes,
    normalize_day,
    overlaps,
    compare,
    sort_blocks,
    make_block,
    normalize_weekly_schedule,
    format_block,
    format_schedule,
    block_to_record,
)
from .editor import (
    insert_block,
    remove_range,
    remove_block,
    add_precise_block,
    toggle_cell,
    validate_cell_day,
    is_cell_covered,
    grid_cells,
    apply_preset,
    PRESETS,
)
from .layout import layout_day, layout_week, build_schedule_events, visible_window
from .status import (
    parse_date,
    build_semester_window,
    classify,
    assignment_status,
    worker_status,
)
from .aggregation import (
    parse_hourly_rate,
    weekly_hours,
    weekly_pay,
    summarize_assignment,
    worker_weekly_hours,
    worker_weekly_pay,
)
from .data_loader import load_worker, worker_to_record, load_student_workers

__all__ = [
    # Types
    "DAY_ORDER",
    "EDIT_DAYS",
    "DEFAULT_WINDOW",
    "DayCode",
    "LifecycleStatus",
    "TimeBlock",
    "ScheduleWindow",
    "DateRange",
    "SemesterWindow",
    "Assignment",
    "Worker",
    "LegacySingleJob",
    "MultiJob",
    "EditResult",
    "BlockPlacement",
    "ScheduleEvent",
    "EventPlacement",
    "AssignmentSummary",
    # Interval model
    "to_minutes",
    "normalize_day",
    "overlaps",
    "compare",
    "sort_blocks",
    "make_block",
    "normalize_weekly_schedule",
    "format_block",
    "format_schedule",
    "block_to_record",
    # Editing
    "insert_block",
    "remove_range",
    "remove_block",
    "add_precise_block",
    "toggle_cell",
    "validate_cell_day",
    "is_cell_covered",
    "grid_cells",
    "apply_preset",
    "PRESETS",
    # Layout
    "layout_day",
    "layout_week",
    "build_schedule_events",
    "visible_window",
    # Status
    "parse_date",
    "build_semester_window",
    "classify",
    "assignment_status",
    "worker_status",
    # Totals
    "parse_hourly_rate",
    "weekly_hours",
    "weekly_pay",
    "summarize_assignment",
    "worker_weekly_hours",
    "worker_weekly_pay",
    # Loading
    "load_worker",
    "worker_to_record",
    "load_student_workers",
]
