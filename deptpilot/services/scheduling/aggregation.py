"""
Weekly hours and pay totals.
"""

import math
import re
from collections.abc import Container, Iterable
from datetime import date, datetime
from typing import Any, Optional, Union

from .status import assignment_status
from .types import (
    Assignment,
    AssignmentSummary,
    LifecycleStatus,
    SemesterWindow,
    TimeBlock,
    Worker,
)


def parse_hourly_rate(value: Any) -> float:
    """Parse a rate such as 12.5, "12.50" or "$12.50/hr". Unparsable -> 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else 0.0

    match = re.search(r"-?\d+(?:\.\d+)?|-?\.\d+", re.sub(r"[^0-9.\-]", "", str(value)))
    if not match:
        return 0.0
    return float(match.group(0))


def weekly_hours(blocks: Iterable[TimeBlock]) -> float:
    return sum(b.duration_minutes for b in blocks) / 60


def weekly_pay(assignment: Assignment) -> float:
    return weekly_hours(assignment.blocks) * parse_hourly_rate(assignment.hourly_rate)


def format_currency(value: Optional[float]) -> str:
    return f"${(value or 0):,.2f}"


def format_hours(value: Optional[float]) -> str:
    return f"{(value or 0):,.2f}"


def summarize_assignment(assignment: Assignment, index: int = 0) -> AssignmentSummary:
    rate = parse_hourly_rate(assignment.hourly_rate)
    hours = weekly_hours(assignment.blocks)
    if rate:
        rate_display = format_currency(rate)
    else:
        rate_display = str(assignment.hourly_rate or "")
    return AssignmentSummary(
        title=assignment.title or f"Assignment {index + 1}",
        weekly_hours=hours,
        hourly_rate=rate,
        weekly_pay=hours * rate,
        rate_display=rate_display,
    )


def filter_assignments_by_status(
    worker: Worker,
    statuses: Container[LifecycleStatus],
    window: Optional[SemesterWindow] = None,
    reference: Union[date, datetime, None] = None,
) -> list[Assignment]:
    """Assignments whose status is in the given set, for active-only totals."""
    return [
        a for a in worker.assignments
        if assignment_status(a, worker, window, reference) in statuses
    ]


def worker_weekly_hours(
    source: Union[Worker, Iterable[Assignment]],
) -> float:
    """Total hours across all assignments, regardless of status."""
    assignments = source.assignments if isinstance(source, Worker) else source
    return sum(weekly_hours(a.blocks) for a in assignments)


def worker_weekly_pay(
    source: Union[Worker, Iterable[Assignment]],
) -> float:
    """Total pay across all assignments, regardless of status."""
    assignments = source.assignments if isinstance(source, Worker) else source
    return sum(weekly_pay(a) for a in assignments)
