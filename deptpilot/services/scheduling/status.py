"""
Lifecycle status for assignments and workers.

A date range is classified against either a semester window or a single
reference date (today by default). Dates are day-granular: an end date
covers its whole day.
"""

from collections.abc import Mapping
from datetime import date, datetime
from typing import Any, Optional, Union

from .types import (
    Assignment,
    DateRange,
    LifecycleStatus,
    SemesterWindow,
    Worker,
)


def parse_date(value: Any) -> Optional[date]:
    """Parse a stored date value. Anything unusable becomes None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    raw = str(value).strip()
    if not raw:
        return None
    # Only the date part matters; "2024-01-10T05:00:00Z" is 2024-01-10
    date_part = raw.split("T")[0].split(" ")[0]
    try:
        return date.fromisoformat(date_part)
    except ValueError:
        return None


def build_semester_window(meta: Optional[Mapping[str, Any]]) -> Optional[SemesterWindow]:
    """
    Build a window from semester metadata.

    Accepts camelCase (startDate/endDate) or snake_case keys. Returns None
    when neither bound is usable, which means "evaluate against today".
    """
    if not meta:
        return None
    start = parse_date(meta.get("startDate", meta.get("start_date")))
    end = parse_date(meta.get("endDate", meta.get("end_date")))
    window = SemesterWindow(start=start, end=end)
    return None if window.is_empty else window


def _overlaps_window(date_range: DateRange, window: SemesterWindow) -> bool:
    # Absent bounds are treated as -inf / +inf on both sides
    ends_before_window = (
        date_range.end is not None
        and window.start is not None
        and date_range.end < window.start
    )
    starts_after_window = (
        date_range.start is not None
        and window.end is not None
        and date_range.start > window.end
    )
    return not ends_before_window and not starts_after_window


def classify(
    date_range: DateRange,
    window: Optional[SemesterWindow] = None,
    reference: Union[date, datetime, None] = None,
    is_active: bool = True,
) -> LifecycleStatus:
    """
    Classify a date range.

    Args:
        date_range: the range to classify
        window: semester window; when None or empty, reference is used
        reference: the date to compare against; today when absent or unparsable
        is_active: the owning record's active flag; False short-circuits

    Returns:
        ACTIVE, UPCOMING, ENDED or INACTIVE
    """
    if not is_active:
        return LifecycleStatus.INACTIVE
    if date_range.start is None:
        return LifecycleStatus.INACTIVE
    if date_range.end is not None and date_range.start > date_range.end:
        return LifecycleStatus.INACTIVE

    if window is not None and not window.is_empty:
        if _overlaps_window(date_range, window):
            return LifecycleStatus.ACTIVE
        if window.end is not None and date_range.start > window.end:
            return LifecycleStatus.UPCOMING
        if (
            date_range.end is not None
            and window.start is not None
            and date_range.end < window.start
        ):
            return LifecycleStatus.ENDED
        return LifecycleStatus.INACTIVE

    today = parse_date(reference) or date.today()
    if today < date_range.start:
        return LifecycleStatus.UPCOMING
    if date_range.end is not None and today > date_range.end:
        return LifecycleStatus.ENDED
    return LifecycleStatus.ACTIVE


def assignment_date_range(assignment: Assignment, worker: Optional[Worker] = None) -> DateRange:
    """The assignment's own dates, falling back field by field to the worker's."""
    start = assignment.start_date
    end = assignment.end_date
    if worker is not None:
        start = start or worker.start_date
        end = end or worker.end_date
    return DateRange(start=start, end=end)


def assignment_status(
    assignment: Assignment,
    worker: Optional[Worker] = None,
    window: Optional[SemesterWindow] = None,
    reference: Union[date, datetime, None] = None,
) -> LifecycleStatus:
    is_active = worker.is_active if worker is not None else True
    return classify(
        assignment_date_range(assignment, worker),
        window=window,
        reference=reference,
        is_active=is_active,
    )


def is_assignment_active(
    assignment: Assignment,
    worker: Optional[Worker] = None,
    window: Optional[SemesterWindow] = None,
    reference: Union[date, datetime, None] = None,
) -> bool:
    return assignment_status(assignment, worker, window, reference) == LifecycleStatus.ACTIVE


def worker_status(
    worker: Worker,
    window: Optional[SemesterWindow] = None,
    reference: Union[date, datetime, None] = None,
) -> LifecycleStatus:
    """
    Aggregate assignment statuses into one worker status.

    Precedence: PARTIAL (active and ended together), ACTIVE, UPCOMING,
    ENDED, INACTIVE. A worker without assignments is classified against
    its own dates.
    """
    if not worker.is_active:
        return LifecycleStatus.INACTIVE
    if not worker.assignments:
        return classify(
            DateRange(start=worker.start_date, end=worker.end_date),
            window=window,
            reference=reference,
        )

    statuses = {
        assignment_status(a, worker, window, reference)
        for a in worker.assignments
    }

    has_active = LifecycleStatus.ACTIVE in statuses
    has_ended = LifecycleStatus.ENDED in statuses

    if has_active and has_ended:
        return LifecycleStatus.PARTIAL
    if has_active:
        return LifecycleStatus.ACTIVE
    if LifecycleStatus.UPCOMING in statuses:
        return LifecycleStatus.UPCOMING
    if has_ended:
        return LifecycleStatus.ENDED
    return LifecycleStatus.INACTIVE
