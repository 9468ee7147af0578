from datetime import date
from typing import Generator, Optional
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from deptpilot.core.config import settings
from deptpilot.db.database import SessionLocal
from deptpilot.db.models.student_workers import StudentWorkers
from deptpilot.services.scheduling.intervals import to_minutes
from deptpilot.services.scheduling.status import parse_date
from deptpilot.services.scheduling.types import ScheduleWindow, SemesterWindow


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_schedule_window() -> ScheduleWindow:
    """Editing window from settings, falling back to 08:00-17:00."""
    start = to_minutes(settings.SCHEDULE_DAY_START)
    end = to_minutes(settings.SCHEDULE_DAY_END)
    if start is None or end is None or start >= end:
        return ScheduleWindow()
    return ScheduleWindow(start_minutes=start, end_minutes=end)


def get_semester_window(
    semester_start: Optional[date] = None,
    semester_end: Optional[date] = None,
) -> Optional[SemesterWindow]:
    """
    Semester window from query params, else from settings.

    None means statuses are evaluated against today.
    """
    if semester_start or semester_end:
        return SemesterWindow(start=semester_start, end=semester_end)

    window = SemesterWindow(
        start=parse_date(settings.SEMESTER_START_DATE),
        end=parse_date(settings.SEMESTER_END_DATE),
    )
    return None if window.is_empty else window


def get_student_worker_or_404(
    student_worker_id: int,
    db: Session = Depends(get_db),
) -> StudentWorkers:
    row = db.query(StudentWorkers).filter(StudentWorkers.id == student_worker_id).first()
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Student worker not found")
    return row
