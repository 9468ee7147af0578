"""
Data loader for the schedule engine.
Converts persisted student worker records into internal types and back.

A record is either a legacy single-job record (job fields stored at the
top level) or a multi-job record with a `jobs` list. Both are folded into
a Worker with a list of assignments here, so nothing downstream needs to
care which shape was stored.
"""

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from deptpilot.db.models.student_workers import StudentWorkers

from .editor import merge_blocks
from .intervals import block_to_record, normalize_weekly_schedule, sort_blocks
from .status import parse_date
from .types import (
    Assignment,
    LegacySingleJob,
    MultiJob,
    Worker,
    WorkerRecord,
)


logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _string_list(value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [_text(v) for v in value if _text(v)]
    text = _text(value)
    return [text] if text else []


def _has_rate(value: Any) -> bool:
    return value is not None and value != ""


def _record_buildings(record: Mapping[str, Any]) -> list[str]:
    buildings = _string_list(record.get("primaryBuildings"))
    if buildings:
        return buildings
    return _string_list(record.get("primaryBuilding"))


def _job_locations(job: Mapping[str, Any], fallback: list[str]) -> list[str]:
    for key in ("location", "buildings"):
        if job.get(key):
            return _string_list(job.get(key))
    return list(fallback)


def _has_legacy_data(record: Mapping[str, Any]) -> bool:
    return bool(
        _text(record.get("jobTitle"))
        or _text(record.get("supervisor"))
        or _text(record.get("supervisorId"))
        or _has_rate(record.get("hourlyRate"))
        or normalize_weekly_schedule(record.get("weeklySchedule"))
        or _record_buildings(record)
    )


def _build_assignment(
    job: Mapping[str, Any],
    index: int,
    record: Mapping[str, Any],
) -> Assignment:
    blocks = normalize_weekly_schedule(job.get("weeklySchedule"))
    if not blocks:
        # Jobs without their own schedule inherit the record-level one
        blocks = normalize_weekly_schedule(record.get("weeklySchedule"))

    rate = job.get("hourlyRate")
    if not _has_rate(rate):
        rate = record.get("hourlyRate")

    return Assignment(
        title=_text(job.get("jobTitle")) or _text(record.get("jobTitle")) or f"Assignment {index + 1}",
        supervisor=_text(job.get("supervisor")) or _text(record.get("supervisor")),
        hourly_rate=rate,
        locations=_job_locations(job, _record_buildings(record)),
        blocks=merge_blocks(blocks),
        start_date=parse_date(job.get("startDate")),
        end_date=parse_date(job.get("endDate")),
    )


def parse_record(record: Mapping[str, Any]) -> WorkerRecord:
    """Classify a stored record as a multi-job or legacy single-job record."""
    jobs = record.get("jobs")
    if isinstance(jobs, list) and jobs:
        job_maps = [job for job in jobs if isinstance(job, Mapping)]
        if len(job_maps) != len(jobs):
            logger.warning("Record %r has %d malformed job entries", record.get("id"), len(jobs) - len(job_maps))
        return MultiJob(assignments=[
            _build_assignment(job, index, record) for index, job in enumerate(job_maps)
        ])

    if _has_legacy_data(record):
        return LegacySingleJob(assignment=_build_assignment({}, 0, record))

    return MultiJob(assignments=[])


def load_worker(record: Any) -> Worker:
    """
    Build a Worker from a stored record.

    Missing or malformed fields degrade to defaults (empty schedules,
    None dates) instead of failing the whole record.
    """
    if not isinstance(record, Mapping):
        logger.warning("Ignoring student worker record of type %s", type(record).__name__)
        return Worker(is_active=False)

    parsed = parse_record(record)
    if isinstance(parsed, LegacySingleJob):
        assignments = [parsed.assignment]
    else:
        assignments = parsed.assignments

    record_id = record.get("id")
    return Worker(
        id=record_id if isinstance(record_id, int) else None,
        name=_text(record.get("name")),
        email=_text(record.get("email")),
        assignments=assignments,
        start_date=parse_date(record.get("startDate")),
        end_date=parse_date(record.get("endDate")),
        is_active=record.get("isActive") is not False,
    )


def assignment_to_job(assignment: Assignment) -> dict[str, Any]:
    return {
        "jobTitle": assignment.title,
        "supervisor": assignment.supervisor,
        "hourlyRate": assignment.hourly_rate,
        "location": list(assignment.locations),
        "weeklySchedule": [block_to_record(b) for b in sort_blocks(assignment.blocks)],
        "startDate": assignment.start_date.isoformat() if assignment.start_date else "",
        "endDate": assignment.end_date.isoformat() if assignment.end_date else "",
    }


def worker_to_record(worker: Worker) -> dict[str, Any]:
    """Serialise a Worker back to the multi-job record shape."""
    return {
        "id": worker.id,
        "name": worker.name,
        "email": worker.email,
        "isActive": worker.is_active,
        "startDate": worker.start_date.isoformat() if worker.start_date else "",
        "endDate": worker.end_date.isoformat() if worker.end_date else "",
        "jobs": [assignment_to_job(a) for a in worker.assignments],
    }


def load_student_workers(db: Session, active_only: bool = False) -> list[Worker]:
    """Load student workers from the database."""
    stmt = select(StudentWorkers).order_by(StudentWorkers.name)
    if active_only:
        stmt = stmt.where(StudentWorkers.is_active == True)
    rows = db.execute(stmt).scalars().all()
    return [load_worker(row.to_record()) for row in rows]
