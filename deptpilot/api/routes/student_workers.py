from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from deptpilot.api.deps import (
    get_db,
    get_schedule_window,
    get_semester_window,
    get_student_worker_or_404,
)
from deptpilot.api.routes.schedules import block_out, layout_response
from deptpilot.db.models.student_workers import StudentWorkers
from deptpilot.schemas.schedules import LayoutResponse, ScheduleEditRequest
from deptpilot.schemas.student_workers import (
    AssignmentResponse,
    StudentWorkerCreate,
    StudentWorkerResponse,
    StudentWorkerSummary,
)
from deptpilot.services.scheduling.aggregation import (
    summarize_assignment,
    worker_weekly_hours,
    worker_weekly_pay,
)
from deptpilot.services.scheduling.data_loader import (
    assignment_to_job,
    load_student_workers,
    load_worker,
)
from deptpilot.services.scheduling.editor import (
    add_precise_block,
    apply_preset,
    clear,
    insert_block,
    remove_range,
    toggle_cell,
    validate_cell_day,
)
from deptpilot.services.scheduling.intervals import make_block
from deptpilot.services.scheduling.status import assignment_status, worker_status
from deptpilot.services.scheduling.types import (
    EditResult,
    LifecycleStatus,
    ScheduleWindow,
    SemesterWindow,
    TimeBlock,
    Worker,
)

router = APIRouter(prefix="/student-workers", tags=["student-workers"])


def worker_summary(worker: Worker, window: Optional[SemesterWindow]) -> StudentWorkerSummary:
    return StudentWorkerSummary(
        id=worker.id,
        name=worker.name,
        email=worker.email,
        is_active=worker.is_active,
        status=worker_status(worker, window),
        weekly_hours=worker_weekly_hours(worker),
        weekly_pay=worker_weekly_pay(worker),
    )


def worker_detail(row: StudentWorkers, window: Optional[SemesterWindow]) -> StudentWorkerResponse:
    worker = load_worker(row.to_record())
    assignments = []
    for index, assignment in enumerate(worker.assignments):
        summary = summarize_assignment(assignment, index)
        assignments.append(AssignmentResponse(
            index=index,
            title=summary.title,
            supervisor=assignment.supervisor,
            locations=assignment.locations,
            hourly_rate=summary.hourly_rate,
            rate_display=summary.rate_display,
            blocks=[block_out(b) for b in assignment.blocks],
            weekly_hours=summary.weekly_hours,
            weekly_pay=summary.weekly_pay,
            start_date=assignment.start_date.isoformat() if assignment.start_date else None,
            end_date=assignment.end_date.isoformat() if assignment.end_date else None,
            status=assignment_status(assignment, worker, window),
        ))

    return StudentWorkerResponse(
        **worker_summary(worker, window).model_dump(),
        start_date=row.start_date,
        end_date=row.end_date,
        assignments=assignments,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def apply_edit(
    blocks: List[TimeBlock],
    payload: ScheduleEditRequest,
    window: ScheduleWindow,
) -> EditResult:
    if payload.action == "precise":
        return add_precise_block(blocks, payload.day, payload.start, payload.end, window)
    if payload.action == "preset":
        return apply_preset(payload.preset or "")
    if payload.action == "clear":
        return EditResult(success=True, blocks=clear())
    if payload.action == "toggle":
        if payload.hour is None:
            return EditResult(success=False, blocks=blocks, error="Choose an hour to toggle.")
        day_error = validate_cell_day(payload.day)
        if day_error:
            return EditResult(success=False, blocks=blocks, error=day_error)
        return EditResult(success=True, blocks=toggle_cell(blocks, payload.day, payload.hour, window))

    block = make_block(payload.day, payload.start, payload.end)
    if block is None:
        return EditResult(success=False, blocks=blocks, error="Enter a valid day, start and end time.")
    if payload.action == "insert":
        return EditResult(success=True, blocks=insert_block(blocks, block))
    return EditResult(
        success=True,
        blocks=remove_range(blocks, block.day, block.start_minutes, block.end_minutes),
    )


@router.post("", response_model=StudentWorkerResponse, status_code=status.HTTP_201_CREATED)
def create_student_worker(
    payload: StudentWorkerCreate,
    db: Session = Depends(get_db),
    window: Optional[SemesterWindow] = Depends(get_semester_window),
):
    # Round-trip jobs through the loader so stored schedules are normalised
    worker = load_worker({"jobs": [job.model_dump() for job in payload.jobs]})

    row = StudentWorkers(
        name=payload.name,
        email=payload.email,
        is_active=payload.is_active,
        start_date=payload.start_date,
        end_date=payload.end_date,
        jobs=[assignment_to_job(a) for a in worker.assignments],
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return worker_detail(row, window)


@router.get("", response_model=List[StudentWorkerSummary])
def list_student_workers(
    status_filter: Optional[LifecycleStatus] = None,
    active_only: bool = False,
    db: Session = Depends(get_db),
    window: Optional[SemesterWindow] = Depends(get_semester_window),
):
    summaries = [worker_summary(w, window) for w in load_student_workers(db, active_only=active_only)]
    if status_filter:
        summaries = [s for s in summaries if s.status == status_filter]
    return summaries


@router.get("/{student_worker_id}", response_model=StudentWorkerResponse)
def get_student_worker(
    row: StudentWorkers = Depends(get_student_worker_or_404),
    window: Optional[SemesterWindow] = Depends(get_semester_window),
):
    return worker_detail(row, window)


@router.get("/{student_worker_id}/layout", response_model=LayoutResponse)
def get_student_worker_layout(
    row: StudentWorkers = Depends(get_student_worker_or_404),
):
    worker = load_worker(row.to_record())
    return layout_response(worker.assignments)


@router.put("/{student_worker_id}/jobs/{job_index}/schedule", response_model=StudentWorkerResponse)
def edit_job_schedule(
    job_index: int,
    payload: ScheduleEditRequest,
    row: StudentWorkers = Depends(get_student_worker_or_404),
    db: Session = Depends(get_db),
    window: ScheduleWindow = Depends(get_schedule_window),
    semester: Optional[SemesterWindow] = Depends(get_semester_window),
):
    worker = load_worker(row.to_record())
    if job_index < 0 or job_index >= len(worker.assignments):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Job not found")

    assignment = worker.assignments[job_index]
    result = apply_edit(assignment.blocks, payload, window)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=result.error)

    assignment.blocks = result.blocks
    # Legacy records are rewritten in the multi-job shape on first edit
    row.jobs = [assignment_to_job(a) for a in worker.assignments]
    row.weekly_schedule = []
    db.commit()
    db.refresh(row)
    return worker_detail(row, semester)


@router.delete("/{student_worker_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_student_worker(
    row: StudentWorkers = Depends(get_student_worker_or_404),
    db: Session = Depends(get_db),
):
    db.delete(row)
    db.commit()
