import logging
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status

from deptpilot.api.deps import get_schedule_window
from deptpilot.schemas.schedules import (
    GridCell,
    GridResponse,
    LayoutRequest,
    LayoutResponse,
    PlacementOut,
    PresetRequest,
    RangeEditRequest,
    ScheduleBlocks,
    ScheduleResponse,
    TimeBlockIn,
    TimeBlockOut,
    ToggleCellRequest,
)
from deptpilot.services.scheduling.aggregation import weekly_hours
from deptpilot.services.scheduling.editor import (
    PRESETS,
    add_precise_block,
    apply_preset,
    grid_cells,
    insert_block,
    remove_range,
    toggle_cell,
    validate_cell_day,
)
from deptpilot.services.scheduling.intervals import (
    format_minutes,
    format_schedule,
    make_block,
    normalize_weekly_schedule,
)
from deptpilot.services.scheduling.layout import (
    build_schedule_events,
    layout_week,
    placement_geometry,
    visible_window,
)
from deptpilot.services.scheduling.types import Assignment, ScheduleWindow, TimeBlock

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/schedules", tags=["schedules"])


def block_out(block: TimeBlock) -> TimeBlockOut:
    return TimeBlockOut(
        day=block.day,
        start=format_minutes(block.start_minutes),
        end=format_minutes(block.end_minutes),
        start_minutes=block.start_minutes,
        end_minutes=block.end_minutes,
    )


def schedule_response(blocks: List[TimeBlock]) -> ScheduleResponse:
    return ScheduleResponse(
        blocks=[block_out(b) for b in blocks],
        weekly_hours=weekly_hours(blocks),
        summary=format_schedule(blocks),
    )


def parse_blocks(entries: List[TimeBlockIn]) -> List[TimeBlock]:
    return normalize_weekly_schedule([e.model_dump() for e in entries])


def parse_range(payload: RangeEditRequest) -> TimeBlock:
    block = make_block(payload.day, payload.start, payload.end)
    if block is None:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Enter a valid day, start and end time.",
        )
    return block


@router.get("/presets", response_model=List[str])
def list_presets():
    return list(PRESETS)


@router.post("/normalize", response_model=ScheduleResponse)
def normalize_schedule(payload: ScheduleBlocks):
    return schedule_response(parse_blocks(payload.blocks))


@router.post("/insert", response_model=ScheduleResponse)
def insert_schedule_block(payload: RangeEditRequest):
    block = parse_range(payload)
    return schedule_response(insert_block(parse_blocks(payload.blocks), block))


@router.post("/remove", response_model=ScheduleResponse)
def remove_schedule_range(payload: RangeEditRequest):
    block = parse_range(payload)
    blocks = remove_range(parse_blocks(payload.blocks), block.day, block.start_minutes, block.end_minutes)
    return schedule_response(blocks)


@router.post("/precise", response_model=ScheduleResponse)
def add_precise_schedule_block(
    payload: RangeEditRequest,
    window: ScheduleWindow = Depends(get_schedule_window),
):
    result = add_precise_block(parse_blocks(payload.blocks), payload.day, payload.start, payload.end, window)
    if not result.success:
        logger.info("Rejected manual schedule entry: %s", result.error)
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=result.error)
    return schedule_response(result.blocks)


@router.post("/toggle", response_model=ScheduleResponse)
def toggle_schedule_cell(
    payload: ToggleCellRequest,
    window: ScheduleWindow = Depends(get_schedule_window),
):
    day_error = validate_cell_day(payload.day)
    if day_error:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=day_error)
    return schedule_response(toggle_cell(parse_blocks(payload.blocks), payload.day, payload.hour, window))


@router.post("/preset", response_model=ScheduleResponse)
def apply_schedule_preset(payload: PresetRequest):
    result = apply_preset(payload.name)
    if not result.success:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=result.error)
    return schedule_response(result.blocks)


@router.post("/grid", response_model=GridResponse)
def schedule_grid(
    payload: ScheduleBlocks,
    window: ScheduleWindow = Depends(get_schedule_window),
):
    cells = grid_cells(parse_blocks(payload.blocks), window)
    return GridResponse(cells=[
        GridCell(day=day, hour=hour, covered=covered)
        for (day, hour), covered in cells.items()
    ])


def layout_response(assignments: List[Assignment]) -> LayoutResponse:
    events = build_schedule_events(assignments)
    week = layout_week(events)
    view_start, view_end = visible_window([e.block for e in events])

    days = {}
    for day, placements in week.items():
        days[day] = []
        for p in placements:
            left, width = placement_geometry(p)
            days[day].append(PlacementOut(
                assignment_index=p.event.assignment_index,
                assignment_title=p.event.assignment_title,
                block=block_out(p.event.block),
                lane=p.lane,
                lane_count=p.lane_count,
                cluster=p.cluster,
                left_pct=left,
                width_pct=width,
            ))

    return LayoutResponse(
        days=days,
        view_start=format_minutes(view_start),
        view_end=format_minutes(view_end),
    )


@router.post("/layout", response_model=LayoutResponse)
def schedule_layout(payload: LayoutRequest):
    assignments = [
        Assignment(title=a.title, blocks=parse_blocks(a.blocks))
        for a in payload.assignments
    ]
    return layout_response(assignments)
