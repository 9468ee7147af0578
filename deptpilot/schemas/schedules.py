from pydantic import BaseModel, Field
from typing import List, Optional
from deptpilot.services.scheduling.types import DayCode


class TimeBlockIn(BaseModel):
    day: str
    start: str
    end: str


class TimeBlockOut(BaseModel):
    day: DayCode
    start: str
    end: str
    start_minutes: int
    end_minutes: int


class ScheduleBlocks(BaseModel):
    blocks: List[TimeBlockIn] = Field(default_factory=list)


class ScheduleResponse(BaseModel):
    blocks: List[TimeBlockOut]
    weekly_hours: float
    summary: str


class RangeEditRequest(ScheduleBlocks):
    day: str
    start: str
    end: str


class ToggleCellRequest(ScheduleBlocks):
    day: str
    hour: int


class PresetRequest(BaseModel):
    name: str


class GridCell(BaseModel):
    day: DayCode
    hour: int
    covered: bool


class GridResponse(BaseModel):
    cells: List[GridCell]


class AssignmentBlocks(BaseModel):
    title: str = ""
    blocks: List[TimeBlockIn] = Field(default_factory=list)


class LayoutRequest(BaseModel):
    assignments: List[AssignmentBlocks] = Field(default_factory=list)


class PlacementOut(BaseModel):
    assignment_index: int
    assignment_title: str
    block: TimeBlockOut
    lane: int
    lane_count: int
    cluster: int
    left_pct: float
    width_pct: float


class LayoutResponse(BaseModel):
    days: dict[DayCode, List[PlacementOut]]
    view_start: str
    view_end: str


class ScheduleEditRequest(BaseModel):
    """One edit applied to a stored job's schedule."""
    action: str = Field(pattern="^(insert|remove|precise|toggle|preset|clear)$")
    day: Optional[str] = None
    start: Optional[str] = None
    end: Optional[str] = None
    hour: Optional[int] = None
    preset: Optional[str] = None
