from pydantic import BaseModel, Field
from datetime import datetime
from typing import List, Optional, Union
from deptpilot.schemas.schedules import TimeBlockIn, TimeBlockOut
from deptpilot.services.scheduling.types import LifecycleStatus


class JobBase(BaseModel):
    jobTitle: str = ""
    supervisor: str = ""
    hourlyRate: Optional[Union[str, float]] = None
    location: List[str] = Field(default_factory=list)
    weeklySchedule: List[TimeBlockIn] = Field(default_factory=list)
    startDate: Optional[str] = None
    endDate: Optional[str] = None


class StudentWorkerCreate(BaseModel):
    name: str
    email: Optional[str] = None
    is_active: bool = True
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    jobs: List[JobBase] = Field(default_factory=list)


class AssignmentResponse(BaseModel):
    index: int
    title: str
    supervisor: str
    locations: List[str]
    hourly_rate: float
    rate_display: str
    blocks: List[TimeBlockOut]
    weekly_hours: float
    weekly_pay: float
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    status: LifecycleStatus


class StudentWorkerSummary(BaseModel):
    id: int
    name: str
    email: str
    is_active: bool
    status: LifecycleStatus
    weekly_hours: float
    weekly_pay: float


class StudentWorkerResponse(StudentWorkerSummary):
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    assignments: List[AssignmentResponse]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
