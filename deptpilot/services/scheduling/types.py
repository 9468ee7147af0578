"""
Internal data types for the weekly schedule engine.
decoupled from SQLAlchemy models and request schemas for cleaner logic.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional, Union


MINUTES_PER_DAY = 24 * 60


class DayCode(str, Enum):
    MONDAY = "M"
    TUESDAY = "T"
    WEDNESDAY = "W"
    THURSDAY = "R"
    FRIDAY = "F"
    SATURDAY = "S"
    SUNDAY = "U"

    @property
    def order(self) -> int:
        return DAY_ORDER.index(self)

    @property
    def label(self) -> str:
        return self.name.title()[:3]


DAY_ORDER: tuple[DayCode, ...] = (
    DayCode.MONDAY,
    DayCode.TUESDAY,
    DayCode.WEDNESDAY,
    DayCode.THURSDAY,
    DayCode.FRIDAY,
    DayCode.SATURDAY,
    DayCode.SUNDAY,
)

# Days that can be edited; weekends are display-only
EDIT_DAYS: tuple[DayCode, ...] = DAY_ORDER[:5]


class LifecycleStatus(str, Enum):
    ACTIVE = "Active"
    UPCOMING = "Upcoming"
    ENDED = "Ended"
    INACTIVE = "Inactive"
    PARTIAL = "Partial"  # workers only


@dataclass(frozen=True)
class TimeBlock:
    """A recurring weekly interval [start_minutes, end_minutes) on one day."""
    day: DayCode
    start_minutes: int
    end_minutes: int

    @property
    def duration_minutes(self) -> int:
        return self.end_minutes - self.start_minutes

    @property
    def duration_hours(self) -> float:
        return self.duration_minutes / 60


@dataclass(frozen=True)
class ScheduleWindow:
    """Creation-time bounds for new blocks (08:00-17:00 by default)."""
    start_minutes: int = 8 * 60
    end_minutes: int = 17 * 60

    @property
    def hours(self) -> range:
        # Only whole hours that fit inside the window
        return range(-(-self.start_minutes // 60), self.end_minutes // 60)


DEFAULT_WINDOW = ScheduleWindow()


@dataclass(frozen=True)
class DateRange:
    start: Optional[date] = None
    end: Optional[date] = None


@dataclass(frozen=True)
class SemesterWindow:
    """Bounded period used instead of today's date for status checks."""
    start: Optional[date] = None
    end: Optional[date] = None

    @property
    def is_empty(self) -> bool:
        return self.start is None and self.end is None


@dataclass
class Assignment:
    """One job held by a worker."""
    title: str = ""
    supervisor: str = ""
    hourly_rate: Union[str, float, int, None] = None  # raw, parsed tolerantly
    locations: list[str] = field(default_factory=list)
    blocks: list[TimeBlock] = field(default_factory=list)
    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass
class Worker:
    name: str = ""
    assignments: list[Assignment] = field(default_factory=list)
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_active: bool = True
    id: Optional[int] = None
    email: str = ""


@dataclass
class LegacySingleJob:
    """A record that stores one job in top-level fields."""
    assignment: Assignment


@dataclass
class MultiJob:
    """A record that stores a list of jobs."""
    assignments: list[Assignment] = field(default_factory=list)


WorkerRecord = Union[LegacySingleJob, MultiJob]


@dataclass
class EditResult:
    """Outcome of a validated schedule edit."""
    success: bool
    blocks: list[TimeBlock]
    error: Optional[str] = None


@dataclass(frozen=True)
class BlockPlacement:
    """Lane placement of a block within its overlap cluster."""
    block: TimeBlock
    lane: int
    lane_count: int
    cluster: int

    @property
    def width_pct(self) -> float:
        return 100 / self.lane_count

    @property
    def left_pct(self) -> float:
        return self.lane * self.width_pct


@dataclass(frozen=True)
class ScheduleEvent:
    """A block tagged with the assignment it came from."""
    block: TimeBlock
    assignment_index: int
    assignment_title: str = ""


@dataclass(frozen=True)
class EventPlacement:
    event: ScheduleEvent
    lane: int
    lane_count: int
    cluster: int


@dataclass
class AssignmentSummary:
    title: str
    weekly_hours: float
    hourly_rate: float
    weekly_pay: float
    rate_display: str = ""
