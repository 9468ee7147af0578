import pytest
from datetime import date

from deptpilot.services.scheduling.types import (
    Assignment,
    DayCode,
    SemesterWindow,
    TimeBlock,
    Worker,
)


M, T, W, R, F = DayCode.MONDAY, DayCode.TUESDAY, DayCode.WEDNESDAY, DayCode.THURSDAY, DayCode.FRIDAY


def block(day: DayCode, start: str, end: str) -> TimeBlock:
    # "HH:MM" helpers keep test cases readable
    sh, sm = (int(p) for p in start.split(":"))
    eh, em = (int(p) for p in end.split(":"))
    return TimeBlock(day, sh * 60 + sm, eh * 60 + em)


@pytest.fixture
def make_block():
    return block


@pytest.fixture
def reference_date() -> date:
    # fixed "today" for deterministic status tests
    return date(2024, 3, 1)


@pytest.fixture
def spring_window() -> SemesterWindow:
    return SemesterWindow(start=date(2024, 1, 1), end=date(2024, 5, 1))


@pytest.fixture
def front_desk() -> Assignment:
    # 8 hours/week at $12.50
    return Assignment(
        title="Front Desk Assistant",
        supervisor="Dana Reed",
        hourly_rate="$12.50",
        locations=["Main Hall"],
        blocks=[block(M, "09:00", "12:00"), block(W, "09:00", "12:00"), block(F, "13:00", "15:00")],
    )


@pytest.fixture
def lab_monitor() -> Assignment:
    # 5 hours/week at $10.00
    return Assignment(
        title="Lab Monitor",
        hourly_rate="$10.00",
        blocks=[block(M, "11:00", "13:00"), block(T, "14:00", "17:00")],
    )


@pytest.fixture
def two_job_worker(front_desk, lab_monitor) -> Worker:
    return Worker(
        name="Alice Smith",
        assignments=[front_desk, lab_monitor],
        start_date=date(2024, 1, 10),
        end_date=date(2024, 5, 10),
    )
