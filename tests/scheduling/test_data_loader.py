import pytest
from datetime import date
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from deptpilot.db.database import Base
from deptpilot.db.models.student_workers import StudentWorkers
from deptpilot.services.scheduling.types import (
    DayCode,
    LegacySingleJob,
    MultiJob,
    TimeBlock,
)
from deptpilot.services.scheduling.data_loader import (
    load_student_workers,
    load_worker,
    parse_record,
    worker_to_record,
)

M, T, W, R, F = DayCode.MONDAY, DayCode.TUESDAY, DayCode.WEDNESDAY, DayCode.THURSDAY, DayCode.FRIDAY


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


MULTI_JOB = {
    "id": 7,
    "name": "Alice Smith",
    "isActive": True,
    "startDate": "2024-01-10",
    "endDate": "2024-05-10",
    "jobs": [
        {
            "jobTitle": "Front Desk",
            "supervisor": "Dana Reed",
            "hourlyRate": "$12.50",
            "location": ["Main Hall", ""],
            "weeklySchedule": [
                {"day": "W", "start": "09:00", "end": "12:00"},
                {"day": "M", "start": "09:00", "end": "10:00"},
                {"day": "M", "start": "10:00", "end": "12:00"},
            ],
            "startDate": "2024-02-01",
        },
        {
            "hourlyRate": 10,
            "buildings": "Science Building",
            "weeklySchedule": [{"day": "Thu", "start": "1:00 PM", "end": "3:00 PM"}],
        },
    ],
}

LEGACY = {
    "name": "Bob Jones",
    "jobTitle": "Office Assistant",
    "supervisor": "Dana Reed",
    "hourlyRate": "$11.00",
    "weeklySchedule": [
        {"day": "T", "start": "08:00", "end": "12:00"},
        {"day": "R", "start": "08:00", "end": "12:00"},
    ],
    "primaryBuilding": "Main Hall",
    "startDate": "2024-01-10",
}


class TestParseRecord:
    def test_multi_job(self):
        parsed = parse_record(MULTI_JOB)
        assert isinstance(parsed, MultiJob)
        assert len(parsed.assignments) == 2

    def test_legacy(self):
        parsed = parse_record(LEGACY)
        assert isinstance(parsed, LegacySingleJob)
        assert parsed.assignment.title == "Office Assistant"

    def test_empty_record(self):
        parsed = parse_record({"name": "Nobody"})
        assert isinstance(parsed, MultiJob)
        assert parsed.assignments == []


class TestLoadWorker:
    def test_multi_job_record(self):
        worker = load_worker(MULTI_JOB)
        assert worker.id == 7
        assert worker.name == "Alice Smith"
        assert worker.start_date == date(2024, 1, 10)
        assert worker.end_date == date(2024, 5, 10)

        front_desk, second = worker.assignments
        # adjacent Monday entries are merged on load
        assert front_desk.blocks == [TimeBlock(M, 540, 720), TimeBlock(W, 540, 720)]
        assert front_desk.locations == ["Main Hall"]
        assert front_desk.start_date == date(2024, 2, 1)
        assert front_desk.end_date is None

        assert second.title == "Assignment 2"
        assert second.locations == ["Science Building"]
        assert second.blocks == [TimeBlock(R, 780, 900)]

    def test_legacy_record_folds_into_one_assignment(self):
        worker = load_worker(LEGACY)
        assert len(worker.assignments) == 1
        job = worker.assignments[0]
        assert job.title == "Office Assistant"
        assert job.supervisor == "Dana Reed"
        assert job.hourly_rate == "$11.00"
        assert job.locations == ["Main Hall"]
        assert job.blocks == [TimeBlock(T, 480, 720), TimeBlock(R, 480, 720)]

    def test_job_without_schedule_inherits_record_schedule(self):
        record = {
            "weeklySchedule": [{"day": "F", "start": "08:00", "end": "09:00"}],
            "hourlyRate": "$9",
            "jobs": [{"jobTitle": "Runner", "weeklySchedule": []}],
        }
        job = load_worker(record).assignments[0]
        assert job.blocks == [TimeBlock(F, 480, 540)]
        assert job.hourly_rate == "$9"

    def test_malformed_fields_degrade(self):
        record = {
            "name": None,
            "isActive": "yes",
            "startDate": "not a date",
            "jobs": [
                {"jobTitle": "Broken", "weeklySchedule": "M 9-5", "startDate": 42},
                "not a job",
            ],
        }
        worker = load_worker(record)
        assert worker.name == ""
        assert worker.is_active is True
        assert worker.start_date is None
        assert len(worker.assignments) == 1
        assert worker.assignments[0].blocks == []
        assert worker.assignments[0].start_date is None

    def test_inactive_flag(self):
        assert load_worker({**LEGACY, "isActive": False}).is_active is False

    def test_non_mapping_record(self):
        worker = load_worker(None)
        assert worker.assignments == []
        assert worker.is_active is False

    def test_round_trip_record(self):
        record = worker_to_record(load_worker(MULTI_JOB))
        assert record["startDate"] == "2024-01-10"
        assert record["jobs"][0]["weeklySchedule"] == [
            {"day": "M", "start": "09:00", "end": "12:00"},
            {"day": "W", "start": "09:00", "end": "12:00"},
        ]
        assert record["jobs"][0]["startDate"] == "2024-02-01"
        assert load_worker(record).assignments[1].blocks == [TimeBlock(R, 780, 900)]


class TestLoadStudentWorkers:
    def test_loads_rows(self, db):
        db.add(StudentWorkers(name="Bob Jones", job_title="Office Assistant", weekly_schedule=LEGACY["weeklySchedule"]))
        db.add(StudentWorkers(name="Alice Smith", jobs=MULTI_JOB["jobs"], start_date="2024-01-10"))
        db.add(StudentWorkers(name="Zed Inactive", is_active=False))
        db.commit()

        workers = load_student_workers(db)
        assert [w.name for w in workers] == ["Alice Smith", "Bob Jones", "Zed Inactive"]
        assert len(workers[0].assignments) == 2
        assert workers[1].assignments[0].title == "Office Assistant"
        assert workers[2].assignments == []

    def test_active_only(self, db):
        db.add(StudentWorkers(name="Active", is_active=True))
        db.add(StudentWorkers(name="Gone", is_active=False))
        db.commit()
        assert [w.name for w in load_student_workers(db, active_only=True)] == ["Active"]
