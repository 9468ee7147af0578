"""
Seed script for the DeptPilot development database.
Run with: python -m scripts.seed_data
"""

from sqlalchemy import text
from deptpilot.db.database import Base, SessionLocal, engine
from deptpilot.db.models.student_workers import StudentWorkers
from deptpilot.services.scheduling.aggregation import (
    format_currency,
    format_hours,
    worker_weekly_hours,
    worker_weekly_pay,
)
from deptpilot.services.scheduling.data_loader import load_worker
from deptpilot.services.scheduling.status import worker_status


def reset_tables(db):
    """Create tables if missing and clear seeded rows."""
    print("Resetting tables...")
    Base.metadata.create_all(bind=engine)
    db.execute(text("DELETE FROM student_workers;"))
    db.commit()
    print("Tables reset.")


def seed_student_workers(db):
    """Seed 4 student workers: multi-job, legacy single-job, upcoming, inactive."""
    print("Seeding student workers...")

    workers = [
        # Two jobs with an overlap on Monday morning
        StudentWorkers(
            id=100001,
            name="Alice Smith",
            email="alice@example.edu",
            is_active=True,
            start_date="2024-08-20",
            end_date="2025-05-10",
            jobs=[
                {
                    "jobTitle": "Front Desk Assistant",
                    "supervisor": "Dana Reed",
                    "hourlyRate": "$12.50",
                    "location": ["Main Hall"],
                    "weeklySchedule": [
                        {"day": "M", "start": "09:00", "end": "12:00"},
                        {"day": "W", "start": "09:00", "end": "12:00"},
                        {"day": "F", "start": "13:00", "end": "15:00"},
                    ],
                    "startDate": "2024-08-20",
                    "endDate": "",
                },
                {
                    "jobTitle": "Lab Monitor",
                    "supervisor": "Sam Ortiz",
                    "hourlyRate": "10.00",
                    "location": ["Science Building"],
                    "weeklySchedule": [
                        {"day": "M", "start": "11:00", "end": "13:00"},
                        {"day": "T", "start": "14:00", "end": "17:00"},
                    ],
                    "startDate": "2024-08-20",
                    "endDate": "2024-12-13",
                },
            ],
        ),
        # Legacy single-job record
        StudentWorkers(
            id=100002,
            name="Bob Jones",
            email="bob@example.edu",
            is_active=True,
            start_date="2024-01-10",
            end_date="2024-05-10",
            job_title="Office Assistant",
            supervisor="Dana Reed",
            hourly_rate="$11.00/hr",
            weekly_schedule=[
                {"day": "T", "start": "08:00", "end": "12:00"},
                {"day": "R", "start": "08:00", "end": "12:00"},
            ],
            primary_buildings=["Main Hall"],
        ),
        # Starts next year
        StudentWorkers(
            id=100003,
            name="Carol Williams",
            email="carol@example.edu",
            is_active=True,
            start_date="2027-01-12",
            jobs=[
                {
                    "jobTitle": "Tutor",
                    "hourlyRate": 13,
                    "weeklySchedule": [
                        {"day": "Tue", "start": "1:00 PM", "end": "4:00 PM"},
                        {"day": "Thu", "start": "1:00 PM", "end": "4:00 PM"},
                    ],
                },
            ],
        ),
        # Marked inactive
        StudentWorkers(
            id=100004,
            name="David Brown",
            email="david@example.edu",
            is_active=False,
            start_date="2023-08-21",
            jobs=[
                {
                    "jobTitle": "Mail Runner",
                    "hourlyRate": "$10",
                    "weeklySchedule": [{"day": "F", "start": "08:00", "end": "10:00"}],
                },
            ],
        ),
    ]

    for worker in workers:
        db.add(worker)
    db.commit()
    print(f"Seeded {len(workers)} student workers.")
    return workers


def main():
    db = SessionLocal()
    try:
        reset_tables(db)
        rows = seed_student_workers(db)

        print("\n" + "="*50)
        print("Seeding complete!")
        print("="*50)
        print("\nStudent worker summary:")
        for row in rows:
            worker = load_worker(row.to_record())
            print(
                f"  {row.id} - {worker.name} ({worker_status(worker).value}, "
                f"{format_hours(worker_weekly_hours(worker))}h/week, "
                f"{format_currency(worker_weekly_pay(worker))}/week)"
            )
        print("="*50 + "\n")

    except Exception as e:
        db.rollback()
        print(f"\nError during seeding: {e}")
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
