import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from deptpilot.api.deps import get_db
from deptpilot.db.database import Base
from deptpilot.main import app


@pytest.fixture
def db_session():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def alice_payload() -> dict:
    return {
        "name": "Alice Smith",
        "email": "alice@example.edu",
        "start_date": "2024-01-10",
        "end_date": "2024-05-10",
        "jobs": [
            {
                "jobTitle": "Front Desk",
                "hourlyRate": "$12.50",
                "location": ["Main Hall"],
                "weeklySchedule": [
                    {"day": "M", "start": "09:00", "end": "12:00"},
                    {"day": "W", "start": "09:00", "end": "12:00"},
                    {"day": "F", "start": "13:00", "end": "15:00"},
                ],
            },
            {
                "jobTitle": "Lab Monitor",
                "hourlyRate": 10,
                "weeklySchedule": [
                    {"day": "M", "start": "11:00", "end": "13:00"},
                    {"day": "T", "start": "14:00", "end": "17:00"},
                ],
                "endDate": "2024-03-01",
            },
        ],
    }
