from typing import Any, Optional
from datetime import datetime
from sqlalchemy import JSON, Boolean, DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from deptpilot.db.database import Base


class StudentWorkers(Base):
    __tablename__ = "student_workers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    # ISO date strings, kept as text so imported values survive as-is
    start_date: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    end_date: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    jobs: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    # Legacy single-job fields, folded into jobs when loaded
    job_title: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    supervisor: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    hourly_rate: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    weekly_schedule: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    primary_buildings: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    def to_record(self) -> dict[str, Any]:
        """The camelCase record shape read by the schedule loader."""
        return {
            "id": self.id,
            "name": self.name,
            "email": self.email or "",
            "isActive": self.is_active,
            "startDate": self.start_date or "",
            "endDate": self.end_date or "",
            "jobs": self.jobs or [],
            "jobTitle": self.job_title or "",
            "supervisor": self.supervisor or "",
            "hourlyRate": self.hourly_rate,
            "weeklySchedule": self.weekly_schedule or [],
            "primaryBuildings": self.primary_buildings or [],
        }
