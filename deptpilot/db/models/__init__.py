from deptpilot.db.database import Base

# Import models
from deptpilot.db.models.student_workers import StudentWorkers

__all__ = [
    "Base",
    # Models
    "StudentWorkers",
]
