from fastapi import FastAPI

from deptpilot.api.routes import schedules, student_workers
from deptpilot.core.logging import configure_logging

configure_logging()

app = FastAPI(title="DeptPilot API", version="0.1.0")

app.include_router(schedules.router, prefix="/api/v1")
app.include_router(student_workers.router, prefix="/api/v1")


@app.get("/health")
def health_check():
    return {"status": "ok"}
