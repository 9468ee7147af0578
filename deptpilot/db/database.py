from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from deptpilot.core.config import settings


def _connect_args(url: str) -> dict:
    # SQLite connections are used across FastAPI's threadpool
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    settings.DATABASE_URL,
    connect_args=_connect_args(settings.DATABASE_URL),
    echo=settings.LOG_LEVEL.upper() == "DEBUG",
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class Base(DeclarativeBase):
    pass
