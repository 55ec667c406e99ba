import os

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker


def _default_database_url() -> str:
    return os.getenv("DATABASE_URL", "sqlite:///./interview_sim.db")


DATABASE_URL = _default_database_url()

# SQLite connections are shared with the FastAPI threadpool.
_connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    DATABASE_URL,
    future=True,
    pool_pre_ping=True,
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

Base = declarative_base()


def init_db() -> None:
    from interview_sim import db_models  # noqa: F401

    Base.metadata.create_all(bind=engine)
