"""Database session management."""
from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from hostel_billing.config.settings import settings


def _engine_options() -> dict:
    options = {
        "pool_pre_ping": True,
        "echo": settings.DB_ECHO,
    }
    if settings.is_sqlite():
        options["connect_args"] = {"check_same_thread": False, **settings.DB_CONNECT_ARGS}
    else:
        options["pool_size"] = settings.DB_POOL_SIZE
        options["max_overflow"] = settings.DB_POOL_OVERFLOW
        if settings.DB_CONNECT_ARGS:
            options["connect_args"] = settings.DB_CONNECT_ARGS
    return options


engine = create_engine(settings.get_database_url(), **_engine_options())

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_session_factory() -> sessionmaker:
    """Session factory used by services that manage their own unit of work."""
    return SessionLocal


def get_db() -> Generator[Session, None, None]:
    """
    Dependency function that yields a database session.

    Usage in FastAPI endpoints:
        @router.get("/students/{student_id}/balance")
        def read_balance(db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
