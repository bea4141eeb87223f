"""Engine and session handling for the events database."""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from contextlib import contextmanager
from pathlib import Path

from .models import Base

_engine = None
_SessionLocal = None


def init_db(db_path: str):
    """Open (creating if needed) the SQLite file and its tables."""
    global _engine, _SessionLocal

    if _engine is not None:
        close_db()

    Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    _engine = create_engine(f"sqlite:///{db_path}", echo=False)
    _SessionLocal = sessionmaker(bind=_engine, expire_on_commit=False)

    Base.metadata.create_all(_engine)

    return _engine


def close_db():
    """Dispose the engine so the database file can be removed."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None


@contextmanager
def get_session():
    """Transactional scope: commit on success, roll back on any error."""
    if _SessionLocal is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")

    session = _SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
