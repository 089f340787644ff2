from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session, sessionmaker


@contextmanager
def session_scope(factory: sessionmaker) -> Iterator[Session]:
    """
    Open a short-lived session, commit on success, roll back on error.
    Usage:
        with session_scope(SessionLocal) as db:
            ... DB work ...
    """
    session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
