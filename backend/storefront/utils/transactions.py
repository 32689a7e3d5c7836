from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.orm import Session


@contextmanager
def atomic(session: Session) -> Iterator[Session]:
    """
    Run the block as a single unit of work on the given Session.
    Commits once when the block exits cleanly, rolls back and re-raises otherwise.
    Reads issued before entering the block (autobegin) belong to the same transaction.
    Usage:
        with atomic(db):
            ... DB work ...
    """
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
