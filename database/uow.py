import contextlib
import logging

from sqlalchemy.orm import sessionmaker

from database.repositories import AnalyticsRepository

logger = logging.getLogger(__name__)


@contextlib.contextmanager
def analytics_uow(session_factory: sessionmaker):
    """Per-unit-of-work transaction scope for analytics writes.

    Yields an AnalyticsRepository bound to a fresh Session, independent of the
    request's read session. Commits on success, rolls back on exception,
    always closes.

    Usage:
        with analytics_uow(SessionLocal) as repo:
            repo.record_search(...)
        # commit happens automatically on successful exit
    """
    session = session_factory()
    try:
        repo = AnalyticsRepository(session)
        yield repo
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
