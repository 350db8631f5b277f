import logging
import time
from typing import Callable, TypeVar

from sqlalchemy.exc import OperationalError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _is_locked_error(exc: OperationalError) -> bool:
    message = str(getattr(exc, "orig", exc)).lower()
    return "database is locked" in message or "database is busy" in message


def run_with_retry(session, work: Callable[[], T], retries: int = 3, delay: float = 0.1) -> T:
    """
    Run ``work`` and commit it, retrying the whole unit while SQLite reports the database locked.

    A rollback discards everything ``work`` wrote, so each retry calls ``work``
    again before committing. Callers must keep ``work`` free of side effects
    outside the session. Returns whatever the successful ``work`` call returned.
    """
    for attempt in range(retries):
        try:
            result = work()
            session.commit()
            return result
        except OperationalError as exc:
            session.rollback()
            if not _is_locked_error(exc) or attempt == retries - 1:
                raise
            logger.warning(f"Database locked, retrying unit of work ({attempt + 1}/{retries})")
            time.sleep(delay * (attempt + 1))
