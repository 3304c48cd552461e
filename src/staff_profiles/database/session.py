from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.orm import Session

from ..core.exceptions import StoreUnavailable
from .connection import DatabaseConnection

log = logging.getLogger(__name__)


@contextmanager
def db_session(conn_factory: DatabaseConnection) -> Iterator[Session]:
    """Unit of work: commit on success, roll back on error, always close."""
    session = conn_factory.session()
    try:
        yield session
        session.commit()
    except (OperationalError, InterfaceError) as exc:
        session.rollback()
        log.error("Database unavailable (%s): %s", conn_factory.describe(), exc)
        raise StoreUnavailable(str(exc)) from exc
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
