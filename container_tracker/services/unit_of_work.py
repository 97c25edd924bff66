"""Transaction scope shared by every write path."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from container_tracker.core.errors import ConcurrentUpdateError, ConflictError, StorageError, TrackerError

logger = logging.getLogger(__name__)


@contextmanager
def write_unit(db: Session, action: str, *, conflict_detail: str | None = None) -> Iterator[Session]:
    """Commit everything done inside the block at once, or nothing.

    ``conflict_detail`` turns an ``IntegrityError`` into a ``ConflictError``
    for callers whose only unique constraint is a user-facing one.
    """
    try:
        yield db
        db.commit()
    except TrackerError:
        db.rollback()
        raise
    except IntegrityError as exc:
        db.rollback()
        if conflict_detail is not None:
            logger.info("[STORAGE] %s rejected by unique constraint", action)
            raise ConflictError(conflict_detail) from exc
        logger.exception("[STORAGE] %s violated a constraint", action)
        raise StorageError() from exc
    except StaleDataError as exc:
        db.rollback()
        logger.warning("[STORAGE] %s lost a concurrent-modification race", action)
        raise ConcurrentUpdateError() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("[STORAGE] %s failed", action)
        raise StorageError() from exc
    except Exception:
        db.rollback()
        raise
