"""
Unit of Work - one database transaction shared by the stores that write in it.

Usage:
    with SqlAlchemyUnitOfWork(db) as uow:
        uow.db.add(booking)
        uow.seats.mark_booked(seat_ids, showtime_id)
        uow.commit()

Leaving the block without ``commit()`` rolls everything back. Infrastructure
errors raised inside the block surface as ``StorageFailure``.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from marquee.core.exceptions import StorageFailure
from marquee.services.seat_store import SeatStore

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork:
    def __init__(self, db: Session):
        self.db = db
        self.seats = SeatStore(db)
        self._committed = False

    def __enter__(self) -> "SqlAlchemyUnitOfWork":
        self._committed = False
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is not None or not self._committed:
            self.rollback()
        if exc is not None and isinstance(exc, SQLAlchemyError):
            logger.error("Storage error, transaction rolled back", exc_info=exc)
            raise StorageFailure() from exc
        return False

    def commit(self) -> None:
        self.db.commit()
        self._committed = True

    def rollback(self) -> None:
        try:
            self.db.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback failed")
