from contextlib import contextmanager
from datetime import date
from typing import ContextManager, List, Protocol
from sqlalchemy.orm import Session
from staybnb.models.booking_model import Booking
from staybnb.models.spot_model import Spot
from staybnb.logger import get_logger

logger = get_logger(__name__)


class BookingRepository(Protocol):
    """Storage operations the booking conflict checker depends on."""

    def find_overlapping(self, spot_id: int, start: date, end: date) -> List[Booking]:
        ...

    def insert(self, spot_id: int, user_id: int, start: date, end: date) -> Booking:
        ...

    def locked_for_spot(self, spot_id: int) -> ContextManager[None]:
        ...


class SqlAlchemyBookingRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_overlapping(self, spot_id: int, start: date, end: date) -> List[Booking]:
        """Bookings of the spot whose [start_date, end_date) intersects [start, end)"""
        return (
            self.db.query(Booking)
            .filter(
                Booking.spot_id == spot_id,
                Booking.start_date < end,
                Booking.end_date > start,
            )
            .order_by(Booking.start_date)
            .all()
        )

    def insert(self, spot_id: int, user_id: int, start: date, end: date) -> Booking:
        booking = Booking(spot_id=spot_id, user_id=user_id, start_date=start, end_date=end)
        self.db.add(booking)
        self.db.flush()
        return booking

    @contextmanager
    def locked_for_spot(self, spot_id: int):
        """Run the block in one transaction holding a write lock on the spot row.

        PostgreSQL takes the row lock through ``SELECT ... FOR UPDATE``. SQLite
        ignores ``FOR UPDATE``; there the session's ``BEGIN IMMEDIATE``
        transaction already holds the database write lock. The transaction is
        committed when the block succeeds and rolled back otherwise.
        """
        try:
            self.db.query(Spot.id).filter(Spot.id == spot_id).with_for_update().one_or_none()
            yield
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
