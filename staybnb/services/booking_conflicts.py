"""Date-range rules for bookings.

Stays are half-open intervals ``[start_date, end_date)``: the guest leaves on
``end_date``, so the next guest may arrive that same day. Two stays on one
spot conflict iff ``a_start < b_end and b_start < a_end``. That single test
covers partial, containing, contained and identical ranges alike.
"""
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Dict, Optional, Union
from staybnb.models.booking_model import Booking
from staybnb.repositories.booking_repository import BookingRepository
from staybnb.logger import get_logger

logger = get_logger(__name__)

CONFLICT_MESSAGE = "Sorry, this spot is already booked for the specified dates"
START_CONFLICT_MESSAGE = "Start date conflicts with an existing booking"
END_CONFLICT_MESSAGE = "End date conflicts with an existing booking"
STARTED_MESSAGE = "Bookings that have been started can't be deleted"


@dataclass(frozen=True)
class NoConflict:
    pass


@dataclass(frozen=True)
class Conflict:
    existing_booking: Booking


OverlapResult = Union[NoConflict, Conflict]


class BookingConflictError(Exception):
    def __init__(self, existing_booking: Booking):
        super().__init__(CONFLICT_MESSAGE)
        self.existing_booking = existing_booking
        self.message = CONFLICT_MESSAGE
        self.errors: Dict[str, str] = {
            "startDate": START_CONFLICT_MESSAGE,
            "endDate": END_CONFLICT_MESSAGE,
        }


def intervals_overlap(a_start: date, a_end: date, b_start: date, b_end: date) -> bool:
    return a_start < b_end and b_start < a_end


def current_date() -> date:
    return datetime.now(timezone.utc).date()


def has_started(start_date: date, today: Optional[date] = None) -> bool:
    """A booking has started once its first day is today or earlier"""
    if today is None:
        today = current_date()
    return start_date <= today


def is_deletable(start_date: date, today: Optional[date] = None) -> bool:
    return not has_started(start_date, today)


class BookingConflictChecker:
    def __init__(self, repository: BookingRepository):
        self.repository = repository

    def check_overlap(self, spot_id: int, start: date, end: date) -> OverlapResult:
        # Callers have already checked that the spot exists and that end > start
        for booking in self.repository.find_overlapping(spot_id, start, end):
            if booking.spot_id == spot_id and intervals_overlap(
                start, end, booking.start_date, booking.end_date
            ):
                return Conflict(booking)
        return NoConflict()

    def create_booking(self, spot_id: int, user_id: int, start: date, end: date) -> Booking:
        """Check for an overlap and insert the booking as one atomic step for the spot."""
        with self.repository.locked_for_spot(spot_id):
            result = self.check_overlap(spot_id, start, end)
            if isinstance(result, Conflict):
                logger.info(
                    f"Booking {start}..{end} on spot {spot_id} conflicts with booking "
                    f"{result.existing_booking.id}"
                )
                raise BookingConflictError(result.existing_booking)
            booking = self.repository.insert(spot_id, user_id, start, end)
        return booking
