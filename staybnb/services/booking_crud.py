from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload
from typing import List
from staybnb.models.booking_model import Booking
from staybnb.schemas.booking_schema import BookingCreate
from staybnb.repositories.booking_repository import SqlAlchemyBookingRepository
from staybnb.services.booking_conflicts import (
    BookingConflictChecker,
    BookingConflictError,
    STARTED_MESSAGE,
    is_deletable,
)
from staybnb.services.spot_crud import spot_crud
from staybnb.logger import get_logger

logger = get_logger(__name__)


class BookingCRUD:
    @staticmethod
    def create_booking(db: Session, spot_id: int, booking: BookingCreate, user_id: int) -> Booking:
        """Create a booking for a spot the user does not own, rejecting overlapping stays"""
        spot = spot_crud.get_spot_or_404(db, spot_id)

        if spot.owner_id == user_id:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Spot must NOT belong to the current user",
            )

        checker = BookingConflictChecker(SqlAlchemyBookingRepository(db))
        try:
            db_booking = checker.create_booking(spot_id, user_id, booking.start_date, booking.end_date)
        except BookingConflictError as e:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail={"message": e.message, "errors": e.errors},
            )

        db.refresh(db_booking)
        logger.info(f"Booking created: {db_booking.id} for spot {spot_id} by user {user_id}")
        return db_booking

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: int):
        return db.query(Booking).filter(Booking.id == booking_id).first()

    @staticmethod
    def get_user_bookings(db: Session, user_id: int) -> List[Booking]:
        return (
            db.query(Booking)
            .options(joinedload(Booking.spot))
            .filter(Booking.user_id == user_id)
            .order_by(Booking.start_date)
            .all()
        )

    @staticmethod
    def get_spot_bookings(db: Session, spot_id: int) -> List[Booking]:
        spot_crud.get_spot_or_404(db, spot_id)
        return (
            db.query(Booking)
            .options(joinedload(Booking.user))
            .filter(Booking.spot_id == spot_id)
            .order_by(Booking.start_date)
            .all()
        )

    @staticmethod
    def delete_booking(db: Session, booking_id: int, user_id: int) -> None:
        """Delete a booking owned by the user, only before its first day"""
        db_booking = BookingCRUD.get_booking_by_id(db, booking_id)
        if not db_booking:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Booking couldn't be found"
            )

        if db_booking.user_id != user_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

        if not is_deletable(db_booking.start_date):
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=STARTED_MESSAGE)

        try:
            db.delete(db_booking)
            db.commit()
            logger.info(f"Booking deleted: {booking_id}")

        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting booking {booking_id}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while deleting booking",
            )


booking_crud = BookingCRUD()
