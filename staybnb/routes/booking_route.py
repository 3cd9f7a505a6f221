from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from staybnb.services.booking_crud import booking_crud
from staybnb.services.spot_crud import spot_crud
from staybnb.services.projections import bookings_with_spot, spot_bookings_view
from staybnb.schemas.base_schema import MessageResponse
from staybnb.schemas.booking_schema import BookingCreate, BookingResponse, BookingListResponse
from staybnb.database import get_db
from staybnb.security.auth import get_current_active_user
from staybnb.validation import validated_body, BOOKING_RULES
from staybnb.models.user_model import User
from staybnb.logger import get_logger

booking_router = APIRouter()
logger = get_logger(__name__)


@booking_router.get("/bookings/current", response_model=BookingListResponse, status_code=status.HTTP_200_OK)
def get_current_user_bookings(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Get the current user's bookings with the booked spot"""
    try:
        logger.info(f"User {current_user.email} fetching bookings")
        bookings = booking_crud.get_user_bookings(db, current_user.id)
        return BookingListResponse(bookings=bookings_with_spot(db, bookings))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching user bookings: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while fetching bookings",
        )


@booking_router.get("/spots/{spot_id}/bookings", status_code=status.HTTP_200_OK)
def get_spot_bookings(
    spot_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Get a spot's bookings; only the owner sees who booked"""
    try:
        logger.info(f"User {current_user.email} fetching bookings for spot {spot_id}")
        bookings = booking_crud.get_spot_bookings(db, spot_id)
        is_owner = spot_crud.get_spot_by_id(db, spot_id).owner_id == current_user.id
        return {"Bookings": spot_bookings_view(bookings, is_owner)}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching bookings for spot {spot_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while fetching bookings",
        )


@booking_router.post(
    "/spots/{spot_id}/bookings", response_model=BookingResponse, status_code=status.HTTP_201_CREATED
)
def create_booking(
    spot_id: int,
    booking: BookingCreate = Depends(validated_body(BookingCreate, BOOKING_RULES)),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Book a spot for [startDate, endDate)"""
    try:
        logger.info(
            f"User {current_user.email} booking spot {spot_id} from {booking.start_date} to {booking.end_date}"
        )
        db_booking = booking_crud.create_booking(db, spot_id, booking, current_user.id)
        return BookingResponse.model_validate(db_booking)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating booking: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while creating booking",
        )


@booking_router.delete("/bookings/{booking_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_booking(
    booking_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Delete a booking that has not started yet"""
    try:
        logger.info(f"User {current_user.email} deleting booking {booking_id}")
        booking_crud.delete_booking(db, booking_id, current_user.id)
        return MessageResponse(message="Successfully deleted")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting booking {booking_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while deleting booking",
        )
