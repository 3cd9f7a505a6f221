from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from staybnb.services.image_crud import image_crud
from staybnb.schemas.base_schema import MessageResponse
from staybnb.database import get_db
from staybnb.security.auth import get_current_active_user
from staybnb.models.user_model import User
from staybnb.logger import get_logger

image_router = APIRouter()
logger = get_logger(__name__)


@image_router.delete("/spot-images/{image_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_spot_image(
    image_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Delete a spot image (spot owner only)"""
    try:
        logger.info(f"User {current_user.email} deleting spot image {image_id}")
        image_crud.delete_spot_image(db, image_id, current_user.id)
        return MessageResponse(message="Successfully deleted")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting spot image {image_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while deleting spot image",
        )


@image_router.delete("/review-images/{image_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_review_image(
    image_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Delete a review image (review author only)"""
    try:
        logger.info(f"User {current_user.email} deleting review image {image_id}")
        image_crud.delete_review_image(db, image_id, current_user.id)
        return MessageResponse(message="Successfully deleted")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting review image {image_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while deleting review image",
        )
