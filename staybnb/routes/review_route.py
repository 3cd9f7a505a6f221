from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from staybnb.services.review_crud import review_crud
from staybnb.services.image_crud import image_crud
from staybnb.services.projections import reviews_with_details
from staybnb.schemas.base_schema import MessageResponse
from staybnb.schemas.image_schema import ReviewImageCreate, ReviewImageResponse
from staybnb.schemas.review_schema import ReviewCreate, ReviewUpdate, ReviewResponse, ReviewListResponse
from staybnb.database import get_db
from staybnb.security.auth import get_current_active_user
from staybnb.validation import validated_body, REVIEW_RULES, REVIEW_IMAGE_RULES
from staybnb.models.user_model import User
from staybnb.logger import get_logger

review_router = APIRouter()
logger = get_logger(__name__)


@review_router.get(
    "/spots/{spot_id}/reviews", response_model=ReviewListResponse, status_code=status.HTTP_200_OK
)
def get_spot_reviews(spot_id: int, db: Session = Depends(get_db)):
    """Get all reviews for a spot"""
    try:
        logger.info(f"Fetching reviews for spot: {spot_id}")
        reviews = review_crud.get_spot_reviews(db, spot_id)
        return ReviewListResponse(reviews=reviews_with_details(db, reviews))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching reviews for spot {spot_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while fetching reviews",
        )


@review_router.post(
    "/spots/{spot_id}/reviews", response_model=ReviewResponse, status_code=status.HTTP_201_CREATED
)
def create_review(
    spot_id: int,
    review: ReviewCreate = Depends(validated_body(ReviewCreate, REVIEW_RULES)),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Create a review for a spot"""
    try:
        logger.info(f"User {current_user.email} reviewing spot {spot_id}")
        db_review = review_crud.create_review(db, spot_id, review, current_user.id)
        return ReviewResponse.model_validate(db_review)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating review: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while creating review",
        )


@review_router.get("/reviews/current", response_model=ReviewListResponse, status_code=status.HTTP_200_OK)
def get_current_user_reviews(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Get reviews written by the current user"""
    try:
        logger.info(f"User {current_user.email} fetching own reviews")
        reviews = review_crud.get_user_reviews(db, current_user.id)
        return ReviewListResponse(reviews=reviews_with_details(db, reviews, include_spot=True))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching reviews of user {current_user.id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while fetching reviews",
        )


@review_router.put("/reviews/{review_id}", response_model=ReviewResponse, status_code=status.HTTP_200_OK)
def update_review(
    review_id: int,
    review_update: ReviewUpdate = Depends(validated_body(ReviewUpdate, REVIEW_RULES)),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Update a review (author only)"""
    try:
        logger.info(f"User {current_user.email} updating review {review_id}")
        db_review = review_crud.update_review(db, review_id, review_update, current_user.id)
        return ReviewResponse.model_validate(db_review)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating review {review_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while updating review",
        )


@review_router.delete("/reviews/{review_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_review(
    review_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Delete a review (author only)"""
    try:
        logger.info(f"User {current_user.email} deleting review {review_id}")
        review_crud.delete_review(db, review_id, current_user.id)
        return MessageResponse(message="Successfully deleted")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting review {review_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while deleting review",
        )


@review_router.post(
    "/reviews/{review_id}/images", response_model=ReviewImageResponse, status_code=status.HTTP_201_CREATED
)
def add_review_image(
    review_id: int,
    image: ReviewImageCreate = Depends(validated_body(ReviewImageCreate, REVIEW_IMAGE_RULES)),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Add an image to a review (author only)"""
    try:
        logger.info(f"User {current_user.email} adding image to review {review_id}")
        db_image = image_crud.add_review_image(db, review_id, image, current_user.id)
        return ReviewImageResponse.model_validate(db_image)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error adding image to review {review_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while adding review image",
        )
