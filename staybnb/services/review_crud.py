from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload
from typing import List, Optional
from staybnb.models.review_model import Review
from staybnb.schemas.review_schema import ReviewCreate, ReviewUpdate
from staybnb.services.spot_crud import spot_crud
from staybnb.logger import get_logger

logger = get_logger(__name__)

REVIEW_NOT_FOUND = "Review couldn't be found"
DUPLICATE_REVIEW = "User already has a review for this spot"


class ReviewCRUD:
    @staticmethod
    def create_review(db: Session, spot_id: int, review: ReviewCreate, user_id: int) -> Review:
        """Create a review; a user reviews each spot at most once"""
        spot_crud.get_spot_or_404(db, spot_id)

        existing_review = (
            db.query(Review)
            .filter(Review.spot_id == spot_id, Review.user_id == user_id)
            .first()
        )
        if existing_review:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=DUPLICATE_REVIEW,
            )

        try:
            db_review = Review(
                spot_id=spot_id,
                user_id=user_id,
                review=review.review,
                stars=review.stars,
            )
            db.add(db_review)
            db.commit()
            db.refresh(db_review)
            logger.info(f"Review created: {db_review.id} for spot {spot_id}")
            return db_review

        except IntegrityError:
            db.rollback()
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=DUPLICATE_REVIEW,
            )
        except Exception as e:
            db.rollback()
            logger.error(f"Error creating review: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while creating review",
            )

    @staticmethod
    def get_review_by_id(db: Session, review_id: int) -> Optional[Review]:
        return db.query(Review).filter(Review.id == review_id).first()

    @staticmethod
    def get_review_or_404(db: Session, review_id: int) -> Review:
        review = ReviewCRUD.get_review_by_id(db, review_id)
        if not review:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=REVIEW_NOT_FOUND)
        return review

    @staticmethod
    def get_spot_reviews(db: Session, spot_id: int) -> List[Review]:
        spot_crud.get_spot_or_404(db, spot_id)
        return (
            db.query(Review)
            .options(joinedload(Review.user), selectinload(Review.images))
            .filter(Review.spot_id == spot_id)
            .order_by(Review.created_at.desc())
            .all()
        )

    @staticmethod
    def get_user_reviews(db: Session, user_id: int) -> List[Review]:
        return (
            db.query(Review)
            .options(joinedload(Review.user), joinedload(Review.spot), selectinload(Review.images))
            .filter(Review.user_id == user_id)
            .order_by(Review.created_at.desc())
            .all()
        )

    @staticmethod
    def update_review(db: Session, review_id: int, review_update: ReviewUpdate, user_id: int) -> Review:
        db_review = ReviewCRUD.get_review_or_404(db, review_id)

        if db_review.user_id != user_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

        try:
            db_review.review = review_update.review
            db_review.stars = review_update.stars
            db.commit()
            db.refresh(db_review)
            logger.info(f"Review updated: {review_id}")
            return db_review

        except Exception as e:
            db.rollback()
            logger.error(f"Error updating review {review_id}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while updating review",
            )

    @staticmethod
    def delete_review(db: Session, review_id: int, user_id: int) -> None:
        db_review = ReviewCRUD.get_review_or_404(db, review_id)

        if db_review.user_id != user_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

        try:
            db.delete(db_review)
            db.commit()
            logger.info(f"Review deleted: {review_id}")

        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting review {review_id}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while deleting review",
            )


review_crud = ReviewCRUD()
