from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from staybnb.models.image_model import SpotImage, ReviewImage
from staybnb.schemas.image_schema import SpotImageCreate, ReviewImageCreate
from staybnb.services.spot_crud import spot_crud
from staybnb.services.review_crud import review_crud
from staybnb.logger import get_logger

logger = get_logger(__name__)

MAX_REVIEW_IMAGES = 10


class ImageCRUD:
    @staticmethod
    def add_spot_image(db: Session, spot_id: int, image: SpotImageCreate, user_id: int) -> SpotImage:
        spot = spot_crud.get_spot_or_404(db, spot_id)

        if spot.owner_id != user_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

        try:
            db_image = SpotImage(spot_id=spot_id, url=image.url, preview=image.preview)
            db.add(db_image)
            db.commit()
            db.refresh(db_image)
            logger.info(f"Image {db_image.id} added to spot {spot_id}")
            return db_image

        except Exception as e:
            db.rollback()
            logger.error(f"Error adding image to spot {spot_id}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while adding spot image",
            )

    @staticmethod
    def delete_spot_image(db: Session, image_id: int, user_id: int) -> None:
        db_image = db.query(SpotImage).filter(SpotImage.id == image_id).first()
        if not db_image:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Spot Image couldn't be found"
            )

        if db_image.spot.owner_id != user_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

        db.delete(db_image)
        db.commit()
        logger.info(f"Spot image deleted: {image_id}")

    @staticmethod
    def add_review_image(db: Session, review_id: int, image: ReviewImageCreate, user_id: int) -> ReviewImage:
        """Attach an image to the user's own review, up to MAX_REVIEW_IMAGES"""
        review = review_crud.get_review_or_404(db, review_id)

        if review.user_id != user_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

        image_count = db.query(ReviewImage).filter(ReviewImage.review_id == review_id).count()
        if image_count >= MAX_REVIEW_IMAGES:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Maximum number of images for this resource was reached",
            )

        try:
            db_image = ReviewImage(review_id=review_id, url=image.url)
            db.add(db_image)
            db.commit()
            db.refresh(db_image)
            logger.info(f"Image {db_image.id} added to review {review_id}")
            return db_image

        except Exception as e:
            db.rollback()
            logger.error(f"Error adding image to review {review_id}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while adding review image",
            )

    @staticmethod
    def delete_review_image(db: Session, image_id: int, user_id: int) -> None:
        db_image = db.query(ReviewImage).filter(ReviewImage.id == image_id).first()
        if not db_image:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND, detail="Review Image couldn't be found"
            )

        if db_image.review.user_id != user_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

        db.delete(db_image)
        db.commit()
        logger.info(f"Review image deleted: {image_id}")


image_crud = ImageCRUD()
