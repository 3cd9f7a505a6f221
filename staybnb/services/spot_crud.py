from fastapi import HTTPException, status
from sqlalchemy.orm import Session, joinedload
from sqlalchemy import func
from typing import Dict, Iterable, List, Optional, Tuple
from staybnb.models.spot_model import Spot
from staybnb.models.image_model import SpotImage
from staybnb.models.review_model import Review
from staybnb.schemas.spot_schema import SpotCreate, SpotUpdate, SpotQuery
from staybnb.logger import get_logger

logger = get_logger(__name__)

SPOT_NOT_FOUND = "Spot couldn't be found"


class SpotCRUD:
    @staticmethod
    def create_spot(db: Session, spot: SpotCreate, owner_id: int) -> Spot:
        """Create a new spot owned by the current user"""
        try:
            db_spot = Spot(owner_id=owner_id, **spot.model_dump())
            db.add(db_spot)
            db.commit()
            db.refresh(db_spot)
            logger.info(f"Spot created: {db_spot.id} by owner {owner_id}")
            return db_spot

        except Exception as e:
            db.rollback()
            logger.error(f"Error creating spot: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while creating spot",
            )

    @staticmethod
    def get_spot_by_id(db: Session, spot_id: int) -> Optional[Spot]:
        return db.query(Spot).filter(Spot.id == spot_id).first()

    @staticmethod
    def get_spot_or_404(db: Session, spot_id: int) -> Spot:
        spot = SpotCRUD.get_spot_by_id(db, spot_id)
        if not spot:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=SPOT_NOT_FOUND)
        return spot

    @staticmethod
    def get_spot_with_details(db: Session, spot_id: int) -> Spot:
        spot = (
            db.query(Spot)
            .options(joinedload(Spot.images), joinedload(Spot.owner))
            .filter(Spot.id == spot_id)
            .first()
        )
        if not spot:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=SPOT_NOT_FOUND)
        return spot

    @staticmethod
    def get_spots(db: Session, filters: SpotQuery) -> List[Spot]:
        """Get spots page by page with optional coordinate and price bounds"""
        query = db.query(Spot)

        if filters.min_lat is not None:
            query = query.filter(Spot.lat >= filters.min_lat)
        if filters.max_lat is not None:
            query = query.filter(Spot.lat <= filters.max_lat)
        if filters.min_lng is not None:
            query = query.filter(Spot.lng >= filters.min_lng)
        if filters.max_lng is not None:
            query = query.filter(Spot.lng <= filters.max_lng)
        if filters.min_price is not None:
            query = query.filter(Spot.price >= filters.min_price)
        if filters.max_price is not None:
            query = query.filter(Spot.price <= filters.max_price)

        offset = (filters.page - 1) * filters.size
        return query.order_by(Spot.id).offset(offset).limit(filters.size).all()

    @staticmethod
    def get_spots_by_owner(db: Session, owner_id: int) -> List[Spot]:
        return db.query(Spot).filter(Spot.owner_id == owner_id).order_by(Spot.id).all()

    @staticmethod
    def update_spot(db: Session, spot_id: int, spot_update: SpotUpdate, owner_id: int) -> Spot:
        db_spot = SpotCRUD.get_spot_or_404(db, spot_id)

        if db_spot.owner_id != owner_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

        try:
            for key, value in spot_update.model_dump().items():
                setattr(db_spot, key, value)

            db.commit()
            db.refresh(db_spot)
            logger.info(f"Spot updated: {spot_id}")
            return db_spot

        except Exception as e:
            db.rollback()
            logger.error(f"Error updating spot {spot_id}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while updating spot",
            )

    @staticmethod
    def delete_spot(db: Session, spot_id: int, owner_id: int) -> None:
        """Delete a spot together with its images, bookings and reviews"""
        db_spot = SpotCRUD.get_spot_or_404(db, spot_id)

        if db_spot.owner_id != owner_id:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden")

        try:
            db.delete(db_spot)
            db.commit()
            logger.info(f"Spot deleted: {spot_id}")

        except Exception as e:
            db.rollback()
            logger.error(f"Error deleting spot {spot_id}: {str(e)}")
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error occurred while deleting spot",
            )

    @staticmethod
    def get_rating_stats(db: Session, spot_ids: Iterable[int]) -> Dict[int, Tuple[int, Optional[float]]]:
        """Map spot id -> (review count, average stars); spots without reviews are absent"""
        spot_ids = list(spot_ids)
        if not spot_ids:
            return {}

        rows = (
            db.query(
                Review.spot_id,
                func.count(Review.id).label("num_reviews"),
                func.avg(Review.stars).label("avg_rating"),
            )
            .filter(Review.spot_id.in_(spot_ids))
            .group_by(Review.spot_id)
            .all()
        )
        return {
            row.spot_id: (row.num_reviews, float(row.avg_rating) if row.avg_rating is not None else None)
            for row in rows
        }

    @staticmethod
    def get_preview_images(db: Session, spot_ids: Iterable[int]) -> Dict[int, str]:
        """Map spot id -> url of its first preview image"""
        spot_ids = list(spot_ids)
        if not spot_ids:
            return {}

        images = (
            db.query(SpotImage)
            .filter(SpotImage.spot_id.in_(spot_ids), SpotImage.preview == True)
            .order_by(SpotImage.id)
            .all()
        )
        previews: Dict[int, str] = {}
        for image in images:
            previews.setdefault(image.spot_id, image.url)
        return previews


spot_crud = SpotCRUD()
