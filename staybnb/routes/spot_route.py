from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from staybnb.services.spot_crud import spot_crud
from staybnb.services.image_crud import image_crud
from staybnb.services.projections import spot_summaries, spot_detail
from staybnb.schemas.base_schema import MessageResponse
from staybnb.schemas.image_schema import SpotImageCreate
from staybnb.schemas.spot_schema import (
    SpotCreate,
    SpotUpdate,
    SpotQuery,
    SpotResponse,
    SpotDetail,
    SpotListResponse,
    SpotImageResponse,
)
from staybnb.database import get_db
from staybnb.security.auth import get_current_active_user
from staybnb.validation import validated_body, validated_query, SPOT_RULES, SPOT_QUERY_RULES, SPOT_IMAGE_RULES
from staybnb.models.user_model import User
from staybnb.logger import get_logger

spot_router = APIRouter()
logger = get_logger(__name__)


@spot_router.get("/spots", response_model=SpotListResponse, status_code=status.HTTP_200_OK)
def get_spots(
    filters: SpotQuery = Depends(validated_query(SpotQuery, SPOT_QUERY_RULES)),
    db: Session = Depends(get_db),
):
    """Get all spots with optional latitude, longitude and price bounds"""
    try:
        logger.info(f"Fetching spots page {filters.page} size {filters.size}")
        spots = spot_crud.get_spots(db, filters)
        return SpotListResponse(spots=spot_summaries(db, spots), page=filters.page, size=filters.size)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching spots: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while fetching spots",
        )


@spot_router.get("/spots/current", response_model=SpotListResponse, status_code=status.HTTP_200_OK)
def get_current_user_spots(
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Get spots owned by the current user"""
    try:
        logger.info(f"User {current_user.email} fetching own spots")
        spots = spot_crud.get_spots_by_owner(db, current_user.id)
        return SpotListResponse(spots=spot_summaries(db, spots))

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching spots of user {current_user.id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while fetching spots",
        )


@spot_router.get("/spots/{spot_id}", response_model=SpotDetail, status_code=status.HTTP_200_OK)
def get_spot(spot_id: int, db: Session = Depends(get_db)):
    """Get spot details with images, owner and rating"""
    try:
        logger.info(f"Fetching spot: {spot_id}")
        spot = spot_crud.get_spot_with_details(db, spot_id)
        return spot_detail(db, spot)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching spot {spot_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while fetching spot",
        )


@spot_router.post("/spots", response_model=SpotResponse, status_code=status.HTTP_201_CREATED)
def create_spot(
    spot: SpotCreate = Depends(validated_body(SpotCreate, SPOT_RULES)),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Create a new spot"""
    try:
        logger.info(f"User {current_user.email} creating spot {spot.name}")
        db_spot = spot_crud.create_spot(db, spot, current_user.id)
        return SpotResponse.model_validate(db_spot)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating spot: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while creating spot",
        )


@spot_router.put("/spots/{spot_id}", response_model=SpotResponse, status_code=status.HTTP_200_OK)
def update_spot(
    spot_id: int,
    spot_update: SpotUpdate = Depends(validated_body(SpotUpdate, SPOT_RULES)),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Update a spot (owner only)"""
    try:
        logger.info(f"User {current_user.email} updating spot {spot_id}")
        db_spot = spot_crud.update_spot(db, spot_id, spot_update, current_user.id)
        return SpotResponse.model_validate(db_spot)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating spot {spot_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while updating spot",
        )


@spot_router.delete("/spots/{spot_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
def delete_spot(
    spot_id: int,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Delete a spot (owner only)"""
    try:
        logger.info(f"User {current_user.email} deleting spot {spot_id}")
        spot_crud.delete_spot(db, spot_id, current_user.id)
        return MessageResponse(message="Successfully deleted")

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting spot {spot_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while deleting spot",
        )


@spot_router.post(
    "/spots/{spot_id}/images", response_model=SpotImageResponse, status_code=status.HTTP_201_CREATED
)
def add_spot_image(
    spot_id: int,
    image: SpotImageCreate = Depends(validated_body(SpotImageCreate, SPOT_IMAGE_RULES)),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_db),
):
    """Add an image to a spot (owner only)"""
    try:
        logger.info(f"User {current_user.email} adding image to spot {spot_id}")
        db_image = image_crud.add_spot_image(db, spot_id, image, current_user.id)
        return SpotImageResponse.model_validate(db_image)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error adding image to spot {spot_id}: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error occurred while adding spot image",
        )
