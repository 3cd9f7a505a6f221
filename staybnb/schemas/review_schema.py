from pydantic import Field
from typing import List, Optional
from datetime import datetime
from staybnb.schemas.base_schema import CamelModel
from staybnb.schemas.image_schema import ReviewImageResponse
from staybnb.schemas.spot_schema import SpotBrief
from staybnb.schemas.user_schema import UserSummary


class ReviewBase(CamelModel):
    review: str = Field(..., min_length=1, description="Review text")
    stars: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")


class ReviewCreate(ReviewBase):
    pass


class ReviewUpdate(ReviewBase):
    pass


class ReviewResponse(ReviewBase):
    id: int
    user_id: int
    spot_id: int
    created_at: datetime
    updated_at: datetime


class ReviewWithDetails(ReviewResponse):
    """Review with its author, images and (for the author's own listing) the spot"""
    user: UserSummary = Field(..., alias="User")
    spot: Optional[SpotBrief] = Field(None, alias="Spot")
    review_images: List[ReviewImageResponse] = Field(default_factory=list, alias="ReviewImages")


class ReviewListResponse(CamelModel):
    reviews: List[ReviewWithDetails] = Field(default_factory=list, alias="Reviews")
