from pydantic import Field
from typing import List, Optional
from datetime import datetime
from staybnb.schemas.base_schema import CamelModel
from staybnb.schemas.user_schema import UserSummary


class SpotBase(CamelModel):
    address: str = Field(..., examples=["123 Disney Lane"])
    city: str = Field(..., examples=["San Francisco"])
    state: str = Field(..., examples=["California"])
    country: str = Field(..., examples=["United States of America"])
    lat: float = Field(..., ge=-90, le=90, examples=[37.7645358])
    lng: float = Field(..., ge=-180, le=180, examples=[-122.4730327])
    name: str = Field(..., max_length=49, examples=["App Academy"])
    description: str = Field(..., examples=["Place where web developers are created"])
    price: float = Field(..., gt=0, examples=[123])


class SpotCreate(SpotBase):
    pass


class SpotUpdate(SpotBase):
    pass


class SpotResponse(SpotBase):
    id: int
    owner_id: int
    created_at: datetime
    updated_at: datetime


class SpotSummary(SpotResponse):
    avg_rating: Optional[float] = None
    preview_image: Optional[str] = None


class SpotBrief(CamelModel):
    """Spot as nested inside a booking or review listing (no description)"""
    id: int
    owner_id: int
    address: str
    city: str
    state: str
    country: str
    lat: float
    lng: float
    name: str
    price: float
    preview_image: Optional[str] = None


class SpotImageResponse(CamelModel):
    id: int
    url: str
    preview: bool


class SpotDetail(SpotResponse):
    num_reviews: int = 0
    avg_star_rating: Optional[float] = None
    spot_images: List[SpotImageResponse] = Field(default_factory=list, alias="SpotImages")
    owner: UserSummary = Field(..., alias="Owner")


class SpotListResponse(CamelModel):
    spots: List[SpotSummary] = Field(default_factory=list, alias="Spots")
    page: Optional[int] = None
    size: Optional[int] = None


class SpotQuery(CamelModel):
    page: int = 1
    size: int = 20
    min_lat: Optional[float] = None
    max_lat: Optional[float] = None
    min_lng: Optional[float] = None
    max_lng: Optional[float] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None
