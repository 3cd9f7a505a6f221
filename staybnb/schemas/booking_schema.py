from pydantic import Field, model_validator
from typing import List, Optional
from datetime import date, datetime
from staybnb.schemas.base_schema import CamelModel
from staybnb.schemas.spot_schema import SpotBrief
from staybnb.schemas.user_schema import UserSummary


class BookingBase(CamelModel):
    start_date: date = Field(..., description="First night of the stay")
    end_date: date = Field(..., description="Checkout day (exclusive)")


class BookingCreate(BookingBase):
    @model_validator(mode="after")
    def end_date_must_be_after_start_date(self):
        if self.end_date <= self.start_date:
            raise ValueError("endDate cannot be on or before startDate")
        return self


class BookingPublic(BookingBase):
    """What a non-owner may see of someone else's booking"""
    spot_id: int


class BookingResponse(BookingPublic):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime


class BookingWithUser(BookingResponse):
    user: UserSummary = Field(..., alias="User")


class BookingWithSpot(BookingResponse):
    spot: Optional[SpotBrief] = Field(None, alias="Spot")


class BookingListResponse(CamelModel):
    bookings: List[BookingWithSpot] = Field(default_factory=list, alias="Bookings")
