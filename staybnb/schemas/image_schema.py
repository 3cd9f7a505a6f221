from pydantic import Field
from staybnb.schemas.base_schema import CamelModel


class SpotImageCreate(CamelModel):
    url: str = Field(..., examples=["https://example.com/spot.jpg"])
    preview: bool = False


class ReviewImageCreate(CamelModel):
    url: str = Field(..., examples=["https://example.com/review.jpg"])


class ReviewImageResponse(CamelModel):
    id: int
    url: str
