"""Response shapes with derived fields.

Average rating, review count and preview image are computed per request
from aggregate queries and attached to pydantic response models. ORM rows
are never mutated to carry them.
"""
from typing import Dict, List, Optional, Sequence
from sqlalchemy.orm import Session
from staybnb.models.booking_model import Booking
from staybnb.models.review_model import Review
from staybnb.models.spot_model import Spot
from staybnb.schemas.booking_schema import BookingPublic, BookingWithSpot, BookingWithUser
from staybnb.schemas.image_schema import ReviewImageResponse
from staybnb.schemas.review_schema import ReviewWithDetails
from staybnb.schemas.spot_schema import SpotBrief, SpotDetail, SpotImageResponse, SpotSummary
from staybnb.schemas.user_schema import UserSummary
from staybnb.services.spot_crud import spot_crud


def spot_summaries(db: Session, spots: Sequence[Spot]) -> List[SpotSummary]:
    spot_ids = [spot.id for spot in spots]
    stats = spot_crud.get_rating_stats(db, spot_ids)
    previews = spot_crud.get_preview_images(db, spot_ids)

    summaries = []
    for spot in spots:
        _, avg_rating = stats.get(spot.id, (0, None))
        summaries.append(
            SpotSummary.model_validate(spot).model_copy(
                update={"avg_rating": avg_rating, "preview_image": previews.get(spot.id)}
            )
        )
    return summaries


def spot_detail(db: Session, spot: Spot) -> SpotDetail:
    num_reviews, avg_star_rating = spot_crud.get_rating_stats(db, [spot.id]).get(spot.id, (0, None))
    return SpotDetail(
        id=spot.id,
        owner_id=spot.owner_id,
        address=spot.address,
        city=spot.city,
        state=spot.state,
        country=spot.country,
        lat=spot.lat,
        lng=spot.lng,
        name=spot.name,
        description=spot.description,
        price=spot.price,
        created_at=spot.created_at,
        updated_at=spot.updated_at,
        num_reviews=num_reviews,
        avg_star_rating=avg_star_rating,
        spot_images=[SpotImageResponse.model_validate(image) for image in spot.images],
        owner=UserSummary.model_validate(spot.owner),
    )


def _spot_brief(spot: Optional[Spot], previews: Dict[int, str]) -> Optional[SpotBrief]:
    if spot is None:
        return None
    return SpotBrief.model_validate(spot).model_copy(update={"preview_image": previews.get(spot.id)})


def bookings_with_spot(db: Session, bookings: Sequence[Booking]) -> List[BookingWithSpot]:
    previews = spot_crud.get_preview_images(db, {booking.spot_id for booking in bookings})
    return [
        BookingWithSpot.model_validate(booking).model_copy(
            update={"spot": _spot_brief(booking.spot, previews)}
        )
        for booking in bookings
    ]


def spot_bookings_view(bookings: Sequence[Booking], is_owner: bool) -> list:
    """Owners see full bookings with the guest; everyone else only the dates"""
    if is_owner:
        return [
            BookingWithUser.model_validate(booking).model_copy(
                update={"user": UserSummary.model_validate(booking.user)}
            )
            for booking in bookings
        ]
    return [BookingPublic.model_validate(booking) for booking in bookings]


def reviews_with_details(
    db: Session, reviews: Sequence[Review], include_spot: bool = False
) -> List[ReviewWithDetails]:
    previews: Dict[int, str] = {}
    if include_spot:
        previews = spot_crud.get_preview_images(db, {review.spot_id for review in reviews})

    return [
        ReviewWithDetails(
            id=review.id,
            user_id=review.user_id,
            spot_id=review.spot_id,
            review=review.review,
            stars=review.stars,
            created_at=review.created_at,
            updated_at=review.updated_at,
            user=UserSummary.model_validate(review.user),
            spot=_spot_brief(review.spot, previews) if include_spot else None,
            review_images=[ReviewImageResponse.model_validate(image) for image in review.images],
        )
        for review in reviews
    ]
