from datetime import datetime, timezone
from sqlalchemy import Column, Integer, DateTime, ForeignKey, Text, CheckConstraint, UniqueConstraint
from staybnb.database import Base
from sqlalchemy.orm import relationship


class Review(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    spot_id = Column(Integer, ForeignKey("spots.id", ondelete="CASCADE"), nullable=False, index=True)
    review = Column(Text, nullable=False)
    stars = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    user = relationship("User", back_populates="reviews")
    spot = relationship("Spot", back_populates="reviews")
    images = relationship(
        "ReviewImage", back_populates="review", cascade="all, delete-orphan", order_by="ReviewImage.id"
    )

    __table_args__ = (
        CheckConstraint("stars >= 1 AND stars <= 5", name="check_stars_range"),
        UniqueConstraint("user_id", "spot_id", name="uq_review_user_spot"),  # One review per user per spot
    )
