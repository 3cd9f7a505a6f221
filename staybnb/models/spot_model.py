from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Float, Numeric, DateTime, ForeignKey, Text, CheckConstraint
from staybnb.database import Base
from sqlalchemy.orm import relationship


class Spot(Base):
    __tablename__ = "spots"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    address = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False, index=True)
    state = Column(String(100), nullable=False)
    country = Column(String(100), nullable=False)
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    name = Column(String(49), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    owner = relationship("User", back_populates="spots")
    images = relationship(
        "SpotImage", back_populates="spot", cascade="all, delete-orphan", order_by="SpotImage.id"
    )
    bookings = relationship("Booking", back_populates="spot", cascade="all, delete-orphan")
    reviews = relationship("Review", back_populates="spot", cascade="all, delete-orphan")

    __table_args__ = (
        CheckConstraint("price > 0", name="check_spot_price_positive"),
    )
