from datetime import datetime, timezone
from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, CheckConstraint, Index
from staybnb.database import Base
from sqlalchemy.orm import relationship


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    spot_id = Column(Integer, ForeignKey("spots.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    user = relationship("User", back_populates="bookings")
    spot = relationship("Spot", back_populates="bookings")

    __table_args__ = (
        # Stays are half-open [start_date, end_date), so a same-day stay is empty
        CheckConstraint("end_date > start_date", name="check_booking_dates_order"),
        Index("ix_bookings_spot_dates", "spot_id", "start_date", "end_date"),
    )
