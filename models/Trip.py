from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from database import Base

TRIP_STATUS_ACTIVE = "active"
TRIP_STATUS_ENDED = "ended"


class Trip(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True)
    owner_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(150), nullable=False)
    description = Column(Text)
    status = Column(String(20), default=TRIP_STATUS_ACTIVE, nullable=False, index=True)  # 'active' | 'ended'
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    owner = relationship("User", back_populates="trips")
    moments = relationship("Moment", back_populates="trip", cascade="all, delete-orphan")
    footprints = relationship("Footprint", back_populates="trip", cascade="all, delete-orphan")

    @property
    def is_ended(self) -> bool:
        return self.status == TRIP_STATUS_ENDED
