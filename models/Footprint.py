from sqlalchemy import Column, Integer, String, Text, Float, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from database import Base

FOOTPRINT_TYPE_BREADCRUMB = "breadcrumb"


class Footprint(Base):
    __tablename__ = "footprints"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(String(20), default=FOOTPRINT_TYPE_BREADCRUMB, nullable=False, index=True)
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    accuracy_m = Column(Float, nullable=True)  # GPS accuracy radius reported by the device
    place_text = Column(Text, nullable=True)  # e.g. "Gràcia, Barcelona"
    # Set when the footprint was left while saving a moment; not an ownership link
    moment_id = Column(Integer, ForeignKey("moments.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    trip = relationship("Trip", back_populates="footprints")
