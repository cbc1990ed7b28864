from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, func
from sqlalchemy.orm import relationship
from database import Base

class Moment(Base):
    __tablename__ = "moments"

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    author_id = Column(String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    text = Column(Text, nullable=False, default="")  # Empty when the moment is just a photo
    photo_ref = Column(String(500), nullable=True)  # URL of the uploaded photo
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    trip = relationship("Trip", back_populates="moments")
    author = relationship("User")
