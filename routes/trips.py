from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from models.Trip import Trip, TRIP_STATUS_ACTIVE
from models.User import User
from schemas import TripWrite, TripUpdate, TripStatusUpdate, TripRead, TripStatus
from database import get_db
from utils.logger import setup_api_logger

logger = setup_api_logger()
router = APIRouter(prefix="/trips", tags=["Trips"])


@router.post("/", response_model=TripRead, status_code=status.HTTP_201_CREATED)
def create_trip(payload: TripWrite, db: Session = Depends(get_db)):
    owner = db.query(User).filter(User.id == payload.owner_id).first()
    if not owner:
        raise HTTPException(status_code=404, detail="Owner not found")

    trip = Trip(**payload.model_dump(), status=TRIP_STATUS_ACTIVE)
    db.add(trip)
    db.commit()
    db.refresh(trip)
    return trip


@router.get("/", response_model=List[TripRead])
def list_trips(
    owner_id: Optional[str] = None,
    status: Optional[TripStatus] = None,
    db: Session = Depends(get_db)
):
    """Journeys, newest first. Filter by owner and/or 'active' / 'ended'."""
    query = db.query(Trip)
    if owner_id:
        query = query.filter(Trip.owner_id == owner_id)
    if status:
        query = query.filter(Trip.status == status)
    return query.order_by(Trip.created_at.desc(), Trip.id.desc()).all()


@router.get("/{trip_id}", response_model=TripRead)
def get_trip(trip_id: int, db: Session = Depends(get_db)):
    t = db.query(Trip).filter(Trip.id == trip_id).first()
    if not t:
        raise HTTPException(status_code=404, detail="Trip not found")
    return t


@router.put("/{trip_id}", response_model=TripRead)
def update_trip(trip_id: int, payload: TripUpdate, db: Session = Depends(get_db)):
    t = db.query(Trip).filter(Trip.id == trip_id).first()
    if not t:
        raise HTTPException(status_code=404, detail="Trip not found")

    for k, v in payload.model_dump().items():
        setattr(t, k, v)

    db.commit()
    db.refresh(t)
    return t


@router.patch("/{trip_id}/status", response_model=TripRead)
def set_trip_status(trip_id: int, payload: TripStatusUpdate, db: Session = Depends(get_db)):
    """Mark a journey complete ('ended') or re-open it ('active')."""
    t = db.query(Trip).filter(Trip.id == trip_id).first()
    if not t:
        raise HTTPException(status_code=404, detail="Trip not found")

    if t.status != payload.status:
        logger.info("Trip %s status %s -> %s", trip_id, t.status, payload.status)
        t.status = payload.status
        db.commit()
        db.refresh(t)
    return t


@router.delete("/{trip_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_trip(trip_id: int, db: Session = Depends(get_db)):
    t = db.query(Trip).filter(Trip.id == trip_id).first()
    if not t:
        raise HTTPException(status_code=404, detail="Trip not found")
    db.delete(t)
    db.commit()
