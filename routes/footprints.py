from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from models.Trip import Trip
from models.Footprint import Footprint, FOOTPRINT_TYPE_BREADCRUMB
from schemas import FootprintWrite, FootprintRead
from database import get_db
from services.journal_store import list_footprints
from utils.geocoding_helpers import reverse_geocode_place_text
from utils.time_helpers import as_utc

router = APIRouter(prefix="/trips/{trip_id}/footprints", tags=["Footprints"])


@router.post("/", response_model=FootprintRead, status_code=status.HTTP_201_CREATED)
async def leave_footprint(trip_id: int, payload: FootprintWrite, db: Session = Depends(get_db)):
    """Leave a footprint ("I'm here") at the device position."""
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if not trip:
        raise HTTPException(status_code=404, detail="Trip not found")

    if trip.is_ended:
        raise HTTPException(status_code=409, detail="This journey is completed. Re-open it to leave footprints.")

    place_text = payload.place_text
    if not place_text:
        place_text = await reverse_geocode_place_text(payload.lat, payload.lng)

    footprint = Footprint(
        trip_id=trip_id,
        type=FOOTPRINT_TYPE_BREADCRUMB,
        lat=payload.lat,
        lng=payload.lng,
        accuracy_m=payload.accuracy_m,
        place_text=place_text,
    )
    if payload.created_at is not None:
        footprint.created_at = as_utc(payload.created_at)

    db.add(footprint)
    db.commit()
    db.refresh(footprint)
    return footprint


@router.get("/", response_model=List[FootprintRead])
def get_footprints(trip_id: int, db: Session = Depends(get_db)):
    if not db.query(Trip).filter(Trip.id == trip_id).first():
        raise HTTPException(status_code=404, detail="Trip not found")

    return list_footprints(db, trip_id)


@router.delete("/{footprint_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_footprint(trip_id: int, footprint_id: int, db: Session = Depends(get_db)):
    footprint = (
        db.query(Footprint)
        .filter(Footprint.id == footprint_id, Footprint.trip_id == trip_id)
        .first()
    )
    if not footprint:
        raise HTTPException(status_code=404, detail="Footprint not found")

    db.delete(footprint)
    db.commit()
