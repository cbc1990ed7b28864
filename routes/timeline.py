from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from models.Trip import Trip
from schemas import TripTimeline, TimelineDay, TimelineEntryRead, MomentRead, FootprintRead
from database import get_db
from config import DEFAULT_TIMEZONE
from services.journal_store import fetch_timeline_inputs, InputFetchError
from services.timeline_service import reconcile
from utils.time_helpers import resolve_timezone

router = APIRouter(prefix="/trips/{trip_id}/timeline", tags=["Timeline"])


def to_entry_read(entry) -> TimelineEntryRead:
    moment = getattr(entry, "moment", None)
    footprint = getattr(entry, "footprint", None)
    return TimelineEntryRead(
        kind=entry.kind,
        created_at=entry.created_at,
        moment=MomentRead.model_validate(moment) if moment is not None else None,
        footprint=FootprintRead.model_validate(footprint) if footprint is not None else None,
    )


@router.get("/", response_model=TripTimeline)
def get_timeline(trip_id: int, tz: Optional[str] = None, db: Session = Depends(get_db)):
    """
    Moments and footprints of a trip merged into one timeline, grouped by day.

    `tz` is the viewer's IANA time zone; day boundaries follow its wall clock.
    Active trips come newest first, ended trips oldest first.
    """
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if not trip:
        raise HTTPException(status_code=404, detail="Trip not found")

    try:
        zone = resolve_timezone(tz, DEFAULT_TIMEZONE)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        moments, footprints = fetch_timeline_inputs(db, trip_id)
    except InputFetchError as e:
        raise HTTPException(status_code=502, detail=e.message)

    groups = reconcile(moments, footprints, is_ended=trip.is_ended, tz=zone)

    return TripTimeline(
        trip_id=trip_id,
        is_ended=trip.is_ended,
        timezone=zone.key,
        days=[
            TimelineDay(day=day, entries=[to_entry_read(e) for e in entries])
            for day, entries in groups.items()
        ],
    )
