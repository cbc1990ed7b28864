from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from models.Trip import Trip
from models.User import User
from models.Moment import Moment
from models.Footprint import Footprint, FOOTPRINT_TYPE_BREADCRUMB
from schemas import MomentWrite, MomentUpdate, MomentRead, MomentCreated, Location
from database import get_db
from services.journal_store import list_moments
from utils.geocoding_helpers import reverse_geocode_place_text
from utils.time_helpers import as_utc
from utils.logger import setup_api_logger

logger = setup_api_logger()
router = APIRouter(prefix="/trips/{trip_id}/moments", tags=["Moments"])


async def leave_moment_footprint(db: Session, moment: Moment, location: Location):
    """
    Leave a breadcrumb where the moment was written.

    Never raises: a moment is saved whether or not its footprint is, so any
    failure here is logged and None is returned.
    """
    try:
        place_text = await reverse_geocode_place_text(location.lat, location.lng)

        footprint = Footprint(
            trip_id=moment.trip_id,
            type=FOOTPRINT_TYPE_BREADCRUMB,
            lat=location.lat,
            lng=location.lng,
            accuracy_m=location.accuracy_m,
            place_text=place_text,
            moment_id=moment.id,
            created_at=moment.created_at,
        )
        db.add(footprint)
        db.commit()
        db.refresh(footprint)
        return footprint
    except Exception as e:
        db.rollback()
        logger.warning("Moment %s saved without footprint: %s", moment.id, e, exc_info=True)
        return None


# =====================================================
#                 POST MOMENT
# =====================================================
@router.post("/", response_model=MomentCreated, status_code=status.HTTP_201_CREATED)
async def create_moment(trip_id: int, payload: MomentWrite, db: Session = Depends(get_db)):
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if not trip:
        raise HTTPException(status_code=404, detail="Trip not found")

    if trip.is_ended:
        raise HTTPException(status_code=409, detail="This journey is completed. Re-open it to add moments.")

    if not db.query(User).filter(User.id == payload.author_id).first():
        raise HTTPException(status_code=404, detail="Author not found")

    text = payload.text.strip()
    if not text and not payload.photo_ref:
        raise HTTPException(status_code=400, detail="Add a few words or a photo.")

    moment = Moment(
        trip_id=trip_id,
        author_id=payload.author_id,
        text=text,
        photo_ref=payload.photo_ref,
    )
    if payload.created_at is not None:
        moment.created_at = as_utc(payload.created_at)

    db.add(moment)
    db.commit()
    db.refresh(moment)

    footprint = None
    if payload.location is not None:
        footprint = await leave_moment_footprint(db, moment, payload.location)

    result = MomentCreated.model_validate(moment)
    result.footprint_id = footprint.id if footprint else None
    return result


# =====================================================
#                 GET MOMENTS
# =====================================================
@router.get("/", response_model=List[MomentRead])
def get_moments(trip_id: int, db: Session = Depends(get_db)):
    if not db.query(Trip).filter(Trip.id == trip_id).first():
        raise HTTPException(status_code=404, detail="Trip not found")

    return list_moments(db, trip_id)


# =====================================================
#                 EDIT MOMENT
# =====================================================
@router.patch("/{moment_id}", response_model=MomentRead)
def edit_moment(trip_id: int, moment_id: int, payload: MomentUpdate, db: Session = Depends(get_db)):
    moment = db.query(Moment).filter(Moment.id == moment_id, Moment.trip_id == trip_id).first()
    if not moment:
        raise HTTPException(status_code=404, detail="Moment not found")

    text = payload.text.strip()
    if not text:
        raise HTTPException(status_code=400, detail="Moment text cannot be empty.")

    moment.text = text
    db.commit()
    db.refresh(moment)
    return moment


# =====================================================
#                 DELETE MOMENT
# =====================================================
@router.delete("/{moment_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_moment(trip_id: int, moment_id: int, db: Session = Depends(get_db)):
    moment = db.query(Moment).filter(Moment.id == moment_id, Moment.trip_id == trip_id).first()
    if not moment:
        raise HTTPException(status_code=404, detail="Moment not found")

    # Footprints left with this moment go with it
    db.query(Footprint).filter(Footprint.moment_id == moment_id).delete(synchronize_session=False)
    db.delete(moment)
    db.commit()
