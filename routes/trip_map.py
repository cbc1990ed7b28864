from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from models.Trip import Trip
from models.Moment import Moment
from models.Footprint import Footprint, FOOTPRINT_TYPE_BREADCRUMB
from schemas import TripMap, MapBounds, MomentMarker, MomentRead, FootprintRead
from database import get_db
from utils.geocoding_helpers import route_distance

router = APIRouter(prefix="/trips/{trip_id}/map", tags=["Map"])


@router.get("/", response_model=TripMap)
def get_trip_map(trip_id: int, db: Session = Depends(get_db)):
    """
    Everything the client needs to draw a trip: the footprint route oldest
    first, one marker per moment that left a footprint, and the bounds to
    fit the view to.
    """
    if not db.query(Trip).filter(Trip.id == trip_id).first():
        raise HTTPException(status_code=404, detail="Trip not found")

    footprints = (
        db.query(Footprint)
        .filter(Footprint.trip_id == trip_id, Footprint.type == FOOTPRINT_TYPE_BREADCRUMB)
        .order_by(Footprint.created_at.asc(), Footprint.id.asc())
        .all()
    )
    moments_by_id = {
        m.id: m
        for m in db.query(Moment).filter(Moment.trip_id == trip_id).all()
    }

    route = [(f.lat, f.lng) for f in footprints]

    markers = []
    for f in footprints:
        moment = moments_by_id.get(f.moment_id) if f.moment_id else None
        if moment is None:
            continue
        markers.append(MomentMarker(
            moment=MomentRead.model_validate(moment),
            footprint=FootprintRead.model_validate(f),
        ))

    bounds = None
    if route:
        lats = [p[0] for p in route]
        lngs = [p[1] for p in route]
        bounds = MapBounds(south=min(lats), west=min(lngs), north=max(lats), east=max(lngs))

    return TripMap(
        trip_id=trip_id,
        footprints=[FootprintRead.model_validate(f) for f in footprints],
        route=route,
        moment_markers=markers,
        bounds=bounds,
        distance_m=route_distance(route),
    )
