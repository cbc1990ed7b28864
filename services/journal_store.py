"""
Read side of the journal: the two lists the timeline is built from.
"""
from typing import List, Tuple
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from models.Moment import Moment
from models.Footprint import Footprint, FOOTPRINT_TYPE_BREADCRUMB
from utils.logger import setup_api_logger

logger = setup_api_logger()


class InputFetchError(Exception):
    """One of the timeline source lists could not be loaded."""

    def __init__(self, source: str, message: str):
        super().__init__(message)
        self.source = source
        self.message = message


def list_moments(db: Session, trip_id: int) -> List[Moment]:
    return (
        db.query(Moment)
        .filter(Moment.trip_id == trip_id)
        .order_by(Moment.created_at.desc())
        .all()
    )


def list_footprints(db: Session, trip_id: int, type: str = FOOTPRINT_TYPE_BREADCRUMB) -> List[Footprint]:
    return (
        db.query(Footprint)
        .filter(Footprint.trip_id == trip_id, Footprint.type == type)
        .order_by(Footprint.created_at.desc())
        .all()
    )


def fetch_timeline_inputs(db: Session, trip_id: int) -> Tuple[List[Moment], List[Footprint]]:
    """
    Load both lists for a trip. Either both come back or InputFetchError is
    raised with the database message; there is no partial result.
    """
    try:
        moments = list_moments(db, trip_id)
    except SQLAlchemyError as e:
        logger.error("Could not load moments for trip %s: %s", trip_id, e)
        raise InputFetchError("moments", str(e)) from e

    try:
        footprints = list_footprints(db, trip_id)
    except SQLAlchemyError as e:
        logger.error("Could not load footprints for trip %s: %s", trip_id, e)
        raise InputFetchError("footprints", str(e)) from e

    return moments, footprints
