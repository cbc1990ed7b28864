# schemas.py (Pydantic v2)
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Literal, Tuple
from datetime import date, datetime


# ---------- Users ----------
class UserBase(BaseModel):
    email: EmailStr
    display_name: Optional[str] = None

class UserWrite(UserBase):
    id: str  # uid from the identity provider

class UserRead(UserBase):
    id: str
    created_at: datetime

    class Config:
        from_attributes = True


# ---------- Trips ----------
TripStatus = Literal["active", "ended"]

class TripBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=150)
    description: Optional[str] = None

class TripWrite(TripBase):
    owner_id: str

class TripUpdate(TripBase):
    pass

class TripStatusUpdate(BaseModel):
    status: TripStatus

class TripRead(TripBase):
    id: int
    owner_id: str
    status: TripStatus
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


# ---------- Footprints ----------
class Location(BaseModel):
    """A device position as reported by the browser geolocation API"""
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)
    accuracy_m: Optional[float] = Field(None, gt=0)

class FootprintWrite(Location):
    place_text: Optional[str] = None  # Reverse geocoded when missing
    created_at: Optional[datetime] = None  # Defaults to server time

class FootprintRead(BaseModel):
    id: int
    trip_id: int
    type: str
    lat: float
    lng: float
    accuracy_m: Optional[float] = None
    place_text: Optional[str] = None
    moment_id: Optional[int] = None
    created_at: datetime

    class Config:
        from_attributes = True


# ---------- Moments ----------
class MomentWrite(BaseModel):
    author_id: str
    text: str = ""  # May be empty when a photo is attached
    photo_ref: Optional[str] = None
    location: Optional[Location] = None  # If present a footprint is left too (best effort)
    created_at: Optional[datetime] = None

class MomentUpdate(BaseModel):
    text: str

class MomentRead(BaseModel):
    id: int
    trip_id: int
    author_id: str
    text: str
    photo_ref: Optional[str] = None
    created_at: datetime

    class Config:
        from_attributes = True

class MomentCreated(MomentRead):
    footprint_id: Optional[int] = None  # None when no footprint could be left


# ---------- Timeline ----------
class TimelineEntryRead(BaseModel):
    """One row of the timeline: a moment, a footprint, or both"""
    kind: Literal["combined", "moment", "footprint"]
    created_at: Optional[datetime] = None  # None if the stored timestamp is unreadable
    moment: Optional[MomentRead] = None
    footprint: Optional[FootprintRead] = None

class TimelineDay(BaseModel):
    day: Optional[date] = None  # None groups entries with unreadable timestamps
    entries: List[TimelineEntryRead] = []

class TripTimeline(BaseModel):
    trip_id: int
    is_ended: bool
    timezone: str
    days: List[TimelineDay] = []


# ---------- Map ----------
class MomentMarker(BaseModel):
    moment: MomentRead
    footprint: FootprintRead

class MapBounds(BaseModel):
    south: float
    west: float
    north: float
    east: float

class TripMap(BaseModel):
    trip_id: int
    footprints: List[FootprintRead] = []
    route: List[Tuple[float, float]] = []  # [lat, lng] oldest first
    moment_markers: List[MomentMarker] = []
    bounds: Optional[MapBounds] = None
    distance_m: float = 0.0
