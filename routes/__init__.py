from . import users
from . import trips
from . import moments
from . import footprints
from . import timeline
from . import trip_map
from . import files

__all__ = [
    "users",
    "trips",
    "moments",
    "footprints",
    "timeline",
    "trip_map",
    "files",
]
