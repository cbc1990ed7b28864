"""
Geocoding helper utilities: turn a device position into a short human
label for a footprint, and measure distances along a trip route.
"""
import httpx
from typing import Optional

from config import NOMINATIM_URL, NOMINATIM_USER_AGENT, GEOCODE_TIMEOUT
from utils.logger import setup_api_logger

logger = setup_api_logger()


def build_place_label(address: dict, display_name: Optional[str] = None) -> Optional[str]:
    """
    Build a short place label like "Gràcia, Barcelona" from a Nominatim
    address block.

    Uses the most local name available, then the city. Without a city the
    county is used, and without a county the state.
    """
    locality = (
        address.get("suburb") or
        address.get("neighbourhood") or
        address.get("village") or
        address.get("town") or
        address.get("city_district") or
        address.get("hamlet")
    )
    city = address.get("city") or address.get("town") or address.get("village")
    county = address.get("county")
    state = address.get("state")

    parts = []
    if locality:
        parts.append(locality)
    if city and city != locality:
        parts.append(city)
    elif not city and county:
        parts.append(county)
    elif not city and not county and state:
        parts.append(state)

    label = ", ".join(p for p in parts if p)
    return label or display_name or None


async def reverse_geocode_place_text(
    lat: float,
    lng: float,
    timeout: float = GEOCODE_TIMEOUT
) -> Optional[str]:
    """
    Convert coordinates to a place label using Nominatim.

    Best effort: returns None on any network, HTTP or payload problem so the
    caller can save the footprint without a label.
    """
    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            resp = await client.get(
                f"{NOMINATIM_URL}/reverse",
                params={
                    "lat": lat,
                    "lon": lng,
                    "format": "jsonv2",
                    "zoom": 14,
                    "addressdetails": 1
                },
                headers={"User-Agent": NOMINATIM_USER_AGENT}
            )
            resp.raise_for_status()
            data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Reverse geocoding failed for (%s, %s): %s", lat, lng, e)
        return None

    if not isinstance(data, dict) or "error" in data:
        return None

    return build_place_label(data.get("address") or {}, data.get("display_name"))


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """
    Calculate the great circle distance between two points on the Earth
    (specified in decimal degrees) using the Haversine formula.

    Returns:
        Distance in meters
    """
    from math import radians, cos, sin, asin, sqrt

    # Convert decimal degrees to radians
    lat1, lon1, lat2, lon2 = map(radians, [lat1, lon1, lat2, lon2])

    # Haversine formula
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = sin(dlat/2)**2 + cos(lat1) * cos(lat2) * sin(dlon/2)**2
    c = 2 * asin(sqrt(a))

    # Radius of earth in meters
    r = 6371000

    return c * r


def route_distance(points: list) -> float:
    """Total length in meters of a path given as [(lat, lng), ...]."""
    return sum(
        haversine_distance(a[0], a[1], b[0], b[1])
        for a, b in zip(points, points[1:])
    )
