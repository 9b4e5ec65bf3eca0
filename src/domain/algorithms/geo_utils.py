from __future__ import annotations

import math
from datetime import timedelta

from src.domain.models import GeoPoint

EARTH_RADIUS_KM = 6371.0

# Straight-line distance underestimates what the bus actually drives.
ROAD_CORRECTION_FACTOR = 1.25

INDETERMINATE_LABEL = "Indefinido"


def haversine_distance_km(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in kilometers."""

    lat1 = math.radians(a.latitude)
    lon1 = math.radians(a.longitude)
    lat2 = math.radians(b.latitude)
    lon2 = math.radians(b.longitude)

    dlat = lat2 - lat1
    dlon = lon2 - lon1

    s = (
        math.sin(dlat / 2.0) ** 2
        + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
    )
    return 2.0 * EARTH_RADIUS_KM * math.atan2(math.sqrt(s), math.sqrt(1.0 - s))


def _round_half_up(value: float, places: int = 2) -> float:
    scale = 10**places
    return math.floor(value * scale + 0.5) / scale


def distance(a: GeoPoint, b: GeoPoint) -> float:
    """Approximate road distance in km, rounded to two decimals."""

    return _round_half_up(haversine_distance_km(a, b) * ROAD_CORRECTION_FACTOR)


def estimated_travel_time(
    distance_km: float | None, speed_kmh: float | None
) -> timedelta | None:
    """Time to cover `distance_km` at `speed_kmh`.

    Returns None when no estimate is possible (no distance, or the bus is
    not moving).
    """

    if distance_km is None or speed_kmh is None:
        return None
    if not math.isfinite(speed_kmh) or speed_kmh <= 0.0:
        return None
    if not math.isfinite(distance_km) or distance_km < 0.0:
        return None
    return timedelta(hours=distance_km / speed_kmh)


def format_travel_time(value: timedelta | None) -> str:
    if value is None:
        return INDETERMINATE_LABEL

    minutes = max(0, round(value.total_seconds() / 60.0))
    if minutes < 60:
        return f"{minutes} min"
    hours, rest = divmod(minutes, 60)
    return f"{hours} h {rest:02d} min"
