from .bus import Bus
from .geo import GeoPoint
from .tracking import DerivedSnapshot, Direction, PositionUpdate, RouteLegMetric

__all__ = [
    "Bus",
    "DerivedSnapshot",
    "Direction",
    "GeoPoint",
    "PositionUpdate",
    "RouteLegMetric",
]
