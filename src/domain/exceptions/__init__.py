from .tracking import BusNotFound, InvalidCoordinates, TrackingError

__all__ = ["BusNotFound", "InvalidCoordinates", "TrackingError"]
