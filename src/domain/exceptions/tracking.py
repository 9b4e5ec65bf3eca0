class TrackingError(Exception):
    """Base exception for rejected position reports."""


class BusNotFound(TrackingError):
    """Raised when a report targets a bus id that is not in the fleet."""

    def __init__(self, bus_id: str) -> None:
        super().__init__(f"Unknown bus: {bus_id}")
        self.bus_id = bus_id


class InvalidCoordinates(TrackingError):
    """Raised when latitude/longitude are not finite numbers in range."""
