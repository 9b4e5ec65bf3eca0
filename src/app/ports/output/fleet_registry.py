from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from src.domain.models import Bus, GeoPoint


class IFleetRegistry(ABC):
    """Port for the in-process store of fleet state.

    Implementations do not validate; callers hand in already checked values.
    """

    @abstractmethod
    def get(self, bus_id: str) -> Bus | None:
        raise NotImplementedError

    @abstractmethod
    def all(self) -> tuple[Bus, ...]:
        """Return every bus in registration order."""
        raise NotImplementedError

    @abstractmethod
    def apply_update(
        self,
        bus_id: str,
        *,
        position: GeoPoint,
        speed: float,
        last_update: str,
        last_update_at: datetime,
    ) -> Bus:
        raise NotImplementedError
