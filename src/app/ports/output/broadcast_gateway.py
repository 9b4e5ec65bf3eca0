from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping


class IBroadcastGateway(ABC):
    """Port for fanning events out to every connected observer.

    Delivery is best-effort with no acknowledgment. `publish` must not block;
    events reach each observer in publish order.
    """

    @abstractmethod
    def publish(self, event: str, payload: Mapping[str, Any]) -> None:
        raise NotImplementedError
