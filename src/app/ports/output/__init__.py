from .broadcast_gateway import IBroadcastGateway
from .fleet_registry import IFleetRegistry

__all__ = [
    "IBroadcastGateway",
    "IFleetRegistry",
]
