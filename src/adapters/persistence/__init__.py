from .in_memory_fleet_registry import InMemoryFleetRegistry, build_default_fleet

__all__ = [
    "InMemoryFleetRegistry",
    "build_default_fleet",
]
