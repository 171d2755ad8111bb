"""Record types for the capability map."""
from backend.models.schema import (
    Application, Capability, CapabilityMapSnapshot, CacheState, EMPTY_SNAPSHOT, FunctionEntry
)

__all__ = [
    'Application',
    'Capability',
    'CapabilityMapSnapshot',
    'CacheState',
    'EMPTY_SNAPSHOT',
    'FunctionEntry',
]
