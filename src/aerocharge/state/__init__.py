"""In-memory dispatch state.

This package owns the only mutable state the dispatcher shares between
concurrent requests: the vehicle pool and the active charging sessions.
Nothing here is persisted; a restart re-registers the fleet from scratch.
"""

from aerocharge.state.fleet import VehiclePool
from aerocharge.state.sessions import ActiveSessionRegistry, ChargingSession

__all__ = ["ActiveSessionRegistry", "ChargingSession", "VehiclePool"]
