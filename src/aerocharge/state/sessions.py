"""Active charging sessions keyed by aircraft node."""

from __future__ import annotations

import threading
import time

from pydantic import BaseModel, ConfigDict, Field


class ChargingSession(BaseModel):
    """A vehicle committed to one aircraft node.

    Parameters
    ----------
    aircraft_node : str
        Parking stand of the aircraft being served.
    vehicle_id : str
        Vehicle assigned to it.
    created_at : float
        Monotonic timestamp (``time.monotonic()``) of the assignment.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    aircraft_node: str
    vehicle_id: str
    created_at: float = Field(default_factory=time.monotonic)

    @property
    def age(self) -> float:
        """Seconds since the vehicle was assigned."""
        return time.monotonic() - self.created_at


class ActiveSessionRegistry:
    """Concurrent map of aircraft node -> :class:`ChargingSession`.

    Entries are never evicted; the dispatcher removes them explicitly.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[str, ChargingSession] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, aircraft_node: object) -> bool:
        return aircraft_node in self._sessions

    def add(self, session: ChargingSession) -> bool:
        """Insert *session* unless its aircraft node already has one."""
        with self._lock:
            if session.aircraft_node in self._sessions:
                return False
            self._sessions[session.aircraft_node] = session
            return True

    def get(self, aircraft_node: str) -> ChargingSession | None:
        return self._sessions.get(aircraft_node)

    def pop(self, aircraft_node: str) -> ChargingSession | None:
        """Remove and return the session; only one concurrent caller gets it."""
        with self._lock:
            return self._sessions.pop(aircraft_node, None)

    def snapshot(self) -> list[ChargingSession]:
        with self._lock:
            return list(self._sessions.values())
