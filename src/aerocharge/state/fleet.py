"""Registry of charging vehicles and their Free/Busy state."""

from __future__ import annotations

import logging
import threading

from aerocharge.models.vehicle import ChargingVehicle, VehicleStatus

_logger = logging.getLogger(__name__)


class VehiclePool:
    """Concurrent, insert-only registry of vehicles keyed by vehicle id.

    Every status transition is a check-and-set under one lock that is held
    for the transition only. Callers must never await while holding it;
    the public methods make that impossible by keeping the lock private.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._vehicles: dict[str, ChargingVehicle] = {}

    def __len__(self) -> int:
        return len(self._vehicles)

    def __contains__(self, vehicle_id: object) -> bool:
        return vehicle_id in self._vehicles

    def add(self, vehicle: ChargingVehicle) -> bool:
        """Insert *vehicle* unless its id is already registered."""
        with self._lock:
            if vehicle.vehicle_id in self._vehicles:
                return False
            self._vehicles[vehicle.vehicle_id] = vehicle
            return True

    def get(self, vehicle_id: str) -> ChargingVehicle | None:
        return self._vehicles.get(vehicle_id)

    def snapshot(self) -> list[ChargingVehicle]:
        """Point-in-time list of registered vehicles.

        The list is a copy; statuses read from it may already be stale,
        which is why assignment goes through :meth:`try_acquire`.
        """
        with self._lock:
            return list(self._vehicles.values())

    def find_candidate(self, aircraft_node: str) -> ChargingVehicle | None:
        """First FREE vehicle able to serve *aircraft_node*, if any.

        No ordering or fairness is promised between concurrent callers.
        """
        for vehicle in self.snapshot():
            if vehicle.status is VehicleStatus.FREE and vehicle.serves(aircraft_node):
                return vehicle
        return None

    def try_acquire(self, vehicle_id: str) -> bool:
        """Move a vehicle FREE -> BUSY. ``False`` if it was not FREE."""
        with self._lock:
            vehicle = self._vehicles.get(vehicle_id)
            if vehicle is None or vehicle.status is not VehicleStatus.FREE:
                return False
            vehicle.status = VehicleStatus.BUSY
            return True

    def release(self, vehicle_id: str) -> bool:
        """Move a vehicle BUSY -> FREE. ``False`` if it was not BUSY."""
        with self._lock:
            vehicle = self._vehicles.get(vehicle_id)
            if vehicle is None or vehicle.status is not VehicleStatus.BUSY:
                _logger.warning("Release requested for vehicle %s which is not busy", vehicle_id)
                return False
            vehicle.status = VehicleStatus.FREE
            return True

    def set_position(self, vehicle_id: str, node: str) -> None:
        vehicle = self._vehicles.get(vehicle_id)
        if vehicle is not None:
            vehicle.current_node = node
