from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any

import pytest

from aerocharge.exceptions import GroundControlTransportError, MoveConflictError
from aerocharge.models.vehicle import VehicleRegistration


@dataclass
class FakeGroundControl:
    """In-memory stand-in for the ground control gateway."""

    registrations: list[dict[str, Any]] = field(default_factory=list)
    routes: dict[tuple[str, str], list[str]] = field(default_factory=dict)
    distance: float = 40.0
    conflicts: dict[tuple[str, str], int] = field(default_factory=dict)
    move_error: Exception | None = None
    registration_errors: set[int] = field(default_factory=set)
    calls: list[tuple[Any, ...]] = field(default_factory=list)
    _registered: int = 0

    def calls_to(self, name: str) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] == name]

    async def register_vehicle(self, vehicle_type: str) -> VehicleRegistration:
        self.calls.append(("register_vehicle", vehicle_type))
        index = self._registered
        self._registered += 1
        if index in self.registration_errors:
            raise GroundControlTransportError("HTTP 500 from /register-vehicle", status_code=500)
        return VehicleRegistration.model_validate(self.registrations[index])

    async def get_route(self, from_node: str, to_node: str, vehicle_type: str) -> list[str]:
        self.calls.append(("get_route", from_node, to_node, vehicle_type))
        await asyncio.sleep(0)
        return list(self.routes.get((from_node, to_node), [from_node, to_node]))

    async def request_move(self, vehicle_id: str, vehicle_type: str, from_node: str, to_node: str) -> float:
        self.calls.append(("request_move", vehicle_id, from_node, to_node))
        await asyncio.sleep(0)
        if self.move_error is not None:
            raise self.move_error
        remaining = self.conflicts.get((from_node, to_node), 0)
        if remaining > 0:
            self.conflicts[(from_node, to_node)] = remaining - 1
            raise MoveConflictError("contested", status_code=409, endpoint="/move")
        return self.distance

    async def notify_arrival(self, vehicle_id: str, vehicle_type: str, node: str) -> None:
        self.calls.append(("notify_arrival", vehicle_id, node))
        await asyncio.sleep(0)


@dataclass
class RecordingSleep:
    """Replacement for ``asyncio.sleep`` that records delays and only yields."""

    delays: list[float] = field(default_factory=list)

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        await asyncio.sleep(0)


def registration(vehicle_id: str, garage: str, spots: dict[str, str]) -> dict[str, Any]:
    return {"vehicleId": vehicle_id, "garrageNodeId": garage, "serviceSpots": spots}


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()
