"""Ground control gateway.

Endpoints:
  - /register-vehicle/{type} (registration)
  - /route (route query)
  - /move (movement permission; 409 means the segment is contested)
  - /arrived (arrival notice)
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from pydantic import ValidationError

from aerocharge._constants import (
    ARRIVED_ENDPOINT,
    MOVE_CONFLICT_STATUS,
    MOVE_ENDPOINT,
    REGISTER_VEHICLE_ENDPOINT,
    ROUTE_ENDPOINT,
)
from aerocharge._transport import Transport
from aerocharge.exceptions import GroundControlTransportError, MoveConflictError
from aerocharge.models.charging import MoveResponse
from aerocharge.models.vehicle import VehicleRegistration

_logger = logging.getLogger(__name__)


class GroundControlGateway(Protocol):
    """What the dispatcher needs from ground control."""

    async def register_vehicle(self, vehicle_type: str) -> VehicleRegistration:
        ...

    async def get_route(self, from_node: str, to_node: str, vehicle_type: str) -> list[str]:
        ...

    async def request_move(self, vehicle_id: str, vehicle_type: str, from_node: str, to_node: str) -> float:
        """Ask permission to move one segment; return its distance.

        Raises :class:`MoveConflictError` when the segment is contested.
        """
        ...

    async def notify_arrival(self, vehicle_id: str, vehicle_type: str, node: str) -> None:
        ...


def _invalid_reply(endpoint: str, detail: str) -> GroundControlTransportError:
    return GroundControlTransportError(f"Unexpected reply from {endpoint}: {detail}", endpoint=endpoint)


class GroundControlClient:
    """:class:`GroundControlGateway` backed by the ground control HTTP API."""

    def __init__(self, transport: Transport) -> None:
        self._transport = transport

    async def register_vehicle(self, vehicle_type: str) -> VehicleRegistration:
        endpoint = REGISTER_VEHICLE_ENDPOINT.format(vehicle_type=vehicle_type)
        _logger.info("Registering vehicle of type %s", vehicle_type)
        decoded = await self._transport.post_json(endpoint)
        if not isinstance(decoded, dict):
            raise _invalid_reply(endpoint, f"expected object, got {type(decoded).__name__}")
        try:
            registration = VehicleRegistration.model_validate(decoded)
        except ValidationError as exc:
            raise _invalid_reply(endpoint, str(exc)) from exc
        _logger.info(
            "Vehicle %s registered: garage=%s service_spots=%s",
            registration.vehicle_id,
            registration.garage_node,
            registration.service_spots,
        )
        return registration

    async def get_route(self, from_node: str, to_node: str, vehicle_type: str) -> list[str]:
        """Return the node sequence from *from_node* to *to_node*.

        ``null`` or an empty list come back as ``[]``; deciding whether
        that is fatal is the caller's job.
        """
        payload = {"from": from_node, "to": to_node, "type": vehicle_type}
        decoded = await self._transport.post_json(ROUTE_ENDPOINT, payload)
        if decoded is None:
            route: list[str] = []
        elif isinstance(decoded, list):
            route = [str(node) for node in decoded]
        else:
            raise _invalid_reply(ROUTE_ENDPOINT, f"expected list, got {type(decoded).__name__}")
        _logger.debug("Route %s -> %s: %s", from_node, to_node, " -> ".join(route) or "<empty>")
        return route

    async def request_move(self, vehicle_id: str, vehicle_type: str, from_node: str, to_node: str) -> float:
        payload = {
            "vehicleId": vehicle_id,
            "vehicleType": vehicle_type,
            "from": from_node,
            "to": to_node,
        }
        try:
            decoded: Any = await self._transport.post_json(MOVE_ENDPOINT, payload)
        except GroundControlTransportError as exc:
            if exc.status_code == MOVE_CONFLICT_STATUS:
                raise MoveConflictError(
                    f"Move {from_node} -> {to_node} for vehicle {vehicle_id} is contested",
                    status_code=exc.status_code,
                    endpoint=exc.endpoint,
                ) from exc
            raise
        try:
            return MoveResponse.model_validate(decoded).distance
        except ValidationError as exc:
            raise _invalid_reply(MOVE_ENDPOINT, str(exc)) from exc

    async def notify_arrival(self, vehicle_id: str, vehicle_type: str, node: str) -> None:
        payload = {"vehicleId": vehicle_id, "vehicleType": vehicle_type, "nodeId": node}
        await self._transport.post_json(ARRIVED_ENDPOINT, payload)
        _logger.debug("Arrival of vehicle %s at %s acknowledged", vehicle_id, node)
