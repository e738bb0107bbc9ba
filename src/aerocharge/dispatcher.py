"""Dispatch of charging vehicles to aircraft.

A charging request claims a free vehicle, drives it from its garage to the
service spot for the aircraft, and returns once it has arrived. A
completion sends it back to the garage and frees it.

Failures are not compensated: a request that fails after the vehicle was
claimed leaves the vehicle BUSY and its session registered, and a
completion that fails on the way home leaves the vehicle BUSY. Only a
restart (which re-registers the fleet) recovers such a vehicle.
"""

from __future__ import annotations

import asyncio
import itertools
import logging

from aerocharge._constants import CONFLICT_BACKOFF_SECONDS, VEHICLE_TYPE
from aerocharge.admin import ConfigProvider
from aerocharge.exceptions import ChargeError, NoServicingVehicleError, RouteNotFoundError
from aerocharge.gateway import GroundControlGateway
from aerocharge.models.charging import ChargingResponse
from aerocharge.models.vehicle import ChargingVehicle, VehicleInfo
from aerocharge.movement import Sleep, move_with_retry, travel_delay
from aerocharge.state.fleet import VehiclePool
from aerocharge.state.sessions import ActiveSessionRegistry, ChargingSession

_logger = logging.getLogger(__name__)


class DispatchCoordinator:
    """Assigns vehicles to charging requests and drives them around.

    Usage::

        coordinator = DispatchCoordinator(gateway, ConfigProvider())
        await coordinator.initialize_vehicles(3)
        response = await coordinator.request_charging("A12")
        ...
        await coordinator.complete_charging("A12")

    Movement speed and the conflict retry limit are read from the config
    provider at the start of every segment, so an admin update takes
    effect on the next segment of routes already being driven.
    """

    def __init__(
        self,
        gateway: GroundControlGateway,
        config_provider: ConfigProvider,
        *,
        pool: VehiclePool | None = None,
        sessions: ActiveSessionRegistry | None = None,
        vehicle_type: str = VEHICLE_TYPE,
        conflict_backoff: float = CONFLICT_BACKOFF_SECONDS,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._gateway = gateway
        self._config_provider = config_provider
        self._pool = pool if pool is not None else VehiclePool()
        self._sessions = sessions if sessions is not None else ActiveSessionRegistry()
        self._vehicle_type = vehicle_type
        self._conflict_backoff = conflict_backoff
        self._sleep = sleep

    @property
    def pool(self) -> VehiclePool:
        return self._pool

    @property
    def sessions(self) -> ActiveSessionRegistry:
        return self._sessions

    @property
    def config_provider(self) -> ConfigProvider:
        return self._config_provider

    # ------------------------------------------------------------------
    # Fleet
    # ------------------------------------------------------------------

    async def register_vehicle(self, vehicle_type: str | None = None) -> ChargingVehicle:
        """Register one vehicle with ground control and add it to the pool."""
        vtype = vehicle_type or self._vehicle_type
        registration = await self._gateway.register_vehicle(vtype)
        vehicle = ChargingVehicle.from_registration(registration, vtype)
        if not self._pool.add(vehicle):
            _logger.warning("Vehicle %s is already registered; keeping the existing entry", vehicle.vehicle_id)
            existing = self._pool.get(vehicle.vehicle_id)
            assert existing is not None  # noqa: S101
            return existing
        _logger.info(
            "Vehicle %s added to pool (garage %s, %d service spots)",
            vehicle.vehicle_id,
            vehicle.garage_node,
            len(vehicle.service_spots),
        )
        return vehicle

    async def initialize_vehicles(self, count: int) -> list[ChargingVehicle]:
        """Register *count* vehicles, skipping any that fail to register."""
        registered: list[ChargingVehicle] = []
        for number in range(1, count + 1):
            _logger.info("Registering vehicle %d of %d", number, count)
            try:
                registered.append(await self.register_vehicle())
            except ChargeError:
                _logger.error("Failed to register vehicle %d of %d", number, count, exc_info=True)
        return registered

    def vehicles_info(self) -> list[VehicleInfo]:
        return [VehicleInfo.from_vehicle(vehicle) for vehicle in self._pool.snapshot()]

    # ------------------------------------------------------------------
    # Charging
    # ------------------------------------------------------------------

    async def request_charging(self, aircraft_node: str) -> ChargingResponse:
        """Send a free vehicle to *aircraft_node*.

        Returns ``wait=True`` immediately, without side effects, when no
        free vehicle serves the node or the chosen vehicle was claimed by
        a concurrent request. Otherwise returns ``wait=False`` once the
        vehicle has arrived at its service spot.

        Raises
        ------
        RouteNotFoundError
            If ground control has no route from the garage to the spot.
        ConflictRetryExhaustedError
            If a segment stayed contested for every permitted attempt.
        GroundControlTransportError
            On any other ground control failure.
        """
        _logger.info("Charging requested for aircraft node %s", aircraft_node)

        vehicle = self._pool.find_candidate(aircraft_node)
        if vehicle is None:
            _logger.info("No free vehicle for aircraft node %s; caller should wait", aircraft_node)
            return ChargingResponse(wait=True)

        if not self._pool.try_acquire(vehicle.vehicle_id):
            _logger.info("Vehicle %s was claimed concurrently; caller should wait", vehicle.vehicle_id)
            return ChargingResponse(wait=True)

        session = ChargingSession(aircraft_node=aircraft_node, vehicle_id=vehicle.vehicle_id)
        if not self._sessions.add(session):
            # Nothing has moved yet, so handing the vehicle back is safe.
            self._pool.release(vehicle.vehicle_id)
            holder = self._sessions.get(aircraft_node)
            _logger.warning(
                "Aircraft node %s is already served by vehicle %s; caller should wait",
                aircraft_node,
                holder.vehicle_id if holder is not None else "?",
            )
            return ChargingResponse(wait=True)

        _logger.info("Vehicle %s assigned to aircraft node %s", vehicle.vehicle_id, aircraft_node)

        source = vehicle.garage_node
        target = vehicle.service_spot(aircraft_node)
        route = await self._gateway.get_route(source, target, vehicle.vehicle_type)
        if len(route) < 2:
            _logger.error("No route from %s to %s for vehicle %s", source, target, vehicle.vehicle_id)
            raise RouteNotFoundError(f"No route from {source} to {target}", from_node=source, to_node=target)

        await self._drive(vehicle, route)

        _logger.info("Vehicle %s started charging at aircraft node %s", vehicle.vehicle_id, aircraft_node)
        return ChargingResponse(wait=False)

    async def complete_charging(self, aircraft_node: str) -> None:
        """Return the vehicle serving *aircraft_node* to its garage and free it.

        Raises
        ------
        NoServicingVehicleError
            If no session exists for the node (including a second, concurrent
            completion for the same node).
        """
        _logger.info("Charging completed at aircraft node %s", aircraft_node)

        session = self._sessions.pop(aircraft_node)
        vehicle = self._pool.get(session.vehicle_id) if session is not None else None
        if session is None or vehicle is None:
            _logger.error("No vehicle is servicing aircraft node %s", aircraft_node)
            raise NoServicingVehicleError(
                f"No vehicle is servicing aircraft node {aircraft_node}",
                aircraft_node=aircraft_node,
            )

        source = vehicle.service_spot(aircraft_node)
        target = vehicle.garage_node
        route = await self._gateway.get_route(source, target, vehicle.vehicle_type)
        if len(route) < 2:
            _logger.debug("Vehicle %s needs no traversal to reach garage %s", vehicle.vehicle_id, target)
            self._pool.set_position(vehicle.vehicle_id, target)
        else:
            await self._drive(vehicle, route)

        self._pool.release(vehicle.vehicle_id)
        _logger.info(
            "Vehicle %s is free in garage %s after %.1fs at aircraft node %s",
            vehicle.vehicle_id,
            target,
            session.age,
            aircraft_node,
        )

    async def _drive(self, vehicle: ChargingVehicle, route: list[str]) -> None:
        """Drive *route* segment by segment: permission, travel, arrival."""
        for from_node, to_node in itertools.pairwise(route):
            settings = self._config_provider.get()
            distance = await move_with_retry(
                self._gateway,
                vehicle,
                from_node,
                to_node,
                retry_limit=settings.conflict_retry_limit,
                backoff=self._conflict_backoff,
                sleep=self._sleep,
            )
            delay = travel_delay(distance, settings.movement_speed)
            _logger.debug(
                "Vehicle %s driving %s -> %s (distance %s, %.2fs)",
                vehicle.vehicle_id,
                from_node,
                to_node,
                distance,
                delay,
            )
            await self._sleep(delay)
            await self._gateway.notify_arrival(vehicle.vehicle_id, vehicle.vehicle_type, to_node)
            self._pool.set_position(vehicle.vehicle_id, to_node)
