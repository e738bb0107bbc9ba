"""High-level async entry point for the charging dispatcher."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from aerocharge._transport import JsonTransport
from aerocharge.admin import AdminConfig, AdminConfigUpdate, ConfigProvider
from aerocharge.config import ChargeConfig
from aerocharge.dispatcher import DispatchCoordinator
from aerocharge.exceptions import ChargeError
from aerocharge.gateway import GroundControlClient, GroundControlGateway
from aerocharge.models.charging import (
    ChargingCompletionRequest,
    ChargingRequest,
    ChargingResponse,
    VehicleRegistrationRequest,
    parse_request,
)
from aerocharge.models.vehicle import ChargingVehicle, VehicleInfo

_logger = logging.getLogger(__name__)


class ChargeService:
    """Async entry point for an HTTP layer.

    Usage::

        async with ChargeService(ChargeConfig.from_env()) as service:
            await service.start()
            response = await service.handle_charge_request({"nodeId": "A12"})

    The ``handle_*`` methods take raw request bodies, validate them, and
    raise :class:`~aerocharge.exceptions.ChargeValidationError` before
    touching any dispatch state when a required field is missing.
    """

    def __init__(
        self,
        config: ChargeConfig,
        *,
        session: aiohttp.ClientSession | None = None,
        gateway: GroundControlGateway | None = None,
    ) -> None:
        self._config = config
        self._external_session = session is not None
        self._http_session = session
        self._gateway = gateway
        self._config_provider = ConfigProvider.from_config(config)
        self._coordinator: DispatchCoordinator | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> ChargeService:
        gateway = self._gateway
        if gateway is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            gateway = GroundControlClient(JsonTransport(self._config, self._http_session))
        self._coordinator = DispatchCoordinator(
            gateway,
            self._config_provider,
            vehicle_type=self._config.vehicle_type,
            conflict_backoff=self._config.conflict_backoff,
        )
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._coordinator = None

    def _require_coordinator(self) -> DispatchCoordinator:
        if self._coordinator is None:
            raise ChargeError("Service not initialized. Use 'async with ChargeService(...) as service:'")
        return self._coordinator

    @property
    def config_provider(self) -> ConfigProvider:
        return self._config_provider

    @property
    def coordinator(self) -> DispatchCoordinator:
        return self._require_coordinator()

    async def start(self) -> list[ChargingVehicle]:
        """Register the configured fleet with ground control."""
        coordinator = self._require_coordinator()
        vehicles = await coordinator.initialize_vehicles(self._config.fleet_size)
        _logger.info("Fleet ready: %d of %d vehicles registered", len(vehicles), self._config.fleet_size)
        return vehicles

    # ------------------------------------------------------------------
    # Charging surface
    # ------------------------------------------------------------------

    async def handle_charge_request(self, payload: Mapping[str, Any] | None) -> ChargingResponse:
        request = parse_request(ChargingRequest, payload)
        return await self._require_coordinator().request_charging(request.node_id)

    async def handle_completion(self, payload: Mapping[str, Any] | None) -> None:
        request = parse_request(ChargingCompletionRequest, payload)
        await self._require_coordinator().complete_charging(request.node_id)

    # ------------------------------------------------------------------
    # Admin surface
    # ------------------------------------------------------------------

    def handle_config_update(self, payload: Mapping[str, Any] | None) -> AdminConfig:
        config = parse_request(AdminConfigUpdate, payload)
        self._config_provider.update(config)
        return config

    async def handle_vehicle_registration(self, payload: Mapping[str, Any] | None) -> ChargingVehicle:
        request = parse_request(VehicleRegistrationRequest, payload)
        return await self._require_coordinator().register_vehicle(request.type)

    def get_admin_config(self) -> AdminConfig:
        return self._config_provider.get()

    def get_vehicles_info(self) -> list[VehicleInfo]:
        return self._require_coordinator().vehicles_info()
