"""Data models for vehicles and the charging request surface."""

from aerocharge.models.charging import (
    ChargingCompletionRequest,
    ChargingRequest,
    ChargingResponse,
    MoveResponse,
    VehicleRegistrationRequest,
    parse_request,
)
from aerocharge.models.vehicle import ChargingVehicle, VehicleInfo, VehicleRegistration, VehicleStatus

__all__ = [
    "ChargingCompletionRequest",
    "ChargingRequest",
    "ChargingResponse",
    "ChargingVehicle",
    "MoveResponse",
    "VehicleInfo",
    "VehicleRegistration",
    "VehicleRegistrationRequest",
    "VehicleStatus",
    "parse_request",
]
