"""aerocharge - Async dispatcher for aircraft charging vehicles."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("aerocharge")
except PackageNotFoundError:
    __version__ = "0+local"
from aerocharge.admin import AdminConfig, AdminConfigUpdate, ConfigProvider
from aerocharge.config import ChargeConfig
from aerocharge.dispatcher import DispatchCoordinator
from aerocharge.exceptions import (
    ChargeConfigError,
    ChargeError,
    ChargeValidationError,
    ConflictRetryExhaustedError,
    GroundControlError,
    GroundControlTransportError,
    MoveConflictError,
    NoServicingVehicleError,
    RouteNotFoundError,
)
from aerocharge.gateway import GroundControlClient, GroundControlGateway
from aerocharge.models import (
    ChargingCompletionRequest,
    ChargingRequest,
    ChargingResponse,
    ChargingVehicle,
    VehicleInfo,
    VehicleRegistration,
    VehicleRegistrationRequest,
    VehicleStatus,
)
from aerocharge.service import ChargeService
from aerocharge.state import ActiveSessionRegistry, ChargingSession, VehiclePool

__all__ = [
    "__version__",
    "ActiveSessionRegistry",
    "AdminConfig",
    "AdminConfigUpdate",
    "ChargeConfig",
    "ChargeConfigError",
    "ChargeError",
    "ChargeService",
    "ChargeValidationError",
    "ChargingCompletionRequest",
    "ChargingRequest",
    "ChargingResponse",
    "ChargingSession",
    "ChargingVehicle",
    "ConfigProvider",
    "ConflictRetryExhaustedError",
    "DispatchCoordinator",
    "GroundControlClient",
    "GroundControlError",
    "GroundControlGateway",
    "GroundControlTransportError",
    "MoveConflictError",
    "NoServicingVehicleError",
    "RouteNotFoundError",
    "VehicleInfo",
    "VehiclePool",
    "VehicleRegistration",
    "VehicleRegistrationRequest",
    "VehicleStatus",
]
