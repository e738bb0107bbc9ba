"""Charging vehicle models.

Registration replies are mapped from ground control's
``/register-vehicle/{type}`` response.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator


class VehicleStatus(StrEnum):
    FREE = "free"
    BUSY = "busy"


class VehicleRegistration(BaseModel):
    """A vehicle freshly registered with ground control."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
        coerce_numbers_to_str=True,
    )

    vehicle_id: str = Field(validation_alias=AliasChoices("vehicleId", "vehicle_id"))
    """Identifier assigned by ground control, stable for the process lifetime."""
    # Ground control spells it "garrage"; accept the correct spelling too.
    garage_node: str = Field(validation_alias=AliasChoices("garrageNodeId", "garageNodeId", "garage_node"))
    """Node where the vehicle parks while idle."""
    service_spots: dict[str, str] = Field(validation_alias=AliasChoices("serviceSpots", "service_spots"))
    """Aircraft node -> docking node this vehicle uses to serve it."""

    raw: dict[str, Any] = Field(default_factory=dict)
    """Full API response dict."""

    @model_validator(mode="before")
    @classmethod
    def _ensure_raw(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        merged = dict(values)
        merged.setdefault("raw", values)
        return merged

    @field_validator("vehicle_id", "garage_node")
    @classmethod
    def _require_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must be non-empty")
        return value

    @field_validator("service_spots")
    @classmethod
    def _require_spots(cls, value: dict[str, str]) -> dict[str, str]:
        if not value:
            raise ValueError("serviceSpots must contain at least one aircraft node")
        return value


@dataclass(slots=True)
class ChargingVehicle:
    """Runtime record of one vehicle in the pool.

    ``status`` is only ever written by
    :class:`aerocharge.state.fleet.VehiclePool` under its lock.
    ``current_node`` is the last node ground control acknowledged the
    vehicle arriving at; it starts at the garage.
    """

    vehicle_id: str
    vehicle_type: str
    garage_node: str
    service_spots: dict[str, str]
    status: VehicleStatus = VehicleStatus.FREE
    current_node: str = ""

    def __post_init__(self) -> None:
        if not self.current_node:
            self.current_node = self.garage_node

    @classmethod
    def from_registration(cls, registration: VehicleRegistration, vehicle_type: str) -> ChargingVehicle:
        return cls(
            vehicle_id=registration.vehicle_id,
            vehicle_type=vehicle_type,
            garage_node=registration.garage_node,
            service_spots=dict(registration.service_spots),
        )

    def serves(self, aircraft_node: str) -> bool:
        return aircraft_node in self.service_spots

    def service_spot(self, aircraft_node: str) -> str:
        return self.service_spots[aircraft_node]


@dataclass(frozen=True, slots=True)
class VehicleInfo:
    """Read-only view of a vehicle for the admin page."""

    vehicle_id: str
    current_node: str
    status: VehicleStatus

    @classmethod
    def from_vehicle(cls, vehicle: ChargingVehicle) -> VehicleInfo:
        return cls(
            vehicle_id=vehicle.vehicle_id,
            current_node=vehicle.current_node,
            status=vehicle.status,
        )


