"""Tests for request validation and vehicle models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from aerocharge.admin import AdminConfig, AdminConfigUpdate
from aerocharge.exceptions import ChargeValidationError
from aerocharge.models.charging import (
    ChargingCompletionRequest,
    ChargingRequest,
    VehicleRegistrationRequest,
    parse_request,
)
from aerocharge.models.vehicle import ChargingVehicle, VehicleRegistration


class TestParseRequest:
    def test_accepts_wire_alias(self) -> None:
        request = parse_request(ChargingRequest, {"nodeId": " A12 "})
        assert request.node_id == "A12"

    def test_accepts_field_name(self) -> None:
        request = parse_request(ChargingCompletionRequest, {"node_id": "A12"})
        assert request.node_id == "A12"

    @pytest.mark.parametrize("payload", [{}, {"nodeId": ""}, {"nodeId": "   "}, {"nodeId": None}, None])
    def test_missing_node_is_validation_error(self, payload: dict[str, object] | None) -> None:
        with pytest.raises(ChargeValidationError):
            parse_request(ChargingRequest, payload)

    def test_validation_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_request(VehicleRegistrationRequest, {"type": ""})

    def test_registration_request(self) -> None:
        assert parse_request(VehicleRegistrationRequest, {"Type": "charging"}).type == "charging"


class TestAdminConfig:
    def test_defaults(self) -> None:
        config = AdminConfig()
        assert config.movement_speed == 20.0
        assert config.conflict_retry_limit == 15

    def test_update_requires_both_fields(self) -> None:
        with pytest.raises(ChargeValidationError):
            parse_request(AdminConfigUpdate, {"movementSpeed": 10})

    def test_update_accepts_legacy_retry_name(self) -> None:
        update = parse_request(AdminConfigUpdate, {"MovementSpeed": "12.5", "ConflictRetryCount": "3"})
        assert update.movement_speed == 12.5
        assert update.conflict_retry_limit == 3

    @pytest.mark.parametrize(
        "payload",
        [
            {"movementSpeed": 0, "conflictRetryLimit": 1},
            {"movementSpeed": -1, "conflictRetryLimit": 1},
            {"movementSpeed": 1, "conflictRetryLimit": -1},
        ],
    )
    def test_update_rejects_out_of_range(self, payload: dict[str, float]) -> None:
        with pytest.raises(ChargeValidationError):
            parse_request(AdminConfigUpdate, payload)

    def test_frozen(self) -> None:
        config = AdminConfig()
        with pytest.raises(ValidationError):
            config.movement_speed = 1.0  # type: ignore[misc]


class TestVehicleRegistration:
    def test_accepts_both_garage_spellings(self) -> None:
        a = VehicleRegistration.model_validate({"vehicleId": "v", "garrageNodeId": "G", "serviceSpots": {"A": "S"}})
        b = VehicleRegistration.model_validate({"vehicleId": "v", "garageNodeId": "G", "serviceSpots": {"A": "S"}})
        assert a.garage_node == b.garage_node == "G"

    def test_missing_vehicle_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            VehicleRegistration.model_validate({"garrageNodeId": "G", "serviceSpots": {"A": "S"}})

    def test_charging_vehicle_from_registration(self) -> None:
        registration = VehicleRegistration.model_validate(
            {"vehicleId": "v", "garrageNodeId": "G", "serviceSpots": {"A": "S-A"}}
        )
        vehicle = ChargingVehicle.from_registration(registration, "charging")

        assert vehicle.serves("A")
        assert not vehicle.serves("B")
        assert vehicle.service_spot("A") == "S-A"
        assert vehicle.current_node == "G"
        assert vehicle.vehicle_type == "charging"
