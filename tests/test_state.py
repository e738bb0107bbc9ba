from __future__ import annotations

from aerocharge.models.vehicle import ChargingVehicle, VehicleStatus
from aerocharge.state.fleet import VehiclePool
from aerocharge.state.sessions import ActiveSessionRegistry, ChargingSession


def _vehicle(vehicle_id: str, spots: dict[str, str]) -> ChargingVehicle:
    return ChargingVehicle(vehicle_id=vehicle_id, vehicle_type="charging", garage_node="G", service_spots=spots)


def test_new_vehicle_starts_free_at_garage() -> None:
    vehicle = _vehicle("v1", {"A": "S-A"})
    assert vehicle.status is VehicleStatus.FREE
    assert vehicle.current_node == "G"


def test_pool_add_is_insert_if_absent() -> None:
    pool = VehiclePool()
    first = _vehicle("v1", {"A": "S-A"})

    assert pool.add(first) is True
    assert pool.add(_vehicle("v1", {"B": "S-B"})) is False
    assert pool.get("v1") is first
    assert len(pool) == 1


def test_find_candidate_skips_busy_and_unrelated_vehicles() -> None:
    pool = VehiclePool()
    pool.add(_vehicle("busy", {"A": "S1"}))
    pool.add(_vehicle("elsewhere", {"B": "S2"}))
    pool.add(_vehicle("free", {"A": "S3"}))
    assert pool.try_acquire("busy")

    candidate = pool.find_candidate("A")

    assert candidate is not None
    assert candidate.vehicle_id == "free"
    assert pool.find_candidate("C") is None


def test_try_acquire_only_succeeds_once() -> None:
    pool = VehiclePool()
    pool.add(_vehicle("v1", {"A": "S-A"}))

    assert pool.try_acquire("v1") is True
    assert pool.try_acquire("v1") is False
    assert pool.try_acquire("missing") is False
    assert pool.get("v1").status is VehicleStatus.BUSY  # type: ignore[union-attr]


def test_release_requires_busy_vehicle() -> None:
    pool = VehiclePool()
    pool.add(_vehicle("v1", {"A": "S-A"}))

    assert pool.release("v1") is False
    pool.try_acquire("v1")
    assert pool.release("v1") is True
    assert pool.get("v1").status is VehicleStatus.FREE  # type: ignore[union-attr]


def test_snapshot_is_a_copy() -> None:
    pool = VehiclePool()
    pool.add(_vehicle("v1", {"A": "S-A"}))

    snapshot = pool.snapshot()
    snapshot.clear()

    assert len(pool.snapshot()) == 1


def test_session_registry_allows_one_session_per_node() -> None:
    registry = ActiveSessionRegistry()

    assert registry.add(ChargingSession(aircraft_node="A", vehicle_id="v1")) is True
    assert registry.add(ChargingSession(aircraft_node="A", vehicle_id="v2")) is False
    assert registry.get("A").vehicle_id == "v1"  # type: ignore[union-attr]
    assert "A" in registry


def test_session_pop_hands_out_the_session_once() -> None:
    registry = ActiveSessionRegistry()
    registry.add(ChargingSession(aircraft_node="A", vehicle_id="v1"))

    popped = registry.pop("A")

    assert popped is not None
    assert popped.vehicle_id == "v1"
    assert popped.age >= 0
    assert registry.pop("A") is None
    assert len(registry) == 0
