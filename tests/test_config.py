from __future__ import annotations

import pytest

from aerocharge.admin import AdminConfig, ConfigProvider
from aerocharge.config import ChargeConfig
from aerocharge.exceptions import ChargeConfigError


def test_defaults() -> None:
    config = ChargeConfig()
    assert config.base_url == "https://ground-control.reaport.ru"
    assert config.vehicle_type == "charging"
    assert config.fleet_size == 3
    assert config.conflict_backoff == 2.0
    assert config.movement_speed == 20.0
    assert config.conflict_retry_limit == 15


def test_from_env_reads_charge_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHARGE_GROUND_CONTROL_URL", "http://localhost:8080")
    monkeypatch.setenv("CHARGE_FLEET_SIZE", "5")
    monkeypatch.setenv("CHARGE_MOVEMENT_SPEED", "12.5")
    monkeypatch.setenv("CHARGE_CONFLICT_RETRY_LIMIT", "4")

    config = ChargeConfig.from_env()

    assert config.base_url == "http://localhost:8080"
    assert config.fleet_size == 5
    assert config.movement_speed == 12.5
    assert config.conflict_retry_limit == 4


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHARGE_FLEET_SIZE", "not-a-number")
    monkeypatch.setenv("CHARGE_VEHICLE_TYPE", "tug")

    config = ChargeConfig.from_env(fleet_size=1, vehicle_type="charging")

    assert config.fleet_size == 1
    assert config.vehicle_type == "charging"


def test_from_env_rejects_bad_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHARGE_CONFLICT_BACKOFF", "soon")
    with pytest.raises(ChargeConfigError, match="CHARGE_CONFLICT_BACKOFF"):
        ChargeConfig.from_env()


@pytest.mark.parametrize(
    "kwargs",
    [{"movement_speed": 0}, {"conflict_retry_limit": -1}, {"fleet_size": -2}, {"conflict_backoff": -0.5}],
)
def test_out_of_range_values_rejected(kwargs: dict[str, float]) -> None:
    with pytest.raises(ChargeConfigError):
        ChargeConfig(**kwargs)  # type: ignore[arg-type]


def test_provider_starts_from_service_config() -> None:
    provider = ConfigProvider.from_config(ChargeConfig(movement_speed=8.0, conflict_retry_limit=2))
    assert provider.get() == AdminConfig(movement_speed=8.0, conflict_retry_limit=2)


def test_provider_update_swaps_snapshot() -> None:
    provider = ConfigProvider()
    before = provider.get()

    previous = provider.update(AdminConfig(movement_speed=5.0, conflict_retry_limit=0))

    assert previous is before
    assert provider.get().movement_speed == 5.0
    assert provider.get().conflict_retry_limit == 0
    # Snapshots already handed out do not change.
    assert before.movement_speed == 20.0
