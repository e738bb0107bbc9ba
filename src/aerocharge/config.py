"""Service configuration for aerocharge."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Callable
from typing import Any

from aerocharge._constants import (
    BASE_URL,
    CONFLICT_BACKOFF_SECONDS,
    DEFAULT_CONFLICT_RETRY_LIMIT,
    DEFAULT_FLEET_SIZE,
    DEFAULT_MOVEMENT_SPEED,
    VEHICLE_TYPE,
)
from aerocharge.exceptions import ChargeConfigError


def _env_number(env_key: str, raw: str, cast: Callable[[str], Any]) -> Any:
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ChargeConfigError(f"{env_key} must be numeric, got {raw!r}") from exc


@dataclasses.dataclass(frozen=True)
class ChargeConfig:
    """Service configuration.

    Parameters
    ----------
    base_url : str
        Ground control API base URL.
    vehicle_type : str
        Vehicle type sent to ground control on registration, routing
        and movement requests.
    fleet_size : int
        Number of vehicles registered by
        :meth:`aerocharge.service.ChargeService.start`.
    conflict_backoff : float
        Seconds to wait after a movement conflict before retrying.
    request_timeout : float
        Total timeout in seconds for a single ground control HTTP call.
    movement_speed : float
        Initial travel speed (node distance units per second). The live
        value is held by :class:`aerocharge.admin.ConfigProvider` and can
        be changed at runtime.
    conflict_retry_limit : int
        Initial number of move attempts per segment before giving up.
        Also tunable at runtime through the config provider.
    """

    base_url: str = BASE_URL
    vehicle_type: str = VEHICLE_TYPE
    fleet_size: int = DEFAULT_FLEET_SIZE
    conflict_backoff: float = CONFLICT_BACKOFF_SECONDS
    request_timeout: float = 30.0
    movement_speed: float = DEFAULT_MOVEMENT_SPEED
    conflict_retry_limit: int = DEFAULT_CONFLICT_RETRY_LIMIT

    def __post_init__(self) -> None:
        if self.fleet_size < 0:
            raise ChargeConfigError(f"fleet_size must be >= 0, got {self.fleet_size}")
        if self.conflict_backoff < 0:
            raise ChargeConfigError(f"conflict_backoff must be >= 0, got {self.conflict_backoff}")
        if self.movement_speed <= 0:
            raise ChargeConfigError(f"movement_speed must be > 0, got {self.movement_speed}")
        if self.conflict_retry_limit < 0:
            raise ChargeConfigError(f"conflict_retry_limit must be >= 0, got {self.conflict_retry_limit}")

    @classmethod
    def from_env(cls, **overrides: Any) -> ChargeConfig:
        """Create configuration from ``CHARGE_*`` environment variables.

        Explicit keyword arguments override environment values.

        Raises
        ------
        ChargeConfigError
            If a numeric variable cannot be parsed or a value is out of range.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "CHARGE_GROUND_CONTROL_URL": "base_url",
            "CHARGE_VEHICLE_TYPE": "vehicle_type",
        }
        _ENV_NUMBER_MAP: dict[str, tuple[str, Callable[[str], Any]]] = {
            "CHARGE_FLEET_SIZE": ("fleet_size", int),
            "CHARGE_CONFLICT_BACKOFF": ("conflict_backoff", float),
            "CHARGE_REQUEST_TIMEOUT": ("request_timeout", float),
            "CHARGE_MOVEMENT_SPEED": ("movement_speed", float),
            "CHARGE_CONFLICT_RETRY_LIMIT": ("conflict_retry_limit", int),
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_STR_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val.strip()

        for env_key, (field_name, cast) in _ENV_NUMBER_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_number(env_key, val, cast)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
