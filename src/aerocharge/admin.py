"""Live, admin-tunable dispatch settings."""

from __future__ import annotations

import logging

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from aerocharge._constants import DEFAULT_CONFLICT_RETRY_LIMIT, DEFAULT_MOVEMENT_SPEED
from aerocharge.config import ChargeConfig

_logger = logging.getLogger(__name__)


class AdminConfig(BaseModel):
    """Settings an operator may change while vehicles are moving.

    Parameters
    ----------
    movement_speed : float
        Node distance units per second used to turn a segment distance
        into a travel delay.
    conflict_retry_limit : int
        Move attempts per segment before the segment is abandoned.
        ``0`` still allows the initial attempt.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    movement_speed: float = Field(
        default=DEFAULT_MOVEMENT_SPEED,
        gt=0,
        validation_alias=AliasChoices("movementSpeed", "MovementSpeed", "movement_speed"),
    )
    conflict_retry_limit: int = Field(
        default=DEFAULT_CONFLICT_RETRY_LIMIT,
        ge=0,
        validation_alias=AliasChoices(
            "conflictRetryLimit",
            "ConflictRetryCount",
            "conflictRetryCount",
            "conflict_retry_limit",
        ),
    )


class AdminConfigUpdate(AdminConfig):
    """Admin replacement of the live config; both fields are required."""

    movement_speed: float = Field(
        gt=0,
        validation_alias=AliasChoices("movementSpeed", "MovementSpeed", "movement_speed"),
    )
    conflict_retry_limit: int = Field(
        ge=0,
        validation_alias=AliasChoices(
            "conflictRetryLimit",
            "ConflictRetryCount",
            "conflictRetryCount",
            "conflict_retry_limit",
        ),
    )


class ConfigProvider:
    """Holds the current :class:`AdminConfig` snapshot.

    Readers call :meth:`get` whenever they need a value and never lock:
    :meth:`update` swaps the whole frozen snapshot with a single reference
    assignment, so a reader sees either the old or the new config, never
    a mix of both. Last write wins.
    """

    def __init__(self, initial: AdminConfig | None = None) -> None:
        self._current = initial if initial is not None else AdminConfig()

    @classmethod
    def from_config(cls, config: ChargeConfig) -> ConfigProvider:
        return cls(
            AdminConfig(
                movement_speed=config.movement_speed,
                conflict_retry_limit=config.conflict_retry_limit,
            )
        )

    def get(self) -> AdminConfig:
        return self._current

    def update(self, config: AdminConfig) -> AdminConfig:
        """Replace the live config and return the previous snapshot."""
        previous = self._current
        self._current = config
        _logger.info(
            "Admin config updated: movement_speed=%s conflict_retry_limit=%d",
            config.movement_speed,
            config.conflict_retry_limit,
        )
        return previous
