"""Custom exception hierarchy for aerocharge."""

from __future__ import annotations


class ChargeError(Exception):
    """Base exception for all aerocharge errors."""


class ChargeConfigError(ChargeError):
    """Invalid or missing configuration."""


class ChargeValidationError(ChargeError, ValueError):
    """Inbound request is missing a required field or is malformed."""


class GroundControlError(ChargeError):
    """Failure talking to, or reported by, ground control."""


class GroundControlTransportError(GroundControlError):
    """HTTP-level failure (network, non-2xx, invalid JSON)."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class MoveConflictError(GroundControlTransportError):
    """Ground control rejected a move because the segment is contested (HTTP 409).

    This is the only error the movement protocol recovers from locally;
    see :func:`aerocharge.movement.move_with_retry`.
    """


class ConflictRetryExhaustedError(GroundControlError):
    """Every permitted move attempt for a segment ended in a conflict."""

    def __init__(
        self,
        message: str,
        *,
        attempts: int,
        from_node: str,
        to_node: str,
    ) -> None:
        self.attempts = attempts
        self.from_node = from_node
        self.to_node = to_node
        super().__init__(message)


class RouteNotFoundError(ChargeError):
    """Ground control returned an empty or single-node route."""

    def __init__(self, message: str, *, from_node: str, to_node: str) -> None:
        self.from_node = from_node
        self.to_node = to_node
        super().__init__(message)


class NoServicingVehicleError(ChargeError):
    """Completion requested for an aircraft node without an active session."""

    def __init__(self, message: str, *, aircraft_node: str) -> None:
        self.aircraft_node = aircraft_node
        super().__init__(message)
