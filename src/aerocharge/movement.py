"""Segment movement with bounded conflict retry.

Ground control arbitrates every segment a vehicle drives. A contested
segment is answered with a conflict; the vehicle then waits a fixed
backoff and asks again, up to a configurable number of attempts.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from aerocharge._constants import CONFLICT_BACKOFF_SECONDS
from aerocharge.exceptions import ConflictRetryExhaustedError, MoveConflictError
from aerocharge.gateway import GroundControlGateway
from aerocharge.models.vehicle import ChargingVehicle

_logger = logging.getLogger(__name__)

Sleep = Callable[[float], Awaitable[None]]


def travel_delay(distance: float, movement_speed: float) -> float:
    """Seconds needed to drive *distance* at *movement_speed*."""
    if movement_speed <= 0:
        raise ValueError(f"movement_speed must be > 0, got {movement_speed}")
    return distance / movement_speed


async def move_with_retry(
    gateway: GroundControlGateway,
    vehicle: ChargingVehicle,
    from_node: str,
    to_node: str,
    *,
    retry_limit: int,
    backoff: float = CONFLICT_BACKOFF_SECONDS,
    sleep: Sleep = asyncio.sleep,
) -> float:
    """Obtain permission to drive one segment and return its distance.

    Parameters
    ----------
    retry_limit : int
        Maximum number of move attempts. The first attempt is always
        made, so ``0`` behaves like ``1``.
    backoff : float
        Seconds to wait after a conflict before the next attempt. No wait
        follows the last attempt.
    sleep
        Awaitable used for the backoff wait.

    Raises
    ------
    ConflictRetryExhaustedError
        If every attempt was rejected with a conflict.
    """
    attempts = max(retry_limit, 1)
    for attempt in range(1, attempts + 1):
        try:
            return await gateway.request_move(vehicle.vehicle_id, vehicle.vehicle_type, from_node, to_node)
        except MoveConflictError:
            if attempt == attempts:
                break
            _logger.warning(
                "Conflict moving vehicle %s %s -> %s (attempt %d/%d); retrying in %.1fs",
                vehicle.vehicle_id,
                from_node,
                to_node,
                attempt,
                attempts,
                backoff,
            )
            await sleep(backoff)

    _logger.error(
        "Giving up moving vehicle %s %s -> %s after %d conflicting attempts",
        vehicle.vehicle_id,
        from_node,
        to_node,
        attempts,
    )
    raise ConflictRetryExhaustedError(
        f"Segment {from_node} -> {to_node} still contested after {attempts} attempts",
        attempts=attempts,
        from_node=from_node,
        to_node=to_node,
    )
