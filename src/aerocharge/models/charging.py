"""Request and response models for the charging surface.

An HTTP layer validates inbound bodies with :func:`parse_request` before
anything reaches the dispatcher.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from aerocharge.exceptions import ChargeValidationError

TModel = TypeVar("TModel", bound=BaseModel)


class _RequestModel(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class ChargingRequest(_RequestModel):
    """Ask for a vehicle to charge the aircraft parked at ``node_id``."""

    node_id: str = Field(min_length=1, validation_alias=AliasChoices("nodeId", "NodeId", "node_id"))


class ChargingCompletionRequest(_RequestModel):
    """Charging at ``node_id`` is done; send the vehicle home."""

    node_id: str = Field(min_length=1, validation_alias=AliasChoices("nodeId", "NodeId", "node_id"))


class VehicleRegistrationRequest(_RequestModel):
    """Admin request to register one more vehicle."""

    type: str = Field(min_length=1, validation_alias=AliasChoices("type", "Type"))


class ChargingResponse(BaseModel):
    """Reply to a charging request.

    ``wait=True`` means no vehicle could be assigned right now and the
    caller should ask again later.
    """

    model_config = ConfigDict(frozen=True)

    wait: bool


class MoveResponse(BaseModel):
    """Ground control's permission to move along one segment."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    distance: float = Field(ge=0, validation_alias=AliasChoices("distance", "Distance"))


def parse_request(model_cls: type[TModel], payload: Mapping[str, Any] | None) -> TModel:
    """Validate an inbound request body.

    Raises
    ------
    ChargeValidationError
        If a required field is missing, blank, or of the wrong type.
    """
    if payload is None:
        raise ChargeValidationError(f"{model_cls.__name__}: request body is required")
    try:
        return model_cls.model_validate(dict(payload))
    except ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in err["loc"]) or "body" for err in exc.errors())
        raise ChargeValidationError(f"{model_cls.__name__}: invalid field(s): {fields}") from exc
