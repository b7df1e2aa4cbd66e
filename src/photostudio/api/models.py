"""Pydantic request and response models for the history API.

These models define the JSON schema for every API endpoint.  FastAPI uses
them for request parsing, serialisation, and OpenAPI documentation.

Models
------
HistoryCreateRequest
    Payload for ``POST /api/history``.  Fields are neither required nor
    type-checked at the HTTP layer: values are passed through to the record
    store as given, which rejects a record without name, dealer or showroom
    and values it cannot store.
HistoryItem
    One record as returned by ``GET /api/history``.
HistoryCreateResponse, DeleteResponse, ErrorResponse
    Response bodies for the create, delete and failure cases.
"""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class HistoryCreateRequest(BaseModel):
    """Request body for the ``POST /api/history`` endpoint.

    Field names follow the table columns (snake_case); the camelCase forms
    ``imageFront``, ``imageSide``, ``imageFull`` and ``backgroundType`` are
    accepted as well.

    Attributes:
        name: Sales representative's display name.
        dealer: Dealer name.
        showroom: Showroom name.
        image_front: Front shot as a ``data:`` URL.
        image_side: 45-degree shot as a ``data:`` URL.
        image_full: Full-body shot as a ``data:`` URL.
        background_type: ``solid``, ``logo`` or ``showroom``.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: Any = Field(
        default=None,
        description="Sales representative's display name.",
    )
    dealer: Any = Field(
        default=None,
        description="Dealer name (e.g. '마이스터모터스').",
    )
    showroom: Any = Field(
        default=None,
        description="Showroom name belonging to the dealer.",
    )
    image_front: Any = Field(
        default=None,
        validation_alias=AliasChoices("image_front", "imageFront"),
        description="Front shot as an inline data URL.",
    )
    image_side: Any = Field(
        default=None,
        validation_alias=AliasChoices("image_side", "imageSide"),
        description="45-degree side shot as an inline data URL.",
    )
    image_full: Any = Field(
        default=None,
        validation_alias=AliasChoices("image_full", "imageFull"),
        description="Full-body shot as an inline data URL.",
    )
    background_type: Any = Field(
        default=None,
        validation_alias=AliasChoices("background_type", "backgroundType"),
        description="Background type: 'solid', 'logo' or 'showroom'.",
    )


class HistoryItem(BaseModel):
    """One generation record as served by ``GET /api/history``."""

    id: int
    name: str
    dealer: str
    showroom: str
    image_front: str | None = None
    image_side: str | None = None
    image_full: str | None = None
    background_type: str | None = None
    created_at: str


class HistoryCreateResponse(BaseModel):
    """Response body for a successful ``POST /api/history``."""

    id: int = Field(..., description="Id assigned by the record store.")


class DeleteResponse(BaseModel):
    """Response body for a successful ``DELETE /api/history/{id}``."""

    success: bool = True


class ErrorResponse(BaseModel):
    """Response body for every failed request."""

    error: str = Field(..., description="Generic, user-safe error message.")
