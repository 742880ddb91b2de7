"""Pydantic schemas used by the API."""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .tags import InventoryStatus, PaintBrand, PaintType


class PaintBase(BaseModel):
    brand: str
    range: str
    type: str
    manufacturer_code: str
    name: str
    barcode: str | None = None


class PaintOut(PaintBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime


class PaintDetail(PaintOut):
    in_collection: bool = False
    in_wishlist: bool = False


class PaintAdd(BaseModel):
    """Manual add form: a paint plus the inventory entry to record for it."""

    brand: PaintBrand = PaintBrand.VALLEJO
    range: str = Field(..., description="Product range, e.g. Game Color.")
    type: PaintType = PaintType.BASE
    manufacturer_code: str = Field(..., description="Code printed on the bottle, e.g. 72.001.")
    name: str
    barcode: str | None = None
    status: InventoryStatus = InventoryStatus.OWNED
    quantity: int = Field(1, ge=1, le=99)
    notes: str | None = None

    @field_validator("brand", mode="before")
    @classmethod
    def _decode_brand(cls, value: object) -> PaintBrand:
        if isinstance(value, PaintBrand):
            return value
        return PaintBrand.from_label(str(value).strip())

    @field_validator("type", mode="before")
    @classmethod
    def _decode_type(cls, value: object) -> PaintType:
        if isinstance(value, PaintType):
            return value
        return PaintType.from_label(str(value).strip())

    @field_validator("range", "name")
    @classmethod
    def _require_text(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("manufacturer_code")
    @classmethod
    def _normalize_code(cls, value: str) -> str:
        value = value.strip().upper()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("barcode", "notes")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class InventoryItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    status: InventoryStatus
    quantity: int
    notes: str | None = None
    created_at: datetime
    paint: PaintOut


class AddInventoryResult(BaseModel):
    outcome: Literal["added_new", "incremented"]
    quantity: int
    item: InventoryItemOut


class ImportReportOut(BaseModel):
    paints_upserted: int
    collection_updated: int


class ResetRequest(BaseModel):
    scope: Literal["inventory", "everything"]


class HealthStatus(BaseModel):
    status: Literal["ok"] = "ok"
    environment: str


__all__ = [
    "PaintOut",
    "PaintDetail",
    "PaintAdd",
    "InventoryItemOut",
    "AddInventoryResult",
    "ImportReportOut",
    "ResetRequest",
    "HealthStatus",
]
