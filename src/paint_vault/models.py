"""Database models for the paint catalog and inventory."""
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base
from .tags import InventoryStatus, PaintBrand, PaintType


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Mixin providing created/updated timestamp columns."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False
    )


class Paint(Base, TimestampMixin):
    __tablename__ = "paints"
    __table_args__ = (
        UniqueConstraint("brand", "range", "manufacturer_code", name="uq_paints_identity"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    brand: Mapped[str] = mapped_column(String(64), nullable=False, default=PaintBrand.OTHER.value)
    range: Mapped[str] = mapped_column(String(128), nullable=False)
    manufacturer_code: Mapped[str] = mapped_column(String(64), nullable=False)
    type: Mapped[str] = mapped_column(String(64), nullable=False, default=PaintType.OTHER.value)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    barcode: Mapped[str | None] = mapped_column(String(64))

    inventory_items: Mapped[list["InventoryItem"]] = relationship(
        back_populates="paint",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def brand_tag(self) -> PaintBrand:
        return PaintBrand.from_label(self.brand)

    @property
    def type_tag(self) -> PaintType:
        return PaintType.from_label(self.type)

    def __repr__(self) -> str:
        return f"<Paint {self.brand!r} {self.range!r} {self.manufacturer_code!r}>"


class InventoryItem(Base):
    __tablename__ = "inventory_items"
    __table_args__ = (
        UniqueConstraint("paint_id", "status", name="uq_inventory_items_paint_status"),
        CheckConstraint("quantity >= 1", name="ck_inventory_items_quantity_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    paint_id: Mapped[int] = mapped_column(ForeignKey("paints.id", ondelete="CASCADE"), nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    paint: Mapped[Paint] = relationship(back_populates="inventory_items", lazy="joined")

    @property
    def status_tag(self) -> InventoryStatus:
        return InventoryStatus.from_label(self.status)


__all__ = [
    "Paint",
    "InventoryItem",
]
