"""Enumerated tags for paint brands, paint types and inventory status.

Tags are stored as their label text. Raw text coming from an import row or a
form is decoded with :meth:`from_label`, which never fails: anything that is
not an exact label match falls back to ``OTHER``.
"""
from __future__ import annotations

from enum import Enum


class _LabelEnum(str, Enum):
    """String enum whose unknown labels decode to a fallback member."""

    @classmethod
    def fallback(cls) -> "_LabelEnum":
        raise NotImplementedError

    @classmethod
    def from_label(cls, label: str | None):
        if label is None:
            return cls.fallback()
        try:
            return cls(label)
        except ValueError:
            return cls.fallback()

    @property
    def label(self) -> str:
        return self.value


class PaintBrand(_LabelEnum):
    VALLEJO = "Vallejo"
    CITADEL = "Citadel"
    ARMY_PAINTER = "Army Painter"
    AK_INTERACTIVE = "AK Interactive"
    SCALE75 = "Scale75"
    PRO_ACRYL = "Pro Acryl"
    TAMIYA = "Tamiya"
    OTHER = "Other"

    @classmethod
    def fallback(cls) -> "PaintBrand":
        return cls.OTHER


class PaintType(_LabelEnum):
    BASE = "Base"
    LAYER = "Layer"
    SHADE = "Shade"
    CONTRAST = "Contrast"
    TECHNICAL = "Technical"
    METALLIC = "Metallic"
    ACRYLIC_COLOR = "Acrylic Color"
    AIR = "Air"
    PRIMER = "Primer"
    OTHER = "Other"

    @classmethod
    def fallback(cls) -> "PaintType":
        return cls.OTHER


class InventoryStatus(_LabelEnum):
    OWNED = "owned"
    WISHLIST = "wishlist"

    @classmethod
    def fallback(cls) -> "InventoryStatus":
        return cls.OWNED

    @property
    def display_name(self) -> str:
        return "Owned" if self is InventoryStatus.OWNED else "Wishlist"


__all__ = ["InventoryStatus", "PaintBrand", "PaintType"]
