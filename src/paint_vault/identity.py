"""Identity key deciding whether two catalog records are the same paint."""
from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from .tags import PaintBrand

if TYPE_CHECKING:
    from .models import Paint


class IdentityKey(NamedTuple):
    """``(brand, range, manufacturer_code)`` compared exactly.

    No normalization happens here: callers strip ``range`` and upper-case
    ``manufacturer_code`` before building a key (see :func:`normalize_identity`).
    """

    brand: str
    range: str
    manufacturer_code: str


def normalize_identity(brand: PaintBrand | str, range: str, manufacturer_code: str) -> IdentityKey:
    """Build a key from raw input, applying the write-side normalization."""

    brand_label = brand.value if isinstance(brand, PaintBrand) else PaintBrand.from_label(brand).value
    return IdentityKey(brand_label, range.strip(), manufacturer_code.strip().upper())


def identity_key(paint: "Paint") -> IdentityKey:
    return IdentityKey(paint.brand, paint.range, paint.manufacturer_code)


__all__ = ["IdentityKey", "identity_key", "normalize_identity"]
