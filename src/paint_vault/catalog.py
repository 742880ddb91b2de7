"""Catalog store: identity-keyed upserts and lookups for paints."""
from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from sqlalchemy import func, or_, select
from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from .identity import IdentityKey, normalize_identity
from .models import Paint
from .tags import PaintBrand, PaintType

logger = logging.getLogger(__name__)


class MergeStrategy(str, Enum):
    """How an upsert treats the barcode of an already catalogued paint.

    ``PRESERVE_BARCODE`` is used by the manual add form: a barcode typed by
    hand is never replaced, a blank one is filled in. ``REFRESH_BARCODE`` is
    used by bulk import, which trusts the file to carry current data.
    """

    PRESERVE_BARCODE = "preserve_barcode"
    REFRESH_BARCODE = "refresh_barcode"


async def find_paint(session: AsyncSession, key: IdentityKey) -> Paint | None:
    stmt = select(Paint).where(
        Paint.brand == key.brand,
        Paint.range == key.range,
        Paint.manufacturer_code == key.manufacturer_code,
    )
    result = await session.execute(stmt)
    return result.scalars().first()


async def get_paint(session: AsyncSession, paint_id: int) -> Paint:
    stmt = select(Paint).where(Paint.id == paint_id)
    result = await session.execute(stmt)
    paint = result.scalar_one_or_none()
    if paint is None:
        raise NoResultFound(f"Paint {paint_id} not found")
    return paint


async def list_paints(session: AsyncSession, query: str | None = None) -> Sequence[Paint]:
    """Return catalog paints ordered by brand, range and code.

    A non-blank ``query`` keeps paints whose name, code, brand, range, type or
    barcode contains it, ignoring case.
    """

    stmt = select(Paint).order_by(Paint.brand, Paint.range, Paint.manufacturer_code)
    needle = (query or "").strip().lower()
    if needle:
        pattern = f"%{needle}%"
        stmt = stmt.where(
            or_(
                func.lower(Paint.name).like(pattern),
                func.lower(Paint.manufacturer_code).like(pattern),
                func.lower(Paint.brand).like(pattern),
                func.lower(Paint.range).like(pattern),
                func.lower(Paint.type).like(pattern),
                func.lower(func.coalesce(Paint.barcode, "")).like(pattern),
            )
        )
    result = await session.execute(stmt)
    return result.scalars().all()


async def upsert_paint(
    session: AsyncSession,
    *,
    brand: PaintBrand | str,
    range: str,
    type: PaintType | str,
    manufacturer_code: str,
    name: str,
    barcode: str | None = None,
    strategy: MergeStrategy,
) -> Paint:
    """Find the paint with the same identity key or create it.

    ``type`` and ``name`` always take the supplied values. The barcode follows
    ``strategy``. Storage errors propagate to the caller.
    """

    key = normalize_identity(brand, range, manufacturer_code)
    type_label = type.value if isinstance(type, PaintType) else PaintType.from_label(type).value
    barcode = (barcode or "").strip() or None

    paint = await find_paint(session, key)
    if paint is None:
        paint = Paint(
            brand=key.brand,
            range=key.range,
            manufacturer_code=key.manufacturer_code,
            type=type_label,
            name=name,
            barcode=barcode,
            inventory_items=[],
        )
        session.add(paint)
        await session.flush()
        logger.debug("Created paint %s", key)
        return paint

    paint.type = type_label
    paint.name = name
    if strategy is MergeStrategy.REFRESH_BARCODE:
        paint.brand, paint.range, paint.manufacturer_code = key
        if barcode:
            paint.barcode = barcode
    elif barcode and not paint.barcode:
        paint.barcode = barcode
    await session.flush()
    return paint


__all__ = [
    "MergeStrategy",
    "find_paint",
    "get_paint",
    "list_paints",
    "upsert_paint",
]
