"""Inventory reconciliation against paint identity.

Every inventory write goes through this module. For one identity key and one
status there is at most one :class:`InventoryItem`; additions find that item
first and only create one when it is missing.

The functions do no locking of their own. They rely on the caller's
:class:`AsyncSession` to serialize writes; autoflush makes an item added
earlier in the same session visible to the next lookup.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TypeAlias

from sqlalchemy import select
from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from . import schemas
from .catalog import MergeStrategy, upsert_paint
from .identity import IdentityKey, identity_key
from .models import InventoryItem, Paint
from .tags import InventoryStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AddedNew:
    item: InventoryItem


@dataclass(frozen=True)
class Incremented:
    item: InventoryItem
    quantity: int


AddOutcome: TypeAlias = AddedNew | Incremented


@dataclass(frozen=True)
class InventoryFlags:
    in_collection: bool
    in_wishlist: bool


async def find_inventory_item(
    session: AsyncSession, key: IdentityKey, status: InventoryStatus
) -> InventoryItem | None:
    stmt = (
        select(InventoryItem)
        .join(InventoryItem.paint)
        .where(
            InventoryItem.status == status.value,
            Paint.brand == key.brand,
            Paint.range == key.range,
            Paint.manufacturer_code == key.manufacturer_code,
        )
    )
    result = await session.execute(stmt)
    return result.scalars().first()


async def _create_item(
    session: AsyncSession,
    paint: Paint,
    status: InventoryStatus,
    *,
    quantity: int,
    notes: str | None = None,
) -> InventoryItem:
    item = InventoryItem(
        paint=paint,
        status=status.value,
        quantity=quantity,
        notes=notes,
        created_at=datetime.now(timezone.utc),
    )
    session.add(item)
    await session.flush()
    logger.debug("Created %s item for %s with quantity %d", status.value, identity_key(paint), quantity)
    return item


async def add_or_increment(
    session: AsyncSession,
    paint: Paint,
    status: InventoryStatus,
    *,
    quantity: int = 1,
    notes: str | None = None,
) -> AddOutcome:
    """Add ``paint`` to ``status`` or bump the quantity of the existing entry.

    ``quantity`` and ``notes`` only apply when a new entry is created; an
    existing entry is incremented by one and keeps its notes and creation time.
    """

    if quantity < 1:
        raise ValueError("Quantity must be at least 1.")

    existing = await find_inventory_item(session, identity_key(paint), status)
    if existing is not None:
        existing.quantity += 1
        await session.flush()
        return Incremented(item=existing, quantity=existing.quantity)

    item = await _create_item(session, paint, status, quantity=quantity, notes=notes)
    return AddedNew(item=item)


async def set_owned_quantity_exact(session: AsyncSession, paint: Paint, quantity: int) -> bool:
    """Make the owned entry for ``paint`` hold exactly ``quantity``."""

    if quantity < 1:
        raise ValueError("Quantity must be at least 1.")

    existing = await find_inventory_item(session, identity_key(paint), InventoryStatus.OWNED)
    if existing is not None:
        existing.quantity = quantity
        await session.flush()
        return True

    await _create_item(session, paint, InventoryStatus.OWNED, quantity=quantity)
    return True


async def add_paint(session: AsyncSession, data: schemas.PaintAdd) -> AddOutcome:
    """Manual add: upsert the paint keeping its barcode, then reconcile."""

    paint = await upsert_paint(
        session,
        brand=data.brand,
        range=data.range,
        type=data.type,
        manufacturer_code=data.manufacturer_code,
        name=data.name,
        barcode=data.barcode,
        strategy=MergeStrategy.PRESERVE_BARCODE,
    )
    return await add_or_increment(
        session,
        paint,
        data.status,
        quantity=data.quantity,
        notes=data.notes,
    )


async def inventory_flags(session: AsyncSession, paint: Paint) -> InventoryFlags:
    key = identity_key(paint)
    stmt = (
        select(InventoryItem.status)
        .join(InventoryItem.paint)
        .where(
            Paint.brand == key.brand,
            Paint.range == key.range,
            Paint.manufacturer_code == key.manufacturer_code,
        )
    )
    result = await session.execute(stmt)
    statuses = set(result.scalars().all())
    return InventoryFlags(
        in_collection=InventoryStatus.OWNED.value in statuses,
        in_wishlist=InventoryStatus.WISHLIST.value in statuses,
    )


async def list_inventory(session: AsyncSession, status: InventoryStatus) -> Sequence[InventoryItem]:
    """Owned items newest first; wishlist items by paint name."""

    stmt = select(InventoryItem).join(InventoryItem.paint).where(InventoryItem.status == status.value)
    if status is InventoryStatus.WISHLIST:
        stmt = stmt.order_by(Paint.name, InventoryItem.id)
    else:
        stmt = stmt.order_by(InventoryItem.created_at.desc(), InventoryItem.id.desc())
    result = await session.execute(stmt)
    return result.scalars().all()


async def get_inventory_item(session: AsyncSession, item_id: int) -> InventoryItem:
    stmt = select(InventoryItem).where(InventoryItem.id == item_id)
    result = await session.execute(stmt)
    item = result.scalar_one_or_none()
    if item is None:
        raise NoResultFound(f"Inventory item {item_id} not found")
    return item


async def delete_inventory_item(session: AsyncSession, item: InventoryItem) -> None:
    paint = item.paint
    if item in paint.inventory_items:
        paint.inventory_items.remove(item)
    await session.delete(item)
    await session.flush()


__all__ = [
    "AddOutcome",
    "AddedNew",
    "Incremented",
    "InventoryFlags",
    "add_or_increment",
    "add_paint",
    "delete_inventory_item",
    "find_inventory_item",
    "get_inventory_item",
    "inventory_flags",
    "list_inventory",
    "set_owned_quantity_exact",
]
