"""Destructive reset of inventory and, optionally, the whole catalog."""
from __future__ import annotations

import logging
from enum import Enum

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from .models import InventoryItem, Paint

logger = logging.getLogger(__name__)


class ResetScope(str, Enum):
    INVENTORY_ONLY = "inventory"
    EVERYTHING = "everything"


async def reset(session: AsyncSession, scope: ResetScope) -> None:
    """Delete inventory items, then paints when ``scope`` is ``EVERYTHING``.

    Inventory goes first so no item ever points at a deleted paint.
    """

    result = await session.execute(delete(InventoryItem))
    logger.info("Reset removed %d inventory items", result.rowcount)
    if scope is ResetScope.EVERYTHING:
        result = await session.execute(delete(Paint))
        logger.info("Reset removed %d paints", result.rowcount)
    session.expunge_all()


__all__ = ["ResetScope", "reset"]
