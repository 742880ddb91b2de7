"""Bulk catalog import from delimited text."""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession

from .catalog import MergeStrategy, upsert_paint
from .delimited import decode_bytes, detect_delimiter, parse_line, split_lines, strip_bom
from .reconciler import set_owned_quantity_exact
from .tags import PaintBrand, PaintType

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("brand", "range", "type", "manufacturercode", "name")
OPTIONAL_COLUMNS = ("barcode", "collectionquantity")
EXPECTED_COLUMNS = "brand,range,type,manufacturerCode,name,barcode,collectionQuantity"

SAMPLE_CSV = (
    f"{EXPECTED_COLUMNS}\n"
    "Vallejo,Game Color,Base,72.001,Dead White,,1\n"
    "AK Interactive,3rd Gen,Acrylic Color,AK11187,Strong Dark Blue,,1\n"
)

_INTEGER_RE = re.compile(r"^[+-]?\d+$")


class MissingColumnError(ValueError):
    """Raised when the header lacks one of :data:`REQUIRED_COLUMNS`."""

    def __init__(self, column: str) -> None:
        super().__init__(f"Missing required column: {column}")
        self.column = column


@dataclass
class ImportReport:
    paints_upserted: int = 0
    collection_updated: int = 0


@dataclass(frozen=True)
class _Row:
    brand: str
    range: str
    type: str
    manufacturer_code: str
    name: str
    barcode: str | None
    collection_quantity: str | None


def _index_map(header: list[str]) -> dict[str, int]:
    return {column.strip().lower(): position for position, column in enumerate(header)}


def _value(cells: list[str], index: dict[str, int], column: str) -> str:
    position = index.get(column)
    if position is None or position >= len(cells):
        return ""
    return cells[position].strip()


def _optional_value(cells: list[str], index: dict[str, int], column: str) -> str | None:
    return _value(cells, index, column) or None


def _to_row(cells: list[str], index: dict[str, int]) -> _Row:
    return _Row(
        brand=_value(cells, index, "brand"),
        range=_value(cells, index, "range"),
        type=_value(cells, index, "type"),
        manufacturer_code=_value(cells, index, "manufacturercode").upper(),
        name=_value(cells, index, "name"),
        barcode=_optional_value(cells, index, "barcode"),
        collection_quantity=_optional_value(cells, index, "collectionquantity"),
    )


def parse_quantity(value: str | None) -> int | None:
    """Return a positive integer quantity, or ``None`` when the cell should be ignored."""

    if value is None:
        return None
    value = value.strip()
    if not _INTEGER_RE.match(value):
        return None
    quantity = int(value)
    if quantity <= 0:
        return None
    return quantity


async def import_catalog_text(session: AsyncSession, text: str) -> ImportReport:
    """Merge catalog rows from ``text`` into the catalog and the owned inventory.

    Only a missing required header aborts the run, before any row is touched.
    Unknown brands and types land in ``Other``; a missing, non-numeric or
    non-positive quantity leaves the inventory alone.

    Each row is committed on its own. A storage error propagates from the row
    that hit it; rows before it stay committed.
    """

    report = ImportReport()
    lines = split_lines(text)
    if not lines:
        return report

    header_line = strip_bom(lines[0])
    delimiter = detect_delimiter(header_line)
    index = _index_map(parse_line(header_line, delimiter))
    for column in REQUIRED_COLUMNS:
        if column not in index:
            raise MissingColumnError(column)

    for line_number, line in enumerate(lines[1:], start=2):
        row = _to_row(parse_line(line, delimiter), index)

        paint = await upsert_paint(
            session,
            brand=PaintBrand.from_label(row.brand),
            range=row.range,
            type=PaintType.from_label(row.type),
            manufacturer_code=row.manufacturer_code,
            name=row.name,
            barcode=row.barcode,
            strategy=MergeStrategy.REFRESH_BARCODE,
        )
        report.paints_upserted += 1

        quantity = parse_quantity(row.collection_quantity)
        if quantity is not None:
            if await set_owned_quantity_exact(session, paint, quantity):
                report.collection_updated += 1
        elif row.collection_quantity is not None:
            logger.debug(
                "Line %d: ignoring collection quantity %r", line_number, row.collection_quantity
            )

        await session.commit()

    logger.info(
        "Imported %d paints, updated %d collection entries",
        report.paints_upserted,
        report.collection_updated,
    )
    return report


async def import_catalog_bytes(session: AsyncSession, data: bytes) -> ImportReport:
    return await import_catalog_text(session, decode_bytes(data))


__all__ = [
    "EXPECTED_COLUMNS",
    "ImportReport",
    "MissingColumnError",
    "OPTIONAL_COLUMNS",
    "REQUIRED_COLUMNS",
    "SAMPLE_CSV",
    "import_catalog_bytes",
    "import_catalog_text",
    "parse_quantity",
]
