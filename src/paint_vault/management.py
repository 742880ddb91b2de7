"""Utility helpers for administrative tasks."""
from __future__ import annotations

import argparse
import asyncio
import logging
from collections.abc import Sequence
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from .config import get_settings
from .database import Base, engine
from .importer import ImportReport, MissingColumnError, import_catalog_bytes
from .logging_setup import setup_logging
from .reset import ResetScope, reset

logger = logging.getLogger(__name__)


async def init_database(db_engine: AsyncEngine | None = None) -> None:
    """Create database tables for the application."""

    engine_to_use = db_engine or engine
    async with engine_to_use.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def import_file(path: Path, db_engine: AsyncEngine | None = None) -> ImportReport:
    """Import a catalog file and commit the result in one session."""

    engine_to_use = db_engine or engine
    await init_database(engine_to_use)
    session_factory = async_sessionmaker(bind=engine_to_use, expire_on_commit=False)
    async with session_factory() as session:
        report = await import_catalog_bytes(session, path.read_bytes())
        await session.commit()
    return report


async def reset_database(scope: ResetScope, db_engine: AsyncEngine | None = None) -> None:
    engine_to_use = db_engine or engine
    session_factory = async_sessionmaker(bind=engine_to_use, expire_on_commit=False)
    async with session_factory() as session:
        await reset(session, scope)
        await session.commit()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="paint-vault-admin", description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("init-db", help="Create database tables.")

    import_parser = commands.add_parser("import", help="Import a catalog CSV file.")
    import_parser.add_argument("path", type=Path)

    reset_parser = commands.add_parser("reset", help="Delete inventory, or everything.")
    reset_parser.add_argument("scope", choices=[scope.value for scope in ResetScope])
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(get_settings())

    if args.command == "init-db":
        asyncio.run(init_database())
    elif args.command == "import":
        try:
            report = asyncio.run(import_file(args.path))
        except MissingColumnError as exc:
            logger.error("Import of %s failed: %s", args.path, exc)
            return 1
        print(
            f"Imported {report.paints_upserted} paints, "
            f"updated {report.collection_updated} collection entries."
        )
    elif args.command == "reset":
        asyncio.run(reset_database(ResetScope(args.scope)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
