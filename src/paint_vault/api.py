"""FastAPI router configuration."""
from __future__ import annotations

from typing import Sequence

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import NoResultFound
from sqlalchemy.ext.asyncio import AsyncSession

from . import catalog, reconciler, schemas
from .config import Settings, get_settings
from .database import get_session
from .importer import SAMPLE_CSV, MissingColumnError, import_catalog_bytes
from .logging_setup import setup_logging
from .reset import ResetScope, reset
from .tags import InventoryStatus

router = APIRouter()


def provide_settings() -> Settings:
    """Dependency returning the active :class:`Settings` instance."""

    return get_settings()


def _add_result(outcome: reconciler.AddOutcome) -> schemas.AddInventoryResult:
    if isinstance(outcome, reconciler.Incremented):
        return schemas.AddInventoryResult(
            outcome="incremented",
            quantity=outcome.quantity,
            item=schemas.InventoryItemOut.model_validate(outcome.item),
        )
    return schemas.AddInventoryResult(
        outcome="added_new",
        quantity=outcome.item.quantity,
        item=schemas.InventoryItemOut.model_validate(outcome.item),
    )


@router.get("/health", response_model=schemas.HealthStatus, tags=["system"])
async def health_check(settings: Settings = Depends(provide_settings)) -> schemas.HealthStatus:
    return schemas.HealthStatus(environment=settings.environment)


@router.get("/paints", response_model=list[schemas.PaintOut])
async def list_paints(
    q: str | None = None, session: AsyncSession = Depends(get_session)
) -> Sequence[schemas.PaintOut]:
    paints = await catalog.list_paints(session, q)
    return [schemas.PaintOut.model_validate(paint) for paint in paints]


@router.get("/paints/{paint_id}", response_model=schemas.PaintDetail)
async def get_paint(paint_id: int, session: AsyncSession = Depends(get_session)) -> schemas.PaintDetail:
    try:
        paint = await catalog.get_paint(session, paint_id)
    except NoResultFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    flags = await reconciler.inventory_flags(session, paint)
    return schemas.PaintDetail(
        **schemas.PaintOut.model_validate(paint).model_dump(),
        in_collection=flags.in_collection,
        in_wishlist=flags.in_wishlist,
    )


@router.post(
    "/paints",
    response_model=schemas.AddInventoryResult,
    status_code=status.HTTP_201_CREATED,
)
async def add_paint(
    payload: schemas.PaintAdd, session: AsyncSession = Depends(get_session)
) -> schemas.AddInventoryResult:
    outcome = await reconciler.add_paint(session, payload)
    await session.commit()
    return _add_result(outcome)


@router.post("/paints/{paint_id}/inventory/{inventory_status}", response_model=schemas.AddInventoryResult)
async def add_to_inventory(
    paint_id: int,
    inventory_status: InventoryStatus,
    session: AsyncSession = Depends(get_session),
) -> schemas.AddInventoryResult:
    try:
        paint = await catalog.get_paint(session, paint_id)
    except NoResultFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    outcome = await reconciler.add_or_increment(session, paint, inventory_status)
    await session.commit()
    return _add_result(outcome)


@router.get("/inventory/{inventory_status}", response_model=list[schemas.InventoryItemOut])
async def list_inventory(
    inventory_status: InventoryStatus, session: AsyncSession = Depends(get_session)
) -> Sequence[schemas.InventoryItemOut]:
    items = await reconciler.list_inventory(session, inventory_status)
    return [schemas.InventoryItemOut.model_validate(item) for item in items]


@router.delete("/inventory/items/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_inventory_item(item_id: int, session: AsyncSession = Depends(get_session)) -> None:
    try:
        item = await reconciler.get_inventory_item(session, item_id)
    except NoResultFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    await reconciler.delete_inventory_item(session, item)
    await session.commit()


@router.post("/imports/catalog", response_model=schemas.ImportReportOut, tags=["import"])
async def import_catalog(
    request: Request, session: AsyncSession = Depends(get_session)
) -> schemas.ImportReportOut:
    data = await request.body()
    try:
        report = await import_catalog_bytes(session, data)
    except MissingColumnError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    await session.commit()
    return schemas.ImportReportOut(
        paints_upserted=report.paints_upserted,
        collection_updated=report.collection_updated,
    )


@router.get("/imports/catalog/sample", response_class=PlainTextResponse, tags=["import"])
async def sample_catalog() -> PlainTextResponse:
    return PlainTextResponse(
        SAMPLE_CSV,
        media_type="text/csv",
        headers={"Content-Disposition": 'attachment; filename="PaintVault_Sample.csv"'},
    )


@router.post("/admin/reset", status_code=status.HTTP_204_NO_CONTENT, tags=["system"])
async def reset_data(
    payload: schemas.ResetRequest, session: AsyncSession = Depends(get_session)
) -> None:
    await reset(session, ResetScope(payload.scope))
    await session.commit()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)
    app = FastAPI(title=settings.app_name)
    if settings is not None:
        app.dependency_overrides[provide_settings] = lambda: settings
    app.include_router(router)
    return app


app = create_app()


__all__ = ["app", "create_app"]
