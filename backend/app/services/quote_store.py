"""Read access to assets and their quotes."""

import logging
import uuid
from collections.abc import Iterable
from typing import Protocol

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.project import Asset
from app.models.quote import Quote

logger = logging.getLogger(__name__)


class QuoteStore(Protocol):
    """Storage capability needed by the comparison service."""

    async def get_asset(self, asset_id: uuid.UUID) -> dict | None:
        ...

    async def list_quotes(self, asset_id: uuid.UUID, statuses: Iterable[str]) -> list[dict]:
        ...


def _iso(value) -> str | None:
    return value.isoformat() if value is not None else None


def asset_to_dict(asset: Asset) -> dict:
    project = asset.project
    return {
        "id": str(asset.id),
        "name": asset.asset_name,
        "specifications": asset.specifications,
        "timeline": asset.timeline,
        "status": asset.status,
        "project": {
            "id": str(project.id),
            "project_name": project.project_name,
            "client_name": project.client_name,
        } if project else None,
    }


def quote_to_dict(quote: Quote) -> dict:
    supplier = quote.supplier
    breakdown = quote.cost_breakdown
    return {
        "id": str(quote.id),
        "cost": float(quote.cost) if quote.cost is not None else None,
        "cost_breakdown": {
            "labor": float(breakdown.get("labor") or 0),
            "materials": float(breakdown.get("materials") or 0),
            "equipment": float(breakdown.get("equipment") or 0),
            "other": float(breakdown.get("other") or 0),
        } if breakdown else None,
        "notes_capacity": quote.notes_capacity,
        "status": quote.status,
        "valid_until": _iso(quote.valid_until),
        "response_time_hours": quote.response_time_hours,
        "created_at": _iso(quote.created_at),
        "supplier": {
            "id": str(supplier.id),
            "supplier_name": supplier.supplier_name,
            "contact_email": supplier.contact_email,
            "service_categories": list(supplier.service_categories or []),
        } if supplier else None,
    }


def quotes_for_asset(asset_id: uuid.UUID, statuses: Iterable[str]) -> Select:
    """Quotes for one asset in the given statuses, in arrival order (created_at, then id)."""
    return (
        select(Quote)
        .options(selectinload(Quote.supplier))
        .where(Quote.asset_id == asset_id, Quote.status.in_(list(statuses)))
        .order_by(Quote.created_at, Quote.id)
    )


class SqlQuoteStore:
    """QuoteStore backed by the application database."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_asset(self, asset_id: uuid.UUID) -> dict | None:
        result = await self.db.execute(
            select(Asset)
            .options(selectinload(Asset.project))
            .where(Asset.id == asset_id)
        )
        asset = result.scalar_one_or_none()
        if not asset:
            return None
        return asset_to_dict(asset)

    async def list_quotes(self, asset_id: uuid.UUID, statuses: Iterable[str]) -> list[dict]:
        result = await self.db.execute(quotes_for_asset(asset_id, statuses))
        quotes = result.scalars().all()
        logger.debug(f"Loaded {len(quotes)} quotes for asset {asset_id}")
        return [quote_to_dict(q) for q in quotes]
