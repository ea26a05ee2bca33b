from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services.quote_comparison_service import QuoteComparisonService
from app.services.quote_store import QuoteStore, SqlQuoteStore


async def get_quote_store(db: AsyncSession = Depends(get_db)) -> QuoteStore:
    return SqlQuoteStore(db)


async def get_comparison_service(
    store: QuoteStore = Depends(get_quote_store),
) -> QuoteComparisonService:
    return QuoteComparisonService(store)
