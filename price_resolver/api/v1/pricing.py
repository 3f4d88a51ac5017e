"""Pricing API for storefront and checkout callers."""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from price_resolver.database import get_db
from price_resolver.pricing.engine import PricingEngine
from price_resolver.schemas.pricing import CalculatePricesRequest

logger = structlog.get_logger()

router = APIRouter(prefix="/api/v1/pricing", tags=["pricing"])

engine = PricingEngine()


@router.post("/candidates")
async def list_candidates(
    data: CalculatePricesRequest,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """List every eligible price for the requested price sets, best first.

    Args:
        data: Price set ids and pricing context
        db: Database session

    Returns:
        {"prices": [...]}
    """
    rows = await engine.resolve_prices(db, data.price_set_ids, data.context)
    logger.debug("pricing_candidates_requested", price_sets=len(data.price_set_ids), candidates=len(rows))
    return {"prices": [row.model_dump(mode="json") for row in rows]}


@router.post("/calculate")
async def calculate_prices(
    data: CalculatePricesRequest,
    db: AsyncSession = Depends(get_db),
) -> dict:
    """Calculate the winning price of each requested price set.

    Args:
        data: Price set ids and pricing context
        db: Database session

    Returns:
        {"price_sets": [...]}
    """
    prices = await engine.calculate_prices(db, data.price_set_ids, data.context)
    logger.debug(
        "pricing_calculate_requested",
        price_sets=len(data.price_set_ids),
        priced=sum(1 for p in prices if p.amount is not None),
    )
    return {"price_sets": [price.model_dump(mode="json") for price in prices]}
