"""Pricing Engine — picks the best price for each requested price set."""

from __future__ import annotations

from typing import Any, Collection, Mapping, Optional

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from price_resolver.pricing.ranking import select_best_prices
from price_resolver.repositories.pricing import PricingRepository
from price_resolver.schemas.pricing import CalculatedPriceRow, CalculatedPriceSet

logger = structlog.get_logger()


class PricingEngine:
    """Resolves ranked candidates and selects one price per price set."""

    async def resolve_prices(
        self,
        db: AsyncSession,
        price_set_ids: Collection[str],
        context: Optional[Mapping[str, Any]] = None,
    ) -> list[CalculatedPriceRow]:
        """Return every eligible price row, best first."""
        return await PricingRepository(db).calculate_prices(price_set_ids, context)

    async def calculate_prices(
        self,
        db: AsyncSession,
        price_set_ids: Collection[str],
        context: Optional[Mapping[str, Any]] = None,
    ) -> list[CalculatedPriceSet]:
        """Find the winning price for each price set.

        Priority (first wins):
        1. Generic prices before price list prices
        2. More rules matched before fewer
        3. Higher rule type default priority

        Args:
            db: Database session
            price_set_ids: Price sets to price
            context: Pricing context with currency_code and optional quantity

        Returns:
            One CalculatedPriceSet per requested id, in request order
        """
        rows = await self.resolve_prices(db, price_set_ids, context)
        prices = select_best_prices(price_set_ids, rows)

        unpriced = [p.id for p in prices if p.amount is None]
        if unpriced:
            logger.info("price_sets_without_price", price_set_ids=unpriced)

        return prices
