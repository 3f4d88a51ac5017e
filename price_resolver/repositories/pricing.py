"""Pricing repository — resolves eligible money amounts in one query."""

from __future__ import annotations

from typing import Any, Collection, Mapping

import structlog
from sqlalchemy import Select, and_, distinct, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from price_resolver.models.price_list import PriceList, PriceListRule, PriceListRuleValue
from price_resolver.models.pricing import MoneyAmount, PriceRule, PriceSetMoneyAmount, RuleType
from price_resolver.pricing.context import has_signal, normalize_context
from price_resolver.pricing.matching import price_list_rule_matches, price_rule_matches
from price_resolver.pricing.ranking import ranking_order
from price_resolver.schemas.pricing import CalculatedPriceRow, PricingContext

logger = structlog.get_logger()


def build_price_query(price_set_ids: Collection[str], context: PricingContext) -> Select:
    """Compose the candidate query for the given price sets and context.

    Matched rule counts are computed per price set money amount (generic
    rules) and per price list (list rules); a row is eligible only when
    every rule of its branch matched.
    """
    psma = PriceSetMoneyAmount

    generic_matches = (
        select(
            PriceRule.price_set_money_amount_id.label("price_set_money_amount_id"),
            func.count(distinct(RuleType.rule_attribute)).label("matched_rules"),
        )
        .join(RuleType, RuleType.id == PriceRule.rule_type_id)
        .where(price_rule_matches(context.attributes))
        .group_by(PriceRule.price_set_money_amount_id)
        .subquery("generic_matches")
    )

    list_matches = (
        select(
            PriceListRule.price_list_id.label("price_list_id"),
            func.count(distinct(RuleType.rule_attribute)).label("matched_rules"),
        )
        .join(RuleType, RuleType.id == PriceListRule.rule_type_id)
        .join(PriceListRuleValue, PriceListRuleValue.price_list_rule_id == PriceListRule.id)
        .where(price_list_rule_matches(context.attributes))
        .group_by(PriceListRule.price_list_id)
        .subquery("list_matches")
    )

    rule_priorities = (
        select(
            PriceRule.price_set_money_amount_id.label("price_set_money_amount_id"),
            func.max(RuleType.default_priority).label("default_priority"),
        )
        .join(RuleType, RuleType.id == PriceRule.rule_type_id)
        .group_by(PriceRule.price_set_money_amount_id)
        .subquery("rule_priorities")
    )

    generic_eligible = and_(
        psma.price_list_id.is_(None),
        func.coalesce(generic_matches.c.matched_rules, 0) == psma.number_rules,
    )
    list_eligible = and_(
        psma.price_list_id.is_not(None),
        func.coalesce(list_matches.c.matched_rules, 0) == PriceList.number_rules,
    )

    stmt = (
        select(
            psma.price_set_id.label("price_set_id"),
            MoneyAmount.amount.label("amount"),
            MoneyAmount.currency_code.label("currency_code"),
            MoneyAmount.min_quantity.label("min_quantity"),
            MoneyAmount.max_quantity.label("max_quantity"),
            rule_priorities.c.default_priority.label("default_priority"),
            psma.number_rules.label("number_rules"),
            PriceList.number_rules.label("price_list_number_rules"),
            psma.price_list_id.label("price_list_id"),
        )
        .select_from(psma)
        .join(MoneyAmount, MoneyAmount.id == psma.money_amount_id)
        .outerjoin(PriceList, PriceList.id == psma.price_list_id)
        .outerjoin(
            generic_matches,
            generic_matches.c.price_set_money_amount_id == psma.id,
        )
        .outerjoin(list_matches, list_matches.c.price_list_id == psma.price_list_id)
        .outerjoin(
            rule_priorities,
            rule_priorities.c.price_set_money_amount_id == psma.id,
        )
        .where(
            psma.price_set_id.in_(list(price_set_ids)),
            MoneyAmount.currency_code == context.currency_code,
            or_(generic_eligible, list_eligible),
        )
        .order_by(
            *ranking_order(
                psma.price_list_id,
                psma.number_rules,
                rule_priorities.c.default_priority,
            ),
            psma.id.asc(),
        )
    )

    quantity = context.quantity
    if quantity is not None:
        stmt = stmt.where(
            or_(MoneyAmount.min_quantity.is_(None), MoneyAmount.min_quantity <= quantity),
            or_(MoneyAmount.max_quantity.is_(None), MoneyAmount.max_quantity >= quantity),
        )

    return stmt


class PricingRepository:
    """Read-only access to price resolution."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def calculate_prices(
        self,
        price_set_ids: Collection[str],
        context: Mapping[str, Any] | None = None,
    ) -> list[CalculatedPriceRow]:
        """Resolve every eligible money amount for the given price sets.

        Args:
            price_set_ids: Price sets to resolve
            context: Pricing context; must contain currency_code, may contain
                quantity, everything else is matched against rules

        Returns:
            Eligible rows in ranking order (empty if nothing matched)

        Raises:
            InvalidInput: currency_code missing from the context
        """
        pricing_context = normalize_context(context)

        if not price_set_ids or not has_signal(pricing_context):
            logger.debug(
                "price_resolution_skipped",
                price_sets=len(price_set_ids),
                attributes=len(pricing_context.attributes),
            )
            return []

        stmt = build_price_query(price_set_ids, pricing_context)
        result = await self.db.execute(stmt)
        rows = [CalculatedPriceRow.model_validate(dict(row)) for row in result.mappings()]

        logger.info(
            "prices_calculated",
            price_sets=len(price_set_ids),
            currency=pricing_context.currency_code,
            quantity=pricing_context.quantity,
            attributes=sorted(pricing_context.attributes),
            candidates=len(rows),
        )
        return rows
