"""Test fixtures and configuration."""

from decimal import Decimal
from typing import Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from price_resolver.models import (
    Base,
    MoneyAmount,
    PriceList,
    PriceListRule,
    PriceListRuleValue,
    PriceListStatus,
    PriceRule,
    PriceSet,
    PriceSetMoneyAmount,
    RuleType,
)


class CatalogBuilder:
    """Writes pricing rows while keeping the number_rules counts in sync."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.rule_types: dict[str, RuleType] = {}

    async def rule_type(self, attribute: str, default_priority: int = 0) -> RuleType:
        if attribute not in self.rule_types:
            rule_type = RuleType(
                name=attribute,
                rule_attribute=attribute,
                default_priority=default_priority,
            )
            self.db.add(rule_type)
            await self.db.flush()
            self.rule_types[attribute] = rule_type
        return self.rule_types[attribute]

    async def price_set(self, price_set_id: str) -> PriceSet:
        price_set = await self.db.get(PriceSet, price_set_id)
        if price_set is None:
            price_set = PriceSet(id=price_set_id)
            self.db.add(price_set)
            await self.db.flush()
        return price_set

    async def price_list(
        self,
        rules: Optional[dict[str, list[str]]] = None,
        title: str = "Sale",
    ) -> PriceList:
        rules = rules or {}
        price_list = PriceList(
            title=title,
            status=PriceListStatus.ACTIVE,
            number_rules=len(rules),
        )
        self.db.add(price_list)
        await self.db.flush()

        for attribute, values in rules.items():
            rule_type = await self.rule_type(attribute)
            list_rule = PriceListRule(price_list_id=price_list.id, rule_type_id=rule_type.id)
            self.db.add(list_rule)
            await self.db.flush()
            for value in values:
                self.db.add(PriceListRuleValue(price_list_rule_id=list_rule.id, value=value))
        await self.db.flush()
        return price_list

    async def price(
        self,
        price_set_id: str,
        amount: str,
        currency_code: str = "USD",
        rules: Optional[dict[str, str]] = None,
        price_list: Optional[PriceList] = None,
        min_quantity: Optional[int] = None,
        max_quantity: Optional[int] = None,
    ) -> PriceSetMoneyAmount:
        rules = rules or {}
        await self.price_set(price_set_id)

        money_amount = MoneyAmount(
            amount=Decimal(amount),
            currency_code=currency_code,
            min_quantity=min_quantity,
            max_quantity=max_quantity,
        )
        self.db.add(money_amount)
        await self.db.flush()

        psma = PriceSetMoneyAmount(
            price_set_id=price_set_id,
            money_amount_id=money_amount.id,
            price_list_id=price_list.id if price_list else None,
            number_rules=len(rules),
        )
        self.db.add(psma)
        await self.db.flush()

        for attribute, value in rules.items():
            rule_type = await self.rule_type(attribute)
            self.db.add(
                PriceRule(
                    price_set_id=price_set_id,
                    price_set_money_amount_id=psma.id,
                    rule_type_id=rule_type.id,
                    value=value,
                )
            )
        await self.db.flush()
        return psma


@pytest_asyncio.fixture
async def db():
    """In-memory SQLite session with the pricing schema created."""
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def catalog(db):
    """Builder for seeding price sets, rules and price lists."""
    return CatalogBuilder(db)
