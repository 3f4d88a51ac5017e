"""Seed database with demo pricing data (rule types, price sets, a price list)."""

import asyncio
from decimal import Decimal

from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker

from price_resolver.config import settings
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


RULE_TYPES = [
    {"name": "Customer group", "rule_attribute": "customer_group_id", "default_priority": 10},
    {"name": "Region", "rule_attribute": "region_id", "default_priority": 5},
    {"name": "Sales channel", "rule_attribute": "sales_channel_id", "default_priority": 1},
]

# price set id → list of (amount, currency, rules, quantity range)
PRICES = {
    "ps_tshirt": [
        (Decimal("20.00"), "USD", {}, (None, None)),
        (Decimal("18.00"), "USD", {"region_id": "us"}, (None, None)),
        (Decimal("15.00"), "USD", {"region_id": "us", "customer_group_id": "vip"}, (None, None)),
        (Decimal("16.00"), "USD", {}, (10, 100)),
        (Decimal("19.00"), "EUR", {}, (None, None)),
    ],
    "ps_hoodie": [
        (Decimal("45.00"), "USD", {}, (None, None)),
        (Decimal("40.00"), "EUR", {"region_id": "eu"}, (None, None)),
    ],
}

# Black friday list: applies to wholesale or vip customers
PRICE_LIST = {
    "title": "Black Friday",
    "rules": {"customer_group_id": ["vip", "wholesale"]},
    "prices": [
        ("ps_tshirt", Decimal("12.00"), "USD"),
        ("ps_hoodie", Decimal("35.00"), "USD"),
    ],
}


async def seed():
    """Seed the database with demo pricing data."""
    engine = create_async_engine(settings.database_url)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession)

    async with session_factory() as session:
        # Seed rule types
        rule_type_map = {}
        for rt_data in RULE_TYPES:
            rule_type = RuleType(**rt_data)
            session.add(rule_type)
            await session.flush()
            rule_type_map[rt_data["rule_attribute"]] = rule_type.id
            print(f"  + Rule type: {rt_data['rule_attribute']}")

        # Seed generic prices
        for price_set_id, prices in PRICES.items():
            session.add(PriceSet(id=price_set_id))
            await session.flush()
            for amount, currency, rules, (min_qty, max_qty) in prices:
                money_amount = MoneyAmount(
                    amount=amount,
                    currency_code=currency,
                    min_quantity=min_qty,
                    max_quantity=max_qty,
                )
                session.add(money_amount)
                await session.flush()

                psma = PriceSetMoneyAmount(
                    price_set_id=price_set_id,
                    money_amount_id=money_amount.id,
                    number_rules=len(rules),
                )
                session.add(psma)
                await session.flush()

                for attribute, value in rules.items():
                    session.add(
                        PriceRule(
                            price_set_id=price_set_id,
                            price_set_money_amount_id=psma.id,
                            rule_type_id=rule_type_map[attribute],
                            value=value,
                        )
                    )
                print(f"  + Price: {price_set_id} {amount} {currency} {rules or ''}")

        # Seed price list
        price_list = PriceList(
            title=PRICE_LIST["title"],
            status=PriceListStatus.ACTIVE,
            number_rules=len(PRICE_LIST["rules"]),
        )
        session.add(price_list)
        await session.flush()

        for attribute, values in PRICE_LIST["rules"].items():
            list_rule = PriceListRule(
                price_list_id=price_list.id,
                rule_type_id=rule_type_map[attribute],
            )
            session.add(list_rule)
            await session.flush()
            for value in values:
                session.add(PriceListRuleValue(price_list_rule_id=list_rule.id, value=value))

        for price_set_id, amount, currency in PRICE_LIST["prices"]:
            money_amount = MoneyAmount(amount=amount, currency_code=currency)
            session.add(money_amount)
            await session.flush()
            session.add(
                PriceSetMoneyAmount(
                    price_set_id=price_set_id,
                    money_amount_id=money_amount.id,
                    price_list_id=price_list.id,
                )
            )
        print(f"  + Price list: {PRICE_LIST['title']}")

        await session.commit()

    await engine.dispose()
    print("\nSeed completed!")


if __name__ == "__main__":
    asyncio.run(seed())
