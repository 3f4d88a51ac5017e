"""SQLAlchemy ORM models."""

from price_resolver.models.base import Base
from price_resolver.models.price_list import (
    PriceList,
    PriceListRule,
    PriceListRuleValue,
    PriceListStatus,
)
from price_resolver.models.pricing import (
    MoneyAmount,
    PriceRule,
    PriceSet,
    PriceSetMoneyAmount,
    RuleType,
)

__all__ = [
    "Base",
    "PriceSet",
    "MoneyAmount",
    "PriceSetMoneyAmount",
    "RuleType",
    "PriceRule",
    "PriceList",
    "PriceListRule",
    "PriceListRuleValue",
    "PriceListStatus",
]
