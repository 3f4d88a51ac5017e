"""Rule match predicates.

Generic price rules match by scalar equality, price list rules by membership
in the rule's declared value set. The two are kept as separate predicates.
"""

from __future__ import annotations

from typing import Mapping

from sqlalchemy import and_, false, or_
from sqlalchemy.sql.elements import ColumnElement

from price_resolver.models.price_list import PriceListRuleValue
from price_resolver.models.pricing import PriceRule, RuleType


def price_rule_matches(attributes: Mapping[str, str]) -> ColumnElement[bool]:
    """PriceRule joined to RuleType matches a (rule_attribute, value) context pair."""
    return or_(
        false(),
        *(
            and_(RuleType.rule_attribute == key, PriceRule.value == value)
            for key, value in attributes.items()
        ),
    )


def price_list_rule_matches(attributes: Mapping[str, str]) -> ColumnElement[bool]:
    """PriceListRule joined to RuleType and its values contains the context value."""
    return or_(
        false(),
        *(
            and_(
                RuleType.rule_attribute == key,
                PriceListRuleValue.value.in_([value]),
            )
            for key, value in attributes.items()
        ),
    )
