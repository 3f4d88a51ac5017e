"""Rule context normalizer: splits control fields from matchable attributes."""

from __future__ import annotations

from typing import Any, Mapping

import structlog
from pydantic import ValidationError

from price_resolver.exceptions import InvalidInput
from price_resolver.schemas.pricing import PricingContext, ReservedContext

logger = structlog.get_logger()

CURRENCY_CODE_KEY = "currency_code"
QUANTITY_KEY = "quantity"
RESERVED_KEYS = frozenset({CURRENCY_CODE_KEY, QUANTITY_KEY})


def _as_rule_value(value: Any) -> str:
    """Render a context scalar the way rule values are stored (text)."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_context(context: Mapping[str, Any] | None) -> PricingContext:
    """Build a PricingContext from a raw context mapping.

    The input mapping is left untouched. ``currency_code`` is mandatory;
    ``quantity`` is carried separately and never matched as a rule
    attribute. Attributes with a ``None`` value are dropped.

    Raises:
        InvalidInput: currency_code is missing or quantity is not an integer.
    """
    context = context or {}

    currency_code = context.get(CURRENCY_CODE_KEY)
    if not currency_code:
        logger.warning("invalid_pricing_context", reason="missing_currency_code")
        raise InvalidInput(
            "Method calculate_prices requires currency_code in the pricing context",
            details={"field": CURRENCY_CODE_KEY},
        )

    try:
        reserved = ReservedContext(
            currency_code=currency_code,
            quantity=context.get(QUANTITY_KEY),
        )
    except ValidationError as e:
        logger.warning("invalid_pricing_context", reason="bad_reserved_field")
        raise InvalidInput(
            "Invalid control field in the pricing context",
            details={"errors": e.errors(include_url=False, include_context=False)},
        ) from e

    attributes = {
        key: _as_rule_value(value)
        for key, value in context.items()
        if key not in RESERVED_KEYS and value is not None
    }

    return PricingContext(reserved=reserved, attributes=attributes)


def has_signal(context: PricingContext) -> bool:
    """Whether the context carries anything worth querying for."""
    return bool(context.attributes) or bool(context.currency_code)
