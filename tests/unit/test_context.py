"""Tests for pricing context normalization."""

import pytest

from price_resolver.exceptions import InvalidInput
from price_resolver.pricing.context import has_signal, normalize_context
from price_resolver.schemas.pricing import PricingContext, ReservedContext


class TestNormalizeContext:
    """Test splitting reserved keys from rule attributes."""

    def test_reserved_keys_extracted(self):
        ctx = normalize_context(
            {"currency_code": "USD", "quantity": 5, "customer_group": "vip"}
        )
        assert ctx.currency_code == "USD"
        assert ctx.quantity == 5
        assert ctx.attributes == {"customer_group": "vip"}

    def test_missing_currency_raises(self):
        with pytest.raises(InvalidInput) as exc_info:
            normalize_context({"customer_group": "vip"})
        assert exc_info.value.code == "INVALID_DATA"
        assert exc_info.value.details == {"field": "currency_code"}

    def test_empty_currency_raises(self):
        with pytest.raises(InvalidInput):
            normalize_context({"currency_code": ""})

    def test_none_context_raises(self):
        with pytest.raises(InvalidInput):
            normalize_context(None)

    def test_quantity_optional(self):
        ctx = normalize_context({"currency_code": "EUR"})
        assert ctx.quantity is None
        assert ctx.attributes == {}

    def test_quantity_numeric_string_coerced(self):
        ctx = normalize_context({"currency_code": "EUR", "quantity": "12"})
        assert ctx.quantity == 12

    def test_bad_quantity_raises(self):
        with pytest.raises(InvalidInput) as exc_info:
            normalize_context({"currency_code": "EUR", "quantity": "a dozen"})
        assert "errors" in exc_info.value.details

    def test_oversized_quantity_raises(self):
        with pytest.raises(InvalidInput):
            normalize_context({"currency_code": "USD", "quantity": 10**20})

    def test_negative_quantity_raises(self):
        with pytest.raises(InvalidInput):
            normalize_context({"currency_code": "USD", "quantity": -1})

    def test_largest_quantity_accepted(self):
        ctx = normalize_context({"currency_code": "USD", "quantity": 2**31 - 1})
        assert ctx.quantity == 2**31 - 1

    def test_boolean_quantity_raises(self):
        with pytest.raises(InvalidInput):
            normalize_context({"currency_code": "USD", "quantity": True})

    def test_input_not_mutated(self):
        raw = {"currency_code": "USD", "quantity": 2, "region": "us"}
        normalize_context(raw)
        assert raw == {"currency_code": "USD", "quantity": 2, "region": "us"}

    def test_values_rendered_as_text(self):
        ctx = normalize_context(
            {"currency_code": "USD", "tier": 3, "is_member": True, "channel": None}
        )
        assert ctx.attributes == {"tier": "3", "is_member": "true"}


class TestHasSignal:
    def test_currency_only_has_signal(self):
        ctx = PricingContext(reserved=ReservedContext(currency_code="USD"))
        assert has_signal(ctx)

    def test_empty_context_has_no_signal(self):
        ctx = PricingContext.model_construct(
            reserved=ReservedContext.model_construct(currency_code="", quantity=None),
            attributes={},
        )
        assert not has_signal(ctx)
