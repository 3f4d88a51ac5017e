"""Pricing context and result schemas."""

from decimal import Decimal
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

# Quantity bounds are stored as 32-bit integers
MAX_QUANTITY = 2**31 - 1


class ReservedContext(BaseModel):
    """Control parameters pulled out of the pricing context."""

    currency_code: str
    quantity: Optional[Annotated[int, Field(ge=0, le=MAX_QUANTITY)]] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def reject_bool_quantity(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("quantity must be an integer, not a boolean")
        return value


class PricingContext(BaseModel):
    """Normalized pricing context: control fields + matchable attributes."""

    reserved: ReservedContext
    attributes: Dict[str, str] = {}

    @property
    def currency_code(self) -> str:
        return self.reserved.currency_code

    @property
    def quantity(self) -> Optional[int]:
        return self.reserved.quantity


class CalculatedPriceRow(BaseModel):
    """One eligible money amount, in ranking order."""

    price_set_id: str
    amount: Decimal
    currency_code: str
    min_quantity: Optional[int] = None
    max_quantity: Optional[int] = None
    default_priority: Optional[int] = None
    number_rules: int = 0
    price_list_number_rules: Optional[int] = None
    price_list_id: Optional[str] = None


class CalculatedPriceSet(BaseModel):
    """Best price for a single price set (amount is None if nothing matched)."""

    id: str
    amount: Optional[Decimal] = None
    currency_code: Optional[str] = None
    min_quantity: Optional[int] = None
    max_quantity: Optional[int] = None
    price_list_id: Optional[str] = None


class CalculatePricesRequest(BaseModel):
    """Body of the pricing API endpoints."""

    price_set_ids: List[str] = []
    context: Dict[str, Any] = {}
