"""Price sets, money amounts and their rule conditions."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from price_resolver.models.base import Base, IdMixin, TimestampMixin


class PriceSet(Base, IdMixin, TimestampMixin):
    __tablename__ = "price_set"

    price_set_money_amounts = relationship(
        "PriceSetMoneyAmount", back_populates="price_set"
    )


class MoneyAmount(Base, IdMixin, TimestampMixin):
    __tablename__ = "money_amount"

    currency_code: Mapped[str] = mapped_column(String(3), nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(19, 4), nullable=False)

    # Inclusive quantity range (NULL = unbounded)
    min_quantity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    max_quantity: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    price_set_money_amount = relationship(
        "PriceSetMoneyAmount", back_populates="money_amount", uselist=False
    )


class PriceSetMoneyAmount(Base, IdMixin, TimestampMixin):
    """Links a price set to one money amount, optionally under a price list."""

    __tablename__ = "price_set_money_amount"

    price_set_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("price_set.id", ondelete="CASCADE"), nullable=False, index=True
    )
    money_amount_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("money_amount.id", ondelete="CASCADE"), unique=True, nullable=False
    )
    price_list_id: Mapped[Optional[str]] = mapped_column(
        String(64), ForeignKey("price_list.id", ondelete="CASCADE"), nullable=True, index=True
    )
    title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    # Count of attached PriceRule rows; all of them must match
    number_rules: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    price_set = relationship("PriceSet", back_populates="price_set_money_amounts")
    money_amount = relationship("MoneyAmount", back_populates="price_set_money_amount")
    price_list = relationship("PriceList", back_populates="price_set_money_amounts")
    price_rules = relationship("PriceRule", back_populates="price_set_money_amount")


class RuleType(Base, IdMixin, TimestampMixin):
    """A context attribute prices can be conditioned on (e.g. customer_group_id)."""

    __tablename__ = "rule_type"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    rule_attribute: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    default_priority: Mapped[int] = mapped_column(Integer, default=0, nullable=False)


class PriceRule(Base, IdMixin, TimestampMixin):
    """Matches when context[rule_type.rule_attribute] == value."""

    __tablename__ = "price_rule"

    price_set_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("price_set.id", ondelete="CASCADE"), nullable=False
    )
    price_set_money_amount_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("price_set_money_amount.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    rule_type_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("rule_type.id"), nullable=False
    )
    value: Mapped[str] = mapped_column(String(255), nullable=False)
    priority: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    price_set_money_amount = relationship(
        "PriceSetMoneyAmount", back_populates="price_rules"
    )
    rule_type = relationship("RuleType")
