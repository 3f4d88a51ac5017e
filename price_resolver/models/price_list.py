"""Price lists and their value-set rules."""

import enum
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from price_resolver.models.base import Base, IdMixin, TimestampMixin


class PriceListStatus(str, enum.Enum):
    ACTIVE = "active"
    DRAFT = "draft"


class PriceList(Base, IdMixin, TimestampMixin):
    __tablename__ = "price_list"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[PriceListStatus] = mapped_column(
        Enum(PriceListStatus, values_callable=lambda e: [m.value for m in e]),
        default=PriceListStatus.DRAFT,
        nullable=False,
    )
    starts_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    ends_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # Count of attached PriceListRule rows
    number_rules: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    rules = relationship("PriceListRule", back_populates="price_list")
    price_set_money_amounts = relationship(
        "PriceSetMoneyAmount", back_populates="price_list"
    )


class PriceListRule(Base, IdMixin, TimestampMixin):
    """Matches when context[rule_type.rule_attribute] is one of the rule's values."""

    __tablename__ = "price_list_rule"
    __table_args__ = (
        UniqueConstraint("price_list_id", "rule_type_id", name="uq_price_list_rule_type"),
    )

    price_list_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("price_list.id", ondelete="CASCADE"), nullable=False, index=True
    )
    rule_type_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("rule_type.id"), nullable=False
    )
    priority: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    price_list = relationship("PriceList", back_populates="rules")
    rule_type = relationship("RuleType")
    values = relationship("PriceListRuleValue", back_populates="price_list_rule")


class PriceListRuleValue(Base, IdMixin, TimestampMixin):
    __tablename__ = "price_list_rule_value"

    price_list_rule_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("price_list_rule.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    value: Mapped[str] = mapped_column(String(255), nullable=False)

    price_list_rule = relationship("PriceListRule", back_populates="values")
