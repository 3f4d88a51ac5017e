"""Specificity ranking and best-price selection."""

from __future__ import annotations

from typing import Iterable, Sequence

from sqlalchemy.sql.elements import ColumnElement

from price_resolver.schemas.pricing import CalculatedPriceRow, CalculatedPriceSet


def ranking_order(
    price_list_id: ColumnElement,
    number_rules: ColumnElement,
    default_priority: ColumnElement,
) -> list[ColumnElement]:
    """ORDER BY clauses for eligible candidates.

    Generic prices (no price list) come first, then more constrained
    prices, then higher rule type priority.
    """
    return [
        price_list_id.asc().nulls_first(),
        number_rules.desc(),
        default_priority.desc().nulls_last(),
    ]


def select_best_prices(
    price_set_ids: Iterable[str],
    rows: Sequence[CalculatedPriceRow],
) -> list[CalculatedPriceSet]:
    """Pick the first ranked row per price set.

    Returns one entry per requested id, in request order; price sets with
    no eligible row get an entry with no amount.
    """
    best: dict[str, CalculatedPriceRow] = {}
    for row in rows:
        best.setdefault(row.price_set_id, row)

    results = []
    for price_set_id in dict.fromkeys(price_set_ids):
        row = best.get(price_set_id)
        if row is None:
            results.append(CalculatedPriceSet(id=price_set_id))
            continue
        results.append(
            CalculatedPriceSet(
                id=price_set_id,
                amount=row.amount,
                currency_code=row.currency_code,
                min_quantity=row.min_quantity,
                max_quantity=row.max_quantity,
                price_list_id=row.price_list_id,
            )
        )
    return results
