"""Report queries over customers and their orders."""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import Dict, Iterable, List, Tuple

from northwind_analytics.core.schemas import CityProfile, Customer, CustomerFirstOrder
from northwind_analytics.core.utils import earliest_order_date, ensure_collection, turnover
from .anomalies import is_anomalous


def _ranking_key(customer: Customer) -> Tuple:
    # earliest order ascending, turnover descending, company name ascending
    return (earliest_order_date(customer), -turnover(customer), customer.company_name)


def filter_by_turnover_threshold(
    customers: Iterable[Customer], limit: Decimal
) -> List[Customer]:
    """Select customers whose turnover is strictly greater than ``limit``.

    Customers without orders have a turnover of 0. Input order is preserved.
    """
    return [c for c in ensure_collection(customers, "customers") if turnover(c) > limit]


def customers_with_first_order_date(
    customers: Iterable[Customer],
) -> List[CustomerFirstOrder]:
    """Pair every customer that has orders with the date of its first order."""
    return [
        CustomerFirstOrder(customer=c, first_order_date=earliest_order_date(c))
        for c in ensure_collection(customers, "customers")
        if c.orders
    ]


def rank_customers_by_first_order_and_turnover(
    customers: Iterable[Customer], limit: Decimal
) -> List[Customer]:
    """Rank customers with orders whose turnover exceeds ``limit``.

    Ordering keys, in priority order:
    1. Earliest order date, ascending
    2. Turnover, descending
    3. Company name, ascending (ordinal)

    Remaining ties keep their input order.
    """
    selected = [
        c
        for c in ensure_collection(customers, "customers")
        if c.orders and turnover(c) > limit
    ]
    return sorted(selected, key=_ranking_key)


def rank_customers_with_first_order_date(
    customers: Iterable[Customer],
) -> List[CustomerFirstOrder]:
    """Rank every customer that has orders, paired with its first order date.

    Uses the same ordering as ``rank_customers_by_first_order_and_turnover``
    without the turnover threshold.
    """
    ranked = sorted(
        (c for c in ensure_collection(customers, "customers") if c.orders),
        key=_ranking_key,
    )
    return [
        CustomerFirstOrder(customer=c, first_order_date=earliest_order_date(c))
        for c in ranked
    ]


def flag_anomalous_customers(customers: Iterable[Customer]) -> List[Customer]:
    """Select customers with a non-numeric postal code, an undefined region,
    or a phone without an operator code.

    See ``anomalies.ALL_RULES`` for the individual rules.
    """
    return [c for c in ensure_collection(customers, "customers") if is_anomalous(c)]


def city_profitability_and_intensity(
    customers: Iterable[Customer],
) -> List[CityProfile]:
    """Average income and order intensity per city.

    Cities appear in order of first appearance. For each city:
    - average_income: mean turnover of its customers
    - average_intensity: mean number of orders of its customers

    Customers without orders count with zero. Both means are rounded half to
    even on the exact value.

    Examples:
        >>> city_profitability_and_intensity(lima_customers)
        [CityProfile(city='Lima', average_income=150, average_intensity=2)]
    """
    by_city: Dict[str, List[Customer]] = {}
    for customer in ensure_collection(customers, "customers"):
        by_city.setdefault(customer.city, []).append(customer)

    profiles: List[CityProfile] = []
    for city, members in by_city.items():
        income = Fraction(sum(turnover(c) for c in members)) / len(members)
        intensity = Fraction(sum(len(c.orders) for c in members), len(members))
        profiles.append(
            CityProfile(
                city=city,
                average_income=round(income),
                average_intensity=round(intensity),
            )
        )
    return profiles


__all__ = [
    "filter_by_turnover_threshold",
    "customers_with_first_order_date",
    "rank_customers_by_first_order_and_turnover",
    "rank_customers_with_first_order_date",
    "flag_anomalous_customers",
    "city_profitability_and_intensity",
]
