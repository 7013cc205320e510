"""Core utility functions for Northwind analytics.

This module provides helpers shared by the report queries.
"""

from __future__ import annotations

import re
from datetime import datetime
from decimal import Decimal
from typing import Iterable, List, Optional, TypeVar

from northwind_analytics.core.schemas import Customer

T = TypeVar("T")

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

# Optional surrounding whitespace, optional sign, ASCII digits only
_INTEGER_LITERAL = re.compile(r"^[ \t\n\v\f\r]*[+-]?([0-9]+)[ \t\n\v\f\r]*$")


def ensure_collection(items: Optional[Iterable[T]], name: str) -> List[T]:
    """Materialize a required input collection.

    Args:
        items: Any iterable of records (list, tuple, generator).
        name: Argument name, used in the error message.

    Returns:
        A new list holding the items in input order.

    Raises:
        ValueError: If ``items`` is None.
    """
    if items is None:
        raise ValueError(f"{name} must not be None")
    return list(items)


def turnover(customer: Customer) -> Decimal:
    """Sum of the totals of a customer's orders (0 when it has none)."""
    return sum((order.total for order in customer.orders), Decimal(0))


def earliest_order_date(customer: Customer) -> datetime:
    """Return the date of the customer's earliest order.

    Customers without orders yield ``datetime.max`` so that they sort last;
    queries filter such customers out before calling this.

    Examples:
        >>> earliest_order_date(customer_with_orders)
        datetime.datetime(1997, 8, 25, 0, 0)
    """
    return min((order.order_date for order in customer.orders), default=datetime.max)


def parse_int32(text: Optional[str]) -> Optional[int]:
    """Parse ``text`` as a signed 32-bit integer.

    Leading and trailing whitespace and a single leading sign are accepted.

    Returns:
        The integer value, or None if ``text`` is None, is not an integer
        literal, or falls outside the 32-bit range.

    Examples:
        >>> parse_int32(" 05023 ")
        5023
        >>> parse_int32("WA1 1DP") is None
        True
        >>> parse_int32("99999999999") is None
        True
    """
    if text is None:
        return None
    if not _INTEGER_LITERAL.match(text):
        return None
    value = int(text.strip())
    if value < INT32_MIN or value > INT32_MAX:
        return None
    return value
