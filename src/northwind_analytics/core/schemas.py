"""Entity and result records for Northwind analytics.

This module defines the read-only records the query engine works on:
- Order, Customer, Supplier, Product: input entities supplied by a data source
- CustomerSuppliers, CustomerFirstOrder, StockGroup, CategoryGroup,
  PriceTierBucket, CityProfile: named result records produced by queries

All records are frozen. Sequence fields are stored as tuples so that neither a
query nor a caller can mutate an entity after it has been built.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Tuple


def _freeze(instance: object, name: str) -> None:
    value = getattr(instance, name)
    if not isinstance(value, tuple):
        object.__setattr__(instance, name, tuple(value))


@dataclass(frozen=True)
class Order:
    """A single customer order.

    Attributes:
        order_date: Date and time the order was placed.
        total: Monetary amount of the order (non-negative).
        order_id: Identifier from the source data set, if any.
    """

    order_date: datetime
    total: Decimal
    order_id: Optional[int] = None


@dataclass(frozen=True)
class Customer:
    """A customer together with the orders it placed.

    Attributes:
        company_name: Company name, used as the final ordering key in rankings.
        country: Country name.
        city: City name.
        region: Region, may be None or empty when undefined.
        postal_code: Postal code as written in the source (not necessarily numeric).
        phone: Phone number as written in the source.
        orders: Orders owned by this customer, possibly empty.

    Examples:
        >>> Customer(
        ...     company_name="Alfreds Futterkiste",
        ...     country="Germany",
        ...     city="Berlin",
        ...     region=None,
        ...     postal_code="12209",
        ...     phone="030-0074321",
        ... )
    """

    company_name: str
    country: str
    city: str
    region: Optional[str]
    postal_code: str
    phone: str
    orders: Tuple[Order, ...] = ()
    customer_id: str = ""
    address: str = ""
    fax: str = ""

    def __post_init__(self) -> None:
        _freeze(self, "orders")


@dataclass(frozen=True)
class Supplier:
    """A product supplier located in a country and city."""

    country: str
    city: str
    supplier_name: str = ""
    address: str = ""


@dataclass(frozen=True)
class Product:
    """A catalog product."""

    category: str
    units_in_stock: int
    unit_price: Decimal
    product_id: Optional[int] = None
    product_name: str = ""


# ============================================================================
# RESULT RECORDS
# ============================================================================


@dataclass(frozen=True)
class CustomerSuppliers:
    """A customer paired with the suppliers located in its country and city."""

    customer: Customer
    suppliers: Tuple[Supplier, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _freeze(self, "suppliers")


@dataclass(frozen=True)
class CustomerFirstOrder:
    """A customer paired with the date of its earliest order."""

    customer: Customer
    first_order_date: datetime


@dataclass(frozen=True)
class StockGroup:
    """Unit prices of the products sharing one stock level within a category."""

    units_in_stock: int
    prices: Tuple[Decimal, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _freeze(self, "prices")


@dataclass(frozen=True)
class CategoryGroup:
    """Products of one category, sub-grouped by stock level."""

    category: str
    stock_groups: Tuple[StockGroup, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _freeze(self, "stock_groups")


@dataclass(frozen=True)
class PriceTierBucket:
    """Products whose unit price falls into the tier ending at ``boundary``."""

    boundary: Decimal
    products: Tuple[Product, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _freeze(self, "products")


@dataclass(frozen=True)
class CityProfile:
    """Average income and order intensity of the customers in one city."""

    city: str
    average_income: int
    average_intensity: int


__all__ = [
    "Order",
    "Customer",
    "Supplier",
    "Product",
    "CustomerSuppliers",
    "CustomerFirstOrder",
    "StockGroup",
    "CategoryGroup",
    "PriceTierBucket",
    "CityProfile",
]
