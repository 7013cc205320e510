"""Shared pytest configuration, fixtures, and builders for query testing."""

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import List, Optional, Sequence

import pytest

from northwind_analytics.core.schemas import Customer, Order, Product, Supplier

SAMPLE_DATASET = Path(__file__).parent.parent / "data" / "sample" / "northwind.json"


def make_order(date: str, total) -> Order:
    """Build an order from an ISO date string and a numeric total."""
    return Order(order_date=datetime.fromisoformat(date), total=Decimal(str(total)))


def make_customer(
    name: str = "Customer",
    *,
    country: str = "USA",
    city: str = "Seattle",
    region: Optional[str] = "WA",
    postal_code: str = "98101",
    phone: str = "(206) 555-1212",
    orders: Sequence[Order] = (),
) -> Customer:
    """Build a customer that passes every anomaly rule unless told otherwise."""
    return Customer(
        company_name=name,
        country=country,
        city=city,
        region=region,
        postal_code=postal_code,
        phone=phone,
        orders=tuple(orders),
    )


def make_product(category: str, units_in_stock: int, unit_price, name: str = "") -> Product:
    return Product(
        category=category,
        units_in_stock=units_in_stock,
        unit_price=Decimal(str(unit_price)),
        product_name=name,
    )


def suppliers_in(countries: Sequence[str], city: str = "Somewhere") -> List[Supplier]:
    return [Supplier(country=c, city=city) for c in countries]


@pytest.fixture
def sample_customers() -> List[Customer]:
    """Customers covering empty orders, shared cities and ranking ties."""
    return [
        make_customer(
            "Alfreds",
            country="Germany",
            city="Berlin",
            orders=[make_order("1997-08-25", "814.50"), make_order("1997-10-03", "878.00")],
        ),
        make_customer(
            "Around the Horn",
            country="UK",
            city="London",
            orders=[make_order("1996-11-15", "480.00"), make_order("1997-02-21", "407.70")],
        ),
        make_customer("Empty Shelf", country="Spain", city="Madrid", orders=[]),
        make_customer(
            "Seven Seas",
            country="UK",
            city="London",
            orders=[make_order("1996-11-15", "3471.68")],
        ),
        make_customer(
            "B's Beverages",
            country="UK",
            city="London",
            orders=[make_order("1996-08-26", "479.40")],
        ),
    ]


@pytest.fixture
def sample_suppliers() -> List[Supplier]:
    return [
        Supplier(country="UK", city="London", supplier_name="Exotic Liquids"),
        Supplier(country="USA", city="New Orleans", supplier_name="Cajun Delights"),
        Supplier(country="germany", city="BERLIN", supplier_name="Heli Suesswaren"),
        Supplier(country="UK", city="Manchester", supplier_name="Specialty Biscuits"),
        Supplier(country="uk", city="london", supplier_name="Thames Traders"),
    ]


@pytest.fixture
def sample_products() -> List[Product]:
    return [
        make_product("Beverages", 39, "19.00", "Chang"),
        make_product("Condiments", 13, "10.00", "Aniseed Syrup"),
        make_product("Beverages", 17, "18.00", "Chai"),
        make_product("Beverages", 39, "18.00", "Steeleye Stout"),
        make_product("Condiments", 13, "10.00", "Cajun Seasoning"),
        make_product("Beverages", 39, "4.50", "Guarana"),
    ]


@pytest.fixture
def sample_dataset_path() -> Path:
    """Path to the bundled sample dataset."""
    return SAMPLE_DATASET
