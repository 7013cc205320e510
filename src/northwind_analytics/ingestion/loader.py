"""Load Northwind-style datasets from JSON files.

Expected document layout:

    {
      "customers": [
        {"companyName": "...", "country": "...", "city": "...", "region": null,
         "postalCode": "...", "phone": "...",
         "orders": [{"orderDate": "1997-08-25T00:00:00", "total": 814.50}]}
      ],
      "suppliers": [{"country": "...", "city": "..."}],
      "products": [{"category": "...", "unitsInStock": 39, "unitPrice": 18.00}]
    }

Keys may be written in snake_case, camelCase or PascalCase. Monetary values are
read as Decimal so no precision is lost on the way in.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Tuple

from northwind_analytics.core.schemas import Customer, Order, Product, Supplier

_MISSING = object()


@dataclass(frozen=True)
class Dataset:
    """The three input collections the queries run over."""

    customers: Tuple[Customer, ...] = field(default_factory=tuple)
    suppliers: Tuple[Supplier, ...] = field(default_factory=tuple)
    products: Tuple[Product, ...] = field(default_factory=tuple)


def _key_variants(name: str) -> List[str]:
    parts = name.split("_")
    camel = parts[0] + "".join(p.capitalize() for p in parts[1:])
    pascal = "".join(p.capitalize() for p in parts)
    return [name, camel, pascal]


def _get(record: Dict[str, Any], name: str, default: Any = _MISSING) -> Any:
    for key in _key_variants(name):
        if key in record:
            return record[key]
    if default is _MISSING:
        raise ValueError(f"Missing required field '{name}' in record: {record}")
    return default


def _to_decimal(value: Any, name: str) -> Decimal:
    try:
        return value if isinstance(value, Decimal) else Decimal(str(value))
    except ArithmeticError as e:
        raise ValueError(f"Field '{name}' is not numeric: {value!r}") from e


def _to_int(value: Any, name: str) -> int:
    number = _to_decimal(value, name)
    if not number.is_finite() or number != number.to_integral_value():
        raise ValueError(f"Field '{name}' is not a whole number: {value!r}")
    return int(number)


def _to_datetime(value: Any) -> datetime:
    try:
        return datetime.fromisoformat(str(value))
    except ValueError as e:
        raise ValueError(f"Field 'order_date' is not an ISO-8601 date: {value!r}") from e


def parse_order(record: Dict[str, Any]) -> Order:
    return Order(
        order_date=_to_datetime(_get(record, "order_date")),
        total=_to_decimal(_get(record, "total"), "total"),
        order_id=_get(record, "order_id", None),
    )


def parse_customer(record: Dict[str, Any]) -> Customer:
    return Customer(
        company_name=str(_get(record, "company_name")),
        country=str(_get(record, "country")),
        city=str(_get(record, "city")),
        region=_get(record, "region", None),
        postal_code=str(_get(record, "postal_code", "") or ""),
        phone=str(_get(record, "phone", "") or ""),
        orders=[parse_order(o) for o in _get(record, "orders", None) or []],
        customer_id=str(_get(record, "customer_id", "") or ""),
        address=str(_get(record, "address", "") or ""),
        fax=str(_get(record, "fax", "") or ""),
    )


def parse_supplier(record: Dict[str, Any]) -> Supplier:
    return Supplier(
        country=str(_get(record, "country")),
        city=str(_get(record, "city")),
        supplier_name=str(_get(record, "supplier_name", "") or ""),
        address=str(_get(record, "address", "") or ""),
    )


def parse_product(record: Dict[str, Any]) -> Product:
    return Product(
        category=str(_get(record, "category")),
        units_in_stock=_to_int(_get(record, "units_in_stock"), "units_in_stock"),
        unit_price=_to_decimal(_get(record, "unit_price"), "unit_price"),
        product_id=_get(record, "product_id", None),
        product_name=str(_get(record, "product_name", "") or ""),
    )


def parse_dataset(document: Dict[str, Any]) -> Dataset:
    """Build a Dataset from an already decoded JSON document.

    Raises:
        ValueError: If the document is not a mapping or a record is malformed.
    """
    if not isinstance(document, dict):
        raise ValueError("Dataset document must be a JSON object")
    return Dataset(
        customers=tuple(parse_customer(r) for r in _get(document, "customers", None) or []),
        suppliers=tuple(parse_supplier(r) for r in _get(document, "suppliers", None) or []),
        products=tuple(parse_product(r) for r in _get(document, "products", None) or []),
    )


def load_dataset(path: Path) -> Dataset:
    """Load customers, suppliers and products from a JSON file.

    Args:
        path: Path to the dataset JSON file.

    Returns:
        Dataset holding the parsed entities.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON or a record is malformed.

    Examples:
        >>> dataset = load_dataset(Path("data/sample/northwind.json"))
        >>> len(dataset.customers)
        8
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f, parse_float=Decimal)
    except (OSError, json.JSONDecodeError) as e:
        raise ValueError(f"Failed to read dataset file {path}: {e}") from e

    try:
        dataset = parse_dataset(document)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Malformed dataset file {path}: {e}") from e

    logging.info(
        "Loaded %d customers, %d suppliers, %d products from %s",
        len(dataset.customers),
        len(dataset.suppliers),
        len(dataset.products),
        path,
    )
    return dataset


__all__ = [
    "Dataset",
    "parse_order",
    "parse_customer",
    "parse_supplier",
    "parse_product",
    "parse_dataset",
    "load_dataset",
]
