from __future__ import annotations

import json
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Union

import pandas as pd

from northwind_analytics.core.enums import OutputFormat
from northwind_analytics.core.schemas import (
    CategoryGroup,
    CityProfile,
    Customer,
    CustomerFirstOrder,
    CustomerSuppliers,
    PriceTierBucket,
    Product,
)
from northwind_analytics.core.utils import turnover

Row = Dict[str, Any]


def _scalar(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _customer_row(customer: Customer) -> Row:
    return {
        "company_name": customer.company_name,
        "country": customer.country,
        "city": customer.city,
        "region": customer.region,
        "postal_code": customer.postal_code,
        "phone": customer.phone,
        "order_count": len(customer.orders),
        "turnover": turnover(customer),
    }


def _product_row(product: Product) -> Row:
    return {
        "product_name": product.product_name,
        "category": product.category,
        "units_in_stock": product.units_in_stock,
        "unit_price": product.unit_price,
    }


def _item_rows(item: Any) -> List[Row]:
    if isinstance(item, Customer):
        return [_customer_row(item)]
    if isinstance(item, CustomerSuppliers):
        return [
            {
                "company_name": item.customer.company_name,
                "country": item.customer.country,
                "city": item.customer.city,
                "supplier_count": len(item.suppliers),
                "suppliers": "; ".join(s.supplier_name or s.city for s in item.suppliers),
            }
        ]
    if isinstance(item, CustomerFirstOrder):
        return [
            {
                "company_name": item.customer.company_name,
                "first_order_date": item.first_order_date,
                "turnover": turnover(item.customer),
            }
        ]
    if isinstance(item, CategoryGroup):
        return [
            {"category": item.category, "units_in_stock": group.units_in_stock, "unit_price": price}
            for group in item.stock_groups
            for price in group.prices
        ]
    if isinstance(item, PriceTierBucket):
        return [{"tier_boundary": item.boundary, **_product_row(p)} for p in item.products]
    if isinstance(item, CityProfile):
        return [
            {
                "city": item.city,
                "average_income": item.average_income,
                "average_intensity": item.average_intensity,
            }
        ]
    raise ValueError(f"Unsupported result item: {type(item).__name__}")


def result_rows(result: Union[str, List[Any]]) -> List[Row]:
    """Flatten a query result into JSON-ready row dicts.

    Grouped results (category groups, price tiers) produce one row per leaf
    value. A string result becomes a single ``summary`` row.
    """
    if isinstance(result, str):
        return [{"summary": result}]
    rows: List[Row] = []
    for item in result:
        for row in _item_rows(item):
            rows.append({k: _scalar(v) for k, v in row.items()})
    return rows


def to_frame(result: Union[str, List[Any]]) -> pd.DataFrame:
    """Materialize a query result as a DataFrame, one column per row field."""
    return pd.DataFrame(result_rows(result))


def render_result(result: Union[str, List[Any]], format: str = "table") -> str:
    """Render a query result as text.

    Args:
        result: Value returned by one of the report queries.
        format: One of ``table``, ``csv`` or ``json``.

    Raises:
        ValueError: If the format is not supported.
    """
    try:
        fmt = OutputFormat(format)
    except ValueError as e:
        raise ValueError(f"Unsupported format: {format}") from e

    if fmt == OutputFormat.JSON:
        return json.dumps(result_rows(result), indent=2, ensure_ascii=False)

    df = to_frame(result)
    if fmt == OutputFormat.CSV:
        return df.to_csv(index=False)
    if df.empty:
        return "(no rows)"
    return df.to_string(index=False)
