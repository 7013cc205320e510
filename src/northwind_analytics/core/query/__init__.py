"""Report query engine public API.

Ten read-only queries over customers (with their orders), suppliers and
products. Every query accepts any iterable, never mutates its inputs, and
returns a new list (or a string for the supplier country summary).
"""

from .customers import (
    filter_by_turnover_threshold,
    customers_with_first_order_date,
    rank_customers_by_first_order_and_turnover,
    rank_customers_with_first_order_date,
    flag_anomalous_customers,
    city_profitability_and_intensity,
)
from .suppliers import (
    pair_with_local_suppliers,
    pair_with_local_suppliers_grouped,
    unique_supplier_countries_summary,
)
from .products import group_products_by_category_then_stock, bucket_products_by_price_tier
from .anomalies import explain_customer_anomalies
from .catalog import QUERY_DESCRIPTIONS, run_query
from .materialize import render_result, result_rows, to_frame

__all__ = [
    "filter_by_turnover_threshold",
    "pair_with_local_suppliers",
    "pair_with_local_suppliers_grouped",
    "customers_with_first_order_date",
    "rank_customers_by_first_order_and_turnover",
    "rank_customers_with_first_order_date",
    "flag_anomalous_customers",
    "explain_customer_anomalies",
    "group_products_by_category_then_stock",
    "bucket_products_by_price_tier",
    "city_profitability_and_intensity",
    "unique_supplier_countries_summary",
    "QUERY_DESCRIPTIONS",
    "run_query",
    "render_result",
    "result_rows",
    "to_frame",
]
