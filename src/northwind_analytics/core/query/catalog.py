from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from northwind_analytics.config import QueryConfig
from northwind_analytics.core.enums import QueryName
from northwind_analytics.ingestion.loader import Dataset
from .customers import (
    city_profitability_and_intensity,
    customers_with_first_order_date,
    filter_by_turnover_threshold,
    flag_anomalous_customers,
    rank_customers_by_first_order_and_turnover,
    rank_customers_with_first_order_date,
)
from .products import bucket_products_by_price_tier, group_products_by_category_then_stock
from .suppliers import (
    pair_with_local_suppliers,
    pair_with_local_suppliers_grouped,
    unique_supplier_countries_summary,
)

QUERY_DESCRIPTIONS: Dict[QueryName, str] = {
    QueryName.TURNOVER: "Customers whose total turnover exceeds the limit",
    QueryName.LOCAL_SUPPLIERS: "Suppliers in the same country and city as each customer",
    QueryName.LOCAL_SUPPLIERS_GROUPED: "Same as local-suppliers, computed with a grouped join",
    QueryName.FIRST_ORDER: "Customers with the date of their first order",
    QueryName.RANKED: "Customers above the limit ranked by first order, turnover and name",
    QueryName.RANKED_FIRST_ORDER: "All ordering customers ranked by first order, turnover and name",
    QueryName.ANOMALIES: "Customers with a non-numeric postal code, no region or no operator code",
    QueryName.PRODUCT_GROUPS: "Products grouped by category and stock, prices ascending",
    QueryName.PRICE_TIERS: "Products split into cheap, middle and expensive tiers",
    QueryName.CITY_STATS: "Average income and order intensity per city",
    QueryName.SUPPLIER_COUNTRIES: "Distinct supplier countries, shortest first",
}

_RUNNERS: Dict[QueryName, Callable[[Dataset, QueryConfig], Any]] = {
    QueryName.TURNOVER: lambda d, c: filter_by_turnover_threshold(d.customers, c.limit),
    QueryName.LOCAL_SUPPLIERS: lambda d, c: pair_with_local_suppliers(d.customers, d.suppliers),
    QueryName.LOCAL_SUPPLIERS_GROUPED: lambda d, c: pair_with_local_suppliers_grouped(
        d.customers, d.suppliers
    ),
    QueryName.FIRST_ORDER: lambda d, c: customers_with_first_order_date(d.customers),
    QueryName.RANKED: lambda d, c: rank_customers_by_first_order_and_turnover(
        d.customers, c.limit
    ),
    QueryName.RANKED_FIRST_ORDER: lambda d, c: rank_customers_with_first_order_date(d.customers),
    QueryName.ANOMALIES: lambda d, c: flag_anomalous_customers(d.customers),
    QueryName.PRODUCT_GROUPS: lambda d, c: group_products_by_category_then_stock(d.products),
    QueryName.PRICE_TIERS: lambda d, c: bucket_products_by_price_tier(
        d.products, c.cheap, c.middle, c.expensive
    ),
    QueryName.CITY_STATS: lambda d, c: city_profitability_and_intensity(d.customers),
    QueryName.SUPPLIER_COUNTRIES: lambda d, c: unique_supplier_countries_summary(d.suppliers),
}


def run_query(name: QueryName, dataset: Dataset, config: Optional[QueryConfig] = None) -> Any:
    """Run the named query over a dataset.

    Threshold-driven queries take their thresholds from ``config`` (module
    defaults when omitted).

    Raises:
        ValueError: If ``name`` is not a known query.
    """
    try:
        query = QueryName(name)
    except ValueError as e:
        raise ValueError(f"Unknown query: {name}") from e
    config = config or QueryConfig()
    logging.debug("Running query %s with %s", query.value, config)
    return _RUNNERS[query](dataset, config)
