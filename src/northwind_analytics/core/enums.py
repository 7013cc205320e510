"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class QueryName(str, Enum):
    """Names of the available report queries.

    Values are strings to ease serialization and CLI interchange.
    """

    TURNOVER = "turnover"
    LOCAL_SUPPLIERS = "local-suppliers"
    LOCAL_SUPPLIERS_GROUPED = "local-suppliers-grouped"
    FIRST_ORDER = "first-order"
    RANKED = "ranked"
    RANKED_FIRST_ORDER = "ranked-first-order"
    ANOMALIES = "anomalies"
    PRODUCT_GROUPS = "product-groups"
    PRICE_TIERS = "price-tiers"
    CITY_STATS = "city-stats"
    SUPPLIER_COUNTRIES = "supplier-countries"


class OutputFormat(str, Enum):
    """Text formats a materialized query result can be rendered to."""

    TABLE = "table"
    CSV = "csv"
    JSON = "json"


__all__ = ["QueryName", "OutputFormat"]
