"""Northwind Analytics: read-only report queries over customers, suppliers and products.

The query engine lives in `northwind_analytics.core.query`. The CLI
(`northwind-analytics list|run`) loads a JSON dataset, runs one query and
renders the result as a table, CSV or JSON.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
