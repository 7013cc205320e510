"""Report queries over the product catalog."""

from __future__ import annotations

from decimal import Decimal
from typing import Dict, Iterable, List

from northwind_analytics.core.schemas import CategoryGroup, PriceTierBucket, Product, StockGroup
from northwind_analytics.core.utils import ensure_collection


def group_products_by_category_then_stock(products: Iterable[Product]) -> List[CategoryGroup]:
    """Group products by category, then by units in stock, with prices ascending.

    Categories and stock levels appear in order of first appearance. Prices
    within a stock group are sorted ascending; duplicates are kept.

    Examples:
        >>> group_products_by_category_then_stock(beverages)
        [CategoryGroup(category='Beverages', stock_groups=(
            StockGroup(units_in_stock=39, prices=(Decimal('18.00'), Decimal('19.00'))),
            StockGroup(units_in_stock=17, prices=(Decimal('18.00'),)),
        ))]
    """
    by_category: Dict[str, Dict[int, List[Decimal]]] = {}
    for product in ensure_collection(products, "products"):
        stock_levels = by_category.setdefault(product.category, {})
        stock_levels.setdefault(product.units_in_stock, []).append(product.unit_price)

    return [
        CategoryGroup(
            category=category,
            stock_groups=[
                StockGroup(units_in_stock=units, prices=sorted(prices))
                for units, prices in stock_levels.items()
            ],
        )
        for category, stock_levels in by_category.items()
    ]


def bucket_products_by_price_tier(
    products: Iterable[Product],
    cheap: Decimal,
    middle: Decimal,
    expensive: Decimal,
) -> List[PriceTierBucket]:
    """Split products into cheap, middle and expensive price tiers.

    Always returns three buckets, in this order:
    1. (cheap, unit_price <= cheap)
    2. (middle, cheap < unit_price <= middle)
    3. (expensive, middle < unit_price <= expensive)

    Products priced above ``expensive`` fall in no bucket. The boundaries are
    not checked against each other.
    """
    items = ensure_collection(products, "products")
    return [
        PriceTierBucket(cheap, [p for p in items if p.unit_price <= cheap]),
        PriceTierBucket(middle, [p for p in items if cheap < p.unit_price <= middle]),
        PriceTierBucket(expensive, [p for p in items if middle < p.unit_price <= expensive]),
    ]


__all__ = [
    "group_products_by_category_then_stock",
    "bucket_products_by_price_tier",
]
