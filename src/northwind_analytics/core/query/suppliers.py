"""Report queries involving suppliers."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from northwind_analytics.core.schemas import Customer, CustomerSuppliers, Supplier
from northwind_analytics.core.utils import ensure_collection


def _location_key(country: str, city: str) -> Tuple[str, str]:
    # per-character lower case mapping; no multi-character folds such as ß -> ss
    return (country or "").lower(), (city or "").lower()


def pair_with_local_suppliers(
    customers: Iterable[Customer], suppliers: Iterable[Supplier]
) -> List[CustomerSuppliers]:
    """For each customer, list the suppliers in the same country and city.

    Country and city are compared case-insensitively. Every customer is
    returned, in input order; suppliers keep their input order.
    """
    supplier_list = ensure_collection(suppliers, "suppliers")
    pairs: List[CustomerSuppliers] = []
    for customer in ensure_collection(customers, "customers"):
        location = _location_key(customer.country, customer.city)
        local = [s for s in supplier_list if _location_key(s.country, s.city) == location]
        pairs.append(CustomerSuppliers(customer=customer, suppliers=local))
    return pairs


def pair_with_local_suppliers_grouped(
    customers: Iterable[Customer], suppliers: Iterable[Supplier]
) -> List[CustomerSuppliers]:
    """Same result as ``pair_with_local_suppliers``, computed with one grouping pass.

    Suppliers are grouped once by (country, city) and then attached to the
    customers with a left-outer lookup, so customers without local suppliers
    get an empty tuple.
    """
    grouped: Dict[Tuple[str, str], List[Supplier]] = {}
    for supplier in ensure_collection(suppliers, "suppliers"):
        grouped.setdefault(_location_key(supplier.country, supplier.city), []).append(supplier)

    return [
        CustomerSuppliers(
            customer=customer,
            suppliers=grouped.get(_location_key(customer.country, customer.city), ()),
        )
        for customer in ensure_collection(customers, "customers")
    ]


def unique_supplier_countries_summary(suppliers: Iterable[Supplier]) -> str:
    """Concatenate the distinct supplier countries, shortest names first.

    Countries of equal length are ordered alphabetically (ordinal).

    Examples:
        >>> unique_supplier_countries_summary(suppliers_in(["USA", "UK", "USA", "Spain"]))
        'UKUSASpain'
    """
    countries = dict.fromkeys(s.country for s in ensure_collection(suppliers, "suppliers"))
    return "".join(sorted(countries, key=lambda country: (len(country), country)))


__all__ = [
    "pair_with_local_suppliers",
    "pair_with_local_suppliers_grouped",
    "unique_supplier_countries_summary",
]
