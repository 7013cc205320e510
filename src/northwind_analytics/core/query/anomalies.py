"""Customer anomaly rules.

Each rule inspects one aspect of a customer record and reports whether the
customer looks anomalous for that aspect. A customer is flagged when any
registered rule matches.

To add a rule:

1. Define a class implementing the AnomalyRule protocol (``rule_id`` and
   ``matches()``)
2. Append an instance to ALL_RULES

Example:
    ```python
    class MissingFaxRule:
        rule_id = "fax_missing"

        def matches(self, customer: Customer) -> bool:
            return not customer.fax
    ```
"""

from __future__ import annotations

from typing import List, Protocol

from northwind_analytics.core.schemas import Customer
from northwind_analytics.core.utils import parse_int32


class AnomalyRule(Protocol):
    """Protocol for customer anomaly rules.

    Attributes:
        rule_id: Stable identifier reported by ``explain_customer_anomalies``.
    """

    rule_id: str

    def matches(self, customer: Customer) -> bool:
        """Return True if the customer violates this rule."""
        ...


class NonNumericPostalCodeRule:
    """Postal code is empty, contains non-digits, or overflows a 32-bit integer."""

    rule_id = "postal_code_not_numeric"

    def matches(self, customer: Customer) -> bool:
        return parse_int32(customer.postal_code) is None


class UndefinedRegionRule:
    """Region is missing or empty."""

    rule_id = "region_undefined"

    def matches(self, customer: Customer) -> bool:
        return not customer.region


class MissingOperatorCodeRule:
    """Phone has no operator code, i.e. contains no opening parenthesis."""

    rule_id = "phone_without_operator_code"

    def matches(self, customer: Customer) -> bool:
        return "(" not in (customer.phone or "")


ALL_RULES: List[AnomalyRule] = [
    NonNumericPostalCodeRule(),
    UndefinedRegionRule(),
    MissingOperatorCodeRule(),
]


def explain_customer_anomalies(customer: Customer) -> List[str]:
    """List the ids of the rules a customer violates, in registry order.

    Examples:
        >>> explain_customer_anomalies(customer)
        ['postal_code_not_numeric', 'region_undefined']
    """
    return [rule.rule_id for rule in ALL_RULES if rule.matches(customer)]


def is_anomalous(customer: Customer) -> bool:
    """True if any registered rule matches the customer."""
    return any(rule.matches(customer) for rule in ALL_RULES)


__all__ = [
    "AnomalyRule",
    "NonNumericPostalCodeRule",
    "UndefinedRegionRule",
    "MissingOperatorCodeRule",
    "ALL_RULES",
    "explain_customer_anomalies",
    "is_anomalous",
]
