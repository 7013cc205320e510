"""Query configuration.

This module centralizes the default thresholds used by the threshold-driven
queries and loads overrides from a YAML file.

YAML layout (all keys optional):

    turnover:
      limit: 5000
    price_tiers:
      cheap: 10
      middle: 20
      expensive: 100
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

# ============================================================================
# DEFAULT THRESHOLDS
# ============================================================================

DEFAULT_TURNOVER_LIMIT = Decimal("5000")
DEFAULT_CHEAP_PRICE = Decimal("10")
DEFAULT_MIDDLE_PRICE = Decimal("20")
DEFAULT_EXPENSIVE_PRICE = Decimal("100")

DEFAULT_CONFIG_PATH = Path("config/queries.yaml")


@dataclass(frozen=True)
class QueryConfig:
    """Thresholds passed to the threshold-driven queries.

    Attributes:
        limit: Turnover threshold for the turnover filter and the ranking.
        cheap: Upper bound of the cheap price tier.
        middle: Upper bound of the middle price tier.
        expensive: Upper bound of the expensive price tier.
    """

    limit: Decimal = DEFAULT_TURNOVER_LIMIT
    cheap: Decimal = DEFAULT_CHEAP_PRICE
    middle: Decimal = DEFAULT_MIDDLE_PRICE
    expensive: Decimal = DEFAULT_EXPENSIVE_PRICE

    def with_overrides(self, **overrides: Any) -> "QueryConfig":
        """Return a copy with every non-None override applied."""
        values = {k: to_decimal(v, k) for k, v in overrides.items() if v is not None}
        return replace(self, **values)


def to_decimal(value: Any, name: str) -> Decimal:
    """Convert a YAML or CLI value to Decimal.

    Floats go through ``str`` so that ``0.1`` becomes ``Decimal("0.1")``.

    Raises:
        ValueError: If the value is not numeric, or is NaN or infinite.
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid numeric value for '{name}': {value!r}")
    try:
        number = Decimal(str(value))
    except InvalidOperation as e:
        raise ValueError(f"Invalid numeric value for '{name}': {value!r}") from e
    if not number.is_finite():
        raise ValueError(f"Non-finite value for '{name}': {value!r}")
    return number


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    section = raw.get(key) or {}
    if not isinstance(section, dict):
        raise ValueError(f"Config section '{key}' must be a mapping")
    return section


def load_query_config(path: Optional[Path] = None) -> QueryConfig:
    """Load query thresholds from a YAML file.

    Args:
        path: YAML file to read. Defaults to ``config/queries.yaml``.

    Returns:
        QueryConfig with file values applied over the module defaults.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid YAML or holds non-numeric thresholds.

    Examples:
        >>> cfg = load_query_config(Path("config/queries.yaml"))
        >>> cfg.cheap
        Decimal('10')
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        raise FileNotFoundError(f"Query config not found: {config_path}")

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse query config {config_path}: {e}") from e
    if not isinstance(raw, dict):
        raise ValueError(f"Query config {config_path} must be a mapping")

    turnover = _section(raw, "turnover")
    tiers = _section(raw, "price_tiers")
    config = QueryConfig().with_overrides(
        limit=turnover.get("limit"),
        cheap=tiers.get("cheap"),
        middle=tiers.get("middle"),
        expensive=tiers.get("expensive"),
    )
    logging.debug("Loaded query config from %s: %s", config_path, config)
    return config


__all__ = [
    "DEFAULT_TURNOVER_LIMIT",
    "DEFAULT_CHEAP_PRICE",
    "DEFAULT_MIDDLE_PRICE",
    "DEFAULT_EXPENSIVE_PRICE",
    "DEFAULT_CONFIG_PATH",
    "QueryConfig",
    "to_decimal",
    "load_query_config",
]
