import argparse
import logging
from pathlib import Path
from typing import Optional

import colorlog

from northwind_analytics.core.enums import OutputFormat, QueryName

# Query choices for argparse - used across all commands
QUERY_CHOICES = [q.value for q in QueryName]
FORMAT_CHOICES = [f.value for f in OutputFormat]

try:
    from northwind_analytics import __version__ as _PACKAGE_VERSION
except ImportError:  # pragma: no cover
    _PACKAGE_VERSION = "unknown"  # type: ignore[assignment]


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def cmd_list(args: argparse.Namespace) -> int:
    """Print the available queries with a one-line description each."""
    from northwind_analytics.core.query import QUERY_DESCRIPTIONS

    width = max(len(q.value) for q in QueryName)
    for query, description in QUERY_DESCRIPTIONS.items():
        print(f"{query.value.ljust(width)}  {description}")
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    """Run one query over a dataset file and print or save the result.

    Returns:
        0 on success
        1 if the query itself failed
        2 if the dataset, config or arguments are invalid
    """
    from northwind_analytics.config import DEFAULT_CONFIG_PATH, QueryConfig, load_query_config
    from northwind_analytics.core.query import render_result, run_query
    from northwind_analytics.ingestion.loader import load_dataset

    try:
        query = QueryName(args.query)
    except ValueError:
        logging.error("Unknown query: '%s'. Valid queries: %s", args.query, ", ".join(QUERY_CHOICES))
        return 2

    # Config: explicit path must exist, default path is optional
    config_arg = getattr(args, "config", None)
    try:
        if config_arg is not None:
            config = load_query_config(Path(config_arg))
        elif DEFAULT_CONFIG_PATH.exists():
            config = load_query_config(DEFAULT_CONFIG_PATH)
        else:
            config = QueryConfig()
        config = config.with_overrides(
            limit=getattr(args, "limit", None),
            cheap=getattr(args, "cheap", None),
            middle=getattr(args, "middle", None),
            expensive=getattr(args, "expensive", None),
        )
    except (FileNotFoundError, ValueError) as e:
        logging.error("Invalid query config: %s", e)
        return 2

    try:
        dataset = load_dataset(Path(args.data))
    except (FileNotFoundError, ValueError) as e:
        logging.error("Failed to load dataset: %s", e)
        return 2

    try:
        result = run_query(query, dataset, config)
        text = render_result(result, getattr(args, "format", None) or OutputFormat.TABLE.value)
    except (TypeError, ValueError, ArithmeticError) as e:
        logging.error("Query %s failed: %s", query.value, e)
        return 1

    output = getattr(args, "output", None)
    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text, encoding="utf-8")
        logging.info("Saved %s result: %s", query.value, out_path)
    else:
        print(text)
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="northwind-analytics",
        description=f"Northwind Analytics (v{_PACKAGE_VERSION})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List available queries")
    p_list.set_defaults(func=cmd_list)

    p_run = sub.add_parser("run", help="Run a query over a dataset JSON file")
    p_run.add_argument("query", type=str.lower, choices=QUERY_CHOICES, help="Query to run")
    p_run.add_argument("--data", required=True, help="Path to the dataset JSON file")
    p_run.add_argument(
        "--config",
        default=None,
        help="Path to queries.yaml (defaults to config/queries.yaml when present)",
    )
    p_run.add_argument("--limit", default=None, help="Turnover limit (overrides config)")
    p_run.add_argument("--cheap", default=None, help="Cheap tier upper bound (overrides config)")
    p_run.add_argument("--middle", default=None, help="Middle tier upper bound (overrides config)")
    p_run.add_argument(
        "--expensive", default=None, help="Expensive tier upper bound (overrides config)"
    )
    p_run.add_argument(
        "--format",
        type=str.lower,
        choices=FORMAT_CHOICES,
        default=OutputFormat.TABLE.value,
        help="Output format",
    )
    p_run.add_argument("--output", default=None, help="Write the result to this file")
    p_run.set_defaults(func=cmd_run)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
