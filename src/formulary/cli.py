"""Formulary CLI - deterministic command-line access to calculators and rates.

Usage:
    python -m formulary list [--domain DOMAIN]
    python -m formulary show ID
    python -m formulary evaluate ID [--mode N] [--set NAME=VALUE ...] [--unit NAME=UNIT ...]
    python -m formulary convert VALUE FROM TO [--table science|everyday]
    python -m formulary rates latest BASE [--amount A]
    python -m formulary rates historical DATE BASE TARGET [--amount A]
    python -m formulary rates trend START END BASE TARGET

Output is JSON on stdout with sorted keys. Logs go to stderr.

Exit codes:
    0: Success
    1: Calculation or lookup failure (reported as JSON)
    2: Usage or configuration error
"""

from __future__ import annotations

import argparse
import asyncio
import datetime as dt
import json
import logging
import sys
from typing import Any

from pydantic import BaseModel

from formulary import __version__
from formulary.calc import CalcEngine, CalcErrorKind, Domain, EvaluationOutcome, NotFound
from formulary.catalogs import get_default_registry
from formulary.config import ConfigError, FormularyConfig, configure_logging, load_config
from formulary.observability import TracingConfigError, configure_tracing
from formulary.rates import RateService
from formulary.units import EVERYDAY_UNITS, SCIENCE_UNITS, UnitConverter

logger = logging.getLogger(__name__)

UNIT_TABLES = {
    "science": SCIENCE_UNITS,
    "everyday": EVERYDAY_UNITS,
}


def _output_json(data: dict[str, Any]) -> None:
    """Output JSON to stdout with deterministic ordering."""
    print(json.dumps(data, sort_keys=True, indent=2))


def _error(kind: CalcErrorKind, message: str) -> dict[str, Any]:
    return {"error": {"kind": kind.value, "message": message}}


def _key_value(text: str) -> tuple[str, str]:
    name, sep, value = text.partition("=")
    if not sep or not name.strip():
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{text}'")
    return name.strip(), value.strip()


def _iso_date(text: str) -> dt.date:
    try:
        return dt.date.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM-DD, got '{text}'") from None


def _dump(model: BaseModel) -> dict[str, Any]:
    data: dict[str, Any] = model.model_dump(mode="json")
    return data


def cmd_list(args: argparse.Namespace) -> int:
    """List calculators grouped by category."""
    registry = get_default_registry()
    grouped = registry.by_category(args.domain)
    categories = {
        category: [
            {
                "id": definition.id,
                "title": definition.title,
                "domain": definition.domain.value,
                "description": definition.description,
            }
            for definition in definitions
        ]
        for category, definitions in grouped.items()
    }
    _output_json(
        {
            "categories": categories,
            "count": sum(len(items) for items in categories.values()),
            "domain": args.domain,
        }
    )
    return 0


def cmd_show(args: argparse.Namespace) -> int:
    """Print the full definition of one calculator."""
    definition = get_default_registry().get(args.calculator_id)
    if isinstance(definition, NotFound):
        _output_json(
            _error(CalcErrorKind.NOT_FOUND, f"Unknown calculator '{args.calculator_id}'")
        )
        return 1
    _output_json(_dump(definition))
    return 0


def cmd_evaluate(args: argparse.Namespace) -> int:
    """Evaluate one solve mode and print the EvaluationOutcome.

    Inputs not given with --set take the solve mode's defaults. A --set or
    --unit naming an input the mode does not have is an invalid_input failure.
    """
    engine = CalcEngine()
    definition = engine.registry.get(args.calculator_id)
    if isinstance(definition, NotFound):
        outcome = EvaluationOutcome.failure(
            CalcErrorKind.NOT_FOUND, f"Unknown calculator '{args.calculator_id}'"
        )
        _output_json(_dump(outcome))
        return 1

    try:
        mode = definition.mode(args.mode)
    except IndexError as exc:
        outcome = EvaluationOutcome.failure(CalcErrorKind.INVALID_INPUT, str(exc))
    else:
        known = {spec.name for spec in mode.inputs}
        unknown = [name for name, _ in [*args.set, *args.unit] if name not in known]
        if unknown:
            outcome = EvaluationOutcome.failure(
                CalcErrorKind.INVALID_INPUT,
                f"Mode '{mode.target}' of '{definition.id}' has no input '{unknown[0]}'; "
                f"expected one of {sorted(known)}",
                input_name=unknown[0],
            )
        else:
            values: dict[str, Any] = {**engine.default_inputs(mode), **dict(args.set)}
            units = {**engine.default_units(mode), **dict(args.unit)}
            outcome = engine.evaluate(definition, args.mode, values, units)

    _output_json(_dump(outcome))
    return 0 if outcome.ok else 1


def cmd_convert(args: argparse.Namespace) -> int:
    """Convert a value between two units of one table."""
    converter = UnitConverter(UNIT_TABLES[args.table])
    if not converter.can_convert(args.from_unit, args.to_unit):
        _output_json(
            _error(
                CalcErrorKind.INVALID_INPUT,
                f"Cannot convert '{args.from_unit}' to '{args.to_unit}' "
                f"in the {args.table} table",
            )
        )
        return 1
    _output_json(
        {
            "from": args.from_unit,
            "table": args.table,
            "to": args.to_unit,
            "value": args.value,
            "converted": converter.convert(args.value, args.from_unit, args.to_unit),
        }
    )
    return 0


async def _fetch_rates(service: RateService, args: argparse.Namespace) -> BaseModel | None:
    if args.rates_command == "latest":
        return await service.latest_rates(args.base, args.amount)
    if args.rates_command == "historical":
        return await service.historical_rate(args.date, args.base, args.target, args.amount)
    return await service.rate_trend(args.start, args.end, args.base, args.target)


def cmd_rates(args: argparse.Namespace, config: FormularyConfig) -> int:
    """Fetch exchange rates and print the payload.

    Exit codes:
        0: Rates returned
        1: Rate source unavailable (external_unavailable error)
    """
    service = RateService.from_config(config)
    payload = asyncio.run(_fetch_rates(service, args))
    if payload is None:
        _output_json(
            _error(
                CalcErrorKind.EXTERNAL_UNAVAILABLE,
                "Exchange rates are temporarily unavailable",
            )
        )
        return 1
    _output_json(_dump(payload))
    return 0


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="formulary",
        description="Formulary - parametric science and finance calculators",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default=None,
        metavar="LEVEL",
        help="Log level for stderr output (default: FORMULARY_LOG_LEVEL or WARNING)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # list command
    list_parser = subparsers.add_parser("list", help="List calculators by category")
    list_parser.add_argument(
        "--domain",
        choices=[domain.value for domain in Domain],
        default=None,
        help="Only list calculators of this domain",
    )

    # show command
    show_parser = subparsers.add_parser("show", help="Show a calculator definition")
    show_parser.add_argument("calculator_id", metavar="ID", help="Calculator id")

    # evaluate command
    evaluate_parser = subparsers.add_parser("evaluate", help="Evaluate a calculator")
    evaluate_parser.add_argument("calculator_id", metavar="ID", help="Calculator id")
    evaluate_parser.add_argument(
        "--mode",
        type=int,
        default=0,
        metavar="N",
        help="Solve mode index (default: 0)",
    )
    evaluate_parser.add_argument(
        "--set",
        type=_key_value,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Input value; may be repeated",
    )
    evaluate_parser.add_argument(
        "--unit",
        type=_key_value,
        action="append",
        default=[],
        metavar="NAME=UNIT",
        help="Unit the given value is expressed in; may be repeated",
    )

    # convert command
    convert_parser = subparsers.add_parser("convert", help="Convert a value between units")
    convert_parser.add_argument("value", type=float, help="Value to convert")
    convert_parser.add_argument("from_unit", metavar="FROM", help="Source unit symbol")
    convert_parser.add_argument("to_unit", metavar="TO", help="Target unit symbol")
    convert_parser.add_argument(
        "--table",
        choices=sorted(UNIT_TABLES),
        default="everyday",
        help="Unit table to use (default: everyday)",
    )

    # rates command with latest, historical, trend subcommands
    rates_parser = subparsers.add_parser("rates", help="Exchange-rate lookups")
    rates_subparsers = rates_parser.add_subparsers(
        dest="rates_command",
        required=True,
        help="Rate subcommands",
    )

    latest_parser = rates_subparsers.add_parser("latest", help="Latest rates for a base")
    latest_parser.add_argument("base", metavar="BASE", help="Base currency code")
    latest_parser.add_argument("--amount", type=float, default=1.0, help="Amount of base")

    historical_parser = rates_subparsers.add_parser(
        "historical", help="Rate between two currencies on a past date"
    )
    historical_parser.add_argument("date", type=_iso_date, metavar="DATE", help="YYYY-MM-DD")
    historical_parser.add_argument("base", metavar="BASE", help="Base currency code")
    historical_parser.add_argument("target", metavar="TARGET", help="Target currency code")
    historical_parser.add_argument("--amount", type=float, default=1.0, help="Amount of base")

    trend_parser = rates_subparsers.add_parser("trend", help="Daily rates over a date range")
    trend_parser.add_argument("start", type=_iso_date, metavar="START", help="YYYY-MM-DD")
    trend_parser.add_argument("end", type=_iso_date, metavar="END", help="YYYY-MM-DD")
    trend_parser.add_argument("base", metavar="BASE", help="Base currency code")
    trend_parser.add_argument("target", metavar="TARGET", help="Target currency code")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Exit codes:
        0: Success
        1: Calculation or lookup failure
        2: Usage or configuration error
    """
    parser = create_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 2

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = load_config()
        configure_logging(args.log_level or config.log_level)
        configure_tracing()
    except (ConfigError, TracingConfigError) as exc:
        print(f"formulary: configuration error: {exc}", file=sys.stderr)
        return 2

    logger.debug("Running command %s", args.command)

    if args.command == "list":
        return cmd_list(args)
    if args.command == "show":
        return cmd_show(args)
    if args.command == "evaluate":
        return cmd_evaluate(args)
    if args.command == "convert":
        return cmd_convert(args)
    if args.command == "rates":
        return cmd_rates(args, config)

    return 0


if __name__ == "__main__":
    sys.exit(main())
