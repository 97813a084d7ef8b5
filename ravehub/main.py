#!/usr/bin/env python3
"""Ravehub core services: command-line runner

Usage:
    python -m ravehub.main rates
    python -m ravehub.main convert 100 USD PEN
    python -m ravehub.main schema festival event.json [--script]
    python -m ravehub.main stats export.json --range 30d
    python -m ravehub.main analytics export.json --range 90d
    python -m ravehub.main bio-stats bio_events.json
    python -m ravehub.main installments 300 50 3 2025-01-31
    python -m ravehub.main validate event.json

Exports are JSON files with "events", "users", "transactions" and/or
"bioLinkEvents" lists, as dumped from the document store.
"""

import argparse
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from ravehub import analytics, currency, installments, preview, schema
from ravehub.config import LOG_LEVEL

logger = logging.getLogger("ravehub")


def _setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def _load_json(path: str):
    with open(Path(path), "r", encoding="utf-8") as f:
        return json.load(f)


def _print_json(data) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False, default=str))


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_rates(args) -> int:
    rates = currency.get_exchange_rates(args.base)
    print(f"\n{'='*60}")
    print(f"EXCHANGE RATES: {rates.provider} (base {rates.base})")
    print(f"{'='*60}")
    for code in sorted(rates.rates):
        print(f"  {code}  {rates.rates[code]:>14.4f}  {currency.get_currency_name(code)}")
    print()
    return 0


def cmd_convert(args) -> int:
    result = currency.convert_currency(args.amount, args.from_currency, args.to_currency)
    print(
        f"{currency.format_price(result.original_amount, result.from_currency)} = "
        f"{currency.format_price(result.amount, result.to_currency)} "
        f"(rate {result.rate:.6f})"
    )
    return 0


def cmd_schema(args) -> int:
    data = _load_json(args.file)
    if args.type == "event":
        graph = schema.generate_event_schema(data)
    else:
        graph = schema.generate(args.type, data)
    if args.script:
        print(schema.render_script_tag(graph))
    else:
        _print_json(graph)
    return 0


def cmd_stats(args) -> int:
    export = _load_json(args.file)
    stats = analytics.dashboard_stats(
        export.get("events", []),
        export.get("users", []),
        export.get("transactions", []),
        time_range=args.range,
    )
    _print_json(stats.to_dict())
    return 0


def cmd_analytics(args) -> int:
    export = _load_json(args.file)
    result = analytics.detailed_analytics(
        export.get("events", []),
        export.get("users", []),
        export.get("transactions", []),
        time_range=args.range,
    )
    _print_json(result.to_dict())
    return 0


def cmd_bio_stats(args) -> int:
    export = _load_json(args.file)
    bio_events = export.get("bioLinkEvents", []) if isinstance(export, dict) else export
    _print_json(analytics.bio_link_stats(bio_events).to_dict())
    return 0


def cmd_installments(args) -> int:
    plan = installments.calculate_installment_plan(
        args.total, args.reservation, args.count, date.fromisoformat(args.start),
    )
    if not plan.success:
        print(f"ERROR: {plan.error_message}")
        return 1
    print(f"Reserva: {plan.reservation_amount:.2f}  Saldo: {plan.remaining_amount:.2f}")
    for item in plan.installments:
        print(f"  Cuota {item.number}: {item.amount:>10.2f}  vence {item.due_date.isoformat()}")
    return 0


def cmd_validate(args) -> int:
    result = preview.validate_event_for_preview(_load_json(args.file))
    status = "OK" if result.is_valid else "NOT READY"
    print(f"Score: {result.score}/100 ({status})")
    for issue in result.issues:
        print(f"  [{issue.severity.upper()}] {issue.field}: {issue.message}")
    for rec in result.recommendations:
        print(f"  - {rec}")
    return 0 if result.is_valid else 1


# ---------------------------------------------------------------------------
# Main execution
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ravehub", description="Ravehub core services")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("rates", help="Show current exchange rates")
    p.add_argument("--base", default="USD")
    p.set_defaults(func=cmd_rates)

    p = sub.add_parser("convert", help="Convert an amount between currencies")
    p.add_argument("amount", type=float)
    p.add_argument("from_currency")
    p.add_argument("to_currency")
    p.set_defaults(func=cmd_convert)

    p = sub.add_parser("schema", help="Generate JSON-LD for a document")
    p.add_argument("type", choices=["event", "blog", "news", "festival", "concert", "product"])
    p.add_argument("file")
    p.add_argument("--script", action="store_true", help="Wrap in a <script> tag")
    p.set_defaults(func=cmd_schema)

    for name, func, help_text in [
        ("stats", cmd_stats, "Admin dashboard numbers"),
        ("analytics", cmd_analytics, "Detailed sales and user analytics"),
    ]:
        p = sub.add_parser(name, help=help_text)
        p.add_argument("file")
        p.add_argument("--range", default="all", choices=list(analytics.TIME_RANGES))
        p.set_defaults(func=func)

    p = sub.add_parser("bio-stats", help="Link-in-bio page analytics")
    p.add_argument("file")
    p.set_defaults(func=cmd_bio_stats)

    p = sub.add_parser("installments", help="Plan a reservation + monthly installments")
    p.add_argument("total", type=float)
    p.add_argument("reservation", type=float)
    p.add_argument("count", type=int)
    p.add_argument("start", help="First installment date, YYYY-MM-DD")
    p.set_defaults(func=cmd_installments)

    p = sub.add_parser("validate", help="Check an event's social/search preview")
    p.add_argument("file")
    p.set_defaults(func=cmd_validate)

    return parser


def run(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _setup_logging()
    try:
        return args.func(args)
    except schema.UnsupportedSchemaTypeError as e:
        logger.error("%s", e)
        return 2
    except (OSError, ValueError) as e:
        logger.error("Could not read input: %s", e)
        return 2


if __name__ == "__main__":
    sys.exit(run())
