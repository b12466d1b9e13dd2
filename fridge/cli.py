"""CLI entry point for the fridge app."""

from __future__ import annotations

import argparse
import json
import logging
import sqlite3
import sys
from datetime import date

from dotenv import load_dotenv

from .config import LoggingConfig, load_config
from .errors import CorruptStore
from .freshness import ANSI_COLORS
from .handlers import HandlerResult, StoreHandlers, open_store
from .models import ListedItem

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_ANSI_RESET = "\033[0m"


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"invalid date {value!r}, expected YYYY-MM-DD"
        )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fridge",
        description="Track food in the fridge and see what expires soon",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to the configuration file (TOML)",
    )
    parser.add_argument(
        "--store", type=str, default=None, help="Path to the fridge store file"
    )

    sub = parser.add_subparsers(dest="command")

    # add
    add_parser = sub.add_parser("add", help="Put food in the fridge")
    add_parser.add_argument("name")
    add_parser.add_argument("best_before", type=_parse_date, metavar="DATE")
    add_parser.add_argument("--quantity", "-n", type=int, default=1)

    # list
    list_parser = sub.add_parser("list", help="Show the fridge contents")
    list_parser.add_argument(
        "--today", type=_parse_date, default=None, help="Reference day (YYYY-MM-DD)"
    )
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # remove
    remove_parser = sub.add_parser("remove", help="Throw a food away")
    remove_parser.add_argument("name")
    remove_parser.add_argument("best_before", type=_parse_date, metavar="DATE")

    # eat
    eat_parser = sub.add_parser("eat", help="Open a food, or finish an opened one")
    eat_parser.add_argument("name")
    eat_parser.add_argument("best_before", type=_parse_date, metavar="DATE")

    # import-legacy
    legacy_parser = sub.add_parser(
        "import-legacy", help="Import a fridge.json from the old app"
    )
    legacy_parser.add_argument("file")

    # pdf
    pdf_parser = sub.add_parser("pdf", help="Write the fridge list to a PDF file")
    pdf_parser.add_argument("file")
    pdf_parser.add_argument("--today", type=_parse_date, default=None)

    # gui
    sub.add_parser("gui", help="Open the fridge window (default)")

    return parser


def configure_logging(config: LoggingConfig) -> None:
    """Configure the root logger once for the process."""
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if config.file:
        handlers.append(logging.FileHandler(config.file, mode="a", encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, config.level, logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    if args.store:
        config.store.path = args.store
    configure_logging(config.logging)

    store, notice = open_store(
        config.store.path,
        critical_days=config.freshness.critical_days,
        soon_days=config.freshness.soon_days,
    )
    if notice and args.command not in (None, "gui"):
        print(notice, file=sys.stderr)

    today = getattr(args, "today", None)
    handlers = StoreHandlers(store, today=(lambda: today) if today else date.today)

    match args.command:
        case None | "gui":
            from .gui import run_gui

            run_gui(handlers, config, notice=notice)
        case "add":
            _report(handlers.on_add(args.name, args.best_before, args.quantity))
        case "remove":
            _report(handlers.on_remove(args.name, args.best_before))
        case "eat":
            _report(handlers.on_consume(args.name, args.best_before))
        case "list":
            _cmd_list(handlers, args)
        case "import-legacy":
            _cmd_import_legacy(handlers, args)
        case "pdf":
            _cmd_pdf(handlers, args)


def _report(result: HandlerResult) -> None:
    if not result.ok:
        print(result.message, file=sys.stderr)
        sys.exit(1)
    print(result.message)


def _cmd_list(handlers: StoreHandlers, args) -> None:
    result = handlers.on_list()

    if args.json:
        data = [
            {
                "name": i.name,
                "best_before": i.best_before.isoformat(),
                "quantity": i.quantity,
                "opened": i.item.opened,
                "days_remaining": i.days_remaining,
                "freshness": i.freshness.name.lower(),
            }
            for i in result.items
        ]
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return

    if not result.items:
        print("The fridge is empty.")
        return
    color = sys.stdout.isatty()
    print(f"Fridge on {handlers.today().isoformat()} ({len(result.items)} items):")
    for i in result.items:
        print("  " + _format_row(i, color))


def _format_row(listed: ListedItem, color: bool = False) -> str:
    name = listed.name + (" (open)" if listed.item.opened else "")
    band = f"{listed.freshness.label:<8}"
    if color:
        band = f"{ANSI_COLORS[listed.freshness]}{band}{_ANSI_RESET}"
    return (
        f"{band} {listed.best_before.isoformat()}  "
        f"x{listed.quantity:<3} {name}"
    )


def _cmd_import_legacy(handlers: StoreHandlers, args) -> None:
    from .legacy import import_legacy_json

    try:
        count = import_legacy_json(handlers.store, args.file, today=handlers.today())
    except CorruptStore as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
    try:
        handlers.store.save()
    except (OSError, sqlite3.Error) as e:
        print(f"Saving {handlers.store.path} failed: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"Imported {count} items from {args.file}")


def _cmd_pdf(handlers: StoreHandlers, args) -> None:
    from .pdf import generate_pdf

    result = handlers.on_list()
    try:
        path = generate_pdf(result.items, args.file, today=handlers.today())
    except ImportError as e:
        print(f"PDF error: {e}", file=sys.stderr)
        sys.exit(1)
    print(f"PDF saved: {path}")
