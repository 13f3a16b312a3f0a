"""
CLI (Command Line Interface).

This module provides quick terminal commands, e.g.:

    myagenda list --search keynote --hide topic=Security
    myagenda list --only location="Hall A" --interested T12 --hide-not-interested
    myagenda filters topic
    myagenda interactive

Note:
- The interactive UI lives in myagenda/interactive.py
- This CLI prints plain text (no rich formatting); only log records go through rich
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from myagenda import config
from myagenda.catalog import Catalog, is_url, load_range
from myagenda.engine import Engine
from myagenda.errors import InvalidArgumentError, MyAgendaError
from myagenda.model import DIMENSIONS, Event, VisibleRange

logger = logging.getLogger(__name__)


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _load_engine(args: argparse.Namespace) -> Engine:
    """
    Load catalog + optional range and create an engine.

    Only the default range file may be missing (the catalog's own time
    bounds are used then); a range the user names must load.
    """
    catalog = Catalog.load(args.events, tz=args.timezone)

    visible_range: Optional[VisibleRange] = None
    if args.range == config.RANGE_SOURCE and not is_url(args.range) and not Path(args.range).exists():
        logger.info("No range file at %s, using catalog bounds", args.range)
    elif args.range:
        visible_range = load_range(args.range, tz=args.timezone)

    return Engine(catalog, visible_range=visible_range, color_by=args.color_by)


def _parse_assignment(text: str) -> tuple[str, str]:
    """
    Split 'dimension=value' (value may be empty for the unknown value).
    """
    if "=" not in text:
        raise InvalidArgumentError(f"Expected DIMENSION=VALUE, got {text!r}")
    dim, value = text.split("=", 1)
    return dim.strip(), value.strip()


def _apply_filter_args(engine: Engine, args: argparse.Namespace) -> None:
    """
    Translate list options into engine commands.
    Raises InvalidArgumentError on the first rejected command.
    """
    results = []

    only: dict[str, list[str]] = {}
    for item in args.only or []:
        dim, value = _parse_assignment(item)
        only.setdefault(dim, []).append(value)
    for dim, values in only.items():
        results.append(engine.set_all_filter_values(dim, False))
        for value in values:
            results.append(engine.set_filter_value(dim, value, True))

    for item in args.hide or []:
        dim, value = _parse_assignment(item)
        results.append(engine.set_filter_value(dim, value, False))

    for event_id in args.interested or []:
        results.append(engine.set_interested(event_id, True))

    results.append(engine.set_search_text(args.search or ""))
    results.append(engine.set_always_show_interested(args.always_show_interested))
    results.append(engine.set_hide_not_interested(args.hide_not_interested))

    for result in results:
        if result.error is not None:
            raise result.error


def format_event(ev: Event, interested: bool = False) -> str:
    when = f"{ev.start:%a %Y-%m-%d %H:%M}-{ev.end:%H:%M}"
    mark = "*" if interested else " "
    bits = [f"{mark} {when}", ev.abbreviation, ev.title]
    if ev.location:
        bits.append(f"@ {ev.location}")
    if ev.type:
        bits.append(f"({ev.type})")
    if ev.topic:
        bits.append(f"[{ev.topic}]")
    return " | ".join([b for b in bits if b])


def _cmd_list(args: argparse.Namespace, engine: Engine) -> int:
    """
    Print the visible events in chronological order.
    """
    try:
        _apply_filter_args(engine, args)
    except InvalidArgumentError as e:
        print(f"Error: {e}")
        return 1

    events = sorted(engine.get_visible_events(), key=lambda ev: ev.start)
    if not events:
        print("No events.")
        return 0

    for ev in events:
        print(format_event(ev, engine.is_interested(ev.id)))
    n_interested = len(engine.interests.interested_ids())
    print(f"{len(events)} of {len(engine.catalog)} events visible, {n_interested} interested")
    return 0


def _cmd_filters(args: argparse.Namespace, engine: Engine) -> int:
    """
    Print the values of one dimension with their event count and color.
    """
    try:
        values = engine.get_filter(args.dimension)
    except InvalidArgumentError as e:
        print(f"Error: {e}")
        return 1

    counts: dict[str, int] = {}
    for ev in engine.catalog:
        v = ev.value_for(args.dimension)
        counts[v] = counts.get(v, 0) + 1

    for fv in values:
        label = fv.value or "(unknown)"
        color = f" {fv.color}" if fv.color else ""
        print(f"[{'x' if fv.is_selected else ' '}] {label} ({counts.get(fv.value, 0)}){color}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """
    Build the argparse CLI parser with sub-commands.
    """
    parser = argparse.ArgumentParser(prog="myagenda", description="MyAgenda CLI")
    parser.add_argument("--events", default=config.EVENTS_SOURCE, help="Events JSON (path or URL)")
    parser.add_argument("--range", default=config.RANGE_SOURCE, help="Range JSON (path or URL)")
    parser.add_argument("--timezone", default=config.EVENT_TIMEZONE, help="Event-local timezone")
    parser.add_argument("--color-by", default=config.DEFAULT_COLOR_BY, choices=DIMENSIONS)
    parser.add_argument("--log-level", default=config.LOG_LEVEL, help="DEBUG, INFO, WARNING, ...")
    sub = parser.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="List visible events")
    p_list.add_argument("--search", type=str, default="", help="Search text")
    p_list.add_argument("--hide", action="append", metavar="DIM=VALUE", help="Deselect a filter value")
    p_list.add_argument("--only", action="append", metavar="DIM=VALUE", help="Keep only these values of DIM")
    p_list.add_argument("--interested", action="append", metavar="ID", help="Mark an event as interested")
    p_list.add_argument("--always-show-interested", action="store_true")
    p_list.add_argument("--hide-not-interested", action="store_true")

    p_filters = sub.add_parser("filters", help="Show the values of a filter dimension")
    p_filters.add_argument("dimension", type=str, help=f"One of: {', '.join(DIMENSIONS)}")

    sub.add_parser("interactive", help="Interactive menu mode")

    return parser


def main(argv: list[str] | None = None) -> None:
    """
    CLI entry point. Parses args, dispatches to command handlers,
    and exits via SystemExit with a return code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.log_level)

    try:
        engine = _load_engine(args)
    except MyAgendaError as e:
        print(f"Could not load events: {e}")
        raise SystemExit(1)

    if args.command == "list":
        raise SystemExit(_cmd_list(args, engine))
    if args.command == "filters":
        raise SystemExit(_cmd_filters(args, engine))

    if args.command == "interactive":
        from myagenda.interactive import run_interactive

        run_interactive(engine)
        raise SystemExit(0)

    raise SystemExit(2)
