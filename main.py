"""CLI entry point for the visit day counter."""

import argparse
import logging
import sqlite3
import sys
from datetime import date, datetime
from pathlib import Path

from rich.console import Console

from src.core.config import RulesConfig, Settings
from src.core.db import init_db
from src.visits.report import describe_next, export_json, next_table, summary_table
from src.visits.repository import SqliteVisitRepository
from src.visits.session import VisitSession

DEFAULT_CONFIG = "config/settings.yaml"


def parse_date(value: str) -> date:
    """Parse a YYYY-MM-DD command line value."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        msg = f"invalid date '{value}', expected YYYY-MM-DD"
        raise argparse.ArgumentTypeError(msg) from None


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--username", "-u",
        help="Whose visit log to use (default: username from the config file)",
    )
    common.add_argument(
        "--config",
        help=f"Path to settings YAML file (default: {DEFAULT_CONFIG} if present)",
    )
    common.add_argument(
        "--db",
        help="Path to the SQLite database (overrides the config file)",
    )
    common.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    parser = argparse.ArgumentParser(
        description="Count visit days against a rolling-window allowance",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- add ---
    add_parser = subparsers.add_parser("add", parents=[common], help="Add a visit to your log")
    add_parser.add_argument(
        "--enter", "-i",
        required=True,
        type=parse_date,
        help="When you came (format: YYYY-MM-DD)",
    )
    add_parser.add_argument(
        "--exit", "-o",
        required=True,
        type=parse_date,
        help="When you left (format: YYYY-MM-DD)",
    )

    # --- rm ---
    rm_parser = subparsers.add_parser("rm", parents=[common], help="Remove a visit from your log")
    rm_parser.add_argument("--id", required=True, type=int, help="Visit id to remove")

    # --- summary / ls ---
    summary_parser = subparsers.add_parser(
        "summary",
        aliases=["ls"],
        parents=[common],
        help="Print a summary of your visits",
    )
    _add_rule_arguments(summary_parser)

    # --- next ---
    next_parser = subparsers.add_parser(
        "next",
        parents=[common],
        help="Find the next date you can enter for a stay",
    )
    _add_rule_arguments(next_parser)
    next_parser.add_argument(
        "--length", "-l",
        type=int,
        help="Length of the stay in days (default: 1)",
    )

    args = parser.parse_args(argv)
    if args.command == "ls":
        args.command = "summary"
    return args


def _add_rule_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--period", "-p",
        type=int,
        help="The number of days in a period (default: 180)",
    )
    parser.add_argument(
        "--days", "-d",
        type=int,
        dest="max_days",
        help="The max number of days per period (default: 90)",
    )
    parser.add_argument(
        "--export",
        choices=["json"],
        help="Export results to format (json)",
    )


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def load_settings(args: argparse.Namespace) -> Settings:
    """Load settings from --config, the default file if present, or defaults."""
    if args.config is not None:
        settings = Settings.from_yaml(args.config)
    elif Path(DEFAULT_CONFIG).exists():
        settings = Settings.from_yaml(DEFAULT_CONFIG)
    else:
        settings = Settings()
    if args.db:
        settings = settings.model_copy(
            update={"database": settings.database.model_copy(update={"path": args.db})},
        )
    return settings


def resolve_rules(settings: Settings, args: argparse.Namespace) -> RulesConfig:
    """Merge command line rule overrides into the configured rules."""
    values = settings.rules.model_dump()
    for name in ("period", "max_days", "length"):
        override = getattr(args, name, None)
        if override is not None:
            values[name] = override
    return RulesConfig.model_validate(values)


def cmd_add(session: VisitSession, args: argparse.Namespace) -> None:
    visit = session.add_visit(args.enter, args.exit)
    print(f"Added: {visit.enter_at} to {visit.exit_at} (id {visit.id})")


def cmd_remove(session: VisitSession, args: argparse.Namespace) -> None:
    if session.remove_visit(args.id):
        print(f"Removed visit {args.id}")
    else:
        print(f"No visit with id {args.id}")


def cmd_summary(session: VisitSession, rules: RulesConfig, export_format: str | None) -> None:
    summary = session.summary(rules)
    if export_format == "json":
        print(export_json(summary.rows))
        return
    console = Console()
    console.print(
        f"Visits for {session.user.username} "
        f"({rules.max_days} days per {rules.period}-day period):",
        markup=False,
    )
    if not summary.rows:
        console.print("No visits recorded.")
        return
    console.print(summary_table(summary.rows, summary.total_days))


def cmd_next(session: VisitSession, rules: RulesConfig, export_format: str | None) -> None:
    today = date.today()
    candidate = session.next_visit(rules, today=today)
    row = describe_next(candidate, today=today)
    if export_format == "json":
        print(export_json([row]))
        return
    console = Console()
    console.print(
        f"Next {rules.length}-day visit for {session.user.username}:", markup=False,
    )
    console.print(next_table(row))


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = load_settings(args)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    username = args.username or settings.username
    if not username:
        print("Error: no username given (use --username or set it in the config)",
              file=sys.stderr)
        sys.exit(1)

    try:
        rules = resolve_rules(settings, args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    conn = init_db(settings.database.path)
    try:
        session = VisitSession(SqliteVisitRepository(conn), username)
        if args.command == "add":
            cmd_add(session, args)
        elif args.command == "rm":
            cmd_remove(session, args)
        elif args.command == "next":
            cmd_next(session, rules, args.export)
        else:
            cmd_summary(session, rules, args.export)
    except (ValueError, OverflowError, sqlite3.Error) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    finally:
        conn.close()


if __name__ == "__main__":
    main()
