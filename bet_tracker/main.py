#!/usr/bin/env python3
"""
Bet Tracker - command line entry point.

Usage:
    bet-tracker serve                     # Run the API on 127.0.0.1:8000
    bet-tracker serve --reload            # Auto-reload for development
    bet-tracker init-db                   # Create database tables
    bet-tracker summary --email EMAIL     # Print a user's performance
    bet-tracker summary --demo            # Print the demo dataset
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from loguru import logger as core_logger

from bet_tracker.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(settings: Settings, debug: bool = False) -> None:
    """
    Configure stdlib logging for the API layer and loguru for the core.

    Both write to stderr; loguru also writes to a rotating file when
    ``log_file`` is set.
    """
    level = "DEBUG" if debug or settings.debug else settings.log_level

    logging.basicConfig(
        level=getattr(logging, level),
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    core_logger.remove()
    core_logger.add(sys.stderr, level=level)
    if settings.log_file:
        log_path = Path(settings.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        core_logger.add(log_path, level=level, rotation="10 MB", retention=5)


def cmd_serve(args: argparse.Namespace, settings: Settings) -> int:
    import uvicorn

    logger.info(f"Serving on http://{args.host}:{args.port}")
    uvicorn.run(
        "api.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )
    return 0


def cmd_init_db(args: argparse.Namespace, settings: Settings) -> int:
    from bet_tracker.database.models import get_engine, init_db

    engine = get_engine(settings.database_url)
    init_db(engine)
    engine.dispose()
    logger.info(f"Database ready at {settings.database_url}")
    return 0


def cmd_summary(args: argparse.Namespace, settings: Settings) -> int:
    from bet_tracker.dashboard.terminal import print_summary

    if args.demo:
        from bet_tracker.demo import get_demo_bankroll, get_demo_stats

        print_summary(
            get_demo_stats(),
            title="Demo User",
            balance=get_demo_bankroll().current_balance,
        )
        return 0

    from bet_tracker.database.models import get_engine, get_session_factory, init_db
    from bet_tracker.tracking import AccountService, BankrollManager, StatsService

    engine = get_engine(settings.database_url)
    init_db(engine)
    session = get_session_factory(engine)()
    try:
        user = AccountService(session).get_user_by_email(args.email)
        if user is None:
            logger.error(f"No user with email {args.email}")
            return 1

        print_summary(
            StatsService(session, user).get_stats(),
            title=user.name or user.email,
            balance=BankrollManager(session, user).current_balance,
        )
        return 0
    finally:
        session.close()
        engine.dispose()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Bet Tracker - sports pick and bankroll tracking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    bet-tracker serve --port 8080       Run the API on port 8080
    bet-tracker init-db                 Create tables in DATABASE_URL
    bet-tracker summary --demo          Show the demo dataset
        """,
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the REST API")
    serve.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve.add_argument("--port", type=int, default=8000, help="Bind port")
    serve.add_argument("--reload", action="store_true", help="Reload on code changes")
    serve.set_defaults(func=cmd_serve)

    init_db = subparsers.add_parser("init-db", help="Create database tables")
    init_db.set_defaults(func=cmd_init_db)

    summary = subparsers.add_parser("summary", help="Print performance statistics")
    target = summary.add_mutually_exclusive_group(required=True)
    target.add_argument("--email", help="Email of the account to summarize")
    target.add_argument("--demo", action="store_true", help="Summarize the demo dataset")
    summary.set_defaults(func=cmd_summary)

    return parser


def main(argv: Optional[list[str]] = None) -> None:
    """Main entry point for CLI."""
    args = build_parser().parse_args(argv)

    settings = get_settings()
    setup_logging(settings, debug=args.debug)

    try:
        exit_code = args.func(args, settings)
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        exit_code = 1
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
