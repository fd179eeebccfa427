from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from buildsync.app import reconcile_once, run_watcher
from buildsync.config import ConfigurationError, configure_logging, get_watch_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from buildsync.config import WatchConfig

log = logging.getLogger(__name__)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--namespace",
        type=str,
        help="Namespace to watch (defaults to BUILDSYNC_NAMESPACE)",
    )
    parser.add_argument(
        "--default-namespace",
        type=str,
        help="Namespace whose BuildConfigs get un-prefixed job names",
    )
    parser.add_argument(
        "--database-uri",
        type=str,
        help="SQLAlchemy URI of the job store (defaults to DATABASE_URI or the data dir)",
    )


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Synchronise OpenShift BuildConfigs into jobs")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log at DEBUG level",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    watch = subparsers.add_parser("watch", help="Reconcile all BuildConfigs, then follow changes")
    _add_common_arguments(watch)

    reconcile = subparsers.add_parser("reconcile", help="Reconcile all BuildConfigs once")
    _add_common_arguments(reconcile)

    return parser.parse_args(list(argv))


def _load_config(args: argparse.Namespace) -> WatchConfig:
    return get_watch_config().with_overrides(
        namespace=args.namespace,
        default_namespace=args.default_namespace,
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args: argparse.Namespace
    try:
        parsed_args = _parse_args(args_list)
        configure_logging(level=logging.DEBUG if parsed_args.verbose else None)
        config = _load_config(parsed_args)
    except (ValueError, ConfigurationError):
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "watch":
            result = run_watcher(config, database_uri=parsed_args.database_uri)
            if result.closed_with is not None:
                log.warning("Watch ended with an error: %s", result.closed_with)
        elif parsed_args.command == "reconcile":
            bootstrap = reconcile_once(config, database_uri=parsed_args.database_uri)
            log.info(
                "Reconcile finished: processed=%s, failed=%s",
                bootstrap.processed,
                len(bootstrap.failed),
            )
            if bootstrap.failed:
                sys.exit(1)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except Exception:
        log.exception("Fatal error during sync")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


if __name__ == "__main__":
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()
