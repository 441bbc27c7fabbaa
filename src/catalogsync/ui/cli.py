from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from catalogsync.app import check_deny_list, reconcile_package_lists
from catalogsync.config import configure_logging, get_reconcile_config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid integer: {value}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"Expected a positive integer, got {number}")
    return number


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile the package catalog")
    subparsers = parser.add_subparsers(dest="command", required=True)

    reconcile = subparsers.add_parser(
        "reconcile",
        help="Reconcile the catalog and custom collections with the published lists",
    )
    reconcile.add_argument(
        "--max-collection-size",
        type=_positive_int,
        default=None,
        help="Maximum number of packages kept per custom collection (defaults to config)",
    )
    reconcile.add_argument(
        "--skip-collections",
        action="store_true",
        help="Only reconcile the main package list",
    )
    reconcile.add_argument(
        "--restrict-collections-to-catalog",
        action="store_true",
        help="Only keep collection members that are part of the reconciled catalog",
    )

    subparsers.add_parser(
        "check-deny-list",
        help="Report persisted packages matched by the deny list without changing anything",
    )

    return parser.parse_args(list(argv))


def _reconcile(args: argparse.Namespace) -> None:
    config = get_reconcile_config()
    if args.max_collection_size is not None:
        config = replace(config, max_collection_size=args.max_collection_size)
    if args.restrict_collections_to_catalog:
        config = replace(config, restrict_collections_to_catalog=True)
    if args.skip_collections:
        config = replace(config, include_collections=False)
    result = reconcile_package_lists(config=config)
    for outcome in result.failed_collections:
        log.warning("Collection '%s' failed: %s", outcome.descriptor.name, outcome.error)
    if result.collection_registry_error is not None:
        log.warning("Custom collections skipped: %s", result.collection_registry_error)


def _check_deny_list() -> None:
    matches = check_deny_list()
    for url in matches:
        log.info("Denied package still in catalog: %s", url)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    # argparse exits with status 2 on invalid arguments
    parsed_args = _parse_args(args_list)

    try:
        if parsed_args.command == "reconcile":
            _reconcile(parsed_args)
        elif parsed_args.command == "check-deny-list":
            _check_deny_list()
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
