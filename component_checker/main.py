"""Entry point for Component Checker."""

import argparse
import asyncio
import json
import signal
import sys
from pathlib import Path
from typing import Optional

from .abort import AbortToken
from .cache import UpdateCache
from .config import load_registry
from .constants import DEFAULT_CONFIG_FILE
from .errors import Cancelled, ConfigError
from .logging_config import get_logger, resolve_level, setup_logging
from .models import CheckReport, CheckStatus
from .service import UpdateService
from .sources import SourceRegistry

logger = get_logger(__name__)

STATUS_LABELS = {
    CheckStatus.UPDATE_AVAILABLE: "UPDATE",
    CheckStatus.UP_TO_DATE: "OK",
    CheckStatus.NO_RELEASE: "NONE",
    CheckStatus.ERROR: "ERROR",
}


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Check registered components for newer versions",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--verbose", "-V",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        help="Log file path",
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=DEFAULT_CONFIG_FILE,
        help="Components file (default: %(default)s)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    list_parser = subparsers.add_parser("list", help="List registered components")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")
    list_parser.set_defaults(func=run_list)

    check_parser = subparsers.add_parser("check", help="Check for updates")
    check_parser.add_argument(
        "--id",
        dest="ids",
        action="append",
        metavar="UUID",
        help="Component to check (repeatable, default: all)",
    )
    check_parser.add_argument("--json", action="store_true", help="Output as JSON")
    check_parser.set_defaults(func=run_check)

    args = parser.parse_args(argv)

    setup_logging(level=resolve_level(args.verbose), log_file=args.log_file)

    if not hasattr(args, "func"):
        parser.print_help()
        return 2

    try:
        registry = load_registry(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    return args.func(args, registry)


def run_list(args: argparse.Namespace, registry: SourceRegistry) -> int:
    """List registered components."""
    rows = []
    for source in registry:
        info = source.current_info()
        rows.append({
            "id": str(source.identifier),
            "name": info.name,
            "module": info.module,
            "version": info.version,
            "source": type(source).__name__,
        })

    if args.json:
        print(json.dumps(rows, indent=2))
        return 0

    if not rows:
        print("No components registered.")
        return 0

    for row in rows:
        print(f"{row['id']}  {row['name'] or '-':<30} {row['version'] or '-'}")
    return 0


def run_check(args: argparse.Namespace, registry: SourceRegistry) -> int:
    """Check components for updates (non-interactive)."""
    cache = UpdateCache()
    service = UpdateService(registry, cache, reporter=None)
    logger.debug("Checking %d components", len(args.ids) if args.ids else len(registry))
    abort = AbortToken()
    previous_handler = signal.signal(signal.SIGINT, lambda signum, frame: abort.abort())

    try:
        reports = asyncio.run(service.check_all(args.ids, abort=abort))
    except (KeyboardInterrupt, Cancelled):
        print("Aborted.", file=sys.stderr)
        return 130
    finally:
        signal.signal(signal.SIGINT, previous_handler)

    if args.json:
        print(json.dumps([report.to_dict() for report in reports], indent=2))
    else:
        for report in reports:
            print(format_report(report))

        updates = [r for r in reports if r.status == CheckStatus.UPDATE_AVAILABLE]
        print(f"\n{len(updates)} update(s) available.")

    return 1 if any(r.status == CheckStatus.ERROR for r in reports) else 0


def format_report(report: CheckReport) -> str:
    """Format one report as a single line."""
    label = STATUS_LABELS[report.status]
    line = f"[{label:<6}] {report.name}"

    if report.status == CheckStatus.ERROR:
        return f"{line}: {report.error_kind}: {report.error}"

    current = report.current.version if report.current else None
    latest = report.info.version if report.info else None
    line = f"{line}: {current or '?'} -> {latest or '?'}"

    if report.info is not None:
        url = report.info.download_url or report.info.download_page
        if url:
            line = f"{line}  {url}"
    return line


if __name__ == "__main__":
    sys.exit(main())
