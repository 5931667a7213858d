"""Auth Log Geo - Command line interface"""

import argparse
import logging
import re
import sys
from contextlib import nullcontext
from typing import List, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .filters import FilterConfig, run_filters
from .geolocation import GeoClient
from .output import print_json, print_report
from .parser import parse_file
from .patterns import DEFAULT_LOG_PATH, GEO_API_URL, VERSION

logger = logging.getLogger('authlog')


def _threshold(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if n < 0:
        raise argparse.ArgumentTypeError("threshold must not be negative")
    return n


def _regex(value: str):
    try:
        return re.compile(value)
    except re.error as e:
        raise argparse.ArgumentTypeError(f"invalid location pattern {value!r}: {e}")


def _date(value: str) -> str:
    return ' '.join(value.split())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="authlog",
        description="Auth Log Geo - Summarize SSH login attempts per day and source IP",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="filters are applied in order: date, count, IP, user, location",
    )

    parser.add_argument("-b", "--debug", action="store_true", help="enables debug output")
    parser.add_argument("-j", "--json", action="store_true", help="outputs results in JSON format")
    parser.add_argument("-f", "--file", default=DEFAULT_LOG_PATH,
                        help="indicates auth log file to parse")
    parser.add_argument("-n", "--threshold", type=_threshold, default=0,
                        help="limits output to entries that have at least n login attempts")
    parser.add_argument("-i", "--ip", dest="address",
                        help="limits output to entries that originate from the specified IP address")
    parser.add_argument("-u", "--user",
                        help="limits output to entries that are logging in as the specified user")
    parser.add_argument("-l", "--location", type=_regex,
                        help="limits output to entries that match the specified location regex")
    parser.add_argument("-d", "--date", type=_date,
                        help="limits output to entries from the specified date (ex. Jan 1)")
    parser.add_argument("--geo-url", default=GEO_API_URL,
                        help="geolocation service base URL (default: %(default)s)")
    parser.add_argument("--version", action="version", version=f"authlog v{VERSION}")
    return parser


def setup_logging(debug: bool, console: Console):
    handler = RichHandler(console=console, show_path=debug, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if debug else logging.INFO)


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None,
         err_console: Optional[Console] = None, locator=None) -> int:
    args = build_parser().parse_args(argv)

    err_console = err_console or Console(stderr=True)
    setup_logging(args.debug, err_console)

    try:
        store = parse_file(args.file, console=err_console, show_progress=not args.debug)
    except OSError as e:
        err_console.print(f"[red]Error:[/] {escape(str(e))}", highlight=False)
        return 1

    logger.debug("parsed %d entries across %d dates", store.total_entries(), len(store))
    logger.debug("raw file data: %r", store)

    config = FilterConfig(
        threshold=args.threshold,
        address=args.address,
        user=args.user,
        location=args.location,
        date=args.date,
    )

    owns_locator = locator is None
    if owns_locator:
        locator = GeoClient(args.geo_url)
    try:
        spinner = nullcontext() if args.debug else err_console.status("Resolving locations...")
        with spinner:
            store = run_filters(store, config, locator)
    finally:
        if owns_locator:
            locator.close()

    if store is None:
        logger.info("found no date matching supplied filter; exiting")
        return 0
    logger.debug("filtered data: %r", store)

    if args.json:
        logger.debug("outputting JSON")
        print_json(store, stream=console.file if console else None)
    else:
        logger.debug("outputting plaintext")
        print_report(store, threshold=args.threshold, console=console or Console())

    logger.debug("operation complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
