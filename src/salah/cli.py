"""Command-line entry point.

    salah coord --lat 43.87982 --lng -78.9421751 --date 2024-02-09 --all
    salah location --city Oshawa --country Canada fajr isha
    salah timings
    salah authority

Option defaults can be set in the environment or a .env file:
SALAH_TIMEZONE, SALAH_AUTHORITY, SALAH_FORMAT, SALAH_USER_AGENT.
"""

import argparse
import logging
import os
import sys

from dotenv import find_dotenv, load_dotenv

from salah.compute import run
from salah.errors import SalahError
from salah.models import QueryInput
from salah.render import (
    DEFAULT_FORMAT,
    format_schedule,
    render_authority_help,
    render_timings_help,
)
from salah.times import DEFAULT_TIMEZONE

log = logging.getLogger(__name__)


def _common_options() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "timings",
        nargs="*",
        help="Names of the timings to calculate (see `salah timings`); ignored by --all",
    )
    common.add_argument(
        "-d",
        "--date",
        default="today",
        help="Date to calculate the timings for (YYYY-MM-DD), or `today`",
    )
    common.add_argument(
        "-t",
        "--timezone",
        default=os.environ.get("SALAH_TIMEZONE", DEFAULT_TIMEZONE),
        help="Timezone to output the timings in, or `auto` to derive it from the location",
    )
    common.add_argument(
        "-a", "--all", action="store_true", help="Calculate all the available timings"
    )
    common.add_argument(
        "--hanafi", action="store_true", help="Use the Hanafi madhab for Asr"
    )
    common.add_argument(
        "--auth",
        default=os.environ.get("SALAH_AUTHORITY", "ISNA"),
        help="Calculation authority (see `salah authority`)",
    )
    common.add_argument(
        "--format",
        default=os.environ.get("SALAH_FORMAT", DEFAULT_FORMAT),
        help="strftime format for the output times",
    )
    common.add_argument(
        "-v", "--verbose", action="store_true", help="Log debug output to stderr"
    )
    return common


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="salah", description="Islamic prayer times for a location and date."
    )
    sub = parser.add_subparsers(dest="command", required=True)
    common = _common_options()

    location = sub.add_parser(
        "location",
        parents=[common],
        help="Use city/country to get prayer times (network lookup)",
    )
    location.add_argument("--city", required=True, help="City to calculate the times for")
    location.add_argument(
        "--country", required=True, help="Country to calculate the times for"
    )

    coord = sub.add_parser(
        "coord", parents=[common], help="Use latitude/longitude to get prayer times"
    )
    coord.add_argument("--lat", type=float, required=True, help="Latitude")
    coord.add_argument("--lng", type=float, required=True, help="Longitude")

    sub.add_parser("timings", help="List all the available timings")
    sub.add_parser("authority", help="List all the calculation authorities")
    return parser


def query_from_args(args: argparse.Namespace) -> QueryInput:
    return QueryInput(
        timings=tuple(args.timings),
        date=args.date,
        timezone=args.timezone,
        authority=args.auth,
        hanafi=args.hanafi,
        all_timings=args.all,
        lat=getattr(args, "lat", None),
        lng=getattr(args, "lng", None),
        city=getattr(args, "city", None),
        country=getattr(args, "country", None),
    )


def main(argv: list[str] | None = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    args = build_parser().parse_args(argv)

    if args.command == "timings":
        print(render_timings_help())
        return 0
    if args.command == "authority":
        print(render_authority_help())
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    query = query_from_args(args)
    if not query.all_timings and not query.timings:
        print("salah: no timings given (pass names or --all)", file=sys.stderr)
        return 1

    try:
        schedule = run(query)
    except SalahError as e:
        log.debug("Calculation failed", exc_info=True)
        print(f"salah: {e}", file=sys.stderr)
        return 1

    print(format_schedule(schedule, args.format))
    return 0


if __name__ == "__main__":
    sys.exit(main())
