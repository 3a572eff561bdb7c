"""
Command-line interface for campvue.

Every data command prints JSON to stdout. RIDB failures print an
``{"error": ..., "details": ...}`` object to stderr and exit non-zero
(2 for invalid parameters, 1 otherwise).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any

from pydantic import BaseModel

from campvue import __version__
from campvue.config import ConfigurationError, get_settings
from campvue.datasources import ridb
from campvue.datasources.ridb.activities import MAX_PAGES_DEFAULT as ACTIVITIES_MAX_PAGES
from campvue.datasources.ridb.campsites import ATTRIBUTES_MAX_PAGES, CAMPSITES_MAX_PAGES
from campvue.datasources.ridb.pagination import require_int
from campvue.flows.vehicle_lengths import vehicle_lengths
from campvue.normalize.activities import normalize_activities, normalize_activity
from campvue.normalize.campsites import (
    normalize_attributes,
    normalize_campsite,
    normalize_campsites,
)
from campvue.normalize.facilities import normalize_facility

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID = 2


def _add_paging(parser: argparse.ArgumentParser, max_pages: int) -> None:
    parser.add_argument(
        "--limit",
        type=int,
        default=ridb.MAX_PAGE_SIZE,
        help=f"Page size (default: {ridb.MAX_PAGE_SIZE})",
    )
    parser.add_argument("--offset", type=int, default=0, help="Page offset (default: 0)")
    parser.add_argument("--all", action="store_true", help="Fetch every page")
    parser.add_argument(
        "--max-pages",
        type=int,
        default=max_pages,
        help=f"Page cap with --all (default: {max_pages})",
    )


def _tristate(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("true", "yes", "1"):
        return True
    if lowered in ("false", "no", "0"):
        return False
    msg = f"expected true or false, got {value!r}"
    raise argparse.ArgumentTypeError(msg)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="campvue",
        description="Fetch and normalize campground data from the Recreation Information Database",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    activities_parser = subparsers.add_parser("activities", help="List RIDB activities")
    _add_paging(activities_parser, ACTIVITIES_MAX_PAGES)

    activity_parser = subparsers.add_parser("activity", help="One RIDB activity")
    activity_parser.add_argument("activity_id", help="RIDB ActivityID")
    activity_parser.add_argument(
        "--include-raw",
        action="store_true",
        help="Also print the raw RIDB record",
    )

    facility_activities_parser = subparsers.add_parser(
        "facility-activities", help="Every activity offered at a facility"
    )
    facility_activities_parser.add_argument("facility_id", help="RIDB FacilityID")
    facility_activities_parser.add_argument(
        "--limit",
        type=int,
        default=ridb.MAX_PAGE_SIZE,
        help=f"Page size (default: {ridb.MAX_PAGE_SIZE})",
    )
    facility_activities_parser.add_argument(
        "--offset", type=int, default=0, help="Start record (default: 0)"
    )
    facility_activities_parser.add_argument(
        "--max-pages",
        type=int,
        default=ACTIVITIES_MAX_PAGES,
        help=f"Page cap (default: {ACTIVITIES_MAX_PAGES})",
    )
    facility_activities_parser.add_argument(
        "--take",
        type=int,
        default=0,
        help="Return at most N activities; 0 returns all (default: 0)",
    )

    attributes_parser = subparsers.add_parser(
        "attributes", help="Classified attributes of a campsite"
    )
    attributes_parser.add_argument("campsite_id", help="RIDB CampsiteID")
    attributes_parser.add_argument("--query", default=None, help="Attribute name filter")
    attributes_parser.add_argument(
        "--include-raw",
        action="store_true",
        help="Also print the raw name/value pairs",
    )
    _add_paging(attributes_parser, ATTRIBUTES_MAX_PAGES)

    campsites_parser = subparsers.add_parser("campsites", help="Campsites of a facility")
    campsites_parser.add_argument("facility_id", help="RIDB FacilityID")
    campsites_parser.add_argument("--query", default=None, help="Site filter (substring match)")
    campsites_parser.add_argument(
        "--include-raw",
        action="store_true",
        help="Also print the raw RIDB records",
    )
    _add_paging(campsites_parser, CAMPSITES_MAX_PAGES)

    campsite_parser = subparsers.add_parser("campsite", help="One campsite")
    campsite_parser.add_argument("campsite_id", help="RIDB CampsiteID")

    facility_parser = subparsers.add_parser("facility", help="One facility (campground)")
    facility_parser.add_argument("facility_id", help="RIDB FacilityID")

    lengths_parser = subparsers.add_parser(
        "vehicle-lengths", help="Max vehicle length per campsite of a facility"
    )
    lengths_parser.add_argument("facility_id", help="RIDB FacilityID")
    lengths_parser.add_argument(
        "--reservable",
        type=_tristate,
        default=None,
        help="Only count reservable (true) or first-come (false) sites",
    )

    return parser


# =============================================================================
# Output
# =============================================================================


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, list):
        return [_jsonable(v) for v in value]
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    return value


def _print_json(data: Any) -> None:
    print(json.dumps(_jsonable(data), indent=2))


def _print_error(message: str, details: Any = None) -> None:
    print(json.dumps({"error": message, "details": details}), file=sys.stderr)


# =============================================================================
# Commands
# =============================================================================


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"RIDB: {settings.ridb_base_url}")
    print(f"API key: {'set' if settings.ridb_api_key else 'missing'}")
    return EXIT_OK


def cmd_activities(args: argparse.Namespace) -> int:
    """Handle the 'activities' command."""
    if args.all:
        activities = ridb.fetch_all_activities(max_pages=args.max_pages)
        _print_json({"activities": normalize_activities(activities), "count": len(activities)})
        return EXIT_OK

    page = ridb.fetch_activities_page(limit=args.limit, offset=args.offset)
    _print_json(
        {
            "activities": normalize_activities(page.items),
            "count": page.returned_count,
            "total_count": page.total_count,
        }
    )
    return EXIT_OK


def cmd_activity(args: argparse.Namespace) -> int:
    """Handle the 'activity' command."""
    activity = ridb.fetch_activity(args.activity_id)
    result: dict[str, Any] = {"normalized": normalize_activity(activity)}
    if args.include_raw:
        result["raw"] = activity.model_dump(by_alias=True)
    _print_json(result)
    return EXIT_OK


def cmd_facility_activities(args: argparse.Namespace) -> int:
    """Handle the 'facility-activities' command."""
    take = require_int("take", args.take, 0)
    activities = ridb.fetch_all_facility_activities(
        args.facility_id,
        max_pages=args.max_pages,
        start_offset=args.offset,
        page_size=args.limit,
    )
    normalized = normalize_activities(activities)
    if take:
        normalized = normalized[:take]
    _print_json(
        {"facility_id": args.facility_id, "activities": normalized, "count": len(normalized)}
    )
    return EXIT_OK


def cmd_attributes(args: argparse.Namespace) -> int:
    """Handle the 'attributes' command."""
    if args.all:
        attributes = ridb.fetch_all_attributes(
            args.campsite_id, query=args.query, max_pages=args.max_pages
        )
    else:
        attributes = ridb.fetch_attributes_page(
            args.campsite_id, limit=args.limit, offset=args.offset, query=args.query
        ).items

    result: dict[str, Any] = {
        "campsite_id": args.campsite_id,
        "attributes": normalize_attributes(attributes),
    }
    if args.include_raw:
        result["raw"] = [a.model_dump() for a in attributes]
    _print_json(result)
    return EXIT_OK


def cmd_campsites(args: argparse.Namespace) -> int:
    """Handle the 'campsites' command."""
    if args.all:
        campsites = ridb.fetch_all_campsites(
            args.facility_id, query=args.query, max_pages=args.max_pages
        )
    else:
        campsites = ridb.fetch_campsites_page(
            args.facility_id, limit=args.limit, offset=args.offset, query=args.query
        ).items

    result: dict[str, Any] = {
        "facility_id": args.facility_id,
        "campsites": normalize_campsites(campsites),
    }
    if args.include_raw:
        result["raw"] = [c.model_dump(mode="json", by_alias=True) for c in campsites]
    _print_json(result)
    return EXIT_OK


def cmd_campsite(args: argparse.Namespace) -> int:
    """Handle the 'campsite' command."""
    _print_json(normalize_campsite(ridb.fetch_campsite(args.campsite_id)))
    return EXIT_OK


def cmd_facility(args: argparse.Namespace) -> int:
    """Handle the 'facility' command."""
    _print_json(normalize_facility(ridb.fetch_facility(args.facility_id)))
    return EXIT_OK


def cmd_vehicle_lengths(args: argparse.Namespace) -> int:
    """Handle the 'vehicle-lengths' command: run the Prefect flow."""
    _print_json(vehicle_lengths(args.facility_id, reservable=args.reservable))
    return EXIT_OK


def _configure_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else get_settings().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    _configure_logging(args.debug)

    commands = {
        "info": cmd_info,
        "activities": cmd_activities,
        "activity": cmd_activity,
        "facility-activities": cmd_facility_activities,
        "attributes": cmd_attributes,
        "campsites": cmd_campsites,
        "campsite": cmd_campsite,
        "facility": cmd_facility,
        "vehicle-lengths": cmd_vehicle_lengths,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return EXIT_ERROR

    try:
        return handler(args)
    except ridb.InvalidParameter as e:
        _print_error(str(e), e.to_dict())
        return EXIT_INVALID
    except ridb.RIDBError as e:
        logger.error("%s failed: %s", args.command, e)
        _print_error(str(e), e.to_dict())
        return EXIT_ERROR
    except ConfigurationError as e:
        logger.error("%s", e)
        _print_error(str(e))
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
