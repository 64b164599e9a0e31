"""
Command-line interface: build a weekly schedule from saved sections and export it.
"""
from __future__ import annotations

import argparse
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import DEFAULT_END_HOUR, DEFAULT_START_HOUR, GridConfig
from .export import DEFAULT_TZ, export
from .ingest import load_sections
from .session import ScheduleSession


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedule-synth",
        description=(
            "Build a conflict-checked weekly timetable from selected course sections "
            "and export it to ICS / CSV / JSON."
        ),
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "sections",
        metavar="SECTIONS_JSON",
        help='JSON file with the selected sections (a list, or {"sections": [...]} as saved by the course search page).',
    )
    parser.add_argument(
        "-o",
        "--output",
        default="schedule",
        help="Output path (without extension). Default: schedule",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["ics", "csv", "json"],
        default="json",
        help="Export format. Default: json",
    )
    parser.add_argument(
        "--term-start",
        metavar="YYYY-MM-DD",
        help="(ics) First day of classes. Required for ICS export.",
    )
    parser.add_argument(
        "--term-end",
        metavar="YYYY-MM-DD",
        help="(ics) Last day of classes; events repeat weekly until this date.",
    )
    parser.add_argument(
        "--timezone",
        default=DEFAULT_TZ,
        help=f"(ics) Timezone for event times. Default: {DEFAULT_TZ}",
    )
    parser.add_argument(
        "--start-hour",
        type=int,
        default=DEFAULT_START_HOUR,
        help=f"First hour shown on the grid. Default: {DEFAULT_START_HOUR}",
    )
    parser.add_argument(
        "--end-hour",
        type=int,
        default=DEFAULT_END_HOUR,
        help=f"Hour at which the grid ends. Default: {DEFAULT_END_HOUR}",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Only report conflicts (exit status 2 if any), do not export.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output.")
    return parser


def _check_date(value: Optional[str], flag: str) -> None:
    if value is None:
        return
    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"{flag} must be YYYY-MM-DD, got {value!r}") from None


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    path = Path(args.sections)
    if not path.exists():
        print(f"Error: sections file not found: {path}", file=sys.stderr)
        return 1

    try:
        config = GridConfig(start_hour=args.start_hour, end_hour=args.end_hour)
        sections = load_sections(path)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    view = ScheduleSession(config).render(sections)

    if args.check:
        if not view.conflicts:
            print(f"No conflicts among {len(sections)} section(s).")
            return 0
        print(view.banner)
        for c in view.conflicts:
            print(f"  {c.section_ids[0]} ({c.course_labels[0]}) <-> {c.section_ids[1]} ({c.course_labels[1]})")
        return 2

    if view.banner:
        print(f"Warning: {view.banner}", file=sys.stderr)

    ics_options = {}
    if args.format == "ics":
        if not args.term_start:
            print("Error: ICS export requires --term-start (YYYY-MM-DD).", file=sys.stderr)
            return 1
        ics_options = {
            "term_start": args.term_start,
            "term_end": args.term_end,
            "tz_name": args.timezone,
        }

    ext = {"ics": ".ics", "csv": ".csv", "json": ".json"}[args.format]
    out_path = Path(args.output).with_suffix(ext) if Path(args.output).suffix else Path(args.output + ext)
    try:
        _check_date(args.term_start, "--term-start")
        _check_date(args.term_end, "--term-end")
        export(view, out_path, args.format, **ics_options)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Exported {len(view.blocks)} block(s) from {len(sections)} section(s) to {out_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
