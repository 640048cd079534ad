#!/usr/bin/env python3
"""
Multi Log Inspector command line.

Searches several CloudWatch Logs log groups at once and prints the merged,
time-ordered matches. Optionally extracts a value from the matches and runs a
second search built from it.

Usage:
    multi-log-inspector --filter-pattern <pattern> [--groups g1,g2] [--region us-east-1]
                        [--start RFC3339] [--end RFC3339] [--extract name=path]
                        [--next-filter expr] [--pretty] [--concurrency N]

Environment:
    LOG_GROUP_NAMES provides comma-separated groups; AWS credentials and region
    come from the usual AWS sources (AWS_PROFILE, AWS_ACCESS_KEY_ID, ...).

Exit codes:
    0 success, 1 runtime failure, 2 usage error, 3 no extractable value
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Iterable, List, Optional, TextIO

from .config import InspectorConfig
from .exceptions import EvaluationError, LogInspectorError, ValidationError
from .handlers import SearchCoordinator, TwoPhaseSearch
from .models import ExtractSpec, LogRecord, format_rfc3339
from .utils import parse_groups_csv, resolve_time_window

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_NOT_FOUND = 3


def build_parser(config: InspectorConfig) -> argparse.ArgumentParser:
    """Build the argument parser with environment-backed defaults."""
    parser = argparse.ArgumentParser(
        prog="multi-log-inspector",
        description="Search multiple CloudWatch Logs log groups and merge the results by time.",
        epilog="Environment: LOG_GROUP_NAMES can provide comma-separated groups; "
               "AWS credentials from default sources.",
    )
    parser.add_argument("--groups", default=config.log_group_names,
                        help="Comma-separated CloudWatch log group names")
    parser.add_argument("--region", default=config.region_name,
                        help="AWS region (optional; falls back to AWS defaults)")
    parser.add_argument("--profile", default=None,
                        help="AWS shared config profile (or set AWS_PROFILE)")
    parser.add_argument("--filter-pattern", default="",
                        help="CloudWatch Logs filter pattern (required)")
    parser.add_argument("--extract", action="append", default=[],
                        help="JMESPath extract in name=path form (single occurrence)")
    parser.add_argument("--next-filter", default="",
                        help="JMESPath to build second filter; requires --extract")
    parser.add_argument("--pretty", action="store_true",
                        help="Pretty-print JSON output")
    parser.add_argument("--start", default="",
                        help="Start time RFC3339 (e.g., 2025-08-30T15:04:05Z)")
    parser.add_argument("--end", default="",
                        help="End time RFC3339 (e.g., 2025-08-31T15:04:05Z)")
    parser.add_argument("--concurrency", type=int, default=config.concurrency,
                        help="Maximum number of log groups searched in parallel")
    parser.add_argument("--debug", action="store_true", default=config.enable_debug_logging,
                        help="Enable debug logging")
    return parser


def configure_logging(debug: bool) -> None:
    """Send library logs to stderr; quiet unless debugging."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    if debug:
        # botocore is extremely chatty at DEBUG
        logging.getLogger("botocore").setLevel(logging.INFO)
        logging.getLogger("urllib3").setLevel(logging.INFO)


def records_to_json(records: Iterable[LogRecord], pretty: bool = False) -> str:
    """Render records as a JSON array using their serialized field names."""
    payload = [r.model_dump(mode="json", by_alias=True) for r in records]
    if pretty:
        return json.dumps(payload, indent=2, ensure_ascii=False)
    return json.dumps(payload, ensure_ascii=False)


def write_text(records: Iterable[LogRecord], out: TextIO) -> None:
    """One line per record: ``<RFC3339> <group>/<stream> <message>``."""
    for r in records:
        out.write(f"{format_rfc3339(r.timestamp, with_millis=False)} {r.log_group}/{r.log_stream} {r.message}\n")


def _window_message(args, start: datetime, end: datetime) -> str:
    if args.start or args.end:
        return f"between {format_rfc3339(start, with_millis=False)} and {format_rfc3339(end, with_millis=False)}."
    return "in the last 24h."


def main(
    argv: Optional[List[str]] = None,
    config: Optional[InspectorConfig] = None,
    coordinator: Optional[SearchCoordinator] = None,
    now: Optional[datetime] = None,
    stdout: Optional[TextIO] = None,
    stderr: Optional[TextIO] = None,
) -> int:
    """Run the command line and return its exit code.

    ``config``, ``coordinator``, ``now`` and the streams are injectable for
    tests; by default they come from the environment and the real clock.
    """
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr
    if config is None:
        try:
            config = InspectorConfig.from_env()
        except ValueError as e:
            # pydantic's ValidationError is a ValueError subclass
            stderr.write(f"invalid configuration: {e}\n")
            return EXIT_USAGE

    parser = build_parser(config)
    args = parser.parse_args(argv)
    configure_logging(args.debug)

    if not args.filter_pattern:
        parser.print_usage(stderr)
        return EXIT_USAGE
    if args.next_filter and not args.extract:
        stderr.write("error: --next-filter requires --extract\n")
        return EXIT_USAGE
    if len(args.extract) > 1:
        stderr.write("error: --extract specified multiple times\n")
        return EXIT_USAGE

    extract = None
    try:
        if args.extract:
            extract = ExtractSpec.parse(args.extract[0])
    except ValidationError as e:
        stderr.write(f"{e.message}\n")
        return EXIT_USAGE

    groups = parse_groups_csv(args.groups)
    if not groups:
        stderr.write("error: no log groups provided (use --groups or LOG_GROUP_NAMES)\n")
        return EXIT_FAILURE

    try:
        start, end = resolve_time_window(args.start, args.end, now or datetime.now(timezone.utc))
    except ValidationError as e:
        stderr.write(f"invalid time window: {e.message}\n")
        return EXIT_USAGE

    if coordinator is None:
        updates = {'concurrency': max(1, args.concurrency)}
        if args.region:
            updates['region_name'] = args.region
        if args.profile:
            updates['profile_name'] = args.profile
        coordinator = SearchCoordinator.from_config(config.model_copy(update=updates))

    workflow = TwoPhaseSearch(coordinator, groups, start, end, concurrency=args.concurrency)
    try:
        result = workflow.run(args.filter_pattern, extract, args.next_filter or None)
    except ValidationError as e:
        stderr.write(f"error: {e}\n")
        return EXIT_USAGE
    except EvaluationError as e:
        stderr.write(f"extract error: {e}\n")
        return EXIT_FAILURE
    except LogInspectorError as e:
        stderr.write(f"search error: {e}\n")
        return EXIT_FAILURE

    if not result.records:
        stdout.write(f"No logs found for the given pattern `{args.filter_pattern}` {_window_message(args, start, end)}\n")
        return EXIT_OK

    if extract is None:
        if args.pretty:
            stdout.write(records_to_json(result.records, pretty=True) + "\n")
        else:
            write_text(result.records, stdout)
        return EXIT_OK

    if not result.found:
        stderr.write("no extractable value found from initial logs\n")
        return EXIT_NOT_FOUND

    if result.next_records is None:
        stdout.write(json.dumps({"value": result.extracted_value}, ensure_ascii=False) + "\n")
        return EXIT_OK

    stdout.write(records_to_json(result.next_records, pretty=args.pretty) + "\n")
    return EXIT_OK


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
