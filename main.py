"""CLI entry point for the jobs market scan."""

import argparse
import asyncio
import json
import logging
import sys

import httpx

from src.cache.store import FingerprintCache
from src.core.config import Settings
from src.core.errors import JobScanError
from src.pipeline.orchestrator import (
    SearchService,
    export_results_json,
    is_first_page_cached,
    run_all_queries,
)
from src.pipeline.query import JobQuery
from src.platforms.reed.client import ReedClient


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Jobs market scan - cached Reed searches filtered by text and recency",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- search subcommand (default) ---
    search_parser = subparsers.add_parser("search", help="Run configured queries")
    _add_common(search_parser)
    search_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show configured queries and cache state without network calls",
    )
    search_parser.add_argument(
        "--refresh",
        action="store_true",
        help="Ignore cached responses and fetch everything again",
    )
    search_parser.add_argument(
        "--links",
        action="store_true",
        help="Print every matching job link with its age",
    )
    search_parser.add_argument(
        "--export",
        choices=["json"],
        help="Export results to format (json)",
    )

    # --- details subcommand ---
    details_parser = subparsers.add_parser("details", help="Show one job's detail record")
    _add_common(details_parser)
    details_parser.add_argument("job_id", help="Reed job id")
    details_parser.add_argument(
        "--refresh",
        action="store_true",
        help="Ignore the cached record and fetch it again",
    )

    # --- cache-clear subcommand ---
    clear_parser = subparsers.add_parser("cache-clear", help="Delete every cached response")
    _add_common(clear_parser)

    # --- backward compat: top-level flags for search ---
    parser.add_argument("--config", default="config/settings.yaml", help=argparse.SUPPRESS)
    parser.add_argument("--dry-run", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument("--refresh", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument("--links", action="store_true", help=argparse.SUPPRESS)
    parser.add_argument("--export", choices=["json"], help=argparse.SUPPRESS)
    parser.add_argument("--verbose", "-v", action="store_true", help=argparse.SUPPRESS)

    args = parser.parse_args(argv)

    # Default to search when no subcommand given
    if args.command is None:
        args.command = "search"

    return args


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def dry_run(settings: Settings) -> None:
    """Print what would happen without touching the network."""
    cache = FingerprintCache(settings.cache.path)

    print(f"[DRY RUN] {len(settings.queries)} queries configured, {len(cache)} cached responses")

    for config in settings.queries:
        query = JobQuery.from_config(config)
        criteria = query.criteria()
        cached = is_first_page_cached(cache, query, settings.pagination)
        status = "cached" if cached else "not cached"
        print(f"[DRY RUN] '{query.keywords}': first page {status}")
        print(f"  Filters: {query.filters.model_dump(exclude_none=True)}")
        print(f"  Include: {sorted(criteria.match_include)}")
        print(f"  Exclude: {sorted(criteria.match_exclude)}")
        print(f"  Max age: {criteria.max_age_days} days")


async def run(settings: Settings, args: argparse.Namespace) -> None:
    """Run every configured query against the Reed API."""
    cache = FingerprintCache(settings.cache.path)

    async with ReedClient(settings.api, settings.api.api_key()) as client:
        service = SearchService(
            client,
            cache,
            settings.pagination,
            concurrency=settings.api.concurrency,
            refresh=args.refresh,
        )
        reports = await run_all_queries(settings, service)

    total_raw = sum(r.raw_count for r in reports)
    total_matched = sum(r.matched_count for r in reports)
    print(f"\nScan complete: {total_raw} raw, {total_matched} matching jobs.")

    for r in reports:
        print(f"  '{r.keywords}': {r.raw_count} raw, {r.matched_count} matching")
        if args.links:
            for line in r.result.links():
                print(f"    {line}")

    if args.export == "json" and reports:
        print(f"\n{export_results_json(reports)}")


async def show_details(settings: Settings, job_id: str, refresh: bool) -> None:
    cache = FingerprintCache(settings.cache.path)
    async with ReedClient(settings.api, settings.api.api_key()) as client:
        service = SearchService(client, cache, settings.pagination, refresh=refresh)
        detail = await service.details(job_id)
    print(json.dumps(detail.model_dump(by_alias=True), indent=2, default=str))


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = Settings.from_yaml(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "cache-clear":
            removed = FingerprintCache(settings.cache.path).clear()
            print(f"Removed {removed} cached responses.")
        elif args.command == "details":
            asyncio.run(show_details(settings, args.job_id, args.refresh))
        elif args.dry_run:
            dry_run(settings)
        else:
            asyncio.run(run(settings, args))
    except (JobScanError, httpx.HTTPError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
