"""Command line entrypoint."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Sequence, TextIO

from nixsearch.config import NixSearchSettings, get_settings
from nixsearch.domain.models import PackageRecord, SearchResult
from nixsearch.logging import configure_logging, logger
from nixsearch.services.exceptions import NixSearchError
from nixsearch.services.search import search


def build_argument_parser(settings: NixSearchSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nixsearch",
        description="Search packages on search.nixos.org",
    )
    parser.add_argument(
        "query",
        nargs="+",
        metavar="QUERY",
        help="Search terms, joined with spaces",
    )
    parser.add_argument(
        "--channel",
        default=settings.default_channel,
        help=f"Channel to search, e.g. 'unstable' or '24.05' (default: {settings.default_channel})",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as a JSON array",
    )
    return parser


def format_package(package: PackageRecord) -> str:
    lines = [f"{package.attr_name} ({package.version})"]
    if package.description:
        lines.append(f"  {package.description.strip()}")
    for url in package.homepage:
        lines.append(f"  {url}")
    return "\n".join(lines)


def print_result(result: SearchResult, *, as_json: bool, out: TextIO) -> None:
    if as_json:
        payload = [package.model_dump(mode="json") for package in result.packages]
        json.dump(payload, out, indent=2)
        out.write("\n")
        return
    if not result.packages:
        out.write(
            f"no packages found for '{result.request.query}' "
            f"in channel '{result.request.channel}'\n"
        )
        return
    out.write("\n\n".join(format_package(package) for package in result.packages))
    out.write("\n")


def main(argv: Sequence[str] | None = None) -> int:
    settings = get_settings()
    configure_logging(logging.getLevelName(settings.log_level))
    parser = build_argument_parser(settings)
    args = parser.parse_args(argv)
    if not args.channel:
        parser.error("--channel must not be empty")

    query = " ".join(args.query)
    try:
        result = asyncio.run(search(args.channel, query, settings=settings))
    except NixSearchError as exc:
        logger.error("search_failed", channel=args.channel, query=query, error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print_result(result, as_json=args.json, out=sys.stdout)
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
