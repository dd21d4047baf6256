#!/usr/bin/env python3
"""Browse the papers catalog from the terminal (smoke tool for the list controller).

Examples:
    python scripts/browse_papers.py --class 10 --subject Mathematics --sort "Year (Newest)"
    API_BASE_URL=https://api.example.com/api API_TOKEN=... python scripts/browse_papers.py --search sample --page 2
"""

import argparse
import asyncio
import os
import sys

# Add package to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from paper_catalog.catalog.facets import DIMENSION_ORDER, FacetDimension  # noqa: E402
from paper_catalog.catalog.metadata_provider import MetadataProvider  # noqa: E402
from paper_catalog.catalog.papers_client import PapersClient  # noqa: E402
from paper_catalog.catalog.query_builder import build  # noqa: E402
from paper_catalog.catalog.query_state import (  # noqa: E402
    QueryState,
    SetFacet,
    SetPage,
    SetSearch,
    SetSort,
    reduce_actions,
)
from paper_catalog.catalog.results_controller import ResultsController, ResultsStatus  # noqa: E402
from paper_catalog.catalog.sort_registry import sort_registry  # noqa: E402
from paper_catalog.core.config import settings  # noqa: E402
from paper_catalog.core.logging import setup_logging  # noqa: E402

# Colors for output
RED = "\033[0;31m"
GREEN = "\033[0;32m"
YELLOW = "\033[1;33m"
NC = "\033[0m"  # No Color

FACET_FLAGS = {
    FacetDimension.CLASS: "--class",
    FacetDimension.SUBJECT: "--subject",
    FacetDimension.BOARD: "--board",
    FacetDimension.YEAR: "--year",
    FacetDimension.EXAM_TYPE: "--exam-type",
}


def positive_int(value: str) -> int:
    page = int(value)
    if page < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {page}")
    return page


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="List papers through the catalog query controller.")
    for dimension in DIMENSION_ORDER:
        parser.add_argument(FACET_FLAGS[dimension], dest=dimension.name.lower(), default=None)
    parser.add_argument("--search", default="")
    parser.add_argument("--sort", default="Default", help=f"One of: {', '.join(sort_registry.labels())}")
    parser.add_argument("--page", type=positive_int, default=1)
    parser.add_argument("--base-url", default=None, help="Overrides API_BASE_URL")
    parser.add_argument("--token", default=None, help="Bearer token, overrides API_TOKEN")
    parser.add_argument("--no-metadata", action="store_true", help="Skip loading facet options")
    parser.add_argument("--log-level", default=None)
    return parser.parse_args(argv)


def state_from_args(args: argparse.Namespace) -> QueryState:
    actions = []
    for dimension in DIMENSION_ORDER:
        value = getattr(args, dimension.name.lower())
        if value:
            actions.append(SetFacet(dimension, value))
    actions.append(SetSearch(args.search))
    actions.append(SetSort(args.sort))
    actions.append(SetPage(args.page))
    return reduce_actions(QueryState.initial(), *actions)


def print_options(options: dict) -> None:
    for dimension in DIMENSION_ORDER:
        rendered = ", ".join(f"{o.name} ({o.count})" for o in options.get(dimension, []))
        print(f"  {dimension.value}: {rendered or '-'}")


async def run(args: argparse.Namespace) -> int:
    state = state_from_args(args)
    descriptor = build(state)

    print(f"{GREEN}=== Papers ==={NC}")
    print(f"Request: GET {descriptor.url(args.base_url or settings.API_BASE_URL)}")
    print(f"Sort: {sort_registry.label_for(state.sort_key)}")
    print()

    async with PapersClient(base_url=args.base_url, token=args.token) as client:
        if not args.no_metadata:
            provider = MetadataProvider(client)
            options = await provider.fetch_once()
            if provider.last_error:
                print(f"{YELLOW}⚠ Facet options unavailable: {provider.last_error}{NC}")
            else:
                print("Facet options:")
                print_options(options)
            print()

        controller = ResultsController(client)
        controller.dispatch(state)
        snapshot = await controller.settle()

    if snapshot.status is ResultsStatus.ERROR:
        print(f"{RED}✗ Error: {snapshot.error}{NC}")
        return 1

    current = snapshot.state or state
    print(f"Showing {snapshot.total} papers, page {current.page} of {snapshot.total_pages}")
    if not snapshot.items:
        print("No papers found")
    for item in snapshot.items:
        title = item.title or "(untitled)"
        print(f"  - Class {item.paper_class} • {item.subject} | {item.board} {item.year} {item.exam_type or ''} | {title}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
