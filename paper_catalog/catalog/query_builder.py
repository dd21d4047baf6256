"""Query builder for the papers list endpoint."""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import urlencode

from paper_catalog.catalog.facets import FacetDimension
from paper_catalog.catalog.query_state import QueryState
from paper_catalog.catalog.sort_registry import SortRegistry, sort_registry
from paper_catalog.core.config import settings

_INTEGER_RE = re.compile(r"^\s*[+-]?\d+\s*$")


@dataclass(frozen=True)
class RequestDescriptor:
    """Transport-ready description of one list request."""

    path: str
    params: tuple[tuple[str, str], ...]

    def as_dict(self) -> dict[str, str]:
        return dict(self.params)

    def query_string(self) -> str:
        return urlencode(self.params)

    def url(self, base_url: str) -> str:
        """Absolute URL for ``base_url`` (no trailing slash expected)."""
        query = self.query_string()
        return f"{base_url}/{self.path}?{query}" if query else f"{base_url}/{self.path}"


def _normalize_value(dimension: FacetDimension, value: str) -> str:
    # The list endpoint compares years numerically
    if dimension is FacetDimension.YEAR and _INTEGER_RE.match(value):
        return str(int(value))
    return value


def build(
    state: QueryState,
    path: str | None = None,
    registry: SortRegistry = sort_registry,
) -> RequestDescriptor:
    """
    Project a QueryState onto the list endpoint's query parameters.

    Parameter order is fixed: facet dimensions (in FacetDimension order),
    then limit and offset, then sortBy, then search.

    Args:
        state: Query state to serialize.
        path: Endpoint path; defaults to settings.PAPERS_LIST_PATH.
        registry: Sort registry used to resolve the sort key.

    Returns:
        RequestDescriptor with deterministic params.
    """
    params: list[tuple[str, str]] = []

    for facet_set in state.facets:
        if facet_set.is_all():
            continue
        values = [_normalize_value(facet_set.dimension, v) for v in facet_set.values]
        params.append((facet_set.dimension.value, ",".join(values)))

    params.append(("limit", str(state.page_size)))
    params.append(("offset", str(state.offset)))
    params.append(("sortBy", registry.resolve(state.sort_key)))

    if state.search_term:
        params.append(("search", state.search_term))

    return RequestDescriptor(
        path=path if path is not None else settings.PAPERS_LIST_PATH,
        params=tuple(params),
    )
