"""
Canonical query state for the papers list and the single reducer that changes it.

Every UI action (facet toggle, search submit, sort change, page change) goes
through ``apply_action`` and yields a new immutable QueryState. Any change to
the result-defining criteria resets ``page`` to 1; page changes touch nothing
else.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Union

from paper_catalog.catalog.facets import DIMENSION_ORDER, FacetDimension, FacetSet, empty_facets
from paper_catalog.catalog.sort_registry import SortRegistry, sort_registry
from paper_catalog.common.pagination import offset_for
from paper_catalog.core.app_exceptions import InvalidArgument
from paper_catalog.core.config import settings


@dataclass(frozen=True)
class QueryState:
    """Everything that defines which page of papers the user wants to see."""

    facets: tuple[FacetSet, ...] = field(default_factory=empty_facets)
    search_term: str = ""
    sort_key: str = field(default_factory=lambda: sort_registry.default_key)
    page: int = 1
    page_size: int = field(default_factory=lambda: settings.PAGE_SIZE)

    def __post_init__(self) -> None:
        if tuple(f.dimension for f in self.facets) != DIMENSION_ORDER:
            raise InvalidArgument(
                "facets must hold exactly one FacetSet per dimension",
                {"dimensions": [f.dimension.value for f in self.facets]},
            )
        if not _is_positive_int(self.page):
            raise InvalidArgument(f"page must be an integer >= 1, got {self.page!r}")
        if not _is_positive_int(self.page_size):
            raise InvalidArgument(f"page_size must be an integer >= 1, got {self.page_size!r}")
        if self.search_term != self.search_term.strip():
            raise InvalidArgument("search_term must be stored trimmed")

    @classmethod
    def initial(cls, page_size: int | None = None) -> QueryState:
        """Default state: no filters, no search, default sort, first page."""
        return cls(page_size=page_size if page_size is not None else settings.PAGE_SIZE)

    def facet(self, dimension: FacetDimension | str) -> FacetSet:
        dim = coerce_dimension(dimension)
        return self.facets[DIMENSION_ORDER.index(dim)]

    def with_facet(self, facet_set: FacetSet) -> QueryState:
        facets = tuple(facet_set if f.dimension == facet_set.dimension else f for f in self.facets)
        return replace(self, facets=facets)

    @property
    def active_filter_count(self) -> int:
        """Number of selected values across all dimensions."""
        return sum(len(f.values) for f in self.facets)

    @property
    def has_active_filters(self) -> bool:
        return self.active_filter_count > 0

    @property
    def offset(self) -> int:
        return offset_for(self.page, self.page_size)

    def to_dict(self) -> dict[str, Any]:
        """Serializable form (stable key order), used for logging and the CLI."""
        return {
            "facets": {f.dimension.value: list(f.values) for f in self.facets},
            "search_term": self.search_term,
            "sort_key": self.sort_key,
            "page": self.page,
            "page_size": self.page_size,
        }


# Actions


@dataclass(frozen=True)
class SetFacet:
    """Toggle ``value`` in one dimension (single-select)."""

    dimension: FacetDimension | str
    value: str


@dataclass(frozen=True)
class ClearFacet:
    """Select the "All" option of one dimension."""

    dimension: FacetDimension | str


@dataclass(frozen=True)
class ClearFilters:
    """Clear every dimension."""


@dataclass(frozen=True)
class SetSearch:
    term: str


@dataclass(frozen=True)
class SetSort:
    """Sort by a canonical key or a dropdown label; re-picking the current sort reverts to the default."""

    key: str


@dataclass(frozen=True)
class SetPage:
    page: int


Action = Union[SetFacet, ClearFacet, ClearFilters, SetSearch, SetSort, SetPage]


def coerce_dimension(dimension: FacetDimension | str) -> FacetDimension:
    """Accept a FacetDimension or its wire name ("class", "examType", ...)."""
    if isinstance(dimension, FacetDimension):
        return dimension
    try:
        return FacetDimension(dimension)
    except ValueError:
        raise InvalidArgument(
            f"Unknown facet dimension {dimension!r}",
            {"allowed": [d.value for d in DIMENSION_ORDER]},
        ) from None


def apply_action(
    state: QueryState,
    action: Action,
    registry: SortRegistry = sort_registry,
) -> QueryState:
    """
    Reduce ``action`` into a new QueryState.

    Criteria actions (facet, search, sort, clear) force ``page`` back to 1.
    ``SetPage`` only changes ``page``; pages past the end are accepted here
    because the total is unknown until the results come back.

    Raises:
        InvalidArgument: page < 1, non-integer page, unknown dimension or action.
    """
    if isinstance(action, SetPage):
        if not _is_positive_int(action.page):
            raise InvalidArgument(f"page must be an integer >= 1, got {action.page!r}")
        return replace(state, page=action.page)

    if isinstance(action, SetFacet):
        dimension = coerce_dimension(action.dimension)
        toggled = state.facet(dimension).toggle(str(action.value))
        new_state = state.with_facet(toggled)
    elif isinstance(action, ClearFacet):
        dimension = coerce_dimension(action.dimension)
        new_state = state.with_facet(state.facet(dimension).clear())
    elif isinstance(action, ClearFilters):
        new_state = replace(state, facets=empty_facets())
    elif isinstance(action, SetSearch):
        new_state = replace(state, search_term=(action.term or "").strip())
    elif isinstance(action, SetSort):
        sort_key = registry.resolve(action.key)
        if sort_key == state.sort_key:
            sort_key = registry.default_key
        new_state = replace(state, sort_key=sort_key)
    else:
        raise InvalidArgument(f"Unsupported action {type(action).__name__}")

    return replace(new_state, page=1)


def reduce_actions(state: QueryState, *actions: Action) -> QueryState:
    """Apply several actions in order."""
    for action in actions:
        state = apply_action(state, action)
    return state


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1
