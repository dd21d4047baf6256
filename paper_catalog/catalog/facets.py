"""Facet dimensions and single-select facet sets for the papers list."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FacetDimension(str, Enum):
    """Filterable dimensions of the catalog, in serialization order."""

    CLASS = "class"
    SUBJECT = "subject"
    BOARD = "board"
    YEAR = "year"
    EXAM_TYPE = "examType"


# Fixed order used for query parameters and QueryState.facets
DIMENSION_ORDER: tuple[FacetDimension, ...] = tuple(FacetDimension)


@dataclass(frozen=True)
class FacetSet:
    """
    Selected values for one facet dimension.

    Selection is single-select: picking a new value replaces the current one,
    picking the selected value clears it. The values are still kept as a tuple
    so query serialization does not change if multi-select is ever enabled.
    An empty set means "no filter" (the synthetic "All" option).
    """

    dimension: FacetDimension
    values: tuple[str, ...] = ()

    def toggle(self, value: str) -> FacetSet:
        if self.contains(value):
            return self.clear()
        return FacetSet(self.dimension, (value,))

    def clear(self) -> FacetSet:
        return FacetSet(self.dimension)

    def contains(self, value: str) -> bool:
        return value in self.values

    def is_all(self) -> bool:
        """True when no value is selected, i.e. the "All" checkbox is checked."""
        return not self.values


def empty_facets() -> tuple[FacetSet, ...]:
    """One empty FacetSet per dimension, in DIMENSION_ORDER."""
    return tuple(FacetSet(dimension) for dimension in DIMENSION_ORDER)
