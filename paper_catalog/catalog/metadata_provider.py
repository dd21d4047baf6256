"""Facet options (values and counts) for the papers filter panel."""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from paper_catalog.catalog.facets import FacetDimension
from paper_catalog.catalog.query_state import coerce_dimension
from paper_catalog.core.app_exceptions import CatalogError
from paper_catalog.schemas.catalog import CatalogMetadata, FacetOption, empty_options

logger = logging.getLogger(__name__)

FacetOptionsByDimension = dict[FacetDimension, list[FacetOption]]


class MetadataFetcher(Protocol):
    async def fetch_metadata(self) -> CatalogMetadata: ...


class MetadataProvider:
    """
    Loads facet options once per provider lifetime.

    Concurrent callers share one request. A failed load is logged, exposed as
    ``last_error`` and answered with empty option lists; it is not cached, so
    the next call tries again. Filters keep working on raw values either way.
    """

    def __init__(self, client: MetadataFetcher) -> None:
        self._client = client
        self._options: FacetOptionsByDimension | None = None
        self._task: asyncio.Task | None = None
        self._generation = 0
        self.last_error: str | None = None
        self.fetch_count = 0

    @property
    def loaded(self) -> bool:
        return self._options is not None

    async def fetch_once(self) -> FacetOptionsByDimension:
        """Return cached options, fetching them on first use."""
        if self._options is not None:
            return self._options
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._load(self._generation), name="papers-metadata")
        return await asyncio.shield(self._task)

    def invalidate(self) -> None:
        """Forget cached options; the next fetch_once() hits the network again."""
        self._options = None
        self._task = None
        self._generation += 1

    def options(self, dimension: FacetDimension | str) -> list[FacetOption]:
        """Cached options for one dimension (empty until loaded)."""
        if self._options is None:
            return []
        return list(self._options.get(coerce_dimension(dimension), []))

    def count_for(self, dimension: FacetDimension | str, value: str) -> int | None:
        """Count shown next to an option, or None when unknown."""
        for option in self.options(dimension):
            if option.value == value:
                return option.count
        return None

    async def _load(self, generation: int) -> FacetOptionsByDimension:
        self.fetch_count += 1
        try:
            metadata = await self._client.fetch_metadata()
        except CatalogError as e:
            logger.warning("Error fetching metadata: %s", e.message)
            self.last_error = e.message
            return empty_options()
        except Exception as e:
            logger.error("Unexpected error fetching metadata: %s", e, exc_info=True)
            self.last_error = f"Unexpected error: {e}"
            return empty_options()

        options = metadata.options_by_dimension()
        if generation != self._generation:
            # invalidated while loading; hand the result to waiters without caching it
            return options
        self._options = options
        self.last_error = None
        logger.debug(
            "Loaded facet options: %s",
            {dimension.value: len(opts) for dimension, opts in self._options.items()},
        )
        return self._options
