"""
Fetch lifecycle for the papers list.

The controller turns QueryStates into list requests and publishes their
results. Only the most recently dispatched state is "current": every fetch is
tagged with a monotonically increasing token and a response whose token is no
longer current is dropped, so a slow request for an old search keystroke can
never overwrite the results of a newer one. Superseded requests are also
cancelled when CANCEL_SUPERSEDED_REQUESTS is on; that only saves bandwidth,
the token check alone decides what is published.

Status machine: IDLE -> LOADING -> SUCCESS | ERROR, and any status goes back
to LOADING when a new state is dispatched.

On ERROR the last successful items/total are kept (KEEP_RESULTS_ON_ERROR,
default on) so the UI can keep showing them under an error banner; with the
flag off they are cleared.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Protocol

from paper_catalog.catalog.facets import FacetDimension
from paper_catalog.catalog.query_builder import RequestDescriptor, build
from paper_catalog.catalog.query_state import Action, QueryState, SetPage, apply_action
from paper_catalog.catalog.sort_registry import SortRegistry, sort_registry
from paper_catalog.common.pagination import clamp_page, total_pages
from paper_catalog.core.app_exceptions import CatalogError, InvalidArgument
from paper_catalog.core.config import settings
from paper_catalog.schemas.catalog import FacetOption, PaperItem, PaperListData

logger = logging.getLogger(__name__)


class ResultsStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class ListFetcher(Protocol):
    """What the controller needs from the transport (PapersClient satisfies it)."""

    async def fetch_list(self, descriptor: RequestDescriptor) -> PaperListData: ...


SuccessCallback = Callable[[list[PaperItem], int], Any]
ErrorCallback = Callable[[str], Any]
StatusCallback = Callable[[ResultsStatus], Any]


@dataclass(frozen=True)
class ResultsSnapshot:
    """Point-in-time view of the controller for rendering."""

    status: ResultsStatus
    token: int
    state: QueryState | None
    items: tuple[PaperItem, ...] = ()
    total: int = 0
    total_pages: int = 1
    facet_counts: dict[FacetDimension, list[FacetOption]] = field(default_factory=dict)
    error: str | None = None


class ResultsController:
    """Dispatches QueryStates to the list endpoint and publishes the accepted result."""

    def __init__(
        self,
        client: ListFetcher,
        on_success: SuccessCallback | None = None,
        on_error: ErrorCallback | None = None,
        on_state_change: StatusCallback | None = None,
        list_path: str | None = None,
        registry: SortRegistry = sort_registry,
        cancel_superseded: bool | None = None,
        keep_results_on_error: bool | None = None,
        page_size: int | None = None,
    ) -> None:
        self._client = client
        self._on_success = on_success
        self._on_error = on_error
        self._on_state_change = on_state_change
        self._list_path = list_path if list_path is not None else settings.PAPERS_LIST_PATH
        self._registry = registry
        self._cancel_superseded = (
            settings.CANCEL_SUPERSEDED_REQUESTS if cancel_superseded is None else cancel_superseded
        )
        self._keep_results_on_error = (
            settings.KEEP_RESULTS_ON_ERROR if keep_results_on_error is None else keep_results_on_error
        )
        self._page_size = page_size if page_size is not None else settings.PAGE_SIZE

        self._token = 0
        self._status = ResultsStatus.IDLE
        self._current_state: QueryState | None = None
        self._task: asyncio.Task | None = None
        self._pending: set[asyncio.Task] = set()

        self._items: tuple[PaperItem, ...] = ()
        self._total = 0
        self._facet_counts: dict[FacetDimension, list[FacetOption]] = {}
        self._error: str | None = None
        self.fetch_count = 0

    # Read side

    @property
    def status(self) -> ResultsStatus:
        return self._status

    @property
    def query_state(self) -> QueryState:
        """Latest dispatched state, or the initial state before any dispatch."""
        if self._current_state is None:
            return QueryState.initial(self._page_size)
        return self._current_state

    @property
    def items(self) -> list[PaperItem]:
        return list(self._items)

    @property
    def total(self) -> int:
        return self._total

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def pending_tasks(self) -> frozenset[asyncio.Task]:
        return frozenset(self._pending)

    def snapshot(self) -> ResultsSnapshot:
        return ResultsSnapshot(
            status=self._status,
            token=self._token,
            state=self._current_state,
            items=self._items,
            total=self._total,
            total_pages=total_pages(self._total, self.query_state.page_size),
            facet_counts=dict(self._facet_counts),
            error=self._error,
        )

    # Write side

    def dispatch(self, state: QueryState) -> asyncio.Task | None:
        """
        Fetch results for ``state`` unless that exact state is already loading
        or already loaded.

        Must be called from a running event loop.

        Returns:
            The fetch task, or None when the dispatch was a no-op.

        Raises:
            InvalidArgument: if ``state.page_size`` differs from the session's page size.
        """
        if state.page_size != self._page_size:
            raise InvalidArgument(
                f"page_size is fixed at {self._page_size} for this session, got {state.page_size}"
            )
        if state == self._current_state and self._status in (ResultsStatus.LOADING, ResultsStatus.SUCCESS):
            logger.debug("Skipping dispatch of unchanged query state (status=%s)", self._status.value)
            return None
        return self._start(state)

    def apply(self, action: Action) -> asyncio.Task | None:
        """Reduce ``action`` into the current query state and dispatch the result."""
        return self.dispatch(apply_action(self.query_state, action, registry=self._registry))

    def refresh(self) -> asyncio.Task | None:
        """
        Re-fetch the current state even if it is unchanged.

        Used after a paper is created or edited, and as an explicit retry.
        """
        if self._current_state is None:
            return self.dispatch(self.query_state)
        return self._start(self._current_state)

    async def settle(self) -> ResultsSnapshot:
        """Wait until no fetch for the current state is in flight."""
        while self._task is not None and not self._task.done():
            await asyncio.wait({self._task})
        return self.snapshot()

    async def aclose(self) -> None:
        """Cancel every in-flight fetch."""
        pending = list(self._pending)
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    def _start(self, state: QueryState) -> asyncio.Task:
        self._token += 1
        token = self._token
        descriptor = build(state, path=self._list_path, registry=self._registry)

        previous = self._task
        if (
            self._cancel_superseded
            and previous is not None
            and not previous.done()
            and previous is not asyncio.current_task()
        ):
            logger.debug("Cancelling superseded papers fetch (token=%d)", token - 1)
            previous.cancel()

        self._current_state = state
        self._set_status(ResultsStatus.LOADING)
        self.fetch_count += 1
        logger.debug("Fetching papers (token=%d): %s", token, state.to_dict())

        task = asyncio.create_task(self._run(token, state, descriptor), name=f"papers-fetch-{token}")
        self._task = task
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _run(self, token: int, state: QueryState, descriptor: RequestDescriptor) -> None:
        try:
            data = await self._client.fetch_list(descriptor)
        except asyncio.CancelledError:
            logger.debug("Papers fetch cancelled (token=%d)", token)
            raise
        except CatalogError as e:
            self._complete_error(token, e.message)
            return
        except Exception as e:
            logger.error("Unexpected error fetching papers (token=%d): %s", token, e, exc_info=True)
            self._complete_error(token, f"Unexpected error: {e}")
            return
        self._complete_success(token, state, data)

    def _is_current(self, token: int) -> bool:
        return token == self._token

    def _complete_success(self, token: int, state: QueryState, data: PaperListData) -> None:
        if not self._is_current(token):
            logger.debug("Discarding superseded papers response (token=%d, current=%d)", token, self._token)
            return

        total = data.pagination.total
        last_page = total_pages(total, state.page_size)
        if total > 0 and state.page > last_page:
            logger.info("Page %d is past the last page (%d), loading the last page", state.page, last_page)
            clamped = clamp_page(state.page, total, state.page_size)
            self._start(apply_action(state, SetPage(clamped), registry=self._registry))
            return

        self._items = tuple(data.items)
        self._total = total
        self._facet_counts = data.facet_counts()
        self._error = None
        self._set_status(ResultsStatus.SUCCESS)
        self._notify(self._on_success, list(self._items), total)

    def _complete_error(self, token: int, message: str) -> None:
        if not self._is_current(token):
            logger.debug("Discarding superseded papers failure (token=%d): %s", token, message)
            return

        logger.warning("Error fetching papers: %s", message)
        self._error = message
        if not self._keep_results_on_error:
            self._items = ()
            self._total = 0
            self._facet_counts = {}
        self._set_status(ResultsStatus.ERROR)
        self._notify(self._on_error, message)

    def _set_status(self, status: ResultsStatus) -> None:
        self._status = status
        self._notify(self._on_state_change, status)

    @staticmethod
    def _notify(callback: Callable[..., Any] | None, *args: Any) -> None:
        if callback is None:
            return
        try:
            callback(*args)
        except Exception:
            logger.exception("Results listener raised")
