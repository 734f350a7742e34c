"""
Incremental pagination controller.

The Paginator owns a page cursor and a PaginatorState snapshot. A reactor task
watches the cursor and, for every new value, fetches that page from the data
source and merges the result into a fresh snapshot. Every unit of work runs as
its own asyncio task behind a failure boundary that reports to error_event.
"""

import asyncio
from collections.abc import Coroutine
from typing import Any, Generic, TypeVar

from ._logging import describe_error, logger
from .config import PaginatorOptions
from .events import SingleEvent, StateStream
from .exceptions import DataSourceError, PaginatorStateError, handle_fetch_errors
from .lifecycle import ActivityGate
from .pagination import DataSource, PageResult
from .state import PaginatorState

T = TypeVar("T")


class Paginator(Generic[T]):
    """
    Drives page progression over a DataSource.

    Must be created inside a running event loop; the first page starts
    loading right away.

    Usage:
        async with Paginator(MovieSource(repository)) as paginator:
            paginator.state.observe(render)
            paginator.error_event.observe(show_toast)
            paginator.load_next_page()
    """

    def __init__(
        self,
        data_source: DataSource[T],
        options: PaginatorOptions | None = None,
        gate: ActivityGate | None = None,
    ) -> None:
        if not callable(getattr(data_source, "fetch", None)):
            raise TypeError(f"{type(data_source).__name__} does not provide a fetch() method")
        try:
            self._loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise PaginatorStateError(
                "Paginator must be created inside a running event loop", original_error=e
            ) from e

        self.data_source = data_source
        self.options = options or PaginatorOptions()
        self.gate = gate or ActivityGate()

        # Errors caught by the job boundaries, each delivered to one observer
        self.error_event: SingleEvent[Exception] = SingleEvent()
        # The first page is already on its way once the constructor returns
        starts_loading = self.gate.is_active and not self.options.is_beyond_max(
            self.options.default_page
        )
        self._state: StateStream[PaginatorState[T]] = StateStream(
            PaginatorState(current_page=self.options.default_page, is_loading=starts_loading)
        )

        self._cursor = self.options.default_page
        # Last cursor value the reactor acted on
        self._reacted_page: int | None = None
        self._cursor_changed = asyncio.Event()
        # Bumped on every cursor reaction; a fetch result only lands if its token is current
        self._generation = 0
        self._fetch_task: asyncio.Task[None] | None = None
        self._jobs: set[asyncio.Task[None]] = set()
        self._closed = False

        self._launch_job(self._observe_pages(), name="pagerflow-reactor")

    @property
    def state(self) -> StateStream[PaginatorState[T]]:
        """Observable stream of snapshots; new observers get the latest one first."""
        return self._state

    @property
    def current_state(self) -> PaginatorState[T]:
        return self._state.value

    @property
    def is_closed(self) -> bool:
        return self._closed

    # --- COMMANDS ---

    def load_next_page(self) -> None:
        """
        Moves to the next page unless a load is already in flight.

        Fire and forget: the cursor moves in a separate job and any failure
        is published on error_event instead of being raised here.
        """
        if self._closed:
            logger.warning("load_next_page called on a closed paginator")
            return

        state = self.current_state
        if state.is_loading:
            logger.debug(
                "Ignoring load_next_page while loading",
                extra={"page": self._cursor, "operation": "advance"},
            )
            return
        if state.maximum_reached:
            logger.debug(
                "Ignoring load_next_page, maximum reached",
                extra={"page": self._cursor, "operation": "advance"},
            )
            return

        self._launch_job(self._advance_page(), name="pagerflow-advance")

    def on_item_visible(self, index: int) -> None:
        """
        Scroll hook for list views. Loads the next page once the last
        loaded item becomes visible.
        """
        count = self.current_state.item_count
        if count and index >= count - 1:
            self.load_next_page()

    async def aclose(self) -> None:
        """Cancels every running job and waits for them to finish."""
        if self._closed:
            return
        self._closed = True
        jobs = list(self._jobs)
        for job in jobs:
            job.cancel()
        await asyncio.gather(*jobs, return_exceptions=True)
        logger.debug("Paginator closed", extra={"page": self._cursor, "operation": "close"})

    async def __aenter__(self) -> "Paginator[T]":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # --- REACTOR ---

    async def _observe_pages(self) -> None:
        while True:
            self._cursor_changed.clear()
            await self.gate.wait_active()
            page = self._cursor
            # Only act when the page changes to avoid redundant loads
            if page != self._reacted_page:
                self._reacted_page = page
                self._on_page_changed(page)
            await self._cursor_changed.wait()

    def _on_page_changed(self, page: int) -> None:
        self._generation += 1
        if self._fetch_task is not None and not self._fetch_task.done():
            logger.debug("Superseding in-flight fetch", extra={"page": page, "operation": "fetch"})
            self._fetch_task.cancel()
        self._fetch_task = None

        state = self.current_state
        if state.maximum_reached:
            return

        if self.options.is_beyond_max(page):
            self._set_state(state.model_copy(update={"is_loading": False, "maximum_reached": True}))
            logger.info(
                "Maximum page reached",
                extra={"page": page, "max_page": self.options.max_page, "operation": "fetch"},
            )
            return

        self._set_state(state.model_copy(update={"is_loading": True}))
        self._fetch_task = self._launch_job(
            self._load_page(page, self._generation), name=f"pagerflow-fetch-{page}"
        )

    async def _load_page(self, page: int, generation: int) -> None:
        page_size = self.options.page_size
        logger.debug(
            "Fetching page", extra={"page": page, "page_size": page_size, "operation": "fetch"}
        )

        try:
            with handle_fetch_errors(page=page, page_size=page_size):
                items = list(await self.data_source.fetch(page, page_size))
        except DataSourceError as e:
            if generation != self._generation:
                logger.debug("Discarding stale failure", extra={"page": page, "operation": "fetch"})
                return
            self._apply_failure(page, e)
            return

        if generation != self._generation:
            logger.debug("Discarding stale page", extra={"page": page, "operation": "fetch"})
            return
        self._apply_page(PageResult(page=page, page_size=page_size, items=items))

    def _apply_page(self, result: PageResult[T]) -> None:
        state = self.current_state
        self._set_state(
            state.model_copy(
                update={
                    "is_loading": False,
                    "items": state.items + tuple(result.items),
                    "current_page": result.page,
                    "error": None,
                }
            )
        )
        logger.info(
            "Page loaded",
            extra={
                "page": result.page,
                "count": result.count,
                "total": len(state.items) + result.count,
                "has_more": result.has_more,
                "operation": "fetch",
            },
        )

    def _apply_failure(self, page: int, error: DataSourceError) -> None:
        # A failed page counts as an empty one
        self._set_state(
            self.current_state.model_copy(
                update={"is_loading": False, "error": error.message, "current_page": page}
            )
        )
        logger.warning(
            "Page fetch failed",
            extra={"page": page, "page_size": error.page_size, "operation": "fetch"},
        )
        self.error_event.post(error)

    # --- ADVANCE ---

    async def _advance_page(self) -> None:
        # While paused, one deferred page at most; resume() loads it
        if not self.gate.is_active and self._cursor != self._reacted_page:
            logger.debug(
                "Ignoring load_next_page, a page is already deferred",
                extra={"page": self._cursor, "operation": "advance"},
            )
            return
        if self.options.can_advance_from(self.current_state.current_page):
            self._set_cursor(self._cursor + 1)

    def _set_cursor(self, page: int) -> None:
        if page == self._cursor:
            return
        self._cursor = page
        self._cursor_changed.set()

    def _set_state(self, state: PaginatorState[T]) -> None:
        self._state.emit(state)

    # --- JOBS ---

    def _launch_job(self, coro: Coroutine[Any, Any, None], name: str) -> asyncio.Task[None]:
        task = self._loop.create_task(coro, name=name)
        self._jobs.add(task)
        task.add_done_callback(self._on_job_done)
        return task

    def _on_job_done(self, task: asyncio.Task[None]) -> None:
        self._jobs.discard(task)
        if task.cancelled():
            logger.debug("Job cancelled", extra={"job": task.get_name()})
            return
        error = task.exception()
        if error is None:
            return
        logger.error(
            "Caught %s",
            describe_error(error),
            exc_info=error,
            extra={"job": task.get_name()},
        )
        if isinstance(error, Exception):
            self.error_event.post(error)
