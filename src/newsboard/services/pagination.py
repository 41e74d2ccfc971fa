"""Page-by-page loading of a source's articles.

The controller owns the page cursor and the accumulated list for one source.
It runs on a single event loop: every mutation happens either synchronously
inside a public method or in the completion step of the one fetch task that
may be outstanding at a time. An initial load publishes ``Loading`` and
replaces the list; a failure there replaces the published result with
``Error``. A failure while loading further pages leaves the list alone and is
reported on the publisher's pagination-error channel instead, with its own
retry and dismiss actions.
"""

import asyncio
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, TypeVar

from newsboard.models import (
    Empty,
    Error,
    Loading,
    Result,
    Success,
    UNEXPECTED_ERROR,
    coerce_empty,
    error_message,
)
from newsboard.services.search import ARTICLE_SEARCH_FIELDS
from newsboard.services.state import ListStatePublisher
from newsboard.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

FetchPage = Callable[[str, int], Awaitable[Result]]

FIRST_PAGE = 1


def merge_page(existing: Sequence[T], new: Sequence[T]) -> list[T]:
    """Append a freshly fetched page to the items already loaded."""
    return [*existing, *new]


def should_stop_pagination(items: Sequence[Any]) -> bool:
    """An empty page marks the end of the data."""
    return not items


class PaginatedListController:
    """Loads pages for one source key and publishes the merged list."""

    def __init__(
        self,
        fetch_page: FetchPage,
        publisher: ListStatePublisher | None = None,
        search_fields: Sequence[str] = ARTICLE_SEARCH_FIELDS,
    ) -> None:
        self._fetch_page = fetch_page
        self.state = publisher or ListStatePublisher(search_fields)

        self._key: str | None = None
        self._initialized = False
        self._closed = False

        self._current_page = FIRST_PAGE
        self._is_last_page = False
        self._in_flight = False
        self._last_failed_page: int | None = None
        self._items: list[Any] = []

        # Bumped on teardown and on reset so late completions can be recognised.
        self._generation = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def key(self) -> str | None:
        return self._key

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def is_last_page(self) -> bool:
        return self._is_last_page

    @property
    def is_fetch_in_flight(self) -> bool:
        return self._in_flight

    @property
    def last_failed_page(self) -> int | None:
        return self._last_failed_page

    @property
    def items(self) -> tuple[Any, ...]:
        """The accumulated list, in fetch order."""
        return tuple(self._items)

    @property
    def pagination_error(self) -> str | None:
        return self.state.pagination_error.value

    @property
    def closed(self) -> bool:
        return self._closed

    def initialize(self, key: str | None) -> asyncio.Task[None] | None:
        """Start loading page 1 for ``key``.

        A None key leaves the controller idle. Only the first call has any
        effect.

        Returns:
            The fetch task, or None if nothing was started.
        """
        if self._initialized or self._closed:
            logger.debug("Ignoring repeated initialize", key=key)
            return None
        self._initialized = True
        if key is None:
            logger.info("No source key; controller stays idle")
            return None
        self._key = key
        return self._start_initial_load()

    def load_more(self) -> asyncio.Task[None] | None:
        """Fetch the next page.

        Ignored while a fetch is in flight, after the last page, while a
        pagination failure awaits retry or dismissal, and whenever no list
        is currently shown.

        Returns:
            The fetch task, or None if the request was ignored.
        """
        if (
            self._key is None
            or self._closed
            or self._in_flight
            or self._is_last_page
            or self._last_failed_page is not None
            or not isinstance(self.state.current_result(), Success)
        ):
            return None
        return self._dispatch(self._current_page, reset=False)

    def retry_initial_load(self) -> asyncio.Task[None] | None:
        """Discard everything loaded so far and fetch page 1 again."""
        if self._key is None or self._closed:
            return None
        self._abandon_in_flight()
        return self._start_initial_load()

    def retry_pagination(self) -> asyncio.Task[None] | None:
        """Fetch again the page whose load failed."""
        page = self._last_failed_page
        if page is None or self._closed or self._in_flight:
            return None
        self.dismiss_pagination_error()
        logger.info("Retrying page", key=self._key, page=page)
        return self._dispatch(page, reset=False)

    def dismiss_pagination_error(self) -> None:
        """Forget the pending pagination failure without retrying."""
        self._last_failed_page = None
        self.state.pagination_error.set(None)

    def close(self) -> None:
        """Tear down; a fetch still in flight is cancelled and its result dropped."""
        if self._closed:
            return
        self._closed = True
        self._abandon_in_flight()
        logger.debug("Controller closed", key=self._key)

    async def wait_idle(self) -> None:
        """Wait until the outstanding fetch, if any, has settled."""
        task = self._task
        if task is not None and not task.done():
            await asyncio.wait([task])

    def _start_initial_load(self) -> asyncio.Task[None]:
        self._current_page = FIRST_PAGE
        self._is_last_page = False
        self._items = []
        self.dismiss_pagination_error()
        self.state.publish(Loading())
        return self._dispatch(FIRST_PAGE, reset=True)

    def _dispatch(self, page: int, reset: bool) -> asyncio.Task[None]:
        # The flag goes up before the task exists so a second call in the same tick is refused.
        self._in_flight = True
        if not reset:
            self.state.is_loading_more.set(True)
        self._task = asyncio.get_running_loop().create_task(
            self._fetch(page, reset, self._generation)
        )
        return self._task

    def _abandon_in_flight(self) -> None:
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self._in_flight = False
        self.state.is_loading_more.set(False)

    async def _fetch(self, page: int, reset: bool, generation: int) -> None:
        key = self._key
        if key is None:
            return
        try:
            result = await self._fetch_page(key, page)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("Page fetch raised", key=key, page=page, error=str(e))
            result = Error(error_message(e))

        if generation != self._generation:
            logger.debug("Discarding stale page", key=key, page=page)
            return
        self._complete(page, reset, result)

    def _complete(self, page: int, reset: bool, result: Result) -> None:
        result = coerce_empty(result)
        if isinstance(result, Loading):
            result = Error(UNEXPECTED_ERROR)

        self._in_flight = False
        self.state.is_loading_more.set(False)

        if isinstance(result, Success):
            self._items = merge_page([] if reset else self._items, result.items)
            self._current_page = page + 1
            logger.info(
                "Page loaded",
                key=self._key,
                page=page,
                count=len(result.items),
                total=len(self._items),
            )
            self.state.publish(Success(self._items))
        elif isinstance(result, Empty):
            self._is_last_page = True
            logger.info("Reached last page", key=self._key, page=page)
            if reset:
                self.state.publish(Empty())
        elif reset:
            self._items = []
            logger.warning("Initial load failed", key=self._key, error=result.message)
            self.state.publish(result)
        else:
            self._last_failed_page = page
            logger.warning("Page load failed", key=self._key, page=page, error=result.message)
            self.state.pagination_error.set(result.message)
