"""Loading the sources of a category."""

import asyncio
from collections.abc import Awaitable, Callable

from newsboard.models import Error, Loading, Result, UNEXPECTED_ERROR, coerce_empty, error_message
from newsboard.services.search import SOURCE_SEARCH_FIELDS
from newsboard.services.state import ListStatePublisher
from newsboard.utils.logging import get_logger

logger = get_logger(__name__)

FetchSources = Callable[[str], Awaitable[Result]]


class SourceListController:
    """Fetches a category's sources in one request, with retry on failure."""

    def __init__(
        self,
        fetch_sources: FetchSources,
        publisher: ListStatePublisher | None = None,
    ) -> None:
        self._fetch_sources = fetch_sources
        self.state = publisher or ListStatePublisher(SOURCE_SEARCH_FIELDS)
        self._category: str | None = None
        self._initialized = False
        self._closed = False
        self._generation = 0
        self._task: asyncio.Task[None] | None = None

    @property
    def category(self) -> str | None:
        return self._category

    @property
    def closed(self) -> bool:
        return self._closed

    def initialize(self, category: str | None) -> asyncio.Task[None] | None:
        """Load the sources of ``category``; a None category leaves the controller idle."""
        if self._initialized or self._closed:
            return None
        self._initialized = True
        if category is None:
            logger.info("No category; controller stays idle")
            return None
        self._category = category
        return self._load()

    def retry_initial_load(self) -> asyncio.Task[None] | None:
        """Fetch the category's sources again."""
        if self._category is None or self._closed:
            return None
        return self._load()

    def close(self) -> None:
        """Tear down; a fetch still in flight is cancelled and its result dropped."""
        self._closed = True
        self._cancel()

    async def wait_idle(self) -> None:
        task = self._task
        if task is not None and not task.done():
            await asyncio.wait([task])

    def _cancel(self) -> None:
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _load(self) -> asyncio.Task[None]:
        self._cancel()
        self.state.publish(Loading())
        self._task = asyncio.get_running_loop().create_task(self._fetch(self._generation))
        return self._task

    async def _fetch(self, generation: int) -> None:
        category = self._category
        if category is None:
            return
        try:
            result = await self._fetch_sources(category)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("Source fetch raised", category=category, error=str(e))
            result = Error(error_message(e))

        if generation != self._generation:
            return
        result = coerce_empty(result)
        if isinstance(result, Loading):
            result = Error(UNEXPECTED_ERROR)
        self.state.publish(result)
