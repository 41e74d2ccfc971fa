"""Unit tests for SourceListController."""

import asyncio
from unittest.mock import AsyncMock

from newsboard.models import Empty, Error, Loading, Source, Success
from newsboard.services.sources import SourceListController

BBC = Source(id="bbc-news", name="BBC News", description="British broadcaster", category="general")
ESPN = Source(id="espn", name="ESPN", description="Sports coverage", category="sports")


class TestSourceListController:
    """Tests for loading and filtering a category's sources."""

    async def test_fetch_source_list_success(self) -> None:
        """Should publish Loading, then the fetched sources."""
        fetch = AsyncMock(return_value=Success([BBC, ESPN]))
        controller = SourceListController(fetch)

        task = controller.initialize("general")
        assert controller.state.current_result() == Loading()
        await task

        fetch.assert_awaited_once_with("general")
        assert controller.state.current_result() == Success([BBC, ESPN])
        assert controller.state.current_filtered_result() == Success([BBC, ESPN])

    async def test_search_filter_by_category(self) -> None:
        """Should filter sources by category, ignoring case."""
        controller = SourceListController(AsyncMock(return_value=Success([BBC, ESPN])))
        await controller.initialize("general")

        controller.state.update_keyword("SPORTS")

        assert controller.state.current_filtered_result() == Success([ESPN])

    async def test_fetch_source_list_error(self) -> None:
        """Should publish the error and keep it through filtering."""
        controller = SourceListController(AsyncMock(return_value=Error("Network failure")))

        await controller.initialize("general")
        controller.state.update_keyword("bbc")

        assert controller.state.current_result() == Error("Network failure")
        assert controller.state.current_filtered_result() == Error("Network failure")

    async def test_empty_state_is_preserved_through_filtering(self) -> None:
        """Should publish Empty for no sources and keep it under a keyword."""
        controller = SourceListController(AsyncMock(return_value=Success([])))

        await controller.initialize("general")
        controller.state.update_keyword("bbc")

        assert controller.state.current_result() == Empty()
        assert controller.state.current_filtered_result() == Empty()

    async def test_raising_fetch_becomes_error(self) -> None:
        """Should turn a raising fetch into an Error result."""
        controller = SourceListController(AsyncMock(side_effect=KeyError()))

        await controller.initialize("general")

        # str(KeyError()) is empty, so the fallback message applies.
        assert controller.state.current_result() == Error("Unexpected Error")

    async def test_no_category_does_not_fetch(self) -> None:
        """Should stay idle and never fetch without a category."""
        fetch = AsyncMock()
        controller = SourceListController(fetch)

        assert controller.initialize(None) is None
        assert controller.retry_initial_load() is None
        fetch.assert_not_awaited()

    async def test_retry_load_fetches_sources_again(self) -> None:
        """Should fetch again on retry."""
        fetch = AsyncMock(side_effect=[Error("Network failure"), Success([BBC])])
        controller = SourceListController(fetch)
        await controller.initialize("general")

        await controller.retry_initial_load()

        assert fetch.await_count == 2
        assert controller.state.current_result() == Success([BBC])

    async def test_close_discards_pending_fetch(self) -> None:
        """Should cancel the pending fetch on close."""
        gate = asyncio.Event()

        async def fetch(category: str) -> Success:
            await gate.wait()
            return Success([BBC])

        controller = SourceListController(fetch)
        task = controller.initialize("general")
        await asyncio.sleep(0)

        controller.close()
        await asyncio.wait([task])

        assert task.cancelled()
        assert controller.state.current_result() == Loading()
        assert controller.closed is True
