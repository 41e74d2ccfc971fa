"""News REST API client for newsboard.

Every fetch resolves to a single terminal Result: ``Success`` with at least
one item, ``Empty`` for a zero-length list, or ``Error`` carrying a
user-presentable message. Nothing is retried and nothing is raised.
"""

from typing import Any

import httpx

from newsboard.models import (
    Article,
    Error,
    Result,
    Source,
    Success,
    coerce_empty,
    error_message,
)
from newsboard.utils.logging import get_logger

logger = get_logger(__name__)

NEWSAPI_BASE = "https://newsapi.org/v2"


class NewsApiError(Exception):
    """Raised when the API answers with an error status or an unusable body."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


class NewsApiClient:
    """Client for the sources and articles endpoints of the news API."""

    def __init__(
        self,
        api_key: str,
        base_url: str = NEWSAPI_BASE,
        page_size: int = 20,
        timeout: float = 30.0,
    ) -> None:
        self._page_size = page_size
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"X-Api-Key": api_key},
            timeout=timeout,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "NewsApiClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def fetch_sources_by_category(self, category: str) -> Result:
        """Fetch the sources publishing in a category.

        Args:
            category: Category name, e.g. "technology".

        Returns:
            Success with Source items, Empty, or Error.
        """
        logger.info("Fetching sources", category=category)
        try:
            data = await self._get_json("/top-headlines/sources", {"category": category})
            records = _records(data, "sources")
        except (NewsApiError, httpx.HTTPError) as e:
            return self._failure(e, category=category)

        sources = [Source.from_api_response(s) for s in records]
        logger.info("Fetched sources", category=category, count=len(sources))
        return coerce_empty(Success(sources))

    async def fetch_articles_by_source(self, source: str, page: int) -> Result:
        """Fetch one page of articles from a source.

        Args:
            source: Source id, e.g. "abc-news".
            page: 1-based page number.

        Returns:
            Success with Article items, Empty, or Error.
        """
        logger.info("Fetching articles", source=source, page=page)
        try:
            data = await self._get_json(
                "/everything",
                {"sources": source, "page": page, "pageSize": self._page_size},
            )
            records = _records(data, "articles")
        except (NewsApiError, httpx.HTTPError) as e:
            return self._failure(e, source=source, page=page)

        articles = [Article.from_api_response(a) for a in records]
        logger.info("Fetched articles", source=source, page=page, count=len(articles))
        return coerce_empty(Success(articles))

    async def _get_json(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        response = await self._client.get(path, params=params)
        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.is_error or (isinstance(payload, dict) and payload.get("status") == "error"):
            message = payload.get("message") if isinstance(payload, dict) else None
            raise NewsApiError(message or f"HTTP {response.status_code}")
        if not isinstance(payload, dict):
            raise NewsApiError("Malformed response from news API")
        return payload

    @staticmethod
    def _failure(exc: Exception, **context: Any) -> Error:
        reason = exc.reason if isinstance(exc, NewsApiError) else error_message(exc)
        logger.warning("News API request failed", error=reason, **context)
        return Error(reason)


def _records(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    # A missing or null list counts as empty; non-object entries are skipped.
    records = data.get(key)
    if records is None:
        return []
    if not isinstance(records, list):
        raise NewsApiError("Malformed response from news API")
    return [item for item in records if isinstance(item, dict)]
