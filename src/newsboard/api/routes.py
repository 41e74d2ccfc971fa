"""API routes for newsboard."""

from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends, HTTPException, Query, status

from newsboard import __version__
from newsboard.api.models import (
    ArticleListResponse,
    ArticleModel,
    CategoryListResponse,
    HealthResponse,
    ListState,
    SourceListResponse,
    SourceModel,
)
from newsboard.clients.newsapi import NewsApiClient
from newsboard.config import get_api_key, get_settings
from newsboard.models import CATEGORIES, Empty, Error, Result, Success
from newsboard.services.pagination import PaginatedListController
from newsboard.services.sources import SourceListController
from newsboard.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["api"])

MAX_PAGES = 10


async def get_news_client() -> AsyncIterator[NewsApiClient]:
    """Provide a configured news API client for the duration of a request."""
    settings = get_settings()
    try:
        api_key = get_api_key(settings)
    except ValueError as e:
        logger.error("News API key is not configured", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="News API key is not configured",
        ) from e

    async with NewsApiClient(
        api_key=api_key,
        base_url=settings.api_base_url,
        page_size=settings.page_size,
        timeout=settings.request_timeout,
    ) as client:
        yield client


def _describe(result: Result) -> tuple[ListState, str | None]:
    """Map a Result to its state name and error message."""
    if isinstance(result, Success):
        return "success", None
    if isinstance(result, Empty):
        return "empty", None
    if isinstance(result, Error):
        return "error", result.message
    return "loading", None


def _count(result: Result) -> int:
    return len(result.items) if isinstance(result, Success) else 0


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@router.get("/categories", response_model=CategoryListResponse)
async def categories() -> CategoryListResponse:
    """List the categories sources can be browsed by."""
    return CategoryListResponse(categories=list(CATEGORIES))


@router.get("/categories/{category}/sources", response_model=SourceListResponse)
async def category_sources(
    category: str,
    q: str = Query(default="", description="Keyword to filter sources by"),
    client: NewsApiClient = Depends(get_news_client),
) -> SourceListResponse:
    """Load the sources of a category, filtered by an optional keyword."""
    if category not in CATEGORIES:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown category '{category}'",
        )

    controller = SourceListController(client.fetch_sources_by_category)
    try:
        controller.initialize(category)
        await controller.wait_idle()
        controller.state.update_keyword(q)
        result = controller.state.current_result()
        filtered = controller.state.current_filtered_result()
    finally:
        controller.close()

    state, message = _describe(filtered)
    return SourceListResponse(
        state=state,
        message=message,
        keyword=q,
        total=_count(result),
        sources=[SourceModel.model_validate(s) for s in filtered.items]
        if isinstance(filtered, Success)
        else [],
    )


@router.get("/sources/{source}/articles", response_model=ArticleListResponse)
async def source_articles(
    source: str,
    pages: int = Query(default=1, ge=1, le=MAX_PAGES, description="Pages to load"),
    q: str = Query(default="", description="Keyword to filter articles by"),
    client: NewsApiClient = Depends(get_news_client),
) -> ArticleListResponse:
    """Load up to ``pages`` pages of a source's articles, filtered by an optional keyword.

    Loading stops early at the last page or at the first page that fails;
    a failure after the first page is reported in ``pagination_error``
    alongside the articles already loaded.
    """
    logger.info("Article list requested", source=source, pages=pages, q=q)

    controller = PaginatedListController(client.fetch_articles_by_source)
    try:
        controller.initialize(source)
        await controller.wait_idle()
        for _ in range(pages - 1):
            task = controller.load_more()
            if task is None:
                break
            await task
        controller.state.update_keyword(q)
        result = controller.state.current_result()
        filtered = controller.state.current_filtered_result()
    finally:
        controller.close()

    state, message = _describe(filtered)
    return ArticleListResponse(
        state=state,
        message=message,
        keyword=q,
        total=_count(result),
        current_page=controller.current_page,
        is_last_page=controller.is_last_page,
        pagination_error=controller.pagination_error,
        articles=[ArticleModel.model_validate(a) for a in filtered.items]
        if isinstance(filtered, Success)
        else [],
    )
