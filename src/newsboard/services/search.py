"""Keyword filtering over articles and sources."""

from collections.abc import Sequence
from typing import TypeVar

from newsboard.models import Article, Result, Source, Success

T = TypeVar("T")

ARTICLE_SEARCH_FIELDS: tuple[str, ...] = ("title", "description", "author", "content")
SOURCE_SEARCH_FIELDS: tuple[str, ...] = ("name", "description", "category")


def filter_items(items: Sequence[T], keyword: str, fields: Sequence[str]) -> list[T]:
    """Return the items where any of ``fields`` contains ``keyword``.

    Matching is a case-insensitive substring test against the trimmed
    keyword. A blank keyword returns every item. Missing or non-text fields
    never match, and the original order is kept.
    """
    needle = keyword.strip().casefold()
    if not needle:
        return list(items)

    def matches(item: T) -> bool:
        for name in fields:
            value = getattr(item, name, None)
            if isinstance(value, str) and needle in value.casefold():
                return True
        return False

    return [item for item in items if matches(item)]


def filter_articles(articles: Sequence[Article], keyword: str) -> list[Article]:
    """Filter articles by title, description, author and content."""
    return filter_items(articles, keyword, ARTICLE_SEARCH_FIELDS)


def filter_sources(sources: Sequence[Source], keyword: str) -> list[Source]:
    """Filter sources by name, description and category."""
    return filter_items(sources, keyword, SOURCE_SEARCH_FIELDS)


def filter_result(result: Result, keyword: str, fields: Sequence[str]) -> Result:
    """Apply the keyword filter to a Success; other results pass through."""
    if isinstance(result, Success):
        return Success(filter_items(result.items, keyword, fields))
    return result
