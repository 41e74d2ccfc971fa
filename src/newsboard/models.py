"""Shared data models for newsboard.

Articles and sources mirror the news API payloads, where any field may be
missing. Fetch outcomes are expressed as a ``Result``: exactly one of
``Loading``, ``Empty``, ``Success`` or ``Error``.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")

UNEXPECTED_ERROR = "Unexpected Error"

CATEGORIES: tuple[str, ...] = (
    "business",
    "entertainment",
    "general",
    "health",
    "science",
    "sports",
    "technology",
)


def _str_or_none(value: Any) -> str | None:
    """Keep strings, render numbers as text and drop anything else."""
    if isinstance(value, str):
        return value
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return None


@dataclass(frozen=True)
class ArticleSource:
    """Attribution of an article to the source that published it."""

    id: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class Article:
    """A news article. The url is the closest thing to an identity."""

    source: ArticleSource | None = None
    author: str | None = None
    title: str | None = None
    description: str | None = None
    url: str | None = None
    url_to_image: str | None = None
    published_at: str | None = None
    content: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Article":
        """Create an Article from API response data."""
        source = data.get("source")
        return cls(
            source=ArticleSource(
                id=_str_or_none(source.get("id")), name=_str_or_none(source.get("name"))
            )
            if isinstance(source, dict)
            else None,
            author=_str_or_none(data.get("author")),
            title=_str_or_none(data.get("title")),
            description=_str_or_none(data.get("description")),
            url=_str_or_none(data.get("url")),
            url_to_image=_str_or_none(data.get("urlToImage")),
            published_at=_str_or_none(data.get("publishedAt")),
            content=_str_or_none(data.get("content")),
        )


@dataclass(frozen=True)
class Source:
    """A news source, identified by its stable id."""

    id: str | None = None
    name: str | None = None
    description: str | None = None
    url: str | None = None
    category: str | None = None
    language: str | None = None
    country: str | None = None

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "Source":
        """Create a Source from API response data."""
        return cls(
            id=_str_or_none(data.get("id")),
            name=_str_or_none(data.get("name")),
            description=_str_or_none(data.get("description")),
            url=_str_or_none(data.get("url")),
            category=_str_or_none(data.get("category")),
            language=_str_or_none(data.get("language")),
            country=_str_or_none(data.get("country")),
        )


@dataclass(frozen=True)
class Loading:
    """A fetch is in flight."""


@dataclass(frozen=True)
class Empty:
    """The fetch succeeded but returned no items."""


@dataclass(frozen=True)
class Success(Generic[T]):
    """The fetch succeeded; items are kept in server order."""

    items: tuple[T, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class Error:
    """The fetch failed. The message is always presentable to a user."""

    message: str = UNEXPECTED_ERROR

    def __post_init__(self) -> None:
        if not self.message or not str(self.message).strip():
            object.__setattr__(self, "message", UNEXPECTED_ERROR)


Result = Loading | Empty | Success | Error


def coerce_empty(result: Result) -> Result:
    """Turn a zero-length Success into Empty; pass every other result through."""
    if isinstance(result, Success) and not result.items:
        return Empty()
    return result


def error_message(exc: BaseException) -> str:
    """Return a user-presentable message for ``exc``."""
    message = str(exc).strip()
    return message or UNEXPECTED_ERROR
