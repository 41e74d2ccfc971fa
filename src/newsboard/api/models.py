"""Pydantic models for API responses."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ListState = Literal["loading", "empty", "success", "error"]


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(description="Health status")
    version: str = Field(description="Application version")


class CategoryListResponse(BaseModel):
    """Response model for the category list."""

    categories: list[str] = Field(description="Categories sources can be browsed by")


class ArticleSourceModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    name: str | None = None


class ArticleModel(BaseModel):
    """An article as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    source: ArticleSourceModel | None = None
    author: str | None = None
    title: str | None = None
    description: str | None = None
    url: str | None = None
    url_to_image: str | None = None
    published_at: str | None = None
    content: str | None = None


class SourceModel(BaseModel):
    """A news source as returned to clients."""

    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    name: str | None = None
    description: str | None = None
    url: str | None = None
    category: str | None = None
    language: str | None = None
    country: str | None = None


class SourceListResponse(BaseModel):
    """Response model for a category's sources."""

    state: ListState = Field(description="State of the source list")
    message: str | None = Field(default=None, description="Error message when state is error")
    keyword: str = Field(default="", description="Keyword the sources were filtered by")
    total: int = Field(description="Number of sources before filtering")
    sources: list[SourceModel] = Field(default_factory=list)


class ArticleListResponse(BaseModel):
    """Response model for a source's articles."""

    state: ListState = Field(description="State of the article list")
    message: str | None = Field(default=None, description="Error message when state is error")
    keyword: str = Field(default="", description="Keyword the articles were filtered by")
    total: int = Field(description="Number of articles loaded before filtering")
    current_page: int = Field(description="Next page number that would be requested")
    is_last_page: bool = Field(description="Whether the source has no more pages")
    pagination_error: str | None = Field(
        default=None, description="Error from loading a page after the first, if any"
    )
    articles: list[ArticleModel] = Field(default_factory=list)
