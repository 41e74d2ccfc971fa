"""Unit tests for keyword filtering."""

from newsboard.models import Article, Empty, Error, Loading, Source, Success
from newsboard.services.search import (
    ARTICLE_SEARCH_FIELDS,
    filter_articles,
    filter_items,
    filter_result,
    filter_sources,
)

TRUMP = Article(title="Trump news article", description="Politics today", author="Jane Doe")
TECH = Article(title="New phone launched", description="Gadgets", content="Silicon chips inside")
SPORTS = Article(title="Final score", author="Sam Trumpington", content=None)
ARTICLES = [TRUMP, TECH, SPORTS]

BBC = Source(id="bbc-news", name="BBC News", description="British broadcaster", category="general")
ESPN = Source(id="espn", name="ESPN", description="Sports coverage", category="sports")
WIRED = Source(id="wired", name="Wired", description=None, category="technology")
SOURCES = [BBC, ESPN, WIRED]


class TestFilterItems:
    """Tests for the generic filter."""

    def test_blank_keyword_returns_all(self) -> None:
        """Should pass every item through, in order, for empty or whitespace keywords."""
        assert filter_items(ARTICLES, "", ARTICLE_SEARCH_FIELDS) == ARTICLES
        assert filter_items(ARTICLES, "   ", ARTICLE_SEARCH_FIELDS) == ARTICLES
        assert filter_items([], "", ARTICLE_SEARCH_FIELDS) == []

    def test_keyword_is_trimmed(self) -> None:
        """Should ignore whitespace around the keyword."""
        assert filter_articles(ARTICLES, "  phone  ") == [TECH]

    def test_no_match_returns_empty_list(self) -> None:
        """Should return an empty list when nothing matches."""
        assert filter_articles(ARTICLES, "zebra") == []

    def test_missing_fields_never_match(self) -> None:
        """Should skip fields that are None."""
        assert filter_items([Article()], "a", ARTICLE_SEARCH_FIELDS) == []

    def test_non_text_fields_never_match(self) -> None:
        """Should skip fields holding something other than text."""
        odd = Article(title=123, description=["news"])  # type: ignore[arg-type]

        assert filter_items([odd, TRUMP], "news", ARTICLE_SEARCH_FIELDS) == [TRUMP]
        assert filter_items([odd], "1", ARTICLE_SEARCH_FIELDS) == []


class TestFilterArticles:
    """Tests for article filtering."""

    def test_filter_by_title(self) -> None:
        """Should match on the title."""
        assert filter_articles(ARTICLES, "Trump news") == [TRUMP]

    def test_filter_by_description(self) -> None:
        """Should match on the description."""
        assert filter_articles(ARTICLES, "gadgets") == [TECH]

    def test_filter_by_author(self) -> None:
        """Should match on the author."""
        assert filter_articles(ARTICLES, "jane") == [TRUMP]

    def test_filter_by_content(self) -> None:
        """Should match on the content."""
        assert filter_articles(ARTICLES, "silicon") == [TECH]

    def test_case_insensitive(self) -> None:
        """Should select the same items for upper and lower case keywords."""
        assert filter_articles([TRUMP], "TRUMP") == [TRUMP]
        assert filter_articles([TRUMP], "trump") == [TRUMP]

    def test_order_preserved_across_fields(self) -> None:
        """Should keep original order for items matching on different fields."""
        assert filter_articles(ARTICLES, "trump") == [TRUMP, SPORTS]

    def test_url_is_not_searched(self) -> None:
        """Should not match on the url."""
        article = Article(title="Headline", url="https://example.com/trump")
        assert filter_articles([article], "trump") == []


class TestFilterSources:
    """Tests for source filtering."""

    def test_filter_by_name(self) -> None:
        """Should match on the name."""
        assert filter_sources(SOURCES, "bbc") == [BBC]

    def test_filter_by_description(self) -> None:
        """Should match on the description."""
        assert filter_sources(SOURCES, "broadcaster") == [BBC]

    def test_filter_by_category(self) -> None:
        """Should match on the category, ignoring case."""
        assert filter_sources(SOURCES, "TECHNOLOGY") == [WIRED]

    def test_multiple_matching_criteria(self) -> None:
        """Should combine matches on different fields."""
        assert filter_sources(SOURCES, "sports") == [ESPN]
        assert filter_sources(SOURCES, "e") == [BBC, ESPN, WIRED]

    def test_id_is_not_searched(self) -> None:
        """Should not match on the id."""
        assert filter_sources(SOURCES, "bbc-news") == []


class TestFilterResult:
    """Tests for filtering a Result."""

    def test_success_is_filtered(self) -> None:
        """Should filter the items of a Success."""
        assert filter_result(Success(ARTICLES), "trump news", ARTICLE_SEARCH_FIELDS) == Success(
            [TRUMP]
        )

    def test_success_without_matches_stays_success(self) -> None:
        """Should give an empty Success, not Empty, when nothing matches."""
        assert filter_result(Success(ARTICLES), "zebra", ARTICLE_SEARCH_FIELDS) == Success([])

    def test_other_variants_pass_through(self) -> None:
        """Should return Empty, Loading and Error unchanged."""
        for result in (Empty(), Loading(), Error("boom")):
            assert filter_result(result, "x", ARTICLE_SEARCH_FIELDS) == result
