"""Tests for content region selection and the reader-mode fallback."""

import pytest
from bs4 import BeautifulSoup
from conftest import LONG_PARAGRAPH

from articlepull.errors import InvalidParameter, NoContentFound
from articlepull.extraction.reader import ReaderModeExtractor
from articlepull.extraction.selector import (
    READER_MODE_SELECTOR,
    ContentRegionSelector,
    available_selectors,
)
from articlepull.extraction.templates import Classification, TemplateVariant

DEXTER = Classification(variant=TemplateVariant.DEXTER, marker="#root_content_flex")
EDGE = Classification(variant=TemplateVariant.EDGE, marker="main .article-body")
UNCLASSIFIED = Classification(variant=TemplateVariant.UNCLASSIFIED)


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class TestContentRegionSelector:
    """Tests for ContentRegionSelector."""

    def test_first_long_candidate_wins(self):
        """Test that candidates are tried in order."""
        soup = _soup(
            f'<div id="root_content_flex"><div id="position"><p>{LONG_PARAGRAPH}</p></div>'
            f'<div class="helpxMain-article"><p>{LONG_PARAGRAPH}</p></div></div>'
        )

        region = ContentRegionSelector().select(soup, DEXTER)

        assert region.selector == "#position"
        assert region.used_fallback is False

    def test_short_candidate_skipped(self):
        """Test that a candidate at or below the threshold is rejected."""
        soup = _soup(
            '<div id="root_content_flex"><div id="position">' + "x" * 200 + "</div>"
            f'<div class="helpxMain-article"><p>{LONG_PARAGRAPH}</p></div></div>'
        )

        region = ContentRegionSelector().select(soup, DEXTER)

        assert region.selector == "#root_content_flex .helpxMain-article"
        assert region.root.get("class") == ["helpxMain-article"]

    def test_edge_threshold_is_lower(self):
        """Test that the section layout accepts shorter bodies."""
        soup = _soup('<main><div class="article-body"><p>' + "y" * 150 + "</p></div></main>")

        region = ContentRegionSelector().select(soup, EDGE)

        assert region.selector == "main .article-body"

    def test_region_is_a_live_subtree(self):
        """Test that the region root belongs to the parsed document."""
        soup = _soup(f'<div id="root_content_flex"><div id="position"><p>{LONG_PARAGRAPH}</p></div></div>')

        region = ContentRegionSelector().select(soup, DEXTER)

        assert region.root is soup.find(id="position")

    def test_reader_fallback_for_unclassified(self):
        """Test that unclassified documents go through reader mode."""
        soup = _soup(
            f"<body><nav>Menu</nav><article><h1>Title</h1><p>{LONG_PARAGRAPH}</p></article></body>"
        )

        region = ContentRegionSelector().select(soup, UNCLASSIFIED)

        assert region.selector == READER_MODE_SELECTOR
        assert region.used_fallback is True
        assert "Layers let you work" in region.root.get_text()

    def test_reader_fallback_when_candidates_fail(self):
        """Test that exhausted candidates fall back to reader mode."""
        soup = _soup(
            '<body><div id="root_content_flex"><div id="position">short</div></div>'
            f"<article><p>{LONG_PARAGRAPH}</p></article></body>"
        )

        region = ContentRegionSelector().select(soup, DEXTER)

        assert region.used_fallback is True

    def test_no_content_found(self):
        """Test that an empty document raises NoContentFound with diagnostics."""
        soup = _soup('<body><div id="a">x</div><div class="b c">y</div></body>')

        with pytest.raises(NoContentFound) as exc_info:
            ContentRegionSelector().select(soup, UNCLASSIFIED, "https://example.com/x")

        error = exc_info.value
        assert error.status_code == 404
        assert error.url == "https://example.com/x"
        assert error.details["available_selectors"] == [
            {"tag": "div", "id": "a", "class": None},
            {"tag": "div", "id": None, "class": "b c"},
        ]

    def test_override_selector(self):
        """Test that an explicit selector bypasses the candidate chain."""
        soup = _soup('<div id="custom"><p>Anything goes</p></div>')

        region = ContentRegionSelector().select_override(soup, "#custom")

        assert region.selector == "#custom"
        assert region.root.get_text() == "Anything goes"

    def test_override_selector_without_match(self):
        """Test that an unmatched override raises NoContentFound."""
        soup = _soup('<div id="other">x</div>')

        with pytest.raises(NoContentFound, match="#missing"):
            ContentRegionSelector().select_override(soup, "#missing")

    def test_override_selector_malformed(self):
        """Test that a malformed override raises InvalidParameter."""
        soup = _soup("<div>x</div>")

        with pytest.raises(InvalidParameter) as exc_info:
            ContentRegionSelector().select_override(soup, "div[")

        assert exc_info.value.status_code == 400


class TestAvailableSelectors:
    """Tests for not-found diagnostics."""

    def test_limit(self):
        """Test that at most ten containers are listed."""
        soup = _soup("".join(f'<div id="d{i}"></div>' for i in range(15)))

        assert len(available_selectors(soup)) == 10


class TestReaderModeExtractor:
    """Tests for ReaderModeExtractor."""

    def test_prefers_article_element(self):
        """Test extraction from an article tag."""
        soup = _soup(f"<body><div>Intro</div><article><p>{LONG_PARAGRAPH}</p></article></body>")

        root = ReaderModeExtractor().extract(soup)

        assert root is not None
        assert root.name == "article"

    def test_leaves_document_untouched(self):
        """Test that boilerplate is stripped from a copy only."""
        soup = _soup(f"<body><nav>Menu</nav><article><p>{LONG_PARAGRAPH}</p></article></body>")

        ReaderModeExtractor().extract(soup)

        assert soup.find("nav") is not None

    def test_densest_container(self):
        """Test paragraph-density scoring without semantic markup."""
        soup = _soup(
            "<body>"
            '<div class="links"><a href="/a">A</a><a href="/b">B</a></div>'
            f'<div class="copy"><p>{LONG_PARAGRAPH}</p><p>{LONG_PARAGRAPH}</p></div>'
            "</body>"
        )

        root = ReaderModeExtractor().extract(soup)

        assert root is not None
        assert root.get("class") == ["copy"]

    def test_noise_containers_removed(self):
        """Test that sidebar-like containers are dropped."""
        soup = _soup(
            f'<body><article><p>{LONG_PARAGRAPH}</p><div class="sidebar">Ads here</div></article></body>'
        )

        root = ReaderModeExtractor().extract(soup)

        assert root is not None
        assert "Ads here" not in root.get_text()

    def test_nothing_readable(self):
        """Test that short documents yield None."""
        soup = _soup("<body><p>Too short</p></body>")

        assert ReaderModeExtractor().extract(soup) is None
