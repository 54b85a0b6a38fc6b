"""Tests for template classification."""

from bs4 import BeautifulSoup

from articlepull.extraction.templates import (
    DEXTER_PROFILE,
    EDGE_PROFILE,
    TemplateClassifier,
    TemplateVariant,
    get_profile,
)


def _soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


class TestTemplateClassifier:
    """Tests for TemplateClassifier."""

    def test_classifies_flex_container_as_dexter(self):
        """Test that the flex root marks the component layout."""
        soup = _soup('<body><div id="root_content_flex"><p>x</p></div></body>')

        result = TemplateClassifier().classify(soup)

        assert result.variant is TemplateVariant.DEXTER
        assert result.marker == "#root_content_flex"

    def test_classifies_article_body_as_edge(self):
        """Test that main .article-body marks the section layout."""
        soup = _soup('<body><main><div class="article-body"><p>x</p></div></main></body>')

        result = TemplateClassifier().classify(soup)

        assert result.variant is TemplateVariant.EDGE
        assert result.marker == "main .article-body"

    def test_classifies_body_class_as_edge(self):
        """Test that a body class is enough to identify the section layout."""
        soup = _soup('<body class="page helpx-article"><p>x</p></body>')

        assert TemplateClassifier().classify(soup).variant is TemplateVariant.EDGE

    def test_dexter_wins_when_both_match(self):
        """Test that classification priority is deterministic."""
        soup = _soup(
            '<body><div id="root_content_flex"></div>'
            '<main><div class="article-body"></div></main></body>'
        )

        assert TemplateClassifier().classify(soup).variant is TemplateVariant.DEXTER

    def test_unmarked_document_is_unclassified(self):
        """Test that documents without markers are unclassified."""
        soup = _soup("<body><article><p>Plain page</p></article></body>")

        result = TemplateClassifier().classify(soup)

        assert result.variant is TemplateVariant.UNCLASSIFIED
        assert result.marker is None
        assert result.profile.candidates == ()

    def test_markers_match_exactly(self):
        """Test that a similar but different id does not match."""
        soup = _soup('<body><div id="root_content_flex2"></div></body>')

        assert TemplateClassifier().classify(soup).variant is TemplateVariant.UNCLASSIFIED

    def test_custom_profiles(self):
        """Test classification with a restricted profile list."""
        soup = _soup('<body><div id="root_content_flex"></div></body>')

        result = TemplateClassifier(profiles=(EDGE_PROFILE,)).classify(soup)

        assert result.variant is TemplateVariant.UNCLASSIFIED


class TestProfiles:
    """Tests for template profile lookup."""

    def test_get_profile(self):
        """Test variant to profile lookup."""
        assert get_profile(TemplateVariant.DEXTER) is DEXTER_PROFILE
        assert get_profile(TemplateVariant.EDGE) is EDGE_PROFILE

    def test_thresholds(self):
        """Test per-variant minimum text lengths."""
        assert DEXTER_PROFILE.min_text_length == 200
        assert EDGE_PROFILE.min_text_length == 100
