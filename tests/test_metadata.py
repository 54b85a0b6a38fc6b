"""Tests for head metadata extraction."""

from bs4 import BeautifulSoup

from articlepull.extraction.metadata import MetadataExtractor
from articlepull.models.document import ArticleMetadata


def _extract(html: str) -> ArticleMetadata:
    return MetadataExtractor().extract(BeautifulSoup(html, "html.parser"))


class TestMetadataExtractor:
    """Tests for MetadataExtractor."""

    def test_h1_wins_for_title(self):
        """Test that the leading heading is preferred for the title."""
        metadata = _extract(
            '<head><meta property="og:title" content="OG title"></head>'
            "<body><h1>  Layer   basics </h1></body>"
        )

        assert metadata.title == "Layer basics"
        assert metadata.seo_title == "OG title"

    def test_title_suffix_stripped(self):
        """Test that the site suffix is removed from <title>."""
        metadata = _extract("<head><title>Use layers | Adobe Photoshop</title></head><body></body>")

        assert metadata.title == "Use layers"
        # SEO title keeps the full document title
        assert metadata.seo_title == "Use layers | Adobe Photoshop"

    def test_description_fallback_chain(self):
        """Test that og:description is used when description is absent."""
        metadata = _extract(
            '<head><meta property="og:description" content="OG description">'
            '<meta name="twitter:description" content="Twitter description"></head>'
        )

        assert metadata.seo_description == "OG description"

    def test_publish_date_from_time_element(self):
        """Test publish date fallback to a <time datetime> element."""
        metadata = _extract('<body><time datetime="2023-11-02">Nov 2</time></body>')

        assert metadata.publish_date == "2023-11-02"

    def test_publish_date_meta_preferred(self):
        """Test that the publishDate meta wins over <time>."""
        metadata = _extract(
            '<head><meta name="publishDate" content="2024-01-01"></head>'
            '<body><time datetime="2023-11-02"></time></body>'
        )

        assert metadata.publish_date == "2024-01-01"

    def test_missing_metadata_is_empty(self):
        """Test that absent metadata yields empty strings, not errors."""
        metadata = _extract("<body><p>Nothing here</p></body>")

        assert metadata == ArticleMetadata()

    def test_empty_values_are_skipped(self):
        """Test that an empty h1 falls through to the next source."""
        metadata = _extract(
            '<head><meta name="title" content="Meta title"></head><body><h1> </h1></body>'
        )

        assert metadata.title == "Meta title"
