"""Article metadata extraction from the document head."""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup, Tag

from ..models.document import ArticleMetadata

logger = logging.getLogger(__name__)

# "Page title | Site name" / "Page title - Site name"
_TITLE_SUFFIX_RE = re.compile(r"\s+[|\-–—:]\s+[^|\-–—:]*$")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class MetaSource:
    """
    One place a metadata value can come from.

    Attributes:
        selector: CSS selector for the element
        attribute: Attribute holding the value (None = element text)
        strip_suffix: Remove a trailing " | Site name" style suffix
    """

    selector: str
    attribute: Optional[str] = None
    strip_suffix: bool = False


TITLE_SOURCES: tuple[MetaSource, ...] = (
    MetaSource("h1"),
    MetaSource('meta[name="title"]', "content"),
    MetaSource('meta[property="og:title"]', "content"),
    MetaSource("title", strip_suffix=True),
)

SEO_TITLE_SOURCES: tuple[MetaSource, ...] = (
    MetaSource('meta[name="seo-title"]', "content"),
    MetaSource('meta[property="og:title"]', "content"),
    MetaSource('meta[name="twitter:title"]', "content"),
    MetaSource("title"),
)

DESCRIPTION_SOURCES: tuple[MetaSource, ...] = (
    MetaSource('meta[name="description"]', "content"),
    MetaSource('meta[property="og:description"]', "content"),
    MetaSource('meta[name="twitter:description"]', "content"),
)

PUBLISH_DATE_SOURCES: tuple[MetaSource, ...] = (
    MetaSource('meta[name="publishDate"]', "content"),
    MetaSource('meta[name="publish-date"]', "content"),
    MetaSource('meta[property="article:published_time"]', "content"),
    MetaSource('meta[itemprop="datePublished"]', "content"),
    MetaSource("time[datetime]", "datetime"),
)


class MetadataExtractor:
    """
    Resolves title, SEO and publish-date fields via prioritized fallbacks.

    Each field walks its own source table and keeps the first non-empty
    value. Absence of metadata is never an error.

    Example:
        extractor = MetadataExtractor()
        metadata = extractor.extract(soup)
        print(metadata.title, metadata.publish_date)
    """

    def extract(self, soup: BeautifulSoup) -> ArticleMetadata:
        title = self._resolve(soup, TITLE_SOURCES)
        seo_title = self._resolve(soup, SEO_TITLE_SOURCES) or title
        metadata = ArticleMetadata(
            title=title,
            seo_title=seo_title,
            seo_description=self._resolve(soup, DESCRIPTION_SOURCES),
            publish_date=self._resolve(soup, PUBLISH_DATE_SOURCES),
        )
        logger.debug(f"Extracted metadata: {metadata}")
        return metadata

    def _resolve(self, soup: BeautifulSoup, sources: tuple[MetaSource, ...]) -> str:
        for source in sources:
            value = self._read(soup, source)
            if value:
                return value
        return ""

    def _read(self, soup: BeautifulSoup, source: MetaSource) -> str:
        element = soup.select_one(source.selector)
        if not isinstance(element, Tag):
            return ""

        if source.attribute:
            raw = element.get(source.attribute)
            if isinstance(raw, list):
                raw = " ".join(raw)
            value = str(raw or "")
        else:
            value = element.get_text(" ")

        value = _WHITESPACE_RE.sub(" ", value).strip()
        if source.strip_suffix:
            value = _TITLE_SUFFIX_RE.sub("", value).strip()
        return value
