"""Value types flowing through the extraction pipeline."""

from dataclasses import dataclass
from enum import Enum


class OutputFormat(str, Enum):
    """Serialized representations the service can return."""

    JSON = "json"
    MARKDOWN = "markdown"
    TEXT = "text"


@dataclass(frozen=True)
class DocumentSnapshot:
    """
    Raw input for one extraction.

    Created once per request from the upstream fetch result and owned
    by a single pipeline run.

    Attributes:
        raw_html: The page HTML exactly as returned by the provider
        source_url: Fully-qualified address the HTML was fetched from
    """

    raw_html: str
    source_url: str


@dataclass(frozen=True)
class ArticleMetadata:
    """Head metadata of an article. Missing fields are empty strings."""

    title: str = ""
    seo_title: str = ""
    seo_description: str = ""
    publish_date: str = ""


@dataclass(frozen=True)
class ExtractionResult:
    """
    Terminal value of a successful pipeline run.

    Attributes:
        title: Article title
        metadata: Resolved head metadata
        content: Markdown body of the article
        text: Flattened plain-text projection of ``content``
        template_type: Name of the classified template variant
        selector_used: Selector (or reader-mode marker) that produced the region
        source_url: Address the article was fetched from
        body_marker: Structural marker that decided the classification
    """

    title: str
    metadata: ArticleMetadata
    content: str
    text: str
    template_type: str
    selector_used: str
    source_url: str = ""
    body_marker: str = ""

    def debug_info(self) -> dict[str, object]:
        """Diagnostic fields exposed when debug output is requested."""
        return {
            "template_type": self.template_type,
            "selector_used": self.selector_used,
            "body_marker": self.body_marker,
            "content_length": len(self.content),
        }
