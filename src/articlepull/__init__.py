"""
articlepull - Extract help-center articles as JSON, Markdown or plain text.

Usage:
    from articlepull import ArticleExtractor, DocumentSnapshot, OutputFormat

    extractor = ArticleExtractor()
    snapshot = DocumentSnapshot(raw_html=html, source_url="https://helpx.adobe.com/x.html")

    result = extractor.extract(snapshot)
    body, content_type = extractor.render(snapshot, OutputFormat.MARKDOWN)
"""

__version__ = "1.0.0"

from .core.extractor import ArticleExtractor
from .errors import (
    ContentTooShort,
    ExtractionError,
    InternalError,
    InvalidParameter,
    MissingParameter,
    NoContentFound,
    UpstreamUnavailable,
)
from .http.client import ScrapeClient
from .models.config import ExtractionConfig, ServiceConfig
from .models.document import ArticleMetadata, DocumentSnapshot, ExtractionResult, OutputFormat
from .models.events import EventType, ExtractionEvent

__all__ = [
    "__version__",
    # Core
    "ArticleExtractor",
    "ScrapeClient",
    # Config
    "ExtractionConfig",
    "ServiceConfig",
    # Documents
    "ArticleMetadata",
    "DocumentSnapshot",
    "ExtractionResult",
    "OutputFormat",
    # Events
    "EventType",
    "ExtractionEvent",
    # Errors
    "ExtractionError",
    "MissingParameter",
    "InvalidParameter",
    "UpstreamUnavailable",
    "NoContentFound",
    "ContentTooShort",
    "InternalError",
]
