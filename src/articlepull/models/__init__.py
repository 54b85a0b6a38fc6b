"""Articlepull configuration, document and event models."""

from .config import ExtractionConfig, ServiceConfig
from .document import ArticleMetadata, DocumentSnapshot, ExtractionResult, OutputFormat
from .events import EventType, ExtractionEvent

__all__ = [
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
]
