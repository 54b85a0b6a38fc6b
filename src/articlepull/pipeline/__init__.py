"""Pipeline architecture for article extraction."""

from .base import EventEmitter, ExtractionContext, ExtractionPipeline, ExtractionStep

__all__ = ["EventEmitter", "ExtractionContext", "ExtractionPipeline", "ExtractionStep"]
