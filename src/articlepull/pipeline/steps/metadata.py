"""Pipeline step for head metadata extraction."""

import logging
from typing import Optional

from ...extraction.metadata import MetadataExtractor
from ..base import EventEmitter, ExtractionContext

logger = logging.getLogger(__name__)


class MetadataStep:
    """
    Pipeline step that resolves title, SEO fields and publish date.

    Runs against the full document before any cleanup so that head
    elements and the leading <h1> are still present. Missing metadata
    leaves empty strings and never fails the run.
    """

    name = "metadata"

    def __init__(self, extractor: Optional[MetadataExtractor] = None):
        self._extractor = extractor or MetadataExtractor()

    def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        ctx.metadata = self._extractor.extract(ctx.require_soup())
        if not ctx.metadata.title:
            logger.debug(f"No title found for {ctx.url}")
        return ctx
