"""ArticleExtractor facade over the extraction pipeline."""

from __future__ import annotations

import logging
from typing import Union

from ..formatters import get_formatter
from ..models.config import ExtractionConfig
from ..models.document import DocumentSnapshot, ExtractionResult, OutputFormat
from ..pipeline.base import EventEmitter, ExtractionPipeline, ExtractionStep
from ..pipeline.steps import (
    ClassifyStep,
    ConvertStep,
    MetadataStep,
    NormalizeTablesStep,
    ParseStep,
    PreserveFragmentsStep,
    ProjectTextStep,
    RestoreFragmentsStep,
    SanitizeStep,
    SelectStep,
    TruncateFooterStep,
)

logger = logging.getLogger(__name__)


def default_steps() -> list[ExtractionStep]:
    """Build the standard step sequence, in execution order."""
    return [
        ParseStep(),
        MetadataStep(),
        ClassifyStep(),
        SelectStep(),
        PreserveFragmentsStep(),
        SanitizeStep(),
        TruncateFooterStep(),
        RestoreFragmentsStep(),
        NormalizeTablesStep(),
        ConvertStep(),
        ProjectTextStep(),
    ]


class ArticleExtractor:
    """
    Primary API: raw help-center HTML in, article representation out.

    Each call runs a fresh pipeline context, so one extractor can serve
    concurrent requests.

    Example:
        extractor = ArticleExtractor()
        snapshot = DocumentSnapshot(raw_html=html, source_url=url)

        result = extractor.extract(snapshot)
        print(result.template_type, result.selector_used)

        body, content_type = extractor.render(snapshot, OutputFormat.TEXT)
    """

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        steps: list[ExtractionStep] | None = None,
    ):
        """
        Initialize the extractor.

        Args:
            config: Default tunables for every run
            steps: Custom step sequence (uses default_steps() if None)
        """
        self.config = config or ExtractionConfig()
        self._steps = steps

    def _pipeline(self) -> ExtractionPipeline:
        return ExtractionPipeline(steps=self._steps if self._steps is not None else default_steps())

    def extract(
        self,
        snapshot: DocumentSnapshot,
        selector: str | None = None,
        emit: EventEmitter | None = None,
    ) -> ExtractionResult:
        """
        Run the pipeline over a snapshot.

        Args:
            snapshot: Raw HTML and its source address
            selector: CSS selector overriding the template candidate chain
            emit: Optional callback for pipeline events

        Returns:
            ExtractionResult for the article

        Raises:
            ExtractionError: The typed failure that stopped the pipeline
        """
        config = self.config
        if selector:
            config = config.model_copy(update={"selector": selector})

        ctx = self._pipeline().execute(snapshot, config, emit)
        if ctx.error is not None:
            logger.debug(f"Extraction failed for {snapshot.source_url}: {ctx.error}")
            raise ctx.error

        result = ctx.to_result()
        logger.info(
            f"Extracted {snapshot.source_url} ({result.template_type}, "
            f"{result.selector_used}, {len(result.content)} chars)"
        )
        return result

    def render(
        self,
        snapshot: DocumentSnapshot,
        output_format: Union[str, OutputFormat] = OutputFormat.JSON,
        debug: bool = False,
        selector: str | None = None,
        emit: EventEmitter | None = None,
    ) -> tuple[str, str]:
        """
        Extract and serialize in one call.

        Args:
            snapshot: Raw HTML and its source address
            output_format: Target representation
            debug: Include diagnostic fields
            selector: CSS selector overriding the template candidate chain
            emit: Optional callback for pipeline events

        Returns:
            Tuple of (serialized body, content type)

        Raises:
            ExtractionError: On any pipeline failure, including ContentTooShort
        """
        formatter = get_formatter(
            output_format,
            min_content_length=self.config.min_content_length,
            metadata_max_length=self.config.metadata_max_length,
        )
        result = self.extract(snapshot, selector=selector, emit=emit)
        return formatter.render(result, debug), formatter.content_type
