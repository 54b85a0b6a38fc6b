"""Pipeline steps for table normalization and serialization."""

import logging
from typing import Optional

from ...conversion.markdown import HtmlToMarkdown
from ...conversion.plaintext import PlainTextProjector
from ...extraction.tables import TableNormalizer
from ..base import EventEmitter, ExtractionContext

logger = logging.getLogger(__name__)


class NormalizeTablesStep:
    """Pipeline step that rewrites tables into serialization-safe form."""

    name = "tables"

    def __init__(self, normalizer: Optional[TableNormalizer] = None):
        self._normalizer = normalizer or TableNormalizer()

    def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        self._normalizer.normalize(ctx.require_region())
        return ctx


class ConvertStep:
    """
    Pipeline step that converts the cleaned region to Markdown.

    Reads from ctx.region, writes to ctx.markdown.

    Example:
        step = ConvertStep()
        ctx = step.execute(ctx)
        print(ctx.markdown)
    """

    name = "convert"

    def __init__(self, converter: Optional[HtmlToMarkdown] = None):
        self._converter = converter or HtmlToMarkdown()

    def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        region = ctx.require_region()
        ctx.markdown = self._converter.convert(str(region.root), ctx.url)
        logger.debug(f"Converted {ctx.url}: {len(ctx.markdown)} chars of Markdown")
        return ctx


class ProjectTextStep:
    """Pipeline step that derives the plain-text projection."""

    name = "project"

    def __init__(self, projector: Optional[PlainTextProjector] = None):
        self._projector = projector or PlainTextProjector()

    def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        ctx.text = self._projector.project(ctx.markdown or "")
        return ctx
