"""Pipeline step for content region selection."""

import logging
from typing import Optional

from ...extraction.reader import ReaderModeExtractor
from ...extraction.selector import ContentRegionSelector
from ...models.events import EventType, ExtractionEvent
from ..base import EventEmitter, ExtractionContext

logger = logging.getLogger(__name__)


class SelectStep:
    """
    Pipeline step that locates the article body.

    A selector in the run config bypasses the template candidate chain
    and the reader-mode fallback.

    Example:
        step = SelectStep()
        ctx = step.execute(ctx, emit=callback)
        print(ctx.region.selector)
    """

    name = "select"

    def __init__(self, selector: Optional[ContentRegionSelector] = None):
        """
        Initialize the select step.

        Args:
            selector: Region selector (built per run from the config if None)
        """
        self._selector = selector

    def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        soup = ctx.require_soup()
        selector = self._selector or ContentRegionSelector(
            ReaderModeExtractor(min_text_length=ctx.config.reader_min_length)
        )

        if ctx.config.selector:
            ctx.region = selector.select_override(soup, ctx.config.selector, ctx.url)
        else:
            ctx.region = selector.select(soup, ctx.classification, ctx.url)

        if emit:
            emit(
                ExtractionEvent(
                    type=EventType.READER_FALLBACK
                    if ctx.region.used_fallback
                    else EventType.REGION_SELECTED,
                    url=ctx.url,
                    step=self.name,
                    selector=ctx.region.selector,
                )
            )
        return ctx
