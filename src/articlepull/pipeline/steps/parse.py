"""Pipeline step that parses the raw HTML snapshot."""

import logging
from typing import Optional

from bs4 import BeautifulSoup

from ...errors import UpstreamUnavailable
from ..base import EventEmitter, ExtractionContext

logger = logging.getLogger(__name__)


class ParseStep:
    """
    Pipeline step that builds the document tree.

    Example:
        step = ParseStep()
        ctx = step.execute(ctx)
        # ctx.soup now holds the parsed document
    """

    name = "parse"

    def __init__(self, parser: str = "html.parser"):
        self._parser = parser

    def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        if not ctx.snapshot.raw_html.strip():
            raise UpstreamUnavailable("Upstream returned no HTML", url=ctx.url)

        ctx.soup = BeautifulSoup(ctx.snapshot.raw_html, self._parser)
        logger.debug(f"Parsed {len(ctx.snapshot.raw_html)} bytes of HTML from {ctx.url}")
        return ctx
