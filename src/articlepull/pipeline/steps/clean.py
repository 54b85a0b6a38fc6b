"""Pipeline steps that clean the selected region.

Fragment preservation brackets the destructive steps: fragments are
swapped for placeholders before sanitizing and truncation, and swapped
back afterwards.
"""

import logging
from typing import Optional

from bs4 import Tag

from ...extraction.footer import FooterTruncator
from ...extraction.fragments import FragmentPreserver, FragmentStore, placeholder_token
from ...extraction.sanitizer import Sanitizer
from ...models.events import EventType, ExtractionEvent
from ..base import EventEmitter, ExtractionContext

logger = logging.getLogger(__name__)


class PreserveFragmentsStep:
    """Pipeline step that replaces embedded fragments with placeholders."""

    name = "preserve"

    def __init__(self, preserver: Optional[FragmentPreserver] = None):
        self._preserver = preserver or FragmentPreserver()

    def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        ctx.fragments = self._preserver.preserve(ctx.require_region())
        return ctx


class SanitizeStep:
    """Pipeline step that strips chrome, media and empty nodes."""

    name = "sanitize"

    def __init__(self, sanitizer: Optional[Sanitizer] = None):
        self._sanitizer = sanitizer or Sanitizer()

    def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        removed = self._sanitizer.sanitize(ctx.require_region(), ctx.classification.variant)
        logger.debug(f"Sanitized {ctx.url}: {removed} node(s) removed")
        return ctx


class TruncateFooterStep:
    """
    Pipeline step that cuts the boilerplate footer off the region.

    Fragments inside the removed footer are released from the side table
    so their absence is not reported as a lost fragment.
    """

    name = "truncate"

    def __init__(
        self,
        truncator: Optional[FooterTruncator] = None,
        preserver: Optional[FragmentPreserver] = None,
    ):
        self._truncator = truncator or FooterTruncator()
        self._preserver = preserver or FragmentPreserver()

    def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        outcome = self._truncator.truncate(ctx.require_region())
        ctx.truncation = outcome
        if not outcome.truncated:
            return ctx

        if ctx.fragments is not None:
            self._preserver.release(ctx.fragments, outcome.removed)
        for node in outcome.removed:
            if isinstance(node, Tag):
                node.decompose()

        logger.info(f"Truncated footer of {ctx.url} at {outcome.marker!r}")
        if emit:
            emit(
                ExtractionEvent(
                    type=EventType.FOOTER_TRUNCATED,
                    url=ctx.url,
                    step=self.name,
                    message=outcome.marker,
                )
            )
        return ctx


class RestoreFragmentsStep:
    """Pipeline step that swaps placeholders back for their fragments."""

    name = "restore"

    def __init__(self, preserver: Optional[FragmentPreserver] = None):
        self._preserver = preserver or FragmentPreserver()

    def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        store = ctx.fragments if ctx.fragments is not None else FragmentStore()
        ctx.lost_fragments = self._preserver.restore(ctx.require_region(), store)

        if emit:
            for index in ctx.lost_fragments:
                emit(
                    ExtractionEvent(
                        type=EventType.FRAGMENT_LOST,
                        url=ctx.url,
                        step=self.name,
                        message=placeholder_token(index),
                    )
                )
        return ctx
