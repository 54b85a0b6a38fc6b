"""Pipeline step for template classification."""

import logging
from typing import Optional

from ...extraction.templates import TemplateClassifier
from ...models.events import EventType, ExtractionEvent
from ..base import EventEmitter, ExtractionContext

logger = logging.getLogger(__name__)


class ClassifyStep:
    """Pipeline step that assigns a template variant to the document."""

    name = "classify"

    def __init__(self, classifier: Optional[TemplateClassifier] = None):
        self._classifier = classifier or TemplateClassifier()

    def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        ctx.classification = self._classifier.classify(ctx.require_soup())
        variant = ctx.classification.variant.value
        logger.info(f"Classified {ctx.url} as {variant}")

        if emit:
            emit(
                ExtractionEvent(
                    type=EventType.TEMPLATE_CLASSIFIED,
                    url=ctx.url,
                    step=self.name,
                    template=variant,
                    message=ctx.classification.marker,
                )
            )
        return ctx
