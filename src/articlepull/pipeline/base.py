"""Base classes for the extraction pipeline architecture."""

from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol, runtime_checkable

from bs4 import BeautifulSoup

from ..errors import ExtractionError, InternalError
from ..extraction.footer import TruncationOutcome
from ..extraction.fragments import FragmentStore
from ..extraction.selector import ContentRegion
from ..extraction.templates import Classification, TemplateVariant
from ..models.config import ExtractionConfig
from ..models.document import ArticleMetadata, DocumentSnapshot, ExtractionResult
from ..models.events import EventType, ExtractionEvent

# Type alias for event emitter function
EventEmitter = Callable[[ExtractionEvent], None]


@dataclass
class ExtractionContext:
    """
    Context object passed through pipeline steps.

    Holds all state for processing a single document, accumulated as it
    moves through the pipeline. Owned by exactly one run.

    Attributes:
        snapshot: Raw HTML and its source address
        config: Tunables for this run
        soup: Parsed document
        metadata: Head metadata
        classification: Template variant and the marker that decided it
        region: Selected content region
        fragments: Side table of preserved fragments
        truncation: Footer truncation outcome
        lost_fragments: Fragments whose placeholder went missing
        markdown: Serialized Markdown body
        text: Plain-text projection of the Markdown
        error: Error that stopped the run
    """

    snapshot: DocumentSnapshot
    config: ExtractionConfig = field(default_factory=ExtractionConfig)

    soup: Optional[BeautifulSoup] = None
    metadata: ArticleMetadata = field(default_factory=ArticleMetadata)
    classification: Classification = field(
        default_factory=lambda: Classification(variant=TemplateVariant.UNCLASSIFIED)
    )
    region: Optional[ContentRegion] = None
    fragments: Optional[FragmentStore] = None
    truncation: Optional[TruncationOutcome] = None
    lost_fragments: list[int] = field(default_factory=list)

    markdown: Optional[str] = None
    text: Optional[str] = None

    error: Optional[ExtractionError] = None

    @property
    def url(self) -> str:
        return self.snapshot.source_url

    def require_soup(self) -> BeautifulSoup:
        if self.soup is None:
            raise InternalError("Document has not been parsed", url=self.url)
        return self.soup

    def require_region(self) -> ContentRegion:
        if self.region is None:
            raise InternalError("No content region selected", url=self.url)
        return self.region

    def to_result(self) -> ExtractionResult:
        """Build the terminal value once every step has run."""
        if self.markdown is None or self.text is None:
            raise InternalError("Pipeline finished without content", url=self.url)
        return ExtractionResult(
            title=self.metadata.title,
            metadata=self.metadata,
            content=self.markdown,
            text=self.text,
            template_type=self.classification.variant.value,
            selector_used=self.region.selector if self.region else "",
            source_url=self.url,
            body_marker=self.classification.marker or "",
        )


@runtime_checkable
class ExtractionStep(Protocol):
    """
    Protocol for pipeline steps.

    Each step receives an ExtractionContext, processes it, and returns
    the (possibly modified) context.

    Error Handling Contract:
    - For expected outcomes (no region, content too short): raise the
      matching ExtractionError subclass
    - For unexpected failures: let the exception propagate
    - The pipeline stores the error in ctx.error and stops

    Example implementation:
        class ClassifyStep:
            name = "classify"

            def execute(
                self,
                ctx: ExtractionContext,
                emit: Optional[EventEmitter] = None
            ) -> ExtractionContext:
                ctx.classification = self.classifier.classify(ctx.require_soup())
                return ctx
    """

    name: str

    def execute(
        self,
        ctx: ExtractionContext,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        """
        Execute this pipeline step.

        Args:
            ctx: The extraction context with accumulated state
            emit: Optional callback to emit events

        Returns:
            The (possibly modified) extraction context
        """
        ...


@dataclass
class ExtractionPipeline:
    """
    Pipeline for processing a single document through multiple steps.

    Steps are executed in order, synchronously. If a step raises an
    ExtractionError it is stored in ctx.error; any other exception is
    wrapped in InternalError. Either way processing stops.

    Example:
        pipeline = ExtractionPipeline(steps=[
            ParseStep(),
            MetadataStep(),
            ClassifyStep(),
            SelectStep(),
            ConvertStep(),
        ])

        ctx = pipeline.execute(snapshot, emit=log_event)
        if ctx.error:
            logger.error(f"Failed: {ctx.error}")
        else:
            print(ctx.markdown)
    """

    steps: list[ExtractionStep]

    def execute(
        self,
        snapshot: DocumentSnapshot,
        config: Optional[ExtractionConfig] = None,
        emit: Optional[EventEmitter] = None,
    ) -> ExtractionContext:
        """
        Execute the pipeline for a document.

        Args:
            snapshot: Raw HTML and its source address
            config: Tunables for this run (defaults if None)
            emit: Optional callback for emitting events

        Returns:
            ExtractionContext with final state (check error for status)
        """
        ctx = ExtractionContext(snapshot=snapshot, config=config or ExtractionConfig())
        url = snapshot.source_url

        if emit:
            emit(ExtractionEvent(type=EventType.STARTED, url=url))

        for step in self.steps:
            try:
                ctx = step.execute(ctx, emit)
            except ExtractionError as e:
                ctx.error = e
            except Exception as e:
                ctx.error = InternalError(f"{step.name}: {e}", url=url)
                ctx.error.__cause__ = e

            if ctx.error is not None:
                if ctx.error.url is None:
                    ctx.error.url = url
                if emit:
                    emit(
                        ExtractionEvent(
                            type=EventType.FAILED,
                            url=url,
                            step=step.name,
                            error=ctx.error.message,
                        )
                    )
                break

            if emit:
                emit(ExtractionEvent(type=EventType.STEP_COMPLETED, url=url, step=step.name))

        if ctx.error is None and emit:
            emit(ExtractionEvent(type=EventType.COMPLETED, url=url))

        return ctx

    def add_step(self, step: ExtractionStep) -> "ExtractionPipeline":
        """
        Add a step to the pipeline (fluent API).

        Args:
            step: The step to add

        Returns:
            Self for chaining
        """
        self.steps.append(step)
        return self
