"""Event types emitted while an article moves through the pipeline."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional


class EventType(str, Enum):
    """Types of events emitted during extraction."""

    # Lifecycle events
    STARTED = "started"
    COMPLETED = "completed"
    FAILED = "failed"

    # Per-step events
    STEP_COMPLETED = "step_completed"
    TEMPLATE_CLASSIFIED = "template_classified"
    REGION_SELECTED = "region_selected"
    READER_FALLBACK = "reader_fallback"
    FOOTER_TRUNCATED = "footer_truncated"
    FRAGMENT_LOST = "fragment_lost"


@dataclass
class ExtractionEvent:
    """
    Event emitted during an extraction run.

    Example:
        def on_event(event: ExtractionEvent) -> None:
            if event.type == EventType.REGION_SELECTED:
                print(f"Selected {event.selector}")

        pipeline.execute(snapshot, emit=on_event)
    """

    type: EventType

    # Timestamp (always UTC)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # Common fields
    url: Optional[str] = None
    step: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None

    # Typed payload fields for specific events
    template: Optional[str] = None
    selector: Optional[str] = None
