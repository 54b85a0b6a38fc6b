"""Boilerplate footer truncation."""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from bs4 import PageElement

from .selector import ContentRegion

logger = logging.getLogger(__name__)

# Lower-cased heading prefixes that open a call-to-action footer
FOOTER_MARKERS: tuple[str, ...] = (
    "more like this",
    "talk to us",
    "have a question",
    "related resources",
    "share this page",
    "was this helpful",
    "ask the community",
    "get help faster",
    "still need help",
)

HEADING_TAGS: tuple[str, ...] = ("h1", "h2", "h3", "h4", "h5", "h6")

_WHITESPACE_RE = re.compile(r"\s+")


class TruncationState(str, Enum):
    SCANNING = "scanning"
    TRUNCATED = "truncated"


@dataclass
class TruncationOutcome:
    """
    Result of one truncation run.

    Attributes:
        state: Final machine state
        marker: The phrase that matched, if any
        removed: Detached nodes (heading first, then the nodes after it, innermost first)
    """

    state: TruncationState = TruncationState.SCANNING
    marker: Optional[str] = None
    removed: list[PageElement] = field(default_factory=list)

    @property
    def truncated(self) -> bool:
        return self.state is TruncationState.TRUNCATED


def match_marker(text: str, markers: tuple[str, ...] = FOOTER_MARKERS) -> Optional[str]:
    """Return the marker *text* starts with, if any."""
    normalized = _WHITESPACE_RE.sub(" ", text).strip().lower()
    for marker in markers:
        if normalized.startswith(marker):
            return marker
    return None


class FooterTruncator:
    """
    Two-state scanner that cuts the call-to-action block off an article.

    While SCANNING, headings are visited in document order. The first
    heading whose text starts with a footer marker is detached together
    with everything after it in the region: its own following siblings,
    then the following siblings of each wrapper up to the region root.
    The machine then moves to TRUNCATED.
    Articles without a footer stay SCANNING and are left untouched.

    Removed nodes are detached rather than destroyed so callers can
    inspect them; they are no longer part of the region.
    """

    def __init__(self, markers: tuple[str, ...] = FOOTER_MARKERS):
        self._markers = markers

    def truncate(self, region: ContentRegion) -> TruncationOutcome:
        outcome = TruncationOutcome()

        for heading in region.root.find_all(HEADING_TAGS):
            if outcome.state is TruncationState.TRUNCATED:
                break

            marker = match_marker(heading.get_text(" "), self._markers)
            if marker is None:
                continue

            following = list(heading.next_siblings)
            for ancestor in heading.parents:
                if ancestor is region.root:
                    break
                following.extend(ancestor.next_siblings)

            outcome.removed.append(heading.extract())
            outcome.removed.extend(node.extract() for node in following)

            outcome.state = TruncationState.TRUNCATED
            outcome.marker = marker
            logger.debug(f"Truncated footer at {marker!r} ({len(outcome.removed)} node(s))")

        return outcome
