"""Content region selection with reader-mode fallback."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

import soupsieve
from bs4 import BeautifulSoup, Tag

from ..errors import InvalidParameter, NoContentFound
from .reader import ReaderModeExtractor
from .templates import Classification

logger = logging.getLogger(__name__)

# Recorded as the selector when the reader-mode extractor produced the region
READER_MODE_SELECTOR = "reader-mode"


@dataclass
class ContentRegion:
    """
    Handle on the article subtree.

    The root node keeps its identity for the whole pipeline run; stages
    remove and reinsert nodes inside it but never replace it.

    Attributes:
        root: Root element of the article body
        selector: Selector that produced the region
        used_fallback: True when reader mode produced the region
    """

    root: Tag
    selector: str
    used_fallback: bool = False

    def text_length(self) -> int:
        return len(self.root.get_text(strip=True))


def available_selectors(soup: BeautifulSoup, limit: int = 10) -> list[dict[str, Any]]:
    """List identifiable containers of *soup* for not-found diagnostics."""
    found = []
    for el in soup.select("div[id], div[class]")[:limit]:
        found.append(
            {
                "tag": el.name,
                "id": el.get("id"),
                "class": " ".join(el.get("class") or []) or None,
            }
        )
    return found


class ContentRegionSelector:
    """
    Picks the article body for a classified document.

    Walks the variant's candidate selectors in order and accepts the first
    match whose text is longer than the variant threshold. When every
    candidate fails, or the document is unclassified, the reader-mode
    extractor runs over the whole document.

    Example:
        selector = ContentRegionSelector()
        region = selector.select(soup, classification, url)
        print(region.selector)
    """

    def __init__(self, reader: Optional[ReaderModeExtractor] = None):
        self._reader = reader or ReaderModeExtractor()

    def select(
        self,
        soup: BeautifulSoup,
        classification: Classification,
        url: str = "",
    ) -> ContentRegion:
        """
        Select the content region.

        Raises:
            NoContentFound: If candidates and reader mode are all exhausted
        """
        profile = classification.profile

        for selector in profile.candidates:
            node = soup.select_one(selector)
            if node is None:
                logger.debug(f"Candidate {selector!r} did not match")
                continue

            length = len(node.get_text(strip=True))
            if length > profile.min_text_length:
                logger.debug(f"Selected region {selector!r} ({length} chars)")
                return ContentRegion(root=node, selector=selector)

            logger.debug(
                f"Candidate {selector!r} too short ({length} <= {profile.min_text_length})"
            )

        logger.info(f"Falling back to reader mode for {url} ({classification.variant.value})")
        root = self._reader.extract(soup, url)
        if root is None:
            raise NoContentFound(
                "No content region found",
                url=url,
                details={"available_selectors": available_selectors(soup)},
            )
        return ContentRegion(root=root, selector=READER_MODE_SELECTOR, used_fallback=True)

    def select_override(self, soup: BeautifulSoup, selector: str, url: str = "") -> ContentRegion:
        """
        Select the region with a caller-supplied selector, bypassing the chain.

        Raises:
            InvalidParameter: If the selector cannot be parsed
            NoContentFound: If the selector matches nothing
        """
        try:
            node = soup.select_one(selector)
        except soupsieve.SelectorSyntaxError as e:
            raise InvalidParameter(f"Invalid selector {selector!r}: {e}", url=url) from e

        if node is None:
            raise NoContentFound(
                f"No content found with selector: {selector}",
                url=url,
                details={"available_selectors": available_selectors(soup)},
            )
        return ContentRegion(root=node, selector=selector)
