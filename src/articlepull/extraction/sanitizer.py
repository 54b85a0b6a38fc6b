"""Structural cleanup of the selected content region."""

import logging
from typing import Optional

from bs4 import Tag

from .fragments import find_placeholders
from .selector import ContentRegion
from .templates import TemplateVariant, get_profile

logger = logging.getLogger(__name__)

NAVIGATION_SELECTORS: tuple[str, ...] = (
    "nav",
    '[role="navigation"]',
    ".breadcrumb",
    ".breadcrumbs",
    '[role="search"]',
    ".search",
    ".search-box",
    ".toc",
    ".mini-toc",
    ".table-of-contents",
)

SITE_CHROME_SELECTORS: tuple[str, ...] = (
    "header",
    "footer",
    '[role="banner"]',
    '[role="contentinfo"]',
    ".globalnav",
    ".globalfooter",
    ".site-header",
    ".site-footer",
)

WIDGET_SELECTORS: tuple[str, ...] = (
    ".feedback",
    ".helpful",
    ".was-this-helpful",
    ".social-share",
    ".share",
    ".pagination",
    ".pager",
)

PROMO_SELECTORS: tuple[str, ...] = (
    ".promo",
    ".promotion",
    ".card",
    ".cards",
    ".banner",
)

MEDIA_SELECTORS: tuple[str, ...] = (
    "img",
    "picture",
    "video",
    "audio",
    "iframe",
    "embed",
    "object",
    "canvas",
    "svg",
)

CODE_SELECTORS: tuple[str, ...] = (
    "script",
    "style",
    "noscript",
    "template",
    "link",
)

REMOVE_SELECTORS: tuple[str, ...] = (
    NAVIGATION_SELECTORS
    + SITE_CHROME_SELECTORS
    + WIDGET_SELECTORS
    + PROMO_SELECTORS
    + MEDIA_SELECTORS
    + CODE_SELECTORS
)

# Elements that stay even when they carry no text
KEEP_WHEN_EMPTY = frozenset({"br", "hr", "td", "th", "tr", "col", "colgroup", "input"})


class Sanitizer:
    """
    Removes chrome, tracking, media and empty-node clutter from a region.

    One pass removes every node matching the fixed selector union (plus the
    variant's cleanup selectors), then deletes elements left with no text
    and no element children. Fragment placeholders inside removed nodes
    are kept in place. Running it twice removes nothing the second time.

    Example:
        sanitizer = Sanitizer()
        removed = sanitizer.sanitize(region, TemplateVariant.DEXTER)
    """

    def __init__(self, extra_selectors: Optional[list[str]] = None):
        self._selectors = list(REMOVE_SELECTORS)
        if extra_selectors:
            self._selectors.extend(extra_selectors)

    def sanitize(
        self,
        region: ContentRegion,
        variant: TemplateVariant = TemplateVariant.UNCLASSIFIED,
    ) -> int:
        """
        Clean *region* in place.

        Returns:
            Number of nodes removed
        """
        selectors = self._selectors + list(get_profile(variant).cleanup_selectors)
        removed = 0

        for el in region.root.select(", ".join(selectors)):
            # Already detached along with a removed ancestor
            if el.decomposed or not self._attached(el, region.root):
                continue
            self._remove(el)
            removed += 1

        removed += self._remove_empty(region.root)
        logger.debug(f"Sanitizer removed {removed} node(s)")
        return removed

    def _remove(self, el: Tag) -> None:
        placeholders = find_placeholders(el)
        for comment in placeholders:
            el.insert_before(comment.extract())
        el.decompose()

    def _remove_empty(self, root: Tag) -> int:
        removed = 0
        # Reverse document order visits children before their parents
        for el in reversed(root.find_all(True)):
            if el.name in KEEP_WHEN_EMPTY:
                continue
            if el.find(True) is not None or el.get_text(strip=True):
                continue
            if find_placeholders(el):
                continue
            el.decompose()
            removed += 1
        return removed

    def _attached(self, el: Tag, root: Tag) -> bool:
        return any(parent is root for parent in el.parents)
