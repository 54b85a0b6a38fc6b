"""Protection of embedded content fragments from blanket cleanup.

Externally-referenced fragments are cleaned, stored in a side table and
replaced by an indexed placeholder comment. Generic removal rules can then
run over the region without touching them; ``restore`` swaps each
placeholder back for its preserved HTML before serialization.
"""

import copy
import logging
import re
from collections.abc import Iterable
from typing import Optional

from bs4 import BeautifulSoup, Comment, PageElement, Tag

from .selector import ContentRegion

logger = logging.getLogger(__name__)

PLACEHOLDER_PREFIX = "XF_REFERENCE_"
_TOKEN_RE = re.compile(rf"^{PLACEHOLDER_PREFIX}(\d+)$")

# Nodes tagged as externally-referenced content
FRAGMENT_SELECTORS: tuple[str, ...] = (
    ".xfreference",
    ".experiencefragment",
    "[data-xf-reference]",
    "[data-fragment-path]",
)

# Stripped from the preserved copy
FRAGMENT_STRIP_TAGS: tuple[str, ...] = (
    "img",
    "picture",
    "source",
    "video",
    "audio",
    "iframe",
    "svg",
    "script",
    "style",
    "noscript",
)

# Attributes surviving on the preserved copy; everything else is decorative/internal
FRAGMENT_KEEP_ATTRS = frozenset({"href", "title", "alt", "colspan", "rowspan"})


def placeholder_token(index: int) -> str:
    return f"{PLACEHOLDER_PREFIX}{index}"


def placeholder_index(node: PageElement) -> Optional[int]:
    """Return the fragment index if *node* is a placeholder comment."""
    if not isinstance(node, Comment):
        return None
    match = _TOKEN_RE.match(str(node).strip())
    return int(match.group(1)) if match else None


def find_placeholders(node: PageElement) -> list[Comment]:
    """All placeholder comments at or below *node*."""
    if placeholder_index(node) is not None:
        return [node]  # type: ignore[list-item]
    if not isinstance(node, Tag):
        return []
    return [c for c in node.find_all(string=lambda s: placeholder_index(s) is not None)]


class FragmentStore:
    """
    Side table of preserved fragments (index -> cleaned HTML).

    Indexes are assigned sequentially, so every placeholder token is
    unique within a run. Fragments removed on purpose (e.g. inside a
    truncated footer) are marked discarded and are not expected back.
    """

    def __init__(self) -> None:
        self._fragments: dict[int, str] = {}
        self._discarded: set[int] = set()

    def __len__(self) -> int:
        return len(self._fragments)

    def __contains__(self, index: object) -> bool:
        return index in self._fragments

    def add(self, html: str) -> int:
        index = len(self._fragments)
        self._fragments[index] = html
        return index

    def get(self, index: int) -> str:
        return self._fragments[index]

    def discard(self, index: int) -> None:
        self._discarded.add(index)

    def pending(self) -> list[int]:
        """Indexes that still have to be restored."""
        return [i for i in self._fragments if i not in self._discarded]


class FragmentPreserver:
    """
    Remove/placeholder/reinsert round trip for embedded fragments.

    Example:
        preserver = FragmentPreserver()
        store = preserver.preserve(region)
        ...  # sanitize, truncate
        preserver.restore(region, store)
    """

    def __init__(self, selectors: tuple[str, ...] = FRAGMENT_SELECTORS):
        self._selector = ", ".join(selectors)

    def preserve(self, region: ContentRegion) -> FragmentStore:
        store = FragmentStore()

        for node in self._outermost(region.root.select(self._selector)):
            clone = copy.copy(node)
            self._clean(clone)

            if not clone.get_text(strip=True):
                logger.debug("Dropping empty fragment")
                node.decompose()
                continue

            index = store.add(str(clone))
            node.replace_with(Comment(placeholder_token(index)))

        logger.debug(f"Preserved {len(store)} fragment(s)")
        return store

    def release(self, store: FragmentStore, removed: Iterable[PageElement]) -> None:
        """Mark fragments inside intentionally removed nodes as discarded."""
        for node in removed:
            for comment in find_placeholders(node):
                index = placeholder_index(comment)
                if index is not None:
                    store.discard(index)

    def restore(self, region: ContentRegion, store: FragmentStore) -> list[int]:
        """
        Substitute every placeholder with its preserved fragment.

        A pending fragment whose placeholder is missing from the tree is
        appended to the end of the region rather than dropped.

        Returns:
            Indexes of fragments whose placeholder was missing
        """
        restored: set[int] = set()

        for comment in find_placeholders(region.root):
            index = placeholder_index(comment)
            if index is None or index not in store:
                comment.extract()
                continue
            comment.replace_with(self._parse(store.get(index)))
            restored.add(index)

        missing = [i for i in store.pending() if i not in restored]
        for index in missing:
            logger.warning(f"Placeholder {placeholder_token(index)} missing, appending fragment")
            region.root.append(self._parse(store.get(index)))

        return missing

    def _outermost(self, nodes: list[Tag]) -> list[Tag]:
        ids = {id(n) for n in nodes}
        return [n for n in nodes if not any(id(p) in ids for p in n.parents)]

    def _clean(self, clone: Tag) -> None:
        for el in clone.find_all(FRAGMENT_STRIP_TAGS):
            el.decompose()

        for tag in [clone, *clone.find_all(True)]:
            tag.attrs = {k: v for k, v in tag.attrs.items() if k in FRAGMENT_KEEP_ATTRS}

    def _parse(self, html: str) -> Tag:
        return BeautifulSoup(html, "html.parser").find(True)  # type: ignore[return-value]
