"""Reader-mode extraction: selector-independent main-content heuristic.

Works on a private copy of the whole document:

1. Strip boilerplate tags and noise containers (by class/id substring).
2. Try generic article selectors; keep the first long enough match.
3. Score every <div>/<section>/<article> by paragraph density.
4. Fall back to <body>.
"""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# Priority selectors for generic article markup (tried in order)
READER_SELECTORS: tuple[str, ...] = (
    "article",
    '[itemprop="articleBody"]',
    '[role="main"]',
    "main",
    ".article-content",
    ".article-body",
    ".post-content",
    ".entry-content",
    "#content",
    "#main-content",
)

# Tags stripped before any scoring
BOILERPLATE_TAGS: tuple[str, ...] = (
    "nav",
    "header",
    "footer",
    "aside",
    "script",
    "style",
    "noscript",
    "form",
    "button",
    "template",
)

# Class/id substrings that indicate non-content containers
NOISE_SUBSTRINGS: tuple[str, ...] = (
    "sidebar",
    "comment",
    "advert",
    "banner",
    "promo",
    "related",
    "social",
    "newsletter",
    "cookie",
    "popup",
    "modal",
)

# A container holding at least this share of body text is returned on its own
_DOMINANCE_RATIO = 0.55


def _text_length(tag: Tag) -> int:
    return len(tag.get_text(strip=True))


def _is_noisy(tag: Tag) -> bool:
    combined = " ".join(
        [
            " ".join(tag.get("class") or []),
            str(tag.get("id") or ""),
            str(tag.get("role") or ""),
        ]
    ).lower()
    return any(noise in combined for noise in NOISE_SUBSTRINGS)


def _paragraph_score(tag: Tag) -> tuple[int, float]:
    """Return (paragraph_text_length, score) for density ranking."""
    para_len = sum(len(p.get_text(strip=True)) for p in tag.find_all("p"))
    total_len = max(_text_length(tag), 1)
    return para_len, para_len * (para_len / total_len)


class ReaderModeExtractor:
    """
    Generic main-content extractor for documents no template matches.

    Example:
        reader = ReaderModeExtractor(min_text_length=100)
        root = reader.extract(soup, "https://example.com/page")
        if root is None:
            print("nothing readable")
    """

    def __init__(self, min_text_length: int = 100):
        self._min_text_length = min_text_length

    def extract(self, soup: BeautifulSoup, url: str = "") -> Optional[Tag]:
        """
        Produce a content subtree from the whole document.

        Args:
            soup: Parsed document (left untouched)
            url: Source URL, for logging

        Returns:
            Root of the readable content, or None if nothing is long enough
        """
        doc = BeautifulSoup(str(soup), "html.parser")
        self._strip_boilerplate(doc)

        for selector in READER_SELECTORS:
            node = doc.select_one(selector)
            if isinstance(node, Tag) and _text_length(node) > self._min_text_length:
                logger.debug(f"Reader mode matched {selector!r} for {url}")
                return node

        best = self._densest(doc)
        body = doc.find("body")
        if best is not None:
            body_len = _text_length(body) if isinstance(body, Tag) else 0
            if body_len == 0 or _text_length(best) / body_len >= _DOMINANCE_RATIO:
                logger.debug(f"Reader mode picked dense <{best.name}> for {url}")
                return best

        # Content spread over equal-weight sections: keep the whole body
        if isinstance(body, Tag) and _text_length(body) > self._min_text_length:
            logger.debug(f"Reader mode fell back to <body> for {url}")
            return body

        logger.debug(f"Reader mode found nothing readable in {url}")
        return None

    def _strip_boilerplate(self, doc: BeautifulSoup) -> None:
        for el in doc.find_all(BOILERPLATE_TAGS):
            el.decompose()

        for el in doc.find_all(["div", "section", "aside"]):
            if not el.decomposed and _is_noisy(el):
                el.decompose()

    def _densest(self, doc: BeautifulSoup) -> Optional[Tag]:
        candidates: list[tuple[float, Tag]] = []
        for el in doc.find_all(["div", "section", "article"]):
            para_len, score = _paragraph_score(el)
            if para_len > self._min_text_length:
                candidates.append((score, el))

        if not candidates:
            return None
        candidates.sort(key=lambda c: c[0], reverse=True)
        return candidates[0][1]
