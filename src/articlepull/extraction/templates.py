"""Help-center template variants and their classification.

Each variant is described by data only: the structural markers that
identify it, the ordered candidate selectors for its article body, the
text-length threshold a candidate must exceed and the extra cleanup
selectors applied by the sanitizer. New page layouts are added by
appending a profile to ``TEMPLATE_PROFILES``.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)


class TemplateVariant(str, Enum):
    """Page-layout families of the help center."""

    # Component-based layout (flex containers around a #position column)
    DEXTER = "dexter"
    # Section-based layout served from edge-rendered documents
    EDGE = "edge"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class TemplateProfile:
    """
    Immutable configuration for one template variant.

    Attributes:
        variant: The variant this profile describes
        markers: Selectors whose presence identifies the variant
        candidates: Content-region selectors, tried in order
        min_text_length: A candidate's text must be longer than this
        cleanup_selectors: Variant-specific chrome removed by the sanitizer
    """

    variant: TemplateVariant
    markers: tuple[str, ...]
    candidates: tuple[str, ...]
    min_text_length: int
    cleanup_selectors: tuple[str, ...] = ()


DEXTER_PROFILE = TemplateProfile(
    variant=TemplateVariant.DEXTER,
    markers=(
        "#root_content_flex",
        ".dexter-FlexContainer",
        '[data-template="dexter"]',
    ),
    candidates=(
        "#position",
        "#root_content_flex .helpxMain-article",
        ".helpxMain-article",
        "#root_content_flex .position",
        "#root_content_flex",
    ),
    min_text_length=200,
    cleanup_selectors=(
        ".dexter-Spacer",
        ".dexter-BackToTop",
        ".helpxFeedback",
        ".planCard",
        ".productCard",
    ),
)

EDGE_PROFILE = TemplateProfile(
    variant=TemplateVariant.EDGE,
    markers=(
        'meta[name="template"][content~="article"]',
        "main .article-body",
        "body.helpx-article",
    ),
    candidates=(
        "main .article-body",
        "main .article-content",
        "main .section",
        "main",
    ),
    min_text_length=100,
    cleanup_selectors=(
        ".article-metadata",
        ".related-articles",
        ".section.cta",
        ".modal",
    ),
)

UNCLASSIFIED_PROFILE = TemplateProfile(
    variant=TemplateVariant.UNCLASSIFIED,
    markers=(),
    candidates=(),
    min_text_length=0,
)

# Classification priority: earlier profiles win
TEMPLATE_PROFILES: tuple[TemplateProfile, ...] = (DEXTER_PROFILE, EDGE_PROFILE)

_PROFILES_BY_VARIANT = {
    profile.variant: profile for profile in TEMPLATE_PROFILES + (UNCLASSIFIED_PROFILE,)
}


def get_profile(variant: TemplateVariant) -> TemplateProfile:
    """Return the configuration bound to *variant*."""
    return _PROFILES_BY_VARIANT[variant]


@dataclass(frozen=True)
class Classification:
    """Outcome of template classification."""

    variant: TemplateVariant
    marker: Optional[str] = None

    @property
    def profile(self) -> TemplateProfile:
        return get_profile(self.variant)


class TemplateClassifier:
    """
    Names the layout variant of a parsed document.

    Markers are matched exactly; the first profile with any marker
    present wins. Documents matching no profile are UNCLASSIFIED.

    Example:
        classifier = TemplateClassifier()
        classification = classifier.classify(soup)
        print(classification.variant, classification.marker)
    """

    def __init__(self, profiles: tuple[TemplateProfile, ...] = TEMPLATE_PROFILES):
        self._profiles = profiles

    def classify(self, soup: BeautifulSoup) -> Classification:
        for profile in self._profiles:
            for marker in profile.markers:
                if soup.select_one(marker) is not None:
                    logger.debug(f"Classified as {profile.variant.value} via {marker!r}")
                    return Classification(variant=profile.variant, marker=marker)

        logger.debug("No template markers found, document is unclassified")
        return Classification(variant=TemplateVariant.UNCLASSIFIED)
