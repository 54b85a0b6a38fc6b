"""Tree transforms that isolate and clean the article body."""

from .footer import FOOTER_MARKERS, FooterTruncator, TruncationOutcome, TruncationState
from .fragments import FragmentPreserver, FragmentStore
from .metadata import MetadataExtractor
from .reader import ReaderModeExtractor
from .sanitizer import Sanitizer
from .selector import READER_MODE_SELECTOR, ContentRegion, ContentRegionSelector
from .tables import TableNormalizer
from .templates import Classification, TemplateClassifier, TemplateProfile, TemplateVariant

__all__ = [
    "FOOTER_MARKERS",
    "READER_MODE_SELECTOR",
    "Classification",
    "ContentRegion",
    "ContentRegionSelector",
    "FooterTruncator",
    "FragmentPreserver",
    "FragmentStore",
    "MetadataExtractor",
    "ReaderModeExtractor",
    "Sanitizer",
    "TableNormalizer",
    "TemplateClassifier",
    "TemplateProfile",
    "TemplateVariant",
    "TruncationOutcome",
    "TruncationState",
]
