"""Base formatter interface and the minimum-content gate."""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from ..errors import ContentTooShort
from ..models.document import ExtractionResult

MIN_CONTENT_LENGTH = 100


def check_content_length(
    content: str,
    minimum: int = MIN_CONTENT_LENGTH,
    url: Optional[str] = None,
) -> str:
    """
    Gate *content* on its whitespace-stripped length.

    Raises:
        ContentTooShort: If the stripped content is shorter than *minimum*
    """
    length = len(content.strip())
    if length < minimum:
        raise ContentTooShort(
            f"Content too short ({length} < {minimum} characters)",
            url=url,
            details={"content_length": length},
        )
    return content


class BaseFormatter(ABC):
    """Base class for output formatters.

    Formatters turn an ExtractionResult into one serialized
    representation (JSON envelope, Markdown document, plain text).
    """

    content_type = "text/plain; charset=utf-8"

    def __init__(self, min_content_length: int = MIN_CONTENT_LENGTH, metadata_max_length: int = 500):
        """Initialize formatter.

        Args:
            min_content_length: Minimum stripped content length accepted
            metadata_max_length: Maximum length of each metadata value
        """
        self.min_content_length = min_content_length
        self.metadata_max_length = metadata_max_length
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def format_content(self, result: ExtractionResult, debug: bool = False) -> str:
        """Serialize *result* to the target format.

        Args:
            result: Extraction result to serialize
            debug: Include diagnostic fields

        Returns:
            Formatted content
        """
        pass

    @abstractmethod
    def get_file_extension(self) -> str:
        """Get file extension for this format.

        Returns:
            File extension including dot (e.g., '.md', '.json')
        """
        pass

    def gated_content(self, result: ExtractionResult) -> str:
        """Return the body this representation carries (Markdown by default)."""
        return result.content

    def render(self, result: ExtractionResult, debug: bool = False) -> str:
        """Apply the length gate, then format.

        Raises:
            ContentTooShort: If the gated body is below the minimum
        """
        check_content_length(self.gated_content(result), self.min_content_length, result.source_url)
        formatted = self.format_content(result, debug)
        self.logger.debug(f"Rendered {len(formatted)} characters for {result.source_url}")
        return formatted

    def bounded(self, value: str) -> str:
        """Truncate a metadata value to the configured maximum."""
        return value[: self.metadata_max_length]
