"""Output formats for extracted articles."""

from typing import Union

from ..models.document import OutputFormat
from .base import MIN_CONTENT_LENGTH, BaseFormatter, check_content_length
from .json import JSONFormatter
from .markdown import MarkdownFormatter
from .text import TextFormatter

__all__ = [
    "BaseFormatter",
    "JSONFormatter",
    "MarkdownFormatter",
    "TextFormatter",
    "MIN_CONTENT_LENGTH",
    "check_content_length",
    "get_formatter",
]


def get_formatter(format_name: Union[str, OutputFormat], **kwargs: int) -> BaseFormatter:
    """Get formatter instance by name.

    Args:
        format_name: Format name ('json', 'markdown', 'text') or OutputFormat
        **kwargs: Formatter configuration (min_content_length, metadata_max_length)

    Returns:
        Formatter instance

    Raises:
        ValueError: If format name is unknown
    """
    formatters = {
        OutputFormat.JSON: JSONFormatter,
        OutputFormat.MARKDOWN: MarkdownFormatter,
        OutputFormat.TEXT: TextFormatter,
    }

    try:
        output_format = OutputFormat(str(getattr(format_name, "value", format_name)).lower())
    except ValueError:
        raise ValueError(
            f"Unknown format: {format_name}. "
            f"Available formats: {', '.join(f.value for f in formatters)}"
        ) from None

    return formatters[output_format](**kwargs)
