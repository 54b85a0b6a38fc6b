"""Plain-text formatter - labeled metadata lines plus flattened content."""

from ..models.document import ExtractionResult
from .base import BaseFormatter


class TextFormatter(BaseFormatter):
    """Labeled metadata lines, a blank line, then the plain-text projection."""

    content_type = "text/plain; charset=utf-8"

    def format_content(self, result: ExtractionResult, debug: bool = False) -> str:
        metadata = result.metadata
        labeled = [
            ("Title", result.title),
            ("SEO Title", metadata.seo_title),
            ("Description", metadata.seo_description),
            ("Published", metadata.publish_date),
            ("Source", result.source_url),
        ]
        if debug:
            labeled.extend((key, str(value)) for key, value in result.debug_info().items())

        lines = [f"{label}: {self.bounded(value)}" for label, value in labeled if value]
        return "\n".join(lines) + "\n\n" + result.text + "\n"

    def gated_content(self, result: ExtractionResult) -> str:
        return result.text

    def get_file_extension(self) -> str:
        return ".txt"
