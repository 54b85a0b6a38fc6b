"""JSON formatter - structured envelope output."""

import json

from ..models.document import ExtractionResult
from .base import BaseFormatter


class JSONFormatter(BaseFormatter):
    """JSON envelope with title, bounded metadata and Markdown content."""

    content_type = "application/json"

    def build_envelope(self, result: ExtractionResult, debug: bool = False) -> dict:
        """Build the JSON-serializable envelope for *result*."""
        metadata = result.metadata
        envelope = {
            "title": result.title,
            "url": result.source_url,
            "metadata": {
                "seo_title": self.bounded(metadata.seo_title),
                "seo_description": self.bounded(metadata.seo_description),
                "publish_date": self.bounded(metadata.publish_date),
            },
            "content": result.content,
        }
        if debug:
            envelope["debug"] = result.debug_info()
        return envelope

    def format_content(self, result: ExtractionResult, debug: bool = False) -> str:
        return json.dumps(self.build_envelope(result, debug), indent=2, ensure_ascii=False)

    def get_file_extension(self) -> str:
        return ".json"
