"""Markdown formatter - YAML front matter plus body."""

from ..conversion.markdown import FrontmatterBuilder
from ..models.document import ExtractionResult
from .base import BaseFormatter


class MarkdownFormatter(BaseFormatter):
    """Markdown document with YAML front matter."""

    content_type = "text/markdown; charset=utf-8"

    def format_content(self, result: ExtractionResult, debug: bool = False) -> str:
        """Format as Markdown with front matter.

        Args:
            result: Extraction result
            debug: Add template/selector diagnostics to the front matter

        Returns:
            Front matter followed by the Markdown body
        """
        builder = FrontmatterBuilder(max_length=self.metadata_max_length)
        extra = {
            "seo_title": result.metadata.seo_title,
            "publish_date": result.metadata.publish_date,
        }
        if debug:
            extra.update(result.debug_info())

        frontmatter = builder.build(
            title=result.title,
            url=result.source_url,
            description=result.metadata.seo_description,
            **extra,
        )
        return frontmatter + result.content

    def get_file_extension(self) -> str:
        """Get markdown extension.

        Returns:
            '.md'
        """
        return ".md"
