"""Markdown and plain-text serialization."""

from .markdown import ArticleMarkdownConverter, FrontmatterBuilder, HtmlToMarkdown
from .plaintext import PlainTextProjector

__all__ = ["ArticleMarkdownConverter", "FrontmatterBuilder", "HtmlToMarkdown", "PlainTextProjector"]
