"""Core extraction API."""

from .extractor import ArticleExtractor, default_steps

__all__ = ["ArticleExtractor", "default_steps"]
