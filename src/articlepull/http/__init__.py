"""Upstream HTML fetching."""

from .client import ScrapeClient
from .protocols import HtmlProvider

__all__ = ["HtmlProvider", "ScrapeClient"]
