"""Protocol definitions for the upstream HTML provider."""

from __future__ import annotations

from typing import Protocol

from ..models.document import DocumentSnapshot


class HtmlProvider(Protocol):
    """
    Protocol for upstream page fetchers.

    This abstraction allows for:
    - Fake providers in tests
    - Different backends (scrape service, direct fetch)
    """

    def resolve_url(self, target: str) -> str:
        """Turn an absolute or relative target into a fully-qualified address."""
        ...

    async def fetch(self, target: str) -> DocumentSnapshot:
        """
        Fetch the raw HTML of a page.

        Args:
            target: Absolute or relative page address

        Returns:
            DocumentSnapshot with the HTML and the resolved address

        Raises:
            UpstreamUnavailable: On any fetch failure or missing HTML
        """
        ...
