"""Shared fixtures for articlepull tests."""

import pytest
from bs4 import BeautifulSoup

from articlepull.extraction.selector import ContentRegion

ARTICLE_URL = "https://helpx.adobe.com/photoshop/using/layers.html"

# 315 characters of body copy
LONG_PARAGRAPH = (
    "Layers let you work on one element of an image without disturbing the others. " * 4
).strip()


def dexter_page(body: str, title: str = "Layer basics | Adobe Photoshop") -> str:
    """Wrap *body* in a component-layout page with site chrome around it."""
    return f"""<html>
<head>
  <title>{title}</title>
  <meta name="description" content="Learn how layers work.">
  <meta property="og:title" content="Photoshop layer basics">
  <meta name="publishDate" content="2024-03-05">
</head>
<body>
  <header class="globalnav"><a href="/">Home</a></header>
  <div id="root_content_flex">
    <div class="helpxMain-article">
{body}
    </div>
  </div>
  <footer class="globalfooter">Copyright</footer>
</body>
</html>"""


def edge_page(body: str) -> str:
    """Wrap *body* in a section-layout page."""
    return f"""<html>
<head><title>Edge article</title></head>
<body>
  <nav><a href="/">Home</a></nav>
  <main>
    <div class="article-body">
{body}
    </div>
  </main>
</body>
</html>"""


@pytest.fixture
def make_region():
    """Build a ContentRegion around an HTML fragment."""

    def _make(html: str) -> ContentRegion:
        soup = BeautifulSoup(f'<div id="region">{html}</div>', "html.parser")
        return ContentRegion(root=soup.find(id="region"), selector="#region")

    return _make


@pytest.fixture
def dexter_article() -> str:
    """A component-layout article with a call-to-action footer."""
    return dexter_page(
        f"""
      <h1>Layer basics</h1>
      <p>{LONG_PARAGRAPH}</p>
      <h2>Talk to us</h2>
      <p>Contact our support team for help.</p>
"""
    )
