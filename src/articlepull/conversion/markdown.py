"""HTML to Markdown conversion."""

from __future__ import annotations

import logging
import re
from typing import Any
from urllib.parse import urljoin

import yaml
from bs4 import Comment, Doctype, NavigableString, Tag
from markdownify import ATX, MarkdownConverter

from ..extraction.footer import FOOTER_MARKERS
from ..extraction.tables import escape_pipes

logger = logging.getLogger(__name__)

_CELL_WHITESPACE_RE = re.compile(r"\s+")
_BLOCK_IN_CELL = ("br", "table", "ul", "ol", "p", "div")


def _detect_lang(el: object) -> str:
    """Extract language hint from an element's class list for markdownify."""
    getter = getattr(el, "get", None)
    classes = (getter("class") if getter else None) or []
    for cls in classes:
        if isinstance(cls, str) and cls.startswith("language-"):
            return cls[len("language-") :]
    return ""


def footer_heading_pattern(markers: tuple[str, ...] = FOOTER_MARKERS) -> re.Pattern[str]:
    """Regex matching an ATX heading line that opens a boilerplate footer."""
    alternatives = "|".join(re.escape(m) for m in markers)
    return re.compile(rf"^#{{1,6}}\s+(?:{alternatives})", re.IGNORECASE | re.MULTILINE)


_FOOTER_HEADING_RE = footer_heading_pattern()


def strip_footer_boilerplate(markdown: str, pattern: re.Pattern[str] = _FOOTER_HEADING_RE) -> str:
    """Cut *markdown* at the first footer heading line, if any."""
    match = pattern.search(markdown)
    if match is None:
        return markdown
    logger.debug(f"Markdown footer pass cut at {match.group(0)!r}")
    return markdown[: match.start()].rstrip() + "\n"


class ArticleMarkdownConverter(MarkdownConverter):
    """
    markdownify converter with GFM extensions for help articles.

    Adds task-list items, ``<strike>`` strikethrough, ``<br>`` markers
    inside table cells and a table rule for tables the built-in pipe-table
    rule cannot express (no header row, spans, ragged rows or multi-line
    cells).
    """

    def convert_br(self, el: Tag, text: str, parent_tags: set[str]) -> str:
        if parent_tags & {"td", "th"}:
            return "<br>"
        return super().convert_br(el, text, parent_tags)

    def convert_input(self, el: Tag, text: str, parent_tags: set[str]) -> str:
        if str(el.get("type") or "").lower() != "checkbox":
            return ""
        box = "[x]" if el.has_attr("checked") else "[ ]"
        following = el.next_sibling
        if isinstance(following, NavigableString) and str(following)[:1].isspace():
            return box
        return box + " "

    convert_strike = MarkdownConverter.convert_del

    def convert_table(self, el: Tag, text: str, parent_tags: set[str]) -> str:
        if self._builtin_can_render(el):
            return super().convert_table(el, text, parent_tags)
        return self._render_table(el, parent_tags)

    def _rows(self, table: Tag) -> list[Tag]:
        return [row for row in table.find_all("tr") if row.find_parent("table") is table]

    def _cells(self, row: Tag) -> list[Tag]:
        return row.find_all(["td", "th"], recursive=False)

    def _builtin_can_render(self, table: Tag) -> bool:
        rows = self._rows(table)
        if not rows:
            return False

        first = self._cells(rows[0])
        if not first or not all(cell.name == "th" for cell in first):
            return False
        if len({len(self._cells(row)) for row in rows}) != 1:
            return False

        for row in rows:
            for cell in self._cells(row):
                if cell.has_attr("colspan") or cell.has_attr("rowspan"):
                    return False
                if cell.find(_BLOCK_IN_CELL) is not None:
                    return False
        return True

    def _render_table(self, table: Tag, parent_tags: set[str]) -> str:
        rows: list[list[str]] = []
        has_header = False

        for row in self._rows(table):
            cells = self._cells(row)
            if not cells:
                continue
            if not rows:
                has_header = any(cell.name == "th" for cell in cells)

            values = []
            for cell in cells:
                values.append(self._cell_text(cell, parent_tags))
                span = str(cell.get("colspan") or "1")
                if span.isdigit() and int(span) > 1:
                    values.extend([""] * (min(int(span), 1000) - 1))
            rows.append(values)

        if not rows:
            return ""

        width = max(len(r) for r in rows)
        rows = [r + [""] * (width - len(r)) for r in rows]
        if has_header:
            header, body = rows[0], rows[1:]
        else:
            header, body = [""] * width, rows

        lines = [self._table_line(header), self._table_line(["---"] * width)]
        lines.extend(self._table_line(r) for r in body)
        return "\n\n" + "\n".join(lines) + "\n\n"

    def _cell_text(self, cell: Tag, parent_tags: set[str]) -> str:
        tags = set(parent_tags) | {cell.name, "_inline"}
        parts = [
            self.process_element(child, parent_tags=tags)
            for child in cell.children
            if not isinstance(child, (Comment, Doctype))
        ]
        text = _CELL_WHITESPACE_RE.sub(" ", "".join(parts)).strip()
        return escape_pipes(text)

    def _table_line(self, cells: list[str]) -> str:
        return "| " + " | ".join(cells) + " |"


class HtmlToMarkdown:
    """
    Converts a cleaned content region to Markdown.

    Uses markdownify with ATX headings, hard line breaks kept as two
    trailing spaces, and the GFM table/strikethrough/task-list rules of
    ArticleMarkdownConverter. A final pass cuts any boilerplate footer
    heading that survived structural truncation.

    Example:
        converter = HtmlToMarkdown()
        markdown = converter.convert(html_string, "https://helpx.example.com/page")
    """

    def __init__(
        self,
        bullets: str = "-",
        strip_footer: bool = True,
        footer_markers: tuple[str, ...] = FOOTER_MARKERS,
    ):
        """
        Initialize the Markdown converter.

        Args:
            bullets: Bullet characters by nesting depth
            strip_footer: Apply the footer heading cutoff after conversion
            footer_markers: Heading prefixes that open a boilerplate footer
        """
        self._converter = ArticleMarkdownConverter(
            heading_style=ATX,
            bullets=bullets,
            code_language_callback=_detect_lang,
            strip=["script", "style"],
        )
        self._strip_footer = strip_footer
        self._footer_pattern = footer_heading_pattern(footer_markers)

    def _clean_output(self, markdown: str) -> str:
        """Clean up the converted Markdown."""
        # Remove trailing whitespace on each line, keeping hard breaks
        lines = []
        for line in markdown.split("\n"):
            stripped = line.rstrip()
            lines.append(stripped + "  " if line.endswith("  ") and stripped else stripped)
        markdown = "\n".join(lines)

        # Remove excessive blank lines
        markdown = re.sub(r"\n{3,}", "\n\n", markdown)

        # Ensure single newline at end
        return markdown.strip() + "\n"

    def _fix_relative_links(self, markdown: str, base_url: str) -> str:
        """Ensure all links are absolute."""

        def replace_link(match: re.Match[str]) -> str:
            text = match.group(1)
            url = match.group(2)

            # Skip anchors and already absolute URLs
            if url.startswith(("#", "http://", "https://", "mailto:", "tel:")):
                result: str = match.group(0)
                return result

            # Convert relative to absolute
            absolute_url = urljoin(base_url, url)
            return f"[{text}]({absolute_url})"

        # Match markdown links [text](url)
        return re.sub(r"\[([^\]]+)\]\(([^)\s]+)\)", replace_link, markdown)

    def convert(self, html: str, url: str) -> str:
        """
        Convert HTML to Markdown.

        Args:
            html: HTML content string
            url: Source URL for resolving relative links

        Returns:
            Markdown string
        """
        markdown = self._converter.convert(html)
        markdown = self._clean_output(markdown)

        if url:
            markdown = self._fix_relative_links(markdown, url)

        if self._strip_footer:
            markdown = strip_footer_boilerplate(markdown, self._footer_pattern)

        return markdown


class FrontmatterBuilder:
    """
    Builds YAML frontmatter for Markdown documents.

    Example:
        builder = FrontmatterBuilder()
        frontmatter = builder.build(
            title="Getting Started",
            url="https://helpx.example.com/getting-started",
            description="How to get started with our product",
        )
    """

    def __init__(self, max_length: int = 500):
        self._max_length = max_length

    def build(
        self,
        title: str | None = None,
        url: str | None = None,
        description: str | None = None,
        **extra_fields: Any,
    ) -> str:
        """
        Build YAML frontmatter string.

        Args:
            title: Page title
            url: Source URL
            description: Page description (truncated to max_length)
            **extra_fields: Additional frontmatter fields; None and "" are skipped

        Returns:
            YAML frontmatter string (with --- delimiters)
        """
        fields: dict[str, Any] = {}
        if title:
            fields["title"] = title
        if url:
            fields["source"] = url
        if description:
            fields["description"] = description[: self._max_length]

        for key, value in extra_fields.items():
            if value is None or value == "":
                continue
            fields[key] = value[: self._max_length] if isinstance(value, str) else value

        body = yaml.safe_dump(fields, sort_keys=False, allow_unicode=True) if fields else ""
        return "---\n" + body + "---\n\n"
