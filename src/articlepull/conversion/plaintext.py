"""Markdown to flattened plain text."""

import logging
import re

logger = logging.getLogger(__name__)

BULLET = "•"

_HEADING_RE = re.compile(r"^\s{0,3}#{1,6}\s+(.*?)\s*#*\s*$")
_LIST_MARKER_RE = re.compile(r"^\s*(?:[-*+]|\d{1,9}[.)])\s+")
_TABLE_LINE_RE = re.compile(r"^\s*\|.*\|\s*$")
_TABLE_SEPARATOR_RE = re.compile(r"^\s*\|(?:\s*:?-{3,}:?\s*\|)+\s*$")
_SPLIT_CELLS_RE = re.compile(r"(?<!\\)\|")

_IMAGE_RE = re.compile(r"!\[([^\]]*)\]\([^)]*\)")
_LINK_RE = re.compile(r"\[([^\]]*)\]\([^)]*\)")
_AUTOLINK_RE = re.compile(r"<((?:https?|mailto):[^>\s]+)>")
_CODE_FENCE_RE = re.compile(r"^\s*(```|~~~).*$", re.MULTILINE)
_INLINE_CODE_RE = re.compile(r"(`+)(.+?)\1")
_BOLD_RE = re.compile(r"(\*\*|__)(.+?)\1")
_ITALIC_STAR_RE = re.compile(r"(?<![\\*\w])\*(?!\s)(.+?)(?<![\s\\])\*(?!\*)")
_ITALIC_UNDERSCORE_RE = re.compile(r"(?<![\\\w])_(?!\s)(.+?)(?<![\s\\])_(?!\w)")
_STRIKE_RE = re.compile(r"~~(.+?)~~")
_HTML_BREAK_RE = re.compile(r"<br\s*/?>", re.IGNORECASE)
_ESCAPE_RE = re.compile(r"\\([\\`*_{}\[\]()#+\-.!|~<>])")
_WHITESPACE_RE = re.compile(r"\s+")


def _split_row(line: str) -> list[str]:
    inner = line.strip()
    if inner.startswith("|"):
        inner = inner[1:]
    if inner.endswith("|") and not inner.endswith("\\|"):
        inner = inner[:-1]
    return [cell.strip() for cell in _SPLIT_CELLS_RE.split(inner)]


def flatten_table(lines: list[str]) -> list[str]:
    """
    Turn a pipe-table block into ``header: value | header: value`` lines.

    Rows of a table with an empty header row become ``value | value``.
    """
    header: list[str] = []
    rows: list[list[str]] = []
    for i, line in enumerate(lines):
        if _TABLE_SEPARATOR_RE.match(line):
            continue
        cells = _split_row(line)
        if i == 0 and len(lines) > 1 and _TABLE_SEPARATOR_RE.match(lines[1]):
            header = cells
        else:
            rows.append(cells)

    flattened = []
    for cells in rows:
        parts = []
        for index, value in enumerate(cells):
            if not value:
                continue
            label = header[index] if index < len(header) else ""
            parts.append(f"{label}: {value}" if label else value)
        if parts:
            flattened.append(" | ".join(parts))
    return flattened


class PlainTextProjector:
    """
    Derives a single-line plain-text rendering from Markdown.

    Headings become ``--- heading ---`` dividers, list markers become a
    single bullet glyph, link/emphasis/code markup is dropped in favour of
    its inner text, pipe tables become labeled row lines and every line
    break collapses to a single space.

    Example:
        projector = PlainTextProjector()
        text = projector.project("# Title\\n\\n- **One**\\n- Two")
        # "--- Title --- • One • Two"
    """

    def project(self, markdown: str) -> str:
        lines = self._flatten_tables(markdown.split("\n"))
        lines = [self._project_line(line) for line in lines]

        text = "\n".join(lines)
        text = _CODE_FENCE_RE.sub("", text)
        text = self._strip_inline_markup(text)
        return _WHITESPACE_RE.sub(" ", text).strip()

    def _flatten_tables(self, lines: list[str]) -> list[str]:
        result: list[str] = []
        block: list[str] = []
        for line in lines:
            if _TABLE_LINE_RE.match(line):
                block.append(line)
                continue
            if block:
                result.extend(flatten_table(block))
                block = []
            result.append(line)
        if block:
            result.extend(flatten_table(block))
        return result

    def _project_line(self, line: str) -> str:
        heading = _HEADING_RE.match(line)
        if heading:
            return f"--- {heading.group(1)} ---"
        return _LIST_MARKER_RE.sub(f"{BULLET} ", line)

    def _strip_inline_markup(self, text: str) -> str:
        text = _IMAGE_RE.sub(r"\1", text)
        text = _LINK_RE.sub(r"\1", text)
        text = _AUTOLINK_RE.sub(r"\1", text)
        text = _INLINE_CODE_RE.sub(r"\2", text)
        text = _BOLD_RE.sub(r"\2", text)
        text = _ITALIC_STAR_RE.sub(r"\1", text)
        text = _ITALIC_UNDERSCORE_RE.sub(r"\1", text)
        text = _STRIKE_RE.sub(r"\1", text)
        text = _HTML_BREAK_RE.sub(" ", text)
        return _ESCAPE_RE.sub(r"\1", text)
