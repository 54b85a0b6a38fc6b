"""Table restructuring so tabular content survives Markdown serialization.

Markdown pipe tables are line-oriented and delimiter-sensitive: a cell
must be a single line and must not contain a bare ``|``. The normalizer
collapses block content inside cells into inline runs separated by
``<br>`` elements and escapes pipes, and hoists tables out of list items.
"""

import logging
import re
from typing import Union

from bs4 import BeautifulSoup, Comment, NavigableString, PageElement, Tag

from .selector import ContentRegion

logger = logging.getLogger(__name__)

BULLET = "•"
LIST_TABLE_POINTER = "(see table below)"

PRESENTATIONAL_ATTRS = frozenset(
    {
        "style",
        "class",
        "id",
        "width",
        "height",
        "border",
        "cellpadding",
        "cellspacing",
        "bgcolor",
        "align",
        "valign",
        "frame",
        "rules",
        "nowrap",
    }
)

BLOCK_TAGS = frozenset(
    {
        "p",
        "div",
        "section",
        "article",
        "blockquote",
        "pre",
        "dl",
        "dt",
        "dd",
        "figure",
        "figcaption",
        "header",
        "footer",
        "aside",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
    }
)

# Inline markup kept as-is inside cells
INLINE_TAGS = frozenset(
    {"a", "strong", "b", "em", "i", "u", "code", "kbd", "sub", "sup", "del", "s", "strike", "mark"}
)

_UNESCAPED_PIPE_RE = re.compile(r"(?<!\\)\|")
_WHITESPACE_RE = re.compile(r"\s+")
_FACTORY = BeautifulSoup("", "html.parser")


class _Break:
    """Hard line break marker inside a flattened cell."""


BREAK = _Break()

CellItem = Union[str, Tag, _Break]


def escape_pipes(text: str) -> str:
    """Escape every ``|`` not already escaped."""
    return _UNESCAPED_PIPE_RE.sub(r"\\|", text)


def _is_block(tag: Tag) -> bool:
    return tag.name in BLOCK_TAGS or tag.name in ("ul", "ol", "li", "table")


class TableNormalizer:
    """
    Rewrites tables in a region into serialization-safe form.

    Example:
        normalizer = TableNormalizer()
        normalizer.normalize(region)
        # <td><ul><li>Open</li><li>Close</li></ul></td>
        # becomes <td>• Open<br/>• Close</td>
    """

    def normalize(self, region: ContentRegion) -> int:
        """
        Normalize every table in *region* in place.

        Returns:
            Number of tables normalized
        """
        self._hoist_from_list_items(region.root)

        count = 0
        for table in region.root.find_all("table"):
            # Tables nested in cells are flattened by their outer cell
            if table.find_parent(["td", "th"]) is not None:
                continue
            if not any(parent is region.root for parent in table.parents):
                continue
            self._strip_attributes(table)
            for cell in table.find_all(["td", "th"]):
                if cell.find_parent("table") is table:
                    self._normalize_cell(cell)
            count += 1

        logger.debug(f"Normalized {count} table(s)")
        return count

    def _hoist_from_list_items(self, root: Tag) -> None:
        last_anchor: dict[int, PageElement] = {}

        for table in root.find_all("table"):
            holder = table.find_parent(["li", "td", "th"])
            if holder is None or holder.name != "li":
                continue
            if not any(parent is root for parent in holder.parents):
                continue

            table.replace_with(NavigableString(" " + LIST_TABLE_POINTER))
            anchor = last_anchor.get(id(holder), holder)
            anchor.insert_after(table)
            last_anchor[id(holder)] = table
            logger.debug("Hoisted table out of list item")

    def _strip_attributes(self, table: Tag) -> None:
        for tag in [table, *table.find_all(True)]:
            for attr in [a for a in tag.attrs if a in PRESENTATIONAL_ATTRS]:
                del tag[attr]

    def _normalize_cell(self, cell: Tag) -> None:
        items = self._tidy(self._flatten(list(cell.children)))
        cell.clear()
        for item in items:
            if item is BREAK:
                cell.append(_FACTORY.new_tag("br"))
            elif isinstance(item, Tag):
                for text in item.find_all(string=True):
                    text.replace_with(escape_pipes(str(text)))
                cell.append(item)
            else:
                cell.append(NavigableString(escape_pipes(item)))  # type: ignore[arg-type]

    def _flatten(self, nodes: list[PageElement]) -> list[CellItem]:
        items: list[CellItem] = []

        for node in nodes:
            if isinstance(node, Comment):
                continue
            if isinstance(node, NavigableString):
                items.append(str(node))
                continue
            if not isinstance(node, Tag):
                continue

            if node.name == "br":
                items.append(BREAK)
            elif node.name in ("ul", "ol"):
                items.extend(self._flatten_list(node))
            elif node.name == "table":
                items.extend(self._flatten_table(node))
            elif node.name in INLINE_TAGS and not any(_is_block(d) for d in node.find_all(True)):
                items.append(node)
            elif node.name in BLOCK_TAGS or node.name == "li":
                items.extend(self._flatten(list(node.children)))
                items.append(BREAK)
            elif node.find(True) is None:
                # Trivial wrapper: keep only its text
                items.append(node.get_text())
            else:
                items.extend(self._flatten(list(node.children)))

        return items

    def _flatten_list(self, lst: Tag) -> list[CellItem]:
        items: list[CellItem] = []
        ordered = lst.name == "ol"
        start = lst.get("start")
        number = int(start) if isinstance(start, str) and start.isdigit() else 1

        for li in lst.find_all("li", recursive=False):
            marker = f"{number}. " if ordered else f"{BULLET} "
            number += 1

            line = [c for c in li.children if not (isinstance(c, Tag) and c.name in ("ul", "ol"))]
            nested = [c for c in li.children if isinstance(c, Tag) and c.name in ("ul", "ol")]

            items.append(marker)
            items.extend(self._strip_breaks(self._flatten(line)))
            items.append(BREAK)
            for sub in nested:
                items.extend(self._flatten_list(sub))

        return items

    def _flatten_table(self, table: Tag) -> list[CellItem]:
        items: list[CellItem] = []
        for row in table.find_all("tr"):
            cells = [c.get_text(" ", strip=True) for c in row.find_all(["td", "th"])]
            cells = [c for c in cells if c]
            if cells:
                items.append(" / ".join(cells))
                items.append(BREAK)
        return items

    def _strip_breaks(self, items: list[CellItem]) -> list[CellItem]:
        while items and (items[0] is BREAK or (isinstance(items[0], str) and not items[0].strip())):
            items = items[1:]
        while items and (items[-1] is BREAK or (isinstance(items[-1], str) and not items[-1].strip())):
            items = items[:-1]
        return items

    def _tidy(self, items: list[CellItem]) -> list[CellItem]:
        # Merge adjacent strings and collapse whitespace
        merged: list[CellItem] = []
        for item in items:
            if isinstance(item, str) and merged and isinstance(merged[-1], str):
                merged[-1] = merged[-1] + item
            else:
                merged.append(item)
        merged = [
            _WHITESPACE_RE.sub(" ", item) if isinstance(item, str) else item for item in merged
        ]
        merged = [item for item in merged if item != ""]

        # Trim whitespace around line boundaries
        for i, item in enumerate(merged):
            if not isinstance(item, str):
                continue
            if i == 0 or merged[i - 1] is BREAK:
                item = item.lstrip()
            if i == len(merged) - 1 or merged[i + 1] is BREAK:
                item = item.rstrip()
            merged[i] = item
        merged = [item for item in merged if item != ""]

        # Runs of three or more breaks collapse to one
        collapsed: list[CellItem] = []
        run = 0
        for item in merged:
            if item is BREAK:
                run += 1
                continue
            if run:
                collapsed.extend([BREAK] * (1 if run >= 3 else run))
                run = 0
            collapsed.append(item)

        return self._strip_breaks(collapsed)
