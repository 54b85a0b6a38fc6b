"""Tests for table normalization."""

from articlepull.extraction.tables import LIST_TABLE_POINTER, TableNormalizer, escape_pipes


def _cell(region, index: int = 0) -> str:
    return region.root.find_all(["td", "th"])[index].decode_contents()


class TestTableNormalizer:
    """Tests for TableNormalizer."""

    def test_list_in_cell_becomes_bullets(self, make_region):
        """Test that a list inside a cell is flattened with line breaks."""
        region = make_region("<table><tr><td><ul><li>Open</li><li>Close</li></ul></td></tr></table>")

        TableNormalizer().normalize(region)

        assert _cell(region) == "• Open<br/>• Close"

    def test_ordered_list_numbering(self, make_region):
        """Test that ordered lists keep their numbering and start value."""
        region = make_region('<table><tr><td><ol start="3"><li>Crop</li><li>Save</li></ol></td></tr></table>')

        TableNormalizer().normalize(region)

        assert _cell(region) == "3. Crop<br/>4. Save"

    def test_paragraphs_in_cell(self, make_region):
        """Test that block children become break-separated lines."""
        region = make_region("<table><tr><td><p>First</p>\n<p>Second</p></td></tr></table>")

        TableNormalizer().normalize(region)

        assert _cell(region) == "First<br/>Second"

    def test_inline_markup_kept(self, make_region):
        """Test that links and emphasis survive flattening."""
        region = make_region('<table><tr><td><p>See <a href="/x">docs</a> and <b>more</b></p></td></tr></table>')

        TableNormalizer().normalize(region)

        assert _cell(region) == 'See <a href="/x">docs</a> and <b>more</b>'

    def test_pipes_escaped(self, make_region):
        """Test that bare pipes in cells are escaped."""
        region = make_region("<table><tr><td>File | Save</td><td><b>a|b</b></td></tr></table>")

        TableNormalizer().normalize(region)

        assert _cell(region, 0) == "File \\| Save"
        assert _cell(region, 1) == "<b>a\\|b</b>"

    def test_nested_table_flattened(self, make_region):
        """Test that a table inside a cell becomes slash-joined rows."""
        region = make_region(
            "<table><tr><td><table><tr><td>Mac</td><td>Cmd</td></tr>"
            "<tr><td>Win</td><td>Ctrl</td></tr></table></td></tr></table>"
        )

        count = TableNormalizer().normalize(region)

        assert count == 1
        assert len(region.root.find_all("table")) == 1
        assert region.root.find("td").decode_contents() == "Mac / Cmd<br/>Win / Ctrl"

    def test_whitespace_collapsed(self, make_region):
        """Test that runs of whitespace and blank lines collapse."""
        region = make_region("<table><tr><td>\n  Lots   of\n\n space  </td></tr></table>")

        TableNormalizer().normalize(region)

        assert _cell(region) == "Lots of space"

    def test_break_runs_collapsed(self, make_region):
        """Test that three or more consecutive breaks collapse to one."""
        region = make_region("<table><tr><td>a<br><br><br>b</td></tr></table>")

        TableNormalizer().normalize(region)

        assert _cell(region) == "a<br/>b"

    def test_presentational_attributes_stripped(self, make_region):
        """Test that styling attributes are removed and spans kept."""
        region = make_region(
            '<table class="grid" style="width:100%" border="1">'
            '<tr><td width="50" colspan="2" class="c">a</td></tr></table>'
        )

        TableNormalizer().normalize(region)

        assert region.root.find("table").attrs == {}
        assert region.root.find("td").attrs == {"colspan": "2"}

    def test_table_hoisted_out_of_list_item(self, make_region):
        """Test that a table in a list item moves after the item."""
        region = make_region(
            "<ul><li>Shortcuts<table><tr><th>Key</th></tr><tr><td>V</td></tr></table></li>"
            "<li>Next</li></ul>"
        )

        TableNormalizer().normalize(region)

        first = region.root.find("li")
        assert first.find("table") is None
        assert LIST_TABLE_POINTER in first.get_text()
        assert first.find_next_sibling().name == "table"

    def test_returns_table_count(self, make_region):
        """Test the normalized table count."""
        region = make_region("<table><tr><td>a</td></tr></table><p>x</p><table><tr><td>b</td></tr></table>")

        assert TableNormalizer().normalize(region) == 2


class TestEscapePipes:
    """Tests for escape_pipes."""

    def test_idempotent(self):
        """Test that already escaped pipes are left alone."""
        assert escape_pipes("a | b") == "a \\| b"
        assert escape_pipes("a \\| b | c") == "a \\| b \\| c"
        assert escape_pipes(escape_pipes("x|y")) == "x\\|y"
