"""Tests for structural cleanup of the content region."""

from articlepull.extraction.fragments import FragmentPreserver, find_placeholders
from articlepull.extraction.sanitizer import Sanitizer
from articlepull.extraction.templates import TemplateVariant


class TestSanitizer:
    """Tests for Sanitizer."""

    def test_removes_chrome_and_media(self, make_region):
        """Test that navigation, scripts and media are removed."""
        region = make_region(
            '<nav><a href="/">Home</a></nav>'
            "<script>track()</script>"
            '<p>Keep me <img src="/a.png"></p>'
            '<div class="social-share">Share</div>'
            "<footer>Legal</footer>"
        )

        Sanitizer().sanitize(region)

        html = str(region.root)
        assert "Home" not in html
        assert "track()" not in html
        assert "<img" not in html
        assert "Share" not in html
        assert "Legal" not in html
        assert "Keep me" in html

    def test_removes_empty_elements(self, make_region):
        """Test that elements left without text are deleted bottom-up."""
        region = make_region("<p>Text</p><div><span> </span><p></p></div>")

        Sanitizer().sanitize(region)

        assert str(region.root) == '<div id="region"><p>Text</p></div>'

    def test_keeps_structural_empties(self, make_region):
        """Test that empty table cells, breaks and checkboxes stay."""
        region = make_region(
            "<table><tr><td>a</td><td></td></tr></table>"
            '<p>Line<br>break</p><ul><li><input type="checkbox"> Todo</li></ul>'
        )

        Sanitizer().sanitize(region)

        assert len(region.root.find_all("td")) == 2
        assert region.root.find("br") is not None
        assert region.root.find("input") is not None

    def test_variant_cleanup_selectors(self, make_region):
        """Test that variant-specific chrome is only removed for that variant."""
        html = '<p>Body</p><div class="dexter-Spacer">spacer</div>'

        generic = make_region(html)
        Sanitizer().sanitize(generic, TemplateVariant.EDGE)
        dexter = make_region(html)
        Sanitizer().sanitize(dexter, TemplateVariant.DEXTER)

        assert "spacer" in generic.root.get_text()
        assert "spacer" not in dexter.root.get_text()

    def test_extra_selectors(self, make_region):
        """Test caller-supplied removal selectors."""
        region = make_region('<p>Body</p><p class="legal">Fine print</p>')

        Sanitizer(extra_selectors=[".legal"]).sanitize(region)

        assert "Fine print" not in region.root.get_text()

    def test_idempotent(self, make_region):
        """Test that a second pass removes nothing."""
        region = make_region(
            '<nav>Menu</nav><div><p>Article <b>body</b></p><div class="promo"><p>Ad</p></div>'
            "<section><div><span></span></div></section></div>"
            "<table><tr><th>h</th></tr><tr><td></td></tr></table>"
        )
        sanitizer = Sanitizer()

        first = sanitizer.sanitize(region)
        snapshot = str(region.root)
        second = sanitizer.sanitize(region)

        assert first > 0
        assert second == 0
        assert str(region.root) == snapshot

    def test_placeholder_keeps_container(self, make_region):
        """Test that an element holding only a placeholder is not empty."""
        region = make_region('<div class="wrapper"><div class="xfreference"><p>Tip</p></div></div>')
        FragmentPreserver().preserve(region)

        Sanitizer().sanitize(region)

        assert region.root.find(class_="wrapper") is not None
        assert len(find_placeholders(region.root)) == 1
