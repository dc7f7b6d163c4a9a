"""Unit tests for comment content sanitization."""

import pytest

from remark.domain.service import sanitize


class TestSanitize:
    """Tests for sanitize."""

    def test_plain_text_unchanged(self):
        assert sanitize("Nice result, thanks!") == "Nice result, thanks!"

    def test_script_tag_is_escaped(self):
        result = sanitize("<script>alert(1)</script>")

        assert "<script>" not in result
        assert result == "&lt;script&gt;alert(1)&lt;/script&gt;"

    @pytest.mark.parametrize(
        "tag", ["b", "i", "em", "strong", "code", "pre", "p", "ul", "ol", "li", "blockquote"]
    )
    def test_allowed_tags_survive(self, tag):
        assert sanitize(f"<{tag}>x</{tag}>") == f"<{tag}>x</{tag}>"

    def test_line_breaks_survive(self):
        assert sanitize("a<br>b<br/>c") == "a<br>b<br/>c"

    def test_allowed_tag_with_attributes_stays_escaped(self):
        result = sanitize('<b onclick="steal()">bold</b>')

        assert result.startswith("&lt;b onclick=")
        assert result.endswith("bold</b>")

    def test_ampersand_is_escaped(self):
        assert sanitize("R&D") == "R&amp;D"
