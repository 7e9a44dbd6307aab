"""Tests for formatting utilities."""

from sams.utils.formatters import label_filename, truncate


class TestTruncate:
    """Test the text truncation helper."""

    def test_short_text_unchanged(self):
        assert truncate("Hello", 10) == "Hello"

    def test_exact_length_unchanged(self):
        assert truncate("Hello", 5) == "Hello"

    def test_long_text_truncated(self):
        result = truncate("Hello World", 8)
        assert len(result) == 8
        assert result.endswith("…")

    def test_one_over_truncated(self):
        assert truncate("ABCDEF", 5) == "ABCD…"


class TestLabelFilename:
    """Test file names for saved labels."""

    def test_plain_asset_id(self):
        assert label_filename("AST-001") == "qr-code-AST-001.png"

    def test_unsafe_characters_replaced(self):
        assert label_filename("AST/001 x") == "qr-code-AST_001_x.png"

    def test_blank_asset_id(self):
        assert label_filename("   ") == "qr-code-asset.png"
