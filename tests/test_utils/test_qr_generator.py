"""Tests for asset QR payloads and labelled QR cards."""

import pytest

from sams.config import Config
from sams.labels.images import load_image
from sams.utils import qr_generator
from sams.utils.qr_generator import (
    build_asset_link,
    generate_asset_label,
    make_qr_image,
)


class TestAssetLink:
    """Test the URL encoded in asset QR codes."""

    def test_explicit_base(self):
        link = build_asset_link("AST-001", "https://assets.example.com")
        assert link == "https://assets.example.com/assets/AST-001"

    def test_trailing_slash_removed(self):
        link = build_asset_link("AST-001", "https://assets.example.com/")
        assert link == "https://assets.example.com/assets/AST-001"

    def test_defaults_to_configured_base(self, monkeypatch):
        monkeypatch.setattr(Config, "PUBLIC_BASE_URL", "https://sams.test")
        assert build_asset_link("AST-9") == "https://sams.test/assets/AST-9"


class TestQRImage:
    """Test raw QR bitmap generation."""

    def test_returns_png_data_url(self):
        result = make_qr_image("https://samsproject.in/assets/AST-001")
        assert result.startswith("data:image/png;base64,")

    def test_default_width(self):
        img = load_image(make_qr_image("WP:TEST-001"))
        assert img.size == (512, 512)

    def test_custom_width(self):
        img = load_image(make_qr_image("WP:TEST-001", width=256))
        assert img.size == (256, 256)

    def test_quiet_zone_is_white(self):
        img = load_image(make_qr_image("AST-001"))
        assert img.getpixel((0, 0)) == (255, 255, 255)

    def test_has_dark_modules(self):
        img = load_image(make_qr_image("AST-001"))
        assert (0, 0, 0) in set(img.getdata())


class TestGenerateAssetLabel:
    """Test composing the full asset label."""

    @pytest.fixture
    def captured(self, monkeypatch):
        calls = []

        def fake_compose(qr_image, identifier, **kwargs):
            calls.append((qr_image, identifier, kwargs))
            return "data:image/png;base64,"

        monkeypatch.setattr(qr_generator, "compose_label", fake_compose)
        return calls

    def test_caption_from_names(self, captured):
        generate_asset_label("AST-001", asset_name="Dell Latitude",
                             property_name="Main Office")
        _, identifier, kwargs = captured[0]
        assert identifier == "AST-001"
        assert kwargs["top_text"] == "Dell Latitude - Main Office"

    def test_caption_from_single_name(self, captured):
        generate_asset_label("AST-001", asset_name="Desk")
        assert captured[0][2]["top_text"] == "Desk"

    def test_caption_falls_back_to_config(self, captured, monkeypatch):
        monkeypatch.setattr(Config, "LABEL_TOP_TEXT", "Property of SAMS")
        generate_asset_label("AST-001")
        assert captured[0][2]["top_text"] == "Property of SAMS"

    def test_explicit_caption_wins(self, captured):
        generate_asset_label("AST-001", asset_name="Desk", top_text="")
        assert captured[0][2]["top_text"] == ""

    def test_real_label_size(self):
        img = load_image(generate_asset_label("AST-001", asset_name="Desk"))
        assert img.size == (360, 382)

    def test_hidden_bottom_text(self):
        img = load_image(
            generate_asset_label("AST-001", hide_bottom_text=True)
        )
        assert img.size == (360, 358)
