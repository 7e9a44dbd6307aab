"""Tests for the sams-labels command line entry point."""

import pytest
from PIL import Image

from sams import app
from sams.config import Config


@pytest.fixture
def export_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(Config, "EXPORT_DIRECTORY", str(tmp_path))
    return tmp_path


class TestUsage:
    def test_no_arguments(self, capsys):
        assert app.main([]) == 1
        assert "Usage" in capsys.readouterr().out

    def test_missing_asset_ids(self, capsys):
        assert app.main(["png"]) == 1

    def test_unknown_mode(self, capsys):
        assert app.main(["zip", "AST-001"]) == 1
        assert "Unknown mode" in capsys.readouterr().out


class TestExports:
    def test_png_mode_writes_one_file_per_asset(self, export_dir):
        assert app.main(["png", "AST-001", "AST-002"]) == 0
        for asset_id in ("AST-001", "AST-002"):
            path = export_dir / f"qr-code-{asset_id}.png"
            with Image.open(path) as img:
                assert img.size == (360, 382)

    def test_sheet_mode_writes_grid(self, export_dir, monkeypatch):
        monkeypatch.setattr(Config, "SHEET_COLUMNS", 2)
        assert app.main(["sheet", "A", "B", "C"]) == 0
        with Image.open(export_dir / "qr-labels-sheet.png") as img:
            # 2 columns x 2 rows of 360x382 cards, gap 16, padding 16
            assert img.size == (32 + 2 * 360 + 16, 32 + 2 * 382 + 16)

    def test_pdf_mode_writes_pdf(self, export_dir):
        assert app.main(["pdf", "AST-001"]) == 0
        pdf = export_dir / "qr-labels.pdf"
        assert pdf.read_bytes()[:4] == b"%PDF"

    def test_mode_is_case_insensitive(self, export_dir):
        assert app.main(["PNG", "AST-001"]) == 0
        assert (export_dir / "qr-code-AST-001.png").exists()
