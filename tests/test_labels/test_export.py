"""Tests for saving labels as PNG files and A4 PDFs."""

import os

import pytest

from sams.labels.errors import EmptySheetError
from sams.labels.export import generate_label_pdf, save_data_url


class TestSaveDataUrl:
    def test_writes_png(self, tmp_path, qr_data_url):
        path = save_data_url(qr_data_url, tmp_path / "out" / "label.png")
        assert path.read_bytes()[:4] == b"\x89PNG"

    def test_creates_parent_folders(self, tmp_path, qr_data_url):
        target = tmp_path / "a" / "b" / "label.png"
        save_data_url(qr_data_url, target)
        assert target.is_file()

    def test_rejects_non_data_url(self, tmp_path):
        with pytest.raises(ValueError):
            save_data_url("https://example.com/qr.png", tmp_path / "x.png")


class TestGenerateLabelPdf:
    def test_generates_pdf_file(self, tmp_path, label_images):
        out = str(tmp_path / "labels.pdf")
        result = generate_label_pdf(label_images(3), output_path=out)
        assert result == os.path.abspath(out)
        with open(out, "rb") as f:
            assert f.read(4) == b"%PDF"

    def test_default_output_path(self, label_images):
        """Without explicit path, uses temp dir."""
        result = generate_label_pdf(label_images(1))
        assert os.path.isfile(result)
        assert result.endswith(".pdf")
        os.remove(result)

    def test_multiple_pages(self, tmp_path, label_images):
        """25 labels at 12 per page = 3 pages."""
        multi = str(tmp_path / "multi.pdf")
        generate_label_pdf(label_images(25), output_path=multi)
        single = str(tmp_path / "single.pdf")
        generate_label_pdf(label_images(5), output_path=single)
        assert os.path.getsize(multi) > os.path.getsize(single)

    def test_landscape(self, tmp_path, label_images):
        out = str(tmp_path / "landscape.pdf")
        generate_label_pdf(label_images(7), output_path=out,
                           orientation="landscape", columns=3)
        assert os.path.getsize(out) > 500

    def test_empty_input_raises(self, tmp_path):
        with pytest.raises(EmptySheetError):
            generate_label_pdf([], output_path=str(tmp_path / "x.pdf"))
