"""Shared fixtures for table cell tests."""

from __future__ import annotations

import fitz  # PyMuPDF
import pytest

from models import TextChunk


@pytest.fixture
def make_chunk():
    """Factory for chunks with an optional font size already assigned."""

    def _make(text="x", left=0.0, bottom=0.0, right=10.0, top=5.0,
              char_space_width=2.0, font_size=None):
        chunk = TextChunk(text, left, bottom, right, top, char_space_width)
        if font_size is not None:
            chunk.set_font("Helvetica", font_size)
        return chunk

    return _make


@pytest.fixture
def sample_pdf(tmp_path):
    """Single A4 page: two cells on one row, one cell below, a horizontal rule."""
    pdf_path = tmp_path / "table.pdf"
    document = fitz.open()
    page = document.new_page()
    page.insert_text((72, 100), "Name", fontsize=12)
    page.insert_text((300, 100), "Value", fontsize=12)
    page.insert_text((72, 200), "Total", fontsize=12)
    page.draw_line((72, 300), (500, 300))
    document.save(pdf_path)
    document.close()
    return pdf_path
