"""PDF file reading, validation and chunk/ruling extraction."""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import List, Optional, Tuple

import fitz  # PyMuPDF

from exceptions import EmptyArgumentError, PDFReadError, PDFValidationError
from models import Ruling, TextChunk

logger = logging.getLogger(__name__)

# Rectangles thinner than this are drawn table borders, not boxes
THIN_RECT_TOLERANCE = 1.5


class PDFReader:
    """Read a PDF and turn its text spans and line drawings into page-space geometry."""

    def __init__(self, pdf_path: Path):
        """
        Initialize PDFReader with PDF file path.

        Args:
            pdf_path: Path to the PDF file
        """
        self.pdf_path = Path(pdf_path)
        self.pdf_document: Optional[fitz.Document] = None

    def __enter__(self) -> PDFReader:
        self.validate_path()
        self.open_pdf()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def validate_path(self) -> bool:
        """
        Validate PDF file path and existence.

        Raises:
            PDFValidationError: If path is invalid or file doesn't exist
        """
        if not self.pdf_path.is_file():
            error_msg = f"PDF file not found: {self.pdf_path}"
            logger.error(error_msg)
            raise PDFValidationError(error_msg)

        if self.pdf_path.suffix.lower() != '.pdf':
            error_msg = f"File is not a PDF: {self.pdf_path}"
            logger.error(error_msg)
            raise PDFValidationError(error_msg)

        logger.info(f"PDF path validated: {self.pdf_path}")
        return True

    def open_pdf(self) -> fitz.Document:
        """
        Open PDF file.

        Raises:
            PDFReadError: If PDF cannot be opened
        """
        try:
            self.pdf_document = fitz.open(self.pdf_path)
            logger.info(f"PDF opened successfully: {self.pdf_path}")
            return self.pdf_document
        except Exception as e:
            error_msg = f"Failed to open PDF: {self.pdf_path}. Error: {str(e)}"
            logger.error(error_msg)
            raise PDFReadError(error_msg) from e

    def _require_document(self) -> fitz.Document:
        if self.pdf_document is None:
            raise PDFReadError("PDF document not opened. Call open_pdf() first.")
        return self.pdf_document

    def _get_page(self, page_num: int) -> fitz.Page:
        document = self._require_document()
        if page_num < 0 or page_num >= len(document):
            raise ValueError(f"Invalid page number: {page_num}")
        return document[page_num]

    @property
    def page_count(self) -> int:
        return len(self._require_document())

    def get_page_dimensions(self, page_num: int) -> Tuple[float, float]:
        """Get page (width, height) in PDF units."""
        rect = self._get_page(page_num).rect
        return rect.width, rect.height

    @staticmethod
    def _space_width(span: dict) -> float:
        """Width of a space glyph in the span font, measured or estimated."""
        for char in span.get("chars", []):
            if char["c"] == " ":
                x0, _, x1, _ = char["bbox"]
                if x1 > x0:
                    return x1 - x0
        return fitz.get_text_length(" ", fontsize=span["size"])

    def extract_chunks(self, page_num: int) -> List[TextChunk]:
        """
        Extract one TextChunk per non-blank text span of a page.

        Args:
            page_num: Page number (0-indexed)

        Returns:
            Chunks in extraction order, with fonts assigned

        Raises:
            PDFReadError: If the page content cannot be read
        """
        page = self._get_page(page_num)
        page_height = page.rect.height
        chunks = []

        try:
            raw = page.get_text("rawdict")
        except Exception as e:
            error_msg = f"Failed to extract text from page {page_num}: {str(e)}"
            logger.error(error_msg)
            raise PDFReadError(error_msg) from e

        for block in raw.get("blocks", []):
            for line in block.get("lines", []):
                for span in line.get("spans", []):
                    text = "".join(char["c"] for char in span.get("chars", []))
                    if not text.strip():
                        continue

                    x0, y0, x1, y1 = span["bbox"]
                    if not all(math.isfinite(coord) for coord in (x0, y0, x1, y1)):
                        logger.warning(f"Span bbox contains non-finite values: {span['bbox']}, skipping")
                        continue

                    try:
                        chunk = TextChunk(
                            text,
                            left=x0,
                            bottom=page_height - y1,
                            right=x1,
                            top=page_height - y0,
                            char_space_width=self._space_width(span),
                        )
                    except EmptyArgumentError as e:
                        logger.warning(f"Skipping span {text!r} on page {page_num}: {e}")
                        continue

                    chunk.set_font(span.get("font"), span["size"])
                    chunks.append(chunk)

        logger.debug(f"Extracted {len(chunks)} chunks from page {page_num}")
        return chunks

    def extract_rulings(self, page_num: int) -> List[Ruling]:
        """
        Extract drawn line segments of a page as rulings.

        Thin filled rectangles are treated as lines through their centre.

        Args:
            page_num: Page number (0-indexed)

        Returns:
            Rulings in page space
        """
        page = self._get_page(page_num)
        page_height = page.rect.height

        def flip(x: float, y: float) -> Tuple[float, float]:
            return (x, page_height - y)

        rulings = []
        try:
            drawings = page.get_drawings()
        except Exception as e:
            error_msg = f"Failed to extract drawings from page {page_num}: {str(e)}"
            logger.error(error_msg)
            raise PDFReadError(error_msg) from e

        for drawing in drawings:
            for item in drawing.get("items", []):
                kind = item[0]
                if kind == "l":
                    p1, p2 = item[1], item[2]
                    rulings.append(Ruling(flip(p1.x, p1.y), flip(p2.x, p2.y)))
                elif kind == "re":
                    rect = item[1]
                    if rect.height <= THIN_RECT_TOLERANCE:
                        y = (rect.y0 + rect.y1) / 2
                        rulings.append(Ruling(flip(rect.x0, y), flip(rect.x1, y)))
                    elif rect.width <= THIN_RECT_TOLERANCE:
                        x = (rect.x0 + rect.x1) / 2
                        rulings.append(Ruling(flip(x, rect.y1), flip(x, rect.y0)))

        logger.debug(f"Extracted {len(rulings)} rulings from page {page_num}")
        return rulings

    def close(self) -> None:
        """Close the PDF document."""
        if self.pdf_document is not None:
            self.pdf_document.close()
            self.pdf_document = None
            logger.info("PDF document closed")
