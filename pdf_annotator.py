"""Debug drawing of rectangles and rulings onto a PDF using PyMuPDF."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional, Tuple

import fitz  # PyMuPDF

from exceptions import PDFAnnotationError, PDFReadError
from models import Positioned, Ruling

logger = logging.getLogger(__name__)

ORDER_LABEL_FONT_SIZE = 8

Color = Tuple[float, float, float]


class PDFDebugWriter:
    """
    Draw page-space rectangles and rulings on a PDF document.

    Inputs use the PDF convention (origin bottom-left, Y up); the writer
    flips them into PyMuPDF's top-left coordinates.
    """

    def __init__(self, pdf_document: fitz.Document, pdf_path: Path):
        """
        Initialize PDFDebugWriter.

        Args:
            pdf_document: PyMuPDF Document object to draw on
            pdf_path: Path to the original PDF file
        """
        if pdf_document is None:
            raise PDFReadError("PDF document cannot be None")

        self.pdf_document = pdf_document
        self.pdf_path = Path(pdf_path)
        self.output_path: Optional[Path] = None
        self.page_number = 0
        self.color: Color = (1, 0, 0)
        self.show_chunk_order = False

    def set_page(self, page_number: int) -> None:
        if page_number < 0 or page_number >= len(self.pdf_document):
            raise ValueError(f"Invalid page number: {page_number}")
        self.page_number = page_number

    def set_color(self, color: Color) -> None:
        self.color = color

    @property
    def _page(self) -> fitz.Page:
        return self.pdf_document[self.page_number]

    def draw_rect(self, rect: Positioned, order: Optional[int] = None) -> None:
        """
        Outline a rectangle, labelled with its order when show_chunk_order is set.

        Raises:
            PDFAnnotationError: If drawing fails
        """
        try:
            page = self._page
            height = page.rect.height
            page.draw_rect(
                fitz.Rect(rect.left, height - rect.top, rect.right, height - rect.bottom),
                color=self.color,
                width=0.5,
            )
            if self.show_chunk_order and order is not None:
                page.insert_text(
                    fitz.Point(rect.left, height - rect.top),
                    str(order),
                    fontsize=ORDER_LABEL_FONT_SIZE,
                    fontname="helv",
                    color=self.color,
                )
        except Exception as e:
            error_msg = f"Failed to draw rectangle on page {self.page_number}: {str(e)}"
            logger.error(error_msg)
            raise PDFAnnotationError(error_msg) from e

    def draw_rects(self, rects: Iterable[Positioned]) -> int:
        """Draw rectangles, using their position in the sequence as order."""
        count = 0
        for order, rect in enumerate(rects):
            self.draw_rect(rect, order)
            count += 1
        logger.debug(f"Drew {count} rectangles on page {self.page_number}")
        return count

    def draw_ruling(self, ruling: Ruling) -> None:
        """
        Draw a ruling segment.

        Raises:
            PDFAnnotationError: If drawing fails
        """
        try:
            page = self._page
            height = page.rect.height
            page.draw_line(
                fitz.Point(ruling.start[0], height - ruling.start[1]),
                fitz.Point(ruling.end[0], height - ruling.end[1]),
                color=self.color,
                width=0.5,
            )
        except Exception as e:
            error_msg = f"Failed to draw ruling on page {self.page_number}: {str(e)}"
            logger.error(error_msg)
            raise PDFAnnotationError(error_msg) from e

    def save_pdf(self, output_path: Optional[Path] = None) -> Path:
        """
        Save the annotated PDF.

        Args:
            output_path: Optional output path. If None, writes "<stem>_debug.pdf"
                        next to the original.

        Raises:
            PDFAnnotationError: If save fails
        """
        if output_path is None:
            output_path = self.pdf_path.parent / f"{self.pdf_path.stem}_debug{self.pdf_path.suffix}"

        try:
            self.pdf_document.save(output_path)
        except Exception as e:
            error_msg = f"Failed to save PDF: {str(e)}"
            logger.error(error_msg)
            raise PDFAnnotationError(error_msg) from e

        self.output_path = Path(output_path)
        logger.info(f"Debug PDF saved: {output_path}")
        return self.output_path
