"""Export ordered chunks and grouped lines to JSON format."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from chunk_ordering import line_text
from exceptions import JSONExportError
from models import TextBlock, TextChunk

logger = logging.getLogger(__name__)


class JSONExporter:
    """Export page lines to a JSON file next to the PDF."""

    def __init__(self, pdf_path: Path):
        self.pdf_path = Path(pdf_path)
        self.pdf_name = self.pdf_path.name

    def _get_output_path(self, filename: Optional[str] = None) -> Path:
        if filename is None:
            filename = f"{self.pdf_path.stem}_chunks.json"

        if not filename.endswith('.json'):
            filename = f"{filename}.json"

        return self.pdf_path.parent / filename

    @staticmethod
    def _format_chunk(chunk: TextChunk, order: int) -> Dict[str, Any]:
        return {
            "order": order,
            "text": chunk.text,
            "bbox": [chunk.left, chunk.bottom, chunk.right, chunk.top],
            "orientation_magnitude": chunk.orientation_magnitude,
            "dist_perpendicular": chunk.dist_perpendicular,
            "dist_parallel_start": chunk.dist_parallel_start,
            "dist_parallel_end": chunk.dist_parallel_end,
            "font": None if chunk.font is None else str(chunk.font),
            "font_size": chunk.font_size,
        }

    def _format_data(self, pages: Mapping[int, List[TextBlock]]) -> Dict[str, Any]:
        """
        Format lines per page for JSON export.

        Chunk order runs across all lines of a page; page numbers become 1-indexed.
        """
        pages_data = []
        for page_num in sorted(pages):
            order = 0
            lines_data = []
            for line in pages[page_num]:
                chunks_data = []
                for chunk in line.chunks:
                    chunks_data.append(self._format_chunk(chunk, order))
                    order += 1
                lines_data.append({"text": line_text(line), "chunks": chunks_data})

            pages_data.append({"page_number": page_num + 1, "lines": lines_data})

        return {"pdf_name": self.pdf_name, "pages": pages_data}

    def export(
        self,
        pages: Mapping[int, List[TextBlock]],
        output_filename: Optional[str] = None
    ) -> Path:
        """
        Export lines to JSON file.

        Args:
            pages: Page number (0-indexed) -> lines of that page
            output_filename: Optional custom output filename

        Returns:
            Path to the exported JSON file

        Raises:
            JSONExportError: If export fails
        """
        try:
            output_path = self._get_output_path(output_filename)
            data = self._format_data(pages)

            with open(output_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)

        except Exception as e:
            error_msg = f"Failed to export JSON: {str(e)}"
            logger.error(error_msg)
            raise JSONExportError(error_msg) from e

        logger.info(f"JSON exported successfully: {output_path}")
        return output_path
