"""Main entry point for the table cell debugging tool."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from chunk_ordering import group_lines
from cli_handler import CLIHandler
from exceptions import TableCellsException
from json_exporter import JSONExporter
from models import TextBlock
from overlap_filter import OverlapFilter
from pdf_annotator import PDFDebugWriter
from pdf_reader import PDFReader

logger = logging.getLogger(__name__)

DEFAULT_OVERLAP_THRESHOLD = 0.5

CHUNK_COLOR = (1, 0, 0)
LINE_COLOR = (0, 0, 1)
RULING_COLOR = (0, 0.6, 0)


def process_pdf(args) -> Dict[int, List[TextBlock]]:
    """
    Extract, order and draw the chunks of every requested page.

    Returns:
        Page number (0-indexed) -> lines of that page
    """
    pdf_path = Path(args.pdf_path)
    pages: Dict[int, List[TextBlock]] = {}

    with PDFReader(pdf_path) as pdf_reader:
        if args.pages:
            page_range = [
                p for p in CLIHandler.parse_page_range(args.pages)
                if p < pdf_reader.page_count
            ]
        else:
            page_range = list(range(pdf_reader.page_count))
        logger.info(f"Processing pages: {[p + 1 for p in page_range]} (1-indexed)")

        writer = PDFDebugWriter(pdf_reader.pdf_document, pdf_path)
        writer.show_chunk_order = args.show_order
        overlap_filter = OverlapFilter(overlap_threshold=DEFAULT_OVERLAP_THRESHOLD)

        for page_num in page_range:
            chunks = pdf_reader.extract_chunks(page_num)
            if args.filter_duplicates:
                chunks = overlap_filter.filter_overlapping(chunks, strategy=args.overlap_strategy)

            rulings = pdf_reader.extract_rulings(page_num) if args.draw_rulings else []
            lines = group_lines(chunks, exact=args.exact_lines)
            pages[page_num] = lines
            logger.info(f"Page {page_num + 1}: {len(chunks)} chunks in {len(lines)} lines")

            writer.set_page(page_num)
            writer.set_color(CHUNK_COLOR)
            writer.draw_rects(chunk for line in lines for chunk in line.chunks)
            writer.set_color(LINE_COLOR)
            for line in lines:
                writer.draw_rect(line)

            writer.set_color(RULING_COLOR)
            for ruling in rulings:
                writer.draw_ruling(ruling)

        writer.save_pdf()

    if args.save_json is not None:
        output_filename = None if args.save_json == '' else args.save_json
        output_path = JSONExporter(pdf_path).export(pages, output_filename=output_filename)
        logger.info(f"JSON exported to: {output_path}")

    return pages


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Main entry point for the table cell debugging tool."""
    try:
        args = CLIHandler.parse_arguments(argv)

        logging.basicConfig(
            level=getattr(logging, args.log_level),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        CLIHandler.validate_arguments(args)
        logger.info(f"Processing PDF: {args.pdf_path}")
        process_pdf(args)
        logger.info("PDF processing completed successfully")

    except TableCellsException as e:
        logger.error(f"Table cells error: {e}")
        sys.exit(1)
    except ValueError as e:
        logger.error(f"Validation Error: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Process interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
