"""Command-line argument parsing and validation."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional, Sequence

logger = logging.getLogger(__name__)


class CLIHandler:
    """Handle command-line argument parsing and validation."""

    @staticmethod
    def parse_page_range(page_str: str) -> List[int]:
        """
        Parse a 1-indexed page range string into sorted 0-indexed page numbers.

        "1,3-5" -> [0, 2, 3, 4]

        Raises:
            ValueError: If page range format is invalid
        """
        if not page_str:
            return []

        pages = set()
        for part in page_str.split(','):
            part = part.strip()
            bounds = part.split('-', 1)
            try:
                start = int(bounds[0].strip())
                end = int(bounds[-1].strip())
            except ValueError as e:
                raise ValueError(f"Invalid page range format: {part}") from e

            if start < 1 or end < 1:
                raise ValueError(f"Page numbers must be >= 1: {part}")
            if start > end:
                raise ValueError(f"Start page must be <= end page: {part}")

            pages.update(range(start - 1, end))

        return sorted(pages)

    @staticmethod
    def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(
            description="Order PDF text chunks into lines and draw them for inspection",
            formatter_class=argparse.RawDescriptionHelpFormatter
        )

        parser.add_argument(
            'pdf_path',
            type=str,
            help='Path to input PDF file'
        )

        parser.add_argument(
            '--pages',
            type=str,
            default=None,
            metavar='RANGE',
            help='Page range to process (1-indexed). '
                 'Examples: "1,3,5" or "1-5" or "1,3-5,10"'
        )

        parser.add_argument(
            '--exact-lines',
            action='store_true',
            help='Group lines by exact bottom coordinate instead of the '
                 'orientation-tolerant comparison'
        )

        parser.add_argument(
            '--filter-duplicates',
            action='store_true',
            help='Drop overlapping chunks with identical text (fake bold rendering)'
        )

        parser.add_argument(
            '--overlap-strategy',
            type=str,
            default='keep_largest',
            choices=['keep_largest', 'keep_first'],
            help='Which duplicate to keep when --filter-duplicates is used'
        )

        parser.add_argument(
            '--show-order',
            action='store_true',
            help='Label every drawn chunk with its reading-order index'
        )

        parser.add_argument(
            '--draw-rulings',
            action='store_true',
            help='Also draw the line segments found on each page'
        )

        parser.add_argument(
            '--save-json',
            type=str,
            nargs='?',
            const='',
            default=None,
            metavar='FILENAME',
            help='Save ordered chunks to JSON. Without a filename uses '
                 '{pdfname}_chunks.json'
        )

        parser.add_argument(
            '--log-level',
            type=str,
            default='INFO',
            choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
            help='Set logging level (default: INFO)'
        )

        return parser.parse_args(argv)

    @staticmethod
    def validate_arguments(args: argparse.Namespace) -> bool:
        """
        Validate parsed arguments.

        Raises:
            ValueError: If arguments are invalid
        """
        pdf_path = Path(args.pdf_path)
        if not pdf_path.is_file():
            raise ValueError(f"PDF file not found: {pdf_path}")

        if pdf_path.suffix.lower() != '.pdf':
            raise ValueError(f"File is not a PDF: {pdf_path}")

        if args.pages:
            try:
                CLIHandler.parse_page_range(args.pages)
            except ValueError as e:
                raise ValueError(f"Invalid page range: {e}") from e

        return True
