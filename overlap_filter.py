"""Duplicate text chunk detection and filtering using Shapely.

Some PDF producers simulate bold type by drawing the same text run several
times with a small offset; the copies overlap almost entirely.
"""

from __future__ import annotations

import logging
from typing import List, Tuple

from shapely.geometry import Polygon, box

from models import Positioned, TextChunk

logger = logging.getLogger(__name__)


class OverlapFilter:
    """Detect and filter overlapping text chunks using Shapely."""

    def __init__(self, overlap_threshold: float = 0.5):
        """
        Initialize OverlapFilter.

        Args:
            overlap_threshold: Minimum coverage ratio to consider chunks as overlapping (0.0-1.0)
        """
        if not 0.0 <= overlap_threshold <= 1.0:
            raise ValueError("overlap_threshold must be between 0.0 and 1.0")

        self.overlap_threshold = overlap_threshold

    @staticmethod
    def _to_polygon(item: Positioned) -> Polygon:
        return box(item.left, item.bottom, item.right, item.top)

    def calculate_coverage_ratio(self, first: Positioned, second: Positioned) -> float:
        """
        Calculate coverage ratio between two boxes.

        Coverage ratio = intersection_area / min(area1, area2); degenerate
        boxes have no area and never cover anything.
        """
        poly1 = self._to_polygon(first)
        poly2 = self._to_polygon(second)

        min_area = min(poly1.area, poly2.area)
        if min_area < 1e-10:
            return 0.0

        if not poly1.intersects(poly2):
            return 0.0

        return poly1.intersection(poly2).area / min_area

    def detect_overlaps(
        self,
        chunks: List[TextChunk],
        same_text_only: bool = True
    ) -> List[Tuple[int, int, float]]:
        """
        Detect overlapping chunk pairs.

        Args:
            chunks: Chunks of a single page
            same_text_only: Only pair chunks carrying identical text

        Returns:
            List of tuples (index1, index2, coverage_ratio) for overlapping pairs
        """
        overlaps = []
        for i in range(len(chunks)):
            for j in range(i + 1, len(chunks)):
                if same_text_only and chunks[i].text != chunks[j].text:
                    continue

                coverage_ratio = self.calculate_coverage_ratio(chunks[i], chunks[j])
                if coverage_ratio >= self.overlap_threshold:
                    overlaps.append((i, j, coverage_ratio))
                    logger.debug(
                        f"Overlap detected: chunks {i} and {j} "
                        f"(coverage: {coverage_ratio:.2f})"
                    )

        logger.info(f"Detected {len(overlaps)} overlapping pairs")
        return overlaps

    def filter_overlapping(
        self,
        chunks: List[TextChunk],
        strategy: str = "keep_largest",
        same_text_only: bool = True
    ) -> List[TextChunk]:
        """
        Drop duplicate chunks.

        Args:
            chunks: Chunks of a single page
            strategy: "keep_largest" keeps the larger box of each pair (the
                      earlier one on ties), "keep_first" keeps the earlier one
            same_text_only: Only consider chunks with identical text as duplicates

        Returns:
            Filtered list preserving input order

        Raises:
            ValueError: If strategy is not supported
        """
        if strategy not in ("keep_largest", "keep_first"):
            raise ValueError(f"Unsupported filtering strategy: {strategy}")

        if not chunks:
            return chunks

        overlaps = self.detect_overlaps(chunks, same_text_only=same_text_only)
        if not overlaps:
            return chunks

        indices_to_remove = set()
        for i, j, _ in overlaps:
            if strategy == "keep_largest":
                area_i = self._to_polygon(chunks[i]).area
                area_j = self._to_polygon(chunks[j]).area
                indices_to_remove.add(i if area_j > area_i else j)
            else:
                indices_to_remove.add(j)

        filtered = [chunk for idx, chunk in enumerate(chunks) if idx not in indices_to_remove]
        logger.info(
            f"Filtered {len(indices_to_remove)} duplicate chunks "
            f"(strategy: {strategy}). Remaining: {len(filtered)} chunks"
        )
        return filtered
