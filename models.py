"""Geometric data models for table cell reconstruction.

All coordinates are PDF page-space floats: origin at the bottom-left corner,
X increasing rightward, Y increasing upward.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Protocol, Tuple, runtime_checkable

from exceptions import EmptyArgumentError

Point = Tuple[float, float]

# Angles are compared as integers after scaling, so glyph-positioning noise
# below a milliradian does not split a line.
ORIENTATION_SCALE = 1000

# Maximum off-axis drift for a ruling to still count as horizontal/vertical
RULING_AXIS_TOLERANCE = 1.0


@runtime_checkable
class Positioned(Protocol):
    """Anything exposing an axis-aligned bounding box in page space."""

    @property
    def left(self) -> float: ...

    @property
    def bottom(self) -> float: ...

    @property
    def right(self) -> float: ...

    @property
    def top(self) -> float: ...


@runtime_checkable
class HasChunks(Protocol):
    """Anything aggregating text chunks."""

    @property
    def chunks(self) -> List["TextChunk"]: ...


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle."""
    left: float
    bottom: float
    right: float
    top: float

    def __post_init__(self) -> None:
        """Validate rectangle coordinates after initialization."""
        coords = (self.left, self.bottom, self.right, self.top)
        if not all(math.isfinite(coord) for coord in coords):
            raise EmptyArgumentError(f"Rectangle contains non-finite values: {coords}")

        if self.left > self.right or self.bottom > self.top:
            raise EmptyArgumentError(
                f"Invalid rectangle {coords} (left > right or bottom > top)"
            )

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.top - self.bottom


@dataclass(frozen=True)
class Ruling:
    """Directed line segment drawn on the page, e.g. a table border."""
    start: Point
    end: Point

    @property
    def length(self) -> float:
        return math.hypot(self.end[0] - self.start[0], self.end[1] - self.start[1])

    @property
    def is_horizontal(self) -> bool:
        return abs(self.end[1] - self.start[1]) <= RULING_AXIS_TOLERANCE

    @property
    def is_vertical(self) -> bool:
        return abs(self.end[0] - self.start[0]) <= RULING_AXIS_TOLERANCE


class TextChunk:
    """
    Rectangular run of text with font metrics and orientation-normalized
    coordinates.

    The orientation vector runs along the bottom edge from (left, bottom) to
    (right, bottom). Coordinates relative to it:

    - orientation_magnitude: angle of the unit orientation vector, scaled by
      ORIENTATION_SCALE and truncated to int, so angle equality is exact
      integer equality.
    - dist_perpendicular: Z component of (start - (0, 0, 1)) x orientation,
      truncated to int. For unrotated text this is the Y position (negated),
      so chunks higher on the page get smaller values.
    - dist_parallel_start / dist_parallel_end: projections of the start and
      end points onto the orientation vector, i.e. the X position in an
      unrotated frame. Kept as floats for reading-order tie-breaking.

    Font metadata is assigned after construction with set_font().
    """

    def __init__(
        self,
        text: str,
        left: float,
        bottom: float,
        right: float,
        top: float,
        char_space_width: float,
    ):
        """
        Initialize TextChunk.

        Args:
            text: Text of the chunk
            left, bottom, right, top: Bounding box in page space
            char_space_width: Width of a single space glyph in the chunk font

        Raises:
            EmptyArgumentError: If text is None or the box is invalid
        """
        if text is None:
            raise EmptyArgumentError("TextChunk text cannot be None")

        self.rect = Rectangle(left, bottom, right, top)
        self.text = text
        self.char_space_width = char_space_width
        self.font: Optional[Any] = None
        self.font_size: Optional[float] = None

        start = (left, bottom)
        end = (right, bottom)
        ox, oy = end[0] - start[0], end[1] - start[1]
        length = math.hypot(ox, oy)
        if length == 0:
            ox, oy, length = 1.0, 0.0, 1.0
        ux, uy = ox / length, oy / length

        self.orientation_magnitude = int(math.atan2(uy, ux) * ORIENTATION_SCALE)

        # (start - origin) with origin (0, 0, 1) has z = -1; the cross product
        # with a z-less unit vector only keeps x/y in its Z component.
        self.dist_perpendicular = int(start[0] * uy - start[1] * ux)

        self.dist_parallel_start = ux * start[0] + uy * start[1]
        self.dist_parallel_end = ux * end[0] + uy * end[1]

    @property
    def left(self) -> float:
        return self.rect.left

    @property
    def bottom(self) -> float:
        return self.rect.bottom

    @property
    def right(self) -> float:
        return self.rect.right

    @property
    def top(self) -> float:
        return self.rect.top

    @property
    def font_resolved(self) -> bool:
        return self.font_size is not None

    def set_font(self, font: Any, font_size: float) -> None:
        """Attach font metadata once font resolution has completed."""
        self.font = font
        self.font_size = font_size

    @property
    def sort_key(self) -> Tuple[int, int, float]:
        return (self.orientation_magnitude, self.dist_perpendicular, self.dist_parallel_start)

    def same_line(self, other: TextChunk) -> bool:
        """Check whether both chunks share orientation and perpendicular offset."""
        if self.orientation_magnitude != other.orientation_magnitude:
            return False
        return self.dist_perpendicular == other.dist_perpendicular

    def same_line_exact(self, other: TextChunk) -> bool:
        """Check whether both chunks sit on exactly the same bottom coordinate."""
        return self.bottom == other.bottom

    def distance_from_end_of(self, other: TextChunk) -> float:
        """
        Distance from the end of other chunk to the start of this one.

        Negative when the chunks overlap along the orientation axis.
        """
        return self.dist_parallel_start - other.dist_parallel_end

    def compare_to(self, other: TextChunk) -> int:
        """Three-way comparison by (orientation, perpendicular, parallel start)."""
        if self is other:
            return 0
        lhs, rhs = self.sort_key, other.sort_key
        return (lhs > rhs) - (lhs < rhs)

    def __lt__(self, other: TextChunk) -> bool:
        if not isinstance(other, TextChunk):
            return NotImplemented
        return self.compare_to(other) < 0

    def describe(self) -> str:
        """Diagnostic summary used when debugging chunk ordering."""
        return (
            f"Text (@{self.left},{self.bottom} -> {self.right},{self.bottom}): {self.text}\n"
            f"orientation_magnitude: {self.orientation_magnitude}\n"
            f"dist_perpendicular: {self.dist_perpendicular}\n"
            f"dist_parallel: {self.dist_parallel_start}"
        )

    def __repr__(self) -> str:
        return (
            f"TextChunk({self.text!r}, {self.left}, {self.bottom}, "
            f"{self.right}, {self.top})"
        )


@dataclass
class TextBlock:
    """Ordered group of text chunks, e.g. a text line or a cell candidate.

    Chunks are shared references; a block never copies or mutates them.
    """
    chunks: List[TextChunk] = field(default_factory=list)

    def add(self, chunk: TextChunk) -> None:
        if chunk is None:
            raise EmptyArgumentError("Cannot add None to a TextBlock")
        self.chunks.append(chunk)

    def __len__(self) -> int:
        return len(self.chunks)

    def __iter__(self) -> Iterator[TextChunk]:
        return iter(self.chunks)

    def _require_chunks(self) -> List[TextChunk]:
        if not self.chunks:
            raise EmptyArgumentError("TextBlock has no chunks")
        return self.chunks

    @property
    def left(self) -> float:
        return min(chunk.left for chunk in self._require_chunks())

    @property
    def bottom(self) -> float:
        return min(chunk.bottom for chunk in self._require_chunks())

    @property
    def right(self) -> float:
        return max(chunk.right for chunk in self._require_chunks())

    @property
    def top(self) -> float:
        return max(chunk.top for chunk in self._require_chunks())

    @property
    def text(self) -> str:
        return " ".join(chunk.text for chunk in self.chunks)

    def any_shared_font_size(self, other: TextBlock) -> bool:
        """
        Check whether any chunk of this block has exactly the font size of
        any chunk of other block.

        Font sizes come from a small set of declared PDF font metrics, so
        the comparison is exact.
        """
        for chunk in self.chunks:
            for other_chunk in other.chunks:
                if chunk.font_size == other_chunk.font_size:
                    return True
        return False
