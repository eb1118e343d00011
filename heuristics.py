"""Pairwise and triple-wise predicates used to group chunks into table cells.

Every heuristic is a pure function of its operands and its own tags; a single
instance can be reused for any number of evaluations, from any thread.
Combining results into larger rules is left to the caller.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Generic, TypeVar

from exceptions import EmptyArgumentError
from models import HasChunks, Positioned, TextChunk

T = TypeVar("T")


class Orientation(str, Enum):
    """Coordinate axis a heuristic reasons about."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    BOTH = "both"


class TriHeuristicType(str, Enum):
    """Relative position among three operands tested by a TriHeuristic."""

    BEFORE = "before"
    AFTER = "after"
    BETWEEN = "between"


class Heuristic(ABC):
    """Base class for all heuristics."""

    # Capability every operand must satisfy
    operand_type: type = Positioned

    def __init__(self, orientation: Orientation):
        self.orientation = orientation

    def applies_to(self, orientation: Orientation) -> bool:
        """Check whether this heuristic is relevant for the given axis."""
        if self.orientation is Orientation.BOTH or orientation is Orientation.BOTH:
            return True
        return self.orientation is orientation

    def check_operands(self, *operands: Any) -> None:
        """
        Validate operands before evaluation.

        Raises:
            EmptyArgumentError: If an operand is None or lacks the capability
                this heuristic needs
        """
        for position, operand in enumerate(operands):
            if operand is None:
                raise EmptyArgumentError(
                    f"{type(self).__name__}: operand {position} is None"
                )
            if not isinstance(operand, self.operand_type):
                raise EmptyArgumentError(
                    f"{type(self).__name__}: operand {position} "
                    f"({type(operand).__name__}) is not {self.operand_type.__name__}"
                )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.orientation.value})"


class BiHeuristic(Heuristic, Generic[T]):
    """Heuristic over two operands."""

    @abstractmethod
    def test(self, first: T, second: T) -> bool:
        ...

    def __call__(self, first: T, second: T) -> bool:
        return self.test(first, second)


class TriHeuristic(Heuristic, Generic[T]):
    """Heuristic over three operands."""

    def __init__(self, orientation: Orientation, heuristic_type: TriHeuristicType):
        super().__init__(orientation)
        self.heuristic_type = heuristic_type

    @abstractmethod
    def test(self, first: T, second: T, third: T) -> bool:
        ...

    def __call__(self, first: T, second: T, third: T) -> bool:
        return self.test(first, second, third)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.orientation.value}, {self.heuristic_type.value})"


class EqualFontSizeBiHeuristic(BiHeuristic[HasChunks]):
    """True iff any chunk of first shares an exact font size with any chunk of second."""

    operand_type = HasChunks

    def __init__(self, orientation: Orientation = Orientation.BOTH):
        super().__init__(orientation)

    def test(self, first: HasChunks, second: HasChunks) -> bool:
        self.check_operands(first, second)
        for chunk in first.chunks:
            for other_chunk in second.chunks:
                if chunk.font_size == other_chunk.font_size:
                    return True
        return False


class HorizontalPositionBiHeuristic(BiHeuristic[Positioned]):
    """
    True iff first and second sit side by side on a common horizontal band,
    first to the left.

    Both intervals are closed: vertical spans that merely touch still share
    the band, and first may end exactly where second begins.
    """

    def __init__(self, orientation: Orientation = Orientation.HORIZONTAL):
        super().__init__(orientation)

    def test(self, first: Positioned, second: Positioned) -> bool:
        self.check_operands(first, second)
        if first.bottom > second.top or second.bottom > first.top:
            return False
        return first.right <= second.left


class VerticalPositionBiHeuristic(BiHeuristic[Positioned]):
    """
    True iff first sits directly above second on a common vertical band.

    Same closed-interval policy as HorizontalPositionBiHeuristic, transposed.
    """

    def __init__(self, orientation: Orientation = Orientation.VERTICAL):
        super().__init__(orientation)

    def test(self, first: Positioned, second: Positioned) -> bool:
        self.check_operands(first, second)
        if first.left > second.right or second.left > first.right:
            return False
        return first.bottom >= second.top


class SameLineBiHeuristic(BiHeuristic[TextChunk]):
    """True iff both chunks lie on the same text line.

    With exact=True the raw bottom coordinates must match; otherwise the
    integer orientation and perpendicular offsets are compared.
    """

    operand_type = TextChunk

    def __init__(self, exact: bool = False, orientation: Orientation = Orientation.HORIZONTAL):
        super().__init__(orientation)
        self.exact = exact

    def test(self, first: TextChunk, second: TextChunk) -> bool:
        self.check_operands(first, second)
        if self.exact:
            return first.same_line_exact(second)
        return first.same_line(second)


class CutInAfterTriHeuristic(TriHeuristic[Positioned]):
    """
    False iff second and third are horizontally positioned and first reaches
    into third, i.e. placing first after the pair would break a vertical cut.
    """

    def __init__(self):
        super().__init__(Orientation.VERTICAL, TriHeuristicType.AFTER)
        self._horizontal_position = HorizontalPositionBiHeuristic()

    def test(self, first: Positioned, second: Positioned, third: Positioned) -> bool:
        self.check_operands(first, second, third)
        return not (
            self._horizontal_position.test(second, third)
            and first.right >= third.left
        )
