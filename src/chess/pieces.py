"""Defines the types of chess pieces"""

from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import Self

from src.chess.square import BOARD_DIMENSIONS


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()


PIECE_POINTS: dict[PieceType, int] = {
    PieceType.PAWN: 1,
    PieceType.KNIGHT: 3,
    PieceType.BISHOP: 3,
    PieceType.ROOK: 5,
    PieceType.QUEEN: 9,
}

PROMOTION_OPTIONS: tuple[PieceType, ...] = (
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.ROOK,
    PieceType.QUEEN,
)

# Order of the pieces on the back rank, from the a-file to the h-file
BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


# Home ranks: (back rank, pawn rank) for both colors
HOME_RANKS: dict[Color, tuple[int, int]] = {
    Color.WHITE: (0, 1),
    Color.BLACK: (BOARD_DIMENSIONS[0] - 1, BOARD_DIMENSIONS[0] - 2),
}


def opposing(color: Color) -> Color:
    return Color.WHITE if color == Color.BLACK else Color.BLACK


@dataclass(frozen=True)
class Piece:
    """
    Value type: pieces never get mutated in place.
    Moving a piece puts a copy with `has_moved=True` on the destination square.
    """

    type: PieceType
    color: Color
    has_moved: bool = False

    @property
    def points(self) -> int:
        # NOTE: The King's worth is undefined (does not count towards total points)
        return PIECE_POINTS.get(self.type, 0)

    def moved(self) -> Self:
        return replace(self, has_moved=True)

    def promoted_to(self, new_type: PieceType) -> Self:
        return replace(self, type=new_type)
