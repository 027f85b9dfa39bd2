"""The Board holds the position (in chess: the configuration of pieces on the board) and nothing else."""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Self

from src.chess.pieces import BACK_RANK, HOME_RANKS, Color, Piece, PieceType
from src.chess.square import Square
from src.core.exceptions import InvariantViolationError

_LOGGER = logging.getLogger(__name__)


@dataclass
class Board:
    """
    Mapping from Square to the Piece standing on it. Empty squares are simply absent.

    Pieces are immutable values, so copying the dictionary is enough to get an independent board
    that hypothetical moves can be played on.
    """

    position: dict[Square, Piece] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> Self:
        return cls()

    @classmethod
    def starting_position(cls) -> Self:
        """The standard 32-piece setup. White on ranks 0/1, Black on ranks 7/6."""
        board = cls()
        for color, (back_rank, pawn_rank) in HOME_RANKS.items():
            for file, piece_type in enumerate(BACK_RANK):
                board.place(Square(back_rank, file), Piece(piece_type, color))
                board.place(Square(pawn_rank, file), Piece(PieceType.PAWN, color))
        return board

    def copy(self) -> Self:
        return type(self)(dict(self.position))

    def piece_at(self, square: Square) -> Optional[Piece]:
        square.assert_within_bounds()
        return self.position.get(square)

    def place(self, square: Square, piece: Optional[Piece]) -> None:
        """Unconditional write. `None` clears the square."""
        square.assert_within_bounds()
        if piece is None:
            self.position.pop(square, None)
        else:
            self.position[square] = piece

    def is_empty(self, square: Square) -> bool:
        return self.piece_at(square) is None

    def is_any_occupied(self, squares: Iterable[Square]) -> bool:
        return any(not self.is_empty(square) for square in squares)

    def move_piece(self, from_square: Square, to_square: Square) -> Optional[Piece]:
        """Relocate a piece, marking it as moved. Returns whatever stood on the destination."""
        piece = self.piece_at(from_square)
        captured = self.piece_at(to_square)
        self.place(to_square, piece.moved() if piece else None)
        self.place(from_square, None)
        return captured

    def locate_color(self, color: Color) -> list[Square]:
        return [
            square for square, piece in self.position.items() if piece.color == color
        ]

    def find_king(self, color: Color) -> Square:
        kings = [
            square
            for square, piece in self.position.items()
            if piece.type == PieceType.KING and piece.color == color
        ]
        if len(kings) != 1:
            _LOGGER.error("Found %d %s kings on the board", len(kings), color.name)
            raise InvariantViolationError(
                f"Expected exactly one {color.name.lower()} king, found {len(kings)}."
            )
        return kings[0]

    def count_material(self) -> dict[Color, int]:
        """Tally the points of material each player has on the board"""
        return {color: self._count_material_player(color) for color in Color}

    def _count_material_player(self, color: Color) -> int:
        return sum(
            piece.points for piece in self.position.values() if piece.color == color
        )
