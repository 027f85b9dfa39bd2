"""Helpers for implementing Castling rules."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.chess.board import Board
from src.chess.check import is_attacked
from src.chess.moves import squares_between
from src.chess.pieces import Color, Piece, PieceType, opposing
from src.chess.square import Square


class CastlingDirection(Enum):
    """The four castling directions."""

    WHITE_KING_SIDE = auto()
    WHITE_QUEEN_SIDE = auto()
    BLACK_KING_SIDE = auto()
    BLACK_QUEEN_SIDE = auto()


@dataclass(frozen=True)
class CastlingSquares:
    """Store the squares where king/rook start from/end up in by castling."""

    color: Color
    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def from_algebraic(
        cls, color: Color, k_from: str, k_to: str, r_from: str, r_to: str
    ) -> Self:
        """Convenience method: to make mapping shown below (from CastlingDirection) more readable"""
        king_from = Square.from_algebraic(k_from)
        king_to = Square.from_algebraic(k_to)
        rook_from = Square.from_algebraic(r_from)
        rook_to = Square.from_algebraic(r_to)
        return cls(color, king_from, king_to, rook_from, rook_to)

    def king_path(self) -> list[Square]:
        """The squares the king stands on, passes through and lands on. None of them may be attacked."""
        return [self.king_from, *squares_between(self.king_from, self.king_to), self.king_to]


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[CastlingDirection, CastlingSquares] = {
    CastlingDirection.WHITE_KING_SIDE: CastlingSquares.from_algebraic(
        Color.WHITE, "e1", "g1", "h1", "f1"
    ),
    CastlingDirection.WHITE_QUEEN_SIDE: CastlingSquares.from_algebraic(
        Color.WHITE, "e1", "c1", "a1", "d1"
    ),
    CastlingDirection.BLACK_KING_SIDE: CastlingSquares.from_algebraic(
        Color.BLACK, "e8", "g8", "h8", "f8"
    ),
    CastlingDirection.BLACK_QUEEN_SIDE: CastlingSquares.from_algebraic(
        Color.BLACK, "e8", "c8", "a8", "d8"
    ),
}


def castling_direction(
    board: Board, origin: Square, destination: Square
) -> Optional[CastlingDirection]:
    """Which castling (if any) the king standing on `origin` attempts by moving to `destination`."""
    piece = board.piece_at(origin)
    if piece is None or piece.type != PieceType.KING:
        return None
    for direction, rule in CASTLING_RULES.items():
        if (
            rule.color == piece.color
            and rule.king_from == origin
            and rule.king_to == destination
        ):
            return direction
    return None


def can_castle(board: Board, direction: CastlingDirection) -> bool:
    """
    **you are allowed to castle if**

    * Neither the king nor the rook have moved before.
    * All squares in between the two pieces are empty.
    * You are not currently in check (you cannot castle out of check).
    * The king does not pass through or land on a square that is under attack.
    """
    rule = CASTLING_RULES[direction]
    if board.piece_at(rule.king_from) != Piece(PieceType.KING, rule.color):
        return False
    if board.piece_at(rule.rook_from) != Piece(PieceType.ROOK, rule.color):
        return False

    if board.is_any_occupied(squares_between(rule.king_from, rule.rook_from)):
        return False

    # king_path starts with the king's current square: covers "not in check" as well
    opponent = opposing(rule.color)
    return not any(is_attacked(board, square, opponent) for square in rule.king_path())


def move_castling_pieces(board: Board, direction: CastlingDirection) -> None:
    """Move both the King and the Rook"""
    rule = CASTLING_RULES[direction]
    board.move_piece(rule.king_from, rule.king_to)
    board.move_piece(rule.rook_from, rule.rook_to)
