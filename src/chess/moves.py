"""
Geometry/Base movement and capturing/attacking rules

Key idea: Use strategy pattern to define, for each piece type, whether a piece can reach a square.

Turn order, check safety and castling are NOT considered here: the engine takes care of those.
"""

from typing import Callable, Optional, Protocol

from src.chess.pieces import HOME_RANKS, Color, Piece, PieceType, opposing
from src.chess.square import Square


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece_at(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...


Vector = tuple[int, int]

# White moves UP the board (increasing rank), Black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}


# --- GEOMETRY HELPERS ---
def delta(origin: Square, destination: Square) -> Vector:
    return destination.rank - origin.rank, destination.file - origin.file


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def is_diagonal(d_rank: int, d_file: int) -> bool:
    return abs(d_rank) == abs(d_file) > 0


def is_straight(d_rank: int, d_file: int) -> bool:
    """Exactly one of the two coordinates changes"""
    return (d_rank == 0) != (d_file == 0)


def is_knight_jump(d_rank: int, d_file: int) -> bool:
    """The L-shape: |delta_rank| * |delta_file| = 2"""
    return abs(d_rank) * abs(d_file) == 2


def is_king_step(d_rank: int, d_file: int) -> bool:
    return max(abs(d_rank), abs(d_file)) == 1


def squares_between(origin: Square, destination: Square) -> list[Square]:
    """
    The squares strictly in between two squares on the same rank, file or diagonal.

    Needed for obstruction of sliding pieces and for castling (the Board will check which of those are empty).
    """
    d_rank, d_file = delta(origin, destination)
    if not (is_straight(d_rank, d_file) or is_diagonal(d_rank, d_file)):
        raise ValueError(
            f"squares_between requires both squares to share a line.\n from: {origin}\n to: {destination}"
        )
    step_rank, step_file = _sign(d_rank), _sign(d_file)
    squares: list[Square] = []
    square = origin.offset(step_rank, step_file)
    while square != destination:
        squares.append(square)
        square = square.offset(step_rank, step_file)
    return squares


def is_path_clear(board: Board, origin: Square, destination: Square) -> bool:
    return all(board.is_empty(square) for square in squares_between(origin, destination))


def can_occupy(board: Board, origin: Square, destination: Square) -> bool:
    """Shared precondition of every piece: you cannot land on your own piece."""
    mover = board.piece_at(origin)
    target = board.piece_at(destination)
    return mover is not None and (target is None or target.color != mover.color)


# --- CAPTURING RULES / ATTACKING RULES ---
# "Could the piece on `origin` capture something standing on `target`?"
# The occupant of the target square is ignored: the check detector asks this about empty squares too.
def pawn_attacks(board: Board, origin: Square, target: Square) -> bool:
    """Pawns take diagonally, one step forward"""
    pawn = board.piece_at(origin)
    if pawn is None:
        return False
    d_rank, d_file = delta(origin, target)
    return d_rank == PAWN_DIRECTION[pawn.color] and abs(d_file) == 1


def knight_attacks(board: Board, origin: Square, target: Square) -> bool:
    """Knights jump, so nothing can obstruct them"""
    return is_knight_jump(*delta(origin, target))


def bishop_attacks(board: Board, origin: Square, target: Square) -> bool:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return is_diagonal(*delta(origin, target)) and is_path_clear(board, origin, target)


def rook_attacks(board: Board, origin: Square, target: Square) -> bool:
    """Rooks move either horizontally or vertically"""
    return is_straight(*delta(origin, target)) and is_path_clear(board, origin, target)


def queen_attacks(board: Board, origin: Square, target: Square) -> bool:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return rook_attacks(board, origin, target) or bishop_attacks(board, origin, target)


def king_attacks(board: Board, origin: Square, target: Square) -> bool:
    """The king attacks the 8 squares surrounding it. Castling never captures, so it is no attack."""
    return is_king_step(*delta(origin, target))


# --- STRATEGY PATTERN: ATTACKING RULES ---
AttackFn = Callable[[Board, Square, Square], bool]
ATTACK_RULES: dict[PieceType, AttackFn] = {
    PieceType.PAWN: pawn_attacks,
    PieceType.KNIGHT: knight_attacks,
    PieceType.BISHOP: bishop_attacks,
    PieceType.ROOK: rook_attacks,
    PieceType.QUEEN: queen_attacks,
    PieceType.KING: king_attacks,
}


# --- MOVEMENT RULES ---
def pawn_can_reach(board: Board, origin: Square, destination: Square) -> bool:
    """
    A pawn:
    - moves by a single square forward, onto an empty square
    - It can move by two in their first move (so when on their starting rank), if both squares are empty
    - takes diagonally

    NOTE: No en passant.
    """
    pawn = board.piece_at(origin)
    if pawn is None or not can_occupy(board, origin, destination):
        return False

    direction = PAWN_DIRECTION[pawn.color]
    d_rank, d_file = delta(origin, destination)
    if d_file == 0:
        if not board.is_empty(destination):
            return False
        if d_rank == direction:
            return True
        _, pawn_rank = HOME_RANKS[pawn.color]
        is_double_step = d_rank == 2 * direction
        on_home_rank = origin.rank == pawn_rank and not pawn.has_moved
        return (
            is_double_step
            and on_home_rank
            and board.is_empty(origin.offset(direction, 0))
        )

    # diagonal step only counts as a move when something gets captured
    return pawn_attacks(board, origin, destination) and not board.is_empty(destination)


def knight_can_reach(board: Board, origin: Square, destination: Square) -> bool:
    return can_occupy(board, origin, destination) and knight_attacks(
        board, origin, destination
    )


def bishop_can_reach(board: Board, origin: Square, destination: Square) -> bool:
    return can_occupy(board, origin, destination) and bishop_attacks(
        board, origin, destination
    )


def rook_can_reach(board: Board, origin: Square, destination: Square) -> bool:
    return can_occupy(board, origin, destination) and rook_attacks(
        board, origin, destination
    )


def queen_can_reach(board: Board, origin: Square, destination: Square) -> bool:
    return can_occupy(board, origin, destination) and queen_attacks(
        board, origin, destination
    )


def king_can_reach(board: Board, origin: Square, destination: Square) -> bool:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (see castling.py).
    """
    return can_occupy(board, origin, destination) and king_attacks(
        board, origin, destination
    )


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CanReachFn = Callable[[Board, Square, Square], bool]
MOVEMENT_RULES: dict[PieceType, CanReachFn] = {
    PieceType.PAWN: pawn_can_reach,
    PieceType.KNIGHT: knight_can_reach,
    PieceType.BISHOP: bishop_can_reach,
    PieceType.ROOK: rook_can_reach,
    PieceType.QUEEN: queen_can_reach,
    PieceType.KING: king_can_reach,
}


# -- PAWN PROMOTION --
def is_promotion_square(piece: Piece, destination: Square) -> bool:
    """A pawn reaching the opponent's back rank"""
    if piece.type != PieceType.PAWN:
        return False
    opponent_back_rank, _ = HOME_RANKS[opposing(piece.color)]
    return destination.rank == opponent_back_rank
