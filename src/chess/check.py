"""
Check detection: reuses the attack rules "in reverse".

Hypothetical moves are always played on a copy of the board, never on the live one.
"""

from src.chess.board import Board
from src.chess.moves import ATTACK_RULES, MOVEMENT_RULES
from src.chess.pieces import Color, opposing
from src.chess.square import Square, all_squares


def is_attacked(board: Board, square: Square, by_color: Color) -> bool:
    """Is any piece of `by_color` able to capture on `square`? (pawns attack along their capture diagonal)"""
    for origin in board.locate_color(by_color):
        if origin == square:
            continue
        piece = board.position[origin]
        if ATTACK_RULES[piece.type](board, origin, square):
            return True
    return False


def in_check(board: Board, color: Color) -> bool:
    return is_attacked(board, board.find_king(color), opposing(color))


def leaves_king_in_check(board: Board, origin: Square, destination: Square) -> bool:
    """
    Return True if the move leaves the mover's own king attacked

    plan:
    1. Copy the board
    2. make the move
    3. determine if king is in check on the new board
    """
    color = board.position[origin].color
    scratch = board.copy()
    scratch.move_piece(origin, destination)
    return in_check(scratch, color)


def has_legal_move(board: Board, color: Color) -> bool:
    """
    Is there at least one piece of `color` that can go somewhere without leaving its own king in check?

    Castling is not enumerated: whenever castling is legal, the king's single step to the transit square is legal too.
    """
    for origin in board.locate_color(color):
        can_reach = MOVEMENT_RULES[board.position[origin].type]
        for destination in all_squares():
            if can_reach(board, origin, destination) and not leaves_king_in_check(
                board, origin, destination
            ):
                return True
    return False
