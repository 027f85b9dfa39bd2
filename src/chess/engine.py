"""
The move engine: validates a proposed move and only then commits it to the game.

Validation short-circuits on the first failure. Every check runs against the live board without touching it,
or against a disposable copy, so a rejected move always leaves the game exactly as it was.
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from src.chess.board import Board
from src.chess.castling import (
    CastlingDirection,
    can_castle,
    castling_direction,
    move_castling_pieces,
)
from src.chess.check import has_legal_move, in_check
from src.chess.moves import MOVEMENT_RULES, is_promotion_square
from src.chess.pieces import PROMOTION_OPTIONS, Color, Piece, PieceType, opposing
from src.chess.player import Player
from src.chess.square import Square, all_squares
from src.chess.status import GameStatus
from src.core.exceptions import (
    EmptyOriginError,
    GameOverError,
    IllegalGeometryError,
    InvariantViolationError,
    MoveError,
    NotYourTurnError,
    SelfCheckError,
    WrongPieceOwnerError,
)

if TYPE_CHECKING:
    from src.chess.game import Game

_LOGGER = logging.getLogger(__name__)

DEFAULT_PROMOTION = PieceType.QUEEN


@dataclass(frozen=True)
class MoveRecord:
    """Log entry of an applied move. The game's list of these is the authoritative history."""

    player: Player
    origin: Square
    destination: Square
    piece_moved: Piece
    piece_captured: Optional[Piece] = None
    is_castle: bool = False
    promotion: Optional[PieceType] = None


@dataclass(frozen=True)
class PlannedMove:
    """A move that passed the geometric checks, with everything needed to play it on a board."""

    origin: Square
    destination: Square
    castling: Optional[CastlingDirection] = None
    promotion: Optional[PieceType] = None


def can_reach(board: Board, origin: Square, destination: Square) -> bool:
    """Geometry + obstruction for the piece on `origin`, castling included. Ignores turn order and self-check."""
    piece = board.piece_at(origin)
    if piece is None:
        return False
    if MOVEMENT_RULES[piece.type](board, origin, destination):
        return True
    direction = castling_direction(board, origin, destination)
    return direction is not None and can_castle(board, direction)


def plan_move(
    board: Board,
    origin: Square,
    destination: Square,
    promote_to: Optional[PieceType] = None,
) -> PlannedMove:
    """Work out what kind of move this is. Assumes `can_reach` already holds."""
    piece = board.piece_at(origin)
    assert piece is not None

    if not MOVEMENT_RULES[piece.type](board, origin, destination):
        return PlannedMove(
            origin, destination, castling=castling_direction(board, origin, destination)
        )

    if is_promotion_square(piece, destination):
        promotion = promote_to or DEFAULT_PROMOTION
        if promotion not in PROMOTION_OPTIONS:
            raise IllegalGeometryError(
                f"A pawn cannot promote to a {promotion.name.lower()}."
            )
        return PlannedMove(origin, destination, promotion=promotion)

    return PlannedMove(origin, destination)


def play_on(board: Board, move: PlannedMove) -> Optional[Piece]:
    """Mutate `board` with the move. Returns the captured piece, if any."""
    if move.castling:
        move_castling_pieces(board, move.castling)
        return None

    captured = board.move_piece(move.origin, move.destination)
    if move.promotion:
        pawn = board.piece_at(move.destination)
        assert pawn is not None
        board.place(move.destination, pawn.promoted_to(move.promotion))
    return captured


def leaves_own_king_in_check(board: Board, move: PlannedMove, color: Color) -> bool:
    """Play the move on a scratch copy of the board and look at the mover's king."""
    scratch = board.copy()
    play_on(scratch, move)
    return in_check(scratch, color)


def legal_moves(board: Board, color: Color) -> list[tuple[Square, Square]]:
    """Every (origin, destination) pair `color` could legally play, castling included."""
    moves: list[tuple[Square, Square]] = []
    for origin in board.locate_color(color):
        for destination in all_squares():
            if not can_reach(board, origin, destination):
                continue
            move = plan_move(board, origin, destination)
            if not leaves_own_king_in_check(board, move, color):
                moves.append((origin, destination))
    return moves


def derive_status(board: Board, mover: Color) -> GameStatus:
    """Status of the game from the point of view of the mover's opponent, right after a move."""
    opponent = opposing(mover)
    if not in_check(board, opponent):
        return GameStatus.active()
    if not has_legal_move(board, opponent):
        return GameStatus.checkmate(mover)
    return GameStatus.check(opponent)


def validate_move(
    game: "Game",
    mover: Player,
    origin: Square,
    destination: Square,
    promote_to: Optional[PieceType] = None,
) -> PlannedMove:
    """Steps 1-6: raise the first MoveError that applies. Never mutates the game."""
    if game.status.is_terminal:
        raise GameOverError(f"Game is over. status: {game.status.status.name.lower()}")

    if mover != game.current_turn:
        raise NotYourTurnError(
            f"It is not your turn. Waiting for player {game.current_turn.name} to make a move first."
        )

    origin.assert_within_bounds()
    destination.assert_within_bounds()

    board = game.board
    piece = board.piece_at(origin)
    if piece is None:
        raise EmptyOriginError(f"There is no piece on {origin.to_algebraic()}.")

    if piece.color != mover.color:
        raise WrongPieceOwnerError(
            f"The piece on {origin.to_algebraic()} belongs to your opponent."
        )

    if not can_reach(board, origin, destination):
        raise IllegalGeometryError(
            f"{piece.type.name.capitalize()} cannot move from {origin.to_algebraic()} to {destination.to_algebraic()}."
        )

    target = board.piece_at(destination)
    if target is not None and target.type == PieceType.KING:
        # self-check prevention on the previous turn should make this unreachable
        _LOGGER.error("King on %s is about to be captured", destination.to_algebraic())
        raise InvariantViolationError("Attempt to capture a king.")

    move = plan_move(board, origin, destination, promote_to)
    if leaves_own_king_in_check(board, move, mover.color):
        raise SelfCheckError("This move would leave your king in check.")
    return move


def apply_move(game: "Game", mover: Player, move: PlannedMove) -> MoveRecord:
    """Step 7: commit the move to the board and history."""
    piece_moved = game.board.piece_at(move.origin)
    assert piece_moved is not None

    captured = play_on(game.board, move)
    if captured is not None:
        game.captured.append(captured)

    record = MoveRecord(
        player=mover,
        origin=move.origin,
        destination=move.destination,
        piece_moved=piece_moved,
        piece_captured=captured,
        is_castle=move.castling is not None,
        promotion=move.promotion,
    )
    game.moves.append(record)
    return record


def validate_and_apply(
    game: "Game",
    mover: Player,
    origin: Square,
    destination: Square,
    promote_to: Optional[PieceType] = None,
) -> MoveRecord:
    """
    Attempt to make a move
    -----

    1. game must not be over
    2. it must be your turn
    3. there must be a piece on the origin square ...
    4. ... and it must be yours
    5. the piece must be able to reach the destination
    6. the move must not leave your own king in check
    7. update the board and the history
    8. update game status (check / checkmate for the opponent)
    9. hand the turn to the opponent
    """
    try:
        move = validate_move(game, mover, origin, destination, promote_to)
    except MoveError as error:
        _LOGGER.debug(
            "Rejected move (%s, %s) -> (%s, %s) by %s: %s",
            origin.rank,
            origin.file,
            destination.rank,
            destination.file,
            mover.name,
            error.code,
        )
        raise

    record = apply_move(game, mover, move)
    game.change_status(derive_status(game.board, mover.color))
    game.current_turn = game.opponent_of(mover)
    _LOGGER.info(
        "%s played %s%s",
        mover.name,
        origin.to_algebraic(),
        destination.to_algebraic(),
    )
    return record
