"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.game import Game
from src.chess.pieces import Color, Piece, PieceType
from src.chess.player import Player
from src.chess.square import Square

# Shorthand used to set up positions in tests. Upper case: White pieces, lower case: Black pieces.
PIECE_CODES: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

BoardBuilder = Callable[[dict[str, str]], Board]


@pytest.fixture
def build_board() -> BoardBuilder:
    """Call the inner function with a mapping like {"e1": "K", "e8": "k"} to get a board with just those (unmoved) pieces."""

    def _create_board(pieces: dict[str, str]) -> Board:
        board = Board.empty()
        for square_name, code in pieces.items():
            color = Color.WHITE if code.isupper() else Color.BLACK
            board.place(
                Square.from_algebraic(square_name),
                Piece(PIECE_CODES[code.lower()], color),
            )
        return board

    return _create_board


@pytest.fixture
def white_player() -> Player:
    return Player("Mocker M. Mockerson", Color.WHITE)


@pytest.fixture
def black_player() -> Player:
    return Player("Mock McMock", Color.BLACK)


@pytest.fixture
def game(white_player: Player, black_player: Player) -> Game:
    """Fresh game in the standard starting position"""
    return Game.new_game(white_player, black_player)


@pytest.fixture
def game_from_board(
    white_player: Player, black_player: Player
) -> Callable[..., Game]:
    """Call the inner function with a custom board (and optionally the color to move)."""

    def _create_game(board: Board, to_move: Color = Color.WHITE) -> Game:
        return Game(
            board=board,
            players=(white_player, black_player),
            current_turn=white_player if to_move == Color.WHITE else black_player,
        )

    return _create_game
