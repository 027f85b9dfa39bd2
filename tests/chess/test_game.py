"""Unit tests for /src/chess/game.py"""

from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.check import has_legal_move
from src.chess.game import (
    Game,
    history,
    new_game,
    replay,
    resign,
    status,
    submit_move,
)
from src.chess.pieces import Color, Piece, PieceType
from src.chess.player import Player
from src.chess.square import Square
from src.chess.status import GameStatus, Status
from src.core.exceptions import (
    GameOverError,
    GameStateError,
    IllegalGeometryError,
    NotAParticipantError,
    NotYourTurnError,
)

# (origin rank, origin file, destination rank, destination file)
FOOLS_MATE = [
    (1, 5, 2, 5),  # f2-f3
    (6, 4, 4, 4),  # e7-e5
    (1, 6, 3, 6),  # g2-g4
    (7, 3, 3, 7),  # Qd8-h4#
]

# Italian-ish opening: includes white castling king side and a capture by black
OPENING_WITH_CASTLE = [
    ("e2", "e4"),
    ("e7", "e5"),
    ("g1", "f3"),
    ("b8", "c6"),
    ("f1", "c4"),
    ("g8", "f6"),
    ("e1", "g1"),
    ("f6", "e4"),
]


def play(game: Game, moves: list[tuple[str, str]]) -> None:
    for origin, destination in moves:
        game.submit_move(
            game.current_turn,
            Square.from_algebraic(origin),
            Square.from_algebraic(destination),
        )


# -- CREATION LOGIC --
def test_creating_new_game(white_player: Player, black_player: Player) -> None:
    """Creating a new game with canonical starting position, White to move"""
    game = new_game(white_player, black_player)

    assert game.board == Board.starting_position()
    assert game.players == (white_player, black_player)
    assert game.current_turn == white_player
    assert game.status == GameStatus.active()
    assert history(game) == ()
    assert game.captured == []


def test_creating_new_game_swapped_colors(
    white_player: Player, black_player: Player
) -> None:
    with pytest.raises(GameStateError):
        _ = new_game(black_player, white_player)


def test_creating_new_game_same_color(white_player: Player) -> None:
    other = Player("Other", Color.WHITE)
    with pytest.raises(GameStateError):
        _ = new_game(white_player, other)


def test_cannot_play_against_yourself() -> None:
    with pytest.raises(GameStateError):
        _ = new_game(Player("Solo", Color.WHITE), Player("Solo", Color.BLACK))


def test_player_lookup(game: Game, white_player: Player, black_player: Player) -> None:
    assert game.player_for(Color.BLACK) == black_player
    assert game.opponent_of(white_player) == black_player
    assert game.opponent_of(black_player) == white_player


# -- PLAYING --
def test_turns_alternate(game: Game, white_player: Player, black_player: Player) -> None:
    """After any successful move it is the other player's turn"""
    submit_move(game, white_player, 1, 4, 3, 4)
    assert game.current_turn == black_player
    submit_move(game, black_player, 6, 4, 4, 4)
    assert game.current_turn == white_player


def test_submit_move_out_of_turn(game: Game, black_player: Player) -> None:
    with pytest.raises(NotYourTurnError):
        submit_move(game, black_player, 6, 4, 4, 4)
    assert history(game) == ()


def test_fools_mate(game: Game, white_player: Player, black_player: Player) -> None:
    """f3, e5, g4, Qh4#: Black wins by checkmate"""
    for move in FOOLS_MATE[:-1]:
        submit_move(game, game.current_turn, *move)
        assert status(game) == GameStatus.active()

    record = submit_move(game, black_player, *FOOLS_MATE[-1])

    assert record.piece_moved == Piece(PieceType.QUEEN, Color.BLACK)
    assert status(game) == GameStatus.checkmate(Color.BLACK)
    assert status(game).is_terminal
    assert game.winner == black_player
    assert not has_legal_move(game.board, Color.WHITE)
    assert len(history(game)) == 4


def test_no_moves_after_checkmate(game: Game, white_player: Player) -> None:
    for move in FOOLS_MATE:
        submit_move(game, game.current_turn, *move)

    with pytest.raises(GameOverError):
        submit_move(game, white_player, 1, 0, 2, 0)
    with pytest.raises(GameOverError):
        _ = game.legal_moves(white_player)
    assert len(history(game)) == 4


def test_history_is_read_only_view(game: Game, white_player: Player) -> None:
    submit_move(game, white_player, 1, 4, 3, 4)
    view = history(game)
    assert isinstance(view, tuple)
    assert view == tuple(game.moves)


def test_captured_pieces_are_kept(game: Game) -> None:
    play(game, OPENING_WITH_CASTLE)
    assert game.captured == [Piece(PieceType.PAWN, Color.WHITE, has_moved=True)]
    assert game.board.count_material() == {Color.WHITE: 38, Color.BLACK: 39}


def test_castling_in_a_real_game(game: Game) -> None:
    play(game, OPENING_WITH_CASTLE[:7])
    castle = history(game)[-1]
    assert castle.is_castle
    assert game.board.piece_at(Square.from_algebraic("g1")).type == PieceType.KING
    assert game.board.piece_at(Square.from_algebraic("f1")).type == PieceType.ROOK


def test_invalid_move_does_not_change_game(game: Game, white_player: Player) -> None:
    with pytest.raises(IllegalGeometryError):
        submit_move(game, white_player, 0, 0, 3, 0)
    with pytest.raises(IllegalGeometryError):
        submit_move(game, white_player, 0, 0, 3, 0)
    assert game.board == Board.starting_position()
    assert game.current_turn == white_player


# -- RESIGNING --
def test_resign(game: Game, white_player: Player, black_player: Player) -> None:
    resign(game, white_player)
    assert status(game) == GameStatus.resigned(Color.BLACK)
    assert game.winner == black_player


def test_resign_when_not_your_turn(game: Game, black_player: Player, white_player: Player) -> None:
    """Resignation bypasses move validation: allowed any time the game is going"""
    resign(game, black_player)
    assert status(game) == GameStatus.resigned(Color.WHITE)
    assert game.winner == white_player


def test_resign_during_check(game: Game, black_player: Player) -> None:
    game.status = GameStatus.check(Color.BLACK)
    resign(game, black_player)
    assert status(game).status == Status.RESIGNED


def test_resign_twice(game: Game, white_player: Player, black_player: Player) -> None:
    resign(game, white_player)
    with pytest.raises(GameOverError):
        resign(game, black_player)


def test_no_moves_after_resignation(game: Game, white_player: Player) -> None:
    resign(game, white_player)
    with pytest.raises(GameOverError):
        submit_move(game, white_player, 1, 4, 3, 4)


def test_resign_as_stranger(game: Game) -> None:
    with pytest.raises(NotAParticipantError):
        resign(game, Player("Kibitzer", Color.BLACK))
    assert status(game) == GameStatus.active()


def test_no_winner_while_playing(game: Game) -> None:
    assert game.winner is None


# -- LEGAL MOVES --
def test_legal_moves(game: Game, white_player: Player, black_player: Player) -> None:
    assert len(game.legal_moves(white_player)) == 20
    with pytest.raises(NotYourTurnError):
        _ = game.legal_moves(black_player)


# -- REPLAY --
@pytest.mark.parametrize("moves", [OPENING_WITH_CASTLE, OPENING_WITH_CASTLE[:3], []])
def test_replay_reconstructs_board(
    moves: list[tuple[str, str]],
    game: Game,
    white_player: Player,
    black_player: Player,
) -> None:
    """Replaying the history move-by-move from the initial position gives the exact same game"""
    play(game, moves)
    rebuilt = replay(white_player, black_player, history(game))

    assert rebuilt.board == game.board
    assert history(rebuilt) == history(game)
    assert rebuilt.current_turn == game.current_turn
    assert rebuilt.status == game.status


def test_replay_checkmate(game: Game, white_player: Player, black_player: Player) -> None:
    for move in FOOLS_MATE:
        submit_move(game, game.current_turn, *move)
    rebuilt = replay(white_player, black_player, history(game))
    assert status(rebuilt) == GameStatus.checkmate(Color.BLACK)


def test_promotion_choice_is_recorded(
    build_board,
    game_from_board: Callable[..., Game],
    white_player: Player,
) -> None:
    """Promotions are part of the record, so a replay promotes to the same piece"""
    board = build_board({"e1": "K", "h6": "k", "a7": "P"})
    game = game_from_board(board)
    record = game.submit_move(
        white_player,
        Square.from_algebraic("a7"),
        Square.from_algebraic("a8"),
        PieceType.ROOK,
    )
    assert record.promotion == PieceType.ROOK
    assert game.board.piece_at(Square.from_algebraic("a8")).type == PieceType.ROOK
