"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns the board, the move history and whose turn it is; the move engine does the actual rule checking.

The module-level functions at the bottom are the public contract of the chess core.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional, Self

from src.chess.board import Board
from src.chess.engine import MoveRecord, legal_moves, validate_and_apply
from src.chess.pieces import Color, Piece, PieceType, opposing
from src.chess.player import Player
from src.chess.square import Square
from src.chess.status import GameStatus
from src.core.exceptions import (
    GameOverError,
    GameStateError,
    NotAParticipantError,
    NotYourTurnError,
)

_LOGGER = logging.getLogger(__name__)


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board
    players: tuple[Player, Player]  # (white, black)
    current_turn: Player
    status: GameStatus = field(default_factory=GameStatus.active)
    moves: list[MoveRecord] = field(default_factory=list)
    captured: list[Piece] = field(default_factory=list)

    @classmethod
    def new_game(cls, player_white: Player, player_black: Player) -> Self:
        """Standard starting position, White to move."""
        if player_white.color != Color.WHITE or player_black.color != Color.BLACK:
            raise GameStateError(
                f"Cannot create new game. Expected a white and a black player, got {player_white.color.name.lower()} and {player_black.color.name.lower()}."
            )
        if player_white.name == player_black.name:
            raise GameStateError(
                f"Cannot create new game. {player_white.name} cannot play against themselves."
            )
        _LOGGER.info("New game: %s (white) vs %s (black)", player_white.name, player_black.name)
        return cls(
            board=Board.starting_position(),
            players=(player_white, player_black),
            current_turn=player_white,
        )

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        """Read-only view of the moves played so far"""
        return tuple(self.moves)

    @property
    def winner(self) -> Optional[Player]:
        """Only decided by checkmate or resignation"""
        winning_color = self.status.winner
        if winning_color is None:
            return None
        return self.player_for(winning_color)

    def player_for(self, color: Color) -> Player:
        return next(player for player in self.players if player.color == color)

    def opponent_of(self, player: Player) -> Player:
        return self.player_for(opposing(player.color))

    def submit_move(
        self,
        player: Player,
        origin: Square,
        destination: Square,
        promote_to: Optional[PieceType] = None,
    ) -> MoveRecord:
        return validate_and_apply(self, player, origin, destination, promote_to)

    def resign(self, player: Player) -> None:
        """Accepted any time the game is still going. Bypasses move validation entirely."""
        if self.status.is_terminal:
            raise GameOverError(
                f"Game is over. status: {self.status.status.name.lower()}"
            )
        self._assert_participant(player)
        self.change_status(GameStatus.resigned(opposing(player.color)))

    def legal_moves(self, player: Player) -> list[tuple[Square, Square]]:
        """
        Service may request the set of legal moves.
        ----
        These can be used to display to the user.
        """
        if self.status.is_terminal:
            raise GameOverError(
                f"Game is over. status: {self.status.status.name.lower()}"
            )
        if player != self.current_turn:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for player {self.current_turn.name} to make a move first."
            )
        return legal_moves(self.board, player.color)

    def change_status(self, new_status: GameStatus) -> None:
        if new_status != self.status:
            _LOGGER.info(
                "Game status: %s -> %s",
                self.status.status.name.lower(),
                new_status.status.name.lower(),
            )
        self.status = new_status

    # -- PRIVATE HELPERS ---
    def _assert_participant(self, player: Player) -> None:
        if player not in self.players:
            raise NotAParticipantError(f"{player.name} is not playing in this game.")


# --- PUBLIC CONTRACT ---
def new_game(player_white: Player, player_black: Player) -> Game:
    return Game.new_game(player_white, player_black)


def submit_move(
    game: Game,
    player: Player,
    origin_rank: int,
    origin_file: int,
    dest_rank: int,
    dest_file: int,
    promote_to: Optional[PieceType] = None,
) -> MoveRecord:
    """Raises a MoveError subclass when the move is rejected. The game is left untouched in that case."""
    return game.submit_move(
        player,
        Square(origin_rank, origin_file),
        Square(dest_rank, dest_file),
        promote_to,
    )


def resign(game: Game, player: Player) -> None:
    game.resign(player)


def status(game: Game) -> GameStatus:
    return game.status


def history(game: Game) -> tuple[MoveRecord, ...]:
    return game.history


def replay(
    player_white: Player, player_black: Player, records: Iterable[MoveRecord]
) -> Game:
    """Rebuild a game from the initial position by submitting every recorded move again."""
    game = new_game(player_white, player_black)
    for record in records:
        game.submit_move(
            record.player, record.origin, record.destination, record.promotion
        )
    return game
