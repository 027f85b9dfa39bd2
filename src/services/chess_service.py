"""Orchestration of communication from the boundary models to the chess domain (and the reverse direction)."""

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID, uuid4

from src.api.models import (
    CreateGameRequest,
    DeleteGameRequest,
    GameResponse,
    GetGameRequest,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRecordResponse,
    MoveRequest,
    PieceResponse,
    ResignRequest,
)
from src.chess.engine import MoveRecord
from src.chess.game import Game
from src.chess.pieces import Color as DomainColor
from src.chess.pieces import PieceType as DomainPieceType
from src.chess.player import Player
from src.chess.square import Square
from src.core.config import Settings
from src.core.exceptions import GameNotFoundError, NotAParticipantError
from src.core.shared_types import Color, PieceType, Status

_LOGGER = logging.getLogger(__name__)


@dataclass
class GameSlot:
    """A game plus the lock serializing every call that touches it."""

    game: Game
    lock: threading.Lock = field(default_factory=threading.Lock)


class ChessService:
    """Orchestration of layers for chess game. Games only live in memory."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings()
        self._games: dict[UUID, GameSlot] = {}
        self._registry_lock = threading.Lock()

    # -- Request handling ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        white = Player(request.white_player, DomainColor.WHITE)
        black = Player(request.black_player, DomainColor.BLACK)
        game = Game.new_game(white, black)

        game_id = uuid4()
        with self._registry_lock:
            self._games[game_id] = GameSlot(game)
        _LOGGER.info("Created game %s", game_id)
        return self._create_game_response(game_id, game)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used in "polling" loop by frontend to check when it is the player's turn for instance.
        """
        slot = self._fetch_game(request.game_id)
        with slot.lock:
            return self._create_game_response(request.game_id, slot.game)

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make a move attempt. MoveErrors propagate to the caller, who can re-prompt the same player."""
        slot = self._fetch_game(request.game_id)
        promote_to = request.promote_to or self.settings.default_promotion
        with slot.lock:
            player = self._find_player(slot.game, request.player_name)
            slot.game.submit_move(
                player,
                Square.from_algebraic(request.from_square),
                Square.from_algebraic(request.to_square),
                DomainPieceType[promote_to.name],
            )
            return self._create_game_response(request.game_id, slot.game)

    def resign(self, request: ResignRequest) -> GameResponse:
        slot = self._fetch_game(request.game_id)
        with slot.lock:
            player = self._find_player(slot.game, request.player_name)
            slot.game.resign(player)
            return self._create_game_response(request.game_id, slot.game)

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """retrieve set of legal moves."""
        slot = self._fetch_game(request.game_id)
        with slot.lock:
            player = self._find_player(slot.game, request.player_name)
            moves = slot.game.legal_moves(player)
        return LegalMovesResponse(
            game_id=request.game_id,
            player_name=request.player_name,
            color=Color[player.color.name],
            legal_moves=[
                (origin.to_algebraic(), destination.to_algebraic())
                for origin, destination in moves
            ],
        )

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to forget about a Game."""
        with self._registry_lock:
            if self._games.pop(request.game_id, None) is None:
                raise GameNotFoundError(f"Game with game_id={request.game_id} not found.")
        _LOGGER.info("Deleted game %s", request.game_id)

    # -- Internal helpers --
    def _fetch_game(self, game_id: UUID) -> GameSlot:
        """Attempt to find the game and raise error if it fails."""
        with self._registry_lock:
            slot = self._games.get(game_id)
        if slot is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return slot

    def _find_player(self, game: Game, player_name: str) -> Player:
        player = next((p for p in game.players if p.name == player_name), None)
        if player is None:
            raise NotAParticipantError(f"{player_name} is not playing in this game.")
        return player

    def _create_game_response(self, game_id: UUID, game: Game) -> GameResponse:
        """Convert the Game into a GameResponse (for game with given ID.)"""
        winner = game.winner
        return GameResponse(
            game_id=game_id,
            players={Color[player.color.name]: player.name for player in game.players},
            status=Status[game.status.status.name],
            status_color=(
                Color[game.status.color.name] if game.status.color else None
            ),
            current_turn=game.current_turn.name,
            winner=winner.name if winner else None,
            board={
                square.to_algebraic(): PieceResponse(
                    type=PieceType[piece.type.name], color=Color[piece.color.name]
                )
                for square, piece in game.board.position.items()
            },
            move_history=[self._create_move_response(record) for record in game.moves],
        )

    def _create_move_response(self, record: MoveRecord) -> MoveRecordResponse:
        return MoveRecordResponse(
            player_name=record.player.name,
            from_square=record.origin.to_algebraic(),
            to_square=record.destination.to_algebraic(),
            piece=PieceType[record.piece_moved.type.name],
            captured=(
                PieceType[record.piece_captured.type.name]
                if record.piece_captured
                else None
            ),
            is_castle=record.is_castle,
            promotion=PieceType[record.promotion.name] if record.promotion else None,
        )
