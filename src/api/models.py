"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator, model_validator

from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, PieceType, Status

PieceColor = Color
PlayerName = str
SquareName = str


def _is_algebraic_notation(value: str) -> bool:
    if len(value) != 2:
        return False
    return value[0] in "abcdefgh" and value[1] in "12345678"


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    white_player: PlayerName
    black_player: PlayerName

    @model_validator(mode="after")
    def validate_distinct_players(self) -> "CreateGameRequest":
        if self.white_player == self.black_player:
            raise InvalidRequestError(
                f"{self.white_player!r} cannot play with both colors."
            )
        return self


class MoveRequest(BaseModel):
    game_id: UUID
    player_name: PlayerName
    from_square: SquareName
    to_square: SquareName
    promote_to: Optional[PieceType] = None

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(
                f"Cannot interpret {value!r} as a valid square name."
            )
        return value

    @field_validator("promote_to")
    @classmethod
    def validate_promotion(cls, value: Optional[PieceType]) -> Optional[PieceType]:
        if value in (PieceType.PAWN, PieceType.KING):
            raise InvalidRequestError(f"A pawn cannot promote to a {value}.")
        return value


class ResignRequest(BaseModel):
    game_id: UUID
    player_name: PlayerName


class LegalMovesRequest(BaseModel):
    game_id: UUID
    player_name: PlayerName


class GetGameRequest(BaseModel):
    game_id: UUID


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class PieceResponse(BaseModel):
    type: PieceType
    color: PieceColor


class MoveRecordResponse(BaseModel):
    player_name: PlayerName
    from_square: SquareName
    to_square: SquareName
    piece: PieceType
    captured: Optional[PieceType] = None
    is_castle: bool = False
    promotion: Optional[PieceType] = None


class GameResponse(BaseModel):
    game_id: UUID
    players: dict[PieceColor, PlayerName]
    status: Status
    status_color: Optional[PieceColor] = None
    current_turn: PlayerName
    winner: Optional[PlayerName] = None
    board: dict[SquareName, PieceResponse]
    move_history: list[MoveRecordResponse]


class LegalMovesResponse(BaseModel):
    game_id: UUID
    player_name: PlayerName
    color: PieceColor
    legal_moves: list[tuple[SquareName, SquareName]]
