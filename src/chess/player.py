"""A participant of a game: an opaque identity supplied by the caller, plus the side it plays."""

from dataclasses import dataclass

from src.chess.pieces import Color


@dataclass(frozen=True)
class Player:
    name: str
    color: Color
