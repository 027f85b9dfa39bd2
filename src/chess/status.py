"""Game status. Moves forward from ACTIVE towards a terminal value, never back."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional, Self

from src.chess.pieces import Color


class Status(Enum):
    ACTIVE = auto()
    CHECK = auto()
    CHECKMATE = auto()
    RESIGNED = auto()


TERMINAL_STATUSES = (Status.CHECKMATE, Status.RESIGNED)


@dataclass(frozen=True)
class GameStatus:
    """
    `color` depends on the status:
    * CHECK: the side whose king is attacked
    * CHECKMATE / RESIGNED: the winning side
    * ACTIVE: None
    """

    status: Status = Status.ACTIVE
    color: Optional[Color] = None

    @classmethod
    def active(cls) -> Self:
        return cls()

    @classmethod
    def check(cls, color: Color) -> Self:
        return cls(Status.CHECK, color)

    @classmethod
    def checkmate(cls, winner: Color) -> Self:
        return cls(Status.CHECKMATE, winner)

    @classmethod
    def resigned(cls, winner: Color) -> Self:
        return cls(Status.RESIGNED, winner)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES

    @property
    def winner(self) -> Optional[Color]:
        return self.color if self.is_terminal else None
