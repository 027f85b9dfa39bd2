"""
Error taxonomy shared across layers.

`MoveError` and its subclasses are expected outcomes of caller input: the board is untouched when one is raised,
so the caller can simply re-prompt the same player.
`InvariantViolationError` means the engine itself is broken and should be treated as fatal.
"""


class GameError(Exception):
    """Base class for everything the chess core raises on purpose."""


class GameStateError(GameError):
    """A game cannot be constructed / put into the requested state."""


class InvalidRequestError(GameError):
    """Boundary input that could not be interpreted."""


class GameNotFoundError(GameError):
    """The service does not know a game with the requested id."""


class InvariantViolationError(GameError):
    """Internal bug: ex. a side with zero or two kings on the board."""


class MoveError(GameError):
    """A rejected move / resignation. Recoverable: nothing has been mutated."""

    code: str = "move_error"


class OutOfBoundsError(MoveError):
    code = "out_of_bounds"


class GameOverError(MoveError):
    code = "game_over"


class NotYourTurnError(MoveError):
    code = "not_your_turn"


class EmptyOriginError(MoveError):
    code = "empty_origin"


class WrongPieceOwnerError(MoveError):
    code = "wrong_piece_owner"


class IllegalGeometryError(MoveError):
    """The piece cannot reach the destination (includes failed castling preconditions)."""

    code = "illegal_geometry"


class SelfCheckError(MoveError):
    """The move would leave the mover's own king attacked."""

    code = "self_check"


class NotAParticipantError(MoveError):
    code = "not_a_participant"
