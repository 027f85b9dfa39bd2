"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from src.core.exceptions import OutOfBoundsError

# Chess board is always 8x8. Ranks and files are both indexed 0-7.
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    """(rank, file) pair. Rank 0 is White's back rank, file 0 is the a-file."""

    rank: int
    file: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        if len(sq) != 2 or not sq[0].isalpha() or not sq[1].isdigit():
            raise OutOfBoundsError(f"Cannot interpret {sq!r} as a square name.")
        square = cls(rank=int(sq[1]) - 1, file=ord(sq[0].lower()) - ord("a"))
        square.assert_within_bounds()
        return square

    def to_algebraic(self) -> str:
        return f"{chr(self.file + ord('a'))}{self.rank + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.rank < BOARD_DIMENSIONS[0]) and (
            0 <= self.file < BOARD_DIMENSIONS[1]
        )

    def assert_within_bounds(self) -> None:
        if not self.is_within_bounds():
            raise OutOfBoundsError(
                f"Square (rank={self.rank}, file={self.file}) is not on the board."
            )

    def offset(self, d_rank: int, d_file: int) -> Square:
        """The square reached by stepping along a vector. May be off the board."""
        return Square(self.rank + d_rank, self.file + d_file)


def all_squares() -> Iterator[Square]:
    """Every square on the board, rank by rank starting from a1"""
    for rank in range(BOARD_DIMENSIONS[0]):
        for file in range(BOARD_DIMENSIONS[1]):
            yield Square(rank, file)
