from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Sequence, Tuple

from match3.constants import EMPTY
from match3.errors import OutOfBoundsError

Position = Tuple[int, int]


@dataclass(slots=True)
class Board:
    """Grid of tile types indexed by (row, col); row 0 is the top row.

    ``EMPTY`` marks a cleared cell and only appears between a clear and the
    refill that follows it.
    """
    rows: int
    cols: int
    cells: List[List[int]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Board dimensions must be positive, got {self.rows}x{self.cols}")
        if not self.cells:
            self.cells = [[EMPTY] * self.cols for _ in range(self.rows)]
        else:
            self.load(self.cells)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Board":
        if not rows:
            raise ValueError("Board needs at least one row")
        return cls(rows=len(rows), cols=len(rows[0]), cells=[list(row) for row in rows])

    def load(self, rows: Sequence[Sequence[int]]) -> None:
        if len(rows) != self.rows or any(len(row) != self.cols for row in rows):
            raise ValueError(f"Layout does not fit a {self.rows}x{self.cols} board")
        self.cells = [[self._checked_type(value) for value in row] for row in rows]

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.rows and 0 <= col < self.cols

    def _require(self, pos: Position) -> None:
        if not self.in_bounds(pos):
            raise OutOfBoundsError(pos, self.rows, self.cols)

    @staticmethod
    def _checked_type(value: int) -> int:
        if value < EMPTY:
            raise ValueError(f"Tile type must be non-negative, got {value}")
        return value

    def get(self, pos: Position) -> int:
        self._require(pos)
        return self.cells[pos[0]][pos[1]]

    def set(self, pos: Position, tile_type: int) -> None:
        self._require(pos)
        self.cells[pos[0]][pos[1]] = self._checked_type(tile_type)

    def swap(self, a: Position, b: Position) -> None:
        """Exchange two cells. Adjacency is the caller's concern."""
        self._require(a)
        self._require(b)
        (ar, ac), (br, bc) = a, b
        self.cells[ar][ac], self.cells[br][bc] = self.cells[br][bc], self.cells[ar][ac]

    def positions(self) -> Iterator[Position]:
        for r in range(self.rows):
            for c in range(self.cols):
                yield (r, c)

    def column(self, col: int) -> List[int]:
        self._require((0, col))
        return [self.cells[r][col] for r in range(self.rows)]

    def empty_positions(self) -> List[Position]:
        return [pos for pos in self.positions() if self.cells[pos[0]][pos[1]] == EMPTY]

    def is_filled(self) -> bool:
        return not any(value == EMPTY for row in self.cells for value in row)

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        return tuple(tuple(row) for row in self.cells)
