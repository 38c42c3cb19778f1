"""Programming-error types raised by the board engine.

None of these are expected during normal play. A swap that produces no match
is not an error; ``attempt_swap`` simply returns ``False``.
"""
from __future__ import annotations

from typing import Tuple

Position = Tuple[int, int]


class Match3Error(Exception):
    """Base class for engine contract violations."""


class OutOfBoundsError(Match3Error, IndexError):
    def __init__(self, pos: Position, rows: int, cols: int):
        super().__init__(f"Position {pos!r} outside {rows}x{cols} board")
        self.pos = pos
        self.rows = rows
        self.cols = cols


class SwapContractError(Match3Error, ValueError):
    def __init__(self, src: Position, dst: Position):
        super().__init__(f"Swap {src!r} <-> {dst!r} is not between adjacent cells")
        self.src = src
        self.dst = dst


class ResolutionBusyError(Match3Error, RuntimeError):
    """A swap arrived while a cascade was still resolving."""
