"""Swap resolution: match, clear, gravity, refill, repeat until quiescent.

The functions here are synchronous and operate on an explicit ``Board``.
Hosts that want to show intermediate states pass a ``CascadeObserver``; its
callbacks fire after each clear, after each gravity+refill, and once the
board has settled.
"""
from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional

from match3.components.board import Board
from match3.constants import NUM_TYPES, SCORE_PER_TILE
from match3.errors import SwapContractError, OutOfBoundsError
from match3.systems.board_ops import (
    GravityMove,
    Position,
    TypeEntry,
    apply_gravity,
    are_adjacent,
    clear_positions,
    find_match_groups,
    find_matches,
    refill_empties,
)

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CascadeStep:
    depth: int
    cleared: List[Position]
    groups: List[List[Position]]
    cleared_types: List[TypeEntry] = field(default_factory=list)
    score_delta: int = 0
    moves: List[GravityMove] = field(default_factory=list)
    refilled: List[TypeEntry] = field(default_factory=list)


class CascadeObserver:
    """No-op hooks; override the ones a host cares about."""

    def on_cleared(self, step: CascadeStep) -> None:
        pass

    def on_refilled(self, step: CascadeStep) -> None:
        pass

    def on_complete(self, depth: int) -> None:
        pass


class ScoreTally(CascadeObserver):
    """Observer that sums score deltas, optionally chaining to another observer."""

    def __init__(self, inner: Optional[CascadeObserver] = None):
        self.inner = inner
        self.deltas: List[int] = []

    @property
    def total(self) -> int:
        return sum(self.deltas)

    def on_cleared(self, step: CascadeStep) -> None:
        self.deltas.append(step.score_delta)
        if self.inner is not None:
            self.inner.on_cleared(step)

    def on_refilled(self, step: CascadeStep) -> None:
        if self.inner is not None:
            self.inner.on_refilled(step)

    def on_complete(self, depth: int) -> None:
        if self.inner is not None:
            self.inner.on_complete(depth)


def _run_passes(board: Board, rng: random.Random, num_types: int, observer: CascadeObserver) -> int:
    """Clear runs until none remain and return the number of passes."""
    depth = 0
    while True:
        matches = find_matches(board)
        if not matches:
            return depth
        depth += 1
        step = CascadeStep(depth=depth, cleared=matches, groups=find_match_groups(board))
        step.cleared_types = clear_positions(board, matches)
        step.score_delta = len(matches) * SCORE_PER_TILE
        logger.debug("cascade depth=%d cleared=%d delta=%d", depth, len(matches), step.score_delta)
        observer.on_cleared(step)
        step.moves = apply_gravity(board)
        step.refilled = refill_empties(board, rng, num_types)
        observer.on_refilled(step)


def resolve_cascade(
    board: Board,
    rng: random.Random,
    *,
    num_types: int = NUM_TYPES,
    observer: Optional[CascadeObserver] = None,
) -> bool:
    """Clear runs until none remain. Returns True if at least one pass cleared tiles."""
    observer = observer or CascadeObserver()
    depth = _run_passes(board, rng, num_types, observer)
    observer.on_complete(depth)
    return depth > 0


def attempt_swap(
    board: Board,
    src: Position,
    dst: Position,
    rng: random.Random,
    *,
    num_types: int = NUM_TYPES,
    observer: Optional[CascadeObserver] = None,
) -> bool:
    """Swap two adjacent tiles and resolve. A swap that matches nothing is undone.

    ``observer.on_complete`` fires once the board is final, after any undo.
    """
    for pos in (src, dst):
        if not board.in_bounds(pos):
            raise OutOfBoundsError(pos, board.rows, board.cols)
    if not are_adjacent(src, dst):
        raise SwapContractError(src, dst)
    observer = observer or CascadeObserver()
    board.swap(src, dst)
    depth = _run_passes(board, rng, num_types, observer)
    if not depth:
        board.swap(src, dst)
    logger.debug("swap %s <-> %s matched=%s", src, dst, depth > 0)
    observer.on_complete(depth)
    return depth > 0
