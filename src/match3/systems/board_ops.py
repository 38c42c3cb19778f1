from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List, Set, Tuple

from esper import World

from match3.components.board import Board
from match3.components.tile_type_registry import TileTypeRegistry
from match3.components.tile_types import TileTypes
from match3.constants import EMPTY, MIN_TYPES, NUM_TYPES, RESPAWN_MAX_ATTEMPTS

Position = Tuple[int, int]
TypeEntry = Tuple[int, int, int]


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    tile_type: int


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def get_tile_registry(world: World) -> TileTypes:
    for entity, _ in world.get_component(TileTypeRegistry):
        return world.component_for_entity(entity, TileTypes)
    raise RuntimeError("TileTypes definitions not found")


def world_rng(world: World) -> random.Random:
    rng = getattr(world, "random", None)
    if not isinstance(rng, random.Random):
        raise TypeError(f"world.random must be a random.Random, got {type(rng).__name__}")
    return rng


def are_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


# ----------------------------------------------------------------------------
# Generation
# ----------------------------------------------------------------------------

def random_type(rng: random.Random, num_types: int = NUM_TYPES) -> int:
    return rng.randint(1, num_types)


def creates_run_at(board: Board, pos: Position, tile_type: int) -> bool:
    """Return True if placing tile_type at pos completes a run with the two cells left or above."""
    row, col = pos
    cells = board.cells
    if col >= 2 and cells[row][col - 1] == tile_type and cells[row][col - 2] == tile_type:
        return True
    if row >= 2 and cells[row - 1][col] == tile_type and cells[row - 2][col] == tile_type:
        return True
    return False


def fill_initial(board: Board, rng: random.Random, num_types: int = NUM_TYPES) -> None:
    """Fill every cell in row-major order so that no run of three exists.

    Each candidate is drawn with ``random_type`` and rejected while it would
    complete a run with the already-filled neighbors to the left or above.
    """
    if num_types < MIN_TYPES:
        raise ValueError(f"At least {MIN_TYPES} tile types are required, got {num_types}")
    board.cells = [[EMPTY] * board.cols for _ in range(board.rows)]
    for row in range(board.rows):
        for col in range(board.cols):
            tile_type = random_type(rng, num_types)
            while creates_run_at(board, (row, col), tile_type):
                tile_type = random_type(rng, num_types)
            board.cells[row][col] = tile_type


def refill_empties(board: Board, rng: random.Random, num_types: int = NUM_TYPES) -> List[TypeEntry]:
    """Give every empty cell a fresh draw; new runs are allowed and drive cascades."""
    spawned: List[TypeEntry] = []
    for col in range(board.cols):
        for row in range(board.rows):
            if board.cells[row][col] != EMPTY:
                continue
            tile_type = random_type(rng, num_types)
            board.cells[row][col] = tile_type
            spawned.append((row, col, tile_type))
    return spawned


def respawn_full_board(
    board: Board,
    rng: random.Random,
    num_types: int = NUM_TYPES,
    *,
    max_attempts: int = RESPAWN_MAX_ATTEMPTS,
) -> List[Position]:
    """Refill the whole board with a layout that has no matches and at least one valid move."""
    for _ in range(max_attempts):
        fill_initial(board, rng, num_types)
        if find_matches(board):
            continue
        if not find_valid_swaps(board):
            continue
        return list(board.positions())
    raise RuntimeError("Unable to respawn board without matches and valid swaps")


# ----------------------------------------------------------------------------
# Matching
# ----------------------------------------------------------------------------

def _collect_runs(board: Board) -> List[List[Position]]:
    """Every maximal horizontal or vertical run of >= 3 equal, non-empty tiles."""
    runs: List[List[Position]] = []
    cells = board.cells
    # Horizontal runs
    for r in range(board.rows):
        run: List[Position] = []
        last_type = EMPTY
        for c in range(board.cols):
            tval = cells[r][c]
            if tval != EMPTY and tval == last_type:
                run.append((r, c))
            else:
                if len(run) >= 3:
                    runs.append(run)
                run = [(r, c)] if tval != EMPTY else []
                last_type = tval
        if len(run) >= 3:
            runs.append(run)
    # Vertical runs
    for c in range(board.cols):
        run = []
        last_type = EMPTY
        for r in range(board.rows):
            tval = cells[r][c]
            if tval != EMPTY and tval == last_type:
                run.append((r, c))
            else:
                if len(run) >= 3:
                    runs.append(run)
                run = [(r, c)] if tval != EMPTY else []
                last_type = tval
        if len(run) >= 3:
            runs.append(run)
    return runs


def find_matches(board: Board) -> List[Position]:
    """Deduplicated coordinates of all runs on the board, sorted row-major."""
    return sorted({pos for run in _collect_runs(board) for pos in run})


def find_match_groups(board: Board) -> List[List[Position]]:
    """Runs merged where they share a cell (L/T shapes become one group)."""
    groups = [set(run) for run in _collect_runs(board)]
    merged: List[Set[Position]] = []
    while groups:
        first = groups.pop()
        changed = True
        while changed:
            changed = False
            for g in groups[:]:
                if first & g:
                    first |= g
                    groups.remove(g)
                    changed = True
        merged.append(first)
    return sorted(sorted(group) for group in merged)


def _has_line_match(board: Board, pos: Position) -> bool:
    """Return True if a horizontal or vertical run of >= 3 passes through pos."""
    row, col = pos
    cells = board.cells
    tval = cells[row][col]
    if tval == EMPTY:
        return False
    # Horizontal sweep
    length = 1
    c = col - 1
    while c >= 0 and cells[row][c] == tval:
        length += 1
        c -= 1
    c = col + 1
    while c < board.cols and cells[row][c] == tval:
        length += 1
        c += 1
    if length >= 3:
        return True
    # Vertical sweep
    length = 1
    r = row - 1
    while r >= 0 and cells[r][col] == tval:
        length += 1
        r -= 1
    r = row + 1
    while r < board.rows and cells[r][col] == tval:
        length += 1
        r += 1
    return length >= 3


def predict_swap_creates_match(board: Board, src: Position, dst: Position) -> bool:
    """Return True if swapping src/dst would create a match. The board is left unchanged."""
    if not (board.in_bounds(src) and board.in_bounds(dst)):
        return False
    if board.get(src) == board.get(dst):
        return False
    board.swap(src, dst)
    try:
        return _has_line_match(board, src) or _has_line_match(board, dst)
    finally:
        board.swap(src, dst)


def find_valid_swaps(board: Board) -> List[Tuple[Position, Position]]:
    """Enumerate adjacent swaps that would produce a match."""
    swaps: List[Tuple[Position, Position]] = []
    for row in range(board.rows):
        for col in range(board.cols):
            pos = (row, col)
            right = (row, col + 1)
            if col + 1 < board.cols and predict_swap_creates_match(board, pos, right):
                swaps.append((pos, right))
            down = (row + 1, col)
            if row + 1 < board.rows and predict_swap_creates_match(board, pos, down):
                swaps.append((pos, down))
    return swaps


# ----------------------------------------------------------------------------
# Clearing & gravity
# ----------------------------------------------------------------------------

def clear_positions(board: Board, positions: Iterable[Position]) -> List[TypeEntry]:
    """Mark positions empty and return what was removed."""
    cleared: List[TypeEntry] = []
    for row, col in positions:
        tile_type = board.get((row, col))
        if tile_type == EMPTY:
            continue
        cleared.append((row, col, tile_type))
        board.set((row, col), EMPTY)
    return cleared


def apply_gravity(board: Board) -> List[GravityMove]:
    """Compact each column downward, leaving empties at the top.

    Scans bottom-up keeping a count of empties seen; each tile above at least
    one empty drops by that count. Relative order within a column is kept.
    """
    moves: List[GravityMove] = []
    cells = board.cells
    for col in range(board.cols):
        empty_count = 0
        for row in range(board.rows - 1, -1, -1):
            tile_type = cells[row][col]
            if tile_type == EMPTY:
                empty_count += 1
            elif empty_count > 0:
                cells[row + empty_count][col] = tile_type
                cells[row][col] = EMPTY
                moves.append(GravityMove(source=(row, col), target=(row + empty_count, col), tile_type=tile_type))
    return moves
