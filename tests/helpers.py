from __future__ import annotations

import random
from typing import Sequence

from esper import World

from match3.components.board import Board
from match3.systems.board_ops import get_board


def load_layout(world: World, rows: Sequence[Sequence[int]]) -> Board:
    """Overwrite the world's board cells with a fixed layout."""
    board = get_board(world)
    board.load(rows)
    return board


def record(bus, name: str) -> list[dict]:
    """Subscribe to an event and collect every payload it carries."""
    received: list[dict] = []
    bus.subscribe(name, lambda sender, **payload: received.append(payload))
    return received


class ScriptedRandom(random.Random):
    """Random source that replays fixed ``randint`` results, then repeats the last one."""

    def __init__(self, *, values: Sequence[int]):
        super().__init__(0)
        self._values = list(values)
        self.calls = 0

    def randint(self, a: int, b: int) -> int:
        index = min(self.calls, len(self._values) - 1)
        self.calls += 1
        value = self._values[index]
        assert a <= value <= b
        return value
