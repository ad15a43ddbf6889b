# pcp/types.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Tuple

Coord = Tuple[int, int]  # (row, col)
NodeIndex = int
RGB = Tuple[int, int, int]

class Move(Enum):
    UP = (-1, 0)
    RIGHT = (0, 1)
    DOWN = (1, 0)
    LEFT = (0, -1)
    NEUTRAL = (0, 0)

    @property
    def delta(self) -> Coord:
        return self.value

    def opposite(self) -> "Move":
        dr, dc = self.value
        return Move((-dr, -dc))

# fixed order used wherever neighbours are enumerated
COMPASS = (Move.UP, Move.RIGHT, Move.DOWN, Move.LEFT)

@dataclass(frozen=True)
class NodeDistance:
    index: NodeIndex
    distance: float
    size: int  # cardinality of the cluster the node belongs to
