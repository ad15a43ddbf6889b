# pcp/selector.py
from __future__ import annotations
from typing import Iterable, Optional
import logging
import math
from .types import Move, NodeDistance, NodeIndex
from .errors import NoTargetError
from .maze import Maze
from .components import ClusterRegistry

logger = logging.getLogger(__name__)

ALFA = 1.0

def score(candidate: NodeDistance, alfa: float = ALFA) -> float:
    if candidate.distance == 0:
        return math.inf
    return candidate.size / (alfa * candidate.distance)

def pick_target(candidates: Iterable[NodeDistance], alfa: float = ALFA) -> Optional[NodeDistance]:
    """Highest scoring candidate; on equal scores the earliest one wins."""
    best_score = 0.0
    best: Optional[NodeDistance] = None
    for cand in candidates:
        v = score(cand, alfa)
        if best_score < v:
            best_score = v
            best = cand
    return best

class TargetSelector:
    """
    Per-tick decision step. Owns the cluster registry and the level it was
    built for; a new level rebuilds the registry from the maze.
    """
    def __init__(self, alfa: float = ALFA, draw_clusters: bool = False):
        self.alfa = alfa
        self.draw_clusters = draw_clusters
        self.registry: Optional[ClusterRegistry] = None
        self.level: Optional[int] = None
        self.target: Optional[NodeIndex] = None

    def reset(self, maze: Maze) -> None:
        self.registry = ClusterRegistry.from_maze(maze)
        self.level = maze.level
        logger.debug("level %d: tracking %d collectibles", maze.level, maze.pills_remaining())

    def select_target(self, maze: Maze) -> Optional[NodeIndex]:
        """Target node for this tick, or None once the last collectible is under the agent."""
        if self.registry is None or maze.level != self.level:
            self.reset(maze)
        cur = maze.pacman
        if maze.is_collectible(cur):
            self.registry.remove_element(maze, cur)

        best = pick_target(self.registry.nearest_per_cluster(maze, cur), self.alfa)
        if self.draw_clusters:
            self.registry.draw_clusters(maze)

        if best is None:
            left = maze.pills_remaining() - (1 if maze.is_collectible(cur) else 0)
            if left > 0:
                raise NoTargetError(f"no cluster scored above zero from node {cur} with {left} collectibles left")
            self.target = None
            return None
        self.target = best.index
        return best.index

    def get_move(self, maze: Maze) -> Move:
        target = self.select_target(maze)
        if target is None:
            return Move.NEUTRAL
        return maze.next_move_towards(maze.pacman, target)
