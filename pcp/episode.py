# pcp/episode.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional
import logging
import time

from .types import NodeIndex
from .maze import Maze
from .selector import TargetSelector

logger = logging.getLogger(__name__)

TickHook = Callable[[int, Maze, TargetSelector], None]

@dataclass
class RunStats:
    cleared: bool
    moves: int
    pills_eaten: int
    max_clusters: int
    elapsed_sec: float
    path_taken: List[NodeIndex]
    targets: List[Optional[NodeIndex]]

def run_episode(maze: Maze, selector: Optional[TargetSelector] = None,
                max_ticks: int = 5000, on_tick: Optional[TickHook] = None) -> RunStats:
    """
    Let the selector play one level until every collectible is eaten.
    `on_tick` sees the maze after each decision, before the agent moves.
    """
    if selector is None:
        selector = TargetSelector()

    path_taken: List[NodeIndex] = [maze.pacman]
    targets: List[Optional[NodeIndex]] = []
    eaten = 0
    max_clusters = 0
    tick = 0
    t0 = time.perf_counter()

    while maze.pills_remaining() > 0 and tick < max_ticks:
        maze.clear_overlays()
        move = selector.get_move(maze)
        targets.append(selector.target)
        max_clusters = max(max_clusters, len(selector.registry))
        if on_tick is not None:
            on_tick(tick, maze, selector)

        before = maze.pacman
        eaten += maze.advance(move)
        if maze.pacman != before:
            path_taken.append(maze.pacman)
        tick += 1

    cleared = maze.pills_remaining() == 0
    if not cleared:
        logger.info("level %d not cleared after %d ticks, %d collectibles left",
                    maze.level, tick, maze.pills_remaining())
    return RunStats(cleared, len(path_taken) - 1, eaten, max_clusters,
                    time.perf_counter() - t0, path_taken, targets)
