# pcp/astar.py
from __future__ import annotations
from collections import deque
from typing import TYPE_CHECKING, Dict, List, Optional, Set, Tuple
import heapq
import math
from .types import NodeIndex
from .heuristics import manhattan

if TYPE_CHECKING:
    from .maze import Maze

class AStarResult:
    def __init__(self, path: Optional[List[NodeIndex]], expanded: Set[NodeIndex], gvals: Dict[NodeIndex, int]):
        self.path = path
        self.expanded = expanded
        self.gvals = gvals

def astar_once(
    start: NodeIndex,
    goal: NodeIndex,
    maze: "Maze",
    tie_break: str = "larger_g",          # or "smaller_g"
) -> AStarResult:
    """
    A* over the maze node graph, unit edge costs.
    Neighbours are expanded in UP/RIGHT/DOWN/LEFT order, so equal-cost
    paths always resolve the same way.
    """
    goal_rc = maze.coord(goal)

    def h(s: NodeIndex) -> int:
        return manhattan(maze.coord(s), goal_rc)

    openh: List[Tuple[int, int, int, NodeIndex]] = []
    g: Dict[NodeIndex, int] = {start: 0}
    parent: Dict[NodeIndex, NodeIndex] = {}
    closed: Set[NodeIndex] = set()
    counter = 0

    f0 = g[start] + h(start)
    gkey = -g[start] if tie_break == "larger_g" else g[start]
    heapq.heappush(openh, (f0, gkey, counter, start))
    counter += 1

    while openh:
        _, _, _, s = heapq.heappop(openh)
        if s in closed:
            continue
        closed.add(s)

        if s == goal:
            path = [s]
            while s in parent:
                s = parent[s]
                path.append(s)
            path.reverse()
            return AStarResult(path, closed, g)

        for nb in maze.neighbours(s):
            tentative = g[s] + 1
            if nb not in g or tentative < g[nb]:
                g[nb] = tentative
                parent[nb] = s
                ff = tentative + h(nb)
                g_term = -tentative if tie_break == "larger_g" else tentative
                heapq.heappush(openh, (ff, g_term, counter, nb))
                counter += 1

    return AStarResult(None, closed, g)

def path_distances(origin: NodeIndex, maze: "Maze") -> List[float]:
    """Shortest path length from origin to every node (inf if unreachable)."""
    dist = [math.inf] * maze.node_count
    dist[origin] = 0
    frontier = deque([origin])
    while frontier:
        s = frontier.popleft()
        for nb in maze.neighbours(s):
            if dist[nb] == math.inf:
                dist[nb] = dist[s] + 1
                frontier.append(nb)
    return dist
