# pcp/adjacency.py
from __future__ import annotations
from typing import List
from .types import NodeIndex
from .maze import Maze

# max number of empty nodes a walk may step over, exclusive
PILLS_MAX_SEPARATION = 10

def pill_adjacent_neighbours(maze: Maze, node: NodeIndex,
                             max_separation: int = PILLS_MAX_SEPARATION) -> List[NodeIndex]:
    """
    Collectibles reachable from `node` by walking straight in one compass
    direction over empty nodes. A walk that runs into a dead end, or steps
    over `max_separation` empty nodes, finds nothing. Results come in the
    maze's neighbour order.
    """
    found: List[NodeIndex] = []
    for nb in maze.neighbours(node):
        move = maze.move_to_reach(node, nb)
        cur = nb
        gap = 0
        while gap < max_separation and cur is not None and not maze.is_collectible(cur):
            gap += 1
            cur = maze.neighbour(cur, move)
        if gap < max_separation and cur is not None:
            found.append(cur)
    return found
