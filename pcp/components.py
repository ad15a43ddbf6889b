# pcp/components.py
from __future__ import annotations
from typing import Iterable, Iterator, List, Optional, Set
import colorsys
import logging
from .types import RGB, NodeDistance, NodeIndex
from .errors import EmptyClusterError
from .maze import Maze
from .adjacency import pill_adjacent_neighbours

logger = logging.getLogger(__name__)

def cluster_color(position: int, total: int) -> RGB:
    """Evenly spread hue for the cluster at `position` out of `total`."""
    r, g, b = colorsys.hsv_to_rgb(position / total, 1.0, 1.0)
    return (round(r * 255), round(g * 255), round(b * 255))

def active_collectibles(maze: Maze) -> List[NodeIndex]:
    return maze.active_pills() + maze.active_power_pills()

class Component:
    """
    A cluster of collectible nodes connected under pill-adjacency.
    Members are iterated in ascending node order.
    """
    def __init__(self, nodes: Iterable[NodeIndex]):
        self.nodes: Set[NodeIndex] = set(nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node: object) -> bool:
        return node in self.nodes

    def __iter__(self) -> Iterator[NodeIndex]:
        return iter(sorted(self.nodes))

    def __repr__(self) -> str:
        return f"Component({sorted(self.nodes)})"

    def remove(self, maze: Maze, node: NodeIndex) -> Optional[List["Component"]]:
        """
        Remove `node` and split what is left into offspring components.

        Returns None if `node` is not a member. Otherwise the returned list
        replaces this component; it may be empty. Adjacency is read from the
        maze as it is now, so call this before the maze consumes `node`.
        """
        if node not in self.nodes:
            return None
        self.nodes.discard(node)

        offspring: List[Component] = []
        for start in pill_adjacent_neighbours(maze, node):
            pulled = self._pull(maze, start)
            if pulled:
                offspring.append(Component(pulled))

        if self.nodes:
            # members not anchored at a neighbour of the removed node stop being tracked
            logger.warning("removing node %d dropped %d unreached nodes: %s",
                           node, len(self.nodes), sorted(self.nodes))
        if len(offspring) > 1:
            logger.debug("node %d split a cluster into sizes %s", node, [len(o) for o in offspring])
        return offspring

    def _pull(self, maze: Maze, start: NodeIndex) -> Set[NodeIndex]:
        # depth-first flood fill that moves members out of self.nodes
        pulled: Set[NodeIndex] = set()
        stack = [start]
        while stack:
            cur = stack.pop()
            if cur not in self.nodes:
                continue
            self.nodes.remove(cur)
            pulled.add(cur)
            stack.extend(reversed(pill_adjacent_neighbours(maze, cur)))
        return pulled

    def nearest_to(self, maze: Maze, origin: NodeIndex) -> NodeDistance:
        if not self.nodes:
            raise EmptyClusterError("nearest node requested from an empty cluster")
        best: Optional[NodeIndex] = None
        best_d = 0.0
        for node in self:
            d = maze.distance(origin, node)
            if best is None or d < best_d:
                best, best_d = node, d
        return NodeDistance(best, best_d, len(self.nodes))

    def draw(self, maze: Maze, color: RGB) -> None:
        maze.add_points(color, self)

class ClusterRegistry:
    """Ordered collection of disjoint components covering every uneaten collectible."""

    def __init__(self, components: Optional[List[Component]] = None):
        self.components: List[Component] = [c for c in (components or []) if c.nodes]

    @classmethod
    def from_maze(cls, maze: Maze) -> "ClusterRegistry":
        reg = cls()
        reg.initialize(active_collectibles(maze))
        return reg

    def initialize(self, nodes: Iterable[NodeIndex]) -> None:
        giant = Component(nodes)
        self.components = [giant] if giant.nodes else []
        logger.debug("registry initialized with %d collectibles", len(giant))

    def __len__(self) -> int:
        return len(self.components)

    def __iter__(self) -> Iterator[Component]:
        return iter(self.components)

    def members(self) -> Set[NodeIndex]:
        out: Set[NodeIndex] = set()
        for comp in self.components:
            out |= comp.nodes
        return out

    def remove_element(self, maze: Maze, node: NodeIndex) -> bool:
        kept: List[Component] = []
        to_add: List[Component] = []
        affected = False
        for comp in self.components:
            offspring = comp.remove(maze, node)
            if offspring is None:
                kept.append(comp)
            else:
                affected = True
                to_add.extend(o for o in offspring if o.nodes)
        self.components = kept + to_add
        return affected

    def nearest_per_cluster(self, maze: Maze, origin: NodeIndex) -> List[NodeDistance]:
        return [comp.nearest_to(maze, origin) for comp in self.components]

    def draw_clusters(self, maze: Maze) -> None:
        total = len(self.components)
        for i, comp in enumerate(self.components):
            comp.draw(maze, cluster_color(i, total))
