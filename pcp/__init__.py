# pcp/__init__.py
from .types import Coord, NodeIndex, Move, NodeDistance
from .errors import PcpError, EmptyClusterError, NoTargetError
from .maze import Maze
from .heuristics import manhattan
from .astar import astar_once, path_distances, AStarResult
from .adjacency import pill_adjacent_neighbours, PILLS_MAX_SEPARATION
from .components import Component, ClusterRegistry, cluster_color, active_collectibles
from .selector import TargetSelector, pick_target, score, ALFA
from .episode import run_episode, RunStats
from .viz import draw_maze_png

__all__ = [
    "Coord", "NodeIndex", "Move", "NodeDistance",
    "PcpError", "EmptyClusterError", "NoTargetError",
    "Maze", "manhattan",
    "astar_once", "path_distances", "AStarResult",
    "pill_adjacent_neighbours", "PILLS_MAX_SEPARATION",
    "Component", "ClusterRegistry", "cluster_color", "active_collectibles",
    "TargetSelector", "pick_target", "score", "ALFA",
    "run_episode", "RunStats",
    "draw_maze_png",
]
