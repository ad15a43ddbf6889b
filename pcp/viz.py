# pcp/viz.py
from __future__ import annotations
import os
from typing import Dict, List, Optional
from PIL import Image, ImageDraw

from .types import RGB, NodeIndex
from .maze import Maze

WALL = (20, 20, 90)
FLOOR = (10, 10, 10)
PATH = (70, 70, 40)
PILL = (200, 200, 200)
PACMAN = (255, 230, 0)

def overlay_colors(maze: Maze) -> Dict[NodeIndex, RGB]:
    """Node -> colour from the maze's debug overlays; later calls win."""
    colors: Dict[NodeIndex, RGB] = {}
    for color, nodes in maze.overlays:
        for node in nodes:
            colors[node] = color
    return colors

def draw_maze_png(maze: Maze,
                  path: Optional[List[NodeIndex]],
                  out_png: str,
                  cell: int = 16) -> None:
    W, H = maze.width * cell, maze.height * cell
    img = Image.new("RGB", (W, H), FLOOR)
    drw = ImageDraw.Draw(img)

    # walls
    for r, row in enumerate(maze.walls):
        for c, blocked in enumerate(row):
            if blocked:
                drw.rectangle((c * cell, r * cell, c * cell + cell - 1, r * cell + cell - 1), fill=WALL)

    # path
    if path and len(path) > 1:
        for node in path:
            r, c = maze.coord(node)
            drw.rectangle((c * cell, r * cell, c * cell + cell - 1, r * cell + cell - 1), fill=PATH)

    # collectibles, coloured by cluster when overlays are present
    colors = overlay_colors(maze)
    for node in maze.active_pills() + maze.active_power_pills():
        r, c = maze.coord(node)
        rad = cell // 3 if maze.has_power_pill(node) else max(1, cell // 6)
        cx, cy = c * cell + cell // 2, r * cell + cell // 2
        drw.ellipse((cx - rad, cy - rad, cx + rad, cy + rad), fill=colors.get(node, PILL))

    pr, pc = maze.coord(maze.pacman)
    drw.pieslice((pc * cell + 1, pr * cell + 1, pc * cell + cell - 2, pr * cell + cell - 2), 30, 330, fill=PACMAN)

    out_dir = os.path.dirname(out_png)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    img.save(out_png)
