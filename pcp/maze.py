# pcp/maze.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple
import logging, os, random
from .types import COMPASS, RGB, Coord, Move, NodeIndex
from .astar import astar_once, path_distances

logger = logging.getLogger(__name__)

WALL, PILL, POWER_PILL, EMPTY, START = "%", ".", "o", " ", "P"
HEADER = "MAZE"

@dataclass
class Maze:
    """
    Maze topology oracle.
    Nodes are the free cells numbered in row-major order. Pill sets hold the
    coordinates still carrying a pill and shrink as the agent eats them.
    """
    walls: List[List[bool]]  # True=wall
    pills: Set[Coord]
    power_pills: Set[Coord]
    start: Coord
    level: int = 0

    coords: List[Coord] = field(init=False, repr=False)
    pacman: NodeIndex = field(init=False)
    overlays: List[Tuple[RGB, List[NodeIndex]]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.height = len(self.walls)
        self.width = max((len(row) for row in self.walls), default=0)
        self.coords = [(r, c) for r, row in enumerate(self.walls) for c, blocked in enumerate(row) if not blocked]
        if not self.coords:
            raise ValueError("maze has no free cell")
        self._index: Dict[Coord, NodeIndex] = {rc: i for i, rc in enumerate(self.coords)}
        for rc in (self.start, *self.pills, *self.power_pills):
            if rc not in self._index:
                raise ValueError(f"{rc} is not a free cell")
        self._links: List[Tuple[Optional[NodeIndex], ...]] = [
            tuple(self._step(rc, mv) for mv in COMPASS) for rc in self.coords
        ]
        self._dist_cache: Dict[NodeIndex, List[float]] = {}
        self.pacman = self._index[self.start]
        self.overlays = []

    def _step(self, rc: Coord, move: Move) -> Optional[NodeIndex]:
        dr, dc = move.delta
        return self._index.get((rc[0] + dr, rc[1] + dc))

    # ----------------- construction -----------------
    @staticmethod
    def parse(text: str, level: Optional[int] = None) -> "Maze":
        lines = text.splitlines()
        while lines and not lines[0].strip():
            lines.pop(0)
        while lines and not lines[-1].strip():
            lines.pop()
        header_level = 0
        header_start: Optional[Coord] = None
        if lines and lines[0].startswith(HEADER):
            parts = lines.pop(0).split()
            if len(parts) not in (2, 4) or not all(p.lstrip("-").isdigit() for p in parts[1:]):
                raise ValueError(f"bad header line: {' '.join(parts)!r}")
            header_level = int(parts[1])
            if len(parts) == 4:
                header_start = (int(parts[2]), int(parts[3]))

        width = max((len(line) for line in lines), default=0)
        walls: List[List[bool]] = []
        pills: Set[Coord] = set()
        power: Set[Coord] = set()
        starts: List[Coord] = []
        for r, line in enumerate(lines):
            row = []
            for c, ch in enumerate(line.ljust(width, WALL)):
                if ch not in (WALL, PILL, POWER_PILL, EMPTY, START):
                    raise ValueError(f"unknown layout character {ch!r} at {(r, c)}")
                row.append(ch == WALL)
                if ch == PILL:
                    pills.add((r, c))
                elif ch == POWER_PILL:
                    power.add((r, c))
                elif ch == START:
                    starts.append((r, c))
            walls.append(row)

        if len(starts) > 1:
            raise ValueError(f"layout has {len(starts)} start cells")
        if header_start is not None:
            start = header_start
        elif starts:
            start = starts[0]
        else:
            # legacy layouts: agent starts on the first free cell
            free = [(r, c) for r, row in enumerate(walls) for c, b in enumerate(row) if not b]
            if not free:
                raise ValueError("maze has no free cell")
            start = free[0]
        return Maze(walls, pills, power, start, header_level if level is None else level)

    @staticmethod
    def load(path: str) -> "Maze":
        with open(path, "r") as f:
            maze = Maze.parse(f.read())
        logger.debug("loaded %s: %d nodes, %d collectibles", path, maze.node_count, maze.pills_remaining())
        return maze

    @staticmethod
    def random(height: int = 21, width: int = 21, loop_p: float = 0.10,
               seed: Optional[int] = None, level: int = 0) -> "Maze":
        """Recursive-backtracker maze with extra openings; every free cell holds a pill or power pill."""
        if height < 5 or width < 5:
            raise ValueError("maze must be at least 5x5")
        height -= 1 - height % 2
        width -= 1 - width % 2
        rng = random.Random(seed)
        walls = [[True] * width for _ in range(height)]

        walls[1][1] = False
        stack = [(1, 1)]
        while stack:
            r, c = stack[-1]
            cand = [(r + dr, c + dc) for dr, dc in ((-2, 0), (0, 2), (2, 0), (0, -2))
                    if 0 < r + dr < height - 1 and 0 < c + dc < width - 1 and walls[r + dr][c + dc]]
            if not cand:
                stack.pop()
                continue
            nr, nc = rng.choice(cand)
            walls[(r + nr) // 2][(c + nc) // 2] = False
            walls[nr][nc] = False
            stack.append((nr, nc))

        # knock through some walls so the maze has loops
        for r in range(1, height - 1):
            for c in range(1, width - 1):
                if not walls[r][c]:
                    continue
                horizontal = not walls[r][c - 1] and not walls[r][c + 1]
                vertical = not walls[r - 1][c] and not walls[r + 1][c]
                if (horizontal != vertical) and rng.random() < loop_p:
                    walls[r][c] = False

        free = [(r, c) for r in range(height) for c in range(width) if not walls[r][c]]
        centre = (height // 2, width // 2)
        start = min(free, key=lambda rc: abs(rc[0] - centre[0]) + abs(rc[1] - centre[1]))
        power = {(1, 1), (1, width - 2), (height - 2, 1), (height - 2, width - 2)}
        # the start cell keeps its pill so the pill graph stays connected
        pills = set(free) - power
        return Maze(walls, pills, power, start, level)

    def to_text(self) -> str:
        lines = [f"{HEADER} {self.level} {self.start[0]} {self.start[1]}"]
        for r, row in enumerate(self.walls):
            chars = []
            for c, blocked in enumerate(row):
                rc = (r, c)
                if blocked:
                    chars.append(WALL)
                elif rc in self.power_pills:
                    chars.append(POWER_PILL)
                elif rc in self.pills:
                    chars.append(PILL)
                elif rc == self.start:
                    chars.append(START)
                else:
                    chars.append(EMPTY)
            lines.append("".join(chars))
        return "\n".join(lines) + "\n"

    def save(self, path: str) -> None:
        out_dir = os.path.dirname(path)
        if out_dir:
            os.makedirs(out_dir, exist_ok=True)
        with open(path, "w") as f:
            f.write(self.to_text())

    # ----------------- topology -----------------
    @property
    def node_count(self) -> int:
        return len(self.coords)

    def coord(self, node: NodeIndex) -> Coord:
        return self.coords[node]

    def node_at(self, rc: Coord) -> Optional[NodeIndex]:
        return self._index.get(rc)

    def neighbours(self, node: NodeIndex) -> List[NodeIndex]:
        return [nb for nb in self._links[node] if nb is not None]

    def neighbour(self, node: NodeIndex, move: Move) -> Optional[NodeIndex]:
        if move is Move.NEUTRAL:
            return None
        return self._links[node][COMPASS.index(move)]

    def move_to_reach(self, node: NodeIndex, neighbour: NodeIndex) -> Move:
        for mv, nb in zip(COMPASS, self._links[node]):
            if nb == neighbour:
                return mv
        raise ValueError(f"{neighbour} is not a direct neighbour of {node}")

    def distance(self, a: NodeIndex, b: NodeIndex) -> float:
        table = self._dist_cache.get(a)
        if table is None:
            table = self._dist_cache[a] = path_distances(a, self)
        return table[b]

    def next_move_towards(self, origin: NodeIndex, target: NodeIndex) -> Move:
        if origin == target:
            return Move.NEUTRAL
        res = astar_once(origin, target, self)
        if res.path is None:
            return Move.NEUTRAL
        return self.move_to_reach(res.path[0], res.path[1])

    # ----------------- collectibles -----------------
    def has_pill(self, node: NodeIndex) -> bool:
        return self.coords[node] in self.pills

    def has_power_pill(self, node: NodeIndex) -> bool:
        return self.coords[node] in self.power_pills

    def is_collectible(self, node: NodeIndex) -> bool:
        return self.has_pill(node) or self.has_power_pill(node)

    def active_pills(self) -> List[NodeIndex]:
        return sorted(self._index[rc] for rc in self.pills)

    def active_power_pills(self) -> List[NodeIndex]:
        return sorted(self._index[rc] for rc in self.power_pills)

    def pills_remaining(self) -> int:
        return len(self.pills) + len(self.power_pills)

    def eat(self, node: NodeIndex) -> bool:
        rc = self.coords[node]
        if rc in self.pills:
            self.pills.discard(rc)
            return True
        if rc in self.power_pills:
            self.power_pills.discard(rc)
            return True
        return False

    def advance(self, move: Move) -> bool:
        """Consume whatever is under the agent, then take one step."""
        eaten = self.eat(self.pacman)
        nxt = self.neighbour(self.pacman, move)
        if nxt is not None:
            self.pacman = nxt
        return eaten

    # ----------------- debug overlay -----------------
    def add_points(self, color: RGB, nodes: Iterable[NodeIndex]) -> None:
        self.overlays.append((color, list(nodes)))

    def clear_overlays(self) -> None:
        self.overlays = []
