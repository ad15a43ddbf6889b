# pcp/pygame_viewer.py (live cluster overlay)
from __future__ import annotations
import argparse
import copy
import logging
from dataclasses import dataclass
from typing import List, Optional
import os
import pygame

from .maze import Maze
from .selector import TargetSelector
from .viz import overlay_colors

@dataclass
class Colors:
    BG = (10, 10, 10)
    WALL = (20, 20, 90)
    PILL = (200, 200, 200)
    PACMAN = (255, 230, 0)
    TARGET = (255, 255, 255)
    GRID = (40, 40, 50)

def _is_cmd_ctrl_f(event):
    mods = event.mod
    KMOD_CMD = getattr(pygame, "KMOD_META", 0) | getattr(pygame, "KMOD_GUI", 0)
    return event.key == pygame.K_f and (mods & pygame.KMOD_CTRL) and (mods & KMOD_CMD)

class Viewer:
    def __init__(self, maze: Maze, cell_size: int = 24, fps: int = 60,
                 fullscreen: bool = False, speed: float = 8.0,
                 env_dir: str | None = None):
        self.template = maze
        self.cell = cell_size
        self.fps = fps
        self.speed_tiles_per_sec = speed
        self.env_dir = env_dir
        self.env_files: List[str] = []
        self.env_index = -1

        self.autopilot = False
        self._step_timer = 0.0
        self.show_grid = False
        # levels handed to the selector keep increasing so every new maze forces a reset
        self._next_level = maze.level + 1
        self.selector = TargetSelector(draw_clusters=True)

        self.fullscreen = fullscreen
        self._reset_state()
        self._recreate_display()
        pygame.display.set_caption("Pill Cluster Pursuit")
        self.clock = pygame.time.Clock()

        if self.env_dir:
            self._find_env_files()

    # ----------------- display / fullscreen -----------------
    def _recreate_display(self) -> None:
        W, H = self.maze.width * self.cell, self.maze.height * self.cell
        flags = pygame.SCALED | (pygame.FULLSCREEN if self.fullscreen else 0)
        self.screen = pygame.display.set_mode((W, H), flags)

    def toggle_fullscreen(self) -> None:
        self.fullscreen = not self.fullscreen
        self._recreate_display()

    def _recalculate_step_interval(self) -> None:
        self._step_interval = 1.0 / self.speed_tiles_per_sec

    # ----------------- state -----------------
    def _reset_state(self) -> None:
        """Restart the current maze from its initial layout."""
        self.maze = copy.deepcopy(self.template)
        self.maze.level = self._next_level
        self._next_level += 1
        self.finished = False
        self._recalculate_step_interval()
        self._decide()

    def _set_template(self, maze: Maze) -> None:
        old_size = (self.template.width, self.template.height)
        self.template = maze
        self._reset_state()
        if (maze.width, maze.height) != old_size:
            self._recreate_display()

    def _find_env_files(self) -> None:
        if self.env_dir and os.path.isdir(self.env_dir):
            self.env_files = sorted([f for f in os.listdir(self.env_dir) if f.endswith(".txt")])

    def _load_env_by_index(self, index: int) -> None:
        if not self.env_files or not (0 <= index < len(self.env_files)):
            return
        self.env_index = index
        filepath = os.path.join(self.env_dir, self.env_files[self.env_index])
        print(f"Loading: {filepath}")
        self._set_template(Maze.load(filepath))

    def _decide(self) -> None:
        self.maze.clear_overlays()
        self.move = self.selector.get_move(self.maze)

    def _step(self) -> None:
        if self.finished:
            return
        self.maze.advance(self.move)
        if self.maze.pills_remaining() == 0:
            self.finished = True
            self.autopilot = False
            print(f"Level {self.maze.level} cleared")
            return
        self._decide()

    # ----------------- draw -----------------
    def draw(self) -> None:
        cell = self.cell
        scr = self.screen
        scr.fill(Colors.BG)

        for r, row in enumerate(self.maze.walls):
            for c, blocked in enumerate(row):
                if blocked:
                    scr.fill(Colors.WALL, pygame.Rect(c * cell, r * cell, cell, cell))

        colors = overlay_colors(self.maze)
        for node in self.maze.active_pills() + self.maze.active_power_pills():
            r, c = self.maze.coord(node)
            rad = cell // 3 if self.maze.has_power_pill(node) else max(2, cell // 6)
            center = (c * cell + cell // 2, r * cell + cell // 2)
            pygame.draw.circle(scr, colors.get(node, Colors.PILL), center, rad)

        target: Optional[int] = self.selector.target
        if target is not None:
            tr, tc = self.maze.coord(target)
            pygame.draw.rect(scr, Colors.TARGET, pygame.Rect(tc * cell + 2, tr * cell + 2, cell - 4, cell - 4), 1)

        pr, pc = self.maze.coord(self.maze.pacman)
        pygame.draw.circle(scr, Colors.PACMAN, (pc * cell + cell // 2, pr * cell + cell // 2), cell // 2 - 2)

        if self.show_grid:
            n_r, n_c = self.maze.height, self.maze.width
            for i in range(n_c + 1):
                pygame.draw.line(scr, Colors.GRID, (i * cell, 0), (i * cell, n_r * cell))
            for i in range(n_r + 1):
                pygame.draw.line(scr, Colors.GRID, (0, i * cell), (n_c * cell, i * cell))

        pygame.display.flip()

    # ----------------- loop -----------------
    def run(self) -> None:
        running = True
        while running:
            dt = self.clock.tick(self.fps) / 1000.0
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    elif event.key == pygame.K_SPACE:
                        self.autopilot = not self.autopilot
                    elif event.key == pygame.K_n:
                        self._step()
                    elif event.key == pygame.K_r:
                        self._reset_state()
                    elif event.key == pygame.K_g:
                        self._set_template(Maze.random(height=self.maze.height, width=self.maze.width))
                    elif event.key == pygame.K_LEFTBRACKET and self.env_files: # Previous maze '['
                        new_index = (self.env_index - 1 + len(self.env_files)) % len(self.env_files)
                        self._load_env_by_index(new_index)
                    elif event.key == pygame.K_RIGHTBRACKET and self.env_files: # Next maze ']'
                        new_index = (self.env_index + 1) % len(self.env_files)
                        self._load_env_by_index(new_index)
                    elif event.key == pygame.K_PAGEUP:
                        self.speed_tiles_per_sec = min(self.speed_tiles_per_sec + 1, 60)
                        self._recalculate_step_interval()
                    elif event.key == pygame.K_PAGEDOWN:
                        self.speed_tiles_per_sec = max(self.speed_tiles_per_sec - 1, 1)
                        self._recalculate_step_interval()
                    elif event.key == pygame.K_h:
                        self.show_grid = not self.show_grid
                    elif (event.key == pygame.K_RETURN and (event.mod & pygame.KMOD_ALT)) or _is_cmd_ctrl_f(event):
                        self.toggle_fullscreen()
                    elif event.key == pygame.K_F11:
                        self.toggle_fullscreen()

            if self.autopilot and not self.finished:
                self._step_timer += dt
                while self._step_timer >= self._step_interval and not self.finished:
                    self._step()
                    self._step_timer -= self._step_interval

            self.draw()

def main():
    parser = argparse.ArgumentParser(description="Pill cluster pursuit viewer")
    parser.add_argument("--height", type=int, default=21, help="Maze height when generating random maps")
    parser.add_argument("--width", type=int, default=27, help="Maze width when generating random maps")
    parser.add_argument("--load", type=str, default=None, help="Load a saved maze (.txt)")
    parser.add_argument("--cell", type=int, default=24, help="Cell size in pixels")
    parser.add_argument("--envdir", type=str, default="mazes", help="Directory of mazes to cycle through with [ and ]")
    parser.add_argument("--fps", type=int, default=60, help="Frames per second")
    parser.add_argument("--speed", type=float, default=8.0, help="Autopilot speed in tiles/sec")
    parser.add_argument("--fullscreen", action="store_true", help="Start in fullscreen (toggle Option+Enter / F11)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING,
                        format="%(levelname)s | %(message)s")

    # Determine initial maze
    if args.load:
        maze = Maze.load(args.load)
    elif os.path.isdir(args.envdir) and any(f.endswith(".txt") for f in os.listdir(args.envdir)):
        first_env = sorted([f for f in os.listdir(args.envdir) if f.endswith(".txt")])[0]
        maze = Maze.load(os.path.join(args.envdir, first_env))
    else:
        maze = Maze.random(height=args.height, width=args.width)

    pygame.init()
    try:
        Viewer(maze, cell_size=args.cell, fps=args.fps, fullscreen=args.fullscreen,
               speed=args.speed, env_dir=args.envdir).run()
    finally:
        pygame.quit()

if __name__ == "__main__":
    main()
