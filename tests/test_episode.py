"""Episode-level properties: coverage, disjointness, determinism, level resets."""

from __future__ import annotations

import copy

from pcp.components import active_collectibles
from pcp.episode import run_episode
from pcp.maze import Maze
from pcp.selector import TargetSelector


def check_invariants(tick, maze, selector):
    comps = list(selector.registry)
    assert all(len(c) > 0 for c in comps)
    union = selector.registry.members()
    assert sum(len(c) for c in comps) == len(union)
    # the pill under the agent has been dropped from tracking, the maze eats it next
    assert union == set(active_collectibles(maze)) - {maze.pacman}


class TestRunEpisode:
    def test_corridor_scenario(self, corridor):
        stats = run_episode(corridor)
        assert stats.cleared
        assert stats.pills_eaten == 5
        assert stats.path_taken == [0, 1, 2, 3, 4]
        assert stats.targets == [1, 2, 3, 4, None]
        assert stats.max_clusters == 1

    def test_invariants_hold_every_tick(self):
        maze = Maze.random(height=15, width=15, loop_p=0.15, seed=3)
        total = maze.pills_remaining()
        stats = run_episode(maze, on_tick=check_invariants)
        assert stats.cleared
        assert stats.pills_eaten == total

    def test_invariants_with_gaps(self, make_maze):
        maze = make_maze(
            """\
            %%%%%%%%%%%
            %. . .  . %
            %.%%% %%%.%
            %.  P    .%
            %.%%%.%%%.%
            %o . . . o%
            %%%%%%%%%%%
            """
        )
        stats = run_episode(maze, on_tick=check_invariants)
        assert stats.cleared

    def test_deterministic(self):
        base = Maze.random(height=13, width=17, seed=21)
        a = run_episode(copy.deepcopy(base))
        b = run_episode(copy.deepcopy(base))
        assert a.path_taken == b.path_taken
        assert a.targets == b.targets

    def test_tick_limit(self):
        maze = Maze.random(height=15, width=15, seed=5)
        stats = run_episode(maze, max_ticks=3)
        assert not stats.cleared
        assert len(stats.targets) == 3

    def test_selector_reused_across_levels(self):
        sel = TargetSelector()
        first = run_episode(Maze.random(height=11, width=11, seed=1, level=1), sel)
        second = run_episode(Maze.random(height=11, width=11, seed=2, level=2), sel)
        assert first.cleared and second.cleared
        assert sel.level == 2

    def test_splits_are_observed(self):
        maze = Maze.random(height=21, width=21, loop_p=0.0, seed=8)
        stats = run_episode(maze)
        assert stats.cleared
        assert stats.max_clusters > 1
