"""Tests for scoring, tie-breaking and the per-tick decision step."""

from __future__ import annotations

import math

import pytest

from pcp.components import ClusterRegistry, Component
from pcp.errors import NoTargetError
from pcp.selector import TargetSelector, pick_target, score
from pcp.types import Move, NodeDistance


def primed(selector, maze, components):
    """Hand the selector a registry without going through initialization."""
    selector.registry = ClusterRegistry(components)
    selector.level = maze.level
    return selector


class TestScoring:
    def test_score(self):
        assert score(NodeDistance(0, 4, 8)) == 2.0
        assert score(NodeDistance(0, 4, 8), alfa=2.0) == 1.0

    def test_zero_distance_scores_infinite(self):
        assert math.isinf(score(NodeDistance(0, 0, 1)))

    def test_unreachable_scores_zero(self):
        assert score(NodeDistance(0, math.inf, 5)) == 0.0
        assert pick_target([NodeDistance(0, math.inf, 5)]) is None

    def test_best_wins(self):
        cands = [NodeDistance(1, 2, 1), NodeDistance(2, 2, 6), NodeDistance(3, 1, 2)]
        assert pick_target(cands).index == 2

    def test_tie_keeps_first(self):
        a, b = NodeDistance(5, 2, 3), NodeDistance(9, 2, 3)
        assert pick_target([a, b]) is a
        assert pick_target([b, a]) is b

    def test_empty(self):
        assert pick_target([]) is None


class TestTargetSelector:
    def test_first_tick_initializes_and_eats(self, corridor):
        sel = TargetSelector()
        assert sel.select_target(corridor) == 1
        assert [c.nodes for c in sel.registry] == [{1, 2, 3, 4}]
        assert sel.level == 0

    def test_move_goes_towards_target(self, corridor):
        sel = TargetSelector()
        assert sel.get_move(corridor) is Move.RIGHT
        assert sel.target == 1

    def test_tie_break_prefers_earlier_cluster(self, twin_pills):
        sel = primed(TargetSelector(), twin_pills, [Component([0]), Component([4])])
        assert sel.select_target(twin_pills) == 0
        assert sel.get_move(twin_pills) is Move.LEFT

        sel = primed(TargetSelector(), twin_pills, [Component([4]), Component([0])])
        assert sel.select_target(twin_pills) == 4
        assert sel.get_move(twin_pills) is Move.RIGHT

    def test_bigger_cluster_wins_at_equal_distance(self, make_maze):
        maze = make_maze(
            """\
            %%%%%%%%%
            %.. P ..%
            %%%%%%%%%
            """
        )
        sel = primed(TargetSelector(), maze, [Component([1]), Component([5, 6])])
        assert sel.select_target(maze) == 5

    def test_stale_registry_without_level_change(self, corridor):
        sel = TargetSelector()
        sel.select_target(corridor)
        corridor.eat(3)
        sel.select_target(corridor)
        assert 3 in sel.registry.members()

    def test_level_change_rebuilds(self, corridor):
        sel = TargetSelector()
        sel.select_target(corridor)
        corridor.eat(3)
        corridor.level = 1
        sel.select_target(corridor)
        assert sel.level == 1
        # rebuilt from the maze, then the pill under the agent is dropped
        assert sel.registry.members() == {1, 2, 4}

    def test_last_pill_under_agent(self, make_maze):
        maze = make_maze("MAZE 0 1 1\n%%%%\n%. %\n%%%%\n")
        sel = TargetSelector()
        assert sel.select_target(maze) is None
        assert sel.get_move(maze) is Move.NEUTRAL
        assert len(sel.registry) == 0

    def test_no_target_with_pills_left_is_fatal(self, twin_pills):
        sel = primed(TargetSelector(), twin_pills, [])
        with pytest.raises(NoTargetError):
            sel.select_target(twin_pills)

    def test_draw_clusters(self, corridor):
        sel = TargetSelector(draw_clusters=True)
        sel.select_target(corridor)
        assert corridor.overlays == [((255, 0, 0), [1, 2, 3, 4])]

    def test_deterministic(self, make_maze):
        text = """\
            %%%%%%%%%
            %...%...%
            %.%.P.%.%
            %.......%
            %%%%%%%%%
            """
        moves = []
        for _ in range(2):
            maze = make_maze(text)
            sel = TargetSelector()
            moves.append((sel.get_move(maze), sel.target))
        assert moves[0] == moves[1]
