"""Shared maze layouts for the pcp tests.

Nodes are numbered row-major over free cells, so in the one-row layouts
below the node index is simply ``col - 1``.
"""

from __future__ import annotations

import textwrap

import pytest

from pcp.maze import Maze


def layout(text: str) -> Maze:
    return Maze.parse(textwrap.dedent(text))


@pytest.fixture
def make_maze():
    return layout


@pytest.fixture
def corridor() -> Maze:
    """Five pills in a row, agent starting on the leftmost one (node 0)."""
    return layout(
        """\
        MAZE 0 1 1
        %%%%%%%
        %.....%
        %%%%%%%
        """
    )


@pytest.fixture
def y_junction() -> Maze:
    """Node 2 is pill-adjacent to 0 (up), 3 (right) and 1 (left)."""
    return layout(
        """\
        %%%%%
        %%.%%
        %...%
        %%%%%
        """
    )


@pytest.fixture
def twin_pills() -> Maze:
    """Two single pills at equal distance either side of the agent (node 2)."""
    return layout(
        """\
        %%%%%%%
        %. P .%
        %%%%%%%
        """
    )
