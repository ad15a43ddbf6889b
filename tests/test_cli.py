"""Smoke tests for PNG rendering and the command line entry point."""

from __future__ import annotations

import csv

from PIL import Image

from pcp import cli
from pcp.components import ClusterRegistry
from pcp.maze import Maze
from pcp.viz import draw_maze_png, overlay_colors


class TestViz:
    def test_png_size(self, corridor, tmp_path):
        out = tmp_path / "out" / "corridor.png"
        draw_maze_png(corridor, [0, 1, 2], str(out), cell=8)
        with Image.open(out) as img:
            assert img.size == (corridor.width * 8, corridor.height * 8)

    def test_overlay_colors(self, corridor):
        ClusterRegistry.from_maze(corridor).draw_clusters(corridor)
        corridor.add_points((0, 0, 255), [4])
        colors = overlay_colors(corridor)
        assert colors[0] == (255, 0, 0)
        assert colors[4] == (0, 0, 255)


class TestCli:
    def test_gen_then_bench(self, tmp_path, capsys):
        envs = tmp_path / "mazes"
        runs = tmp_path / "runs"
        report = tmp_path / "bench.csv"
        cli.main(["gen", "--count", "2", "--height", "11", "--width", "13",
                  "--seed", "4", "--out", str(envs)])
        assert sorted(p.name for p in envs.iterdir()) == ["maze_000.txt", "maze_001.txt"]
        assert Maze.load(str(envs / "maze_001.txt")).level == 1

        cli.main(["bench", "--envdir", str(envs), "--out", str(runs), "--csv", str(report)])
        with open(report, newline="") as f:
            rows = list(csv.DictReader(f))
        assert [r["env"] for r in rows] == ["maze_000.txt", "maze_001.txt"]
        assert all(r["cleared"] == "True" for r in rows)
        assert (runs / "maze_000_path.png").exists()
        assert "wrote CSV" in capsys.readouterr().out

    def test_demo_snapshots(self, tmp_path, capsys):
        env = tmp_path / "m.txt"
        Maze.random(height=9, width=9, seed=2).save(str(env))
        runs = tmp_path / "runs"
        cli.main(["demo", "--env", str(env), "--out", str(runs), "--snapshot-every", "10"])
        assert (runs / "m_tick00000.png").exists()
        assert (runs / "m_path.png").exists()
        assert "cleared=True" in capsys.readouterr().out
