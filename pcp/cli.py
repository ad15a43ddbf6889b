# pcp/cli.py
from __future__ import annotations
import argparse, csv, logging, os, os.path
from typing import Optional

from .maze import Maze
from .selector import TargetSelector
from .episode import run_episode, RunStats
from .viz import draw_maze_png

def format_stats(name: str, s: RunStats) -> str:
    return (f"{name:20s} | cleared={s.cleared!s:5s} | moves={s.moves:5d} | "
            f"eaten={s.pills_eaten:4d} | max_clusters={s.max_clusters:3d} | "
            f"time={s.elapsed_sec*1000:7.1f} ms")

def play(maze: Maze, selector: TargetSelector, max_ticks: int,
         out_dir: Optional[str] = None, base_tag: str = "run", snapshot_every: int = 0) -> RunStats:
    on_tick = None
    if out_dir and snapshot_every > 0:
        def on_tick(tick: int, m: Maze, sel: TargetSelector) -> None:
            if tick % snapshot_every == 0:
                draw_maze_png(m, None, os.path.join(out_dir, f"{base_tag}_tick{tick:05d}.png"))

    stats = run_episode(maze, selector, max_ticks=max_ticks, on_tick=on_tick)
    if out_dir:
        draw_maze_png(maze, stats.path_taken, os.path.join(out_dir, f"{base_tag}_path.png"))
    return stats

# -------- subcommands --------

def cmd_gen(args: argparse.Namespace) -> None:
    os.makedirs(args.out, exist_ok=True)
    for i in range(args.count):
        maze = Maze.random(height=args.height, width=args.width, loop_p=args.loops,
                           seed=(args.seed + i) if args.seed is not None else None, level=i)
        path = os.path.join(args.out, f"maze_{i:03d}.txt")
        maze.save(path)
        print("wrote", path)

def cmd_demo(args: argparse.Namespace) -> None:
    maze = Maze.load(args.env)
    os.makedirs(args.out, exist_ok=True)
    tag = os.path.splitext(os.path.basename(args.env))[0]
    selector = TargetSelector(draw_clusters=args.snapshot_every > 0)
    stats = play(maze, selector, args.max_ticks, out_dir=args.out, base_tag=tag,
                 snapshot_every=args.snapshot_every)
    print(format_stats(tag, stats))

def cmd_bench(args: argparse.Namespace) -> None:
    envs = sorted(p for p in os.listdir(args.envdir) if p.endswith(".txt"))
    os.makedirs(args.out, exist_ok=True)
    rows = []
    for fname in envs:
        maze = Maze.load(os.path.join(args.envdir, fname))
        base = os.path.splitext(fname)[0]
        st = play(maze, TargetSelector(), args.max_ticks, out_dir=args.out, base_tag=base)
        print(f"{fname} :: {format_stats(base, st)}")
        rows.append({
            "env": fname,
            "level": maze.level,
            "cleared": st.cleared,
            "moves": st.moves,
            "eaten": st.pills_eaten,
            "max_clusters": st.max_clusters,
            "time_sec": round(st.elapsed_sec, 6),
        })
    if args.csv and rows:
        with open(args.csv, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=list(rows[0].keys()))
            writer.writeheader()
            writer.writerows(rows)
        print("wrote CSV:", args.csv)

def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Pill cluster pursuit (greedy cluster-targeting agent)")
    p.add_argument("--log-level", type=str, default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = p.add_subparsers(dest="cmd", required=True)

    g = sub.add_parser("gen", help="generate random mazes")
    g.add_argument("--count", type=int, default=10)
    g.add_argument("--height", type=int, default=21)
    g.add_argument("--width", type=int, default=27)
    g.add_argument("--loops", type=float, default=0.10)
    g.add_argument("--out", type=str, default="mazes")
    g.add_argument("--seed", type=int, default=None)
    g.set_defaults(func=cmd_gen)

    d = sub.add_parser("demo", help="play one maze and save PNGs")
    d.add_argument("--env", type=str, required=True)
    d.add_argument("--out", type=str, default="runs")
    d.add_argument("--snapshot-every", type=int, default=0, help="save a cluster snapshot every N ticks")
    d.add_argument("--max-ticks", type=int, default=5000)
    d.set_defaults(func=cmd_demo)

    b = sub.add_parser("bench", help="play every .txt maze in a folder")
    b.add_argument("--envdir", type=str, required=True)
    b.add_argument("--out", type=str, default="runs")
    b.add_argument("--csv", type=str, default="")
    b.add_argument("--max-ticks", type=int, default=5000)
    b.set_defaults(func=cmd_bench)

    return p

def main(argv=None):
    ap = build_argparser()
    args = ap.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s | %(message)s")
    args.func(args)
