"""
Contiguous Allocator - Visualizer

Replays a command script and draws a Matplotlib heatmap of address-space
occupancy after every command. Compactions are marked as horizontal lines.

How to run (recommended, from repo root):
    python -m tools.visualize_fragmentation --trace traces/fragmentation_stressor.txt --out out_fragmentation.png

Notes:
- Each allocated region is drawn with its own shade (by owner) so that
  compaction visibly slides regions towards address 0.
- --strategy forces one placement strategy for every RQ in the script,
  which makes it easy to compare first/best/worst-fit side by side.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Ensure repo root is on sys.path when running as a script:
# (python -m tools.visualize_fragmentation already works without this,
#  but this makes `python tools/visualize_fragmentation.py ...` work too.)
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from control.interpreter import CommandInterpreter, parse_command
from memory.allocator import ContiguousAllocator
from memory.errors import MalformedCommand
from memory.fragmentation import compute_metrics
from policy.placement import Strategy


def load_trace(path: str):
    """Yield command lines from a script file."""
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            yield line.rstrip("\n")


def render_state(alloc: ContiguousAllocator, width: int, shades: dict) -> np.ndarray:
    """
    Return a 1D occupancy array over the address space, binned to 'width'.
    Free bins are 0; allocated bins carry a per-owner shade in (0, 1].
    """
    bins = np.zeros(width, dtype=np.float32)
    scale = alloc.capacity / width

    for blk in alloc.snapshot():
        if blk.is_free:
            continue
        shade = shades.setdefault(blk.owner, 0.35 + 0.65 * ((len(shades) * 0.618) % 1.0))
        a = int(blk.start / scale)
        b = int((blk.end - 1) / scale)
        a = max(0, min(width - 1, a))
        b = max(0, min(width - 1, b))
        bins[a : b + 1] = shade

    return bins


def replay(trace: str, capacity: int, width: int, strategy=None, every: int = 1):
    """Run the script; return (frames, compaction frame indices, interpreter)."""
    alloc = ContiguousAllocator(capacity)
    interp = CommandInterpreter(alloc, strategy_override=strategy)
    shades: dict = {}
    frames: list = []
    compact_marks: list = []

    i = 0
    for line in load_trace(trace):
        try:
            cmd = parse_command(line)
        except MalformedCommand:
            cmd = None
        if cmd is None:
            continue
        i += 1
        if cmd.name == "C":
            # mark current frame index (where the line will be drawn)
            compact_marks.append(len(frames))
        if interp.execute(line).terminate:
            break
        if every <= 1 or (i % every == 0):
            frames.append(render_state(alloc, width, shades))

    return frames, compact_marks, interp


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--trace", required=True, help="Path to command script")
    ap.add_argument("--out", default="out_fragmentation.png", help="Output image file")
    ap.add_argument("--capacity", type=int, default=1000, help="Address space size (bytes)")
    ap.add_argument("--width", type=int, default=140, help="Heatmap width (bins)")
    ap.add_argument("--every", type=int, default=1, help="Record every N commands")
    ap.add_argument("--strategy", type=str.upper, choices=[s.value for s in Strategy],
                    help="Force one placement strategy for every RQ")
    args = ap.parse_args(argv)

    trace_path = Path(args.trace)
    if not trace_path.exists():
        raise SystemExit(f"Trace not found: {trace_path}")

    strategy = Strategy.parse(args.strategy) if args.strategy else None
    frames, compact_marks, interp = replay(str(trace_path), args.capacity, args.width, strategy, args.every)

    if not frames:
        raise SystemExit("No frames captured. Check trace path and --every.")

    H = np.stack(frames, axis=0)  # (time, width)

    fig = plt.figure(figsize=(10.5, 4.6))
    ax = fig.add_subplot(111)
    ax.imshow(H, aspect="auto", interpolation="nearest", vmin=0.0, vmax=1.0)
    ax.set_title("Address Space Occupancy (script replay)")
    ax.set_xlabel("address (binned)")
    ax.set_ylabel("time (commands)")

    for t in compact_marks:
        ax.axhline(t, linewidth=1)

    m = compute_metrics(interp.allocator.snapshot())
    caption = (
        f"Final fragmentation: LFE={m.lfe}, holes={m.hole_count}, "
        f"external_frag={m.external_frag:.3f}, entropy={m.entropy:.3f}"
    )
    fig.text(0.01, 0.01, caption, fontsize=9)

    fig.tight_layout()
    out_path = Path(args.out)
    fig.savefig(str(out_path), dpi=220)
    plt.close(fig)
    print(f"Wrote: {out_path.resolve()}")


if __name__ == "__main__":
    main()
