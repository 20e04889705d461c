from __future__ import annotations
import subprocess
import sys
import re
from pathlib import Path

PY = sys.executable  # respects venv if activated, otherwise uses current python

ROOT = Path(__file__).resolve().parent
CAPACITY = "1000"
TRACE = str(ROOT / "traces" / "fragmentation_stressor.txt")

SCENARIOS = [
    ("F", "first-fit"),
    ("B", "best-fit"),
    ("W", "worst-fit"),
]

PATTERNS = {
    "requests": re.compile(r"Requests: ok=(\d+)"),
    "request_failures": re.compile(r"Requests: ok=\d+ failed=(\d+)"),
    "releases": re.compile(r"Releases: ok=(\d+)"),
    "compactions": re.compile(r"Compactions:\s+(\d+)"),
    "bytes_moved": re.compile(r"Bytes moved:\s+(\d+)"),
    "used": re.compile(r"Used:\s+(\d+)"),
    "lfe": re.compile(r"Fragmentation: LFE=(\d+)"),
    "holes": re.compile(r"holes=(\d+)"),
    "external_frag": re.compile(r"external_frag=([0-9\.]+)"),
}

def run(strategy: str, trace: str=TRACE, capacity: str=CAPACITY) -> str:
    cmd = [PY, str(ROOT / "run_allocator.py"), capacity, "--script", trace, "--strategy", strategy, "--summary"]
    out = subprocess.check_output(cmd, stderr=subprocess.STDOUT, text=True)
    return out

def parse(out: str):
    def get(key, default=None):
        m = PATTERNS[key].search(out)
        return m.group(1) if m else default
    return {
        "requests": int(get("requests", 0)),
        "request_failures": int(get("request_failures", 0)),
        "releases": int(get("releases", 0)),
        "compactions": int(get("compactions", 0)),
        "bytes_moved": int(get("bytes_moved", 0)),
        "used": int(get("used", 0)),
        "lfe": int(get("lfe", 0)),
        "holes": int(get("holes", 0)),
        "external_frag": float(get("external_frag", 0.0)),
    }

def main():
    rows=[]
    for strategy, note in SCENARIOS:
        out = run(strategy)
        rows.append((note, parse(out)))

    header = ["strategy","rq_ok","rq_fail","rl_ok","compact","moved","used","LFE","holes","ext_frag"]
    print("="*96)
    print("Contiguous Allocator - Placement Strategy Benchmark (fragmentation stressor)")
    print("="*96)
    print("{:<10} {:>6} {:>8} {:>6} {:>8} {:>7} {:>6} {:>6} {:>6} {:>9}".format(*header))
    for note, m in rows:
        print("{:<10} {:>6} {:>8} {:>6} {:>8} {:>7} {:>6} {:>6} {:>6} {:>9.3f}".format(
            note, m["requests"], m["request_failures"], m["releases"], m["compactions"],
            m["bytes_moved"], m["used"], m["lfe"], m["holes"], m["external_frag"]
        ))
    print("="*96)
    print("Tip: replay the trace with --show-map for a visual memory-map demo.")
    print("  python run_allocator.py 1000 --script traces/fragmentation_stressor.txt --show-map")

if __name__ == "__main__":
    main()
