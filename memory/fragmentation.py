from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence
import math

from memory.allocator import Block

@dataclass
class FragMetrics:
    total_free: int
    lfe: int
    external_frag: float
    entropy: float
    hole_count: int

def _entropy(hole_sizes: List[int]) -> float:
    """Shannon entropy (bits) of how free space is spread across holes."""
    total = sum(hole_sizes)
    if total <= 0:
        return 0.0
    return max(0.0, -sum((s/total)*math.log(s/total + 1e-12, 2) for s in hole_sizes))

def compute_metrics(blocks: Sequence[Block]) -> FragMetrics:
    holes=[b.size for b in blocks if b.is_free]
    total_free=sum(holes)
    lfe=max(holes, default=0)
    external = 0.0 if total_free==0 else 1.0 - lfe/total_free
    return FragMetrics(total_free, lfe, external, _entropy(holes), len(holes))
