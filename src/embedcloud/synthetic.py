from typing import Optional

from .types import CfgSynth
from .seeded_rng import mulberry32, random_normal
from .numeric import clamp

#################### Synthetic clustered points ####################
def build_synthetic_csv(count: int, cfg: Optional[CfgSynth] = None) -> str:
    """
    Generate `count` points around the configured cluster centers as CSV text:
        id,x,y,z,cluster
        0,-0.6412,-0.1287,0.3101,0
        ...
    Point i belongs to cluster i % len(centers); each axis gets center + N(0,1) * jitter,
    clamped to cfg.bounds. A fresh generator is seeded from cfg.seed on every call,
    so the same (count, cfg) always gives byte-identical output.
    """
    cfg = cfg or CfgSynth()
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    lo, hi = cfg.bounds
    if lo > hi:
        raise ValueError(f"bounds must satisfy lo <= hi, got {cfg.bounds}")
    if not cfg.centers:
        raise ValueError("cfg.centers must contain at least one center")

    rng = mulberry32(cfg.seed)
    rows = [",".join(cfg.header)]
    for i in range(count):
        cluster = i % len(cfg.centers)
        center = cfg.centers[cluster]
        # x, y, z drawn in order; the draw sequence is part of the fixture
        coords = [clamp(c + random_normal(rng) * cfg.jitter, lo, hi) for c in center]
        rows.append(f"{i}," + ",".join(f"{v:.{cfg.decimals}f}" for v in coords) + f",{cluster}")
    return "\n".join(rows)
