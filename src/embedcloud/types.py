import numpy as np
import pandas as pd
from typing import Tuple, Optional, Dict, List, TypedDict, Literal
from dataclasses import dataclass, field

# Config with default values
# builder/parser use these values unless other values are provided by the caller
#################### Configs ####################
Role = Literal["x", "y", "z", "id", "label", "cluster"]

# header names (lowercase, alphanumerics only) recognised for each column role
ROLE_CANDIDATES: Dict[Role, Tuple[str, ...]] = {
    "x": ("x", "xcoord", "dim1", "d1", "pc1", "pca1", "umap1", "tsne1"),
    "y": ("y", "ycoord", "dim2", "d2", "pc2", "pca2", "umap2", "tsne2"),
    "z": ("z", "zcoord", "dim3", "d3", "pc3", "pca3", "umap3", "tsne3"),
    "id": ("id", "uid", "uuid", "index"),
    "label": ("label", "name", "title", "text"),
    "cluster": ("cluster", "group", "class", "category", "type"),
}

@dataclass
class CfgSynth:
    # fixed seed => the generated csv is a stable fixture
    seed: int = 42
    # std-dev of the gaussian jitter around each center
    jitter: float = 0.22
    # every coordinate is clamped into [lo, hi]
    bounds: Tuple[float, float] = (-1.0, 1.0)
    decimals: int = 4
    # point i goes to centers[i % len(centers)]
    centers: Tuple[Tuple[float, float, float], ...] = (
        (-0.7, -0.2, 0.2),
        (0.65, -0.15, -0.2),
        (0.1, 0.6, 0.5),
        (-0.2, 0.1, -0.6),
    )
    header: Tuple[str, ...] = ("id", "x", "y", "z", "cluster")

@dataclass
class CfgParse:
    role_candidates: Dict[Role, Tuple[str, ...]] = field(default_factory=lambda: dict(ROLE_CANDIDATES))
    # radius = radius_base + (ordinal % radius_cycle) * radius_step
    radius_base: float = 2.0
    radius_step: float = 0.35
    radius_cycle: int = 8

# ############################ Public Types ############################
@dataclass(frozen=True)
class Point:
    id: str
    x: float
    y: float
    z: float
    cluster: int
    radius: float
    label: Optional[str] = None

@dataclass(frozen=True)
class ColumnRoles:
    """Column index per role, -1 when the header has no matching column."""
    x: int = -1
    y: int = -1
    z: int = -1
    id: int = -1
    label: int = -1
    cluster: int = -1

    def has_xyz(self) -> bool:
        return self.x >= 0 and self.y >= 0 and self.z >= 0

class RunResult(TypedDict):
    points: List[Point]
    positions: np.ndarray   # (N,3) float64
    colors: np.ndarray      # (N,3) float32 rgb in [0,1]
    frame: pd.DataFrame     # columns: id, label, x, y, z, cluster, radius
    meta: dict              # source, n_points, n_clusters
