"""
# embedcloud

**embedcloud** turns loosely-structured CSV/TSV tables (embedding exports, PCA/UMAP/t-SNE outputs, ...)
into normalized, labeled 3D points with integer cluster ids, and generates reproducible clustered
point sets for fixtures and default datasets.
"""

__version__ = "0.1.0"

# ---- Public configs & types ----
from .types import (
    CfgSynth, CfgParse,
    Point, ColumnRoles, Role, RunResult, ROLE_CANDIDATES,
)

# ---- Core ----
from .seeded_rng import mulberry32, random_normal
from .numeric import clamp
from .synthetic import build_synthetic_csv
from .table_parse import parse_table, resolve_roles

# ---- Main entrypoint ----
from .main_run import run

# ---- IO / data interop ----
from .io_load import load_points, points_to_array, points_to_frame

# ---- Data export (user-facing) ----
from .export_data_for_three import (
    export_all, cluster_colors, format_tooltip, PALETTE,
)

__all__ = [
    "__version__",
    # main
    "run",
    # configs / types
    "CfgSynth", "CfgParse",
    "Point", "ColumnRoles", "Role", "RunResult", "ROLE_CANDIDATES",
    # core
    "mulberry32", "random_normal", "clamp",
    "build_synthetic_csv", "parse_table", "resolve_roles",
    # io
    "load_points", "points_to_array", "points_to_frame",
    # exporters
    "export_all", "cluster_colors", "format_tooltip", "PALETTE",
]
