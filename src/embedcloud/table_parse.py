import re
import math
from typing import Dict, List, Optional, Sequence, Tuple

from .types import CfgParse, ColumnRoles, Point
from .numeric import read_float, read_int

#################### Tabular text -> points ####################
# Accepts CSV/TSV of unknown layout (embedding exports, PCA/UMAP/t-SNE outputs, ...).
# Quoted fields are not supported: a cell containing the delimiter is split.

_LINE_SPLIT = re.compile(r"\r?\n")
_HAS_LETTER = re.compile(r"[a-zA-Z]")
_NOT_ALNUM = re.compile(r"[^a-z0-9]")


def _notify(progress_report: bool, event: str, **payload):
    if progress_report:
        msg = f"[parse] {event}"
        if payload:
            msg += ": " + ", ".join(f"{k}={v}" for k, v in payload.items())
        print(msg)


def detect_delimiter(line: str) -> str:
    # tab only when tabs strictly outnumber commas
    return "\t" if line.count("\t") > line.count(",") else ","


def normalize_header(header: str) -> str:
    return _NOT_ALNUM.sub("", header.lower())


def has_header(fields: Sequence[str]) -> bool:
    return any(_HAS_LETTER.search(f) for f in fields)


def resolve_roles(headers: Sequence[str], cfg: Optional[CfgParse] = None) -> ColumnRoles:
    """
    Map each role to the first header column whose normalized name is one of its candidates.
    Roles without a match stay at -1.
    """
    cfg = cfg or CfgParse()
    normalized = [normalize_header(h) for h in headers]
    found: Dict[str, int] = {}
    for role, candidates in cfg.role_candidates.items():
        found[role] = next((i for i, h in enumerate(normalized) if h in candidates), -1)
    return ColumnRoles(**found)


def _cell(columns: Sequence[str], idx: int) -> str:
    return columns[idx] if 0 <= idx < len(columns) else ""


def _read_xyz(columns: Sequence[str], roles: ColumnRoles) -> Tuple[float, float, float]:
    x = y = z = math.nan
    if roles.has_xyz():
        x, y, z = (read_float(_cell(columns, i)) for i in (roles.x, roles.y, roles.z))
        if all(math.isfinite(v) for v in (x, y, z)):
            return x, y, z
    # fallback scan: first three finite numbers, left to right, ignoring the roles
    numeric = [v for v in map(read_float, columns) if math.isfinite(v)]
    if len(numeric) >= 3:
        return numeric[0], numeric[1], numeric[2]
    return x, y, z


def resolve_cluster(value: str, cluster_map: Dict[str, int]) -> int:
    """
    "" -> 0; leading integer -> that integer; anything else gets the next id
    in first-seen order from `cluster_map` (which is updated in place).
    """
    if not value:
        return 0
    numeric = read_int(value)
    if numeric is not None:
        return numeric
    key = value.strip()
    if not key:
        return 0
    if key not in cluster_map:
        cluster_map[key] = len(cluster_map)
    return cluster_map[key]


def parse_table(text: str, cfg: Optional[CfgParse] = None, *, progress_report: bool = False) -> List[Point]:
    """
    Parse delimited text into points, in row order.

    - delimiter: tab if the first line has more tabs than commas, else comma
    - header: first line counts as a header if any field contains a letter;
      header names then resolve the x/y/z/id/label/cluster columns
    - rows whose x/y/z cannot be read (by role, or by scanning for the first
      three numbers) are skipped; blank rows are ignored
    - id falls back to the point's output ordinal; radius cycles with it

    Returns [] for empty or single-line input. Never raises on malformed rows.
    """
    cfg = cfg or CfgParse()
    # a leading byte-order mark counts as whitespace
    lines = _LINE_SPLIT.split(text.lstrip("\ufeff").strip())
    if len(lines) <= 1:
        return []

    delimiter = detect_delimiter(lines[0])
    header_fields = [f.strip() for f in lines[0].split(delimiter)]
    header = has_header(header_fields)
    roles = resolve_roles(header_fields, cfg) if header else ColumnRoles()
    # per-call, never shared between parses
    cluster_map: Dict[str, int] = {}

    points: List[Point] = []
    skipped = 0
    for row_idx in range(1 if header else 0, len(lines)):
        line = lines[row_idx].strip()
        if not line:
            continue
        columns = [c.strip() for c in line.split(delimiter)]

        x, y, z = _read_xyz(columns, roles)
        if not all(math.isfinite(v) for v in (x, y, z)):
            skipped += 1
            _notify(progress_report, "skip", row=row_idx, reason="no-xyz")
            continue

        n = len(points)
        raw_id = _cell(columns, roles.id)
        label = _cell(columns, roles.label)
        points.append(Point(
            id=raw_id or str(n),
            x=x, y=y, z=z,
            cluster=resolve_cluster(_cell(columns, roles.cluster), cluster_map),
            radius=cfg.radius_base + (n % cfg.radius_cycle) * cfg.radius_step,
            label=label or None,
        ))

    _notify(progress_report, "done", points=len(points), skipped=skipped, delimiter=repr(delimiter))
    return points
