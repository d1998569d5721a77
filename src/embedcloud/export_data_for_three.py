import os
import json
from pathlib import Path
from typing import Dict, List, Sequence, Any
import numpy as np

from .types import Point
from .io_load import points_to_array

##################### PURE-DATA EXPORTERS (THREE) #####################
# points3d.json (positions, colors, radius, ids, labels, clusters, tooltips)
# scales.json (bbox)
# meta_data.json
# + progress reporting + manifest

# cluster colour = PALETTE[cluster % len(PALETTE)]
PALETTE = ("#f5f5f5", "#bdbdbd", "#707070")

################# Helpers #################

def _ensure_dir(p: str):
    Path(p).mkdir(parents=True, exist_ok=True)


def _write_json(path: str, obj) -> str:
    """Write JSON and return the path (for manifest)."""
    with open(path, "w") as f:
        json.dump(obj, f, separators=(",", ":"), allow_nan=False, indent=2)
    return path


def _notify(progress_report: bool, event: str, **payload):
    if progress_report:
        msg = f"[export] {event}"
        if payload:
            msg += ": " + ", ".join(f"{k}={v}" for k, v in payload.items())
        print(msg)


def _hex_to_rgb(hex_color: str) -> tuple:
    h = hex_color.lstrip("#")
    return tuple(int(h[i:i + 2], 16) / 255.0 for i in (0, 2, 4))


def cluster_colors(points: Sequence[Point]) -> np.ndarray:
    """(N,3) float32 rgb in [0,1], one palette entry per cluster id (cycled)."""
    rgb = np.array([_hex_to_rgb(c) for c in PALETTE], dtype=np.float32)
    clusters = np.array([p.cluster for p in points], dtype=np.int64)
    if clusters.size == 0:
        return np.zeros((0, 3), dtype=np.float32)
    return rgb[np.mod(clusters, len(PALETTE))]


def format_tooltip(point: Point) -> str:
    return f"id {point.id} | x {point.x:.2f} y {point.y:.2f} z {point.z:.2f}"

################# Core #################

def export_meta(points: Sequence[Point], out_dir: str, *, progress_report: bool = False) -> List[str]:
    """
    meta_data.json:
      {"count": 180, "clusters": [0,1,2,3], "has_labels": false}
    """
    _ensure_dir(out_dir)
    meta = dict(
        count=len(points),
        clusters=sorted({int(p.cluster) for p in points}),
        has_labels=any(p.label is not None for p in points),
    )
    path = _write_json(os.path.join(out_dir, "meta_data.json"), meta)
    _notify(progress_report, "write", kind="meta", path=path)
    return [path]


def export_points3d_json(points: Sequence[Point], out_dir: str, *, progress_report: bool = False) -> List[str]:
    """
    points3d.json, parallel arrays in output order:
      {"positions": [[x,y,z], ...], "colors": [[r,g,b], ...], "radius": [...],
       "ids": [...], "labels": [... or null], "clusters": [...], "tooltips": [...]}
    """
    _ensure_dir(out_dir)
    payload = {
        "positions": points_to_array(points).tolist(),
        "colors": cluster_colors(points).astype(float).tolist(),
        "radius": [float(p.radius) for p in points],
        "ids": [p.id for p in points],
        "labels": [p.label for p in points],
        "clusters": [int(p.cluster) for p in points],
        "tooltips": [format_tooltip(p) for p in points],
    }
    path = _write_json(os.path.join(out_dir, "points3d.json"), payload)
    _notify(progress_report, "write", kind="points3d", path=path, count=len(points))
    return [path]


def export_scales_json(points: Sequence[Point], out_dir: str, *, progress_report: bool = False) -> List[str]:
    """
    scales.json: bounding box across all points.
    """
    _ensure_dir(out_dir)
    if not points:
        path = _write_json(os.path.join(out_dir, "scales.json"), {"bbox": {"mins": [0, 0, 0], "maxs": [0, 0, 0]}})
        _notify(progress_report, "write", kind="scales", path=path)
        return [path]
    P = points_to_array(points)
    mins = P.min(axis=0).astype(float).tolist()
    maxs = P.max(axis=0).astype(float).tolist()
    path = _write_json(os.path.join(out_dir, "scales.json"), {"bbox": {"mins": mins, "maxs": maxs}})
    _notify(progress_report, "write", kind="scales", path=path, mins=mins, maxs=maxs)
    return [path]


def export_all(
    points: Sequence[Point],
    out_dir: str = "web_data",
    *,
    export_scales: bool = True,
    progress_report: bool = False,
) -> Dict[str, Any]:
    """
    Produces the pure-data bundle for a Three.js point cloud and writes manifest.json:
      - meta_data.json
      - points3d.json
      - (opt) scales.json
    Returns the manifest.
    """
    _ensure_dir(out_dir)
    _notify(progress_report, "begin", out_dir=out_dir)

    manifest: Dict[str, Any] = {"root": out_dir, "written": {}}

    def rec(name: str, paths: List[str]):
        manifest["written"].setdefault(name, []).extend(paths)

    rec("meta", export_meta(points, out_dir, progress_report=progress_report))
    rec("points3d", export_points3d_json(points, out_dir, progress_report=progress_report))
    if export_scales:
        rec("scales", export_scales_json(points, out_dir, progress_report=progress_report))

    # Flat summary
    all_paths = [p for group in manifest["written"].values() for p in group]
    manifest["summary"] = {
        "files": len(all_paths),
        "bytes": int(sum(os.path.getsize(p) for p in all_paths if os.path.exists(p))),
    }

    mpath = _write_json(os.path.join(out_dir, "manifest.json"), manifest)
    _notify(progress_report, "write", kind="manifest", path=mpath)

    _notify(progress_report, "done", files=manifest["summary"]["files"], bytes=manifest["summary"]["bytes"])
    return manifest
