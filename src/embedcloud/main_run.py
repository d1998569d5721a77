from typing import Optional

from .types import CfgSynth, CfgParse, RunResult
from .synthetic import build_synthetic_csv
from .table_parse import parse_table
from .io_load import load_points, points_to_array, points_to_frame
from .export_data_for_three import cluster_colors, export_all


def _notify(progress_report: bool, event: str, **payload):
    if progress_report:
        msg = f"[run] {event}"
        if payload:
            msg += ": " + ", ".join(f"{k}={v}" for k, v in payload.items())
        print(msg)


# main function: text / file / synthetic default -> points (+ arrays, frame, optional export)
def run(text: Optional[str] = None,
        *,
        path: Optional[str] = None,
        count: int = 180,
        cfg_synth: Optional[CfgSynth] = None,
        cfg_parse: Optional[CfgParse] = None,
        out_dir: Optional[str] = None,
        progress_report: bool = False) -> RunResult:
    """
    Entrypoint: parse `text`, or the file at `path`, or (neither given) the
    synthetic default dataset of `count` points.

    Returns a dict with:
      - points: List[Point]           # parser output, in order
      - positions: np.ndarray         # (N,3) float64
      - colors: np.ndarray            # (N,3) float32 palette colours by cluster
      - frame: pd.DataFrame           # one row per point
      - meta: dict                    # source, n_points, n_clusters
    If `out_dir` is given, the Three.js data bundle is written there as well.
    """
    if text is not None and path is not None:
        raise ValueError("pass either text or path, not both")

    if text is not None:
        source = "text"
        _notify(progress_report, "source", kind=source, chars=len(text))
        points = parse_table(text, cfg_parse, progress_report=progress_report)
    elif path is not None:
        source = "file"
        _notify(progress_report, "source", kind=source, path=path)
        points = load_points(path, cfg_parse, progress_report=progress_report)
    else:
        source = "synthetic"
        _notify(progress_report, "source", kind=source, count=count)
        points = parse_table(build_synthetic_csv(count, cfg_synth), cfg_parse, progress_report=progress_report)
    _notify(progress_report, "parsed", points=len(points))

    meta = dict(
        source=source,
        n_points=len(points),
        n_clusters=len({p.cluster for p in points}),
    )
    if out_dir is not None:
        export_all(points, out_dir, progress_report=progress_report)

    return RunResult(
        points=points,
        positions=points_to_array(points),
        colors=cluster_colors(points),
        frame=points_to_frame(points),
        meta=meta,
    )
