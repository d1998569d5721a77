import numpy as np
import pandas as pd
from pathlib import Path
from typing import List, Optional, Sequence

from .types import CfgParse, Point
from .table_parse import parse_table

FRAME_COLUMNS = ["id", "label", "x", "y", "z", "cluster", "radius"]

###################### IO ######################
def load_points(path, cfg: Optional[CfgParse] = None, *, encoding: str = "utf-8-sig",
                progress_report: bool = False) -> List[Point]:
    """
    Read a whole CSV/TSV file and parse it into points (see `parse_table`).
    """
    text = Path(path).read_text(encoding=encoding)
    return parse_table(text, cfg, progress_report=progress_report)


def points_to_array(points: Sequence[Point]) -> np.ndarray:
    """(N,3) float64 positions in output order."""
    if not points:
        return np.zeros((0, 3), dtype=np.float64)
    return np.array([(p.x, p.y, p.z) for p in points], dtype=np.float64)


def points_to_frame(points: Sequence[Point]) -> pd.DataFrame:
    rows = [dict(id=p.id, label=p.label, x=p.x, y=p.y, z=p.z, cluster=p.cluster, radius=p.radius)
            for p in points]
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)
