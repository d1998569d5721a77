import math
import re

# leading decimal literal, e.g. "1.5kg" -> "1.5", ".5" -> ".5", "-2e3x" -> "-2e3"
_FLOAT_PREFIX = re.compile(r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")
_INT_PREFIX = re.compile(r"[+-]?[0-9]+")

def clamp(value: float, lo: float, hi: float) -> float:
    return min(max(value, lo), hi)

def read_float(cell: str) -> float:
    """Read the leading number of a cell; NaN when there is none."""
    m = _FLOAT_PREFIX.match(cell.strip())
    if m is None:
        return math.nan
    return float(m.group(0).replace("Infinity", "inf"))

def read_int(cell: str):
    """Read the leading integer of a cell; None when there is none."""
    m = _INT_PREFIX.match(cell.strip())
    return int(m.group(0)) if m else None
