import math
from typing import Callable

##################### Seeded uniform source #####################
_MASK32 = 0xFFFFFFFF

def _imul(a: int, b: int) -> int:
    # 32-bit wrapping multiply
    return (a * b) & _MASK32

def mulberry32(seed: int) -> Callable[[], float]:
    """
    Small non-cryptographic PRNG over a 32-bit state.
    Returns a draw function producing floats in [0, 1); two generators made
    from the same seed yield identical sequences.
    """
    state = int(seed) & _MASK32

    def draw() -> float:
        nonlocal state
        state = (state + 0x6D2B79F5) & _MASK32
        t = state
        r = _imul(t ^ (t >> 15), 1 | t)
        r ^= (r + _imul(r ^ (r >> 7), 61 | r)) & _MASK32
        return ((r ^ (r >> 14)) & _MASK32) / 4294967296.0

    return draw

##################### Normal samples #####################
def _nonzero(rng: Callable[[], float], max_draws: int) -> float:
    # log(0) is undefined, so exact zeros are redrawn
    for _ in range(max_draws):
        u = rng()
        if u != 0.0:
            return u
    raise RuntimeError(f"uniform source returned 0.0 for {max_draws} consecutive draws")

def random_normal(rng: Callable[[], float], max_draws: int = 1000) -> float:
    """Box-Muller: two uniform draws -> one approximately standard-normal sample."""
    u = _nonzero(rng, max_draws)
    v = _nonzero(rng, max_draws)
    return math.sqrt(-2.0 * math.log(u)) * math.cos(2.0 * math.pi * v)
