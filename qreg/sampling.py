# qreg/sampling.py
import numpy as np

# Weight per basis amplitude used when sampling outcomes.
#   "magnitude": |a|    (default; masses do not sum to 1 in general)
#   "born":      |a|^2  (standard Born rule)
MAGNITUDE = "magnitude"
BORN = "born"
RULES = (MAGNITUDE, BORN)

def check_rule(rule: str):
    if rule not in RULES:
        raise ValueError(f"Unknown measurement rule {rule!r}; expected one of {RULES}")

def weights(amps: np.ndarray, rule: str = MAGNITUDE) -> np.ndarray:
    check_rule(rule)
    w = np.abs(amps).astype(np.float64)
    return w * w if rule == BORN else w

def draw(rng=None) -> float:
    """Uniform sample in [0, 1) from an injected numpy Generator."""
    if rng is None:
        rng = np.random.default_rng()
    return float(rng.random())

def sample_index(w: np.ndarray, u: float) -> int:
    """
    First index whose running mass reaches u, skipping zero-weight entries.
    Falls back to the last non-zero entry when rounding leaves the total
    mass short of u.
    """
    mass = 0.0
    last = -1
    for i in range(w.shape[0]):
        if w[i] == 0.0:
            continue
        mass += w[i]
        last = i
        if mass >= u:
            return i
    if last < 0:
        raise ValueError("cannot sample from an all-zero state")
    return last
