# convreverb/algorithm/renormalize.py
import numpy as np
from ..errors import EmptySequenceError

EPS = 1e-6
CEILING = 0.999999

def renormalize(y):
    """
    Scale y so its largest-magnitude sample lands just inside [-1.0, 1.0).

    When the peak is a positive sample the divisor is (peak + EPS), so that
    sample ends below 1.0; otherwise the divisor is |min| and the most negative
    sample maps to exactly -1.0. Anything still >= CEILING after the division
    (float32 can round peak/(peak+EPS) back up to 1.0) is pulled down by EPS.
    This keeps every sample strictly below the point where to_int would hit
    32768 and wrap to -32768.

    Returns (scaled float32 array, peak magnitude of the input).
    """
    y = np.asarray(y, dtype=np.float32)
    if y.size == 0:
        raise EmptySequenceError("cannot renormalize a sequence with no samples")

    highest = float(np.max(y))
    lowest = float(np.min(y))
    peak = max(highest, abs(lowest))
    scale = highest + EPS if highest > abs(lowest) else abs(lowest)
    if scale == 0.0:
        # silence: nothing to scale
        return y.copy(), 0.0

    out = y / np.float32(scale)
    out[out >= np.float32(CEILING)] -= np.float32(EPS)
    return out, peak
