import numpy as np

def sample_stats(y):
    """Highest, lowest and mean sample of a buffer (zeros for an empty one)."""
    y = np.asarray(y)
    if y.size == 0:
        return {'count': 0, 'highest': 0, 'lowest': 0, 'mean': 0.0}
    return {
        'count': int(y.size),
        'highest': y.max().item(),
        'lowest': y.min().item(),
        'mean': float(np.mean(y, dtype=np.float64)),
    }

def count_outside_unit_range(y):
    y = np.asarray(y)
    return int(np.count_nonzero((y > 1.0) | (y < -1.0)))
