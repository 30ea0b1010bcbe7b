# convreverb/algorithm/convolution.py
import numpy as np
from ..errors import EmptySequenceError
from .renormalize import renormalize

def _as_signal(v, name):
    v = np.asarray(v, dtype=np.float32)
    if v.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {v.shape}")
    if v.size == 0:
        raise EmptySequenceError(f"{name} has no samples")
    return v

def convolve_direct(x, h, on_progress=None):
    """
    Input-side time-domain convolution: y[n+m] += x[n]*h[m] for all n, m.

    O(N*M) on purpose, no FFT. The m-loop is a vectorized slice add; the
    n-loop stays explicit so progress can be observed after each input sample.

    Parameters:
    -----------
    x : input signal, length N (float)
    h : impulse response, length M (float)
    on_progress : optional callable(fraction) called after each n with (n+1)/N;
                  it only observes, y is not touched

    Returns float32 array of length N + M - 1 (not renormalized).
    """
    x = _as_signal(x, "input signal")
    h = _as_signal(h, "impulse response")
    N, M = len(x), len(h)

    y = np.zeros(N + M - 1, dtype=np.float32)
    for n in range(N):
        y[n:n + M] += x[n] * h
        if on_progress is not None:
            on_progress((n + 1) / N)
    return y

def convolve(x, h, on_progress=None):
    """convolve_direct followed by renormalize -> (y in [-1, 1), peak of raw y)."""
    return renormalize(convolve_direct(x, h, on_progress=on_progress))
