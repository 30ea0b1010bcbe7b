import numpy as np
import pytest
from scipy import signal

from convreverb.algorithm import convolution
from convreverb.algorithm.convolution import convolve, convolve_direct
from convreverb.algorithm.renormalize import CEILING
from convreverb.errors import EmptySequenceError

LENGTHS = [(1, 1), (1, 7), (7, 1), (5, 3), (16, 40), (64, 9)]


def _pair(n, m, seed):
    rng = np.random.default_rng(seed)
    return (rng.uniform(-1.0, 1.0, n).astype(np.float32),
            rng.uniform(-1.0, 1.0, m).astype(np.float32))


def test_small_known_result():
    y = convolve_direct([1.0, 0.5], [1.0, -1.0])
    assert y.dtype == np.float32
    np.testing.assert_allclose(y, [1.0, -0.5, -0.5])


@pytest.mark.parametrize("n,m", LENGTHS)
def test_output_length(n, m):
    x, h = _pair(n, m, seed=n * 100 + m)
    assert len(convolve_direct(x, h)) == n + m - 1
    assert len(convolve(x, h)[0]) == n + m - 1


@pytest.mark.parametrize("n,m", LENGTHS)
def test_commutative(n, m):
    x, h = _pair(n, m, seed=7 + n + m)
    np.testing.assert_allclose(convolve_direct(x, h), convolve_direct(h, x), atol=1e-5)


@pytest.mark.parametrize("n,m", LENGTHS)
def test_matches_scipy_direct(n, m):
    x, h = _pair(n, m, seed=42 + n)
    expected = signal.convolve(x.astype(np.float64), h.astype(np.float64), method="direct")
    np.testing.assert_allclose(convolve_direct(x, h), expected, atol=1e-5)


def test_unit_impulse_identity_without_renormalization(monkeypatch):
    monkeypatch.setattr(convolution, "renormalize", lambda y: (y, None))
    x, _ = _pair(25, 1, seed=3)
    y, _ = convolve(x, [1.0])
    np.testing.assert_array_equal(y, x)


def test_unit_impulse_identity_raw():
    x, _ = _pair(25, 1, seed=4)
    np.testing.assert_array_equal(convolve_direct(x, np.array([1.0], dtype=np.float32)), x)


def test_convolve_renormalizes():
    x, h = _pair(30, 12, seed=11)
    y, peak = convolve(x * 50, h)
    raw = convolve_direct(x * 50, h)
    assert peak == pytest.approx(float(np.max(np.abs(raw))))
    assert np.all(y >= -1.0)
    assert np.all(y.astype(np.float64) < CEILING)


def test_progress_is_reported_per_input_sample():
    x, h = _pair(8, 3, seed=5)
    seen = []
    y_observed = convolve_direct(x, h, on_progress=seen.append)
    assert seen == [(n + 1) / 8 for n in range(8)]
    np.testing.assert_array_equal(y_observed, convolve_direct(x, h))


@pytest.mark.parametrize("x,h", [([], [1.0]), ([1.0], []), ([], [])])
def test_empty_inputs(x, h):
    with pytest.raises(EmptySequenceError):
        convolve_direct(x, h)


def test_rejects_multichannel_arrays():
    with pytest.raises(ValueError):
        convolve_direct(np.zeros((4, 2)), [1.0])
