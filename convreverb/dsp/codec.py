# convreverb/dsp/codec.py
###
# Conversion between 16-bit integer samples and float32 samples in [-1.0, 1.0)
# to_float: s / 32768.0
# to_int:   truncate(y * 32768.0) toward zero, as a plain float->int16 narrowing does
#
# Not an exact inverse near the range ends: to_int(1.0) would be 32768, which
# does not fit in int16. Callers must keep floats strictly below 1.0
# (see algorithm.renormalize).
import numpy as np

FULL_SCALE = 32768.0

def to_float(samples):
    x = np.asarray(samples, dtype=np.int16)
    return x.astype(np.float32) / np.float32(FULL_SCALE)

def to_int(samples):
    y = np.asarray(samples, dtype=np.float32)
    return np.trunc(y * np.float32(FULL_SCALE)).astype(np.int16)
