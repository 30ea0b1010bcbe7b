"""Byte-level WAV builders shared by the test modules."""
import struct

import numpy as np
import pytest


def make_wav_bytes(samples, sample_rate=44100, channels=1, bits=16, fmt_code=1,
                   fmt_extra=b"", chunks=(), data_size=None):
    """
    Build a RIFF/WAVE file in memory.

    fmt_extra is appended to the 16-byte 'fmt ' body (fmt size grows with it);
    chunks is a sequence of (tag, body) pairs placed between 'fmt ' and 'data'.
    """
    data = np.asarray(samples, dtype="<i2").tobytes()
    block_align = channels * bits // 8
    fmt_body = struct.pack("<HHIIHH", fmt_code, channels, sample_rate,
                           sample_rate * block_align, block_align, bits) + fmt_extra
    middle = b"".join(tag + struct.pack("<I", len(body)) + body for tag, body in chunks)
    declared = len(data) if data_size is None else data_size
    body = (b"WAVE" + b"fmt " + struct.pack("<I", len(fmt_body)) + fmt_body
            + middle + b"data" + struct.pack("<I", declared) + data)
    return b"RIFF" + struct.pack("<I", len(body)) + body


LIST_CHUNK = (b"LIST", b"INFOISFT\x0e\x00\x00\x00Lavf58.76.100\x00")


@pytest.fixture
def wav_file(tmp_path):
    """Factory: wav_file(name, samples, **kw) -> path of a written WAV."""
    def _make(name, samples, **kw):
        path = tmp_path / name
        path.write_bytes(make_wav_bytes(samples, **kw))
        return str(path)
    return _make
