# convreverb/cr_io/wav.py
"""
Minimal RIFF/WAVE reader for 16-bit mono PCM; output goes through scipy.io.wavfile.

Layout read here: a fixed 36-byte leading block (RIFF header + 'fmt '
sub-block), optional extra 'fmt ' bytes when the sub-block declares more than
16, then any number of bytes (typically a LIST metadata chunk) before the
'data' tag, its 4-byte length and the samples.

Known limitation: the 'data' tag is found by a byte-level scan, so metadata
whose payload happens to contain the bytes b"data" before the real data chunk
is taken for the data chunk.
"""
import os
import struct
import tempfile
from dataclasses import dataclass, replace

import numpy as np
from scipy.io import wavfile

from ..errors import MalformedContainerError, UnsupportedFormatError
from .tagscan import DATA_TAG, TagScanner

LEADING_FMT = "<4sI4s4sIHHIIHH"
LEADING_SIZE = struct.calcsize(LEADING_FMT)          # 36
HEADER_SIZE = LEADING_SIZE + 8                       # 44, with the data tag and length
BASE_FMT_SIZE = 16

PCM_FORMAT = 1
SUPPORTED_CHANNELS = 1
SUPPORTED_BITS = 16


@dataclass(frozen=True)
class ContainerHeader:
    riff_tag: bytes
    riff_size: int
    wave_tag: bytes
    fmt_tag: bytes
    fmt_size: int
    format_code: int
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_tag: bytes = DATA_TAG
    data_size: int = 0

    @property
    def bytes_per_sample(self):
        return self.bits_per_sample // 8

    @property
    def num_samples(self):
        return self.data_size // self.bytes_per_sample


def _read_exact(stream, n, what):
    buf = stream.read(n)
    if len(buf) != n:
        raise MalformedContainerError(
            f"unexpected end of stream while reading {what} ({len(buf)} of {n} bytes)")
    return buf


def _skip(stream, n, what):
    pos = stream.tell()
    end = stream.seek(0, os.SEEK_END)
    if pos + n > end:
        raise MalformedContainerError(
            f"unexpected end of stream while skipping {what} ({end - pos} of {n} bytes)")
    stream.seek(pos + n)


def read_header(stream):
    """Parse the fixed 36-byte leading block. data_tag/data_size are left unset."""
    fields = struct.unpack(LEADING_FMT, _read_exact(stream, LEADING_SIZE, "leading block"))
    header = ContainerHeader(*fields)
    if header.riff_tag != b"RIFF" or header.wave_tag != b"WAVE":
        raise MalformedContainerError(
            f"not a RIFF/WAVE container (tags {header.riff_tag!r}/{header.wave_tag!r})")
    if header.fmt_tag != b"fmt ":
        raise MalformedContainerError(f"expected 'fmt ' sub-block, found {header.fmt_tag!r}")
    if header.fmt_size < BASE_FMT_SIZE:
        raise MalformedContainerError(f"'fmt ' sub-block too short ({header.fmt_size} bytes)")
    return header


def scan_for_tag(stream, tag=DATA_TAG, max_scan_bytes=None):
    """
    Read byte by byte until `tag` has been seen. Leaves the stream right after
    the tag and returns the number of bytes consumed (tag included).
    """
    scanner = TagScanner(tag)
    while True:
        if max_scan_bytes is not None and scanner.consumed >= max_scan_bytes:
            raise MalformedContainerError(
                f"{tag!r} tag not found within {max_scan_bytes} bytes")
        b = stream.read(1)
        if not b:
            raise MalformedContainerError(
                f"reached end of stream before a {tag!r} chunk tag")
        if scanner.feed(b[0]):
            return scanner.consumed


def locate_data_chunk(stream, max_scan_bytes=None):
    """
    Parse the leading block, skip extra 'fmt ' bytes and any interposed chunks,
    and stop on the first sample byte.

    Parameters:
    -----------
    stream : binary stream positioned at the start of the container
    max_scan_bytes : optional bound on the tag scan; None scans to end of stream

    Returns (data_size, header) where header.data_size == data_size.
    """
    header = read_header(stream)
    extra = header.fmt_size - BASE_FMT_SIZE
    if extra:
        _skip(stream, extra, "extended 'fmt ' bytes")
    scan_for_tag(stream, DATA_TAG, max_scan_bytes=max_scan_bytes)
    (data_size,) = struct.unpack("<I", _read_exact(stream, 4, "data chunk length"))
    return data_size, replace(header, data_tag=DATA_TAG, data_size=data_size)


def check_format(header, name="input"):
    if header.format_code != PCM_FORMAT:
        raise UnsupportedFormatError(
            f"{name}: format code {header.format_code} is not integer PCM ({PCM_FORMAT})")
    if header.num_channels != SUPPORTED_CHANNELS:
        raise UnsupportedFormatError(
            f"{name}: {header.num_channels} channels, only mono is supported")
    if header.bits_per_sample != SUPPORTED_BITS:
        raise UnsupportedFormatError(
            f"{name}: {header.bits_per_sample}-bit samples, only {SUPPORTED_BITS}-bit is supported")


def read_samples(stream, data_size, sample_width=2):
    if data_size % sample_width:
        raise MalformedContainerError(
            f"data chunk length {data_size} is not a multiple of the {sample_width}-byte sample width")
    raw = _read_exact(stream, data_size, "sample data")
    return np.frombuffer(raw, dtype="<i2").astype(np.int16)


def read_wav_mono(path, max_scan_bytes=None):
    """Read a 16-bit mono WAV file -> (ContainerHeader, int16 samples)."""
    name = os.path.basename(path)
    with open(path, "rb") as f:
        data_size, header = locate_data_chunk(f, max_scan_bytes=max_scan_bytes)
        check_format(header, name)
        x = read_samples(f, data_size, header.bytes_per_sample)
    return header, x


def build_output_header(template, num_samples):
    # no metadata is carried over, so the fmt sub-block is back to 16 bytes
    data_size = num_samples * template.bytes_per_sample
    return replace(
        template,
        fmt_size=BASE_FMT_SIZE,
        data_tag=DATA_TAG,
        data_size=data_size,
        riff_size=LEADING_SIZE + data_size,
    )


def write_container(stream, template, samples):
    samples = np.asarray(samples, dtype=np.int16)
    header = build_output_header(template, len(samples))
    wavfile.write(stream, template.sample_rate, samples)
    return header


def _default_mode():
    # what open(path, "wb") would have produced under the current umask
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_wav(path, template, samples):
    """
    Write the container to `path` via a temporary sibling file so a failure
    never leaves a truncated output behind.
    """
    out_dir = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(prefix=".convreverb-", suffix=".wav", dir=out_dir)
    try:
        with os.fdopen(fd, "wb") as f:
            header = write_container(f, template, samples)
        os.chmod(tmp_path, _default_mode())
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise
    return header
