# convreverb/pipeline.py
"""
read -> to_float -> convolve_direct -> renormalize -> to_int -> write

Each buffer is dropped as soon as the next stage has consumed it. Nothing is
written until the final int16 samples exist, and the write itself goes
through a temporary file, so a failing run leaves no output behind.
"""
import os
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from convreverb.cr_io.wav import read_wav_mono, write_wav
from convreverb.dsp.codec import to_float, to_int
from convreverb.algorithm.convolution import convolve_direct
from convreverb.algorithm.renormalize import renormalize
from convreverb.output.report import (
    ProgressPrinter, report_int_samples, report_float_samples, report_mean,
)

@dataclass
class ReverbConfig:
    show_debug_output: bool = True
    show_progress: bool = True
    stream: Optional[TextIO] = None   # diagnostics; None -> sys.stderr

    def out(self):
        return self.stream if self.stream is not None else sys.stderr

def apply_reverb(sample_path, impulse_path, output_path, config=None):
    """Convolve sample_path with impulse_path and write the result to output_path."""
    config = config or ReverbConfig()
    out = config.out()
    debug = config.show_debug_output

    header, x_int = read_wav_mono(sample_path)
    header_h, h_int = read_wav_mono(impulse_path)
    if header_h.sample_rate != header.sample_rate:
        print(f"WARNING: impulse response is {header_h.sample_rate} Hz, input is "
              f"{header.sample_rate} Hz; output keeps {header.sample_rate} Hz",
              file=out, flush=True)

    if debug:
        report_int_samples(x_int, "audio file", out)
        report_int_samples(h_int, "impulse response", out)

    x = to_float(x_int)
    h = to_float(h_int)
    del x_int, h_int

    progress = None
    if config.show_progress:
        progress = ProgressPrinter(out)
        progress.start()
    y_raw = convolve_direct(x, h, on_progress=progress)
    if progress is not None:
        progress.finish()
    del x, h

    if debug:
        report_float_samples(y_raw, "BEFORE scaling", out)
    y, peak = renormalize(y_raw)
    del y_raw
    if debug:
        print(f"Peak magnitude before scaling:  {peak:f}", file=out)
        report_float_samples(y, "AFTER scaling all values relative to the largest one", out)

    y_int = to_int(y)
    del y
    if debug:
        report_int_samples(y_int, "convolved output", out)
        report_mean(y_int, out)

    out_header = write_wav(output_path, header, y_int)
    print(f"\n\nConvolution complete. Output file created: {os.path.basename(output_path)}\n",
          file=out, flush=True)
    return out_header
