import sys

from convreverb.dsp.utils import sample_stats, count_outside_unit_range

def _out(stream):
    return stream if stream is not None else sys.stderr

class ProgressPrinter:
    """Prints '10%  20%  ...' as the convolution crosses each step."""

    def __init__(self, stream=None, step=10):
        self.stream = _out(stream)
        self.step = step
        self._next = step

    def start(self):
        print("\nStarting convolution. Please wait...", file=self.stream, flush=True)

    def __call__(self, fraction):
        pct = fraction * 100.0
        while self._next < 100 and pct >= self._next:
            print(f"{self._next}%  ", end="", file=self.stream, flush=True)
            self._next += self.step

    def finish(self):
        print("100%", file=self.stream, flush=True)

def report_int_samples(samples, name, stream=None):
    """Sample count, highest and lowest of an int16 buffer."""
    out = _out(stream)
    s = sample_stats(samples)
    print(f"\nNumber of samples in {name} checked:  {s['count']}", file=out)
    print(f"Highest sample:  {s['highest']}", file=out)
    print(f" Lowest sample: {s['lowest']}", file=out, flush=True)

def report_float_samples(y, title, stream=None):
    """Out-of-range count, highest, lowest and mean of a float buffer."""
    out = _out(stream)
    s = sample_stats(y)
    print("-" * 31 + f" {title}", file=out)
    print(f"Number of samples that exceeded +- 1.0:  {count_outside_unit_range(y)}", file=out)
    print(f"Highest sample in the output:  {s['highest']:f}", file=out)
    print(f" Lowest sample in the output: {s['lowest']:f}", file=out)
    print(f"         Mean average sample:  {s['mean']:f}", file=out, flush=True)

def report_mean(samples, stream=None):
    print(f"\nMean average sample:  {sample_stats(samples)['mean']:.5f}", file=_out(stream), flush=True)
