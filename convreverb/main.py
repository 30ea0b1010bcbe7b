# make repo root importable even when run by path
import sys, pathlib
ROOT = pathlib.Path(__file__).resolve().parents[1]  # folder that contains 'convreverb'
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import argparse

from convreverb.errors import ConvReverbError
from convreverb.pipeline import ReverbConfig, apply_reverb

def build_parser():
    ap = argparse.ArgumentParser(
        prog='convreverb',
        description='Time-domain convolution reverb for 16-bit mono WAV files')
    ap.add_argument('sample', help='input WAV (16-bit mono)')
    ap.add_argument('impulse', help='impulse response WAV (16-bit mono)')
    ap.add_argument('output', help='output WAV path')
    return ap

def main(argv=None):
    args = build_parser().parse_args(argv)
    try:
        apply_reverb(args.sample, args.impulse, args.output, ReverbConfig())
    except (ConvReverbError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

if __name__ == '__main__':
    main()
