#!/usr/bin/env python3
# =============================================================================
# reader_sim.py — Proximity Reader Decode Emulator
# =============================================================================
#
# Feed it a captured trace and it runs the reader-side Manchester decode:
# level and clock detection, demodulation, and a wrapped bitstream dump.
#
# Usage:
#   python -m RMDE.SVM.reader_sim <trace_file>
#   python -m RMDE.SVM.reader_sim <trace_file> --invert --clock 64
#   python -m RMDE.SVM.reader_sim capture.wav --channel 1
#   python -m RMDE.SVM.reader_sim --selftest 1100101101 --shape windowed
#
# Trace files:
#   .wav / .flac / .ogg  — soundfile, int16 shifted to unsigned
#   .npy                 — numpy array (2-D arrays: one column per channel)
#   anything else        — text, whitespace/newline separated integers
#
# Output sections:
#   [1] Trace info        — source, sample count, levels, demod path
#   [2] Decoder config    — clock source, tolerance, warning cap, polarity
#   [3] Decode report     — outcome and bit count
#   [4] Bitstream         — wrapped decoded bits
#   [5] VERDICT           — PASS / FAIL
#
# =============================================================================

from __future__ import annotations
import sys, os, argparse, pathlib

import numpy as np
import soundfile as sf

from RMDE.SMM.constants import (
    DEFAULT_BLOCK_WIDTH,
    DEFAULT_CLOCK,
    WAV_UNSIGNED_OFFSET,
)
from RMDE.SGM.manchester_encoder import ManchesterEncoder, bits_from_string
from RMDE.SOM.console_log import print_and_log, set_log_filename, set_file_logging
from RMDE.SOM.presenter import present
from RMDE.SVM.manchester_decoder import (
    ManchesterDecoder,
    detect_levels,
    estimate_clock,
)

AUDIO_SUFFIXES = {".wav", ".flac", ".ogg", ".aiff", ".aif"}

DIVIDER = "=" * 68


def load_trace(path: str, channel: int = 0) -> np.ndarray:
    """
    Load a trace file into a 1-D int64 array.

    Raises:
        FileNotFoundError: path does not exist.
        ValueError:        channel out of range, or the file holds no samples.
    """
    if not os.path.exists(path):
        raise FileNotFoundError(path)

    suffix = pathlib.Path(path).suffix.lower()
    if suffix in AUDIO_SUFFIXES:
        data, _sr = sf.read(path, dtype="int16", always_2d=True)
        trace = _pick_channel(data, channel).astype(np.int64) + WAV_UNSIGNED_OFFSET
    elif suffix == ".npy":
        data = np.load(path)
        if data.ndim == 2:
            data = _pick_channel(data, channel)
        trace = np.asarray(data, dtype=np.int64).ravel()
    else:
        trace = np.loadtxt(path, dtype=np.int64, ndmin=1).ravel()

    if trace.size == 0:
        raise ValueError(f"no samples in {path}")
    return trace


def _pick_channel(data: np.ndarray, channel: int) -> np.ndarray:
    n_ch = data.shape[1]
    if not 0 <= channel < n_ch:
        raise ValueError(f"channel {channel} out of range (file has {n_ch})")
    return data[:, channel]


def synth_trace(pattern: str, shape: str, clock: int) -> np.ndarray:
    """Build a synthetic trace for --selftest."""
    bits = bits_from_string(pattern)
    enc  = ManchesterEncoder(clock=clock)
    if shape == "windowed":
        return np.asarray(enc.encode_windowed(bits), dtype=np.int64)
    return np.asarray(enc.encode_binary(bits), dtype=np.int64)


def run_sim(
    trace: np.ndarray,
    source: str,
    invert: bool = False,
    clock: int | None = None,
    block_width: int = DEFAULT_BLOCK_WIDTH,
) -> bool:
    """
    Run the full decode pipeline on one trace.
    Returns True if the trace decoded, False otherwise.
    """
    # -----------------------------------------------------------------------
    # [1] Trace info
    # -----------------------------------------------------------------------
    print_and_log(DIVIDER)
    print_and_log("  Proximity Reader Decode Emulator")
    print_and_log(DIVIDER)

    dec = ManchesterDecoder(invert=invert, clock=clock)

    print_and_log("  Source   : %s", source)
    print_and_log("  Samples  : %d", trace.size)
    if trace.size:
        high, low = detect_levels(trace)
        est = estimate_clock(trace)
        print_and_log("  Levels   : high=%d  low=%d", high, low)
        print_and_log("  Edges    : min rising-edge spacing %s",
                      f"{est} samp" if est is not None else "n/a (fewer than 2 rising edges)")
        print_and_log("  Path     : %s", dec.select_path(high, low).value)

    # -----------------------------------------------------------------------
    # [2] Decoder config
    # -----------------------------------------------------------------------
    print_and_log("")
    print_and_log("  -- Decoder Configuration --")
    print_and_log("%s", dec.tolerance_summary())

    # -----------------------------------------------------------------------
    # [3] Decode
    # -----------------------------------------------------------------------
    print_and_log("")
    print_and_log("  -- Decode Report --")
    result = dec.decode(trace)

    if result.success:
        print_and_log("  [PASS] Decoded %d bits", len(result.bits))
    else:
        print_and_log("  [FAIL] Decode aborted, no data")

    # -----------------------------------------------------------------------
    # [4] Bitstream
    # -----------------------------------------------------------------------
    if result.success:
        print_and_log("")
        present(result.bits, block_width)

    # -----------------------------------------------------------------------
    # [5] Verdict
    # -----------------------------------------------------------------------
    print_and_log("")
    print_and_log(DIVIDER)
    if result.success:
        print_and_log("  VERDICT: PASS — reader would accept this trace")
    else:
        print_and_log("  VERDICT: FAIL — reader would reject this trace")
    print_and_log(DIVIDER)

    return result.success


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Proximity Reader Manchester Decode Emulator",
    )
    parser.add_argument("trace", nargs="?", help="Path to trace file (.wav, .npy or text)")
    parser.add_argument(
        "--invert", action="store_true",
        help="Invert every decoded bit (reversed coil wiring)",
    )
    parser.add_argument(
        "--clock", type=int, default=None,
        help="Force the bit period in samples instead of detecting it",
    )
    parser.add_argument(
        "--block-width", type=int, default=DEFAULT_BLOCK_WIDTH,
        help=f"Bits per output line, default {DEFAULT_BLOCK_WIDTH}",
    )
    parser.add_argument(
        "--channel", type=int, default=0,
        help="0-based channel to read from multi-channel files, default 0",
    )
    parser.add_argument(
        "--log-file", default=None,
        help="Append output to this log file instead of the default",
    )
    parser.add_argument(
        "--no-log-file", action="store_true",
        help="Console output only",
    )
    parser.add_argument(
        "--selftest", metavar="PATTERN", default=None,
        help="Decode a synthetic trace encoding PATTERN (e.g. 11001011)",
    )
    parser.add_argument(
        "--shape", choices=["binary", "windowed"], default="binary",
        help="Synthetic trace shape for --selftest, default binary",
    )
    parser.add_argument(
        "--synth-clock", type=int, default=DEFAULT_CLOCK,
        help=f"Bit period of the synthetic trace, default {DEFAULT_CLOCK}",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.block_width < 1:
        parser.error("--block-width must be >= 1")
    if args.trace is None and args.selftest is None:
        parser.error("give a trace file or --selftest PATTERN")

    if args.no_log_file:
        set_file_logging(False)
    elif args.log_file:
        set_log_filename(args.log_file)

    try:
        if args.selftest is not None:
            trace  = synth_trace(args.selftest, args.shape, args.synth_clock)
            source = f"selftest {args.shape} '{args.selftest}' @ {args.synth_clock} samp/bit"
        else:
            trace  = load_trace(args.trace, args.channel)
            source = os.path.basename(args.trace)
    except (OSError, ValueError, RuntimeError) as e:
        print(f"  [!!] {e}")
        sys.exit(1)

    ok = run_sim(
        trace,
        source,
        invert=args.invert,
        clock=args.clock,
        block_width=args.block_width,
    )
    sys.exit(0 if ok else 1)


if __name__ == "__main__":
    main()
