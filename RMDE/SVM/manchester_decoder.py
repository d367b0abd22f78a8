#!/usr/bin/env python3
# =============================================================================
# manchester_decoder.py — Manchester Trace Decoder
# =============================================================================
#
# Accepts a raw sampled amplitude trace (list or numpy array, one sample per
# element) and returns the logical Manchester bitstream it carries.
#
# Signal model:
#   - The trace sits in two amplitude bands.  `high` is the largest sample,
#     `low` the smallest; only exact matches count as a level.
#   - A rising event is a sample equal to `high` whose predecessor is not.
#     The clock (samples per bit period) is the smallest spacing between two
#     successive rising events.
#   - Decoding starts at the first `low` sample after the first `high`.
#
# Two demodulation paths, chosen once per call:
#
#   WINDOW_PEAK  (band is not exactly {0,1})
#     The trace is cut into windows of `clock` samples.  The leading level of
#     each window is carry-over from the previous edge and is ignored until a
#     different level shows up.  A window that still sees both levels keeps
#     the previous bit; a clean window toggles it.  One bit per window.
#
#   PULSE_WIDTH  (band is exactly {0,1})
#     Every transition closes an interval `lc`.  With tol = clock // 4:
#       |lc - clock/2| < tol  → short pulse → one half-bit symbol
#       |lc - clock|   < tol  → long pulse  → two half-bit symbols
#       otherwise             → anomaly (warning, nothing emitted)
#     Symbols are then paired:  01 → 1,  10 → 0,  00/11 → resync.
#
# Failure policy:
#   More than WARNING_CAP anomalies, a runaway symbol count, no usable clock
#   or no starting edge all end the call with DecodeResult([], False).  A
#   failed decode never returns partial bits.
#
# =============================================================================

from __future__ import annotations
import logging
from enum import Enum
from typing import NamedTuple, Sequence

import numpy as np

from RMDE.SMM.constants import (
    BIT_LOW, BIT_HIGH,
    TOLERANCE_DIVISOR,
    WARNING_CAP,
    RUNAWAY_SLACK,
)
from RMDE.SOM.console_log import print_and_log


class DecodeResult(NamedTuple):
    bits:    list[int]   # decoded logical bits, polarity already applied
    success: bool        # False = no data; bits is always empty then


class PulseClass(Enum):
    SHORT   = "short"     # ~half a clock, one symbol
    LONG    = "long"      # ~one clock, two symbols
    INVALID = "invalid"   # outside both tolerance bands


class DemodPath(Enum):
    WINDOW_PEAK = "window/peak"
    PULSE_WIDTH = "pulse-width"


class WarningCounter:
    """Recoverable-anomaly counter owned by a single decode call."""

    def __init__(self, cap: int = WARNING_CAP) -> None:
        self.cap   = cap
        self.count = 0

    def bump(self) -> bool:
        """Count one anomaly.  Returns True once the cap has been exceeded."""
        self.count += 1
        return self.count > self.cap


def _failed() -> DecodeResult:
    return DecodeResult(bits=[], success=False)


# ---------------------------------------------------------------------------
# Edge / level detection
# ---------------------------------------------------------------------------

def detect_levels(samples: np.ndarray) -> tuple[int, int]:
    """Return (high, low) = (max, min) of the trace."""
    return int(samples.max()), int(samples.min())


def rising_events(samples: np.ndarray, high: int) -> np.ndarray:
    """Indices i where samples[i] == high and samples[i-1] != high."""
    if samples.size < 2:
        return np.empty(0, dtype=np.int64)
    hits = (samples[1:] == high) & (samples[:-1] != high)
    return np.flatnonzero(hits) + 1


def transitions(samples: np.ndarray, start: int) -> np.ndarray:
    """Indices i > start where samples[i] differs from samples[i-1]."""
    tail = samples[start:]
    return np.flatnonzero(tail[1:] != tail[:-1]) + start + 1


def estimate_clock(samples: Sequence[int]) -> int | None:
    """
    Smallest spacing between successive rising events, or None when the
    trace holds fewer than two of them.
    """
    arr = np.asarray(samples, dtype=np.int64)
    if arr.size < 2:
        return None
    edges = rising_events(arr, int(arr.max()))
    if edges.size < 2:
        return None
    return int(np.diff(edges).min())


def find_start(samples: np.ndarray, high: int, low: int) -> int | None:
    """Index of the first `low` sample after the first `high` sample."""
    highs = np.flatnonzero(samples == high)
    if not highs.size:
        return None
    first_high = int(highs[0])
    lows = np.flatnonzero(samples[first_high:] == low)
    if not lows.size:
        return None
    return first_high + int(lows[0])


def classify_pulse(lc: int, clock: int, tolerance: int) -> PulseClass:
    """Classify one inter-transition interval (strict `<` on both bands)."""
    if abs(lc - clock // 2) < tolerance:
        return PulseClass.SHORT
    if abs(lc - clock) < tolerance:
        return PulseClass.LONG
    return PulseClass.INVALID


# ---------------------------------------------------------------------------
# Decoder
# ---------------------------------------------------------------------------

class ManchesterDecoder:
    """
    Stateless-per-call Manchester decoder.

    Parameters
    ----------
    invert : bool
        XOR every output bit with 1 (inverted reader wiring).
    clock : int | None
        Force the bit period in samples instead of detecting it.
    warning_cap : int
        Recoverable anomalies tolerated before the decode aborts.
    """

    def __init__(
        self,
        invert: bool = False,
        clock: int | None = None,
        warning_cap: int = WARNING_CAP,
    ):
        self.invert      = 1 if invert else 0
        self.clock       = clock
        self.warning_cap = warning_cap

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def decode(self, samples: Sequence[int]) -> DecodeResult:
        """
        Decode a full trace.

        Returns
        -------
        DecodeResult(bits, success)
        """
        arr = np.asarray(samples, dtype=np.int64)
        if arr.ndim != 1:
            raise ValueError(f"trace must be one-dimensional, got shape {arr.shape}")
        if arr.size == 0:
            print_and_log("Error: empty trace, nothing to decode.", level=logging.ERROR)
            return _failed()

        high, low = detect_levels(arr)
        if high == low:
            print_and_log("Error: flat trace (level %d throughout), nothing to decode.",
                          high, level=logging.ERROR)
            return _failed()

        clock = self._resolve_clock(arr)
        if clock is None:
            return _failed()
        tolerance = clock // TOLERANCE_DIVISOR

        start = find_start(arr, high, low)
        if start is None:
            print_and_log("Error: no high-to-low edge found, nothing to decode.",
                          level=logging.ERROR)
            return _failed()

        path = self.select_path(high, low)
        print_and_log(" Demodulation path: %s (high=%d low=%d start=%d)",
                      path.value, high, low, start, level=logging.DEBUG)

        warnings = WarningCounter(self.warning_cap)
        if path is DemodPath.WINDOW_PEAK:
            bits = self._demod_window_peak(arr.tolist(), start, clock, high, low)
        else:
            bits = self._demod_pulse_width(arr, start, clock, tolerance, warnings)

        if bits is None:
            return _failed()
        return DecodeResult(bits=bits, success=True)

    @staticmethod
    def select_path(high: int, low: int) -> DemodPath:
        if high == BIT_HIGH and low == BIT_LOW:
            return DemodPath.PULSE_WIDTH
        return DemodPath.WINDOW_PEAK

    def tolerance_summary(self) -> str:
        clock = f"{self.clock} samp (forced)" if self.clock else "detected from rising edges"
        return (
            f"  Clock              : {clock}\n"
            f"  Tolerance          : clock // {TOLERANCE_DIVISOR}\n"
            f"  Warning cap        : {self.warning_cap}\n"
            f"  Polarity           : {'inverted' if self.invert else 'normal'}"
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _resolve_clock(self, arr: np.ndarray) -> int | None:
        if self.clock is not None:
            if self.clock <= 0:
                print_and_log("Error: clock must be positive, got %d.", self.clock,
                              level=logging.ERROR)
                return None
            print_and_log(" Using clock: %d", self.clock)
            return self.clock

        clock = estimate_clock(arr)
        if clock is None:
            print_and_log("Error: fewer than two rising edges, cannot detect clock.",
                          level=logging.ERROR)
            return None
        print_and_log(" Detected clock: %d", clock)
        return clock

    def _demod_window_peak(
        self,
        samples: list[int],
        start: int,
        clock: int,
        high: int,
        low: int,
    ) -> list[int]:
        bits: list[int] = []
        bit = 0   # assumed value before the first window
        n_windows = (len(samples) - start) // clock

        for w in range(n_windows):
            pos = start + w * clock
            hit_high, hit_low = self._window_hits(samples[pos:pos + clock], high, low)
            # a clean window (one level only) is a bit transition
            if not (hit_high and hit_low):
                bit ^= 1
            bits.append(bit ^ self.invert)

        return bits

    @staticmethod
    def _window_hits(window: list[int], high: int, low: int) -> tuple[bool, bool]:
        """
        Which levels the window reaches once its leading carry-over level has
        given way to a different one.
        """
        hit_high = hit_low = False
        leading = None
        suppressing = True

        for s in window:
            if s != high and s != low:
                continue
            if leading is None:
                leading = s
                continue
            if suppressing and s == leading:
                continue
            suppressing = False
            if s == high:
                hit_high = True
            else:
                hit_low = True
            if hit_high and hit_low:
                break

        return hit_high, hit_low

    def _demod_pulse_width(
        self,
        arr: np.ndarray,
        start: int,
        clock: int,
        tolerance: int,
        warnings: WarningCounter,
    ) -> list[int] | None:
        samples = arr.tolist()
        limit   = 2 * len(samples) // clock + RUNAWAY_SLACK
        symbols: list[int] = []
        last    = start

        for i in transitions(arr, start).tolist():
            lc   = i - last
            last = i
            level = samples[i - 1]

            kind = classify_pulse(lc, clock, tolerance)
            if kind is PulseClass.SHORT:
                symbols.append(level)
            elif kind is PulseClass.LONG:
                symbols.append(level)
                symbols.append(level)
            else:
                print_and_log(
                    "Warning: Manchester decode error for pulse width detection "
                    "(interval %d at sample %d).", lc, i, level=logging.WARNING,
                )
                if warnings.bump():
                    print_and_log("Error: too many detection errors, aborting.",
                                  level=logging.ERROR)
                    return None
                continue

            if len(symbols) > limit:
                print_and_log("Error: the clock you gave is probably wrong, aborting.",
                              level=logging.ERROR)
                return None

        return self._pair_symbols(symbols, warnings)

    def _pair_symbols(self, symbols: list[int], warnings: WarningCounter) -> list[int] | None:
        """
        Collapse half-bit symbols into bits: 01 → 1, 10 → 0.  An invalid pair
        skips one extra symbol before pairing resumes.  A trailing unpaired
        symbol is dropped.
        """
        bits: list[int] = []
        i = 0
        while i + 1 < len(symbols):
            first, second = symbols[i], symbols[i + 1]
            if first == BIT_LOW and second == BIT_HIGH:
                bits.append(1 ^ self.invert)
            elif first == BIT_HIGH and second == BIT_LOW:
                bits.append(0 ^ self.invert)
            else:
                print_and_log("Unsynchronized, resync...", level=logging.WARNING)
                if warnings.bump():
                    print_and_log("Error: too many decode errors, aborting.",
                                  level=logging.ERROR)
                    return None
                i += 1
            i += 2
        return bits


def decode(
    trace: Sequence[int],
    polarity_invert: bool = False,
    clock: int | None = None,
) -> DecodeResult:
    """Decode `trace` with a fresh ManchesterDecoder."""
    return ManchesterDecoder(invert=polarity_invert, clock=clock).decode(trace)
