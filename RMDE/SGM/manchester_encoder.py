# =============================================================================
# manchester_encoder.py — Synthetic Manchester Trace Generator
# =============================================================================
#
# Converts a sequence of logical bits into a sampled amplitude trace that the
# RMDE decoder can read back.  Two trace shapes are produced, one per decoder
# path:
#
#   encode_binary()    — already-binary {0,1} trace (pulse-width path)
#   encode_windowed()  — two-band analog-style trace (window/peak path)
#
# MANCHESTER RULES (as read by the decoder):
#   - Bit '1' = LOW half-bit followed by HIGH half-bit.
#   - Bit '0' = HIGH half-bit followed by LOW half-bit.
#   - One bit period = `clock` samples, one half-bit = clock // 2 samples.
#
# The decoder starts at the first LOW after the first HIGH, so every trace
# opens with a HIGH lead-in.  A binary stream must therefore begin with a '1'
# bit to be read back in phase.
#
# With clock = 16:
#
#   bits  1        1        0        0
#        LLLLHHHH LLLLHHHH HHHHLLLL HHHHLLLL   (x2 samples per letter)
#
# Window/peak traces carry one rising edge per window, exactly half a clock
# into it, so the detected clock equals the window width:
#
#   toggle window : [LOW x c/2] [HIGH x c/2]
#   hold window   : [LOW x c/2] [HIGH x c/4] [LOW x c/4]
# =============================================================================

from __future__ import annotations
from typing import Sequence

from RMDE.SMM.constants import (
    BIT_LOW, BIT_HIGH,
    PEAK_LOW, PEAK_HIGH,
    DEFAULT_CLOCK,
)


class ManchesterEncoder:
    """
    Builds synthetic traces for a fixed clock.

    Usage:
        enc = ManchesterEncoder(clock=16)
        trace = enc.encode_binary([1, 1, 0, 0, 1, 0, 1, 1])
        peaks = enc.encode_windowed([1, 0, 0, 1])
    """

    def __init__(
        self,
        clock: int = DEFAULT_CLOCK,
        high: int = PEAK_HIGH,
        low: int = PEAK_LOW,
    ) -> None:
        if clock < 2:
            raise ValueError(f"clock must be at least 2 samples, got {clock}")
        self.clock = clock
        self.half  = clock // 2
        self.high  = high
        self.low   = low

    # ── Binary (pulse-width) traces ─────────────────────────────────────────

    def encode_binary(self, bits: Sequence[int], lead_in: int | None = None) -> list[int]:
        """
        Encode bits into a {0,1} trace.

        Args:
            bits:    0/1 values; the first should be 1 (see module header).
            lead_in: HIGH samples before the first bit, default clock // 2.

        Returns:
            Flat list of 0/1 samples, terminated by a full-clock run of the
            level opposite to the last half-bit so every half-bit is closed by
            a transition.
        """
        if lead_in is None:
            lead_in = self.half
        samples = [BIT_HIGH] * lead_in
        for bit in bits:
            if bit:
                samples.extend([BIT_LOW] * self.half)
                samples.extend([BIT_HIGH] * self.half)
            else:
                samples.extend([BIT_HIGH] * self.half)
                samples.extend([BIT_LOW] * self.half)

        if bits:
            last = samples[-1]
            samples.extend([BIT_HIGH - last] * self.clock)
        return samples

    # ── Two-band (window/peak) traces ───────────────────────────────────────

    def encode_windowed(self, bits: Sequence[int], lead_in: int | None = None) -> list[int]:
        """
        Encode bits into a two-band trace for the window/peak decoder.

        Each window holds exactly `clock` samples.  The decoder starts from
        bit value 0 and toggles on a clean window, so a window is a toggle
        when the bit differs from the previous one and a hold otherwise.

        Raises:
            ValueError: clock is not a multiple of 4.
        """
        if self.clock % 4:
            raise ValueError(
                f"window/peak traces need a clock divisible by 4, got {self.clock}"
            )
        if lead_in is None:
            lead_in = self.half
        quarter = self.clock // 4

        samples = [self.high] * lead_in
        prev = 0
        for bit in bits:
            samples.extend([self.low] * self.half)
            if bit != prev:
                samples.extend([self.high] * self.half)
            else:
                samples.extend([self.high] * quarter)
                samples.extend([self.low] * quarter)
            prev = bit
        return samples


def encode_binary(bits: Sequence[int], clock: int = DEFAULT_CLOCK) -> list[int]:
    """Shortcut for ManchesterEncoder(clock).encode_binary(bits)."""
    return ManchesterEncoder(clock=clock).encode_binary(bits)


def encode_windowed(
    bits: Sequence[int],
    clock: int = DEFAULT_CLOCK,
    high: int = PEAK_HIGH,
    low: int = PEAK_LOW,
) -> list[int]:
    """Shortcut for ManchesterEncoder(clock, high, low).encode_windowed(bits)."""
    return ManchesterEncoder(clock=clock, high=high, low=low).encode_windowed(bits)


def bits_from_string(pattern: str) -> list[int]:
    """Parse '1100 1011' style text into a bit list (spaces ignored)."""
    bits = []
    for ch in pattern:
        if ch in " _":
            continue
        if ch not in "01":
            raise ValueError(f"bit pattern may only contain 0/1, got {ch!r}")
        bits.append(int(ch))
    return bits
