#!/usr/bin/env python3
# =============================================================================
# validate.py — RMDE Self-Validation Suite
# =============================================================================
#
# Run directly:  python -m RMDE.SVM.validate
#             or python RMDE/SVM/validate.py (from project root)
#
# Tests:
#   1. Constants integrity   — tolerance, caps and defaults are sane integers
#   2. Trace generator       — synthetic traces have the expected run lengths
#   3. Decoder round-trip    — both demod paths read their traces back
#   4. Failure policy        — degenerate and noisy traces fail with no data
# =============================================================================

import sys
import os
import itertools
import collections

# Allow running from project root without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from RMDE.SMM.constants import (
    TOLERANCE_DIVISOR, WARNING_CAP, RUNAWAY_SLACK,
    DEFAULT_CLOCK, DEFAULT_BLOCK_WIDTH,
    PEAK_HIGH, PEAK_LOW,
)
from RMDE.SGM.manchester_encoder import ManchesterEncoder
from RMDE.SOM.console_log import set_file_logging
from RMDE.SVM.manchester_decoder import decode, estimate_clock

PASS = "[PASS]"
FAIL = "[FAIL]"
INFO = "[INFO]"

failures = 0

def check(label: str, condition: bool, detail: str = "") -> bool:
    global failures
    if condition:
        print(f"  {PASS} {label}")
    else:
        print(f"  {FAIL} {label}{(' -- ' + detail) if detail else ''}")
        failures += 1
    return condition


set_file_logging(False)

PATTERN = [1, 1, 0, 0, 1, 0, 1, 1, 1, 0, 0, 0, 1, 1, 0, 1]


# =============================================================================
# TEST 1 — Constants Integrity
# =============================================================================
print("\n" + "="*60)
print("TEST 1 — Constants Integrity")
print("="*60)

check("TOLERANCE_DIVISOR = 4",       TOLERANCE_DIVISOR == 4)
check("WARNING_CAP = 10",            WARNING_CAP == 10)
check("RUNAWAY_SLACK = 8",           RUNAWAY_SLACK == 8)
check("DEFAULT_CLOCK divisible by 4", DEFAULT_CLOCK % 4 == 0,
      f"got {DEFAULT_CLOCK}")
check("DEFAULT_BLOCK_WIDTH >= 1",    DEFAULT_BLOCK_WIDTH >= 1)
check("PEAK_HIGH > PEAK_LOW",        PEAK_HIGH > PEAK_LOW)
check("PEAK_HIGH is not binary",     PEAK_HIGH != 1,
      "a high band of 1 would select the pulse-width path")


# =============================================================================
# TEST 2 — Trace Generator
# =============================================================================
print("\n" + "="*60)
print("TEST 2 — Trace Generator")
print("="*60)

enc = ManchesterEncoder(clock=DEFAULT_CLOCK)
half = DEFAULT_CLOCK // 2

binary = enc.encode_binary(PATTERN)
check("Binary trace: only 0/1 samples", set(binary) <= {0, 1})

# strip lead-in and tail: every inner run is a half or a full clock
runs = [len(list(g)) for _, g in itertools.groupby(binary)][1:-1]
allowed = {half, DEFAULT_CLOCK}
check("Binary trace: inner runs are half or full clock",
      all(r in allowed for r in runs),
      f"unexpected run lengths: {set(runs) - allowed}")
check("Binary trace: detected clock = DEFAULT_CLOCK",
      estimate_clock(binary) == DEFAULT_CLOCK,
      f"got {estimate_clock(binary)}")

windowed = enc.encode_windowed(PATTERN)
check("Windowed trace: two amplitude bands",
      set(windowed) == {PEAK_HIGH, PEAK_LOW})
check("Windowed trace: one window per bit",
      len(windowed) == half + len(PATTERN) * DEFAULT_CLOCK,
      f"got {len(windowed)} samples")
check("Windowed trace: detected clock = DEFAULT_CLOCK",
      estimate_clock(windowed) == DEFAULT_CLOCK,
      f"got {estimate_clock(windowed)}")


# =============================================================================
# TEST 3 — Decoder Round-trip
# =============================================================================
print("\n" + "="*60)
print("TEST 3 — Decoder Round-trip")
print("="*60)

bits, ok = decode(binary)
check("Pulse-width path: success", ok)
check("Pulse-width path: bits match pattern", bits == PATTERN,
      f"got {bits}")

bits_inv, ok_inv = decode(binary, polarity_invert=True)
check("Pulse-width path: inverted = complement",
      ok_inv and bits_inv == [b ^ 1 for b in PATTERN])

bits, ok = decode(windowed)
check("Window/peak path: success", ok)
check("Window/peak path: bits match pattern", bits == PATTERN,
      f"got {bits}")

for clock in (8, 16, 32, 128):
    e = ManchesterEncoder(clock=clock)
    b1, ok1 = decode(e.encode_binary(PATTERN))
    b2, ok2 = decode(e.encode_windowed(PATTERN))
    check(f"Round-trip at clock {clock}",
          ok1 and ok2 and b1 == PATTERN and b2 == PATTERN)


# =============================================================================
# TEST 4 — Failure Policy
# =============================================================================
print("\n" + "="*60)
print("TEST 4 — Failure Policy")
print("="*60)

check("Empty trace fails",    decode([]) == ([], False))
check("All-high trace fails", decode([1] * 100) == ([], False))
check("All-low trace fails",  decode([PEAK_LOW] * 100) == ([], False))

noisy = list(binary[:-DEFAULT_CLOCK])   # drop the closing tail
level = 1 - noisy[-1]
for _ in range(WARNING_CAP + 2):
    noisy.extend([level] * (DEFAULT_CLOCK * 2))
    level = 1 - level
check("More than WARNING_CAP bad pulses fails",
      decode(noisy) == ([], False))

lengths = collections.Counter(
    len(list(g)) for _, g in itertools.groupby(noisy)
)
print(f"  {INFO} Noisy trace run lengths: {dict(sorted(lengths.items()))}")


# =============================================================================
# Summary
# =============================================================================
print("\n" + "="*60)
if failures == 0:
    print(f"  ALL TESTS PASSED")
else:
    print(f"  {failures} TEST(S) FAILED")
print("="*60 + "\n")
sys.exit(0 if failures == 0 else 1)
