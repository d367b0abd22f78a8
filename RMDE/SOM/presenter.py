# =============================================================================
# presenter.py — Decoded Bitstream Display
# =============================================================================
#
# Wraps a decoded bit list into fixed-width lines and writes them through
# print_and_log():
#
#    Manchester decoded bitstream : 37 bits
#    1111111110011010
#    0110100101100000
#    10100
# =============================================================================

from __future__ import annotations
from typing import Sequence

from RMDE.SMM.constants import DEFAULT_BLOCK_WIDTH
from RMDE.SOM.console_log import print_and_log


def format_bits(bits: Sequence[int], count: int, breaks: int = 0) -> str:
    """
    Render the first `count` bits as '0'/'1' characters.

    Args:
        bits:   bit values; anything truthy prints as '1'.
        count:  number of bits to render (clamped to len(bits)).
        breaks: if > 0, insert a space after every `breaks` characters.
    """
    count = max(0, min(count, len(bits)))
    chars = ["1" if bits[i] else "0" for i in range(count)]
    if breaks > 0:
        groups = ["".join(chars[i:i + breaks]) for i in range(0, count, breaks)]
        return " ".join(groups)
    return "".join(chars)


def present(bits: Sequence[int], block_width: int = DEFAULT_BLOCK_WIDTH) -> None:
    """Log the bit count, then the bits `block_width` per line, remainder last."""
    if block_width < 1:
        raise ValueError(f"block_width must be >= 1, got {block_width}")

    total = len(bits)
    print_and_log(" Manchester decoded bitstream : %d bits", total)

    for start in range(0, total, block_width):
        run = bits[start:start + block_width]
        print_and_log(" %s", format_bits(run, len(run)))
