#!/usr/bin/env python3
"""
Presenter Test Suite

Checks bit formatting and the fixed-width line wrapping of decoded
bitstreams.

Usage:
    pytest tests/test_presenter.py -v
"""

import pytest

from RMDE.SMM.constants import LOGGER_NAME
from RMDE.SOM.presenter import format_bits, present


def _lines(caplog):
    return [r.getMessage() for r in caplog.records if r.name == LOGGER_NAME]


def test_format_bits_basic():
    assert format_bits([1, 0, 1, 1], 4) == "1011"


def test_format_bits_respects_count():
    assert format_bits([1, 0, 1, 1], 2) == "10"
    assert format_bits([1, 0, 1, 1], 0) == ""
    assert format_bits([1, 0], 10) == "10"


def test_format_bits_with_breaks():
    assert format_bits([1, 0] * 5, 10, breaks=4) == "1010 1010 10"


def test_present_37_bits_in_blocks_of_16(caplog):
    bits = [(i * 7 + 3) % 5 % 2 for i in range(37)]
    present(bits, block_width=16)

    lines = _lines(caplog)
    assert lines[0] == " Manchester decoded bitstream : 37 bits"
    body = lines[1:]
    assert len(body) == 3
    assert [len(line) - 1 for line in body] == [16, 16, 5]
    assert body[0] == " " + format_bits(bits[0:16], 16)
    assert body[1] == " " + format_bits(bits[16:32], 16)
    assert body[2] == " " + format_bits(bits[32:37], 5)


def test_present_exact_multiple_has_no_empty_line(caplog):
    present([1] * 32, block_width=16)
    lines = _lines(caplog)
    assert len(lines) == 3
    assert lines[1:] == [" " + "1" * 16] * 2


def test_present_empty_bitstream(caplog):
    present([], block_width=16)
    assert _lines(caplog) == [" Manchester decoded bitstream : 0 bits"]


def test_present_block_width_one(caplog):
    present([0, 1, 1], block_width=1)
    assert _lines(caplog)[1:] == [" 0", " 1", " 1"]


def test_present_rejects_zero_block_width():
    with pytest.raises(ValueError):
        present([1, 0], block_width=0)


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
