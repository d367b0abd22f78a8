"""Trace builders shared by the test modules."""

from RMDE.SGM.manchester_encoder import ManchesterEncoder


PATTERN = [1, 1, 0, 0, 1, 0, 1, 1, 1, 0, 0, 0, 1, 1, 0, 1]


def binary_trace(bits, clock=16, tail=True):
    """{0,1} trace for `bits`; tail=False drops the closing opposite-level run."""
    trace = ManchesterEncoder(clock=clock).encode_binary(bits)
    return trace if tail else trace[:-clock]


def append_runs(trace, count, length):
    """Append `count` alternating runs of `length`, starting opposite trace[-1]."""
    out = list(trace)
    level = 1 - out[-1]
    for _ in range(count):
        out.extend([level] * length)
        level = 1 - level
    return out


def runs_trace(lead, runs, tail):
    """[1]*lead, then alternating 0/1 runs of the given lengths, then a tail run."""
    out = [1] * lead
    level = 0
    for r in runs:
        out.extend([level] * r)
        level = 1 - level
    out.extend([level] * tail)
    return out
