#!/usr/bin/env python3
"""
Reader emulator tests: trace loaders, the decode report and the CLI.

Usage:
    pytest tests/test_reader_sim.py -v
"""

import numpy as np
import pytest
import soundfile as sf

from RMDE.SMM.constants import LOGGER_NAME, WAV_UNSIGNED_OFFSET
from RMDE.SGM.manchester_encoder import encode_windowed
from RMDE.SVM.reader_sim import load_trace, main, run_sim, synth_trace

from helpers import PATTERN, binary_trace


def _messages(caplog):
    return [r.getMessage() for r in caplog.records if r.name == LOGGER_NAME]


# ---------------------------------------------------------------------------
# Loaders
# ---------------------------------------------------------------------------

def test_load_text_trace(tmp_path):
    path = tmp_path / "trace.txt"
    trace = binary_trace(PATTERN)
    path.write_text("\n".join(str(s) for s in trace) + "\n")

    loaded = load_trace(str(path))
    assert loaded.dtype == np.int64
    assert loaded.tolist() == trace


def test_load_npy_trace_and_channel(tmp_path):
    trace = np.asarray(binary_trace(PATTERN), dtype=np.uint8)
    one_d = tmp_path / "trace.npy"
    np.save(one_d, trace)
    assert load_trace(str(one_d)).tolist() == trace.tolist()

    two_d = tmp_path / "stereo.npy"
    np.save(two_d, np.stack([np.zeros_like(trace), trace], axis=1))
    assert load_trace(str(two_d), channel=1).tolist() == trace.tolist()


def test_load_wav_trace_shifts_to_unsigned(tmp_path):
    path = tmp_path / "capture.wav"
    pcm = np.array([-32768, 0, 32767], dtype=np.int16)
    sf.write(str(path), pcm, 44_100, subtype="PCM_16")

    loaded = load_trace(str(path))
    assert loaded.tolist() == [0, WAV_UNSIGNED_OFFSET, 65535]


def test_wav_capture_decodes(tmp_path):
    path = tmp_path / "capture.wav"
    peaks = np.asarray(encode_windowed(PATTERN, clock=32), dtype=np.int64)
    pcm = (peaks * 100 - 10_000).astype(np.int16)
    sf.write(str(path), pcm, 44_100, subtype="PCM_16")

    assert run_sim(load_trace(str(path)), "capture.wav") is True


def test_load_missing_file():
    with pytest.raises(FileNotFoundError):
        load_trace("/nonexistent/trace.txt")


def test_load_bad_channel(tmp_path):
    path = tmp_path / "trace.npy"
    np.save(path, np.zeros((10, 2), dtype=np.int64))
    with pytest.raises(ValueError):
        load_trace(str(path), channel=2)


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

def test_run_sim_pass_prints_bitstream(caplog):
    ok = run_sim(synth_trace("1100101111000110", "binary", 16), "selftest")
    messages = _messages(caplog)

    assert ok is True
    assert " Manchester decoded bitstream : 16 bits" in messages
    assert " 1100101111000110" in messages
    assert any("VERDICT: PASS" in m for m in messages)


def test_run_sim_fail_on_flat_trace(caplog):
    ok = run_sim(np.full(100, 7, dtype=np.int64), "flat")
    assert ok is False
    assert any("VERDICT: FAIL" in m for m in _messages(caplog))


def test_run_sim_inverted_windowed(caplog):
    ok = run_sim(synth_trace("1011", "windowed", 16), "selftest", invert=True)
    assert ok is True
    assert " 0100" in _messages(caplog)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def test_cli_selftest_exits_zero():
    with pytest.raises(SystemExit) as exc:
        main(["--selftest", "11001011", "--synth-clock", "32", "--no-log-file"])
    assert exc.value.code == 0


def test_cli_trace_file_with_log_file(tmp_path):
    trace_path = tmp_path / "trace.txt"
    trace_path.write_text(" ".join(str(s) for s in binary_trace(PATTERN)))
    log_path = tmp_path / "session.log"

    with pytest.raises(SystemExit) as exc:
        main([str(trace_path), "--block-width", "8", "--log-file", str(log_path)])

    assert exc.value.code == 0
    text = log_path.read_text()
    assert "Manchester decoded bitstream : 16 bits" in text
    assert "11001011" in text


def test_cli_missing_file_exits_one(capsys):
    with pytest.raises(SystemExit) as exc:
        main(["/nonexistent/trace.txt", "--no-log-file"])
    assert exc.value.code == 1
    assert "[!!]" in capsys.readouterr().out


def test_cli_requires_input():
    with pytest.raises(SystemExit) as exc:
        main(["--no-log-file"])
    assert exc.value.code == 2


if __name__ == "__main__":
    raise SystemExit(pytest.main([__file__, "-v"]))
