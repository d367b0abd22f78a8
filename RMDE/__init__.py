# =============================================================================
# RFID Manchester Decode Engine (RMDE)
# =============================================================================
#
# Decodes a raw sampled amplitude trace from a 125 kHz proximity reader's
# analog front end into the Manchester-coded bitstream it carries, and prints
# the result for inspection.
#
# RESPONSIBLE for:
#   - Level detection     high / low bands taken from the trace extremes
#   - Clock recovery      bit period = smallest rising-edge spacing
#   - Demodulation        window/peak path for analog-style traces,
#                         pulse-width path for already-binary {0,1} traces
#   - Error policy        counted warnings, resync, hard abort past the cap
#   - Display             fixed-width bitstream lines via the log sink
#
# NOT responsible for:
#   - Capturing the trace (hardware, framing, transport)
#   - Card-format parsing above the raw bitstream
#
# ── DATA FLOW ─────────────────────────────────────────────────────────────────
#   caller      → trace (list / numpy array of unsigned samples)
#   SVM decoder → DecodeResult(bits, success)
#   SOM         → " Manchester decoded bitstream : N bits" + wrapped lines
#
# ── Module layout ─────────────────────────────────────────────────────────────
#   SMM/  constants.py          — tuning values and defaults
#   SGM/  manchester_encoder.py — synthetic trace generator
#   SVM/  manchester_decoder.py — the decoder
#         reader_sim.py         — CLI emulator
#         bridge_server.py      — HTTP bridge
#         validate.py           — self-validation suite
#   SOM/  console_log.py        — console + rotating log-file sink
#         presenter.py          — bitstream display
# =============================================================================

from RMDE.SVM.manchester_decoder import DecodeResult, ManchesterDecoder, decode
from RMDE.SOM.presenter import format_bits, present

__all__ = [
    'DecodeResult',
    'ManchesterDecoder',
    'decode',
    'format_bits',
    'present',
]
