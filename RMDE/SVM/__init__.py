# =============================================================================
# RMDE/SVM/__init__.py — Signal Verification Module
# =============================================================================
#
# The SVM turns raw reader traces back into logical bits and checks that the
# result is usable.
#
# Sub-modules:
#   manchester_decoder.py — decodes a sampled trace into a Manchester bitstream
#   reader_sim.py         — reader emulator CLI (trace file → report + bits)
#   bridge_server.py      — Flask HTTP bridge around the decoder
#   validate.py           — automated self-check of the SGM/SVM stack
# =============================================================================
