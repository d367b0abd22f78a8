# =============================================================================
# SGM — Signal Generation Module
# Subfolder of RMDE (RFID Manchester Decode Engine)
# =============================================================================
#
# Generates deterministic synthetic reader traces from bit patterns, for the
# decoder's self-tests and the emulator's --selftest mode.
#
# Modules:
#   manchester_encoder.py — bit list → binary or two-band amplitude trace
#
# Constants live in RMDE/SMM/constants.py
# Decoding lives in RMDE/SVM/
# =============================================================================
