# =============================================================================
# RMDE/SMM/__init__.py — Signal Mapping Module
# =============================================================================
#
# The SMM is the single source of truth for the decoder's tuning values:
# tolerance divisor, warning cap, runaway guard slack, presentation width and
# log-sink defaults.
#
# Sub-modules:
#   constants.py  — all decoder, presenter and logging constants
# =============================================================================
