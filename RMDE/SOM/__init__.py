# =============================================================================
# RMDE/SOM/__init__.py — Signal Output Module
# =============================================================================
#
# Everything that writes human-readable output.
#
# Sub-modules:
#   console_log.py  — thread-safe console + rotating log-file message sink
#   presenter.py    — fixed-width display of decoded bitstreams
# =============================================================================
