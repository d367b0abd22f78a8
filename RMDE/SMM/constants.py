# =============================================================================
# constants.py — SMM Decoder Constants
# =============================================================================
#
# Every tuning value used by the Manchester decoder, the presenter and the
# logging sink lives here.  Other RMDE sub-modules import exclusively from
# this file.  Never redefine these locally.
#
# Source: Proxmark3 client manchester demod (client/ui.c) behaviour.

# -----------------------------------------------------------------------------
# BIT LEVELS
# -----------------------------------------------------------------------------

BIT_LOW  = 0
BIT_HIGH = 1

# -----------------------------------------------------------------------------
# PULSE-WIDTH CLASSIFICATION
# -----------------------------------------------------------------------------

# tolerance = clock // TOLERANCE_DIVISOR  (1/4 of the clock, integer-truncated)
TOLERANCE_DIVISOR = 4

# Recoverable anomalies allowed per decode call.  The 11th aborts the decode.
WARNING_CAP = 10

# Runaway guard: abort once the intermediate symbol count exceeds
#   2 * len(trace) // clock + RUNAWAY_SLACK
RUNAWAY_SLACK = 8

# -----------------------------------------------------------------------------
# SYNTHETIC TRACE DEFAULTS  (SGM)
# -----------------------------------------------------------------------------

DEFAULT_CLOCK = 64            # samples per bit period (RF/64, common EM4x02 rate)
PEAK_HIGH     = 200           # multi-level trace: high amplitude band
PEAK_LOW      = 20            # multi-level trace: low amplitude band

# -----------------------------------------------------------------------------
# PRESENTATION
# -----------------------------------------------------------------------------

DEFAULT_BLOCK_WIDTH = 16      # bits per display line

# -----------------------------------------------------------------------------
# LOG SINK
# -----------------------------------------------------------------------------

LOGGER_NAME      = "RMDE"
LOG_FILENAME     = "rmde.log"
LOG_MAX_BYTES    = 1_000_000
LOG_BACKUP_COUNT = 3
LOG_FILE_FORMAT  = "%(asctime)s %(message)s"
LOG_CONSOLE_FORMAT = "%(message)s"

# -----------------------------------------------------------------------------
# WAV INGEST  (reader emulator / HTTP bridge)
# -----------------------------------------------------------------------------

# int16 PCM is shifted by this offset so every sample is unsigned.
WAV_UNSIGNED_OFFSET = 32_768
