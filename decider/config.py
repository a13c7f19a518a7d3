# decider/config.py
import os

# ---------------- config ----------------

# Below this many elements the bitmask enumerator is used instead of DP.
NAIVE_THRESHOLD = int(os.getenv("NAIVE_THRESHOLD", "20"))

# DP variant used at or above the threshold: rolling | table | vector | vector_legacy
DP_STRATEGY = os.getenv("DP_STRATEGY", "rolling")

# Hard cap on boolean cells one query may allocate (rows * (B - A + 1)).
MAX_DP_CELLS = int(os.getenv("MAX_DP_CELLS", "200000000"))

# Share of currently available RAM a single query may claim.
DP_MEMORY_FRACTION = float(os.getenv("DP_MEMORY_FRACTION", "0.5"))

# A Python list slot is one pointer.
BYTES_PER_CELL = 8
