"""Core constants: scan protocol values and key conventions.

Single source of truth for literals shared by the cache scanner and key
prefix builders.
"""

# SCAN starts from this cursor and is complete when the store returns it again.
SCAN_SENTINEL_CURSOR = 0

# COUNT hint sent with each SCAN round.
DEFAULT_SCAN_BATCH_SIZE = 100

# Delimiter between owner and name in conventional prefixes (e.g. User:id).
CACHE_KEY_SEP = ":"
