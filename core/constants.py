"""Constants used throughout the Track It API."""

# HTTP Headers
REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"

# Performance Thresholds
SLOW_REQUEST_THRESHOLD = 1.0  # Log requests slower than 1 second

# Paging
DEFAULT_NOTIFICATION_PAGE_LIMIT = 20
DEFAULT_PAGE_LIMIT = 20

# Analytics
DEFAULT_ANALYTICS_RANGE_DAYS = 30
MAX_ANALYTICS_RANGE_DAYS = 365
OVERDUE_PENALTY_POINTS = 5

# Bumped whenever a metadata variant changes shape
NOTIFICATION_METADATA_VERSION = 1

MENTION_PATTERN = r"@(\w+)"
