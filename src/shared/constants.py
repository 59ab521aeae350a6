"""
Centralized Constants
=====================
All magic numbers and hardcoded values extracted to one place.
"""

# ==============================================================================
# REQUEST BUDGET
# ==============================================================================

# Host execution ceiling (serverless function limit, seconds)
HOST_EXECUTION_CEILING_SECONDS = 10.0
REQUEST_TIMEOUT_SECONDS = 8.0  # Must stay below the host ceiling

# Retry policy
MAX_ATTEMPTS = 2
RETRY_JITTER_MIN_SECONDS = 0.5
RETRY_JITTER_MAX_SECONDS = 1.5


# ==============================================================================
# FIELD BOUNDS
# ==============================================================================

PRICE_MAX = 50000.0  # parse_price accepts (0, PRICE_MAX]
PRICE_SCAN_MAX = 10000.0  # full-page price scan accepts (0, PRICE_SCAN_MAX)
RATING_MAX = 5.0
REVIEW_COUNT_MAX = 10_000_000  # exclusive

MAX_IMAGES = 5
MAX_KEYWORDS = 10
KEYWORD_MIN_LENGTH = 3
KEYWORD_MAX_LENGTH = 20  # exclusive

DESCRIPTION_FRAGMENT_MIN_LENGTH = 10  # fragments of this length or shorter are boilerplate
DESCRIPTION_SUFFICIENT_LENGTH = 50


# ==============================================================================
# RECORD DEFAULTS
# ==============================================================================

DEFAULT_CATEGORY = "general"
TITLE_PLACEHOLDER = "Amazon product {identifier}"
DESCRIPTION_PLACEHOLDER = "No product description available"
