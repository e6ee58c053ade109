"""Search design constants (weights and thresholds are fixed, not user-configurable)."""

# Fuzzy matching: token similarity must reach the threshold; accepted matches are scaled
# so they always score below an exact substring match (1.0).
FUZZY_MATCH_THRESHOLD = 0.7
FUZZY_MATCH_WEIGHT = 0.8
EXACT_MATCH_SCORE = 1.0

# Ranking
MIN_RELEVANCE_SCORE = 1.5
MAX_SEARCH_RESULTS = 50

# Flat bonuses applied once per record
INTENT_BONUS_DEFAULT = 10.0
INTENT_BONUS_IDEA = 12.0
FILTER_BONUS = 8.0
IDEA_STAGE_FILTER_BONUS = 8.0
IDEA_CATEGORY_FILTER_BONUS = 10.0

# Tie-break preference when scores tie and the intent is people-oriented
TYPE_PREFERENCE = {"user": 4, "idea": 3, "challenge": 2, "partnership": 1}

# Database full-text search
DEFAULT_DATABASE_SEARCH_LIMIT = 50
MAX_DATABASE_SEARCH_LIMIT = 100
FALLBACK_RELEVANCE_SCORE = 1.0

# Truncation for query text in log lines
LOG_QUERY_MAX_CHARS = 200
