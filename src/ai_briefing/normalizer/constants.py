"""Constants for text normalization."""

# Sentinel entity for items that match no alias or dictionary entry
OTHER_ENTITY = "Other"

# Capitalised 1-4 word phrases treated as entity candidates
ENTITY_PHRASE_PATTERN = r"\b[A-Z][a-zA-Z0-9&-]+(?:\s+[A-Z][a-zA-Z0-9&-]+){0,3}\b"
ENTITY_PHRASE_MIN_LEN = 3
ENTITY_PHRASE_MAX_LEN = 40
ENTITIES_MAX = 8

# User-facing keywords
KEYWORD_MIN_LEN = 4
KEYWORDS_MAX = 8

# Clustering tokens are longer than this
CLUSTER_TOKEN_MIN_EXCLUSIVE = 2

# Anything outside this set becomes a token separator
NON_TOKEN_PATTERN = r"[^a-z0-9 ]"
