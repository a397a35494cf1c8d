"""Schema and storage keys for the local recency store."""

# Storage keys
HISTORY_KEY = 'searchHistory'
LAST_SEARCHED_KEY = 'lastSearched'

MAX_HISTORY = 5

# SQLite schema definitions
SCHEMA_SQL = """
-- String key-value pairs (search history, last searched city)
CREATE TABLE IF NOT EXISTS kv_store (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""
