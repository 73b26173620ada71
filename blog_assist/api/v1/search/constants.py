"""Constants for semantic search routes."""

SEMANTIC_SEARCH_PATH = "/semantic"
STATUS_PATH = "/status"
