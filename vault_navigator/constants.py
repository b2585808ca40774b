"""Module-level constants for the vault navigator server."""

from pathlib import Path

# Configuration
CONFIG_PATH = Path(__file__).parent.parent / "vaults.yaml"
CONFIG_ENV_VAR = "VAULT_NAVIGATOR_CONFIG"
DEFAULT_TRANSPORT = "stdio"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3000

# Search
DEFAULT_SEARCH_LIMIT = 10
SEARCH_SNIPPET_LENGTH = 200
SORT_OPTIONS = ("relevance", "modified", "created", "title")

# Related notes
MIN_DEPTH = 1
MAX_DEPTH = 3
DEFAULT_RELATED_SNIPPET_LENGTH = 150
SNIPPET_PLACEHOLDER = "[Unable to read note content]"

# Notes
NOTE_EXTENSION = ".md"
PREVIEW_LENGTH = 500
APPEND_PREVIEW_LENGTH = 200
APPEND_POSITIONS = ("end", "start", "after_frontmatter")
MAX_SUGGESTIONS = 3

# Logging
LOG_LEVEL = "INFO"
LOG_LEVEL_ENV_VAR = "VAULT_NAVIGATOR_LOG_LEVEL"
